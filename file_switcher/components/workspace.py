# file_switcher/components/workspace.py
"""
Workspace model and the filesystem query provider.

Globs are anchored at a workspace folder and support ``**`` and ``{a,b}``
brace alternation. Matching uses gitignore semantics from ``pathspec``. Every
pattern is anchored at its folder, and an exclude such as ``src/lib`` covers
everything below it.
"""
import asyncio
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Tuple, Union

import pathspec

from file_switcher.constants import DEFAULT_EXCLUDES, PROJECT_MARKERS
from file_switcher.utils.logging import get_logger

logger = get_logger(__name__)

_BRACE_GROUP = re.compile(r"\{([^{}]*)\}")
_GLOB_CHARS = set("*?[{")


@dataclass(frozen=True)
class WorkspaceFolder:
    """A top-level folder of the workspace."""
    name: str
    path: str
    index: int = 0

    @classmethod
    def from_path(cls, path: Union[str, Path], index: int = 0) -> 'WorkspaceFolder':
        absolute = os.path.abspath(os.fspath(path))
        return cls(name=os.path.basename(absolute) or absolute, path=absolute, index=index)


@dataclass(frozen=True)
class RelativePattern:
    """A glob pattern anchored at a workspace folder."""
    base: WorkspaceFolder
    pattern: str


class FileQuery(Protocol):
    """Protocol for querying files in a workspace."""

    async def find_files(
        self,
        include: RelativePattern,
        exclude: Optional[RelativePattern] = None,
        max_results: Optional[int] = None,
    ) -> List[str]:
        """
        Find files matching ``include`` and not matching ``exclude``.

        Returns:
            Absolute paths of at most ``max_results`` matches.
        """
        ...


class Workspace:
    """The set of folders the host considers part of the project."""

    def __init__(self, folders: Sequence[Union[WorkspaceFolder, str, Path]] = ()):
        self._folders: List[WorkspaceFolder] = []
        for index, folder in enumerate(folders):
            if not isinstance(folder, WorkspaceFolder):
                folder = WorkspaceFolder.from_path(folder, index)
            self._folders.append(folder)

    @property
    def folders(self) -> List[WorkspaceFolder]:
        return list(self._folders)

    @property
    def main_folder(self) -> Optional[WorkspaceFolder]:
        """The first workspace folder, if any."""
        if not self._folders:
            logger.debug("Main workspace folder was undefined!")
            return None
        return self._folders[0]

    def get_workspace_folder(self, file_path: Union[str, Path]) -> Optional[WorkspaceFolder]:
        """
        Get the workspace folder containing a file.

        Nested folders are allowed; the most specific one wins.
        """
        file_parts = Path(os.path.abspath(os.fspath(file_path))).parts
        best: Optional[WorkspaceFolder] = None
        for folder in self._folders:
            folder_parts = Path(folder.path).parts
            if file_parts[:len(folder_parts)] != folder_parts:
                continue
            if best is None or len(folder_parts) > len(Path(best.path).parts):
                best = folder
        return best


def find_project_root(start: Union[str, Path]) -> Optional[Path]:
    """
    Detect the project root by looking for marker files.

    Traverses up from ``start`` until a marker is found or the filesystem
    root is reached.
    """
    current_dir = Path(os.path.abspath(os.fspath(start)))

    while current_dir != current_dir.parent:
        for marker in PROJECT_MARKERS:
            if (current_dir / marker).exists():
                logger.debug(f"Project root detected at {current_dir} ({marker})")
                return current_dir
        current_dir = current_dir.parent

    return None


def expand_braces(pattern: str) -> List[str]:
    """
    Expand ``{a,b}`` groups into separate patterns.

    ``src/**/main.{h,hpp}`` becomes ``src/**/main.h`` and ``src/**/main.hpp``.
    Inner groups are expanded first so nesting works.
    """
    match = _BRACE_GROUP.search(pattern)
    if not match:
        return [pattern]

    head, tail = pattern[:match.start()], pattern[match.end():]
    expanded: List[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(f"{head}{option}{tail}"))
    return expanded


def _static_prefix(pattern: str) -> List[str]:
    prefix = []
    for segment in pattern.split("/"):
        if not segment or _GLOB_CHARS.intersection(segment):
            break
        prefix.append(segment)
    return prefix


def _to_spec_lines(patterns: Sequence[str]) -> List[str]:
    # Leading '!' or '#' would read as negation or comment
    return [f"\\{p}" if p[:1] in ("!", "#") else p for p in patterns if p]


def _include_specs(pattern: str) -> List[Tuple[pathspec.PathSpec, pathspec.PathSpec]]:
    """
    Build one (path, file name) spec pair per brace alternative.

    A file matches only when its own name also matches the last segment of
    the alternative; a directory named like the friend file never does.
    """
    specs = []
    for alternative in expand_braces(pattern):
        name = alternative.rsplit("/", 1)[-1]
        path_spec = pathspec.GitIgnoreSpec.from_lines(_to_spec_lines([_anchor(alternative)]))
        name_spec = pathspec.GitIgnoreSpec.from_lines(_to_spec_lines([name]))
        specs.append((path_spec, name_spec))
    return specs


def _anchor(pattern: str) -> str:
    # Without a leading slash a single-segment pattern matches at any depth
    return pattern if pattern.startswith("/") else f"/{pattern}"


def _join(rel_dir: str, name: str) -> str:
    return name if rel_dir == "." else f"{rel_dir}/{name}"


class FilesystemFileQuery:
    """Answers file queries by walking the workspace on disk."""

    def __init__(self, default_excludes: Optional[Sequence[str]] = None):
        self._default_excludes = list(DEFAULT_EXCLUDES if default_excludes is None else default_excludes)

    async def find_files(
        self,
        include: RelativePattern,
        exclude: Optional[RelativePattern] = None,
        max_results: Optional[int] = None,
    ) -> List[str]:
        """Find matching files; the walk runs in a worker thread."""
        return await asyncio.to_thread(self._find_files, include, exclude, max_results)

    def _find_files(
        self,
        include: RelativePattern,
        exclude: Optional[RelativePattern],
        max_results: Optional[int],
    ) -> List[str]:
        base = Path(include.base.path)
        include_specs = _include_specs(include.pattern)

        exclude_patterns = list(self._default_excludes)
        if exclude is not None:
            if exclude.base.path != include.base.path:
                logger.warning("Exclude pattern is anchored at another folder. Ignoring it.", exclude.base.path)
            else:
                exclude_patterns.extend(_anchor(p) for p in expand_braces(exclude.pattern))
        exclude_spec = pathspec.GitIgnoreSpec.from_lines(_to_spec_lines(exclude_patterns))

        start = base.joinpath(*_static_prefix(include.pattern))
        if not start.is_dir():
            return []

        results: List[str] = []
        for dirpath, dirnames, filenames in os.walk(start):
            rel_dir = Path(dirpath).relative_to(base).as_posix()

            # Prune excluded subtrees and keep the walk order stable
            dirnames[:] = sorted(
                name for name in dirnames
                if not exclude_spec.match_file(_join(rel_dir, name))
            )

            for filename in sorted(filenames):
                rel_path = _join(rel_dir, filename)
                if exclude_spec.match_file(rel_path):
                    continue
                if any(
                    name_spec.match_file(filename) and path_spec.match_file(rel_path)
                    for path_spec, name_spec in include_specs
                ):
                    results.append(os.path.join(dirpath, filename))
                    if max_results is not None and len(results) >= max_results:
                        return results

        return results
