# file_switcher/components/search.py
"""
Search scope calculation and the progressive directory-shrinking search.

The search starts in the current file's own directory and widens one level
at a time toward the workspace root. Each wider query excludes the subtree
the previous query already searched, so every directory level costs exactly
one query.
"""
import re
from typing import Iterator, List, Optional, Sequence, Tuple

from file_switcher.components.workspace import FileQuery, RelativePattern, WorkspaceFolder
from file_switcher.utils.logging import get_logger

logger = get_logger(__name__)

_SEPARATORS = re.compile(r"[/\\]")


def get_folder_segments(path: str) -> List[str]:
    """
    Split a path on forward slashes and backslashes.

    Splitting is purely positional: ``/home/user`` gives ``['', 'home',
    'user']`` while ``C:\\Windows`` gives ``['C:', 'Windows']``.
    """
    logger.debug("get_folder_segments()", path)
    return _SEPARATORS.split(path)


def get_search_scope(workspace_segment_count: int, folder_segments: Sequence[str]) -> List[str]:
    """
    Get the folders between the workspace root and the current file.

    Args:
        workspace_segment_count: Number of segments in the workspace root path
        folder_segments: Segments of the current file's directory

    Returns:
        The segments strictly inside the workspace, root child first. Empty
        when the directory has fewer segments than the workspace root.
    """
    logger.debug("get_search_scope()")

    if len(folder_segments) < workspace_segment_count:
        return []

    return list(folder_segments[workspace_segment_count:])


def iter_search_patterns(search_scope: Sequence[str]) -> Iterator[Tuple[str, Optional[str]]]:
    """
    Yield ``(include_prefix, exclude_prefix)`` for each search level.

    The first level has no exclusion; every later level excludes the prefix
    searched just before it.
    """
    folders = list(search_scope)
    exclude: Optional[str] = None

    while folders:
        include = "/".join(folders)
        yield include, exclude
        exclude = include
        folders.pop()


async def find_friend_file(
    file_name: str,
    workspace_folder: WorkspaceFolder,
    search_scope: Sequence[str],
    file_query: FileQuery,
) -> Optional[str]:
    """
    Find the friend file closest to the current file's directory.

    Args:
        file_name: Friend file name, may hold a brace group like ``a.{h,hpp}``
        workspace_folder: Folder every glob is anchored at
        search_scope: Folders from the workspace root down to the current file
        file_query: Provider answering the glob queries

    Returns:
        Path of the first match, or None. An empty scope issues no query.
    """
    logger.debug("find_friend_file()")

    exclude_pattern: Optional[RelativePattern] = None
    for include_prefix, exclude_prefix in iter_search_patterns(search_scope):
        if exclude_prefix is not None:
            exclude_pattern = RelativePattern(workspace_folder, exclude_prefix)

        include_pattern = RelativePattern(workspace_folder, f"{include_prefix}/**/{file_name}")
        logger.debug("Searching here:", workspace_folder.path, include_pattern.pattern)

        found_files = await file_query.find_files(include_pattern, exclude_pattern, 1)
        if found_files:
            logger.info("Found friend file:", found_files[0])
            return found_files[0]

    return None
