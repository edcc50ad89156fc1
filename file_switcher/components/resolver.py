# file_switcher/components/resolver.py
"""
Friend file resolution.

Combines the path cache, the extension pairing rule, the search scope and
the progressive search into a single ``resolve`` call. The only state it
touches lives in a ``ResolutionSession``.
"""
import os
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from file_switcher.components.cache import PathCache
from file_switcher.components.extensions import friend_file_name
from file_switcher.components.search import find_friend_file, get_folder_segments, get_search_scope
from file_switcher.components.workspace import FileQuery, Workspace
from file_switcher.constants import DEFAULT_CACHE_PATH_COUNT, DEFAULT_EXTENSIONS1, DEFAULT_EXTENSIONS2
from file_switcher.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ResolutionSession:
    """
    Mutable state shared by the resolver and the editor glue.

    Attributes:
        cache: Source path to friend path cache
        current_target: Friend path the switch command would open
        is_resolving: True while a resolution is in flight
    """
    cache: PathCache = field(default_factory=lambda: PathCache(DEFAULT_CACHE_PATH_COUNT))
    current_target: Optional[str] = None
    is_resolving: bool = False

    def reset(self) -> None:
        """Forget the current target and clear the in-flight flag."""
        logger.debug("Resetting session state.")
        self.current_target = None
        self.is_resolving = False


class FriendFileResolver:
    """Resolves the friend file of the file currently being edited."""

    def __init__(
        self,
        workspace: Workspace,
        file_query: FileQuery,
        extension_pairs: Sequence[str] = (DEFAULT_EXTENSIONS1, DEFAULT_EXTENSIONS2),
        session: Optional[ResolutionSession] = None,
    ):
        self._workspace = workspace
        self._file_query = file_query
        self._extension_pairs: Tuple[str, str] = tuple(extension_pairs)
        self._session = session if session is not None else ResolutionSession()

    @property
    def session(self) -> ResolutionSession:
        return self._session

    @property
    def workspace(self) -> Workspace:
        return self._workspace

    @property
    def extension_pairs(self) -> Tuple[str, str]:
        return self._extension_pairs

    @extension_pairs.setter
    def extension_pairs(self, extension_pairs: Sequence[str]) -> None:
        self._extension_pairs = tuple(extension_pairs)

    @property
    def cache_capacity(self) -> int:
        return self._session.cache.capacity

    @cache_capacity.setter
    def cache_capacity(self, capacity: int) -> None:
        self._session.cache.capacity = capacity

    async def resolve(self, current_file_path: Optional[str]) -> Optional[str]:
        """
        Resolve and store the friend file of ``current_file_path``.

        Args:
            current_file_path: Absolute path of the active file, or None

        Returns:
            The friend file path, or None when there is nothing to switch to.
            Errors raised by the file query provider propagate unchanged.
        """
        logger.info("Calling resolve()", current_file_path)
        session = self._session

        if not current_file_path:
            logger.debug("Returning reason: no current file")
            session.reset()
            return None

        # Check cache
        if not session.cache.is_disabled:
            cached_path = session.cache.get(current_file_path)
            if cached_path is not None:
                logger.info("Current path found in path cache")
                session.current_target = cached_path
                session.is_resolving = False
                logger.debug("Returning reason: path found in cache")
                return cached_path

        directory, base_name = os.path.split(current_file_path)
        name, extension = os.path.splitext(base_name)

        friend_name = friend_file_name(name, extension, self._extension_pairs)
        if not friend_name:
            session.reset()
            logger.debug("Returning reason: couldn't create friend file name")
            return None

        workspace_folder = self._workspace.get_workspace_folder(current_file_path)
        if workspace_folder is None:
            logger.warning("Current file isn't part of any workspace folder", current_file_path)
            session.reset()
            return None

        workspace_segment_count = len(get_folder_segments(workspace_folder.path))
        search_scope = get_search_scope(workspace_segment_count, get_folder_segments(directory))
        logger.info("Search folders are:", search_scope)
        if not search_scope:
            session.reset()
            logger.debug("Returning reason: no folders to search")
            return None

        friend_path = await find_friend_file(friend_name, workspace_folder, search_scope, self._file_query)
        if not friend_path:
            session.reset()
            logger.debug("Returning reason: no friend file found")
            return None

        session.current_target = friend_path
        if current_file_path not in session.cache:
            session.cache.set(current_file_path, friend_path)

        cache = session.cache
        logger.info(
            f"Cache entries: {len(cache)}/{cache.capacity}, "
            f"Est. size in memory (KiB): {cache.estimated_byte_size() / 1024:.2f}"
        )
        logger.info("Switch path set to:", friend_path)
        session.is_resolving = False

        return friend_path
