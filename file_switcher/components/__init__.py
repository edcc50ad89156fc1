"""Friend file resolution components for File Switcher."""

from .cache import PathCache
from .extensions import friend_extensions, friend_file_name
from .search import find_friend_file, get_folder_segments, get_search_scope, iter_search_patterns
from .workspace import (
    FileQuery, FilesystemFileQuery, RelativePattern, Workspace, WorkspaceFolder,
    expand_braces, find_project_root,
)
from .resolver import FriendFileResolver, ResolutionSession

__all__ = [
    "PathCache",
    "friend_extensions",
    "friend_file_name",
    "find_friend_file",
    "get_folder_segments",
    "get_search_scope",
    "iter_search_patterns",
    "FileQuery",
    "FilesystemFileQuery",
    "RelativePattern",
    "Workspace",
    "WorkspaceFolder",
    "expand_braces",
    "find_project_root",
    "FriendFileResolver",
    "ResolutionSession",
]
