# tests/test_resolver.py
"""
Tests for friend file resolution.
"""
import pytest
from unittest.mock import patch

from file_switcher.components.cache import PathCache
from file_switcher.components.resolver import FriendFileResolver, ResolutionSession
from file_switcher.components.workspace import FilesystemFileQuery, Workspace

CURRENT_FILE = "/path/to/workspace/folder1/folder2/testFile.cpp"
FRIEND_FILE = "/path/to/workspace/folder1/folder2/testFile.h"


@pytest.fixture
def resolver(mock_workspace, mock_file_query):
    return FriendFileResolver(mock_workspace, mock_file_query, extension_pairs=("h,hpp", "c,cpp"))


@pytest.mark.asyncio
async def test_resolve_none_clears_previous_target(resolver):
    resolver.session.current_target = "/old/target.h"
    resolver.session.is_resolving = True

    result = await resolver.resolve(None)

    assert result is None
    assert resolver.session.current_target is None
    assert resolver.session.is_resolving is False


@pytest.mark.asyncio
async def test_resolve_from_cache_skips_filesystem(resolver, mock_file_query):
    resolver.session.cache.set(CURRENT_FILE, FRIEND_FILE)
    resolver.session.is_resolving = True

    result = await resolver.resolve(CURRENT_FILE)

    assert result == FRIEND_FILE
    assert resolver.session.current_target == FRIEND_FILE
    assert resolver.session.is_resolving is False
    mock_file_query.find_files.assert_not_called()


@pytest.mark.asyncio
async def test_resolve_queries_with_friend_file_name(resolver, mock_file_query):
    mock_file_query.find_files.return_value = [FRIEND_FILE]

    result = await resolver.resolve(CURRENT_FILE)

    assert result == FRIEND_FILE
    include, exclude, max_results = mock_file_query.find_files.call_args.args
    assert include.pattern == "folder1/folder2/**/testFile.{h,hpp}"
    assert exclude is None
    assert max_results == 1


@pytest.mark.asyncio
async def test_resolve_populates_cache_and_target(resolver, mock_file_query):
    mock_file_query.find_files.return_value = [FRIEND_FILE]
    resolver.session.is_resolving = True

    await resolver.resolve(CURRENT_FILE)

    assert resolver.session.cache.get(CURRENT_FILE) == FRIEND_FILE
    assert resolver.session.current_target == FRIEND_FILE
    assert resolver.session.is_resolving is False

    # The second resolution is answered by the cache
    await resolver.resolve(CURRENT_FILE)
    assert mock_file_query.find_files.call_count == 1


@pytest.mark.asyncio
async def test_resolve_with_cache_disabled_always_searches(resolver, mock_file_query):
    mock_file_query.find_files.return_value = [FRIEND_FILE]
    resolver.cache_capacity = 0

    await resolver.resolve(CURRENT_FILE)
    await resolver.resolve(CURRENT_FILE)

    assert mock_file_query.find_files.call_count == 2
    assert len(resolver.session.cache) == 0


@pytest.mark.asyncio
async def test_resolve_unpaired_extension(resolver, mock_file_query):
    resolver.session.current_target = "/old/target.h"

    result = await resolver.resolve("/path/to/workspace/folder1/index.js")

    assert result is None
    assert resolver.session.current_target is None
    mock_file_query.find_files.assert_not_called()


@pytest.mark.asyncio
async def test_resolve_without_extension(resolver, mock_file_query):
    result = await resolver.resolve("/path/to/workspace/folder1/Makefile")

    assert result is None
    mock_file_query.find_files.assert_not_called()


@pytest.mark.asyncio
async def test_resolve_outside_workspace(resolver, mock_file_query, log_messages):
    result = await resolver.resolve("/somewhere/else/file.cpp")

    assert result is None
    mock_file_query.find_files.assert_not_called()
    assert any(m.startswith("WARNING: Current file isn't part of any workspace") for m in log_messages)


@pytest.mark.asyncio
async def test_resolve_file_at_workspace_root_has_no_scope(resolver, mock_file_query):
    result = await resolver.resolve("/path/to/workspace/main.cpp")

    assert result is None
    mock_file_query.find_files.assert_not_called()


@pytest.mark.asyncio
async def test_resolve_no_match_resets(resolver, mock_file_query):
    resolver.session.current_target = "/old/target.h"
    resolver.session.is_resolving = True

    result = await resolver.resolve(CURRENT_FILE)

    assert result is None
    assert mock_file_query.find_files.call_count == 2
    assert resolver.session.current_target is None
    assert resolver.session.is_resolving is False
    assert CURRENT_FILE not in resolver.session.cache


@pytest.mark.asyncio
async def test_resolve_does_not_overwrite_cached_entry(resolver, mock_file_query):
    """A key cached while the search was in flight is left alone."""
    async def find_and_cache(*args):
        resolver.session.cache.set(CURRENT_FILE, "/cached/other.h")
        return [FRIEND_FILE]

    mock_file_query.find_files.side_effect = find_and_cache

    result = await resolver.resolve(CURRENT_FILE)

    assert result == FRIEND_FILE
    assert resolver.session.current_target == FRIEND_FILE
    assert resolver.session.cache.get(CURRENT_FILE) == "/cached/other.h"


@pytest.mark.asyncio
async def test_cache_hit_never_writes_cache(resolver):
    resolver.session.cache.set(CURRENT_FILE, FRIEND_FILE)

    with patch.object(resolver.session.cache, "set") as mock_set:
        await resolver.resolve(CURRENT_FILE)

    mock_set.assert_not_called()


@pytest.mark.asyncio
async def test_resolve_logs_cache_statistics(resolver, mock_file_query, log_messages):
    mock_file_query.find_files.return_value = [FRIEND_FILE]

    await resolver.resolve(CURRENT_FILE)

    assert any("Cache entries: 1/200" in m for m in log_messages)


@pytest.mark.asyncio
async def test_resolve_propagates_query_errors(resolver, mock_file_query):
    mock_file_query.find_files.side_effect = OSError("permission denied")

    with pytest.raises(OSError):
        await resolver.resolve(CURRENT_FILE)


def test_session_uses_given_cache():
    cache = PathCache(5)
    session = ResolutionSession(cache=cache)
    resolver = FriendFileResolver(Workspace(["/ws"]), FilesystemFileQuery(), session=session)

    resolver.cache_capacity = 3

    assert resolver.session is session
    assert cache.capacity == 3


@pytest.mark.asyncio
async def test_resolve_on_disk(cpp_project):
    """End to end against a real directory tree."""
    resolver = FriendFileResolver(Workspace([cpp_project]), FilesystemFileQuery())

    same_folder = await resolver.resolve(str(cpp_project / "src" / "app" / "main.cpp"))
    assert same_folder == str(cpp_project / "src" / "app" / "main.h")

    one_level_up = await resolver.resolve(str(cpp_project / "src" / "lib" / "util.cpp"))
    assert one_level_up == str(cpp_project / "src" / "include" / "util.hpp")

    # The closest folder wins over a match higher up
    closest = await resolver.resolve(str(cpp_project / "src" / "lib" / "net" / "socket.c"))
    assert closest == str(cpp_project / "src" / "lib" / "net" / "impl" / "socket.h")

    missing = await resolver.resolve(str(cpp_project / "src" / "orphan.cpp"))
    assert missing is None


@pytest.mark.asyncio
async def test_header_resolves_back_to_source(cpp_project):
    resolver = FriendFileResolver(Workspace([cpp_project]), FilesystemFileQuery())

    result = await resolver.resolve(str(cpp_project / "src" / "app" / "main.h"))

    assert result == str(cpp_project / "src" / "app" / "main.cpp")
