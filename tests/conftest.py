# tests/conftest.py
"""
Common test fixtures for File Switcher.
"""
import os
import pytest
from pathlib import Path
from unittest.mock import MagicMock, AsyncMock

from loguru import logger

from file_switcher.api import shutdown
from file_switcher.components.workspace import Workspace
from file_switcher.config import ConfigManager


@pytest.fixture(autouse=True)
def clean_state():
    """Start every test without log sinks or shared services."""
    logger.remove()
    yield
    shutdown()
    logger.remove()


@pytest.fixture
def log_messages():
    """Capture log records as 'LEVEL: message' strings."""
    messages = []
    sink_id = logger.add(
        lambda message: messages.append(
            f"{message.record['level'].name}: {message.record['message']}"
        ),
        level="DEBUG",
    )
    yield messages
    try:
        logger.remove(sink_id)
    except ValueError:
        pass


@pytest.fixture
def mock_file_query():
    """A file query provider that finds nothing unless told otherwise."""
    file_query = MagicMock()
    file_query.find_files = AsyncMock(return_value=[])
    return file_query


@pytest.fixture
def mock_workspace():
    """A workspace rooted at a path that does not need to exist."""
    return Workspace(["/path/to/workspace"])


@pytest.fixture
def config_manager(tmp_path):
    """A config manager backed by a temporary settings file."""
    return ConfigManager(config_file=tmp_path / "config.toml", load_env=False)


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch()
    return path


@pytest.fixture
def cpp_project(tmp_path):
    """
    Create a small C++ workspace.

    Layout:
        src/app/main.cpp, src/app/main.h          same folder
        src/lib/util.cpp, src/include/util.hpp    found one level up
        src/lib/net/socket.c, src/lib/net/impl/socket.h, src/socket.h
        src/orphan.cpp                            no friend
        .git/hooks/orphan.h                       never searched
    """
    root = tmp_path / "project"
    for rel in [
        "src/app/main.cpp",
        "src/app/main.h",
        "src/lib/util.cpp",
        "src/include/util.hpp",
        "src/lib/net/socket.c",
        "src/lib/net/impl/socket.h",
        "src/socket.h",
        "src/orphan.cpp",
        ".git/hooks/orphan.h",
    ]:
        _touch(root / rel)
    return root


@pytest.fixture
def chdir_tmp(tmp_path):
    """Run the test from inside the temporary directory."""
    old_dir = os.getcwd()
    os.chdir(tmp_path)
    yield tmp_path
    os.chdir(old_dir)
