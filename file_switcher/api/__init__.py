# file_switcher/api/__init__.py
"""
Public API for File Switcher services.

This module provides functions to access the shared services with lazy
initialization.
"""
from pathlib import Path
from typing import Optional

from file_switcher.core.registry import registry


# Config Manager API
def get_config_manager(config_file: Optional[Path] = None):
    """Get the configuration manager instance, loading it on first use."""
    from file_switcher.config import ConfigManager

    config_manager = registry.get("config_manager")
    if config_manager is None:
        config_manager = registry.register("config_manager", ConfigManager(config_file))
        config_manager.load_config()
    return config_manager


# File Switcher API
def get_file_switcher(workspace=None, **kwargs):
    """
    Get the file switcher instance.

    Args:
        workspace: Workspace to create the switcher for on first use
        **kwargs: Extra FileSwitcher constructor arguments

    Returns:
        The shared FileSwitcher, or None if none exists and no workspace
        was given.
    """
    from file_switcher.switcher import FileSwitcher

    file_switcher = registry.get("file_switcher")
    if file_switcher is None and workspace is not None:
        kwargs.setdefault("config_manager", get_config_manager())
        file_switcher = registry.register("file_switcher", FileSwitcher(workspace, **kwargs))
    return file_switcher


def shutdown() -> None:
    """Deactivate the shared switcher and drop every service."""
    file_switcher = registry.unregister("file_switcher")
    if file_switcher is not None:
        file_switcher.deactivate()
    registry.clear()


__all__ = ["get_config_manager", "get_file_switcher", "shutdown"]
