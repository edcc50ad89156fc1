"""Utility helpers for File Switcher."""

from .logging import setup_logging, get_logger, get_verbosity

__all__ = ["setup_logging", "get_logger", "get_verbosity"]
