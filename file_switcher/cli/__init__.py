# file_switcher/cli/__init__.py
"""
Command-line interface for File Switcher.
"""
from file_switcher.cli.main import app

__all__ = ['app']
