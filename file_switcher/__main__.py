# file_switcher/__main__.py
"""
Entry point for File Switcher.
"""
from file_switcher.cli import app

if __name__ == "__main__":
    app()
