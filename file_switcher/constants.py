"""
Constants for the File Switcher application.
"""
from pathlib import Path
import os

# Application information
APP_NAME = "file-switcher"

# Settings namespace, also used as the TOML table name
EXTENSION_ID = "file-switcher"

# Paths
CONFIG_DIR = Path(os.path.expanduser("~/.config/file-switcher"))
CONFIG_FILE = CONFIG_DIR / "config.toml"
LOG_DIR = CONFIG_DIR / "logs"

# Environment overrides
ENV_LOG_LEVEL = "FILE_SWITCHER_LOG_LEVEL"
ENV_CACHE_PATH_COUNT = "FILE_SWITCHER_CACHE_PATH_COUNT"

# Documents whose path starts with this belong to the switcher's own output
OUTPUT_FILENAME_START = "extension-output-file-switcher"

# Project markers for workspace root detection
PROJECT_MARKERS = [
    ".git",               # Git repository
    ".vscode",            # Editor workspace
    "CMakeLists.txt",     # CMake project
    "Makefile",           # Make project
    "meson.build",        # Meson project
    "pyproject.toml",     # Python project
    "package.json",       # Node.js project
    "Cargo.toml",         # Rust project
]

# Paths never returned by workspace file queries
DEFAULT_EXCLUDES = [
    "**/.git",
    "**/.svn",
    "**/.hg",
    "**/CVS",
    "**/.DS_Store",
]

# Settings defaults
DEFAULT_EXTENSIONS1 = "h,hpp,hh,hxx"
DEFAULT_EXTENSIONS2 = "c,cpp,cc,cxx"
DEFAULT_CACHE_PATH_COUNT = 200
DEFAULT_LOG_LEVEL = "info"

# Logging
LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {extra[name]} | {message}"
LOG_ROTATION = "10 MB"
LOG_RETENTION = "10 days"

# Verbosity to loguru level; "none" has no sink
VERBOSITY_TO_LOG_LEVEL = {
    "error": "ERROR",
    "warning": "WARNING",
    "info": "INFO",
    "debug": "DEBUG",
}
