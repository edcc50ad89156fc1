# file_switcher/__init__.py
"""
File Switcher: jump from a source file to its friend file (e.g. its header)
anywhere in the workspace.
"""

__version__ = '0.1.0'
