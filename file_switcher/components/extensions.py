# file_switcher/components/extensions.py
"""
Extension pairing rule.

A pair of comma-joined extension groups, e.g. ``("h,hpp", "c,cpp")``,
declares every extension of one group a friend of every extension of the
other.
"""
from typing import Optional, Sequence

from file_switcher.utils.logging import get_logger

logger = get_logger(__name__)


def friend_extensions(extension: str, extension_pairs: Sequence[str]) -> Optional[str]:
    """
    Get the comma-joined friend group of an extension.

    Args:
        extension: The current file's extension, with or without a leading dot
        extension_pairs: The two comma-joined extension groups

    Returns:
        The other group joined by commas, or None if neither group has the
        extension. The first group is checked first.
    """
    logger.debug("friend_extensions()", extension)

    ext = extension[1:] if extension.startswith(".") else extension
    extensions1, extensions2 = (group.split(",") for group in extension_pairs)

    if ext in extensions1:
        return ",".join(extensions2)
    elif ext in extensions2:
        return ",".join(extensions1)

    logger.debug("Didn't find friend extension.")
    return None


def friend_file_name(name: str, extension: str, extension_pairs: Sequence[str]) -> Optional[str]:
    """
    Build the glob file name of a friend file, e.g. ``main.{h,hpp}``.

    Returns:
        None when the file has no extension or no friend group.
    """
    if not extension:
        return None

    friend_exts = friend_extensions(extension, extension_pairs)
    if not friend_exts:
        return None

    return f"{name}.{{{friend_exts}}}"
