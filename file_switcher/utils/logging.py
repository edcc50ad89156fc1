# file_switcher/utils/logging.py
"""
Logging configuration for File Switcher.
"""
import sys
from typing import List, Optional

from loguru import logger
from file_switcher.constants import (
    APP_NAME, LOG_DIR, LOG_FORMAT, LOG_ROTATION, LOG_RETENTION,
    DEFAULT_LOG_LEVEL, VERBOSITY_TO_LOG_LEVEL,
)
from file_switcher.utils.enhanced_logging import EnhancedLogger

# Dictionary to store enhanced logger instances
_enhanced_loggers = {}

_verbosity: Optional[str] = None

# Sinks added by setup_logging; other sinks belong to the host
_sink_ids: List[int] = []

# Id of the stderr handler loguru installs on import
_LOGURU_DEFAULT_HANDLER = 0
_default_handler_removed = False


def _remove_sink(sink_id: int) -> None:
    try:
        logger.remove(sink_id)
    except ValueError:
        # Already removed elsewhere
        pass


def setup_logging(verbosity: str = DEFAULT_LOG_LEVEL, log_to_file: bool = False) -> None:
    """
    Configure the application logging.

    Args:
        verbosity: One of none, error, warning, info or debug. "none"
            removes the sinks added here so nothing more is emitted by
            File Switcher. Sinks added by the host are left alone.
        log_to_file: Whether to also write a rotating log file under LOG_DIR.
    """
    global _verbosity, _default_handler_removed

    if not _default_handler_removed:
        _remove_sink(_LOGURU_DEFAULT_HANDLER)
        _default_handler_removed = True

    while _sink_ids:
        _remove_sink(_sink_ids.pop())

    logger.configure(extra={"name": APP_NAME})
    _verbosity = verbosity

    if verbosity == "none":
        return

    log_level = VERBOSITY_TO_LOG_LEVEL[verbosity]
    _sink_ids.append(logger.add(
        sys.stderr,
        format=LOG_FORMAT,
        level=log_level,
        diagnose=verbosity == "debug",
    ))

    if log_to_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_file = LOG_DIR / "file-switcher.log"
        _sink_ids.append(logger.add(
            log_file,
            format=LOG_FORMAT,
            level=log_level,
            rotation=LOG_ROTATION,
            retention=LOG_RETENTION,
        ))

    get_logger(__name__).debug(f"Logging initialized at verbosity: {verbosity}")


def get_verbosity() -> Optional[str]:
    """Get the verbosity set by the last setup_logging call, if any."""
    return _verbosity


def get_logger(name: str = "file_switcher") -> EnhancedLogger:
    """
    Get a logger instance with the given name.

    Args:
        name: The name for the logger.

    Returns:
        An enhanced logger instance.
    """
    # Check if we already have an enhanced logger for this name
    if name in _enhanced_loggers:
        return _enhanced_loggers[name]

    # Create a new enhanced logger
    enhanced_logger = EnhancedLogger(name)
    _enhanced_loggers[name] = enhanced_logger

    return enhanced_logger
