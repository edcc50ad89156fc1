# file_switcher/utils/enhanced_logging.py
from typing import Any

from loguru import logger as _loguru_logger


class EnhancedLogger:
    """Named logger on top of loguru."""

    def __init__(self, name: str):
        self._name = name

    def _log(self, level: str, msg: str, *infos: Any, exception: bool = False) -> None:
        # Extra values are appended on their own lines, like an output channel
        message = msg
        for info in infos:
            message += f'\n\t"{info}"'

        bound = _loguru_logger.bind(name=self._name)
        bound.opt(depth=2, exception=exception).log(level, message)

    def debug(self, msg: str, *infos: Any) -> None:
        """Log a debug message."""
        self._log("DEBUG", msg, *infos)

    def info(self, msg: str, *infos: Any) -> None:
        """Log an info message."""
        self._log("INFO", msg, *infos)

    def warning(self, msg: str, *infos: Any) -> None:
        """Log a warning message."""
        self._log("WARNING", msg, *infos)

    def error(self, msg: str, *infos: Any) -> None:
        """Log an error message."""
        self._log("ERROR", msg, *infos)

    def exception(self, msg: str, *infos: Any) -> None:
        """Log an error message with the active exception's traceback."""
        self._log("ERROR", msg, *infos, exception=True)

    @property
    def name(self) -> str:
        """Get the logger name."""
        return self._name
