"""
Configuration management for File Switcher.

Settings live in the ``[file-switcher]`` table of a TOML file and may be
overridden from the environment. Raw values are only ever read through
``ConfigManager.validated``, which is the single place where their shape
is checked.
"""
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, FrozenSet, List, Literal, Optional, Tuple

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from file_switcher.constants import (
    CONFIG_FILE, EXTENSION_ID, ENV_LOG_LEVEL, ENV_CACHE_PATH_COUNT,
    DEFAULT_EXTENSIONS1, DEFAULT_EXTENSIONS2, DEFAULT_CACHE_PATH_COUNT, DEFAULT_LOG_LEVEL,
)
from file_switcher.utils.logging import get_logger

logger = get_logger(__name__)

Verbosity = Literal["none", "error", "warning", "info", "debug"]

# Settings that have actions when changed, in the order they are applied
ACTION_SETTINGS: Tuple[str, ...] = ("log.logLevel", "extensions", "cache.pathCount")


# --- Configuration Models ---

class FriendExtensions(BaseModel):
    """The two comma-joined extension groups that are friends of each other."""
    model_config = ConfigDict(frozen=True)

    extensions1: str = Field(..., strict=True, description="First extension group, e.g. 'h,hpp'")
    extensions2: str = Field(..., strict=True, description="Second extension group, e.g. 'c,cpp'")

    def as_pair(self) -> Tuple[str, str]:
        """Return the groups as the ordered pair used by the pairing rule."""
        return (self.extensions1, self.extensions2)


class LogSettings(BaseModel):
    """Logging settings."""
    model_config = ConfigDict(populate_by_name=True)

    log_level: Verbosity = Field(DEFAULT_LOG_LEVEL, alias="logLevel", description="Output verbosity")

    @field_validator("log_level", mode="before")
    @classmethod
    def _lowercase(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value


class CacheSettings(BaseModel):
    """Path cache settings."""
    model_config = ConfigDict(populate_by_name=True)

    path_count: int = Field(
        DEFAULT_CACHE_PATH_COUNT, alias="pathCount", strict=True, ge=0,
        description="Maximum number of cached friend paths, 0 disables the cache",
    )


class SwitcherConfig(BaseModel):
    """Last known valid value of every setting."""
    log: LogSettings = Field(default_factory=LogSettings)
    extensions: FriendExtensions = Field(
        default_factory=lambda: FriendExtensions(
            extensions1=DEFAULT_EXTENSIONS1, extensions2=DEFAULT_EXTENSIONS2
        )
    )
    cache: CacheSettings = Field(default_factory=CacheSettings)


def default_settings() -> Dict[str, Any]:
    """Raw settings as they would appear in a fresh TOML table."""
    return {
        "log": {"logLevel": DEFAULT_LOG_LEVEL},
        "extensions": {"extensions1": DEFAULT_EXTENSIONS1, "extensions2": DEFAULT_EXTENSIONS2},
        "cache": {"pathCount": DEFAULT_CACHE_PATH_COUNT},
    }


@dataclass(frozen=True)
class ConfigurationChangeEvent:
    """Describes which fully-qualified settings changed."""
    affected: FrozenSet[str]

    def affects_configuration(self, section: str) -> bool:
        """
        Check whether a setting section was touched by this change.

        A section is affected when it equals a changed key, contains a
        changed key, or lies inside a changed key.
        """
        for key in self.affected:
            if key == section or key.startswith(section + ".") or section.startswith(key + "."):
                return True
        return False


ConfigListener = Callable[[ConfigurationChangeEvent], None]


# --- Configuration Manager ---

class ConfigManager:
    """Manages the File Switcher settings stored in a TOML file."""

    def __init__(self, config_file: Optional[Path] = None, load_env: bool = True):
        self._config_file = Path(config_file) if config_file else CONFIG_FILE
        self._settings: Dict[str, Any] = default_settings()
        # Environment values win over the file and are never saved
        self._env_overrides: Dict[str, Any] = {}
        self._config = SwitcherConfig()
        self._listeners: List[ConfigListener] = []
        if load_env:
            self._load_environment()

    def _load_environment(self) -> None:
        """Loads setting overrides from environment variables and .env file."""
        load_dotenv()

        log_level = os.getenv(ENV_LOG_LEVEL)
        if log_level:
            self._env_overrides["log.logLevel"] = log_level

        path_count = os.getenv(ENV_CACHE_PATH_COUNT)
        if path_count:
            try:
                self._env_overrides["cache.pathCount"] = int(path_count)
            except ValueError:
                logger.warning(f"Ignoring non-integer {ENV_CACHE_PATH_COUNT}:", path_count)

    @property
    def config_file(self) -> Path:
        """Path of the backing TOML file."""
        return self._config_file

    @property
    def config(self) -> SwitcherConfig:
        """Last known valid settings."""
        return self._config

    def load_config(self) -> None:
        """Loads settings from the TOML config file and signals a change."""
        if not self._config_file.exists():
            logger.debug(f"Configuration file not found at '{self._config_file}'. Using defaults.")
            return

        try:
            logger.debug(f"Loading configuration from: {self._config_file}")
            with open(self._config_file, "rb") as f:
                config_data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            logger.error(f"Error decoding TOML configuration file ({self._config_file}): {e}")
            logger.error("Using default configuration and environment variables.")
            self._reset()
            return
        except OSError as e:
            logger.error(f"Error reading configuration file ({self._config_file}): {e}")
            logger.error("Using default configuration and environment variables.")
            self._reset()
            return

        section = config_data.get(EXTENSION_ID, {})
        if not isinstance(section, dict):
            logger.warning(f"Invalid type for '{EXTENSION_ID}' in {self._config_file}. Expected a table. Ignoring.")
            return

        for key, value in section.items():
            if isinstance(value, dict) and isinstance(self._settings.get(key), dict):
                self._settings[key].update(value)
            else:
                self._settings[key] = value

        self._fire(frozenset({EXTENSION_ID}))

    def save_config(self) -> None:
        """Saves the current raw settings to the config file."""
        self._config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self._config_file, "wb") as f:
            tomli_w.dump({EXTENSION_ID: self._settings}, f)
        logger.info(f"Configuration saved to {self._config_file}")

    def _reset(self) -> None:
        self._settings = default_settings()

    def get(self, setting: str) -> Any:
        """
        Get the raw value of a dotted setting, e.g. ``cache.pathCount``.

        Returns:
            The raw value, or None when the setting is missing.
        """
        if setting in self._env_overrides:
            return self._env_overrides[setting]

        node: Any = self._settings
        for part in setting.split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def _set_raw(self, setting: str, value: Any) -> None:
        parts = setting.split(".")
        node = self._settings
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value

    def update(self, setting: str, value: Any) -> None:
        """Set a raw setting value and signal the change to listeners."""
        # An explicit change replaces any environment override it touches
        for key in list(self._env_overrides):
            if key == setting or key.startswith(setting + "."):
                del self._env_overrides[key]
        self._set_raw(setting, value)
        self._fire(frozenset({f"{EXTENSION_ID}.{setting}"}))

    def on_did_change(self, listener: ConfigListener) -> Callable[[], None]:
        """
        Subscribe to configuration changes.

        Returns:
            A function that removes the subscription.
        """
        self._listeners.append(listener)

        def dispose() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return dispose

    def _fire(self, affected: FrozenSet[str]) -> None:
        event = ConfigurationChangeEvent(affected)
        for listener in list(self._listeners):
            listener(event)

    def validated(self, setting: str) -> Any:
        """
        Parse and validate one action setting.

        On success the value is recorded in ``config`` and returned. On
        failure the error is logged and None is returned; the previous
        valid value is left in place.
        """
        raw = self.get(setting)
        try:
            if setting == "log.logLevel":
                log = LogSettings.model_validate({"logLevel": raw})
                self._config.log = log
                return log.log_level
            if setting == "extensions":
                extensions = FriendExtensions.model_validate(raw)
                self._config.extensions = extensions
                return extensions
            if setting == "cache.pathCount":
                cache = CacheSettings.model_validate({"pathCount": raw})
                self._config.cache = cache
                return cache.path_count
        except ValidationError as e:
            logger.error(f"Invalid value for setting '{setting}':", raw, e.errors(include_url=False))
            return None

        logger.warning(f"Unknown setting: {setting}")
        return None
