# file_switcher/switcher.py
"""
Editor session glue for File Switcher.

``FileSwitcher`` plays the part of the editor extension: it applies
settings, reacts to the active file changing and hands the resolved friend
file to whatever the host uses to open files.
"""
import inspect
from typing import Any, Callable, Dict, List, Optional

from file_switcher.components.resolver import FriendFileResolver, ResolutionSession
from file_switcher.components.workspace import FileQuery, FilesystemFileQuery, Workspace
from file_switcher.config import ACTION_SETTINGS, ConfigManager, ConfigurationChangeEvent
from file_switcher.constants import EXTENSION_ID, OUTPUT_FILENAME_START
from file_switcher.utils.logging import get_logger, get_verbosity, setup_logging

logger = get_logger(__name__)


class FileSwitcher:
    """One activation of the switcher inside a host."""

    def __init__(
        self,
        workspace: Workspace,
        config_manager: Optional[ConfigManager] = None,
        file_query: Optional[FileQuery] = None,
        session: Optional[ResolutionSession] = None,
        configure_logging: bool = True,
        log_to_file: bool = False,
    ):
        self._workspace = workspace
        self._config_manager = config_manager if config_manager is not None else ConfigManager()
        self._resolver = FriendFileResolver(
            workspace,
            file_query if file_query is not None else FilesystemFileQuery(),
            session=session,
        )
        self._configure_logging = configure_logging
        self._log_to_file = log_to_file
        self._disposables: List[Callable[[], None]] = []

        self._action_setting_funcs: Dict[str, Callable[[], None]] = {
            "log.logLevel": self._apply_log_level,
            "extensions": self._apply_extensions,
            "cache.pathCount": self._apply_cache_path_count,
        }

    @property
    def resolver(self) -> FriendFileResolver:
        return self._resolver

    @property
    def session(self) -> ResolutionSession:
        return self._resolver.session

    @property
    def config_manager(self) -> ConfigManager:
        return self._config_manager

    @property
    def workspace(self) -> Workspace:
        return self._workspace

    @property
    def current_target(self) -> Optional[str]:
        return self.session.current_target

    @property
    def is_resolving(self) -> bool:
        return self.session.is_resolving

    async def activate(self, active_file: Optional[str] = None) -> bool:
        """
        Activate the switcher.

        Args:
            active_file: File open in the editor at startup, if any

        Returns:
            False when the workspace has no folder to search in.
        """
        if self._workspace.main_folder is None:
            return False

        self.run_all_action_setting_funcs()
        logger.info("File Switcher is now active.")

        self._disposables.append(self._config_manager.on_did_change(self.on_did_change_configuration))

        if active_file:
            logger.debug("Resolving friend file on startup")
            await self._store_switch_path(active_file)

        return True

    def deactivate(self) -> None:
        """Drop subscriptions and stop log output."""
        while self._disposables:
            dispose = self._disposables.pop()
            dispose()

        if self._configure_logging:
            setup_logging("none")

    async def on_did_change_active_editor(self, file_path: Optional[str]) -> Optional[str]:
        """
        Handle the active file changing.

        A new trigger while a resolution is in flight does not cancel it;
        both run in trigger order and the later one sets the target last.
        """
        if not file_path or file_path.startswith(OUTPUT_FILENAME_START):
            return None

        self.session.is_resolving = True
        logger.debug("Active file changed:", file_path)
        return await self._store_switch_path(file_path)

    async def _store_switch_path(self, file_path: str) -> Optional[str]:
        try:
            return await self._resolver.resolve(file_path)
        except Exception as e:
            logger.exception(f"Error resolving friend file: {str(e)}")
            self.session.reset()
            return None

    async def switch_file(self, open_file: Callable[[str], Any]) -> Optional[str]:
        """
        Open the friend file of the current file.

        Args:
            open_file: Host sink that opens a path; may be sync or async

        Returns:
            The opened path, or None when switching was refused.
        """
        if self.session.is_resolving:
            logger.warning("Currently storing switch file. Cannot switch files yet.")
            return None

        target = self.session.current_target
        if not target:
            logger.info("No friend file was found to switch to for current file. Cannot switch files.")
            return None

        logger.debug("Attempting to switch to file:", target)
        result = open_file(target)
        if inspect.isawaitable(result):
            await result

        return target

    def on_did_change_configuration(self, event: ConfigurationChangeEvent) -> None:
        """Re-apply every action setting touched by a configuration change."""
        if not event.affects_configuration(EXTENSION_ID):
            return

        for setting in ACTION_SETTINGS:
            if not event.affects_configuration(f"{EXTENSION_ID}.{setting}"):
                continue
            logger.debug("Changing setting:", setting)
            self._action_setting_funcs[setting]()

    def run_all_action_setting_funcs(self) -> None:
        logger.debug("run_all_action_setting_funcs()")
        for setting in ACTION_SETTINGS:
            self._action_setting_funcs[setting]()

    def _apply_log_level(self) -> None:
        verbosity = self._config_manager.validated("log.logLevel")
        if verbosity is None:
            return

        if self._configure_logging and verbosity != get_verbosity():
            setup_logging(verbosity, log_to_file=self._log_to_file)
        logger.info("Log level set to:", verbosity)

    def _apply_extensions(self) -> None:
        friend_extensions = self._config_manager.validated("extensions")
        if friend_extensions is None:
            return

        self._resolver.extension_pairs = friend_extensions.as_pair()
        logger.debug("Friend extensions set to:", friend_extensions.as_pair())

    def _apply_cache_path_count(self) -> None:
        path_count = self._config_manager.validated("cache.pathCount")
        if path_count is None:
            return

        self._resolver.cache_capacity = path_count
        logger.debug("Cache path count set to:", path_count)
