# file_switcher/core/registry.py
"""
Service registry for File Switcher.

Holds the long-lived services of one process (configuration manager, file
switcher) so hosts and the CLI share a single instance of each.
"""
from typing import Dict, Any, Optional
import threading

from file_switcher.utils.logging import get_logger


class ServiceRegistry:
    """Process-wide registry of named services."""

    _instance = None
    _lock = threading.RLock()

    @classmethod
    def get_instance(cls) -> 'ServiceRegistry':
        """Get the singleton instance of the registry."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = ServiceRegistry()
        return cls._instance

    def __init__(self):
        self._services: Dict[str, Any] = {}
        self._logger = get_logger(__name__)

    def register(self, name: str, service: Any) -> Any:
        """
        Register a service with the registry.

        Args:
            name: Unique identifier for the service
            service: The service instance to register

        Returns:
            The registered service (for method chaining)
        """
        with self._lock:
            self._services[name] = service
            self._logger.debug(f"Registered service: {name} ({type(service).__name__})")
            return service

    def get(self, name: str) -> Optional[Any]:
        """Get a service from the registry, or None if not found."""
        return self._services.get(name)

    def unregister(self, name: str) -> Optional[Any]:
        """Remove a service and return it, if it was registered."""
        with self._lock:
            return self._services.pop(name, None)

    def clear(self) -> None:
        """Clear all registered services."""
        with self._lock:
            self._logger.debug("Clearing service registry")
            self._services.clear()


# Create global registry instance
registry = ServiceRegistry.get_instance()
