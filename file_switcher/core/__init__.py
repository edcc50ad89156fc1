"""Core services for File Switcher."""

from .registry import registry, ServiceRegistry

__all__ = ["registry", "ServiceRegistry"]
