"""Adapters — process bindings for package managers, PowerShell and git.

Public re-exports for convenient access.
"""

from winbootstrap.adapters.base import Adapter, ExecutionContext
from winbootstrap.adapters.mock import MockAdapter
from winbootstrap.adapters.registry import AdapterRegistry, default_registry

__all__ = [
    "Adapter",
    "AdapterRegistry",
    "ExecutionContext",
    "MockAdapter",
    "default_registry",
]
