"""
Adapter registry — central dispatch for all adapter operations.

Services never call adapters directly: they hand an Action to the
registry, which resolves the adapter, validates, executes and always
returns a Receipt.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from winbootstrap.adapters.base import DEFAULT_TIMEOUT, Adapter, ExecutionContext
from winbootstrap.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Central registry and dispatcher for adapters."""

    def __init__(self) -> None:
        self._adapters: dict[str, Adapter] = {}

    def register(self, adapter: Adapter) -> None:
        name = adapter.name
        if name in self._adapters:
            logger.warning("Overwriting existing adapter: %s", name)
        self._adapters[name] = adapter
        logger.debug("Registered adapter: %s", name)

    def get(self, name: str) -> Adapter | None:
        return self._adapters.get(name)

    def list_adapters(self) -> list[str]:
        return list(self._adapters.keys())

    def adapter_status(self) -> dict[str, dict[str, Any]]:
        """Get availability status of all registered adapters."""
        status = {}
        for name, adapter in self._adapters.items():
            try:
                available = adapter.is_available()
            except Exception:
                available = False
            status[name] = {
                "name": name,
                "available": available,
                "type": adapter.__class__.__name__,
            }
        return status

    def execute_action(
        self,
        action: Action,
        cwd: str | None = None,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> Receipt:
        """Execute an action through the appropriate adapter.

        Resolves the adapter, validates, executes and returns a
        Receipt.  Never raises.
        """
        start_time = time.monotonic()
        context = ExecutionContext(action=action, cwd=cwd, timeout=timeout)

        adapter = self._adapters.get(action.adapter)
        if adapter is None:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"No adapter registered for '{action.adapter}'",
            )

        try:
            is_valid, error_msg = adapter.validate(context)
        except Exception as e:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"Validation error: {e}",
            )
        if not is_valid:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"Validation failed: {error_msg}",
            )

        try:
            receipt = adapter.execute(context)
        except Exception as e:
            # Adapters should never raise
            logger.error("Adapter %s raised during execution: %s", action.adapter, e)
            receipt = Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"Unexpected error: {e}",
            )

        elapsed_ms = int((time.monotonic() - start_time) * 1000)
        receipt.duration_ms = receipt.duration_ms or elapsed_ms
        if receipt.failed:
            logger.debug("Action %s failed: %s", action.id, receipt.error)
        return receipt


def default_registry(powershell_executable: str = "powershell") -> AdapterRegistry:
    """Registry with the real shell, PowerShell and git adapters."""
    from winbootstrap.adapters.shell.command import ShellCommandAdapter
    from winbootstrap.adapters.shell.powershell import PowerShellAdapter
    from winbootstrap.adapters.vcs.git import GitAdapter

    registry = AdapterRegistry()
    registry.register(ShellCommandAdapter())
    registry.register(PowerShellAdapter(powershell_executable))
    registry.register(GitAdapter())
    return registry
