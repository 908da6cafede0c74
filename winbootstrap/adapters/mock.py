"""
Mock adapter — universal test double for all adapter operations.

Stands in for ``shell``, ``powershell`` or ``git`` so the installer,
probe and sync logic can be exercised without touching the machine.
Configurable to return success, failure, or custom output per action,
and to run a callback when an action executes (e.g. "after this
install step, the binary is on PATH").
"""

from __future__ import annotations

from collections.abc import Callable

from winbootstrap.adapters.base import Adapter, ExecutionContext
from winbootstrap.core.models.action import Receipt


class MockAdapter(Adapter):
    """Universal mock adapter for testing.

    By default, returns success for everything. Can be configured
    with custom responses per action ID.
    """

    def __init__(
        self,
        adapter_name: str = "mock",
        available: bool = True,
        default_output: str = "[mock] executed",
    ):
        self._name = adapter_name
        self._available = available
        self._default_output = default_output
        self._responses: dict[str, Receipt] = {}
        self._effects: dict[str, Callable[[ExecutionContext], None]] = {}
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        """Number of times execute has been called."""
        return len(self._call_log)

    def called_ids(self, prefix: str = "") -> list[str]:
        """Action IDs executed so far, optionally filtered by prefix."""
        return [c.action.id for c in self._call_log if c.action.id.startswith(prefix)]

    def is_available(self) -> bool:
        return self._available

    def set_output(self, action_id: str, output: str) -> None:
        """Configure a specific action to succeed with the given output."""
        self._responses[action_id] = Receipt.success(
            adapter=self._name,
            action_id=action_id,
            output=output,
        )

    def set_failure(self, action_id: str, error: str = "Mock failure") -> None:
        """Configure a specific action to fail."""
        self._responses[action_id] = Receipt.failure(
            adapter=self._name,
            action_id=action_id,
            error=error,
            return_code=1,
        )

    def on_execute(
        self, action_id: str, effect: Callable[[ExecutionContext], None],
    ) -> None:
        """Run ``effect`` whenever ``action_id`` executes."""
        self._effects[action_id] = effect

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self._call_log.append(context)
        action_id = context.action.id

        response = self._responses.get(action_id)
        if action_id in self._effects and (response is None or response.ok):
            self._effects[action_id](context)

        if response is not None:
            return response

        return Receipt.success(
            adapter=self._name,
            action_id=action_id,
            output=self._default_output,
            metadata={"mock": True},
        )

    def reset(self) -> None:
        """Clear call log, custom responses and effects."""
        self._call_log.clear()
        self._responses.clear()
        self._effects.clear()
