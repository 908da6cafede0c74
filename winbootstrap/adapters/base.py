"""
Adapter base — the protocol contract between the bootstrap and the host.

Every external process the bootstrap starts (package managers, git,
PowerShell, ping) goes through an adapter.  Services only talk to
adapters through the registry, which keeps the installer logic
testable with ``MockAdapter``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel

from winbootstrap.core.models.action import Action, Receipt

DEFAULT_TIMEOUT = 300


class ExecutionContext(BaseModel):
    """Everything an adapter needs to execute an action."""

    action: Action
    cwd: str | None = None
    timeout: int = DEFAULT_TIMEOUT

    @property
    def working_dir(self) -> str | None:
        """Resolved working directory: action param wins over context."""
        return self.action.params.get("cwd") or self.cwd


class Adapter(ABC):
    """Abstract base class for all adapters.

    Adapters perform external side effects and return receipts.
    They NEVER raise exceptions — failures are captured in the Receipt.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'shell', 'powershell', 'git')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this adapter's underlying binary is available.

        Should be fast and never raise.
        """

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Validate that the action can be executed.

        Returns:
            (is_valid, error_message). error_message is empty if valid.
        """

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Execute the action and return a receipt.

        MUST never raise exceptions. All failures are captured
        in the Receipt with status='failed'.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
