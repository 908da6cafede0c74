"""
Action and Receipt models — the execution contract.

An Action is one external invocation the bootstrap wants performed
(an installer run, a ``git clone``, a PowerShell query).  A Receipt
is what came back.  Adapters turn Actions into Receipts and never
raise: a non-zero exit, a timeout or a missing binary all become a
failed Receipt.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class Action(BaseModel):
    """A requested external invocation.

    ``id`` is stable and descriptive (``install:git:winget:0``,
    ``detect:python``, ``git:clone``) so that logs and test doubles
    can address a single step.
    """

    id: str
    name: str = ""                  # human-readable label for logs
    adapter: str                    # which adapter handles this
    params: dict[str, Any] = Field(default_factory=dict)
    for_tool: str | None = None     # tool this action serves, if any


class Receipt(BaseModel):
    """Result of an adapter execution."""

    adapter: str
    action_id: str
    status: Literal["ok", "failed"] = "ok"
    duration_ms: int = 0

    output: str = ""
    error: str | None = None
    return_code: int | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @property
    def error_summary(self) -> str:
        """Last non-empty line of the error (installers print a lot)."""
        lines = [line for line in (self.error or "").splitlines() if line.strip()]
        return lines[-1].strip() if lines else ""

    @classmethod
    def success(
        cls,
        adapter: str,
        action_id: str,
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a success receipt."""
        return cls(
            adapter=adapter,
            action_id=action_id,
            status="ok",
            output=output,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        adapter: str,
        action_id: str,
        error: str,
        **kwargs: Any,
    ) -> Receipt:
        """Create a failure receipt."""
        return cls(
            adapter=adapter,
            action_id=action_id,
            status="failed",
            error=error,
            **kwargs,
        )
