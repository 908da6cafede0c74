"""
Tool status model — one per tool the installer ensures.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

# Method markers that are not install strategies.
METHOD_PREEXISTING = "preexisting"
METHOD_NONE = "none"


class ToolStatus(BaseModel):
    """Whether a tool ended up installed, and how."""

    model_config = ConfigDict(frozen=True)

    tool: str
    installed: bool = False
    method: str = METHOD_NONE
    version: str | None = None
    detail: str = ""          # skip reason or last error
    attempts: int = 0         # install strategies actually tried

    @property
    def skipped(self) -> bool:
        """True when the tool was never attempted (missing prerequisite)."""
        return not self.installed and self.attempts == 0 and bool(self.detail)

    @classmethod
    def preexisting(cls, tool: str, version: str | None = None) -> ToolStatus:
        return cls(tool=tool, installed=True, method=METHOD_PREEXISTING, version=version)

    @classmethod
    def not_installed(cls, tool: str, detail: str = "", attempts: int = 0) -> ToolStatus:
        return cls(
            tool=tool,
            installed=False,
            method=METHOD_NONE,
            detail=detail,
            attempts=attempts,
        )

    def to_dict(self) -> dict:
        return {
            "tool": self.tool,
            "installed": self.installed,
            "method": self.method,
            "version": self.version,
            "detail": self.detail,
            "attempts": self.attempts,
        }
