"""
Repository and dependency outcome models.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class SyncAction(str, Enum):
    CLONE = "CLONE"
    PULL = "PULL"
    NONE = "NONE"


class RepoState(BaseModel):
    """Where the configuration repository lives and what sync did to it.

    ``present`` is True when a usable local copy exists afterwards,
    which includes an existing copy whose pull failed (``error`` set).
    """

    model_config = ConfigDict(frozen=True)

    local_path: Path
    present: bool = False
    sync_action: SyncAction = SyncAction.NONE
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "local_path": str(self.local_path),
            "present": self.present,
            "sync_action": self.sync_action.value,
            "error": self.error,
        }


class DependencyResult(BaseModel):
    """Outcome of installing the repository's declared roles/collections."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    ran: bool = False          # whether ansible-galaxy was invoked
    manifest: Path | None = None
    roles: int = 0
    collections: int = 0
    message: str = ""

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "ran": self.ran,
            "manifest": str(self.manifest) if self.manifest else None,
            "roles": self.roles,
            "collections": self.collections,
            "message": self.message,
        }
