"""
Restore point outcome model.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class RestorePointOutcome(str, Enum):
    CREATED = "CREATED"
    SKIPPED = "SKIPPED"
    FAILED = "FAILED"


class RestorePointResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    outcome: RestorePointOutcome
    message: str = ""

    def to_dict(self) -> dict:
        return {"outcome": self.outcome.value, "message": self.message}
