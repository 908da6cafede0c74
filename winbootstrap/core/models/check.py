"""
Environment probe models — facts in, check results out.

``EnvironmentFacts`` is the raw reading of the host.  ``CheckResult``
is the verdict of one prerequisite check over those facts, and
``ProbeResult`` is the ordered battery of all six.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class CheckStatus(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    WARN = "WARN"


class CheckResult(BaseModel):
    """Outcome of a single prerequisite check."""

    model_config = ConfigDict(frozen=True)

    name: str
    status: CheckStatus
    message: str = ""
    blocking: bool = True    # a FAIL on a blocking check halts the run

    @property
    def passed(self) -> bool:
        return self.status == CheckStatus.PASS

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "status": self.status.value,
            "message": self.message,
            "blocking": self.blocking,
        }


class EnvironmentFacts(BaseModel):
    """Raw host readings.  ``None`` means the reading itself failed."""

    model_config = ConfigDict(frozen=True)

    is_admin: bool = False
    os_build: int | None = None
    shell_major: int | None = None
    ping_replied: bool = False
    free_bytes: int | None = None
    execution_policy: str | None = None
    system_volume: str = ""


class ProbeResult(BaseModel):
    """All six check results, in fixed order."""

    model_config = ConfigDict(frozen=True)

    checks: tuple[CheckResult, ...] = ()
    facts: EnvironmentFacts | None = None

    @property
    def failed_checks(self) -> list[CheckResult]:
        return [
            c for c in self.checks
            if c.blocking and c.status == CheckStatus.FAIL
        ]

    @property
    def halted(self) -> bool:
        """True when any blocking check failed."""
        return bool(self.failed_checks)

    @property
    def warnings(self) -> list[CheckResult]:
        return [c for c in self.checks if c.status == CheckStatus.WARN]

    def to_dict(self) -> dict:
        return {
            "halted": self.halted,
            "checks": [c.to_dict() for c in self.checks],
        }
