"""
Run report — the aggregate of everything a bootstrap run produced.

``ReportBuilder`` is filled in stage by stage by the bootstrap use
case.  ``ReportBuilder.build()`` stamps the finish time, computes the
verdict and returns a frozen ``BootstrapReport``; the emitted report
is never mutated afterwards.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from winbootstrap.core.models.check import ProbeResult
from winbootstrap.core.models.repo import DependencyResult, RepoState
from winbootstrap.core.models.restore import RestorePointOutcome, RestorePointResult
from winbootstrap.core.models.tool import ToolStatus

# Tools whose success defines a SUCCESS verdict (besides the repository).
TOOLCHAIN_MANAGER = "uv"
RUNTIME = "python"


class Verdict(str, Enum):
    SUCCESS = "SUCCESS"
    PARTIAL = "PARTIAL"
    FAILED = "FAILED"
    HALTED = "HALTED"


_EXIT_CODES = {
    Verdict.SUCCESS: 0,
    Verdict.PARTIAL: 0,
    Verdict.HALTED: 1,
    Verdict.FAILED: 2,
}


def compute_verdict(
    probe: ProbeResult | None,
    tools: list[ToolStatus] | tuple[ToolStatus, ...],
    repo: RepoState | None,
) -> Verdict:
    """Overall run verdict.

    SUCCESS  toolchain manager and runtime installed, repository synced
    PARTIAL  repository present but some tool missing, or its pull failed
    FAILED   anything else
    HALTED   the probe found a blocking failure
    """
    if probe is not None and probe.halted:
        return Verdict.HALTED

    by_name = {t.tool: t for t in tools}
    repo_ok = repo is not None and repo.present
    synced = repo_ok and repo.error is None

    def _installed(name: str) -> bool:
        status = by_name.get(name)
        return status is not None and status.installed

    if synced and _installed(TOOLCHAIN_MANAGER) and _installed(RUNTIME):
        return Verdict.SUCCESS
    if repo_ok:
        return Verdict.PARTIAL
    return Verdict.FAILED


class BootstrapReport(BaseModel):
    """Final, immutable summary of one run."""

    model_config = ConfigDict(frozen=True)

    started_at: str
    finished_at: str
    elapsed_seconds: float
    verdict: Verdict

    probe: ProbeResult | None = None
    restore_point: RestorePointResult | None = None
    tools: tuple[ToolStatus, ...] = ()
    repo: RepoState | None = None
    dependencies: DependencyResult | None = None
    log_file: Path | None = None

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES[self.verdict]

    @property
    def failures(self) -> list[str]:
        """Every failure of the run, one line each."""
        lines: list[str] = []
        if self.probe is not None:
            for check in self.probe.failed_checks:
                lines.append(f"check {check.name}: {check.message}")
        rp = self.restore_point
        if rp is not None and rp.outcome == RestorePointOutcome.FAILED:
            lines.append(f"restore point: {self.restore_point.message}")
        for tool in self.tools:
            if not tool.installed:
                lines.append(f"tool {tool.tool}: {tool.detail or 'not installed'}")
        if self.repo is not None and self.repo.error:
            lines.append(f"repository: {self.repo.error}")
        if self.dependencies is not None and not self.dependencies.ok:
            lines.append(f"dependencies: {self.dependencies.message}")
        return lines

    def tool(self, name: str) -> ToolStatus | None:
        for status in self.tools:
            if status.tool == name:
                return status
        return None

    def to_dict(self) -> dict:
        return {
            "started_at": self.started_at,
            "finished_at": self.finished_at,
            "elapsed_seconds": self.elapsed_seconds,
            "verdict": self.verdict.value,
            "exit_code": self.exit_code,
            "probe": self.probe.to_dict() if self.probe else None,
            "restore_point": self.restore_point.to_dict() if self.restore_point else None,
            "tools": [t.to_dict() for t in self.tools],
            "repo": self.repo.to_dict() if self.repo else None,
            "dependencies": self.dependencies.to_dict() if self.dependencies else None,
            "log_file": str(self.log_file) if self.log_file else None,
            "failures": self.failures,
        }


@dataclass
class ReportBuilder:
    """Mutable accumulator used while the run is in progress."""

    log_file: Path | None = None
    started_at: str = field(default_factory=lambda: datetime.now(UTC).isoformat())
    probe: ProbeResult | None = None
    restore_point: RestorePointResult | None = None
    tools: list[ToolStatus] = field(default_factory=list)
    repo: RepoState | None = None
    dependencies: DependencyResult | None = None
    _start: float = field(default_factory=time.monotonic, repr=False)

    def add_tool(self, status: ToolStatus) -> None:
        self.tools.append(status)

    def build(self) -> BootstrapReport:
        elapsed = round(time.monotonic() - self._start, 2)
        return BootstrapReport(
            started_at=self.started_at,
            finished_at=datetime.now(UTC).isoformat(),
            elapsed_seconds=elapsed,
            verdict=compute_verdict(self.probe, self.tools, self.repo),
            probe=self.probe,
            restore_point=self.restore_point,
            tools=tuple(self.tools),
            repo=self.repo,
            dependencies=self.dependencies,
            log_file=self.log_file,
        )
