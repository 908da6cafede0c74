"""
Domain models — Pydantic types for the bootstrap run.

All models are re-exported here for convenient access:

    from winbootstrap.core.models import CheckResult, ToolStatus, RepoState
"""

from winbootstrap.core.models.action import Action, Receipt
from winbootstrap.core.models.check import (
    CheckResult,
    CheckStatus,
    EnvironmentFacts,
    ProbeResult,
)
from winbootstrap.core.models.repo import DependencyResult, RepoState, SyncAction
from winbootstrap.core.models.report import (
    BootstrapReport,
    ReportBuilder,
    Verdict,
    compute_verdict,
)
from winbootstrap.core.models.restore import RestorePointOutcome, RestorePointResult
from winbootstrap.core.models.tool import METHOD_NONE, METHOD_PREEXISTING, ToolStatus

__all__ = [
    # action.py
    "Action",
    "Receipt",
    # check.py
    "CheckResult",
    "CheckStatus",
    "EnvironmentFacts",
    "ProbeResult",
    # tool.py
    "METHOD_NONE",
    "METHOD_PREEXISTING",
    "ToolStatus",
    # repo.py
    "DependencyResult",
    "RepoState",
    "SyncAction",
    # restore.py
    "RestorePointOutcome",
    "RestorePointResult",
    # report.py
    "BootstrapReport",
    "ReportBuilder",
    "Verdict",
    "compute_verdict",
]
