"""
Restore-point guard — optional System Restore checkpoint before changes.

The operator is asked through a ``Confirmer``; anything but a yes
skips the step.  Creation is best-effort: a failure is reported and
the run continues.
"""

from __future__ import annotations

import logging
from typing import Protocol

from winbootstrap.adapters.registry import AdapterRegistry
from winbootstrap.core.config.settings import BootstrapConfig
from winbootstrap.core.models.action import Action
from winbootstrap.core.models.restore import RestorePointOutcome, RestorePointResult
from winbootstrap.core.observability.logging_config import log_success

logger = logging.getLogger(__name__)

PROMPT = "Create a system restore point before installing?"


class Confirmer(Protocol):
    """Answers a yes/no question."""

    def confirm(self, prompt: str) -> bool: ...


class StaticConfirmer:
    """Always gives the same answer (CLI flags, tests)."""

    def __init__(self, answer: bool):
        self.answer = answer
        self.prompts: list[str] = []

    def confirm(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        return self.answer


def _checkpoint_script(description: str) -> str:
    escaped = description.replace("'", "''")
    return (
        f"Checkpoint-Computer -Description '{escaped}' "
        "-RestorePointType 'MODIFY_SETTINGS' -ErrorAction Stop"
    )


def create_restore_point(
    config: BootstrapConfig,
    registry: AdapterRegistry,
    confirmer: Confirmer,
) -> RestorePointResult:
    """Ask, then try to create the checkpoint.  Never raises on failure."""
    if not confirmer.confirm(PROMPT):
        logger.info("Restore point skipped by operator")
        return RestorePointResult(outcome=RestorePointOutcome.SKIPPED,
                                  message="Skipped by operator")

    logger.info("Creating restore point '%s'", config.restore_point_name)
    receipt = registry.execute_action(
        Action(
            id="restore-point:create",
            name="Create restore point",
            adapter="powershell",
            params={"script": _checkpoint_script(config.restore_point_name)},
        ),
        timeout=config.install_timeout,
    )

    if receipt.ok:
        log_success(logger, "Restore point created")
        return RestorePointResult(outcome=RestorePointOutcome.CREATED,
                                  message=config.restore_point_name)

    logger.warning("Restore point could not be created: %s", receipt.error)
    return RestorePointResult(outcome=RestorePointOutcome.FAILED,
                              message=receipt.error_summary or "unknown error")
