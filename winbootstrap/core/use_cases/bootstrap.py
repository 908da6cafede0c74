"""
Bootstrap use case — the whole run, stage by stage.

    probe → restore point → tools → repository → dependencies → report

The probe is the only stage that can stop the run: a blocking check
failure returns a HALTED report before anything on the machine is
changed.  Every later failure is recorded and the run continues with
whatever still makes sense (no sync without git, no dependencies
without a repository).
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from pathlib import Path

from winbootstrap.adapters.registry import AdapterRegistry, default_registry
from winbootstrap.core.config.settings import BootstrapConfig
from winbootstrap.core.models.check import EnvironmentFacts, ProbeResult
from winbootstrap.core.models.report import BootstrapReport, ReportBuilder
from winbootstrap.core.services.dependencies import materialize_dependencies
from winbootstrap.core.services.probe import run_probe
from winbootstrap.core.services.repo_sync import sync_repository
from winbootstrap.core.services.restore_point import Confirmer, create_restore_point
from winbootstrap.core.services.system.path_env import refresh_path as _refresh_path
from winbootstrap.core.services.tool_install.data.recipes import INSTALL_ORDER
from winbootstrap.core.services.tool_install.detection.presence import Which
from winbootstrap.core.services.tool_install.orchestration.installer import TieredInstaller

logger = logging.getLogger(__name__)


def run_check(
    config: BootstrapConfig,
    registry: AdapterRegistry | None = None,
    facts: EnvironmentFacts | None = None,
) -> ProbeResult:
    """Run only the environment probe."""
    if registry is None:
        registry = default_registry(config.powershell_executable)
    return run_probe(config, registry, facts=facts)


def run_bootstrap(
    config: BootstrapConfig,
    confirmer: Confirmer,
    *,
    registry: AdapterRegistry | None = None,
    which: Which = shutil.which,
    refresh_path: Callable[[], object] = _refresh_path,
    facts: EnvironmentFacts | None = None,
    log_file: Path | None = None,
) -> BootstrapReport:
    """Execute the full workflow and return the final report.

    Args:
        config: Run configuration.
        confirmer: Answers the restore point question.
        registry: Adapter registry (default: real shell/PowerShell/git).
        which: Command resolver, ``shutil.which`` by default.
        refresh_path: Re-reads PATH after installer runs.
        facts: Pre-gathered environment facts (skips fact gathering).
        log_file: Run log path, recorded in the report.
    """
    if registry is None:
        registry = default_registry(config.powershell_executable)
    builder = ReportBuilder(log_file=log_file)

    # ── Probe ───────────────────────────────────────────────────
    logger.info("Validating environment")
    builder.probe = run_probe(config, registry, facts=facts)
    if builder.probe.halted:
        return builder.build()

    # ── Restore point ───────────────────────────────────────────
    builder.restore_point = create_restore_point(config, registry, confirmer)

    # ── Tools ───────────────────────────────────────────────────
    installer = TieredInstaller(config, registry, which=which, refresh_path=refresh_path)
    for tool_id in INSTALL_ORDER:
        builder.add_tool(installer.ensure(tool_id))

    # ── Repository ──────────────────────────────────────────────
    builder.repo = sync_repository(config, registry, installer.is_installed("git"))

    # ── Dependencies ────────────────────────────────────────────
    if builder.repo.present:
        builder.dependencies = materialize_dependencies(
            builder.repo.local_path, config, registry, which=which,
        )
    else:
        logger.warning("Repository not available — skipping Ansible dependencies")

    report = builder.build()
    logger.info("Bootstrap finished: %s in %.1fs", report.verdict.value,
                report.elapsed_seconds)
    return report
