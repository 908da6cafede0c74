"""
Environment probe — the six prerequisite checks.

Each ``check_*`` function is pure: facts and config in, one
``CheckResult`` out.  ``evaluate`` runs all six in fixed order with no
short-circuiting, and ``run_probe`` gathers the facts, evaluates and
logs every result.

Checks 1-5 can FAIL and a FAIL halts the run before anything is
installed.  The execution-policy check only ever WARNs: the operator
already managed to start us.
"""

from __future__ import annotations

import logging

from winbootstrap.adapters.registry import AdapterRegistry
from winbootstrap.core.config.settings import BootstrapConfig
from winbootstrap.core.models.check import (
    CheckResult,
    CheckStatus,
    EnvironmentFacts,
    ProbeResult,
)
from winbootstrap.core.observability.logging_config import log_success
from winbootstrap.core.services.system.facts import gather_facts
from winbootstrap.core.services.system.windows import os_tier_name

logger = logging.getLogger(__name__)

_GIB = 1024 ** 3


def check_admin(facts: EnvironmentFacts) -> CheckResult:
    if facts.is_admin:
        return CheckResult(name="administrator", status=CheckStatus.PASS,
                           message="Running with administrator rights")
    return CheckResult(name="administrator", status=CheckStatus.FAIL,
                       message="Administrator rights required — re-run from an elevated shell")


def check_os_version(facts: EnvironmentFacts, config: BootstrapConfig) -> CheckResult:
    build = facts.os_build
    tier = os_tier_name(build)
    if build is None:
        return CheckResult(name="os_version", status=CheckStatus.FAIL,
                           message="Could not determine the Windows build number")
    if build >= config.min_os_build:
        return CheckResult(name="os_version", status=CheckStatus.PASS,
                           message=f"{tier} (build {build})")
    return CheckResult(
        name="os_version",
        status=CheckStatus.FAIL,
        message=f"{tier} (build {build}) is older than the minimum build {config.min_os_build}",
    )


def check_shell_version(facts: EnvironmentFacts, config: BootstrapConfig) -> CheckResult:
    major = facts.shell_major
    if major is None:
        return CheckResult(name="shell_version", status=CheckStatus.FAIL,
                           message="PowerShell version could not be determined")
    if major >= config.min_shell_major:
        return CheckResult(name="shell_version", status=CheckStatus.PASS,
                           message=f"PowerShell {major}")
    return CheckResult(
        name="shell_version",
        status=CheckStatus.FAIL,
        message=f"PowerShell {major} found, {config.min_shell_major} or newer required",
    )


def check_network(facts: EnvironmentFacts, config: BootstrapConfig) -> CheckResult:
    if facts.ping_replied:
        return CheckResult(name="network", status=CheckStatus.PASS,
                           message=f"{config.network_host} is reachable")
    return CheckResult(
        name="network",
        status=CheckStatus.FAIL,
        message=(
            f"No reply from {config.network_host} after {config.ping_count} pings "
            "(ICMP may be filtered)"
        ),
    )


def check_disk_space(facts: EnvironmentFacts, config: BootstrapConfig) -> CheckResult:
    volume = facts.system_volume or "system volume"
    if facts.free_bytes is None:
        return CheckResult(name="disk_space", status=CheckStatus.FAIL,
                           message=f"Could not read free space on {volume}")
    free_gib = facts.free_bytes / _GIB
    text = f"{free_gib:.2f} GiB free on {volume}"
    if facts.free_bytes >= config.min_free_bytes:
        return CheckResult(name="disk_space", status=CheckStatus.PASS, message=text)
    return CheckResult(
        name="disk_space",
        status=CheckStatus.FAIL,
        message=f"{text}, at least {config.min_free_gib:.2f} GiB required",
    )


def check_execution_policy(facts: EnvironmentFacts, config: BootstrapConfig) -> CheckResult:
    policy = facts.execution_policy
    allowed = {p.lower() for p in config.allowed_policies}
    if policy and policy.lower() in allowed:
        return CheckResult(name="execution_policy", status=CheckStatus.PASS,
                           message=f"Execution policy is {policy}", blocking=False)
    return CheckResult(
        name="execution_policy",
        status=CheckStatus.WARN,
        message=(
            f"Execution policy is {policy or 'unknown'}; "
            f"expected one of {', '.join(config.allowed_policies)}"
        ),
        blocking=False,
    )


def evaluate(facts: EnvironmentFacts, config: BootstrapConfig) -> ProbeResult:
    """Run all six checks, in order, without short-circuiting."""
    checks = (
        check_admin(facts),
        check_os_version(facts, config),
        check_shell_version(facts, config),
        check_network(facts, config),
        check_disk_space(facts, config),
        check_execution_policy(facts, config),
    )
    return ProbeResult(checks=checks, facts=facts)


def run_probe(
    config: BootstrapConfig,
    registry: AdapterRegistry,
    facts: EnvironmentFacts | None = None,
) -> ProbeResult:
    """Gather facts (unless given), evaluate and log every check."""
    if facts is None:
        facts = gather_facts(config, registry)
    result = evaluate(facts, config)

    for check in result.checks:
        if check.status == CheckStatus.PASS:
            log_success(logger, "%s: %s", check.name, check.message)
        elif check.status == CheckStatus.WARN:
            logger.warning("%s: %s", check.name, check.message)
        else:
            logger.error("%s: %s", check.name, check.message)

    if result.halted:
        logger.error(
            "Environment validation failed: %s",
            ", ".join(c.name for c in result.failed_checks),
        )
    return result
