"""
Report rendering — the fixed-format run summary printed at the end.

Thin layer over ``BootstrapReport`` / ``ProbeResult``; all data comes
from the models, this module only decides colours and layout.
"""

from __future__ import annotations

import click

from winbootstrap.core.models.check import CheckStatus, ProbeResult
from winbootstrap.core.models.report import BootstrapReport, Verdict
from winbootstrap.core.models.restore import RestorePointOutcome
from winbootstrap.core.models.tool import METHOD_PREEXISTING

_CHECK_STYLE = {
    CheckStatus.PASS: ("✅", "green"),
    CheckStatus.WARN: ("⚠️ ", "yellow"),
    CheckStatus.FAIL: ("❌", "red"),
}

_VERDICT_COLOR = {
    Verdict.SUCCESS: "green",
    Verdict.PARTIAL: "yellow",
    Verdict.FAILED: "red",
    Verdict.HALTED: "red",
}

_RESTORE_COLOR = {
    RestorePointOutcome.CREATED: "green",
    RestorePointOutcome.SKIPPED: "white",
    RestorePointOutcome.FAILED: "yellow",
}


def _heading(text: str) -> None:
    click.echo()
    click.secho(f"   {text}", fg="white", bold=True)


def render_checks(probe: ProbeResult) -> None:
    """Print one line per prerequisite check."""
    _heading("Checks:")
    for check in probe.checks:
        icon, color = _CHECK_STYLE[check.status]
        click.secho(f"     {icon} {check.name:<18}", fg=color, nl=False)
        click.echo(f" {check.message}")


def render_report(report: BootstrapReport) -> None:
    """Print the full run summary."""
    click.secho("\n📋 Bootstrap report", fg="cyan", bold=True)

    if report.probe is not None:
        render_checks(report.probe)

    rp = report.restore_point
    if rp is not None:
        _heading("Restore point:")
        click.secho(f"     {rp.outcome.value}", fg=_RESTORE_COLOR[rp.outcome], nl=False)
        click.echo(f"  {rp.message}" if rp.message else "")

    if report.tools:
        _heading("Tools:")
        for tool in report.tools:
            if tool.installed:
                how = "already installed" if tool.method == METHOD_PREEXISTING \
                    else f"installed via {tool.method}"
                version = f" ({tool.version})" if tool.version else ""
                click.secho(f"     ✅ {tool.tool:<12}", fg="green", nl=False)
                click.echo(f" {how}{version}")
            else:
                color = "yellow" if tool.skipped else "red"
                click.secho(f"     ❌ {tool.tool:<12}", fg=color, nl=False)
                click.echo(f" {tool.detail or 'not installed'}")

    repo = report.repo
    if repo is not None:
        _heading("Repository:")
        color = "green" if repo.present and not repo.error else (
            "yellow" if repo.present else "red"
        )
        click.secho(f"     {repo.sync_action.value}", fg=color, nl=False)
        click.echo(f"  → {repo.local_path}")
        if repo.error:
            click.secho(f"     {repo.error}", fg=color)

    deps = report.dependencies
    if report.repo is not None:
        _heading("Dependencies:")
        if deps is None:
            click.secho("     skipped", fg="yellow")
        elif deps.ok:
            detail = deps.message
            if deps.ran:
                detail = f"{deps.roles} role(s), {deps.collections} collection(s) {deps.message}"
            click.secho(f"     ✅ {detail}", fg="green")
        else:
            click.secho(f"     ❌ {deps.message}", fg="yellow")

    failures = report.failures
    if failures:
        _heading("Failures:")
        for line in failures:
            click.echo(f"     • {line}")

    click.echo()
    click.echo(f"   Elapsed: {report.elapsed_seconds:.1f}s")
    if report.log_file:
        click.echo(f"   Log:     {report.log_file}")
    click.secho(f"   Verdict: {report.verdict.value}",
                fg=_VERDICT_COLOR[report.verdict], bold=True)
    click.echo()
