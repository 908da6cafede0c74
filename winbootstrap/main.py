"""
winbootstrap — CLI entrypoint.

Usage:
    winbootstrap                 # full bootstrap run
    winbootstrap --no-restore-point --json
    winbootstrap check           # environment probe only
    python -m winbootstrap --help
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

import click

from winbootstrap import __version__
from winbootstrap.core.observability.logging_config import run_log_path, setup_logging

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV_VAR = "WINBOOTSTRAP_LOG_LEVEL"
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="winbootstrap")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Only show warnings and errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="YAML file overriding the defaults (default: $WINBOOTSTRAP_CONFIG).",
)
@click.option("--repo-url", default=None, help="Configuration repository to clone.")
@click.option(
    "--repo-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Local checkout location (default: <Documents>/<project folder>).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option(
    "--restore-point/--no-restore-point",
    default=None,
    help="Pre-answer the restore point question (default: ask).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    repo_url: str | None,
    repo_dir: str | None,
    as_json: bool,
    restore_point: bool | None,
) -> None:
    """Prepare a Windows machine to run an Ansible configuration repository."""
    from winbootstrap.core.config.settings import ConfigError, load_config

    ctx.ensure_object(dict)
    ctx.obj["as_json"] = as_json
    ctx.obj["restore_point"] = restore_point

    # ── Configuration ───────────────────────────────────────────
    overrides = {"repo_url": repo_url, "repo_dir": repo_dir}
    try:
        config = load_config(
            Path(config_path) if config_path else None,
            overrides=overrides,
        )
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(EXIT_CONFIG_ERROR)
    ctx.obj["config"] = config

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "WARN"
    else:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO")

    ctx.obj["log_file"] = setup_logging(level=level, log_file=run_log_path(config.log_dir))

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def run(ctx: click.Context, as_json: bool = False) -> None:
    """Run the full bootstrap (the default when no command is given)."""
    from winbootstrap.core.services.restore_point import StaticConfirmer
    from winbootstrap.core.use_cases.bootstrap import run_bootstrap
    from winbootstrap.ui.cli.prompts import ClickConfirmer
    from winbootstrap.ui.cli.report import render_report

    as_json = as_json or ctx.obj.get("as_json", False)
    answer = ctx.obj.get("restore_point")
    confirmer = ClickConfirmer() if answer is None else StaticConfirmer(answer)

    try:
        report = run_bootstrap(
            ctx.obj["config"],
            confirmer,
            log_file=ctx.obj.get("log_file"),
        )
    except (KeyboardInterrupt, click.Abort):
        logger.error("Interrupted by operator")
        click.secho("\n⛔ Interrupted", fg="red", err=True)
        sys.exit(EXIT_INTERRUPTED)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        render_report(report)
    sys.exit(report.exit_code)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, as_json: bool) -> None:
    """Run only the environment probe (changes nothing)."""
    from winbootstrap.core.use_cases.bootstrap import run_check
    from winbootstrap.ui.cli.report import render_checks

    as_json = as_json or ctx.obj.get("as_json", False)
    try:
        probe = run_check(ctx.obj["config"])
    except KeyboardInterrupt:
        click.secho("\n⛔ Interrupted", fg="red", err=True)
        sys.exit(EXIT_INTERRUPTED)

    if as_json:
        click.echo(json.dumps(probe.to_dict(), indent=2))
    else:
        render_checks(probe)
        click.echo()
        if probe.halted:
            click.secho("❌ Blocking prerequisites are not met", fg="red", bold=True)
        else:
            click.secho("✅ Ready to bootstrap", fg="green", bold=True)
        click.echo()
    sys.exit(1 if probe.halted else 0)


if __name__ == "__main__":
    cli()
