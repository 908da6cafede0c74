"""
Dependency materializer — install the roles and collections the
configuration repository declares in its ``requirements.yml``.

    no manifest                  → ok, nothing to do
    manifest, no ansible-galaxy  → not ok (warning)
    manifest + ansible-galaxy    → ok iff every galaxy invocation succeeds
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

import yaml

from winbootstrap.adapters.registry import AdapterRegistry
from winbootstrap.core.config.settings import BootstrapConfig
from winbootstrap.core.models.action import Action
from winbootstrap.core.models.repo import DependencyResult
from winbootstrap.core.observability.logging_config import log_success
from winbootstrap.core.services.tool_install.detection.presence import Which

logger = logging.getLogger(__name__)

GALAXY = "ansible-galaxy"


def count_requirements(manifest: Path) -> tuple[int, int] | None:
    """(roles, collections) declared in a galaxy requirements file.

    The legacy format is a bare list of roles.  Returns None when the
    file cannot be parsed.
    """
    try:
        data = yaml.safe_load(manifest.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Cannot parse %s: %s", manifest.name, e)
        return None

    if data is None:
        return 0, 0
    if isinstance(data, list):
        return len(data), 0
    if isinstance(data, dict):
        return len(data.get("roles") or []), len(data.get("collections") or [])
    return None


def materialize_dependencies(
    repo_path: Path,
    config: BootstrapConfig,
    registry: AdapterRegistry,
    which: Which = shutil.which,
) -> DependencyResult:
    """Install declared roles/collections inside ``repo_path``."""
    manifest = repo_path / config.manifest_name
    if not manifest.is_file():
        logger.info("No %s in %s — no dependencies to install",
                    config.manifest_name, repo_path)
        return DependencyResult(ok=True, message="no manifest")

    if which(GALAXY) is None:
        logger.warning("%s found but %s is not available", manifest.name, GALAXY)
        return DependencyResult(ok=False, manifest=manifest,
                                message=f"{GALAXY} not available")

    counts = count_requirements(manifest)
    roles, collections = counts if counts is not None else (0, 0)
    if counts is not None:
        logger.info("%s declares %d role(s) and %d collection(s)",
                    manifest.name, roles, collections)

    # Unparsable manifests are still handed to ansible-galaxy
    steps: list[tuple[str, list[str]]] = []
    if counts is None or roles:
        steps.append(("roles", ["role", "install", "-r", str(manifest)]))
    if counts is None or collections:
        steps.append(("collections", ["collection", "install", "-r", str(manifest)]))
    if not steps:
        logger.info("%s declares nothing to install", manifest.name)
        return DependencyResult(ok=True, manifest=manifest, message="nothing declared")

    errors: list[str] = []
    for kind, args in steps:
        receipt = registry.execute_action(
            Action(
                id=f"galaxy:{kind}",
                name=f"Install Ansible {kind}",
                adapter="shell",
                params={"argv": [GALAXY, *args]},
            ),
            cwd=str(repo_path),
            timeout=config.install_timeout,
        )
        if not receipt.ok:
            logger.error("%s %s failed: %s", GALAXY, kind, receipt.error)
            errors.append(f"{kind}: {receipt.error_summary}")

    if errors:
        return DependencyResult(ok=False, ran=True, manifest=manifest,
                                roles=roles, collections=collections,
                                message="; ".join(errors))

    log_success(logger, "Ansible dependencies installed")
    return DependencyResult(ok=True, ran=True, manifest=manifest,
                            roles=roles, collections=collections,
                            message="installed")
