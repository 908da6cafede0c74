"""
L5 Orchestration — The tiered installer.

``TieredInstaller.ensure(tool)`` makes one tool present:

    1. already present             → method "preexisting", no attempt
    2. primary strategy            → verify → method = strategy name
    3. fallback strategy, if any   → verify → method = strategy name
    4. otherwise                   → installed False, method "none"

Each strategy is attempted at most once.  After every attempt the
process PATH is re-read from the machine and user scopes before the
tool is verified, since installers only update the registry.  A tool
that is missing and whose prerequisite (``requires``) is not installed
is skipped without any attempt.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable, Iterable

from winbootstrap.adapters.registry import AdapterRegistry
from winbootstrap.core.config.settings import BootstrapConfig
from winbootstrap.core.models.tool import ToolStatus
from winbootstrap.core.observability.logging_config import log_success
from winbootstrap.core.services.system.path_env import refresh_path as _refresh_path
from winbootstrap.core.services.tool_install.data.recipes import (
    INSTALL_ORDER,
    TOOL_RECIPES,
)
from winbootstrap.core.services.tool_install.detection.presence import Which, is_present
from winbootstrap.core.services.tool_install.detection.tool_version import (
    get_python_version,
    get_tool_version,
)
from winbootstrap.core.services.tool_install.execution.strategy import (
    attempt,
    build_strategies,
)

logger = logging.getLogger(__name__)


class TieredInstaller:
    """Ensures each tool of the chain, recording a ToolStatus per tool."""

    def __init__(
        self,
        config: BootstrapConfig,
        registry: AdapterRegistry,
        *,
        which: Which = shutil.which,
        refresh_path: Callable[[], object] = _refresh_path,
        recipes: dict[str, dict] | None = None,
    ):
        self.config = config
        self.registry = registry
        self._which = which
        self._refresh_path = refresh_path
        self._recipes = TOOL_RECIPES if recipes is None else recipes
        self._statuses: dict[str, ToolStatus] = {}

    @property
    def statuses(self) -> dict[str, ToolStatus]:
        return dict(self._statuses)

    def is_installed(self, tool_id: str) -> bool:
        status = self._statuses.get(tool_id)
        return status is not None and status.installed

    def ensure(self, tool_id: str) -> ToolStatus:
        """Make ``tool_id`` present.  Never raises."""
        recipe = self._recipes[tool_id]
        label = recipe.get("label", tool_id)
        try:
            status = self._ensure(tool_id, recipe, label)
        except Exception as e:
            logger.exception("Unexpected error while ensuring %s", label)
            status = ToolStatus.not_installed(tool_id, detail=f"unexpected error: {e}")
        self._statuses[tool_id] = status
        return status

    def ensure_all(self, order: Iterable[str] = INSTALL_ORDER) -> list[ToolStatus]:
        return [self.ensure(tool_id) for tool_id in order]

    # ── Internals ───────────────────────────────────────────────

    def _present(self, recipe: dict) -> bool:
        return is_present(recipe, self.config, self.registry, self._which)

    def _version(self, tool_id: str) -> str | None:
        if tool_id == "python":
            return get_python_version(
                self.config.python_version, self.registry, self.config.command_timeout,
            )
        return get_tool_version(tool_id, self.registry, self.config.command_timeout)

    def _ensure(self, tool_id: str, recipe: dict, label: str) -> ToolStatus:
        if self._present(recipe):
            version = self._version(tool_id)
            log_success(logger, "%s already installed%s", label,
                        f" ({version})" if version else "")
            return ToolStatus.preexisting(tool_id, version=version)

        required = recipe.get("requires")
        if required and not self.is_installed(required):
            reason = f"skipped: {required} is not installed"
            logger.warning("%s %s", label, reason)
            return ToolStatus.not_installed(tool_id, detail=reason)

        strategies = build_strategies(tool_id, recipe, self.config)
        last_error = "no install method defined"
        attempts = 0
        for strategy in strategies:
            attempts += 1
            logger.info("Installing %s via %s", label, strategy.name)
            result = attempt(strategy, self.registry, self._which,
                             self.config.install_timeout)
            self._refresh_path()

            if result.ok and self._present(recipe):
                version = self._version(tool_id)
                log_success(logger, "%s installed via %s%s", label, strategy.name,
                            f" ({version})" if version else "")
                return ToolStatus(
                    tool=tool_id,
                    installed=True,
                    method=strategy.name,
                    version=version,
                    attempts=attempts,
                )

            last_error = result.error or f"{label} not found after install"
            logger.warning("%s via %s failed: %s", label, strategy.name, last_error)

        logger.error("%s could not be installed", label)
        return ToolStatus.not_installed(tool_id, detail=last_error, attempts=attempts)
