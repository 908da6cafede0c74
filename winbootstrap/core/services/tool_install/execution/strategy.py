"""
L4 Execution — Install strategies.

A strategy is one way of installing a tool (winget, Chocolatey, uv,
a PowerShell script).  Recipes are turned into ordered strategy lists
here, and ``attempt`` runs one strategy's steps through the adapter
registry.  ``attempt`` reports failure through its return value; it
never raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from winbootstrap.adapters.registry import AdapterRegistry
from winbootstrap.core.config.settings import BootstrapConfig
from winbootstrap.core.models.action import Action
from winbootstrap.core.services.tool_install.detection.presence import Which

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstallStrategy:
    """One install method of one tool, with its actions ready to dispatch."""

    tool: str
    name: str
    actions: tuple[Action, ...]
    needs: str | None = None


@dataclass(frozen=True)
class AttemptResult:
    ok: bool
    error: str = ""
    executed: list[str] = field(default_factory=list)


def _render_template(value: str, variables: dict[str, str]) -> str:
    """Substitute ``{var}`` placeholders.  Simple replacement, no escaping."""
    for key, val in variables.items():
        value = value.replace(f"{{{key}}}", val)
    return value


def build_strategies(
    tool_id: str,
    recipe: dict,
    config: BootstrapConfig,
) -> list[InstallStrategy]:
    """Ordered strategies (primary first) for a recipe."""
    variables = {"python_version": config.python_version}
    strategies = []
    for method in recipe.get("methods", []):
        actions = []
        for index, step in enumerate(method["steps"]):
            if method["adapter"] == "powershell":
                params = {"script": _render_template(step, variables)}
            else:
                params = {"argv": [_render_template(a, variables) for a in step]}
            actions.append(
                Action(
                    id=f"install:{tool_id}:{method['name']}:{index}",
                    name=f"{recipe.get('label', tool_id)} via {method['name']}",
                    adapter=method["adapter"],
                    params=params,
                    for_tool=tool_id,
                )
            )
        strategies.append(
            InstallStrategy(
                tool=tool_id,
                name=method["name"],
                actions=tuple(actions),
                needs=method.get("needs"),
            )
        )
    return strategies


def attempt(
    strategy: InstallStrategy,
    registry: AdapterRegistry,
    which: Which,
    timeout: int,
) -> AttemptResult:
    """Run every step of a strategy; stop at the first failed step."""
    if strategy.needs and which(strategy.needs) is None:
        return AttemptResult(
            ok=False,
            error=f"{strategy.needs} is not available",
        )

    executed: list[str] = []
    for action in strategy.actions:
        logger.info("→ %s", action.name)
        receipt = registry.execute_action(action, timeout=timeout)
        executed.append(action.id)
        if not receipt.ok:
            return AttemptResult(
                ok=False,
                error=receipt.error_summary or f"{action.id} failed",
                executed=executed,
            )
    return AttemptResult(ok=True, executed=executed)
