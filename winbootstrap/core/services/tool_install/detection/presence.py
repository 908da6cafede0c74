"""
L3 Detection — Is a tool already installed?

Most tools are present when their CLI resolves on PATH.  Python is
present when ``uv python list --only-installed`` mentions the
requested version.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from winbootstrap.adapters.registry import AdapterRegistry
from winbootstrap.core.config.settings import BootstrapConfig
from winbootstrap.core.models.action import Action

Which = Callable[[str], str | None]


def uv_python_installed(
    config: BootstrapConfig,
    registry: AdapterRegistry,
    which: Which,
) -> bool:
    """Whether uv already manages the configured Python version."""
    if which("uv") is None:
        return False
    receipt = registry.execute_action(
        Action(
            id="detect:python",
            adapter="shell",
            params={"argv": ["uv", "python", "list", "--only-installed"]},
            for_tool="python",
        ),
        timeout=config.command_timeout,
    )
    if not receipt.ok:
        return False
    # cpython-3.12.7-windows-x86_64-none    C:\Users\...
    wanted = re.compile(rf"-{re.escape(config.python_version)}(?:[.+-]|$)")
    for line in receipt.output.splitlines():
        fields = line.split()
        if fields and wanted.search(fields[0]):
            return True
    return False


_PRESENCE_CHECKS: dict[str, Callable[[BootstrapConfig, AdapterRegistry, Which], bool]] = {
    "uv_python": uv_python_installed,
}


def is_present(
    recipe: dict,
    config: BootstrapConfig,
    registry: AdapterRegistry,
    which: Which,
) -> bool:
    """Run the recipe's presence check."""
    check_id = recipe.get("presence")
    if check_id:
        return _PRESENCE_CHECKS[check_id](config, registry, which)
    cli = recipe.get("cli")
    return bool(cli) and which(cli) is not None
