"""
L3 Detection — Tool version checking.

Read-only probes: runs ``--version`` commands and parses output.
"""

from __future__ import annotations

import re

from winbootstrap.adapters.registry import AdapterRegistry
from winbootstrap.core.models.action import Action

VERSION_COMMANDS: dict[str, tuple[list[str], str]] = {
    "chocolatey": (["choco", "--version"],          r"(\d+\.\d+\.\d+)"),
    "winget":     (["winget", "--version"],         r"v?(\d+\.\d+\.\d+)"),
    "uv":         (["uv", "--version"],             r"uv\s+(\d+\.\d+\.\d+)"),
    "git":        (["git", "--version"],            r"git version\s+(\d+\.\d+\.\d+)"),
    "ansible":    (["ansible", "--version"],        r"ansible.*?(\d+\.\d+\.\d+)"),
}

_PYTHON_VERSION_RE = r"Python\s+(\d+\.\d+\.\d+)"


def _query(
    registry: AdapterRegistry,
    tool: str,
    argv: list[str],
    pattern: str,
    timeout: int,
) -> str | None:
    receipt = registry.execute_action(
        Action(id=f"version:{tool}", adapter="shell", params={"argv": argv}, for_tool=tool),
        timeout=timeout,
    )
    if not receipt.ok:
        return None
    match = re.search(pattern, receipt.output)
    return match.group(1) if match else None


def get_tool_version(
    tool: str,
    registry: AdapterRegistry,
    timeout: int = 30,
) -> str | None:
    """Installed version of a tool, or None if it can't be determined."""
    entry = VERSION_COMMANDS.get(tool)
    if not entry:
        return None
    argv, pattern = entry
    return _query(registry, tool, argv, pattern, timeout)


def get_python_version(
    python_version: str,
    registry: AdapterRegistry,
    timeout: int = 60,
) -> str | None:
    """Full version of the uv-managed interpreter (e.g. ``3.12.7``)."""
    argv = ["uv", "run", "--no-project", "--python", python_version,
            "python", "--version"]
    return _query(registry, "python", argv, _PYTHON_VERSION_RE, timeout)
