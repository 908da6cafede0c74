"""
PowerShell adapter — run a script block through Windows PowerShell.
"""

from __future__ import annotations

import shutil

from winbootstrap.adapters.base import ExecutionContext
from winbootstrap.adapters.shell.command import ShellCommandAdapter


class PowerShellAdapter(ShellCommandAdapter):
    """Execute a PowerShell script block.

    Action params:
        script (str): Script text passed to ``-Command``.
        bypass (bool): Add ``-ExecutionPolicy Bypass`` (default: True).
            Queries about the execution policy itself must pass False,
            otherwise they only ever see the process-scope override.
        timeout (int): Timeout in seconds.
    """

    def __init__(self, executable: str = "powershell"):
        self._executable = executable

    @property
    def name(self) -> str:
        return "powershell"

    def is_available(self) -> bool:
        return shutil.which(self._executable) is not None

    def build_argv(self, context: ExecutionContext) -> list[str]:
        script = context.action.params.get("script", "")
        if not script:
            return []
        argv = [self._executable, "-NoProfile", "-NonInteractive"]
        if context.action.params.get("bypass", True):
            argv += ["-ExecutionPolicy", "Bypass"]
        return argv + ["-Command", script]
