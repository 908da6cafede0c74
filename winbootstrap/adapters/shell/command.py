"""
Shell command adapter — run a program and capture its output.

Commands are argv lists, never shell strings: package ids and paths
go to the installer verbatim.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from pathlib import Path

from winbootstrap.adapters.base import Adapter, ExecutionContext
from winbootstrap.core.models.action import Receipt

logger = logging.getLogger(__name__)

# Installer output can be huge (progress bars); keep the tail only.
_OUTPUT_TAIL = 4000


class ShellCommandAdapter(Adapter):
    """Execute a command and capture output.

    Action params:
        argv (list[str]): The command to execute.
        cwd (str): Override working directory.
        timeout (int): Timeout in seconds (default: context timeout).
    """

    @property
    def name(self) -> str:
        return "shell"

    def is_available(self) -> bool:
        return True

    def build_argv(self, context: ExecutionContext) -> list[str]:
        return list(context.action.params.get("argv") or [])

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        argv = self.build_argv(context)
        if not argv:
            return False, "Missing required param: 'argv'"

        cwd = context.working_dir
        if cwd and not Path(cwd).is_dir():
            return False, f"Working directory does not exist: {cwd}"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        argv = self.build_argv(context)
        timeout = context.action.params.get("timeout", context.timeout)
        cwd = context.working_dir
        action_id = context.action.id

        if shutil.which(argv[0]) is None:
            return Receipt.failure(
                adapter=self.name,
                action_id=action_id,
                error=f"Command not found: {argv[0]}",
                metadata={"argv": argv},
            )

        logger.debug("Executing: %s (cwd=%s)", " ".join(argv), cwd)
        start = time.monotonic()

        try:
            result = subprocess.run(
                argv,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=timeout,
                stdin=subprocess.DEVNULL,
            )
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                adapter=self.name,
                action_id=action_id,
                error=f"Command timed out after {timeout}s",
                metadata={"argv": argv, "timeout": timeout},
            )
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=action_id,
                error=f"Command execution error: {e}",
                metadata={"argv": argv},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        output = (result.stdout or "").strip()[-_OUTPUT_TAIL:]
        stderr = (result.stderr or "").strip()[-_OUTPUT_TAIL:]

        if result.returncode == 0:
            return Receipt.success(
                adapter=self.name,
                action_id=action_id,
                output=output,
                duration_ms=elapsed_ms,
                return_code=0,
                metadata={"argv": argv, "stderr": stderr},
            )

        return Receipt.failure(
            adapter=self.name,
            action_id=action_id,
            error=stderr or output or f"Command exited with code {result.returncode}",
            output=output,
            duration_ms=elapsed_ms,
            return_code=result.returncode,
            metadata={"argv": argv},
        )
