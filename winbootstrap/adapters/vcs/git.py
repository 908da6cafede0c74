"""
Git adapter — clone and pull the configuration repository.

Uses the git CLI, resolved from PATH at call time so that a git
installed earlier in the same run is picked up.
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


class GitAdapter(Adapter):
    """Git operations.

    Action params:
        operation (str): 'clone' or 'pull'.
        url (str): Remote URL (for 'clone').
        dest (str): Destination directory (for 'clone').
        remote (str): Remote name (for 'pull', default: 'origin').
        branch (str): Branch to check out / pull.
        timeout (int): Timeout in seconds.
    """

    _OPERATIONS = {"clone", "pull"}

    @property
    def name(self) -> str:
        return "git"

    def is_available(self) -> bool:
        return shutil.which("git") is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        operation = context.action.params.get("operation", "")
        if operation not in self._OPERATIONS:
            return False, (
                f"Unknown operation '{operation}'. "
                f"Valid: {', '.join(sorted(self._OPERATIONS))}"
            )

        if operation == "clone":
            for key in ("url", "dest"):
                if not context.action.params.get(key):
                    return False, f"Missing required param: '{key}' for clone operation"

        if operation == "pull":
            cwd = context.working_dir
            if not cwd or not Path(cwd).is_dir():
                return False, f"Repository directory does not exist: {cwd}"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        operation = context.action.params["operation"]
        start = time.monotonic()
        try:
            if operation == "clone":
                output = self._clone(context)
            else:
                output = self._pull(context)
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"git {operation} timed out after {context.timeout}s",
            )
        except (RuntimeError, OSError) as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Git error: {e}",
            )

        return Receipt.success(
            adapter=self.name,
            action_id=context.action.id,
            output=output,
            duration_ms=int((time.monotonic() - start) * 1000),
            metadata={"operation": operation},
        )

    # ── Operations ──────────────────────────────────────────────

    def _clone(self, ctx: ExecutionContext) -> str:
        params = ctx.action.params
        args = ["clone"]
        if params.get("branch"):
            args += ["--branch", params["branch"]]
        args += [params["url"], params["dest"]]
        return self._git(args, ctx.working_dir, ctx.timeout)

    def _pull(self, ctx: ExecutionContext) -> str:
        params = ctx.action.params
        args = ["pull", params.get("remote", "origin")]
        if params.get("branch"):
            args.append(params["branch"])
        return self._git(args, ctx.working_dir, ctx.timeout)

    # ── Helpers ─────────────────────────────────────────────────

    def _git(self, args: list[str], cwd: str | None, timeout: int) -> str:
        """Run a git command and return stdout."""
        git = shutil.which("git")
        if git is None:
            raise RuntimeError("git executable not found on PATH")
        logger.debug("git %s (cwd=%s)", " ".join(args), cwd)
        result = subprocess.run(
            [git, *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            stdin=subprocess.DEVNULL,
        )
        if result.returncode != 0:
            raise RuntimeError(result.stderr.strip() or f"git {args[0]} failed")
        return result.stdout.strip()
