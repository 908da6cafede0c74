"""
Tests for adapter protocol, registry, mock, and shell adapters.
"""

import subprocess
from unittest.mock import patch

from winbootstrap.adapters.base import ExecutionContext
from winbootstrap.adapters.mock import MockAdapter
from winbootstrap.adapters.registry import AdapterRegistry, default_registry
from winbootstrap.adapters.shell.command import ShellCommandAdapter
from winbootstrap.adapters.shell.powershell import PowerShellAdapter
from winbootstrap.adapters.vcs.git import GitAdapter
from winbootstrap.core.models.action import Action, Receipt

# ── Protocol Tests ───────────────────────────────────────────────────


class TestExecutionContext:
    def test_working_dir_from_context(self):
        ctx = ExecutionContext(action=Action(id="t", adapter="shell"), cwd="/repo")
        assert ctx.working_dir == "/repo"

    def test_action_cwd_wins(self):
        ctx = ExecutionContext(
            action=Action(id="t", adapter="shell", params={"cwd": "/other"}),
            cwd="/repo",
        )
        assert ctx.working_dir == "/other"


# ── Mock Adapter Tests ───────────────────────────────────────────────


class TestMockAdapter:
    def test_default_success(self):
        mock = MockAdapter(adapter_name="test-mock")
        ctx = ExecutionContext(action=Action(id="op-1", adapter="test-mock"))
        receipt = mock.execute(ctx)
        assert receipt.ok
        assert mock.call_count == 1

    def test_custom_output(self):
        mock = MockAdapter()
        mock.set_output("op-1", "custom")
        receipt = mock.execute(ExecutionContext(action=Action(id="op-1", adapter="mock")))
        assert receipt.output == "custom"

    def test_set_failure(self):
        mock = MockAdapter()
        mock.set_failure("op-fail", error="Intentional failure")
        receipt = mock.execute(ExecutionContext(action=Action(id="op-fail", adapter="mock")))
        assert receipt.failed
        assert "Intentional failure" in receipt.error

    def test_effect_runs_on_success_only(self):
        mock = MockAdapter()
        hits: list[str] = []
        mock.on_execute("ok", lambda ctx: hits.append(ctx.action.id))
        mock.on_execute("bad", lambda ctx: hits.append(ctx.action.id))
        mock.set_failure("bad")

        mock.execute(ExecutionContext(action=Action(id="ok", adapter="mock")))
        mock.execute(ExecutionContext(action=Action(id="bad", adapter="mock")))
        assert hits == ["ok"]

    def test_called_ids_and_reset(self):
        mock = MockAdapter()
        for action_id in ("install:uv:winget:0", "version:uv", "install:git:winget:0"):
            mock.execute(ExecutionContext(action=Action(id=action_id, adapter="mock")))
        assert mock.called_ids("install:") == ["install:uv:winget:0", "install:git:winget:0"]
        mock.reset()
        assert mock.call_count == 0


# ── Registry Tests ───────────────────────────────────────────────────


class _ExplodingAdapter(MockAdapter):
    def execute(self, context):
        raise RuntimeError("boom")


class TestAdapterRegistry:
    def test_register_and_get(self):
        registry = AdapterRegistry()
        mock = MockAdapter(adapter_name="shell")
        registry.register(mock)
        assert registry.get("shell") is mock
        assert registry.list_adapters() == ["shell"]

    def test_unknown_adapter(self):
        receipt = AdapterRegistry().execute_action(Action(id="x", adapter="nope"))
        assert receipt.failed
        assert "No adapter registered" in receipt.error

    def test_execute_passes_cwd_and_timeout(self):
        registry = AdapterRegistry()
        mock = MockAdapter(adapter_name="shell")
        registry.register(mock)
        registry.execute_action(Action(id="x", adapter="shell"), cwd="/repo", timeout=42)
        assert mock.call_log[0].working_dir == "/repo"
        assert mock.call_log[0].timeout == 42

    def test_adapter_exception_becomes_receipt(self):
        registry = AdapterRegistry()
        registry.register(_ExplodingAdapter(adapter_name="shell"))
        receipt = registry.execute_action(Action(id="x", adapter="shell"))
        assert receipt.failed
        assert "boom" in receipt.error

    def test_adapter_status(self):
        registry = AdapterRegistry()
        registry.register(MockAdapter(adapter_name="git", available=False))
        assert registry.adapter_status()["git"]["available"] is False

    def test_default_registry(self):
        registry = default_registry("pwsh")
        assert sorted(registry.list_adapters()) == ["git", "powershell", "shell"]


# ── Real adapters: validation and argv only ──────────────────────────


class TestShellCommandAdapter:
    def test_missing_argv(self):
        ctx = ExecutionContext(action=Action(id="x", adapter="shell"))
        valid, error = ShellCommandAdapter().validate(ctx)
        assert not valid
        assert "argv" in error

    def test_missing_cwd(self, tmp_path):
        ctx = ExecutionContext(
            action=Action(id="x", adapter="shell", params={"argv": ["git", "status"]}),
            cwd=str(tmp_path / "missing"),
        )
        valid, error = ShellCommandAdapter().validate(ctx)
        assert not valid
        assert "does not exist" in error

    def test_command_not_found(self):
        ctx = ExecutionContext(action=Action(
            id="x", adapter="shell",
            params={"argv": ["definitely-not-a-real-command-xyz", "--version"]},
        ))
        receipt = ShellCommandAdapter().execute(ctx)
        assert receipt.failed
        assert receipt.error == "Command not found: definitely-not-a-real-command-xyz"


class TestPowerShellAdapter:
    def test_argv_with_bypass(self):
        ctx = ExecutionContext(action=Action(
            id="x", adapter="powershell", params={"script": "Get-Date"},
        ))
        assert PowerShellAdapter("pwsh").build_argv(ctx) == [
            "pwsh", "-NoProfile", "-NonInteractive",
            "-ExecutionPolicy", "Bypass", "-Command", "Get-Date",
        ]

    def test_argv_without_bypass(self):
        ctx = ExecutionContext(action=Action(
            id="x", adapter="powershell",
            params={"script": "Get-ExecutionPolicy", "bypass": False},
        ))
        argv = PowerShellAdapter().build_argv(ctx)
        assert "-ExecutionPolicy" not in argv
        assert argv[-1] == "Get-ExecutionPolicy"

    def test_empty_script_invalid(self):
        ctx = ExecutionContext(action=Action(id="x", adapter="powershell"))
        valid, _ = PowerShellAdapter().validate(ctx)
        assert not valid


class TestGitAdapter:
    def test_unknown_operation(self):
        ctx = ExecutionContext(action=Action(id="x", adapter="git",
                                             params={"operation": "rebase"}))
        valid, error = GitAdapter().validate(ctx)
        assert not valid
        assert "Unknown operation" in error

    def test_clone_requires_url_and_dest(self):
        ctx = ExecutionContext(action=Action(id="x", adapter="git",
                                             params={"operation": "clone", "url": "u"}))
        valid, error = GitAdapter().validate(ctx)
        assert not valid
        assert "dest" in error

    def test_pull_requires_existing_dir(self, tmp_path):
        params = {"operation": "pull"}
        missing = ExecutionContext(action=Action(id="x", adapter="git", params=params),
                                   cwd=str(tmp_path / "missing"))
        present = ExecutionContext(action=Action(id="x", adapter="git", params=params),
                                   cwd=str(tmp_path))
        assert not GitAdapter().validate(missing)[0]
        assert GitAdapter().validate(present)[0]

    def _run_git(self, params: dict, cwd: str, returncode: int = 0, stderr: str = ""):
        ctx = ExecutionContext(action=Action(id="x", adapter="git", params=params),
                               cwd=cwd, timeout=60)
        completed = subprocess.CompletedProcess(
            args=[], returncode=returncode, stdout="done\n", stderr=stderr,
        )
        module = "winbootstrap.adapters.vcs.git"
        with patch(f"{module}.shutil.which", return_value="C:\\git\\git.exe"), \
                patch(f"{module}.subprocess.run", return_value=completed) as run:
            receipt = GitAdapter().execute(ctx)
        return receipt, run

    def test_clone_argv(self, tmp_path):
        receipt, run = self._run_git(
            {"operation": "clone", "url": "https://example.org/cfg.git",
             "dest": str(tmp_path / "cfg"), "branch": "main"},
            cwd=str(tmp_path),
        )
        assert receipt.ok
        assert receipt.output == "done"
        args, kwargs = run.call_args
        assert args[0] == [
            "C:\\git\\git.exe", "clone", "--branch", "main",
            "https://example.org/cfg.git", str(tmp_path / "cfg"),
        ]
        assert kwargs["cwd"] == str(tmp_path)
        assert kwargs["timeout"] == 60

    def test_clone_without_branch(self, tmp_path):
        _, run = self._run_git(
            {"operation": "clone", "url": "u", "dest": "d"}, cwd=str(tmp_path),
        )
        assert run.call_args.args[0][1:] == ["clone", "u", "d"]

    def test_pull_argv(self, tmp_path):
        _, run = self._run_git(
            {"operation": "pull", "remote": "origin", "branch": "main"},
            cwd=str(tmp_path),
        )
        assert run.call_args.args[0][1:] == ["pull", "origin", "main"]

    def test_pull_defaults_to_origin(self, tmp_path):
        _, run = self._run_git({"operation": "pull"}, cwd=str(tmp_path))
        assert run.call_args.args[0][1:] == ["pull", "origin"]

    def test_nonzero_exit_is_failure(self, tmp_path):
        receipt, _ = self._run_git(
            {"operation": "pull"}, cwd=str(tmp_path),
            returncode=1, stderr="fatal: not a git repository\n",
        )
        assert receipt.failed
        assert receipt.error == "Git error: fatal: not a git repository"


class TestReceipt:
    def test_factories(self):
        assert Receipt.success(adapter="a", action_id="x").ok
        assert Receipt.failure(adapter="a", action_id="x", error="e").failed

    def test_error_summary_is_last_line(self):
        receipt = Receipt.failure(
            adapter="shell", action_id="x",
            error="Found an existing package...\nNo newer package versions are available.\n\n",
        )
        assert receipt.error_summary == "No newer package versions are available."
        assert Receipt.success(adapter="shell", action_id="x").error_summary == ""
