"""
Shared test fixtures and configuration.

``host`` is a fake Windows machine: a set of commands "on PATH", a
registry of mock adapters standing in for shell / PowerShell / git,
and a PATH refresh counter.
"""

import logging
from pathlib import Path

import pytest

from winbootstrap.adapters.base import ExecutionContext
from winbootstrap.adapters.mock import MockAdapter
from winbootstrap.adapters.registry import AdapterRegistry
from winbootstrap.core.config.settings import BootstrapConfig
from winbootstrap.core.models.check import EnvironmentFacts
from winbootstrap.core.observability.logging_config import ColourFormatter

GIB = 1024 ** 3

PYTHON_LISTING = "cpython-3.12.4-windows-x86_64-none    C:\\Users\\op\\AppData\\Roaming\\uv\\python"


class FakeHost:
    """Commands on PATH plus mock adapters, wired for the installer."""

    def __init__(self, *commands: str):
        self.commands: set[str] = set(commands)
        self.shell = MockAdapter("shell")
        self.powershell = MockAdapter("powershell")
        self.git = MockAdapter("git")
        self.registry = AdapterRegistry()
        for adapter in (self.shell, self.powershell, self.git):
            self.registry.register(adapter)
        self.refreshes = 0

    def which(self, name: str) -> str | None:
        if name in self.commands:
            return f"C:\\tools\\{name}.exe"
        return None

    def refresh_path(self) -> None:
        self.refreshes += 1

    def provides(self, *commands: str):
        """Effect: the given commands appear on PATH."""
        def _effect(_ctx: ExecutionContext) -> None:
            self.commands.update(commands)
        return _effect

    def install_attempts(self) -> list[str]:
        return (self.powershell.called_ids("install:")
                + self.shell.called_ids("install:"))

    def has_python(self, listing: str = PYTHON_LISTING) -> None:
        self.shell.set_output("detect:python", listing)


@pytest.fixture
def config(tmp_path: Path) -> BootstrapConfig:
    """Default config with repository and logs under tmp_path."""
    return BootstrapConfig(
        repo_dir=tmp_path / "Documents" / "workstation-config",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def host() -> FakeHost:
    """A machine with nothing installed."""
    return FakeHost()


@pytest.fixture
def good_facts() -> EnvironmentFacts:
    """Facts that pass every check."""
    return EnvironmentFacts(
        is_admin=True,
        os_build=22631,
        shell_major=5,
        ping_replied=True,
        free_bytes=50 * GIB,
        execution_policy="RemoteSigned",
        system_volume="C:\\",
    )


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Undo handlers installed by setup_logging (CLI tests)."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler, logging.FileHandler) or isinstance(
            handler.formatter, ColourFormatter
        ):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
