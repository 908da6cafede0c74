"""
Configuration — the immutable settings every component receives.

``load_config`` is called once at startup.  It merges, in precedence
order, explicit overrides (CLI flags), an optional YAML file and the
built-in defaults, then validates the result into a frozen
``BootstrapConfig``.  Nothing reads configuration from globals after
that: components get the config object passed in.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from winbootstrap.core.services.system.documents import resolve_documents_root

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "WINBOOTSTRAP_CONFIG"

DEFAULT_REPO_URL = "https://github.com/ansible-windows/workstation-config.git"
DEFAULT_PROJECT_FOLDER = "workstation-config"


class ConfigError(Exception):
    """Raised when configuration is invalid or unreadable."""


def default_log_dir() -> Path:
    """``%TEMP%/winbootstrap/logs``."""
    return Path(tempfile.gettempdir()) / "winbootstrap" / "logs"


class BootstrapConfig(BaseModel):
    """Settings for one bootstrap run.  Frozen after construction."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # ── Repository ───────────────────────────────────────────────
    repo_url: str = DEFAULT_REPO_URL
    repo_branch: str = "main"
    project_folder: str = DEFAULT_PROJECT_FOLDER
    repo_dir: Path
    manifest_name: str = "requirements.yml"

    # ── Toolchain ────────────────────────────────────────────────
    python_version: str = "3.12"
    powershell_executable: str = "powershell"

    # ── Probe thresholds ─────────────────────────────────────────
    min_os_build: int = 17763          # Windows 10 1809, oldest Winget host
    min_shell_major: int = 5
    min_free_gib: float = 2.0
    allowed_policies: tuple[str, ...] = ("RemoteSigned", "Unrestricted", "Bypass")
    network_host: str = "8.8.8.8"
    ping_count: int = Field(default=2, ge=1)

    # ── Restore point ────────────────────────────────────────────
    restore_point_name: str = "winbootstrap pre-install checkpoint"

    # ── Logging ──────────────────────────────────────────────────
    log_dir: Path = Field(default_factory=default_log_dir)

    # ── Timeouts (seconds) ───────────────────────────────────────
    network_timeout: int = Field(default=15, gt=0)
    install_timeout: int = Field(default=900, gt=0)
    command_timeout: int = Field(default=60, gt=0)

    @model_validator(mode="before")
    @classmethod
    def _resolve_repo_dir(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("repo_dir"):
            folder = data.get("project_folder") or DEFAULT_PROJECT_FOLDER
            data = {**data, "repo_dir": resolve_documents_root() / folder}
        return data

    @field_validator("min_free_gib")
    @classmethod
    def _positive_space(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("min_free_gib must be positive")
        return v

    @field_validator("allowed_policies", mode="before")
    @classmethod
    def _policies(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = [p.strip() for p in v.split(",")]
        if not v:
            raise ValueError("allowed_policies must not be empty")
        return tuple(v)

    @property
    def min_free_bytes(self) -> int:
        return int(self.min_free_gib * 1024 ** 3)

    @property
    def manifest_path(self) -> Path:
        return self.repo_dir / self.manifest_name


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Allow everything nested under a top-level "bootstrap" key
    if isinstance(data.get("bootstrap"), dict):
        data = data["bootstrap"]
    return data


def load_config(
    path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> BootstrapConfig:
    """Build the run configuration.

    Args:
        path: Optional YAML file.  Falls back to ``$WINBOOTSTRAP_CONFIG``.
        overrides: Values that win over the file (CLI flags).

    Raises:
        ConfigError: If the file is unreadable or a value is invalid.
    """
    if path is None and os.environ.get(CONFIG_ENV_VAR):
        path = Path(os.environ[CONFIG_ENV_VAR])

    data: dict[str, Any] = _read_yaml(path) if path is not None else {}
    data.update({k: v for k, v in (overrides or {}).items() if v is not None})

    try:
        config = BootstrapConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    logger.debug("Repository target: %s -> %s", config.repo_url, config.repo_dir)
    return config
