"""
Tests for configuration loading — defaults, YAML, overrides, errors.
"""

import textwrap
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from winbootstrap.core.config.settings import (
    CONFIG_ENV_VAR,
    BootstrapConfig,
    ConfigError,
    load_config,
)

SETTINGS = "winbootstrap.core.config.settings"


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "bootstrap.yml"
    path.write_text(textwrap.dedent(content))
    return path


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


class TestDefaults:
    def test_defaults(self, tmp_path):
        with patch(f"{SETTINGS}.resolve_documents_root", return_value=tmp_path):
            config = load_config()

        assert config.repo_dir == tmp_path / "workstation-config"
        assert config.repo_branch == "main"
        assert config.min_os_build == 17763
        assert config.min_shell_major == 5
        assert config.min_free_bytes == 2 * 1024 ** 3
        assert config.network_host == "8.8.8.8"
        assert config.allowed_policies == ("RemoteSigned", "Unrestricted", "Bypass")
        assert config.manifest_path == config.repo_dir / "requirements.yml"
        assert config.log_dir.parts[-2:] == ("winbootstrap", "logs")

    def test_project_folder_sets_repo_dir(self, tmp_path):
        with patch(f"{SETTINGS}.resolve_documents_root", return_value=tmp_path):
            config = BootstrapConfig(project_folder="infra")
        assert config.repo_dir == tmp_path / "infra"

    def test_frozen(self, config):
        with pytest.raises(ValidationError):
            config.repo_branch = "dev"


class TestLoadConfig:
    def test_yaml_merges_onto_defaults(self, tmp_path):
        path = _write(tmp_path, f"""\
            repo_url: https://example.com/ops/desktop.git
            repo_dir: {tmp_path / "desktop"}
            min_free_gib: 5
        """)
        config = load_config(path)

        assert config.repo_url == "https://example.com/ops/desktop.git"
        assert config.repo_dir == tmp_path / "desktop"
        assert config.min_free_gib == 5
        assert config.repo_branch == "main"

    def test_nested_bootstrap_key(self, tmp_path):
        path = _write(tmp_path, f"""\
            bootstrap:
              repo_branch: stable
              repo_dir: {tmp_path / "r"}
        """)
        assert load_config(path).repo_branch == "stable"

    def test_overrides_win(self, tmp_path):
        path = _write(tmp_path, f"""\
            repo_url: https://example.com/from-file.git
            repo_dir: {tmp_path / "r"}
        """)
        config = load_config(path, overrides={
            "repo_url": "https://example.com/from-cli.git",
            "repo_branch": None,
        })
        assert config.repo_url == "https://example.com/from-cli.git"
        assert config.repo_branch == "main"

    def test_env_var_path(self, tmp_path, monkeypatch):
        path = _write(tmp_path, f"repo_dir: {tmp_path / 'r'}\nping_count: 4\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert load_config().ping_count == 4

    def test_empty_file(self, tmp_path):
        path = _write(tmp_path, "")
        with patch(f"{SETTINGS}.resolve_documents_root", return_value=tmp_path):
            config = load_config(path)
        assert config.repo_branch == "main"

    def test_policies_as_comma_string(self, tmp_path):
        path = _write(tmp_path, f"""\
            repo_dir: {tmp_path / "r"}
            allowed_policies: "RemoteSigned, Bypass"
        """)
        assert load_config(path).allowed_policies == ("RemoteSigned", "Bypass")


class TestConfigErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path):
        path = _write(tmp_path, "repo_url: [broken\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = _write(tmp_path, "- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_unknown_key(self, tmp_path):
        path = _write(tmp_path, f"repo_dir: {tmp_path}\nrepo_ulr: typo\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)

    @pytest.mark.parametrize("line", [
        "min_free_gib: 0",
        "ping_count: 0",
        "install_timeout: -1",
        "allowed_policies: []",
    ])
    def test_invalid_values(self, tmp_path, line):
        path = _write(tmp_path, f"repo_dir: {tmp_path}\n{line}\n")
        with pytest.raises(ConfigError):
            load_config(path)
