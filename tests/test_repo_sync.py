"""
Tests for repository sync — clone vs pull, failure reporting.
"""

from winbootstrap.core.models.repo import SyncAction
from winbootstrap.core.services.repo_sync import sync_repository
from tests.conftest import FakeHost


class TestSyncRepository:
    def test_git_unavailable(self, config):
        host = FakeHost()
        state = sync_repository(config, host.registry, git_available=False)

        assert not state.present
        assert state.sync_action == SyncAction.NONE
        assert state.error == "git is not installed"
        assert host.git.call_count == 0

    def test_clone_when_missing(self, config):
        host = FakeHost()
        state = sync_repository(config, host.registry, git_available=True)

        assert state.present
        assert state.sync_action == SyncAction.CLONE
        assert state.local_path == config.repo_dir
        assert config.repo_dir.parent.is_dir()

        ctx = host.git.call_log[0]
        assert ctx.action.id == "git:clone"
        assert ctx.action.params["url"] == config.repo_url
        assert ctx.action.params["dest"] == str(config.repo_dir)
        assert ctx.action.params["branch"] == "main"

    def test_pull_when_present(self, config):
        config.repo_dir.mkdir(parents=True)
        host = FakeHost()
        state = sync_repository(config, host.registry, git_available=True)

        assert state.present
        assert state.sync_action == SyncAction.PULL
        assert state.error is None
        assert host.git.called_ids() == ["git:pull"]
        assert host.git.call_log[0].working_dir == str(config.repo_dir)

    def test_failed_pull_keeps_existing_copy(self, config):
        config.repo_dir.mkdir(parents=True)
        host = FakeHost()
        host.git.set_failure("git:pull", "Could not resolve host: github.com")

        state = sync_repository(config, host.registry, git_available=True)

        assert state.present
        assert state.sync_action == SyncAction.PULL
        assert "Could not resolve host" in state.error

    def test_failed_clone(self, config):
        host = FakeHost()
        host.git.set_failure("git:clone", "Repository not found.")

        state = sync_repository(config, host.registry, git_available=True)

        assert not state.present
        assert state.sync_action == SyncAction.CLONE
        assert state.error == "Repository not found."

    def test_file_in_place_of_checkout(self, config):
        config.repo_dir.parent.mkdir(parents=True)
        config.repo_dir.write_text("not a repository", encoding="utf-8")
        host = FakeHost()

        state = sync_repository(config, host.registry, git_available=True)

        assert not state.present
        assert state.sync_action == SyncAction.NONE
        assert "not a directory" in state.error
        assert host.git.call_count == 0

    def test_to_dict(self, config):
        state = sync_repository(config, FakeHost().registry, git_available=True)
        assert state.to_dict() == {
            "local_path": str(config.repo_dir),
            "present": True,
            "sync_action": "CLONE",
            "error": None,
        }
