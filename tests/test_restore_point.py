"""
Tests for the restore-point guard.
"""

from winbootstrap.core.models.restore import RestorePointOutcome
from winbootstrap.core.services.restore_point import (
    PROMPT,
    StaticConfirmer,
    create_restore_point,
)
from tests.conftest import FakeHost


class TestCreateRestorePoint:
    def test_declined(self, config):
        host = FakeHost()
        confirmer = StaticConfirmer(False)

        result = create_restore_point(config, host.registry, confirmer)

        assert result.outcome == RestorePointOutcome.SKIPPED
        assert confirmer.prompts == [PROMPT]
        assert host.powershell.call_count == 0

    def test_created(self, config):
        host = FakeHost()
        result = create_restore_point(config, host.registry, StaticConfirmer(True))

        assert result.outcome == RestorePointOutcome.CREATED
        assert host.powershell.called_ids() == ["restore-point:create"]
        script = host.powershell.call_log[0].action.params["script"]
        assert script.startswith("Checkpoint-Computer -Description ")
        assert config.restore_point_name in script

    def test_failure_does_not_raise(self, config):
        host = FakeHost()
        host.powershell.set_failure(
            "restore-point:create",
            "Checkpoint-Computer : System Restore is disabled on this machine",
        )

        result = create_restore_point(config, host.registry, StaticConfirmer(True))

        assert result.outcome == RestorePointOutcome.FAILED
        assert "System Restore is disabled" in result.message

    def test_description_quotes_escaped(self, config):
        config = config.model_copy(update={"restore_point_name": "Bob's checkpoint"})
        host = FakeHost()
        create_restore_point(config, host.registry, StaticConfirmer(True))

        script = host.powershell.call_log[0].action.params["script"]
        assert "'Bob''s checkpoint'" in script
