"""
Unit tests for ReconcileMappingsUseCase.
"""

import pytest

from application.use_cases import ReconcileMappingsUseCase


@pytest.fixture
def use_case() -> ReconcileMappingsUseCase:
    return ReconcileMappingsUseCase()


@pytest.mark.unit
class TestReconcileMappingsUseCase:
    def test_apply_then_confirm_all(self, use_case, validation_payload):
        result = use_case.execute(
            validation=validation_payload,
            confirmed=[],
            commands=[
                {"op": "apply_mapping", "name": "Wall Thing", "mapped_to": "Wall Sit"},
                {"op": "confirm_all"},
            ],
        )
        assert result.success is True
        assert result.can_proceed is True
        assert result.final_can_export is True
        assert result.blocked_reason == ""
        assert result.confirmed == ["Bench Press", "Squat", "Wall Thing"]
        assert result.messages == ["Confirmed 2 mapping(s)"]
        assert result.validation.needs_review == []

    def test_confirmations_carried_between_calls(self, use_case, validation_payload):
        first = use_case.execute(
            validation=validation_payload,
            confirmed=[],
            commands=[{"op": "accept_mapping", "name": "Squat"}],
        )
        second = use_case.execute(
            validation=first.validation,
            confirmed=first.confirmed,
            commands=[],
        )
        assert second.confirmed == ["Squat"]

    def test_nothing_to_confirm_message(self, use_case):
        result = use_case.execute(
            validation={"validated_exercises": [{"original_name": "Plank", "mapped_to": "Plank"}]},
            confirmed=[],
            commands=[{"op": "confirm_all"}],
        )
        assert result.messages == ["All mappings are already confirmed"]
        assert result.final_can_export is True

    def test_unknown_name_message(self, use_case, validation_payload):
        result = use_case.execute(
            validation=validation_payload,
            confirmed=[],
            commands=[{"op": "accept_mapping", "name": "Ghost"}],
        )
        assert result.success is True
        assert result.messages == ["'Ghost' is not in any validation bucket"]

    def test_blocked_reason_reported(self, use_case, validation_payload):
        result = use_case.execute(validation=validation_payload, confirmed=[], commands=[])
        assert result.final_can_export is False
        assert result.blocked_reason == "Cannot export: 1 exercise(s) need to be mapped"

    def test_rejects_edit_commands(self, use_case, validation_payload):
        result = use_case.execute(
            validation=validation_payload,
            confirmed=[],
            commands=[{"op": "add_block"}],
        )
        assert result.success is False
        assert result.error == "Command validation failed"

    def test_custom_confidence(self, validation_payload):
        use_case = ReconcileMappingsUseCase(applied_confidence=0.9)
        result = use_case.execute(
            validation=validation_payload,
            confirmed=[],
            commands=[{"op": "apply_mapping", "name": "Squat", "mapped_to": "Goblet Squat"}],
        )
        assert result.validation.validated_exercises[-1].confidence == 0.9
