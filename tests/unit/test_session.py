"""
Unit tests for the WorkoutSession store.
"""

import pytest

from application.session import WorkoutSession
from domain.models import (
    ConfirmAll,
    DeviceId,
    EditorCommandError,
    LoadValidation,
    MoveBlock,
    SelectDevice,
    ValidationResponse,
)


@pytest.mark.unit
class TestWorkoutSession:
    def test_initial_workout_identified(self):
        session = WorkoutSession(workout={"blocks": [{"label": "A", "exercises": [{"name": "Squat"}]}]})
        snapshot = session.get()
        assert snapshot.workout.blocks[0].id
        assert snapshot.workout.blocks[0].exercises[0].id

    def test_edit_command_updates_workout(self, identified_workout):
        session = WorkoutSession(workout=identified_workout)
        snapshot = session.apply({"op": "move_block", "source_index": 1, "target_index": 0})
        assert [b.label for b in snapshot.workout.blocks] == ["Main", "Warm-up"]
        assert session.get() is snapshot

    def test_noop_returns_same_snapshot_without_notifying(self, identified_workout):
        session = WorkoutSession(workout=identified_workout)
        calls = []
        session.subscribe(calls.append)
        before = session.get()
        assert session.apply(MoveBlock(source_index=0, target_index=0)) is before
        assert calls == []

    def test_listeners_notified_and_unsubscribed(self, identified_workout):
        session = WorkoutSession(workout=identified_workout)
        calls = []
        unsubscribe = session.subscribe(calls.append)
        session.apply(MoveBlock(source_index=1, target_index=0))
        unsubscribe()
        session.apply(MoveBlock(source_index=1, target_index=0))
        assert len(calls) == 1

    def test_reconciliation_flow(self, identified_workout, validation_payload):
        session = WorkoutSession(workout=identified_workout)
        session.apply(LoadValidation(validation=ValidationResponse.model_validate(validation_payload)))
        assert session.can_export is False

        session.apply({"op": "apply_mapping", "name": "Wall Thing", "mapped_to": "Wall Sit"})
        session.apply(ConfirmAll())
        assert session.can_export is True

    def test_projected_workout_for_selected_device(self, identified_workout):
        session = WorkoutSession(workout=identified_workout)
        session.apply(
            LoadValidation(
                validation=ValidationResponse.model_validate(
                    {
                        "validated_exercises": [
                            {"original_name": "Bench Press", "mapped_to": "Barbell Bench Press"}
                        ]
                    }
                )
            )
        )
        session.apply(ConfirmAll())
        session.apply(SelectDevice(device="GARMIN"))
        assert session.get().device == DeviceId.GARMIN

        bench = session.projected_workout().blocks[1].exercises[0]
        assert bench.name == "Barbell Bench Press"
        assert bench.notes == "Original: Bench Press"

    def test_unknown_device_keeps_selection(self, identified_workout):
        session = WorkoutSession(workout=identified_workout, device=DeviceId.APPLE)
        before = session.get()
        assert session.apply(SelectDevice(device="nokia")) is before

    def test_invalid_command_raises(self, identified_workout):
        session = WorkoutSession(workout=identified_workout)
        with pytest.raises(EditorCommandError):
            session.apply({"op": "teleport"})
