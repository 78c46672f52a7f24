"""
Unit tests for the copy-on-write structural editor.
"""

import random

import pytest

from domain.models import (
    Block,
    BlockStructure,
    BlockUpdates,
    ConfirmAll,
    DropTarget,
    Exercise,
    ExerciseRef,
    MoveBlock,
    RestOverride,
    RestType,
    Superset,
    WorkoutSettings,
    WorkoutStructure,
)
from domain.services import (
    add_block,
    add_exercise,
    add_superset,
    apply_edit,
    change_block_structure,
    count_all_exercises,
    delete_block,
    delete_exercise,
    delete_superset,
    ensure_ids,
    has_all_ids,
    move_block,
    move_exercise,
    set_rest_override,
    update_block,
    update_exercise,
    update_settings,
)


def _doc(*blocks: Block) -> WorkoutStructure:
    return ensure_ids(WorkoutStructure(title="Test", blocks=list(blocks)))


def _names(exercises):
    return [ex.name for ex in exercises]


def _assert_dense(block: Block):
    positions = sorted(
        [ex.position for ex in block.exercises] + [ss.position for ss in block.supersets]
    )
    assert positions == list(range(len(positions)))


@pytest.mark.unit
class TestMoveBlock:
    """Block reordering with raw drop indexes."""

    def _three_blocks(self):
        return _doc(Block(label="A"), Block(label="B"), Block(label="C"))

    def test_forward_move_adjusts_for_removal(self):
        doc = self._three_blocks()
        moved = move_block(doc, 0, 2)
        assert [b.label for b in moved.blocks] == ["B", "A", "C"]

    def test_backward_move(self):
        doc = self._three_blocks()
        moved = move_block(doc, 2, 0)
        assert [b.label for b in moved.blocks] == ["C", "A", "B"]

    def test_move_to_end(self):
        doc = self._three_blocks()
        moved = move_block(doc, 0, 3)
        assert [b.label for b in moved.blocks] == ["B", "C", "A"]

    def test_drop_on_own_slot_is_noop(self):
        doc = self._three_blocks()
        assert move_block(doc, 1, 1) is doc
        assert move_block(doc, 0, 1) is doc

    def test_stale_source_is_noop(self):
        doc = self._three_blocks()
        assert move_block(doc, 5, 0) is doc

    def test_blocks_are_shared(self):
        doc = self._three_blocks()
        moved = move_block(doc, 0, 2)
        assert moved.blocks[0] is doc.blocks[1]


@pytest.mark.unit
class TestAddExercise:
    """Appending to block-level lists and supersets."""

    def test_append_block_level(self):
        doc = _doc(Block(label="A", exercises=[Exercise(name="Squat")]))
        result = add_exercise(doc, 0, Exercise(name="Lunge"))
        assert _names(result.blocks[0].exercises) == ["Squat", "Lunge"]
        assert has_all_ids(result)

    def test_block_with_only_superset_appends_after_it(self):
        """An exercise added next to a superset lands after the superset."""
        doc = _doc(Block(label="A", supersets=[Superset(exercises=[Exercise(name="Row")])]))
        result = add_exercise(doc, 0, Exercise(name="Curl"))
        block = result.blocks[0]
        assert block.exercise_names == ["Row", "Curl"]
        assert block.supersets[0].position == 0
        assert block.exercises[0].position == 1

    def test_append_to_superset(self, identified_workout):
        result = add_exercise(identified_workout, 1, {"name": "Fly", "reps": 15}, superset_index=0)
        superset = result.blocks[1].supersets[0]
        assert _names(superset.exercises) == ["Curl", "Pushdown", "Fly"]
        assert superset.exercises[-1].position is None
        assert has_all_ids(result)

    def test_colliding_id_replaced(self, identified_workout):
        result = add_exercise(identified_workout, 0, Exercise(id="e-bench", name="Copy"))
        added = result.blocks[0].exercises[-1]
        assert added.id != "e-bench"

    def test_stale_block_is_noop(self, identified_workout):
        assert add_exercise(identified_workout, 9, Exercise(name="X")) is identified_workout

    def test_stale_superset_is_noop(self, identified_workout):
        result = add_exercise(identified_workout, 1, Exercise(name="X"), superset_index=4)
        assert result is identified_workout

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "X", "reps": 5, "reps_range": "8-12"},
            {"name": "X", "sets": -1},
        ],
    )
    def test_invalid_dict_is_noop(self, identified_workout, payload):
        assert add_exercise(identified_workout, 0, payload) is identified_workout

    def test_input_not_mutated(self, identified_workout):
        before = identified_workout.model_dump()
        add_exercise(identified_workout, 1, Exercise(name="Fly"))
        assert identified_workout.model_dump() == before

    def test_untouched_blocks_shared(self, identified_workout):
        result = add_exercise(identified_workout, 1, Exercise(name="Fly"))
        assert result.blocks[0] is identified_workout.blocks[0]


@pytest.mark.unit
class TestMoveExercise:
    """Drag-and-drop of exercises between containers."""

    def _flat(self):
        return _doc(
            Block(
                label="A",
                exercises=[Exercise(name="A"), Exercise(name="B"), Exercise(name="C")],
            )
        )

    def test_forward_move_within_list(self):
        """Target index 2 becomes 1 once the source is removed."""
        doc = self._flat()
        result = move_exercise(
            doc, ExerciseRef(block_index=0, exercise_index=0), DropTarget(block_index=0, raw_index=2)
        )
        assert _names(result.blocks[0].exercises) == ["B", "A", "C"]
        _assert_dense(result.blocks[0])

    def test_move_to_end_clamped(self):
        doc = self._flat()
        result = move_exercise(
            doc, ExerciseRef(block_index=0, exercise_index=0), DropTarget(block_index=0, raw_index=10)
        )
        assert _names(result.blocks[0].exercises) == ["B", "C", "A"]

    def test_backward_move_within_list(self):
        doc = self._flat()
        result = move_exercise(
            doc, ExerciseRef(block_index=0, exercise_index=2), DropTarget(block_index=0, raw_index=0)
        )
        assert _names(result.blocks[0].exercises) == ["C", "A", "B"]

    def test_same_slot_is_noop(self):
        doc = self._flat()
        result = move_exercise(
            doc, ExerciseRef(block_index=0, exercise_index=1), DropTarget(block_index=0, raw_index=2)
        )
        assert result is doc

    def test_reorder_keeps_superset_slot(self, identified_workout):
        result = move_exercise(
            identified_workout,
            ExerciseRef(block_index=1, exercise_index=1),
            DropTarget(block_index=1, raw_index=0),
        )
        block = result.blocks[1]
        assert block.exercise_names == ["Row", "Curl", "Pushdown", "Bench Press"]
        assert block.supersets[0].position == 1

    def test_move_into_superset(self, identified_workout):
        result = move_exercise(
            identified_workout,
            ExerciseRef(block_index=1, exercise_index=0),
            DropTarget(block_index=1, raw_index=0, superset_index=0),
        )
        block = result.blocks[1]
        assert _names(block.supersets[0].exercises) == ["Bench Press", "Curl", "Pushdown"]
        assert block.supersets[0].exercises[0].position is None
        assert _names(block.exercises) == ["Row"]
        _assert_dense(block)

    def test_move_out_of_superset(self, identified_workout):
        result = move_exercise(
            identified_workout,
            ExerciseRef(block_index=1, exercise_index=1, superset_index=0),
            DropTarget(block_index=0, raw_index=0),
        )
        assert _names(result.blocks[0].exercises) == ["Pushdown", "Jumping Jacks"]
        assert _names(result.blocks[1].supersets[0].exercises) == ["Curl"]
        _assert_dense(result.blocks[0])

    def test_move_across_blocks(self, identified_workout):
        result = move_exercise(
            identified_workout,
            ExerciseRef(block_index=0, exercise_index=0),
            DropTarget(block_index=1, raw_index=1),
        )
        assert result.blocks[0].exercises == []
        assert result.blocks[1].exercise_names == [
            "Bench Press",
            "Curl",
            "Pushdown",
            "Jumping Jacks",
            "Row",
        ]
        _assert_dense(result.blocks[1])

    def test_move_keeps_id(self, identified_workout):
        result = move_exercise(
            identified_workout,
            ExerciseRef(block_index=0, exercise_index=0),
            DropTarget(block_index=1, raw_index=0),
        )
        assert result.blocks[1].exercises[0].id == "e-jj"

    def test_stale_source_is_noop(self, identified_workout):
        result = move_exercise(
            identified_workout,
            ExerciseRef(block_index=0, exercise_index=7),
            DropTarget(block_index=1, raw_index=0),
        )
        assert result is identified_workout


@pytest.mark.unit
class TestSupersets:
    def test_add_after_last_superset(self, identified_workout):
        result = add_superset(identified_workout, 1)
        block = result.blocks[1]
        assert len(block.supersets) == 2
        new = block.supersets[-1]
        assert new.exercises == []
        assert new.rest_between_sec == 60
        assert new.position == 2
        assert [e.kind for e in block.entries()] == ["exercise", "superset", "superset", "exercise"]
        _assert_dense(block)

    def test_add_after_first_exercise(self):
        doc = _doc(Block(exercises=[Exercise(name="A"), Exercise(name="B")]))
        block = add_superset(doc, 0).blocks[0]
        assert [e.kind for e in block.entries()] == ["exercise", "superset", "exercise"]

    def test_add_to_empty_block(self):
        doc = _doc(Block(label="Empty"))
        block = add_superset(doc, 0).blocks[0]
        assert block.supersets[0].position == 0
        assert block.supersets[0].id

    def test_delete_removes_members(self, identified_workout):
        result = delete_superset(identified_workout, 1, 0)
        block = result.blocks[1]
        assert block.supersets == []
        assert _names(block.exercises) == ["Bench Press", "Row"]
        assert count_all_exercises(result) == 3
        _assert_dense(block)

    def test_delete_stale_is_noop(self, identified_workout):
        assert delete_superset(identified_workout, 1, 3) is identified_workout
        assert delete_superset(identified_workout, 4, 0) is identified_workout


@pytest.mark.unit
class TestDeleteAndUpdateExercise:
    def test_delete_block_level(self, identified_workout):
        result = delete_exercise(identified_workout, 1, 0)
        block = result.blocks[1]
        assert _names(block.exercises) == ["Row"]
        _assert_dense(block)

    def test_delete_superset_member(self, identified_workout):
        result = delete_exercise(identified_workout, 1, 0, superset_index=0)
        assert _names(result.blocks[1].supersets[0].exercises) == ["Pushdown"]

    def test_delete_stale_is_noop(self, identified_workout):
        assert delete_exercise(identified_workout, 1, 5) is identified_workout

    def test_update_fields(self, identified_workout):
        result = update_exercise(identified_workout, 1, 0, {"reps": 6, "notes": "pause"})
        ex = result.blocks[1].exercises[0]
        assert (ex.reps, ex.notes, ex.id) == (6, "pause", "e-bench")

    def test_update_ignores_id_and_position(self, identified_workout):
        result = update_exercise(identified_workout, 1, 0, {"id": "hijack", "position": 9})
        assert result is identified_workout

    def test_update_invalid_values_is_noop(self, identified_workout):
        assert update_exercise(identified_workout, 1, 0, {"sets": -3}) is identified_workout

    def test_update_superset_member(self, identified_workout):
        result = update_exercise(identified_workout, 1, 1, {"reps_range": "10-15"}, superset_index=0)
        member = result.blocks[1].supersets[0].exercises[1]
        assert member.reps is None
        assert member.reps_range == "10-15"


@pytest.mark.unit
class TestBlockEdits:
    def test_add_block_defaults(self, identified_workout):
        result = add_block(identified_workout)
        assert result.blocks[-1].label == "New Block"
        assert result.blocks[-1].id

    def test_add_block_clones_with_fresh_ids(self, identified_workout):
        source = identified_workout.blocks[1]
        result = add_block(identified_workout, source, index=0)
        assert result.blocks[0].id != source.id
        assert result.blocks[0].exercise_names == source.exercise_names
        assert has_all_ids(result)

    def test_delete_block(self, identified_workout):
        result = delete_block(identified_workout, 0)
        assert [b.label for b in result.blocks] == ["Main"]
        assert delete_block(identified_workout, 3) is identified_workout

    def test_update_block_applies_rest_to_every_exercise(self, identified_workout):
        result = update_block(
            identified_workout,
            1,
            BlockUpdates(label="Strength", rest_type=RestType.BUTTON, rest_sec=90, sets=3),
        )
        block = result.blocks[1]
        assert block.label == "Strength"
        for ex in block.ordered_exercises():
            assert ex.rest_type == RestType.BUTTON
            assert ex.rest_sec is None
            assert ex.sets == 3

    def test_update_block_reps_need_toggle(self, identified_workout):
        result = update_block(identified_workout, 1, BlockUpdates(reps=20))
        assert result is identified_workout

    def test_change_structure_resets_parameters(self, identified_workout):
        result = change_block_structure(identified_workout, 1, BlockStructure.TABATA)
        block = result.blocks[1]
        assert block.structure == BlockStructure.TABATA
        assert (block.rounds, block.time_work_sec, block.time_rest_sec) == (8, 20, 10)
        assert change_block_structure(result, 1, BlockStructure.TABATA) is result

    def test_set_rest_override(self, identified_workout):
        override = RestOverride(enabled=True, rest_type=RestType.TIMED, rest_sec=45)
        result = set_rest_override(identified_workout, 0, override)
        assert result.blocks[0].rest_override == override
        assert set_rest_override(result, 0, override) is result

    def test_update_settings(self, identified_workout):
        settings = WorkoutSettings(default_rest_type=RestType.TIMED, default_rest_sec=60)
        result = update_settings(identified_workout, title="Push", settings=settings)
        assert result.title == "Push"
        assert result.settings == settings
        assert update_settings(result, title="Push") is result


@pytest.mark.unit
class TestApplyEdit:
    def test_dispatches_commands(self, identified_workout):
        result = apply_edit(identified_workout, MoveBlock(source_index=1, target_index=0))
        assert [b.label for b in result.blocks] == ["Main", "Warm-up"]

    def test_rejects_reconciliation_commands(self, identified_workout):
        with pytest.raises(TypeError):
            apply_edit(identified_workout, ConfirmAll())

    def test_unidentified_noop_returns_repaired_document(self):
        doc = WorkoutStructure(blocks=[Block(label="A")])
        result = move_block(doc, 0, 0)
        assert result is not doc
        assert has_all_ids(result)


@pytest.mark.unit
class TestRandomEditSequences:
    """Invariants that hold for any sequence of moves."""

    def _random_ref(self, rng, doc):
        block_index = rng.randrange(len(doc.blocks))
        block = doc.blocks[block_index]
        containers = [None] + list(range(len(block.supersets)))
        superset_index = rng.choice(containers)
        size = (
            len(block.exercises)
            if superset_index is None
            else len(block.supersets[superset_index].exercises)
        )
        return block_index, superset_index, size

    @pytest.mark.parametrize("seed", [1, 7, 42, 2024])
    def test_moves_conserve_exercises_and_ids(self, seed, identified_workout):
        rng = random.Random(seed)
        doc = add_superset(identified_workout, 0)
        expected_ids = sorted(ex.id for ex in doc.iter_exercises())

        for _ in range(60):
            if rng.random() < 0.2:
                doc = move_block(
                    doc, rng.randrange(len(doc.blocks)), rng.randrange(len(doc.blocks) + 1)
                )
                continue
            src_block, src_ss, src_size = self._random_ref(rng, doc)
            if src_size == 0:
                continue
            dst_block, dst_ss, dst_size = self._random_ref(rng, doc)
            doc = move_exercise(
                doc,
                ExerciseRef(
                    block_index=src_block,
                    exercise_index=rng.randrange(src_size),
                    superset_index=src_ss,
                ),
                DropTarget(
                    block_index=dst_block,
                    raw_index=rng.randrange(dst_size + 1),
                    superset_index=dst_ss,
                ),
            )

            assert sorted(ex.id for ex in doc.iter_exercises()) == expected_ids
            assert has_all_ids(doc)
            for block in doc.blocks:
                _assert_dense(block)
                assert all(ex.position is None for ss in block.supersets for ex in ss.exercises)
