"""
Structural editing of a workout document.

Every operation is pure: it takes a document and returns a new document,
copying only the chain it touches (document -> block -> exercise list or
superset -> exercise list). Untouched blocks, supersets and exercises are
shared with the input.

Stale or out-of-range references never raise. The operation logs a warning
and returns the input document itself, so callers detect a no-op with
``result is doc``.

Ordering inside a block:
    Block-level exercises and supersets share one display order through their
    ``position`` field. Positions are kept dense (0..n-1) after every edit.
    Exercise indexes used by the operations below index the block-level
    ``exercises`` list (stored in position order) or a superset's
    ``exercises`` list.
"""

import logging
from typing import Any, List, Optional, Sequence, Set, Tuple, Union

from pydantic import ValidationError

from domain.models import (
    AddBlock,
    AddExercise,
    AddSuperset,
    Block,
    BlockStructure,
    BlockUpdates,
    ChangeBlockStructure,
    DeleteBlock,
    DeleteExercise,
    DeleteSuperset,
    DropTarget,
    Exercise,
    ExerciseRef,
    MoveBlock,
    MoveExercise,
    RestOverride,
    RestType,
    SetRestOverride,
    Superset,
    UpdateBlock,
    UpdateExercise,
    UpdateSettings,
    WorkoutSettings,
    WorkoutStructure,
)
from domain.services.block_defaults import structure_defaults
from domain.services.identity import clone_block, ensure_ids, generate_id

logger = logging.getLogger(__name__)

NEW_SUPERSET_REST_SEC = 60

Positioned = Union[Exercise, Superset]


# =============================================================================
# Helpers
# =============================================================================


def _same_items(a: Sequence[Any], b: Sequence[Any]) -> bool:
    return len(a) == len(b) and all(x is y for x, y in zip(a, b))


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def _at(item: Positioned, position: Optional[int]) -> Positioned:
    if item.position == position:
        return item
    return item.model_copy(update={"position": position})


def _renumber(block: Block) -> Block:
    """Lay out block entries densely in display order (legacy blocks included)."""
    exercises: List[Exercise] = []
    supersets: List[Superset] = []
    for position, entry in enumerate(block.entries()):
        item = _at(entry.item, position)
        if entry.kind == "exercise":
            exercises.append(item)
        else:
            supersets.append(item)

    if _same_items(exercises, block.exercises) and _same_items(supersets, block.supersets):
        return block
    return block.model_copy(update={"exercises": exercises, "supersets": supersets})


def _shift_from(block: Block, slot: int) -> Block:
    """Open ``slot`` by moving every entry at or after it one place later."""

    def shift(item):
        return _at(item, item.position + 1) if item.position >= slot else item

    return block.model_copy(
        update={
            "exercises": [shift(ex) for ex in block.exercises],
            "supersets": [shift(ss) for ss in block.supersets],
        }
    )


def _replace_block(doc: WorkoutStructure, index: int, block: Block) -> WorkoutStructure:
    if doc.blocks[index] is block:
        return doc
    blocks = list(doc.blocks)
    blocks[index] = block
    return doc.model_copy(update={"blocks": blocks})


def _resolve_block(doc: WorkoutStructure, block_index: int, op: str) -> Optional[Block]:
    if 0 <= block_index < len(doc.blocks):
        return doc.blocks[block_index]
    logger.warning(
        f"{op}: block index {block_index} out of range "
        f"({len(doc.blocks)} blocks); ignoring"
    )
    return None


def _container(
    block: Block, superset_index: Optional[int], op: str
) -> Optional[List[Exercise]]:
    """Exercise list of the block (superset_index None) or of one superset."""
    if superset_index is None:
        return list(block.exercises)
    if 0 <= superset_index < len(block.supersets):
        return list(block.supersets[superset_index].exercises)
    logger.warning(
        f"{op}: superset index {superset_index} out of range "
        f"({len(block.supersets)} supersets in block {block.label!r}); ignoring"
    )
    return None


def _with_superset_exercises(
    block: Block, superset_index: int, exercises: List[Exercise]
) -> Block:
    supersets = list(block.supersets)
    supersets[superset_index] = supersets[superset_index].model_copy(
        update={"exercises": exercises}
    )
    return block.model_copy(update={"supersets": supersets})


def _remove_exercise(
    block: Block, index: int, superset_index: Optional[int]
) -> Tuple[Block, Exercise]:
    """Remove one exercise from a (renumbered) block; index must be valid."""
    if superset_index is None:
        exercises = list(block.exercises)
        removed = exercises.pop(index)
        block = _renumber(block.model_copy(update={"exercises": exercises}))
        return block, removed

    exercises = list(block.supersets[superset_index].exercises)
    removed = exercises.pop(index)
    return _with_superset_exercises(block, superset_index, exercises), removed


def _insert_exercise(
    block: Block, index: int, exercise: Exercise, superset_index: Optional[int]
) -> Block:
    """
    Insert into a (renumbered) block at a clamped index.

    Block-level inserts take the slot of the exercise currently at ``index``;
    appending takes the slot after every entry, so an exercise added to a
    block holding only supersets lands after them.
    """
    if superset_index is not None:
        exercises = list(block.supersets[superset_index].exercises)
        index = _clamp(index, 0, len(exercises))
        exercises.insert(index, _at(exercise, None))
        return _with_superset_exercises(block, superset_index, exercises)

    index = _clamp(index, 0, len(block.exercises))
    if index < len(block.exercises):
        slot = block.exercises[index].position
    else:
        slot = len(block.exercises) + len(block.supersets)

    block = _shift_from(block, slot)
    exercises = list(block.exercises)
    exercises.insert(index, _at(exercise, slot))
    return block.model_copy(update={"exercises": exercises})


def _document_ids(doc: WorkoutStructure) -> Set[str]:
    ids: Set[str] = set()
    for block in doc.blocks:
        ids.add(block.id)
        ids.update(ex.id for ex in block.exercises)
        for ss in block.supersets:
            ids.add(ss.id)
            ids.update(ex.id for ex in ss.exercises)
    return ids


def _identified(exercise: Union[Exercise, dict], taken: Set[str]) -> Exercise:
    if isinstance(exercise, dict):
        exercise = Exercise.model_validate(exercise)
    if not exercise.id or exercise.id in taken:
        return exercise.model_copy(update={"id": generate_id()})
    return exercise


# =============================================================================
# Counting
# =============================================================================


def count_all_exercises(doc: Optional[WorkoutStructure]) -> int:
    """Block-level exercises plus superset members across the whole document."""
    if doc is None:
        return 0
    return sum(block.exercise_count for block in doc.blocks)


# =============================================================================
# Blocks
# =============================================================================


def move_block(doc: WorkoutStructure, source_index: int, target_index: int) -> WorkoutStructure:
    """
    Move the block at ``source_index`` to the raw drop index ``target_index``.

    Removing the source shifts later blocks left by one, so a forward move
    inserts at ``target_index - 1``.
    """
    doc = ensure_ids(doc)
    if _resolve_block(doc, source_index, "move_block") is None:
        return doc
    if source_index == target_index:
        return doc

    insert_at = target_index - 1 if source_index < target_index else target_index
    insert_at = _clamp(insert_at, 0, len(doc.blocks) - 1)
    if insert_at == source_index:
        return doc

    blocks = list(doc.blocks)
    moved = blocks.pop(source_index)
    blocks.insert(insert_at, moved)
    logger.debug(f"Moved block {moved.label!r} from {source_index} to {insert_at}")
    return doc.model_copy(update={"blocks": blocks})


def add_block(
    doc: WorkoutStructure, block: Optional[Block] = None, index: Optional[int] = None
) -> WorkoutStructure:
    """Insert a freshly identified copy of ``block`` (or a new empty block)."""
    doc = ensure_ids(doc)
    if block is None:
        new_block = Block(id=generate_id(), label="New Block")
    else:
        new_block = _renumber(clone_block(block))
    blocks = list(doc.blocks)
    if index is None:
        blocks.append(new_block)
    else:
        blocks.insert(_clamp(index, 0, len(blocks)), new_block)
    return doc.model_copy(update={"blocks": blocks})


def delete_block(doc: WorkoutStructure, block_index: int) -> WorkoutStructure:
    doc = ensure_ids(doc)
    if _resolve_block(doc, block_index, "delete_block") is None:
        return doc
    blocks = list(doc.blocks)
    removed = blocks.pop(block_index)
    logger.debug(f"Deleted block {removed.label!r} ({removed.exercise_count} exercises)")
    return doc.model_copy(update={"blocks": blocks})


def update_block(
    doc: WorkoutStructure, block_index: int, updates: BlockUpdates
) -> WorkoutStructure:
    """
    Apply the block edit dialog to a block and all of its exercises.

    Rest and sets apply to every exercise, superset members included. Reps
    and rep ranges only apply when their toggle is set. Button rest clears
    ``rest_sec``.
    """
    doc = ensure_ids(doc)
    block = _resolve_block(doc, block_index, "update_block")
    if block is None:
        return doc

    changes = {}
    if updates.rest_type is not None:
        changes["rest_type"] = updates.rest_type
        changes["rest_sec"] = (
            None if updates.rest_type == RestType.BUTTON else updates.rest_sec
        )
    if updates.sets is not None:
        changes["sets"] = updates.sets
    if updates.apply_reps:
        changes["reps"] = updates.reps
    if updates.apply_reps_range:
        changes["reps_range"] = updates.reps_range

    def bulk(ex: Exercise) -> Exercise:
        return ex.with_changes(**changes) if changes else ex

    update = {
        "exercises": [bulk(ex) for ex in block.exercises],
        "supersets": [
            ss.model_copy(update={"exercises": [bulk(ex) for ex in ss.exercises]})
            for ss in block.supersets
        ]
        if changes
        else block.supersets,
    }
    if updates.label is not None:
        update["label"] = updates.label
    if updates.warmup is not None:
        update["warmup"] = updates.warmup

    new_block = block.model_copy(update=update)
    if new_block == block:
        return doc
    return _replace_block(doc, block_index, new_block)


def change_block_structure(
    doc: WorkoutStructure, block_index: int, structure: Optional[BlockStructure]
) -> WorkoutStructure:
    """Switch a block's structure, resetting its parameters to that structure's defaults."""
    doc = ensure_ids(doc)
    block = _resolve_block(doc, block_index, "change_block_structure")
    if block is None:
        return doc
    update = {"structure": structure, **structure_defaults(structure)}
    new_block = block.model_copy(update=update)
    if new_block == block:
        return doc
    return _replace_block(doc, block_index, new_block)


def set_rest_override(
    doc: WorkoutStructure, block_index: int, override: Optional[RestOverride]
) -> WorkoutStructure:
    doc = ensure_ids(doc)
    block = _resolve_block(doc, block_index, "set_rest_override")
    if block is None or block.rest_override == override:
        return doc
    return _replace_block(doc, block_index, block.model_copy(update={"rest_override": override}))


def update_settings(
    doc: WorkoutStructure,
    title: Optional[str] = None,
    settings: Optional[WorkoutSettings] = None,
) -> WorkoutStructure:
    """Update the workout title and/or workout-wide defaults."""
    doc = ensure_ids(doc)
    update = {}
    if title is not None and title != doc.title:
        update["title"] = title
    if settings is not None and settings != doc.settings:
        update["settings"] = settings
    return doc.model_copy(update=update) if update else doc


# =============================================================================
# Supersets
# =============================================================================


def add_superset(doc: WorkoutStructure, block_index: int) -> WorkoutStructure:
    """
    Add an empty superset to a block.

    It is placed right after the last superset, or right after the first
    block-level exercise when the block has no superset yet.
    """
    doc = ensure_ids(doc)
    block = _resolve_block(doc, block_index, "add_superset")
    if block is None:
        return doc

    block = _renumber(block)
    if block.supersets:
        slot = block.supersets[-1].position + 1
    elif block.exercises:
        slot = block.exercises[0].position + 1
    else:
        slot = 0

    block = _shift_from(block, slot)
    superset = Superset(
        id=generate_id(), exercises=[], rest_between_sec=NEW_SUPERSET_REST_SEC, position=slot
    )
    block = block.model_copy(update={"supersets": [*block.supersets, superset]})
    return _replace_block(doc, block_index, block)


def delete_superset(
    doc: WorkoutStructure, block_index: int, superset_index: int
) -> WorkoutStructure:
    """Remove a superset together with its exercises."""
    doc = ensure_ids(doc)
    block = _resolve_block(doc, block_index, "delete_superset")
    if block is None or _container(block, superset_index, "delete_superset") is None:
        return doc

    block = _renumber(block)
    supersets = list(block.supersets)
    removed = supersets.pop(superset_index)
    logger.debug(
        f"Deleted superset {removed.id} with {len(removed.exercises)} exercise(s)"
    )
    block = _renumber(block.model_copy(update={"supersets": supersets}))
    return _replace_block(doc, block_index, block)


# =============================================================================
# Exercises
# =============================================================================


def add_exercise(
    doc: WorkoutStructure,
    block_index: int,
    exercise: Union[Exercise, dict],
    superset_index: Optional[int] = None,
) -> WorkoutStructure:
    """
    Append an exercise to a block (after every existing entry) or to a superset.
    """
    doc = ensure_ids(doc)
    block = _resolve_block(doc, block_index, "add_exercise")
    if block is None:
        return doc
    block = _renumber(block)
    container = _container(block, superset_index, "add_exercise")
    if container is None:
        return doc

    try:
        exercise = _identified(exercise, _document_ids(doc))
    except ValidationError as e:
        logger.warning(f"add_exercise: rejected exercise: {e}")
        return doc
    block = _insert_exercise(block, len(container), exercise, superset_index)
    return _replace_block(doc, block_index, block)


def delete_exercise(
    doc: WorkoutStructure,
    block_index: int,
    exercise_index: int,
    superset_index: Optional[int] = None,
) -> WorkoutStructure:
    doc = ensure_ids(doc)
    block = _resolve_block(doc, block_index, "delete_exercise")
    if block is None:
        return doc
    block = _renumber(block)
    container = _container(block, superset_index, "delete_exercise")
    if container is None:
        return doc
    if not 0 <= exercise_index < len(container):
        logger.warning(
            f"delete_exercise: exercise index {exercise_index} out of range "
            f"({len(container)}); ignoring"
        )
        return doc

    block, removed = _remove_exercise(block, exercise_index, superset_index)
    logger.debug(f"Deleted exercise {removed.name!r}")
    return _replace_block(doc, block_index, block)


def update_exercise(
    doc: WorkoutStructure,
    block_index: int,
    exercise_index: int,
    changes: dict,
    superset_index: Optional[int] = None,
) -> WorkoutStructure:
    """
    Clone-replace one exercise with field changes.

    ``id`` and ``position`` cannot be changed. Setting one side of an
    exclusive pair (reps / reps_range, duration / distance) clears the other.
    """
    doc = ensure_ids(doc)
    block = _resolve_block(doc, block_index, "update_exercise")
    if block is None:
        return doc
    block = _renumber(block)
    container = _container(block, superset_index, "update_exercise")
    if container is None:
        return doc
    if not 0 <= exercise_index < len(container):
        logger.warning(
            f"update_exercise: exercise index {exercise_index} out of range "
            f"({len(container)}); ignoring"
        )
        return doc

    current = container[exercise_index]
    changes = {k: v for k, v in changes.items() if k not in ("id", "position")}
    try:
        updated = current.with_changes(**changes)
    except ValidationError as e:
        logger.warning(f"update_exercise: rejected changes for {current.name!r}: {e}")
        return doc
    if updated == current:
        return doc

    container[exercise_index] = updated
    if superset_index is None:
        block = block.model_copy(update={"exercises": container})
    else:
        block = _with_superset_exercises(block, superset_index, container)
    return _replace_block(doc, block_index, block)


def move_exercise(
    doc: WorkoutStructure, source: ExerciseRef, target: DropTarget
) -> WorkoutStructure:
    """
    Move an exercise between containers (block-level list or a superset).

    ``target.raw_index`` is the index reported by the drop zone. Within the
    same container a forward move inserts at ``raw_index - 1``. The final
    index is clamped into the container.
    """
    doc = ensure_ids(doc)
    source_block = _resolve_block(doc, source.block_index, "move_exercise")
    target_block = _resolve_block(doc, target.block_index, "move_exercise")
    if source_block is None or target_block is None:
        return doc
    source_block = _renumber(source_block)
    target_block = _renumber(target_block)

    source_list = _container(source_block, source.superset_index, "move_exercise")
    target_list = _container(target_block, target.superset_index, "move_exercise")
    if source_list is None or target_list is None:
        return doc
    if not 0 <= source.exercise_index < len(source_list):
        logger.warning(
            f"move_exercise: source index {source.exercise_index} out of range "
            f"({len(source_list)}); ignoring"
        )
        return doc

    same_container = (
        source.block_index == target.block_index
        and source.superset_index == target.superset_index
    )

    if same_container:
        insert_at = target.raw_index
        if source.exercise_index < insert_at:
            insert_at -= 1
        insert_at = _clamp(insert_at, 0, len(source_list) - 1)
        if insert_at == source.exercise_index:
            return doc

        moved = source_list.pop(source.exercise_index)
        source_list.insert(insert_at, moved)
        if source.superset_index is None:
            block = source_block
            # Reorder across the existing slots so supersets keep their places.
            slots = [ex.position for ex in block.exercises]
            reordered = [_at(ex, slot) for ex, slot in zip(source_list, slots)]
            block = block.model_copy(update={"exercises": reordered})
        else:
            block = _with_superset_exercises(source_block, source.superset_index, source_list)
        return _replace_block(doc, source.block_index, block)

    source_after, moved = _remove_exercise(
        source_block, source.exercise_index, source.superset_index
    )
    base = (
        source_after
        if target.block_index == source.block_index
        else target_block
    )
    target_after = _insert_exercise(base, target.raw_index, moved, target.superset_index)

    blocks = list(doc.blocks)
    blocks[source.block_index] = source_after
    blocks[target.block_index] = target_after
    logger.debug(
        f"Moved exercise {moved.name!r} from {source.model_dump()} to {target.model_dump()}"
    )
    return doc.model_copy(update={"blocks": blocks})


# =============================================================================
# Command dispatch
# =============================================================================


def apply_edit(doc: WorkoutStructure, command: Any) -> WorkoutStructure:
    """
    Apply one structural edit command.

    Returns the input document (same object) when the command is a no-op.

    Raises:
        TypeError: If ``command`` is not a structural edit command
    """
    if isinstance(command, MoveBlock):
        return move_block(doc, command.source_index, command.target_index)
    if isinstance(command, MoveExercise):
        return move_exercise(doc, command.source, command.target)
    if isinstance(command, AddExercise):
        return add_exercise(doc, command.block_index, command.exercise, command.superset_index)
    if isinstance(command, DeleteExercise):
        return delete_exercise(
            doc, command.block_index, command.exercise_index, command.superset_index
        )
    if isinstance(command, UpdateExercise):
        return update_exercise(
            doc,
            command.block_index,
            command.exercise_index,
            command.changes,
            command.superset_index,
        )
    if isinstance(command, AddSuperset):
        return add_superset(doc, command.block_index)
    if isinstance(command, DeleteSuperset):
        return delete_superset(doc, command.block_index, command.superset_index)
    if isinstance(command, AddBlock):
        return add_block(doc, command.block, command.index)
    if isinstance(command, DeleteBlock):
        return delete_block(doc, command.block_index)
    if isinstance(command, UpdateBlock):
        return update_block(doc, command.block_index, command.updates)
    if isinstance(command, ChangeBlockStructure):
        return change_block_structure(doc, command.block_index, command.structure)
    if isinstance(command, SetRestOverride):
        return set_rest_override(doc, command.block_index, command.override)
    if isinstance(command, UpdateSettings):
        return update_settings(doc, command.title, command.settings)
    raise TypeError(f"Not a structural edit command: {type(command).__name__}")
