"""
Identity assignment and document fingerprints.

Every Block, Superset and Exercise below the document root must carry a
unique, non-empty ``id`` before an edit is accepted. ``ensure_ids`` is the
repair pass; it returns the input object itself when nothing needed fixing so
callers can keep comparing references.
"""

import logging
import random
import string
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional, Set, Tuple

from domain.converters import blocks_to_structure
from domain.models import Block, Exercise, Superset, WorkoutStructure

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase


def generate_id() -> str:
    """Return an id shaped ``<epoch-ms>-<9 base36 chars>``."""
    suffix = "".join(random.choices(_BASE36, k=9))
    return f"{int(time.time() * 1000)}-{suffix}"


def _coerce(doc: Any) -> WorkoutStructure:
    if isinstance(doc, WorkoutStructure):
        return doc
    return blocks_to_structure(doc)


def has_all_ids(doc: Optional[WorkoutStructure]) -> bool:
    """
    Deep check: every block, superset and exercise (superset members
    included) has a non-empty id, and no id is used twice.
    """
    if doc is None:
        return False
    seen: Set[str] = set()

    def _claim(node_id: Optional[str]) -> bool:
        if not node_id or node_id in seen:
            return False
        seen.add(node_id)
        return True

    for block in doc.blocks:
        if not _claim(block.id):
            return False
        for ex in block.exercises:
            if not _claim(ex.id):
                return False
        for ss in block.supersets:
            if not _claim(ss.id):
                return False
            for ex in ss.exercises:
                if not _claim(ex.id):
                    return False
    return True


class _IdAssigner:
    """Hands out ids, replacing missing and duplicate ones."""

    def __init__(self):
        self.seen: Set[str] = set()
        self.assigned = 0

    def resolve(self, node_id: Optional[str]) -> str:
        if node_id and node_id not in self.seen:
            self.seen.add(node_id)
            return node_id
        new_id = generate_id()
        while new_id in self.seen:
            new_id = generate_id()
        self.seen.add(new_id)
        self.assigned += 1
        return new_id

    def exercise(self, ex: Exercise) -> Exercise:
        new_id = self.resolve(ex.id)
        return ex if new_id == ex.id else ex.model_copy(update={"id": new_id})

    def superset(self, ss: Superset) -> Superset:
        new_id = self.resolve(ss.id)
        exercises = [self.exercise(ex) for ex in ss.exercises]
        if new_id == ss.id and all(a is b for a, b in zip(exercises, ss.exercises)):
            return ss
        return ss.model_copy(update={"id": new_id, "exercises": exercises})

    def block(self, block: Block) -> Block:
        new_id = self.resolve(block.id)
        exercises = [self.exercise(ex) for ex in block.exercises]
        supersets = [self.superset(ss) for ss in block.supersets]
        unchanged = (
            new_id == block.id
            and all(a is b for a, b in zip(exercises, block.exercises))
            and all(a is b for a, b in zip(supersets, block.supersets))
        )
        if unchanged:
            return block
        return block.model_copy(
            update={"id": new_id, "exercises": exercises, "supersets": supersets}
        )


def ensure_ids(doc: Any) -> WorkoutStructure:
    """
    Return a document where every node has a unique, non-empty id.

    A fully identified document is returned as-is (same object). Blocks that
    needed no repair are shared with the input. ``None`` or any non-object
    input normalizes to an empty-blocks document.

    Args:
        doc: WorkoutStructure, raw blocks JSON, or None

    Returns:
        A fully identified WorkoutStructure
    """
    workout = _coerce(doc)
    if has_all_ids(workout):
        return workout

    assigner = _IdAssigner()
    blocks = [assigner.block(block) for block in workout.blocks]
    logger.debug(f"Assigned {assigner.assigned} missing or duplicate id(s)")
    return workout.model_copy(update={"blocks": blocks})


def _fresh_exercise(ex: Exercise) -> Exercise:
    return ex.model_copy(update={"id": generate_id()})


def clone_block(block: Block) -> Block:
    """Deep copy of ``block`` with fresh ids throughout (library drops, duplication)."""
    return block.model_copy(
        update={
            "id": generate_id(),
            "exercises": [_fresh_exercise(ex) for ex in block.exercises],
            "supersets": [
                ss.model_copy(
                    update={
                        "id": generate_id(),
                        "exercises": [_fresh_exercise(ex) for ex in ss.exercises],
                    }
                )
                for ss in block.supersets
            ],
        }
    )


def create_empty_workout() -> WorkoutStructure:
    """A new manual workout with a single empty block."""
    return WorkoutStructure(
        title="New Workout",
        source="manual",
        blocks=[Block(id=generate_id(), label="Workout")],
    )


# =============================================================================
# Fingerprints and memoized summaries
# =============================================================================


def _exercise_fingerprint(ex: Exercise) -> Tuple:
    return (
        ex.id,
        ex.name,
        ex.position,
        ex.sets,
        ex.reps,
        ex.reps_range,
        ex.duration_sec,
        ex.distance_m,
        ex.distance_range,
        ex.rest_sec,
        ex.rest_type.value if ex.rest_type else None,
    )


def _block_fingerprint(block: Block) -> Tuple:
    return (
        block.id,
        block.label,
        block.structure.value if block.structure else None,
        block.rounds,
        block.sets,
        block.time_cap_sec,
        block.time_work_sec,
        block.time_rest_sec,
        block.rest_between_rounds_sec,
        block.rest_between_sets_sec,
        tuple(_exercise_fingerprint(ex) for ex in block.exercises),
        tuple(
            (
                ss.id,
                ss.position,
                ss.rounds,
                ss.rest_between_sec,
                tuple(_exercise_fingerprint(ex) for ex in ss.exercises),
            )
            for ss in block.supersets
        ),
    )


def document_fingerprint(doc: WorkoutStructure) -> Tuple:
    """
    Minimal, hashable description of the document's editable content.

    Two documents that are logically identical produce equal fingerprints
    even when they are distinct objects.
    """
    return (doc.title, tuple(_block_fingerprint(block) for block in doc.blocks))


@dataclass(frozen=True)
class WorkoutSummary:
    """Aggregate counts shown next to the editor."""

    block_count: int
    exercise_count: int
    superset_count: int
    all_identified: bool


@lru_cache(maxsize=256)
def _summary_from_fingerprint(fingerprint: Tuple) -> WorkoutSummary:
    _, blocks = fingerprint
    ids = []
    exercise_count = 0
    superset_count = 0
    for block in blocks:
        ids.append(block[0])
        block_exercises, supersets = block[-2], block[-1]
        exercise_count += len(block_exercises)
        ids.extend(ex[0] for ex in block_exercises)
        for ss in supersets:
            superset_count += 1
            ids.append(ss[0])
            exercise_count += len(ss[-1])
            ids.extend(ex[0] for ex in ss[-1])

    all_identified = all(ids) and len(set(ids)) == len(ids)
    return WorkoutSummary(
        block_count=len(blocks),
        exercise_count=exercise_count,
        superset_count=superset_count,
        all_identified=all_identified,
    )


def summarize(doc: WorkoutStructure) -> WorkoutSummary:
    """Summary counts, memoized on the document fingerprint."""
    return _summary_from_fingerprint(document_fingerprint(doc))
