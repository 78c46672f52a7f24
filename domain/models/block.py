"""
Block value object - a top-level section of a workout document.

A block owns two heterogeneous collections that share one display order:
block-level exercises and supersets. Each entry carries an explicit
``position``; ``Block.entries()`` merges both collections sorted by it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

from domain.models.exercise import Exercise, RestType
from domain.models.superset import Superset


class BlockStructure(str, Enum):
    """
    How the exercises of a block are performed.

    - SUPERSET: exercises back to back, rest after the group
    - CIRCUIT: several exercises back to back, rest after the circuit
    - TABATA: work/rest intervals (typically 20s/10s)
    - EMOM: every minute on the minute
    - AMRAP: as many rounds as possible within a time cap
    - FOR_TIME: complete as fast as possible
    - ROUNDS: fixed number of rounds
    - SETS: fixed number of sets with rest between
    - REGULAR: standard workout, rest between exercises
    """

    SUPERSET = "superset"
    CIRCUIT = "circuit"
    TABATA = "tabata"
    EMOM = "emom"
    AMRAP = "amrap"
    FOR_TIME = "for-time"
    ROUNDS = "rounds"
    SETS = "sets"
    REGULAR = "regular"


class WarmupActivity(str, Enum):
    """Activities offered for a warm-up segment."""

    STRETCHING = "stretching"
    JUMP_ROPE = "jump_rope"
    AIR_BIKE = "air_bike"
    TREADMILL = "treadmill"
    STAIRMASTER = "stairmaster"
    ROWING = "rowing"
    CUSTOM = "custom"


class WarmupConfig(BaseModel):
    """Warm-up segment performed before a block (or before the workout)."""

    enabled: bool = False
    activity: WarmupActivity = WarmupActivity.STRETCHING
    duration_sec: int = Field(default=300, ge=0)

    model_config = {"frozen": True}


class RestOverride(BaseModel):
    """Block-level rest that overrides the workout-wide defaults."""

    enabled: bool = False
    rest_type: RestType = RestType.TIMED
    rest_sec: Optional[int] = Field(default=None, ge=0)

    model_config = {"frozen": True}


@dataclass(frozen=True)
class BlockEntry:
    """One item in a block's display order."""

    kind: Literal["exercise", "superset"]
    position: int
    item: Union[Exercise, Superset]


def legacy_entries(
    exercises: List[Exercise], supersets: List[Superset]
) -> List[BlockEntry]:
    """
    Lay out entries that carry no explicit positions.

    The legacy wire convention is: first block-level exercise, then every
    superset, then the remaining block-level exercises.
    """
    ordered: List[BlockEntry] = []
    lead, rest = exercises[:1], exercises[1:]
    for ex in lead:
        ordered.append(BlockEntry("exercise", len(ordered), ex))
    for ss in supersets:
        ordered.append(BlockEntry("superset", len(ordered), ss))
    for ex in rest:
        ordered.append(BlockEntry("exercise", len(ordered), ex))
    return ordered


class Block(BaseModel):
    """
    Value object representing a section of a workout ("Warm-up", "Main Set").

    ``exercises`` and ``supersets`` are each kept in ascending ``position``
    order by the editor; use ``entries()`` for the merged display order.

    Examples:
        >>> Block(
        ...     label="Main Set",
        ...     structure=BlockStructure.SETS,
        ...     sets=4,
        ...     exercises=[Exercise(name="Deadlift", reps=5, position=0)],
        ... )
    """

    id: Optional[str] = Field(default=None, description="Stable identifier")
    label: str = Field(default="", description="Block label")
    structure: Optional[BlockStructure] = Field(default=None)

    exercises: List[Exercise] = Field(default_factory=list)
    supersets: List[Superset] = Field(default_factory=list)

    # Structure parameters
    rounds: Optional[int] = Field(default=None, ge=0)
    sets: Optional[int] = Field(default=None, ge=0)
    time_cap_sec: Optional[int] = Field(default=None, ge=0)
    time_work_sec: Optional[int] = Field(default=None, ge=0)
    time_rest_sec: Optional[int] = Field(default=None, ge=0)
    rest_between_rounds_sec: Optional[int] = Field(default=None, ge=0)
    rest_between_sets_sec: Optional[int] = Field(default=None, ge=0)

    rest_override: Optional[RestOverride] = None
    warmup: Optional[WarmupConfig] = None

    def has_positions(self) -> bool:
        """True when every entry carries an explicit position."""
        return all(ex.position is not None for ex in self.exercises) and all(
            ss.position is not None for ss in self.supersets
        )

    def entries(self) -> List[BlockEntry]:
        """Merged display order of block-level exercises and supersets."""
        if not self.has_positions():
            return legacy_entries(self.exercises, self.supersets)

        merged = [BlockEntry("exercise", ex.position, ex) for ex in self.exercises]
        merged.extend(BlockEntry("superset", ss.position, ss) for ss in self.supersets)
        merged.sort(key=lambda e: (e.position, 0 if e.kind == "exercise" else 1))
        return merged

    def ordered_exercises(self) -> List[Exercise]:
        """Every exercise of the block in execution order, superset members inline."""
        result: List[Exercise] = []
        for entry in self.entries():
            if entry.kind == "exercise":
                result.append(entry.item)
            else:
                result.extend(entry.item.exercises)
        return result

    @property
    def exercise_count(self) -> int:
        """Block-level exercises plus every superset member."""
        return len(self.exercises) + sum(len(ss.exercises) for ss in self.supersets)

    @property
    def exercise_names(self) -> List[str]:
        return [ex.name for ex in self.ordered_exercises()]

    def __str__(self) -> str:
        parts = [self.label or "Block"]
        if self.structure:
            parts.append(f"({self.structure.value})")
        names = self.exercise_names
        shown = ", ".join(names[:3])
        if len(names) > 3:
            shown += f" (+{len(names) - 3} more)"
        parts.append(f"[{shown}]")
        return " ".join(parts)

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "id": "b-1",
                    "label": "Main Set",
                    "structure": "superset",
                    "exercises": [{"id": "e-1", "name": "Squat", "reps": 5, "position": 0}],
                    "supersets": [
                        {
                            "id": "s-1",
                            "position": 1,
                            "exercises": [
                                {"id": "e-2", "name": "Curl", "reps": 12},
                                {"id": "e-3", "name": "Pushdown", "reps": 12},
                            ],
                        }
                    ],
                }
            ]
        },
    }
