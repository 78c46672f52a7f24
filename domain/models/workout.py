"""
WorkoutStructure - the root of the editable workout document.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from domain.models.block import Block, WarmupConfig
from domain.models.exercise import Exercise, RestType


class WorkoutSettings(BaseModel):
    """
    Workout-wide defaults inherited by blocks and exercises.

    Exercises without their own rest fields, in blocks without an enabled
    rest override, fall back to these values.
    """

    default_rest_type: RestType = Field(
        default=RestType.BUTTON, description="Default rest mode after exercises"
    )
    default_rest_sec: Optional[int] = Field(
        default=None, ge=0, description="Default rest duration (timed rest only)"
    )
    workout_warmup: Optional[WarmupConfig] = Field(
        default=None, description="Warm-up performed before the first block"
    )

    model_config = {"frozen": True}


class WorkoutStructure(BaseModel):
    """
    Aggregate root of the editable workout document.

    The document is treated as immutable: every edit returns a new instance
    that shares the untouched blocks with its predecessor, so consumers can
    compare references to detect "nothing changed".

    Examples:
        >>> from domain.models import Block, Exercise, WorkoutStructure

        >>> doc = WorkoutStructure(
        ...     title="Leg Day",
        ...     source="instagram",
        ...     blocks=[Block(label="Main", exercises=[Exercise(name="Squat", reps=5)])],
        ... )
        >>> doc.total_exercises
        1
    """

    title: str = Field(default="", description="Workout title")
    source: str = Field(default="", description="Where the workout came from")
    workout_type: Optional[str] = Field(
        default=None, description="Detected workout type (strength, hiit, ...)"
    )
    settings: Optional[WorkoutSettings] = Field(default=None)
    blocks: List[Block] = Field(default_factory=list)

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def block_count(self) -> int:
        return len(self.blocks)

    @property
    def total_exercises(self) -> int:
        """Total exercises across all blocks, superset members included."""
        return sum(block.exercise_count for block in self.blocks)

    @property
    def total_supersets(self) -> int:
        return sum(len(block.supersets) for block in self.blocks)

    def iter_exercises(self) -> List[Exercise]:
        """Every exercise in the document in execution order."""
        result: List[Exercise] = []
        for block in self.blocks:
            result.extend(block.ordered_exercises())
        return result

    @property
    def exercise_names(self) -> List[str]:
        return [ex.name for ex in self.iter_exercises()]

    @property
    def unique_exercise_names(self) -> List[str]:
        """Exercise names deduplicated in order of first appearance."""
        seen = set()
        unique = []
        for name in self.exercise_names:
            if name not in seen:
                seen.add(name)
                unique.append(name)
        return unique

    def __str__(self) -> str:
        return (
            f'WorkoutStructure("{self.title}", {self.block_count} blocks, '
            f"{self.total_exercises} exercises)"
        )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Full Body",
                    "source": "ai-text",
                    "settings": {"default_rest_type": "timed", "default_rest_sec": 60},
                    "blocks": [
                        {
                            "id": "b-1",
                            "label": "Main",
                            "exercises": [
                                {"id": "e-1", "name": "Squat", "sets": 5, "reps": 5, "position": 0}
                            ],
                        }
                    ],
                }
            ]
        },
    }
