"""
Superset value object - an ordered group of exercises inside a block.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from domain.models.exercise import Exercise, RestType


class Superset(BaseModel):
    """
    Exercises performed back-to-back with shared rest semantics.

    A superset is owned by exactly one block. Its exercises are never also
    present in the block's flat exercise list.

    Examples:
        >>> Superset(
        ...     exercises=[Exercise(name="Curl", reps=12), Exercise(name="Pushdown", reps=12)],
        ...     rounds=3,
        ...     rest_between_sec=60,
        ... )
    """

    id: Optional[str] = Field(default=None, description="Stable identifier")
    exercises: List[Exercise] = Field(default_factory=list)
    rest_between_sec: Optional[int] = Field(
        default=None, ge=0, description="Rest after completing all exercises once"
    )
    rounds: Optional[int] = Field(default=None, ge=1, description="Times through the group")
    rest_type: Optional[RestType] = Field(default=None)
    position: Optional[int] = Field(
        default=None, ge=0, description="Ordinal among the owning block's entries"
    )

    @property
    def exercise_count(self) -> int:
        return len(self.exercises)

    model_config = {"frozen": True}
