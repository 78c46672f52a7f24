"""
Exercise value object - the leaf unit of a workout document.

An exercise is prescribed by a name plus an optional work target:
- Reps: either an exact count (``reps``) or a range string (``reps_range``)
- Time or distance: ``duration_sec`` or ``distance_m`` / ``distance_range``

Rest fields are optional; when absent the exercise inherits rest from its
container (superset, block rest override, or workout settings).
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class RestType(str, Enum):
    """How rest is taken after an exercise or group.

    - TIMED: fixed countdown of ``rest_sec`` seconds
    - BUTTON: athlete taps when ready (no duration)
    """

    TIMED = "timed"
    BUTTON = "button"


class Exercise(BaseModel):
    """
    Value object representing an exercise within a block or superset.

    ``name`` is the only key used to cross-reference validation results, so
    two exercises with the same name share a single mapping decision.

    ``position`` is the exercise's ordinal among the entries of its owning
    block. It is only meaningful for block-level exercises; exercises inside
    a superset are ordered by their list position and keep ``position=None``.

    Examples:
        >>> Exercise(name="Back Squat", sets=5, reps=5)
        >>> Exercise(name="Plank", duration_sec=60, rest_type=RestType.BUTTON)
        >>> Exercise(name="Row", distance_m=500, rest_sec=90)
    """

    # Identity
    id: Optional[str] = Field(
        default=None, description="Stable identifier; assigned by ensure_ids when missing"
    )
    name: str = Field(default="", description="Exercise name (raw, as ingested)")

    # Work prescription
    sets: Optional[int] = Field(default=None, ge=0, description="Number of sets")
    reps: Optional[int] = Field(default=None, ge=0, description="Exact reps per set")
    reps_range: Optional[str] = Field(
        default=None, description="Rep range such as '8-12' (exclusive with reps)"
    )
    duration_sec: Optional[int] = Field(
        default=None, ge=0, description="Work duration in seconds"
    )
    distance_m: Optional[float] = Field(
        default=None, ge=0, description="Distance in meters (exclusive with duration_sec)"
    )
    distance_range: Optional[str] = Field(
        default=None, description="Distance range such as '400-800m'"
    )

    # Rest (None means inherit from container)
    rest_sec: Optional[int] = Field(default=None, ge=0, description="Rest after exercise")
    rest_type: Optional[RestType] = Field(default=None, description="Rest mode")

    # Warm-up sets
    warmup_sets: Optional[int] = Field(default=None, ge=0)
    warmup_reps: Optional[int] = Field(default=None, ge=0)

    # Extra metadata carried on the wire
    type: Optional[str] = Field(
        default=None, description="Exercise type (strength, cardio, HIIT, interval, ...)"
    )
    notes: Optional[str] = Field(default=None, description="Free-form notes")
    follow_along_url: Optional[str] = Field(
        default=None, description="Video URL for this exercise"
    )

    # Ordering within the owning block
    position: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def validate_prescription(self) -> "Exercise":
        """Enforce the reps/range and duration/distance exclusivity rules."""
        if self.reps is not None and self.reps_range:
            raise ValueError("Exercise cannot have both reps and reps_range")
        if self.duration_sec is not None and (
            self.distance_m is not None or self.distance_range
        ):
            raise ValueError("Exercise cannot have both duration_sec and a distance")
        return self

    @property
    def is_timed(self) -> bool:
        """True if the exercise has a duration target."""
        return self.duration_sec is not None

    @property
    def has_distance(self) -> bool:
        """True if the exercise has a distance target."""
        return self.distance_m is not None or bool(self.distance_range)

    @property
    def inherits_rest(self) -> bool:
        """True when neither rest_sec nor rest_type is set on the exercise."""
        return self.rest_sec is None and self.rest_type is None

    def with_changes(self, **changes) -> "Exercise":
        """
        Return a copy with ``changes`` applied, re-validated.

        Setting one side of an exclusive pair clears the other side, so an
        edit dialog can switch an exercise from reps to a range (or from time
        to distance) in one call.
        """
        data = self.model_dump()
        data.update(changes)

        if changes.get("reps") is not None:
            data["reps_range"] = None
        elif changes.get("reps_range"):
            data["reps"] = None

        if changes.get("duration_sec") is not None:
            data["distance_m"] = None
            data["distance_range"] = None
        elif changes.get("distance_m") is not None or changes.get("distance_range"):
            data["duration_sec"] = None

        return Exercise.model_validate(data)

    def __str__(self) -> str:
        parts = [self.name or "Exercise"]
        if self.sets and self.reps is not None:
            parts.append(f"{self.sets}x{self.reps}")
        elif self.sets and self.reps_range:
            parts.append(f"{self.sets}x{self.reps_range}")
        elif self.reps is not None:
            parts.append(f"{self.reps} reps")
        if self.duration_sec:
            parts.append(f"{self.duration_sec}s")
        if self.distance_m:
            parts.append(f"{self.distance_m:g}m")
        return " ".join(parts)

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {"id": "ex-1", "name": "Bench Press", "sets": 4, "reps": 8, "rest_sec": 90},
                {"id": "ex-2", "name": "Plank", "duration_sec": 60},
                {"id": "ex-3", "name": "Ski Erg", "distance_m": 500, "rest_type": "button"},
            ]
        },
    }
