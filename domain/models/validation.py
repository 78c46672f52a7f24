"""
Validation wire models and the reconciliation state built from them.

``ValidationResponse`` is the shape produced by the external mapping service
(three bucket lists keyed by ``original_name``). ``ReconciliationState`` is the
local, partitioned representation: one ``ClassificationRecord`` per name, with
the three bucket lists derived on read so a name can never sit in two
buckets at once.
"""

from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from pydantic import BaseModel, Field


class ValidationStatus(str, Enum):
    """Classification bucket of an exercise name."""

    VALID = "valid"
    NEEDS_REVIEW = "needs_review"
    UNMAPPED = "unmapped"


class Suggestion(BaseModel):
    """Alternative canonical name offered by the mapping service."""

    name: str
    confidence: float = Field(default=0.0, ge=0, le=1)

    model_config = {"frozen": True}


class ValidationResult(BaseModel):
    """Mapping outcome for one exercise name."""

    original_name: str
    mapped_to: Optional[str] = None
    confidence: float = Field(default=0.0, ge=0, le=1)
    status: ValidationStatus = ValidationStatus.UNMAPPED
    description: str = ""
    block: str = ""
    location: str = ""
    suggestions: List[Suggestion] = Field(default_factory=list)

    @property
    def has_mapping(self) -> bool:
        """
        True when the result maps the name to a *different* canonical name.

        A result whose ``mapped_to`` equals ``original_name`` is an exact match
        and needs no user action.
        """
        return bool(self.mapped_to) and self.mapped_to != self.original_name

    model_config = {"frozen": True}


class ValidationResponse(BaseModel):
    """Wire shape returned by the external validator."""

    total_exercises: int = Field(default=0, ge=0)
    validated_exercises: List[ValidationResult] = Field(default_factory=list)
    needs_review: List[ValidationResult] = Field(default_factory=list)
    unmapped_exercises: List[ValidationResult] = Field(default_factory=list)
    can_proceed: bool = True

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "total_exercises": 2,
                    "validated_exercises": [
                        {
                            "original_name": "Bench Press",
                            "mapped_to": "Barbell Bench Press",
                            "confidence": 0.93,
                            "status": "valid",
                        }
                    ],
                    "needs_review": [
                        {
                            "original_name": "Squat",
                            "mapped_to": "Barbell Back Squat",
                            "confidence": 0.6,
                            "status": "needs_review",
                        }
                    ],
                    "unmapped_exercises": [],
                    "can_proceed": True,
                }
            ]
        }
    }


class ClassificationRecord(BaseModel):
    """
    Current classification of one exercise name.

    ``result.status`` is the bucket. ``sequence`` orders the derived bucket
    lists; entering a bucket assigns a fresh sequence (append semantics).
    """

    result: ValidationResult
    sequence: int = Field(ge=0)

    model_config = {"frozen": True}


class ReconciliationState(BaseModel):
    """
    Local reconciliation state: a partition of names plus a confirmation set.

    The confirmation set is not part of the wire format. It only grows,
    except when validation is reloaded from the external service.
    """

    records: Dict[str, ClassificationRecord] = Field(default_factory=dict)
    confirmed: FrozenSet[str] = Field(default_factory=frozenset)
    total_exercises: int = Field(default=0, ge=0)
    next_sequence: int = Field(default=0, ge=0)

    # -------------------------------------------------------------------------
    # Derived bucket views
    # -------------------------------------------------------------------------

    def bucket(self, status: ValidationStatus) -> List[ValidationResult]:
        """Results currently classified as ``status``, in sequence order."""
        members = [r for r in self.records.values() if r.result.status == status]
        members.sort(key=lambda r: r.sequence)
        return [r.result for r in members]

    @property
    def validated_exercises(self) -> List[ValidationResult]:
        return self.bucket(ValidationStatus.VALID)

    @property
    def needs_review(self) -> List[ValidationResult]:
        return self.bucket(ValidationStatus.NEEDS_REVIEW)

    @property
    def unmapped_exercises(self) -> List[ValidationResult]:
        return self.bucket(ValidationStatus.UNMAPPED)

    def status_of(self, name: str) -> Optional[ValidationStatus]:
        """Bucket of ``name``, or None when the name is not known yet."""
        record = self.records.get(name)
        return record.result.status if record else None

    def is_confirmed(self, name: str) -> bool:
        return name in self.confirmed

    # -------------------------------------------------------------------------
    # Export readiness
    # -------------------------------------------------------------------------

    @property
    def can_proceed(self) -> bool:
        """API-level readiness: no unmapped exercises remain."""
        return not self.unmapped_exercises

    @property
    def unconfirmed_mappings(self) -> List[ValidationResult]:
        """Mapped results in needs_review or validated the user has not confirmed."""
        return [
            result
            for result in self.needs_review + self.validated_exercises
            if result.has_mapping and result.original_name not in self.confirmed
        ]

    @property
    def final_can_export(self) -> bool:
        """Strict readiness: nothing unmapped and no unconfirmed mapping."""
        return self.can_proceed and not self.unconfirmed_mappings

    def export_blocked_reason(self) -> str:
        """Human-readable reason export is blocked, or an empty string."""
        unmapped = len(self.unmapped_exercises)
        if unmapped:
            return f"Cannot export: {unmapped} exercise(s) need to be mapped"
        unconfirmed = len(self.unconfirmed_mappings)
        if unconfirmed:
            return f"Cannot export: {unconfirmed} mapping(s) need to be confirmed"
        return ""

    def confirmed_mappings(self) -> Dict[str, str]:
        """Confirmed ``original_name -> mapped_to`` pairs for projection."""
        table: Dict[str, str] = {}
        for result in self.validated_exercises + self.needs_review:
            if result.original_name in self.confirmed and result.has_mapping:
                table[result.original_name] = result.mapped_to
        return table

    def to_response(self) -> ValidationResponse:
        """Serialize back to the wire shape (the confirmation set is dropped)."""
        return ValidationResponse(
            total_exercises=self.total_exercises,
            validated_exercises=self.validated_exercises,
            needs_review=self.needs_review,
            unmapped_exercises=self.unmapped_exercises,
            can_proceed=self.can_proceed,
        )

    model_config = {"frozen": True}
