"""
RevalidateWorkout Use Case.

Sends the edited workout back to the external validator and starts a fresh
reconciliation (the confirmation set is reset).
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from application.ports import (
    ValidationService,
    ValidationServiceError,
    ValidationServiceUnavailable,
)
from domain.converters import blocks_to_structure
from domain.models import ReconciliationState, ValidationResponse
from domain.services import ensure_ids, load_validation

logger = logging.getLogger(__name__)


@dataclass
class RevalidateWorkoutResult:
    """Result of the RevalidateWorkout use case execution."""

    success: bool
    validation: Optional[ValidationResponse] = None
    reconciliation: Optional[ReconciliationState] = None
    can_proceed: bool = False
    final_can_export: bool = False
    error: Optional[str] = None
    # 503 when the validator is unreachable, 502 when it answered with an error
    status_code: Optional[int] = None


class RevalidateWorkoutUseCase:
    """
    Use case for re-checking a workout after edits.

    Usage:
        >>> use_case = RevalidateWorkoutUseCase(validation_service=client)
        >>> result = await use_case.execute(workout=blocks_json)
        >>> result.validation.needs_review
    """

    def __init__(self, validation_service: ValidationService) -> None:
        """
        Args:
            validation_service: External validator (port)
        """
        self._validation_service = validation_service

    async def execute(self, workout: Any) -> RevalidateWorkoutResult:
        """
        Validate ``workout`` and load the response as fresh reconciliation state.

        Args:
            workout: WorkoutStructure or raw blocks JSON

        Returns:
            RevalidateWorkoutResult; collaborator failures are reported, not raised
        """
        doc = ensure_ids(blocks_to_structure(workout))
        try:
            response = await self._validation_service.validate_workout(doc)
        except ValidationServiceUnavailable as e:
            logger.warning(f"Validation service unavailable: {e}")
            return RevalidateWorkoutResult(success=False, error=str(e), status_code=503)
        except ValidationServiceError as e:
            logger.error(f"Validation service error ({e.status_code}): {e}")
            return RevalidateWorkoutResult(success=False, error=str(e), status_code=502)

        state = load_validation(response)
        logger.info(
            f"Revalidated workout: {len(state.validated_exercises)} validated, "
            f"{len(state.needs_review)} need review, "
            f"{len(state.unmapped_exercises)} unmapped"
        )
        return RevalidateWorkoutResult(
            success=True,
            validation=state.to_response(),
            reconciliation=state,
            can_proceed=state.can_proceed,
            final_can_export=state.final_can_export,
        )
