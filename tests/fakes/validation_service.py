"""
Fake Validation Service for testing.

In-memory implementation of the ValidationService port. Returns a canned
ValidationResponse (or raises a configured error) and records every workout
it was asked to validate.
"""
from typing import List, Optional

from application.ports import ValidationServiceClientError
from domain.models import ValidationResponse, WorkoutStructure


class FakeValidationService:
    """
    Fake implementation of ValidationService.

    Usage:
        service = FakeValidationService()
        service.seed({"total_exercises": 1, "validated_exercises": [...]})
        response = await service.validate_workout(doc)

        service.fail_with(ValidationServiceUnavailable("down"))
    """

    def __init__(self, response: Optional[ValidationResponse] = None):
        self._response = response or ValidationResponse()
        self._error: Optional[ValidationServiceClientError] = None
        self.calls: List[WorkoutStructure] = []

    def reset(self) -> None:
        """Clear recorded calls, the configured error and the canned response."""
        self._response = ValidationResponse()
        self._error = None
        self.calls.clear()

    def seed(self, response) -> None:
        """Set the response returned by the next validations."""
        if isinstance(response, dict):
            response = ValidationResponse.model_validate(response)
        self._response = response

    def fail_with(self, error: ValidationServiceClientError) -> None:
        """Make every following validation raise ``error``."""
        self._error = error

    # =========================================================================
    # ValidationService Protocol Methods
    # =========================================================================

    async def validate_workout(self, workout: WorkoutStructure) -> ValidationResponse:
        self.calls.append(workout)
        if self._error is not None:
            raise self._error
        return self._response
