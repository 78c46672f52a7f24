"""
Validation Service Interface (Port).

Defines the abstract interface for the external exercise-mapping validator
and the errors its implementations raise. The validator classifies every
exercise name in a workout into the validated / needs_review / unmapped
buckets.
"""

from typing import Protocol

from domain.models import ValidationResponse, WorkoutStructure


class ValidationServiceClientError(Exception):
    """Base exception for validation service errors."""

    pass


class ValidationServiceUnavailable(ValidationServiceClientError):
    """Raised when the validation service cannot be reached or times out."""

    pass


class ValidationServiceError(ValidationServiceClientError):
    """Raised when the validation service returns an error or an unusable body."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class ValidationService(Protocol):
    """Abstract interface for re-validating a workout document."""

    async def validate_workout(self, workout: WorkoutStructure) -> ValidationResponse:
        """
        Classify every exercise name in ``workout``.

        Args:
            workout: Document to validate (as currently edited)

        Returns:
            ValidationResponse with the three classification buckets

        Raises:
            ValidationServiceUnavailable: If the validator is not reachable
            ValidationServiceError: If the validator returns an error response
        """
        ...
