"""
HTTP client for the mapper validation workflow.

Sends an edited workout to the external mapping/validation service and
parses the bucketed ValidationResponse it returns.
"""

import logging

import httpx

from application.ports.validation_service import (
    ValidationServiceClientError,
    ValidationServiceError,
    ValidationServiceUnavailable,
)
from domain.converters import structure_to_blocks
from domain.models import ValidationResponse, WorkoutStructure

logger = logging.getLogger(__name__)

__all__ = [
    "MapperValidationClient",
    "ValidationServiceClientError",
    "ValidationServiceError",
    "ValidationServiceUnavailable",
]


class MapperValidationClient:
    """
    HTTP client for the validation service.

    Implements the ValidationService port via ``POST /workflow/validate``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
    ):
        """
        Initialize the validation client.

        Args:
            base_url: Base URL of the mapping service (e.g., "http://mapper-api:8001")
            timeout: Request timeout in seconds
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def validate_workout(self, workout: WorkoutStructure) -> ValidationResponse:
        """
        Classify every exercise name of ``workout``.

        Args:
            workout: Document to validate

        Returns:
            ValidationResponse with the three classification buckets

        Raises:
            ValidationServiceUnavailable: If the service is not reachable or times out
            ValidationServiceError: If the service returns an error or an invalid body
        """
        url = f"{self._base_url}/workflow/validate"
        payload = {"blocks_json": structure_to_blocks(workout)}

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(url, json=payload)

                if response.status_code != 200:
                    logger.error(
                        f"Validation service error: {response.status_code} - {response.text}"
                    )
                    raise ValidationServiceError(
                        f"Failed to validate workout: {response.text}",
                        response.status_code,
                    )

                try:
                    return ValidationResponse.model_validate(response.json())
                except ValueError as e:
                    logger.error(f"Validation service returned an invalid body: {e}")
                    raise ValidationServiceError(
                        "Validation service returned an invalid response",
                        502,
                    ) from e

        except httpx.ConnectError as e:
            logger.error(f"Validation service unavailable: {e}")
            raise ValidationServiceUnavailable(
                f"Validation service is not available at {self._base_url}"
            ) from e
        except httpx.TimeoutException as e:
            logger.error(f"Validation service timeout: {e}")
            raise ValidationServiceUnavailable(
                "Validation service request timed out"
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Validation service request failed: {e}")
            raise ValidationServiceUnavailable(
                f"Validation service request failed: {e}"
            ) from e
