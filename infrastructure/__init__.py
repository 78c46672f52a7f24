"""
Infrastructure Layer for the workout editor.

This package contains concrete implementations of the application ports:
- validation_client: HTTP client for the external mapping/validation service
"""

from infrastructure.validation_client import (
    MapperValidationClient,
    ValidationServiceClientError,
    ValidationServiceError,
    ValidationServiceUnavailable,
)

__all__ = [
    "MapperValidationClient",
    "ValidationServiceClientError",
    "ValidationServiceError",
    "ValidationServiceUnavailable",
]
