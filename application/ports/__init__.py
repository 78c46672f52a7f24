"""
Service Interfaces (Ports) for the workout editor.

This package defines abstract interfaces that decouple the editing core from
infrastructure (external services). Implementations are provided in the
infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the application needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import ValidationService

    class RevalidateWorkoutUseCase:
        def __init__(self, validation_service: ValidationService):
            self._validation_service = validation_service
"""

from application.ports.validation_service import (
    ValidationService,
    ValidationServiceClientError,
    ValidationServiceError,
    ValidationServiceUnavailable,
)

__all__ = [
    "ValidationService",
    "ValidationServiceClientError",
    "ValidationServiceError",
    "ValidationServiceUnavailable",
]
