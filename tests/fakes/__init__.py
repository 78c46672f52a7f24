"""
Fake implementations of application ports for testing.

Fakes implement the same Protocol interfaces as the real adapters, so they
can be injected into use cases directly or through FastAPI dependency
overrides. No network access required.

Usage:
    from tests.fakes import FakeValidationService

    service = FakeValidationService()
    service.seed({"total_exercises": 1, "validated_exercises": [...]})
"""
from tests.fakes.validation_service import FakeValidationService

__all__ = [
    "FakeValidationService",
]
