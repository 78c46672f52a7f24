"""
FastAPI Dependency Providers for the workout editor API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) or use cases rather than constructing them in
routers. This enables clean separation of concerns and easy testing with
fake implementations.

Architecture:
- Settings are cached per-process (lru_cache in backend.settings)
- Service and use case providers create new instances per-request

Usage in routers:
    from api.deps import get_revalidate_workout_use_case
    from application.use_cases import RevalidateWorkoutUseCase

    @router.post("/validation/revalidate")
    async def revalidate(
        use_case: RevalidateWorkoutUseCase = Depends(get_revalidate_workout_use_case),
    ):
        ...

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_validation_service] = lambda: FakeValidationService()
"""

from fastapi import Depends

# Protocol types (interfaces)
from application.ports import ValidationService

# Use cases
from application.use_cases import (
    EditWorkoutUseCase,
    PrepareExportUseCase,
    ReconcileMappingsUseCase,
    RevalidateWorkoutUseCase,
)

# Concrete implementations
from infrastructure import MapperValidationClient

from backend.settings import Settings, get_settings as _get_settings


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Service Providers
# =============================================================================


def get_validation_service(
    settings: Settings = Depends(get_settings),
) -> ValidationService:
    """
    Get ValidationService implementation.

    Returns a MapperValidationClient pointed at the configured mapping
    service. The return type is the Protocol to enable easy faking.

    Args:
        settings: Application settings (injected)

    Returns:
        ValidationService: External validator client
    """
    return MapperValidationClient(
        base_url=settings.mapper_api_url,
        timeout=settings.validation_timeout_seconds,
    )


# =============================================================================
# Use Case Providers
# =============================================================================


def get_edit_workout_use_case() -> EditWorkoutUseCase:
    """Get EditWorkoutUseCase (stateless)."""
    return EditWorkoutUseCase()


def get_reconcile_mappings_use_case(
    settings: Settings = Depends(get_settings),
) -> ReconcileMappingsUseCase:
    """Get ReconcileMappingsUseCase with the configured applied-mapping confidence."""
    return ReconcileMappingsUseCase(applied_confidence=settings.applied_mapping_confidence)


def get_revalidate_workout_use_case(
    validation_service: ValidationService = Depends(get_validation_service),
) -> RevalidateWorkoutUseCase:
    """Get RevalidateWorkoutUseCase wired to the validation service."""
    return RevalidateWorkoutUseCase(validation_service=validation_service)


def get_prepare_export_use_case(
    settings: Settings = Depends(get_settings),
) -> PrepareExportUseCase:
    """Get PrepareExportUseCase with the configured traceable devices."""
    return PrepareExportUseCase(traceable_devices=settings.traceable_devices_list)
