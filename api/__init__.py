"""
API package for the workout editor.

This package contains:
- deps.py: FastAPI dependency providers for DI
- schemas/: request models
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_validation_service,
    get_edit_workout_use_case,
    get_reconcile_mappings_use_case,
    get_revalidate_workout_use_case,
    get_prepare_export_use_case,
)

__all__ = [
    # Settings
    "get_settings",
    # Services
    "get_validation_service",
    # Use cases
    "get_edit_workout_use_case",
    "get_reconcile_mappings_use_case",
    "get_revalidate_workout_use_case",
    "get_prepare_export_use_case",
]
