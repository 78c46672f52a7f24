"""
Domain layer for the workout editor.

Pure models and services with no dependency on HTTP, storage or external
services:
- domain.models: the workout document, validation state and commands
- domain.converters: raw generator JSON <-> WorkoutStructure
- domain.services: identity, structural editing, reconciliation, projection
"""

from domain.models import (
    Block,
    Exercise,
    ReconciliationState,
    Superset,
    ValidationResponse,
    WorkoutSettings,
    WorkoutStructure,
)

__all__ = [
    "Block",
    "Exercise",
    "ReconciliationState",
    "Superset",
    "ValidationResponse",
    "WorkoutSettings",
    "WorkoutStructure",
]
