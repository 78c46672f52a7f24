"""
Application Use Cases for the workout editor.

This package contains application-level use cases that orchestrate the pure
domain services and coordinate with ports. Use cases are the entry points
for business operations.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain services and service ports
- Dependencies are injected via constructors for testability
- Use cases return result dataclasses, not API responses

Usage:
    from application.use_cases import (
        EditWorkoutUseCase,
        ReconcileMappingsUseCase,
        RevalidateWorkoutUseCase,
        PrepareExportUseCase,
    )

    result = EditWorkoutUseCase().execute(workout=blocks_json, commands=commands)
    if result.success:
        workout = result.workout
"""

from application.use_cases.edit_workout import (
    EditWorkoutResult,
    EditWorkoutUseCase,
    SkippedCommand,
)
from application.use_cases.prepare_export import (
    PrepareExportResult,
    PrepareExportUseCase,
)
from application.use_cases.reconcile_mappings import (
    ReconcileMappingsResult,
    ReconcileMappingsUseCase,
)
from application.use_cases.revalidate_workout import (
    RevalidateWorkoutResult,
    RevalidateWorkoutUseCase,
)

__all__ = [
    # EditWorkout
    "EditWorkoutUseCase",
    "EditWorkoutResult",
    "SkippedCommand",
    # ReconcileMappings
    "ReconcileMappingsUseCase",
    "ReconcileMappingsResult",
    # RevalidateWorkout
    "RevalidateWorkoutUseCase",
    "RevalidateWorkoutResult",
    # PrepareExport
    "PrepareExportUseCase",
    "PrepareExportResult",
]
