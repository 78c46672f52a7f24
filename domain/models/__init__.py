"""
Domain models for the workout editor.

These models are pure pydantic value objects, independent of HTTP, storage
or UI concerns:
- WorkoutStructure: the document root containing blocks
- Block: a section holding block-level exercises and supersets
- Superset: an ordered group of exercises with shared rest
- Exercise: the leaf unit of work
- ValidationResponse / ReconciliationState: mapping classification
- Commands: structural edits and reconciliation transitions

Usage:
    >>> from domain.models import WorkoutStructure, Block, Exercise

    >>> doc = WorkoutStructure(
    ...     title="Push Day",
    ...     blocks=[Block(label="Main", exercises=[Exercise(name="Bench Press", reps=8)])],
    ... )
    >>> WorkoutStructure.model_validate_json(doc.model_dump_json()) == doc
    True
"""

from domain.models.block import (
    Block,
    BlockEntry,
    BlockStructure,
    RestOverride,
    WarmupActivity,
    WarmupConfig,
)
from domain.models.commands import (
    AcceptMapping,
    AddBlock,
    AddExercise,
    AddSuperset,
    ApplyMapping,
    BlockUpdates,
    ChangeBlockStructure,
    ConfirmAll,
    DeleteBlock,
    DeleteExercise,
    DeleteSuperset,
    DropTarget,
    EditorCommandError,
    ExerciseRef,
    LoadValidation,
    MoveBlock,
    MoveExercise,
    SelectDevice,
    SetRestOverride,
    UpdateBlock,
    UpdateExercise,
    UpdateSettings,
    parse_command,
)
from domain.models.device import DEFAULT_TRACEABLE_DEVICES, DeviceId
from domain.models.exercise import Exercise, RestType
from domain.models.superset import Superset
from domain.models.validation import (
    ClassificationRecord,
    ReconciliationState,
    Suggestion,
    ValidationResponse,
    ValidationResult,
    ValidationStatus,
)
from domain.models.workout import WorkoutSettings, WorkoutStructure

__all__ = [
    # Document
    "WorkoutStructure",
    "WorkoutSettings",
    "Block",
    "BlockEntry",
    "Superset",
    "Exercise",
    "RestOverride",
    "WarmupConfig",
    # Validation
    "ValidationResult",
    "ValidationResponse",
    "Suggestion",
    "ClassificationRecord",
    "ReconciliationState",
    # Commands
    "ExerciseRef",
    "DropTarget",
    "BlockUpdates",
    "MoveBlock",
    "MoveExercise",
    "AddExercise",
    "DeleteExercise",
    "UpdateExercise",
    "AddSuperset",
    "DeleteSuperset",
    "AddBlock",
    "DeleteBlock",
    "UpdateBlock",
    "ChangeBlockStructure",
    "SetRestOverride",
    "UpdateSettings",
    "LoadValidation",
    "ApplyMapping",
    "AcceptMapping",
    "ConfirmAll",
    "SelectDevice",
    "EditorCommandError",
    "parse_command",
    # Enums
    "BlockStructure",
    "RestType",
    "WarmupActivity",
    "ValidationStatus",
    "DeviceId",
    "DEFAULT_TRACEABLE_DEVICES",
]
