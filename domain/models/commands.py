"""
Command models for structural edits and mapping reconciliation.

Every user action reaches the core as one of these commands. Drag-and-drop
is reduced to resolved references: an ``ExerciseRef`` naming the dragged
exercise and a ``DropTarget`` naming the container and raw insertion index
reported by the drop zone.

Examples:
    >>> parse_command({"op": "move_block", "source_index": 0, "target_index": 2})
    MoveBlock(op='move_block', source_index=0, target_index=2)

    >>> parse_command({
    ...     "op": "move_exercise",
    ...     "source": {"block_index": 0, "exercise_index": 1},
    ...     "target": {"block_index": 0, "raw_index": 0, "superset_index": 0},
    ... })

    >>> parse_command({"op": "apply_mapping", "name": "Squat", "mapped_to": "Back Squat"})
"""

from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from domain.models.block import Block, BlockStructure, RestOverride, WarmupConfig
from domain.models.exercise import Exercise, RestType
from domain.models.validation import ValidationResponse
from domain.models.workout import WorkoutSettings


class EditorCommandError(ValueError):
    """Raised when a payload cannot be parsed into a known command."""

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


# =============================================================================
# References
# =============================================================================


class ExerciseRef(BaseModel):
    """Location of an existing exercise (drag source)."""

    block_index: int
    exercise_index: int
    superset_index: Optional[int] = None

    model_config = {"frozen": True}


class DropTarget(BaseModel):
    """Container and raw insertion index reported by a drop zone."""

    block_index: int
    raw_index: int
    superset_index: Optional[int] = None

    model_config = {"frozen": True}


class BlockUpdates(BaseModel):
    """
    Bulk edits from the block edit dialog.

    ``None`` means "leave unchanged". Reps and rep ranges only apply when the
    matching ``apply_*`` toggle is set.
    """

    label: Optional[str] = None
    rest_type: Optional[RestType] = None
    rest_sec: Optional[int] = Field(default=None, ge=0)
    sets: Optional[int] = Field(default=None, ge=0)
    apply_reps: bool = False
    reps: Optional[int] = Field(default=None, ge=0)
    apply_reps_range: bool = False
    reps_range: Optional[str] = None
    warmup: Optional[WarmupConfig] = None

    model_config = {"frozen": True}


# =============================================================================
# Structural edit commands
# =============================================================================


class MoveBlock(BaseModel):
    op: Literal["move_block"] = "move_block"
    source_index: int
    target_index: int


class MoveExercise(BaseModel):
    op: Literal["move_exercise"] = "move_exercise"
    source: ExerciseRef
    target: DropTarget


class AddExercise(BaseModel):
    op: Literal["add_exercise"] = "add_exercise"
    block_index: int
    exercise: Exercise
    superset_index: Optional[int] = None


class DeleteExercise(BaseModel):
    op: Literal["delete_exercise"] = "delete_exercise"
    block_index: int
    exercise_index: int
    superset_index: Optional[int] = None


class UpdateExercise(BaseModel):
    op: Literal["update_exercise"] = "update_exercise"
    block_index: int
    exercise_index: int
    superset_index: Optional[int] = None
    changes: Dict[str, Any] = Field(default_factory=dict)


class AddSuperset(BaseModel):
    op: Literal["add_superset"] = "add_superset"
    block_index: int


class DeleteSuperset(BaseModel):
    op: Literal["delete_superset"] = "delete_superset"
    block_index: int
    superset_index: int


class AddBlock(BaseModel):
    op: Literal["add_block"] = "add_block"
    block: Optional[Block] = None
    index: Optional[int] = None


class DeleteBlock(BaseModel):
    op: Literal["delete_block"] = "delete_block"
    block_index: int


class UpdateBlock(BaseModel):
    op: Literal["update_block"] = "update_block"
    block_index: int
    updates: BlockUpdates


class ChangeBlockStructure(BaseModel):
    op: Literal["change_block_structure"] = "change_block_structure"
    block_index: int
    structure: Optional[BlockStructure] = None


class SetRestOverride(BaseModel):
    op: Literal["set_rest_override"] = "set_rest_override"
    block_index: int
    override: Optional[RestOverride] = None


class UpdateSettings(BaseModel):
    op: Literal["update_settings"] = "update_settings"
    title: Optional[str] = None
    settings: Optional[WorkoutSettings] = None


# =============================================================================
# Reconciliation commands
# =============================================================================


class LoadValidation(BaseModel):
    op: Literal["load_validation"] = "load_validation"
    validation: ValidationResponse


class ApplyMapping(BaseModel):
    op: Literal["apply_mapping"] = "apply_mapping"
    name: str
    mapped_to: str = Field(..., min_length=1)


class AcceptMapping(BaseModel):
    op: Literal["accept_mapping"] = "accept_mapping"
    name: str


class ConfirmAll(BaseModel):
    op: Literal["confirm_all"] = "confirm_all"


class SelectDevice(BaseModel):
    op: Literal["select_device"] = "select_device"
    device: str


EditCommand = Union[
    MoveBlock,
    MoveExercise,
    AddExercise,
    DeleteExercise,
    UpdateExercise,
    AddSuperset,
    DeleteSuperset,
    AddBlock,
    DeleteBlock,
    UpdateBlock,
    ChangeBlockStructure,
    SetRestOverride,
    UpdateSettings,
]

ReconcileCommand = Union[LoadValidation, ApplyMapping, AcceptMapping, ConfirmAll]

Command = Annotated[
    Union[
        MoveBlock,
        MoveExercise,
        AddExercise,
        DeleteExercise,
        UpdateExercise,
        AddSuperset,
        DeleteSuperset,
        AddBlock,
        DeleteBlock,
        UpdateBlock,
        ChangeBlockStructure,
        SetRestOverride,
        UpdateSettings,
        LoadValidation,
        ApplyMapping,
        AcceptMapping,
        ConfirmAll,
        SelectDevice,
    ],
    Field(discriminator="op"),
]

EDIT_OPS = frozenset(
    cls.model_fields["op"].default for cls in EditCommand.__args__
)
RECONCILE_OPS = frozenset(
    cls.model_fields["op"].default for cls in ReconcileCommand.__args__
)

_command_adapter = TypeAdapter(Command)


def parse_command(data: Any) -> Any:
    """
    Parse a raw payload into a command model.

    Args:
        data: Dict with an ``op`` key, or an already-built command

    Returns:
        The command model

    Raises:
        EditorCommandError: If the payload is not a known, well-formed command
    """
    if isinstance(data, BaseModel) and "op" in type(data).model_fields:
        return data
    if not isinstance(data, dict) or "op" not in data:
        raise EditorCommandError("Command must be an object with an 'op' field")
    try:
        return _command_adapter.validate_python(data)
    except ValidationError as e:
        raise EditorCommandError(
            f"Invalid command '{data.get('op')}'",
            errors=[err["msg"] for err in e.errors()],
        ) from e
