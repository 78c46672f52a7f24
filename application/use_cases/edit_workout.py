"""
EditWorkout Use Case.

Applies a batch of structural edit commands to a workout document.

Workflow:
1. Normalize the incoming document (wire JSON -> WorkoutStructure, ids repaired)
2. Parse and validate every command upfront
3. Apply commands in order, counting changes by reference
4. Return EditWorkoutResult with the edited document and skipped commands
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from domain.converters import blocks_to_structure
from domain.models import EditorCommandError, WorkoutStructure, parse_command
from domain.models.commands import EDIT_OPS
from domain.services import apply_edit, ensure_ids

logger = logging.getLogger(__name__)

MAX_COMMANDS = 500


@dataclass
class SkippedCommand:
    """A command that left the document unchanged."""

    index: int
    op: str


@dataclass
class EditWorkoutResult:
    """Result of the EditWorkout use case execution."""

    success: bool
    workout: Optional[WorkoutStructure] = None
    changes_applied: int = 0
    skipped: List[SkippedCommand] = field(default_factory=list)
    error: Optional[str] = None
    validation_errors: List[str] = field(default_factory=list)


class EditWorkoutUseCase:
    """
    Use case for applying structural edits to a workout document.

    Commands that reference stale indexes (a block deleted by an earlier
    command, an out-of-range superset) are not errors: they are reported in
    ``skipped`` and the remaining commands still apply.

    Usage:
        >>> use_case = EditWorkoutUseCase()
        >>> result = use_case.execute(
        ...     workout=blocks_json,
        ...     commands=[{"op": "move_block", "source_index": 0, "target_index": 2}],
        ... )
        >>> if result.success:
        ...     print(f"Applied {result.changes_applied} changes")
    """

    def execute(self, workout: Any, commands: List[Any]) -> EditWorkoutResult:
        """
        Execute the edit workflow.

        Args:
            workout: WorkoutStructure or raw blocks JSON (None/garbage -> empty document)
            commands: Command models or raw ``{"op": ...}`` dicts

        Returns:
            EditWorkoutResult with success status and edited document
        """
        try:
            # Step 1: Normalize
            doc = ensure_ids(blocks_to_structure(workout))

            # Step 2: Validate all commands upfront
            parsed, validation_errors = self._parse_commands(commands)
            if validation_errors:
                return EditWorkoutResult(
                    success=False,
                    error="Command validation failed",
                    validation_errors=validation_errors,
                )

            # Step 3: Apply in order
            changes_applied = 0
            skipped: List[SkippedCommand] = []
            for index, command in enumerate(parsed):
                updated = apply_edit(doc, command)
                if updated is doc:
                    logger.debug(f"Command {index} ({command.op}) did not change the workout")
                    skipped.append(SkippedCommand(index=index, op=command.op))
                    continue
                doc = updated
                changes_applied += 1

            logger.info(
                f"Edit applied: {changes_applied} change(s), {len(skipped)} skipped"
            )
            return EditWorkoutResult(
                success=True,
                workout=doc,
                changes_applied=changes_applied,
                skipped=skipped,
            )

        except Exception as e:
            logger.exception(f"EditWorkout use case failed: {e}")
            return EditWorkoutResult(success=False, error=str(e))

    def _parse_commands(self, commands: List[Any]) -> tuple[list, List[str]]:
        errors: List[str] = []
        parsed = []

        if len(commands) > MAX_COMMANDS:
            return [], [f"Too many commands ({len(commands)}); maximum is {MAX_COMMANDS}"]

        for index, raw in enumerate(commands):
            try:
                command = parse_command(raw)
            except EditorCommandError as e:
                detail = f": {'; '.join(e.errors)}" if e.errors else ""
                errors.append(f"commands[{index}]: {e.message}{detail}")
                continue
            if command.op not in EDIT_OPS:
                errors.append(f"commands[{index}]: '{command.op}' is not a structural edit")
                continue
            parsed.append(command)

        return parsed, errors
