"""
ReconcileMappings Use Case.

Applies mapping decisions (apply / accept / confirm all) to a validation
response and reports export readiness.

Workflow:
1. Rebuild reconciliation state from the wire response plus confirmed names
2. Parse and validate every command upfront
3. Apply commands in order, collecting user-facing messages
4. Return ReconcileMappingsResult with the updated wire response
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from domain.models import (
    ApplyMapping,
    AcceptMapping,
    ConfirmAll,
    EditorCommandError,
    ReconciliationState,
    ValidationResponse,
    parse_command,
)
from domain.models.commands import RECONCILE_OPS
from domain.services import APPLIED_MAPPING_CONFIDENCE, apply_reconcile, restore_state

logger = logging.getLogger(__name__)


@dataclass
class ReconcileMappingsResult:
    """Result of the ReconcileMappings use case execution."""

    success: bool
    validation: Optional[ValidationResponse] = None
    confirmed: List[str] = field(default_factory=list)
    can_proceed: bool = False
    final_can_export: bool = False
    blocked_reason: str = ""
    messages: List[str] = field(default_factory=list)
    error: Optional[str] = None
    validation_errors: List[str] = field(default_factory=list)


class ReconcileMappingsUseCase:
    """
    Use case for evolving a validation response as the user maps exercises.

    Usage:
        >>> use_case = ReconcileMappingsUseCase()
        >>> result = use_case.execute(
        ...     validation=response_json,
        ...     confirmed=[],
        ...     commands=[{"op": "confirm_all"}],
        ... )
        >>> result.final_can_export
        True
    """

    def __init__(self, applied_confidence: float = APPLIED_MAPPING_CONFIDENCE) -> None:
        """
        Args:
            applied_confidence: Confidence given to user-applied/confirmed mappings
        """
        self._applied_confidence = applied_confidence

    def execute(
        self,
        validation: Any,
        confirmed: Iterable[str],
        commands: List[Any],
    ) -> ReconcileMappingsResult:
        """
        Execute the reconciliation workflow.

        Args:
            validation: ValidationResponse or its JSON shape
            confirmed: Names the user confirmed earlier in the session
            commands: Reconciliation commands (models or raw dicts)

        Returns:
            ReconcileMappingsResult with the updated response and readiness flags
        """
        try:
            state = restore_state(validation, confirmed)

            parsed: list = []
            validation_errors: List[str] = []
            for index, raw in enumerate(commands):
                try:
                    command = parse_command(raw)
                except EditorCommandError as e:
                    detail = f": {'; '.join(e.errors)}" if e.errors else ""
                    validation_errors.append(f"commands[{index}]: {e.message}{detail}")
                    continue
                if command.op not in RECONCILE_OPS:
                    validation_errors.append(
                        f"commands[{index}]: '{command.op}' is not a reconciliation command"
                    )
                    continue
                parsed.append(command)

            if validation_errors:
                return ReconcileMappingsResult(
                    success=False,
                    error="Command validation failed",
                    validation_errors=validation_errors,
                )

            messages: List[str] = []
            for command in parsed:
                updated = apply_reconcile(state, command, self._applied_confidence)
                messages.extend(self._describe(command, state, updated))
                state = updated

            return self._result(state, messages)

        except Exception as e:
            logger.exception(f"ReconcileMappings use case failed: {e}")
            return ReconcileMappingsResult(success=False, error=str(e))

    @staticmethod
    def _describe(
        command: Any, before: ReconciliationState, after: ReconciliationState
    ) -> List[str]:
        if isinstance(command, ConfirmAll):
            if after is before:
                return ["All mappings are already confirmed"]
            added = len(after.confirmed) - len(before.confirmed)
            return [f"Confirmed {added} mapping(s)"]
        if isinstance(command, (ApplyMapping, AcceptMapping)) and after is before:
            if command.name not in before.records:
                return [f"'{command.name}' is not in any validation bucket"]
        return []

    @staticmethod
    def _result(state: ReconciliationState, messages: List[str]) -> ReconcileMappingsResult:
        return ReconcileMappingsResult(
            success=True,
            validation=state.to_response(),
            confirmed=sorted(state.confirmed),
            can_proceed=state.can_proceed,
            final_can_export=state.final_can_export,
            blocked_reason=state.export_blocked_reason(),
            messages=messages,
        )
