"""
PrepareExport Use Case.

Gates export on strict readiness and projects confirmed mappings onto the
workout for the selected device.

Workflow:
1. Normalize the workout and rebuild reconciliation state
2. Refuse when anything is unmapped or a mapping is unconfirmed
3. Project confirmed mappings (Original-name notes for traceable devices)
4. Return PrepareExportResult with the document to hand to exporters
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

from domain.converters import blocks_to_structure
from domain.models import (
    DEFAULT_TRACEABLE_DEVICES,
    DeviceId,
    ReconciliationState,
    WorkoutStructure,
)
from domain.services import ensure_ids, project, restore_state

logger = logging.getLogger(__name__)


@dataclass
class PrepareExportResult:
    """Result of the PrepareExport use case execution."""

    success: bool
    workout: Optional[WorkoutStructure] = None
    device: Optional[str] = None
    mappings_applied: int = 0
    blocked_reason: str = ""
    error: Optional[str] = None


class PrepareExportUseCase:
    """
    Use case for producing the document actually sent to export collaborators.

    Usage:
        >>> use_case = PrepareExportUseCase(traceable_devices={"garmin"})
        >>> result = use_case.execute(
        ...     workout=blocks_json,
        ...     reconciliation=state,
        ...     device="garmin",
        ... )
        >>> if not result.success:
        ...     print(result.blocked_reason)
    """

    def __init__(self, traceable_devices: Iterable[str] = DEFAULT_TRACEABLE_DEVICES) -> None:
        """
        Args:
            traceable_devices: Devices whose exports keep original names in notes
        """
        self._traceable_devices = frozenset(traceable_devices)

    def execute(
        self,
        workout: Any,
        reconciliation: Union[ReconciliationState, dict, None],
        device: Union[DeviceId, str],
        confirmed: Iterable[str] = (),
    ) -> PrepareExportResult:
        """
        Execute the export preparation workflow.

        Args:
            workout: WorkoutStructure or raw blocks JSON
            reconciliation: ReconciliationState, or a ValidationResponse JSON
                shape combined with ``confirmed``
            device: Target device id
            confirmed: Confirmed names when ``reconciliation`` is wire JSON

        Returns:
            PrepareExportResult with the projected workout, or the blocked reason
        """
        device_value = device.value if isinstance(device, DeviceId) else str(device).lower()
        try:
            doc = ensure_ids(blocks_to_structure(workout))
            state = (
                reconciliation
                if isinstance(reconciliation, ReconciliationState)
                else restore_state(reconciliation, confirmed)
            )

            if not state.final_can_export:
                reason = state.export_blocked_reason()
                logger.info(f"Export to {device_value} blocked: {reason}")
                return PrepareExportResult(
                    success=False, device=device_value, blocked_reason=reason
                )

            mappings = state.confirmed_mappings()
            projected = project(doc, mappings, device_value, self._traceable_devices)
            applied = sum(
                1 for before, after in zip(doc.iter_exercises(), projected.iter_exercises())
                if before.name != after.name
            )
            logger.info(f"Prepared export for {device_value}: {applied} exercise(s) renamed")
            return PrepareExportResult(
                success=True,
                workout=projected,
                device=device_value,
                mappings_applied=applied,
            )

        except Exception as e:
            logger.exception(f"PrepareExport use case failed: {e}")
            return PrepareExportResult(success=False, device=device_value, error=str(e))
