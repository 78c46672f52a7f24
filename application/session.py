"""
WorkoutSession - single authoritative store for an editing session.

Holds the workout document, the reconciliation state and the selected export
device as one immutable snapshot. Every user action goes through
``apply(command)``; listeners are notified only when the snapshot reference
changed, so "nothing changed" is a cheap identity check.

Usage:
    >>> session = WorkoutSession(workout=doc)
    >>> unsubscribe = session.subscribe(lambda snap: render(snap))
    >>> session.apply({"op": "move_block", "source_index": 0, "target_index": 2})
    >>> session.apply(LoadValidation(validation=response))
    >>> session.apply(ConfirmAll())
    >>> if session.can_export:
    ...     export(session.projected_workout())
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, List, Optional

from domain.models import (
    DEFAULT_TRACEABLE_DEVICES,
    DeviceId,
    ReconciliationState,
    SelectDevice,
    WorkoutStructure,
    parse_command,
)
from domain.models.commands import EDIT_OPS, RECONCILE_OPS
from domain.services import (
    APPLIED_MAPPING_CONFIDENCE,
    apply_edit,
    apply_reconcile,
    ensure_ids,
    project,
)

logger = logging.getLogger(__name__)

Listener = Callable[["SessionSnapshot"], None]


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable view of the session at one point in time."""

    workout: WorkoutStructure
    reconciliation: ReconciliationState
    device: Optional[DeviceId] = None


class WorkoutSession:
    """Explicit store for the workout document and its reconciliation state."""

    def __init__(
        self,
        workout: Any = None,
        reconciliation: Optional[ReconciliationState] = None,
        device: Optional[DeviceId] = None,
        traceable_devices: Iterable[str] = DEFAULT_TRACEABLE_DEVICES,
        applied_confidence: float = APPLIED_MAPPING_CONFIDENCE,
    ) -> None:
        self._snapshot = SessionSnapshot(
            workout=ensure_ids(workout),
            reconciliation=reconciliation or ReconciliationState(),
            device=device,
        )
        self._listeners: List[Listener] = []
        self._traceable_devices = frozenset(traceable_devices)
        self._applied_confidence = applied_confidence

    def get(self) -> SessionSnapshot:
        return self._snapshot

    def apply(self, command: Any) -> SessionSnapshot:
        """
        Apply one command and return the resulting snapshot.

        Args:
            command: A command model or a raw ``{"op": ...}`` dict

        Returns:
            The new snapshot, or the current one (same object) for a no-op

        Raises:
            EditorCommandError: If a raw command cannot be parsed
        """
        command = parse_command(command)
        current = self._snapshot

        if command.op in EDIT_OPS:
            workout = apply_edit(current.workout, command)
            if workout is current.workout:
                return current
            snapshot = replace(current, workout=workout)
        elif command.op in RECONCILE_OPS:
            reconciliation = apply_reconcile(
                current.reconciliation, command, self._applied_confidence
            )
            if reconciliation is current.reconciliation:
                return current
            snapshot = replace(current, reconciliation=reconciliation)
        elif isinstance(command, SelectDevice):
            device = self._resolve_device(command.device)
            if device is None or device == current.device:
                return current
            snapshot = replace(current, device=device)
        else:
            logger.warning(f"Unsupported command {command.op!r}; ignoring")
            return current

        self._snapshot = snapshot
        for listener in list(self._listeners):
            listener(snapshot)
        return snapshot

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def can_export(self) -> bool:
        """Strict export readiness of the current reconciliation state."""
        return self._snapshot.reconciliation.final_can_export

    def projected_workout(self) -> WorkoutStructure:
        """Current document with confirmed mappings substituted for the selected device."""
        snapshot = self._snapshot
        return project(
            snapshot.workout,
            snapshot.reconciliation,
            snapshot.device,
            self._traceable_devices,
        )

    @staticmethod
    def _resolve_device(value: str) -> Optional[DeviceId]:
        try:
            return DeviceId(value.lower())
        except ValueError:
            logger.warning(f"Unknown device {value!r}; keeping current selection")
            return None
