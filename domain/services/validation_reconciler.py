"""
Validation reconciliation state machine.

Classification is a partition: ``ReconciliationState.records`` maps each
``original_name`` to exactly one ClassificationRecord, and the three bucket
lists are derived from it. Transitions replace one record at a time, so a
name can never sit in two buckets.

The confirmation set only grows. ``load_validation`` / ``reload`` are the
only transitions that start it from scratch.

Transitions never raise: unknown names are logged and leave the state
untouched (the same object is returned).
"""

import logging
from typing import Any, Iterable, Optional, Union

from pydantic import ValidationError

from domain.models import (
    AcceptMapping,
    ApplyMapping,
    ClassificationRecord,
    ConfirmAll,
    LoadValidation,
    ReconciliationState,
    ValidationResponse,
    ValidationStatus,
)

logger = logging.getLogger(__name__)

APPLIED_MAPPING_CONFIDENCE = 0.95

# Load order doubles as precedence when a name shows up in several buckets.
_LOAD_ORDER = (
    ("validated_exercises", ValidationStatus.VALID),
    ("needs_review", ValidationStatus.NEEDS_REVIEW),
    ("unmapped_exercises", ValidationStatus.UNMAPPED),
)


def load_validation(
    response: Union[ValidationResponse, dict, None],
) -> ReconciliationState:
    """
    Build reconciliation state from a validator response.

    A name listed in several buckets keeps the first by precedence
    (validated, then needs_review, then unmapped); duplicates inside one
    bucket collapse to the first occurrence. Each record's status is set to
    the bucket it was taken from. The confirmation set starts empty.
    """
    if response is None:
        return ReconciliationState()
    if isinstance(response, dict):
        try:
            response = ValidationResponse.model_validate(response)
        except ValidationError as e:
            logger.warning(f"Ignoring malformed validation response: {e}")
            return ReconciliationState()

    records = {}
    sequence = 0
    dropped = 0
    for attr, status in _LOAD_ORDER:
        for result in getattr(response, attr):
            name = result.original_name
            if name in records:
                dropped += 1
                continue
            if result.status != status:
                result = result.model_copy(update={"status": status})
            records[name] = ClassificationRecord(result=result, sequence=sequence)
            sequence += 1

    if dropped:
        logger.warning(f"Dropped {dropped} duplicate validation result(s) while loading")

    return ReconciliationState(
        records=records,
        confirmed=frozenset(),
        total_exercises=response.total_exercises,
        next_sequence=sequence,
    )


def reload(
    state: ReconciliationState, response: Union[ValidationResponse, dict, None]
) -> ReconciliationState:
    """Replace state with a fresh validator response (confirmations are reset)."""
    fresh = load_validation(response)
    if state.confirmed:
        logger.info(
            f"Validation reloaded; cleared {len(state.confirmed)} confirmation(s)"
        )
    return fresh


def restore_state(
    response: Union[ValidationResponse, dict, None], confirmed: Iterable[str] = ()
) -> ReconciliationState:
    """
    Rebuild state from its wire shape plus a previously held confirmation set.

    Confirmed names the response does not know about are dropped.
    """
    state = load_validation(response)
    names = frozenset(confirmed)
    known = frozenset(name for name in names if name in state.records)
    if len(known) != len(names):
        logger.debug(f"Dropped {len(names) - len(known)} unknown confirmed name(s)")
    return state.model_copy(update={"confirmed": known}) if known else state


def apply_mapping(
    state: ReconciliationState,
    name: str,
    mapped_to: str,
    confidence: float = APPLIED_MAPPING_CONFIDENCE,
) -> ReconciliationState:
    """
    Map ``name`` to ``mapped_to`` as chosen by the user.

    The record becomes valid with the applied confidence and the name is
    confirmed. A needs-review or unmapped record is appended to the validated
    bucket; a record already validated is updated in place.
    """
    record = state.records.get(name)
    if record is None:
        logger.warning(f"apply_mapping: {name!r} is not in any validation bucket; ignoring")
        return state
    if not mapped_to:
        logger.warning(f"apply_mapping: empty mapping for {name!r}; ignoring")
        return state

    result = record.result.model_copy(
        update={
            "mapped_to": mapped_to,
            "confidence": confidence,
            "status": ValidationStatus.VALID,
        }
    )
    sequence = record.sequence
    next_sequence = state.next_sequence
    if record.result.status != ValidationStatus.VALID:
        sequence, next_sequence = next_sequence, next_sequence + 1

    records = dict(state.records)
    records[name] = ClassificationRecord(result=result, sequence=sequence)
    logger.debug(f"Applied mapping {name!r} -> {mapped_to!r}")
    return state.model_copy(
        update={
            "records": records,
            "confirmed": state.confirmed | {name},
            "next_sequence": next_sequence,
        }
    )


def accept_mapping(
    state: ReconciliationState,
    name: str,
    confidence: float = APPLIED_MAPPING_CONFIDENCE,
) -> ReconciliationState:
    """
    Accept the suggestion already carried by ``name`` and confirm it.

    A needs-review or unmapped record moves to validated keeping its
    ``mapped_to`` (the original name when there is none); confidence is
    raised to at least ``confidence``, never lowered.
    """
    record = state.records.get(name)
    if record is None:
        logger.warning(f"accept_mapping: {name!r} is not in any validation bucket; ignoring")
        return state

    confirmed = state.confirmed | {name}
    if record.result.status == ValidationStatus.VALID:
        if name in state.confirmed:
            return state
        return state.model_copy(update={"confirmed": confirmed})

    result = record.result.model_copy(
        update={
            "mapped_to": record.result.mapped_to or record.result.original_name,
            "confidence": max(record.result.confidence, confidence),
            "status": ValidationStatus.VALID,
        }
    )
    records = dict(state.records)
    records[name] = ClassificationRecord(result=result, sequence=state.next_sequence)
    return state.model_copy(
        update={
            "records": records,
            "confirmed": confirmed,
            "next_sequence": state.next_sequence + 1,
        }
    )


def confirm_all(
    state: ReconciliationState, confidence: float = APPLIED_MAPPING_CONFIDENCE
) -> ReconciliationState:
    """
    Confirm every unconfirmed mapping in needs_review and validated.

    Exact matches (``mapped_to == original_name``) need no confirmation.
    Confirmed needs-review records migrate to validated. With nothing to
    confirm the state is returned unchanged.
    """
    pending = state.unconfirmed_mappings
    if not pending:
        logger.info("All mappings are already confirmed")
        return state

    records = dict(state.records)
    next_sequence = state.next_sequence
    for result in pending:
        record = records[result.original_name]
        raised = max(result.confidence, confidence)
        if result.status == ValidationStatus.NEEDS_REVIEW:
            records[result.original_name] = ClassificationRecord(
                result=result.model_copy(
                    update={"status": ValidationStatus.VALID, "confidence": raised}
                ),
                sequence=next_sequence,
            )
            next_sequence += 1
        elif raised != result.confidence:
            records[result.original_name] = record.model_copy(
                update={"result": result.model_copy(update={"confidence": raised})}
            )

    logger.info(f"Confirmed {len(pending)} mapping(s)")
    return state.model_copy(
        update={
            "records": records,
            "confirmed": state.confirmed | {r.original_name for r in pending},
            "next_sequence": next_sequence,
        }
    )


def apply_reconcile(
    state: Optional[ReconciliationState],
    command: Any,
    confidence: float = APPLIED_MAPPING_CONFIDENCE,
) -> ReconciliationState:
    """
    Apply one reconciliation command.

    Raises:
        TypeError: If ``command`` is not a reconciliation command
    """
    if isinstance(command, LoadValidation):
        return reload(state or ReconciliationState(), command.validation)
    state = state or ReconciliationState()
    if isinstance(command, ApplyMapping):
        return apply_mapping(state, command.name, command.mapped_to, confidence)
    if isinstance(command, AcceptMapping):
        return accept_mapping(state, command.name, confidence)
    if isinstance(command, ConfirmAll):
        return confirm_all(state, confidence)
    raise TypeError(f"Not a reconciliation command: {type(command).__name__}")
