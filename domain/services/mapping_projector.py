"""
Projection of confirmed mappings onto a workout document.

Substitutes canonical (device-matched) exercise names into the document
before export. Devices that need traceability keep the pre-mapping name in
the exercise notes.
"""

import logging
from typing import Dict, Iterable, Mapping, Optional, Union

from domain.converters import blocks_to_structure
from domain.models import (
    DEFAULT_TRACEABLE_DEVICES,
    Block,
    DeviceId,
    Exercise,
    ReconciliationState,
    WorkoutStructure,
)

logger = logging.getLogger(__name__)


def _mapping_table(
    mappings: Union[ReconciliationState, Mapping[str, str], None],
) -> Dict[str, str]:
    if mappings is None:
        return {}
    if isinstance(mappings, ReconciliationState):
        return mappings.confirmed_mappings()
    return {name: mapped for name, mapped in mappings.items() if mapped and mapped != name}


def _device_value(device: Union[DeviceId, str, None]) -> Optional[str]:
    if device is None:
        return None
    return device.value if isinstance(device, DeviceId) else str(device).lower()


def annotate_original(notes: Optional[str], original_name: str) -> str:
    """Append the original name to ``notes`` without overwriting them."""
    if notes:
        return f"{notes} (Original: {original_name})"
    return f"Original: {original_name}"


def project(
    doc: Optional[WorkoutStructure],
    mappings: Union[ReconciliationState, Mapping[str, str], None],
    target_device: Union[DeviceId, str, None] = None,
    traceable_devices: Iterable[str] = DEFAULT_TRACEABLE_DEVICES,
) -> WorkoutStructure:
    """
    Replace exercise names with their confirmed mapped names.

    Args:
        doc: Document to project; anything that is not a WorkoutStructure is
            normalized first (None becomes an empty document)
        mappings: ReconciliationState (its confirmed mappings are used) or a
            plain ``{original_name: mapped_name}`` table
        target_device: Export target
        traceable_devices: Device ids whose exports keep
            ``"Original: <name>"`` in the exercise notes

    Returns:
        A projected document. Blocks without a mapped exercise are shared
        with the input; with an empty mapping table the input itself is
        returned.
    """
    if not isinstance(doc, WorkoutStructure):
        doc = blocks_to_structure(doc)
    table = _mapping_table(mappings)
    if not table:
        return doc

    traceable = _device_value(target_device) in {
        _device_value(d) for d in traceable_devices
    }
    renamed = 0

    def project_exercise(ex: Exercise) -> Exercise:
        nonlocal renamed
        mapped = table.get(ex.name)
        if mapped is None:
            return ex
        renamed += 1
        update = {"name": mapped}
        if traceable:
            update["notes"] = annotate_original(ex.notes, ex.name)
        return ex.model_copy(update=update)

    def project_block(block: Block) -> Block:
        exercises = [project_exercise(ex) for ex in block.exercises]
        supersets = []
        for ss in block.supersets:
            members = [project_exercise(ex) for ex in ss.exercises]
            if all(a is b for a, b in zip(members, ss.exercises)):
                supersets.append(ss)
            else:
                supersets.append(ss.model_copy(update={"exercises": members}))

        untouched = all(a is b for a, b in zip(exercises, block.exercises)) and all(
            a is b for a, b in zip(supersets, block.supersets)
        )
        if untouched:
            return block
        return block.model_copy(update={"exercises": exercises, "supersets": supersets})

    blocks = [project_block(block) for block in doc.blocks]
    if not renamed:
        return doc

    logger.info(
        f"Projected {renamed} exercise name(s) for device "
        f"{_device_value(target_device)} (traceable={traceable})"
    )
    return doc.model_copy(update={"blocks": blocks})
