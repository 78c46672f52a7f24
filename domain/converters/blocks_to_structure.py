"""
Converter: blocks JSON (generator / web editor wire format) <-> WorkoutStructure.

The generator output is loosely typed: numbers arrive as strings, legacy
field names and camelCase variants are mixed in, and block-level exercise
lists may contain ``null`` holes. ``blocks_to_structure`` normalizes all of
that into a valid ``WorkoutStructure`` and never raises; anything that is
not an object becomes an empty-blocks document.
"""

import logging
import math
import re
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from domain.models import (
    Block,
    BlockStructure,
    Exercise,
    RestOverride,
    RestType,
    Superset,
    WarmupActivity,
    WarmupConfig,
    WorkoutSettings,
    WorkoutStructure,
)
from domain.models.block import legacy_entries

logger = logging.getLogger(__name__)


def _as_int(value: Any) -> Optional[int]:
    """Coerce a wire value to a non-negative int, or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None
    return number if number >= 0 else None


def _as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number if number >= 0 else None


def _as_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _first(data: Dict[str, Any], *keys: str) -> Any:
    """Return the first non-None value among ``keys``."""
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _parse_rest_type(value: Any) -> Optional[RestType]:
    try:
        return RestType(str(value).lower()) if value is not None else None
    except ValueError:
        logger.debug(f"Unknown rest type {value!r}, ignoring")
        return None


def _parse_structure(value: Any) -> Optional[BlockStructure]:
    if not value:
        return None
    try:
        return BlockStructure(str(value).lower())
    except ValueError:
        logger.debug(f"Unknown structure value {value!r}, treating as unstructured")
        return None


def _parse_reps(ex_data: Dict[str, Any]) -> tuple[Optional[int], Optional[str]]:
    """
    Resolve (reps, reps_range).

    Integer-like reps win; a non-numeric reps string ("8-12", "AMRAP") is
    treated as a range when no explicit range is given.
    """
    reps_raw = ex_data.get("reps")
    reps_range = _as_str(ex_data.get("reps_range"))

    reps = None
    if isinstance(reps_raw, (int, float)) and not isinstance(reps_raw, bool):
        reps = _as_int(reps_raw)
    elif isinstance(reps_raw, str) and reps_raw.strip():
        text = reps_raw.strip()
        if re.fullmatch(r"\d+", text):
            reps = int(text)
        elif reps_range is None:
            reps_range = text

    if reps is not None and reps_range:
        logger.warning(
            f"Exercise {ex_data.get('name')!r} has both reps and reps_range; keeping reps"
        )
        reps_range = None
    return reps, reps_range


def _convert_exercise(ex_data: Any, position: Optional[int] = None) -> Optional[Exercise]:
    """Convert one exercise dict; returns None for non-object entries."""
    if not isinstance(ex_data, dict):
        return None

    reps, reps_range = _parse_reps(ex_data)
    duration = _as_int(_first(ex_data, "duration_sec", "duration_seconds"))
    distance = _as_float(ex_data.get("distance_m"))
    distance_range = _as_str(ex_data.get("distance_range"))

    if duration is not None and (distance is not None or distance_range):
        logger.warning(
            f"Exercise {ex_data.get('name')!r} has both duration and distance; keeping duration"
        )
        distance, distance_range = None, None

    fields = {
        "id": _as_str(ex_data.get("id")),
        "name": str(ex_data.get("name") or ""),
        "sets": _as_int(ex_data.get("sets")),
        "reps": reps,
        "reps_range": reps_range,
        "duration_sec": duration,
        "distance_m": distance,
        "distance_range": distance_range,
        "rest_sec": _as_int(_first(ex_data, "rest_sec", "rest_seconds")),
        "rest_type": _parse_rest_type(ex_data.get("rest_type")),
        "warmup_sets": _as_int(ex_data.get("warmup_sets")),
        "warmup_reps": _as_int(ex_data.get("warmup_reps")),
        "type": _as_str(ex_data.get("type")),
        "notes": ex_data.get("notes") if isinstance(ex_data.get("notes"), str) else None,
        "follow_along_url": _as_str(
            _first(ex_data, "follow_along_url", "followAlongUrl")
        ),
        "position": position,
    }

    try:
        return Exercise(**fields)
    except ValidationError as e:
        logger.warning(f"Dropping invalid fields from exercise {fields['name']!r}: {e}")
        return Exercise(id=fields["id"], name=fields["name"], position=position)


def _convert_superset(ss_data: Any, position: Optional[int] = None) -> Optional[Superset]:
    if not isinstance(ss_data, dict):
        return None
    exercises = [
        ex
        for ex in (_convert_exercise(e) for e in (ss_data.get("exercises") or []))
        if ex is not None
    ]
    return Superset(
        id=_as_str(ss_data.get("id")),
        exercises=exercises,
        rest_between_sec=_as_int(ss_data.get("rest_between_sec")),
        rounds=_as_int(ss_data.get("rounds")) or None,
        rest_type=_parse_rest_type(ss_data.get("rest_type")),
        position=position,
    )


def _parse_warmup(data: Any) -> Optional[WarmupConfig]:
    """Accept nested ``{enabled, activity, duration_sec}`` or camelCase variants."""
    if not isinstance(data, dict):
        return None
    try:
        activity = WarmupActivity(str(data.get("activity") or "stretching"))
    except ValueError:
        activity = WarmupActivity.CUSTOM
    duration = _as_int(_first(data, "duration_sec", "durationSec"))
    return WarmupConfig(
        enabled=bool(data.get("enabled")),
        activity=activity,
        duration_sec=duration if duration is not None else 300,
    )


def _parse_block_warmup(block_data: Dict[str, Any]) -> Optional[WarmupConfig]:
    if isinstance(block_data.get("warmup"), dict):
        return _parse_warmup(block_data["warmup"])
    if block_data.get("warmup_enabled") is not None:
        return _parse_warmup(
            {
                "enabled": block_data.get("warmup_enabled"),
                "activity": block_data.get("warmup_activity"),
                "duration_sec": block_data.get("warmup_duration_sec"),
            }
        )
    return None


def _parse_rest_override(block_data: Dict[str, Any]) -> Optional[RestOverride]:
    data = _first(block_data, "rest_override", "restOverride")
    if not isinstance(data, dict):
        return None
    return RestOverride(
        enabled=bool(data.get("enabled")),
        rest_type=_parse_rest_type(_first(data, "rest_type", "restType", "type"))
        or RestType.TIMED,
        rest_sec=_as_int(_first(data, "rest_sec", "restSec", "seconds")),
    )


def _explicit_position(data: Any) -> Optional[int]:
    if isinstance(data, dict):
        return _as_int(data.get("position"))
    return None


def _convert_block(block_data: Any) -> Optional[Block]:
    """Convert one block dict, laying out entry positions."""
    if not isinstance(block_data, dict):
        logger.warning(f"Skipping non-object block: {type(block_data).__name__!r}")
        return None

    raw_exercises = block_data.get("exercises") or []
    raw_supersets = block_data.get("supersets") or []
    if not isinstance(raw_exercises, list):
        raw_exercises = []
    if not isinstance(raw_supersets, list):
        raw_supersets = []

    raw_entries = [e for e in raw_exercises if isinstance(e, dict)] + [
        s for s in raw_supersets if isinstance(s, dict)
    ]
    has_positions = bool(raw_entries) and all(
        _explicit_position(e) is not None for e in raw_entries
    )

    if has_positions:
        exercises = [_convert_exercise(e, _explicit_position(e)) for e in raw_exercises]
        supersets = [_convert_superset(s, _explicit_position(s)) for s in raw_supersets]
        exercises = sorted((e for e in exercises if e), key=lambda e: e.position)
        supersets = sorted((s for s in supersets if s), key=lambda s: s.position)
    else:
        # A leading null hole puts every block-level exercise after the supersets.
        trailing_only = bool(raw_exercises) and raw_exercises[0] is None
        converted = [e for e in (_convert_exercise(x) for x in raw_exercises) if e]
        supersets = [s for s in (_convert_superset(x) for x in raw_supersets) if s]
        if trailing_only:
            offset = len(supersets)
            supersets = [
                ss.model_copy(update={"position": i}) for i, ss in enumerate(supersets)
            ]
            exercises = [
                ex.model_copy(update={"position": offset + i})
                for i, ex in enumerate(converted)
            ]
        else:
            layout = legacy_entries(converted, supersets)
            exercises = [
                e.item.model_copy(update={"position": e.position})
                for e in layout
                if e.kind == "exercise"
            ]
            supersets = [
                e.item.model_copy(update={"position": e.position})
                for e in layout
                if e.kind == "superset"
            ]

    return Block(
        id=_as_str(block_data.get("id")),
        label=str(block_data.get("label") or block_data.get("name") or ""),
        structure=_parse_structure(block_data.get("structure")),
        exercises=exercises,
        supersets=supersets,
        rounds=_as_int(block_data.get("rounds")),
        sets=_as_int(block_data.get("sets")),
        time_cap_sec=_as_int(block_data.get("time_cap_sec")),
        time_work_sec=_as_int(block_data.get("time_work_sec")),
        time_rest_sec=_as_int(block_data.get("time_rest_sec")),
        rest_between_rounds_sec=_as_int(
            _first(block_data, "rest_between_rounds_sec", "rest_between_sec")
        ),
        rest_between_sets_sec=_as_int(block_data.get("rest_between_sets_sec")),
        rest_override=_parse_rest_override(block_data),
        warmup=_parse_block_warmup(block_data),
    )


def _parse_settings(data: Any) -> Optional[WorkoutSettings]:
    if not isinstance(data, dict):
        return None
    return WorkoutSettings(
        default_rest_type=_parse_rest_type(
            _first(data, "default_rest_type", "defaultRestType")
        )
        or RestType.BUTTON,
        default_rest_sec=_as_int(_first(data, "default_rest_sec", "defaultRestSec")),
        workout_warmup=_parse_warmup(_first(data, "workout_warmup", "workoutWarmup")),
    )


def blocks_to_structure(data: Any) -> WorkoutStructure:
    """
    Normalize raw blocks JSON into a WorkoutStructure.

    Accepts the bare document or the ``{"blocks_json": {...}}`` envelope used
    by the workflow endpoints. Never raises: a non-object document (None, a
    list, a string) becomes an empty-blocks document.

    Args:
        data: Raw JSON-decoded value

    Returns:
        A WorkoutStructure (ids are not assigned here; see ensure_ids)
    """
    if isinstance(data, WorkoutStructure):
        return data
    if isinstance(data, dict) and isinstance(data.get("blocks_json"), dict):
        data = data["blocks_json"]
    if not isinstance(data, dict):
        logger.warning(
            f"Workout document is not an object ({type(data).__name__}); "
            "using empty document"
        )
        return WorkoutStructure()

    raw_blocks = data.get("blocks")
    if not isinstance(raw_blocks, list):
        raw_blocks = []

    blocks: List[Block] = [b for b in (_convert_block(b) for b in raw_blocks) if b]

    return WorkoutStructure(
        title=str(data.get("title") or ""),
        source=str(data.get("source") or ""),
        workout_type=_as_str(data.get("workout_type")),
        settings=_parse_settings(data.get("settings")),
        blocks=blocks,
    )


def structure_to_blocks(doc: WorkoutStructure) -> Dict[str, Any]:
    """
    Serialize a WorkoutStructure to the blocks JSON handed to collaborators.

    Block-level exercises and supersets are emitted in position order with
    their explicit ``position`` so the display order survives the round trip.
    """
    return doc.model_dump(mode="json", exclude_none=True)
