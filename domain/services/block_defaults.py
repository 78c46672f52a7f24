"""
Structure defaults and block summaries.

Switching a block's structure resets every structure parameter: the new
structure's defaults are applied and all other parameters are cleared.
"""

from typing import Dict, List, Optional

from domain.models import Block, BlockStructure

STRUCTURE_FIELDS = (
    "rounds",
    "sets",
    "time_cap_sec",
    "time_work_sec",
    "time_rest_sec",
    "rest_between_rounds_sec",
    "rest_between_sets_sec",
)

_DEFAULTS: Dict[BlockStructure, Dict[str, int]] = {
    BlockStructure.TABATA: {"rounds": 8, "time_work_sec": 20, "time_rest_sec": 10},
    BlockStructure.EMOM: {"time_work_sec": 30, "rounds": 10},
    BlockStructure.AMRAP: {"time_cap_sec": 600, "rest_between_rounds_sec": 0},
    BlockStructure.FOR_TIME: {"time_cap_sec": 1800},
    BlockStructure.SUPERSET: {"rest_between_rounds_sec": 60},
    BlockStructure.CIRCUIT: {"rest_between_rounds_sec": 90},
    BlockStructure.ROUNDS: {"rounds": 3, "rest_between_rounds_sec": 60},
    BlockStructure.SETS: {"sets": 4, "rest_between_sets_sec": 120},
}


def structure_defaults(structure: Optional[BlockStructure]) -> Dict[str, Optional[int]]:
    """
    Full set of structure parameters for ``structure``.

    Every key in STRUCTURE_FIELDS is present; parameters the structure does
    not use are None. ``regular`` and ``None`` clear everything.
    """
    values: Dict[str, Optional[int]] = {name: None for name in STRUCTURE_FIELDS}
    if structure is not None:
        values.update(_DEFAULTS.get(structure, {}))
    return values


def _clock(seconds: int) -> str:
    return f"{seconds // 60}:{seconds % 60:02d}"


def block_summary(block: Block) -> str:
    """
    One-line description of a block's structure parameters.

    Falls back to the exercise count when the structure has nothing to show.

    Examples:
        >>> block_summary(Block(structure=BlockStructure.TABATA, rounds=8,
        ...                     time_work_sec=20, time_rest_sec=10))
        '20:10 • x 8'
        >>> block_summary(Block(label="Empty"))
        '0 exercises'
    """
    parts: List[str] = []
    structure = block.structure

    if structure in (BlockStructure.SUPERSET, BlockStructure.CIRCUIT, BlockStructure.ROUNDS):
        if block.rounds:
            parts.append(f"{block.rounds} rounds")
        if block.rest_between_rounds_sec:
            parts.append(f"{block.rest_between_rounds_sec}s rest")
    elif structure == BlockStructure.TABATA:
        if block.time_work_sec and block.time_rest_sec:
            parts.append(f"{block.time_work_sec}:{block.time_rest_sec}")
        if block.rounds:
            parts.append(f"x {block.rounds}")
    elif structure == BlockStructure.EMOM:
        if block.time_work_sec:
            parts.append(f"{block.time_work_sec}s work")
        if block.rounds:
            parts.append(f"{block.rounds} min")
    elif structure == BlockStructure.AMRAP:
        if block.time_cap_sec:
            parts.append(f"{_clock(block.time_cap_sec)} AMRAP")
    elif structure == BlockStructure.FOR_TIME:
        if block.rounds:
            parts.append(f"{block.rounds} rounds")
        if block.time_cap_sec:
            parts.append(f"{_clock(block.time_cap_sec)} cap")
    elif structure == BlockStructure.SETS:
        if block.sets:
            parts.append(f"{block.sets} sets")
        if block.rest_between_sets_sec:
            parts.append(f"{block.rest_between_sets_sec}s rest")

    if parts:
        return " • ".join(parts)
    count = block.exercise_count
    return f"{count} exercise{'' if count == 1 else 's'}"
