"""
Domain converters between the blocks JSON wire format and WorkoutStructure.

- blocks_to_structure: raw generator / web editor JSON -> WorkoutStructure
- structure_to_blocks: WorkoutStructure -> blocks JSON

All converters are pure functions with no side effects.

Examples:
    >>> from domain.converters import blocks_to_structure, structure_to_blocks

    >>> doc = blocks_to_structure({"title": "Test", "blocks": [...]})
    >>> payload = structure_to_blocks(doc)
"""

from domain.converters.blocks_to_structure import blocks_to_structure, structure_to_blocks

__all__ = [
    "blocks_to_structure",
    "structure_to_blocks",
]
