"""
Pure domain services over the workout document and reconciliation state.

- identity: id assignment, fingerprints, empty documents
- structural_editor: copy-on-write structural edits
- validation_reconciler: mapping classification state machine
- mapping_projector: canonical name substitution before export
- block_defaults: structure defaults and block summaries
"""

from domain.services.block_defaults import block_summary, structure_defaults
from domain.services.identity import (
    WorkoutSummary,
    clone_block,
    create_empty_workout,
    document_fingerprint,
    ensure_ids,
    generate_id,
    has_all_ids,
    summarize,
)
from domain.services.mapping_projector import project
from domain.services.structural_editor import (
    add_block,
    add_exercise,
    add_superset,
    apply_edit,
    change_block_structure,
    count_all_exercises,
    delete_block,
    delete_exercise,
    delete_superset,
    move_block,
    move_exercise,
    set_rest_override,
    update_block,
    update_exercise,
    update_settings,
)
from domain.services.validation_reconciler import (
    APPLIED_MAPPING_CONFIDENCE,
    accept_mapping,
    apply_mapping,
    apply_reconcile,
    confirm_all,
    load_validation,
    reload,
    restore_state,
)

__all__ = [
    # Identity
    "generate_id",
    "ensure_ids",
    "has_all_ids",
    "clone_block",
    "create_empty_workout",
    "document_fingerprint",
    "summarize",
    "WorkoutSummary",
    # Editor
    "move_block",
    "move_exercise",
    "add_exercise",
    "delete_exercise",
    "update_exercise",
    "add_superset",
    "delete_superset",
    "add_block",
    "delete_block",
    "update_block",
    "change_block_structure",
    "set_rest_override",
    "update_settings",
    "count_all_exercises",
    "apply_edit",
    "block_summary",
    "structure_defaults",
    # Reconciler
    "APPLIED_MAPPING_CONFIDENCE",
    "load_validation",
    "reload",
    "restore_state",
    "apply_mapping",
    "accept_mapping",
    "confirm_all",
    "apply_reconcile",
    # Projector
    "project",
]
