"""
Workout editor router.

Endpoints for structural editing of workout documents:
- POST /editor/apply: apply a batch of edit commands
- POST /editor/normalize: assign missing ids and summarize a workout
"""

import logging

from fastapi import APIRouter, Depends

from api.deps import get_edit_workout_use_case
from api.schemas import EditWorkoutRequest, NormalizeWorkoutRequest
from application.use_cases import EditWorkoutUseCase
from domain.converters import blocks_to_structure, structure_to_blocks
from domain.services import block_summary, ensure_ids, summarize

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/editor",
    tags=["Editor"],
)


@router.post("/apply")
def apply_edits(
    request: EditWorkoutRequest,
    use_case: EditWorkoutUseCase = Depends(get_edit_workout_use_case),
):
    """Apply structural edit commands to a workout.

    Commands run in order. A command that leaves the workout unchanged
    (stale index, same-position move) is reported under ``skipped``.
    Delegates business logic to EditWorkoutUseCase.
    """
    result = use_case.execute(workout=request.workout, commands=request.commands)

    if not result.success:
        return {
            "success": False,
            "message": result.error or "Failed to apply edits",
            "validation_errors": result.validation_errors,
        }

    return {
        "success": True,
        "workout": structure_to_blocks(result.workout),
        "changes_applied": result.changes_applied,
        "skipped": [{"index": s.index, "op": s.op} for s in result.skipped],
    }


@router.post("/normalize")
def normalize_workout(request: NormalizeWorkoutRequest):
    """Return the workout with every block, superset and exercise identified."""
    doc = ensure_ids(blocks_to_structure(request.workout))
    summary = summarize(doc)
    logger.info(
        f"Normalized workout: {summary.block_count} block(s), "
        f"{summary.exercise_count} exercise(s)"
    )
    return {
        "success": True,
        "workout": structure_to_blocks(doc),
        "summary": {
            "block_count": summary.block_count,
            "exercise_count": summary.exercise_count,
            "superset_count": summary.superset_count,
        },
        "block_summaries": [block_summary(block) for block in doc.blocks],
    }
