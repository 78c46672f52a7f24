"""
Validation router.

Endpoints for reconciling exercise-name validation results:
- POST /validation/reconcile: apply / accept / confirm-all mapping decisions
- POST /validation/revalidate: re-run the external validator after edits
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_reconcile_mappings_use_case, get_revalidate_workout_use_case
from api.schemas import ReconcileRequest, RevalidateRequest
from application.use_cases import ReconcileMappingsUseCase, RevalidateWorkoutUseCase

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/validation",
    tags=["Validation"],
)


@router.post("/reconcile")
def reconcile_mappings(
    request: ReconcileRequest,
    use_case: ReconcileMappingsUseCase = Depends(get_reconcile_mappings_use_case),
):
    """Apply mapping decisions and report whether the user may proceed or export."""
    result = use_case.execute(
        validation=request.validation,
        confirmed=request.confirmed,
        commands=request.commands,
    )

    if not result.success:
        return {
            "success": False,
            "message": result.error or "Failed to reconcile mappings",
            "validation_errors": result.validation_errors,
        }

    return {
        "success": True,
        "validation": result.validation.model_dump(mode="json"),
        "confirmed": result.confirmed,
        "can_proceed": result.can_proceed,
        "final_can_export": result.final_can_export,
        "blocked_reason": result.blocked_reason,
        "messages": result.messages,
    }


@router.post("/revalidate")
async def revalidate_workout(
    request: RevalidateRequest,
    use_case: RevalidateWorkoutUseCase = Depends(get_revalidate_workout_use_case),
):
    """Send the edited workout to the validator and start a fresh reconciliation."""
    result = await use_case.execute(workout=request.workout)

    if not result.success:
        raise HTTPException(
            status_code=result.status_code or 500,
            detail=result.error or "Validation failed",
        )

    return {
        "success": True,
        "validation": result.validation.model_dump(mode="json"),
        "confirmed": [],
        "can_proceed": result.can_proceed,
        "final_can_export": result.final_can_export,
    }
