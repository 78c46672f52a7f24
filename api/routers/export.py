"""
Export preparation router.

Produces the workout document handed to device exporters once every
exercise is mapped and every mapping is confirmed.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_prepare_export_use_case
from api.schemas import PrepareExportRequest
from application.use_cases import PrepareExportUseCase
from domain.converters import structure_to_blocks

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/export",
    tags=["Export"],
)


@router.post("/prepare")
def prepare_export(
    request: PrepareExportRequest,
    use_case: PrepareExportUseCase = Depends(get_prepare_export_use_case),
):
    """Project confirmed mappings onto the workout for the selected device.

    Returns 409 while any exercise is unmapped or a mapping is unconfirmed.
    """
    result = use_case.execute(
        workout=request.workout,
        reconciliation=request.validation.model_dump(mode="json"),
        device=request.device,
        confirmed=request.confirmed,
    )

    if result.blocked_reason:
        raise HTTPException(status_code=409, detail=result.blocked_reason)
    if not result.success:
        raise HTTPException(
            status_code=500,
            detail=result.error or "Failed to prepare export",
        )

    return {
        "success": True,
        "device": result.device,
        "workout": structure_to_blocks(result.workout),
        "mappings_applied": result.mappings_applied,
    }
