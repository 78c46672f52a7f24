"""
Pydantic schemas for the workout editor API.

Request models for the editing, reconciliation and export preparation
endpoints. Workouts are accepted as raw blocks JSON since generator output
is loosely typed; the converter normalizes them.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from domain.models import DeviceId, ValidationResponse


# =============================================================================
# Editor
# =============================================================================


class EditWorkoutRequest(BaseModel):
    """Workout plus structural edit commands to apply in order."""
    workout: Optional[Any] = None
    commands: List[Dict[str, Any]] = Field(default_factory=list)


class NormalizeWorkoutRequest(BaseModel):
    workout: Optional[Any] = None


# =============================================================================
# Validation / Reconciliation
# =============================================================================


class ReconcileRequest(BaseModel):
    """Current validation response plus mapping decisions."""
    validation: ValidationResponse
    confirmed: List[str] = Field(default_factory=list)
    commands: List[Dict[str, Any]] = Field(default_factory=list)


class RevalidateRequest(BaseModel):
    workout: Optional[Any] = None


# =============================================================================
# Export
# =============================================================================


class PrepareExportRequest(BaseModel):
    workout: Optional[Any] = None
    validation: ValidationResponse
    confirmed: List[str] = Field(default_factory=list)
    device: DeviceId
