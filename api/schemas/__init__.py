"""
Pydantic schemas for API requests.

Organized by feature/domain:
- editor: Editing, reconciliation and export preparation requests
"""

from api.schemas.editor import (
    EditWorkoutRequest,
    NormalizeWorkoutRequest,
    PrepareExportRequest,
    ReconcileRequest,
    RevalidateRequest,
)

__all__ = [
    "EditWorkoutRequest",
    "NormalizeWorkoutRequest",
    "PrepareExportRequest",
    "ReconcileRequest",
    "RevalidateRequest",
]
