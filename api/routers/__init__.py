"""
API routers for the workout editor API.

Each router handles a specific domain of endpoints:
- health: Liveness check
- editor: Structural editing and normalization
- validation: Mapping reconciliation and re-validation
- export: Export preparation
"""

from api.routers.editor import router as editor_router
from api.routers.export import router as export_router
from api.routers.health import router as health_router
from api.routers.validation import router as validation_router

__all__ = [
    "health_router",
    "editor_router",
    "validation_router",
    "export_router",
]
