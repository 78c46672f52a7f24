"""
Shared fixtures for the workout editor test suite.
"""

import pytest
from fastapi.testclient import TestClient

from api.deps import get_validation_service
from backend.main import create_app
from backend.settings import Settings
from domain.models import Block, Exercise, Superset, WorkoutStructure
from tests.fakes import FakeValidationService


# =============================================================================
# Documents
# =============================================================================


@pytest.fixture
def identified_workout() -> WorkoutStructure:
    """Two identified blocks: a plain block and one with a superset in the middle."""
    return WorkoutStructure(
        title="Upper Body",
        source="manual",
        blocks=[
            Block(
                id="b-warm",
                label="Warm-up",
                exercises=[Exercise(id="e-jj", name="Jumping Jacks", duration_sec=60, position=0)],
            ),
            Block(
                id="b-main",
                label="Main",
                exercises=[
                    Exercise(id="e-bench", name="Bench Press", sets=4, reps=8, position=0),
                    Exercise(id="e-row", name="Row", sets=4, reps=10, position=2),
                ],
                supersets=[
                    Superset(
                        id="s-arms",
                        position=1,
                        rest_between_sec=60,
                        exercises=[
                            Exercise(id="e-curl", name="Curl", reps=12),
                            Exercise(id="e-push", name="Pushdown", reps=12),
                        ],
                    )
                ],
            ),
        ],
    )


@pytest.fixture
def validation_payload() -> dict:
    """Validator response with one entry per bucket."""
    return {
        "total_exercises": 3,
        "validated_exercises": [
            {
                "original_name": "Bench Press",
                "mapped_to": "Barbell Bench Press",
                "confidence": 0.92,
                "status": "valid",
            }
        ],
        "needs_review": [
            {
                "original_name": "Squat",
                "mapped_to": "Barbell Back Squat",
                "confidence": 0.6,
                "status": "needs_review",
            }
        ],
        "unmapped_exercises": [
            {
                "original_name": "Wall Thing",
                "mapped_to": None,
                "confidence": 0.0,
                "status": "unmapped",
            }
        ],
        "can_proceed": False,
    }


# =============================================================================
# API
# =============================================================================


@pytest.fixture
def fake_validation_service() -> FakeValidationService:
    return FakeValidationService()


@pytest.fixture
def app(fake_validation_service):
    """Test app with the validation service replaced by an in-memory fake."""
    application = create_app(Settings(environment="test", _env_file=None))
    application.dependency_overrides[get_validation_service] = lambda: fake_validation_service
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
