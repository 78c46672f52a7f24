"""
Unit tests for api/deps.py dependency providers.
"""

import pytest

from api.deps import (
    get_edit_workout_use_case,
    get_prepare_export_use_case,
    get_reconcile_mappings_use_case,
    get_revalidate_workout_use_case,
    get_validation_service,
)
from application.use_cases import (
    EditWorkoutUseCase,
    PrepareExportUseCase,
    ReconcileMappingsUseCase,
    RevalidateWorkoutUseCase,
)
from backend.settings import Settings
from infrastructure import MapperValidationClient
from tests.fakes import FakeValidationService


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="test",
        mapper_api_url="http://mapper.test/",
        validation_timeout_seconds=3.0,
        _env_file=None,
    )


@pytest.mark.unit
class TestProviders:
    def test_validation_service_uses_settings(self, settings):
        service = get_validation_service(settings)
        assert isinstance(service, MapperValidationClient)
        assert service._base_url == "http://mapper.test"
        assert service._timeout == 3.0

    def test_edit_use_case(self):
        assert isinstance(get_edit_workout_use_case(), EditWorkoutUseCase)

    def test_reconcile_use_case(self, settings):
        assert isinstance(get_reconcile_mappings_use_case(settings), ReconcileMappingsUseCase)

    def test_revalidate_use_case(self):
        use_case = get_revalidate_workout_use_case(FakeValidationService())
        assert isinstance(use_case, RevalidateWorkoutUseCase)

    def test_prepare_export_use_case(self, settings):
        assert isinstance(get_prepare_export_use_case(settings), PrepareExportUseCase)
