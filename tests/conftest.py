from __future__ import annotations

from pathlib import Path

import pytest

from repositories.race_marker_repository import RaceMarkerRepositoryMock
from service.file_storage_service import LocalFileStorageService
from service.race_upload_service import RaceUploadServiceImpl
from tests.helpers import ServiceFactory, build_upload_service


@pytest.fixture
def marker_repository() -> RaceMarkerRepositoryMock:
    return RaceMarkerRepositoryMock()


@pytest.fixture
def bucket_path(tmp_path: Path) -> Path:
    return tmp_path / "bucket"


@pytest.fixture
def storage_service(bucket_path: Path) -> LocalFileStorageService:
    return LocalFileStorageService(base_path=str(bucket_path))


@pytest.fixture
def upload_service(marker_repository, storage_service) -> RaceUploadServiceImpl:
    return build_upload_service(marker_repository, storage_service)


@pytest.fixture
def service_factory(upload_service) -> ServiceFactory:
    return ServiceFactory(upload_service)


@pytest.fixture
def client(service_factory):
    """TestClient whose upload route uses the in-memory marker store and a tmp bucket."""
    from fastapi.testclient import TestClient

    from dependencies.race_dependencies import get_race_upload_service_factory
    from main import app

    app.dependency_overrides[get_race_upload_service_factory] = lambda: service_factory
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
