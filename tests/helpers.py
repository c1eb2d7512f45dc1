"""
tests/helpers.py

Fakes conforming to the marker store and object store interfaces.
"""

from __future__ import annotations

from contextlib import contextmanager

from models.errors import ObjectWriteError, StoreError
from repositories.race_marker_repository import RaceMarkerRepositoryMock
from service.document_validator import XMLDocumentValidator
from service.file_storage_service import LocalFileStorageService
from service.race_registrar import RaceRegistrar
from service.race_upload_service import RaceUploadServiceImpl

RACE_XML = '<race><r id="1"/></race>'
MALFORMED_RACE_XML = "<race><r></race>"


class UnavailableMarkerRepository(RaceMarkerRepositoryMock):
    """Marker store whose lookups always fail."""

    async def exists(self, race_id: str) -> bool:
        raise StoreError("Races table unavailable")


class FailingStorageService(LocalFileStorageService):
    """Object store whose writes always fail."""

    async def save_file(self, file_bytes: bytes, file_key: str, content_type: str = "application/octet-stream") -> str:
        raise ObjectWriteError(f"error uploading {file_key} to S3: AccessDenied")


class ServiceFactory:
    """Stand-in for open_race_upload_service that counts store connections."""

    def __init__(self, service):
        self.service = service
        self.opened = 0

    @contextmanager
    def __call__(self):
        self.opened += 1
        yield self.service


def build_upload_service(repository, storage) -> RaceUploadServiceImpl:
    return RaceUploadServiceImpl(XMLDocumentValidator(), RaceRegistrar(repository), storage)
