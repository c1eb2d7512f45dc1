from abc import ABC, abstractmethod
import logging
from models.race_upload import UploadResult
from service.document_validator import DocumentValidator
from service.file_storage_service import FileStorageService
from service.race_registrar import RaceRegistrar

logger = logging.getLogger(__name__)

RACE_DOCUMENT_EXTENSION = ".xml"
RACE_DOCUMENT_CONTENT_TYPE = "application/xml"


def race_storage_key(race_id: int) -> str:
    """Object key for a race document: decimal id plus the .xml suffix."""
    return f"{race_id}{RACE_DOCUMENT_EXTENSION}"


class RaceUploadService(ABC):
    def __init__(self, validator: DocumentValidator, registrar: RaceRegistrar, storage_service: FileStorageService):
        self.validator = validator
        self.registrar = registrar
        self.storage_service = storage_service

    @abstractmethod
    async def upload(self, document: str, race_id: int) -> UploadResult:
        pass


class RaceUploadServiceImpl(RaceUploadService):
    async def upload(self, document: str, race_id: int) -> UploadResult:
        """
        Validate, register and store a race result document.

        Flow (strictly sequential, no retries, no rollback):
        1. Check the document is well-formed XML
        2. Make sure a marker exists for the race id
        3. Write the raw document to storage under <race_id>.xml

        A marker committed in step 2 stays in place if step 3 fails; a later
        upload for the same id skips registration and retries the write.

        Args:
            document: The race result XML
            race_id: Non-zero race identifier

        Returns:
            UploadResult describing where the document was stored

        Raises:
            MalformedDocument: the document is not well-formed
            StoreError: the marker store failed, nothing was written
            ObjectWriteError: the object store write failed
        """
        self.validator.validate(document)

        storage_key = race_storage_key(race_id)

        registration = await self.registrar.ensure_registered(str(race_id))

        location = await self.storage_service.save_file(
            file_bytes=document.encode("utf-8"),
            file_key=storage_key,
            content_type=RACE_DOCUMENT_CONTENT_TYPE
        )

        logger.info(f"[Upload] Race {race_id} ({registration.value}) saved to {location}")

        return UploadResult(
            race_id=race_id,
            storage_key=storage_key,
            location=location,
            registration=registration
        )
