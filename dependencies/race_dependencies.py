from contextlib import contextmanager, ExitStack
from functools import partial
from typing import Callable, ContextManager, Iterator
from botocore.exceptions import BotoCoreError
from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from config.settings import Settings, get_settings
from database.db_config import get_engine, session_scope
from models.errors import InfrastructureError
from repositories.race_marker_repository import RaceMarkerRepository, RaceMarkerRepositoryDB, RaceMarkerRepositoryDynamo
from service.document_validator import XMLDocumentValidator
from service.file_storage_service import FileStorageService, LocalFileStorageService, S3FileStorageService
from service.race_registrar import RaceRegistrar
from service.race_upload_service import RaceUploadService, RaceUploadServiceImpl

RaceUploadServiceFactory = Callable[[], ContextManager[RaceUploadService]]


def get_file_storage_service(settings: Settings) -> FileStorageService:
    """
    Get the object store for raw race documents.
    """
    if settings.storage_backend == "local":
        return LocalFileStorageService(base_path=settings.local_storage_path)

    return S3FileStorageService(
        bucket_name=settings.bucket_name,
        endpoint_url=settings.s3_endpoint_url,
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
        region_name=settings.aws_region
    )


def get_race_marker_repository(settings: Settings, stack: ExitStack) -> RaceMarkerRepository:
    """
    Get the key-existence store. Relational sessions are closed by `stack`.
    """
    if settings.marker_backend == "sql":
        engine = get_engine(settings.database_url, settings.db_echo)
        db = stack.enter_context(session_scope(engine))
        return RaceMarkerRepositoryDB(db)

    return RaceMarkerRepositoryDynamo(
        table_name=settings.races_table,
        region_name=settings.aws_region,
        endpoint_url=settings.dynamodb_endpoint_url,
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key
    )


@contextmanager
def open_race_upload_service(settings: Settings) -> Iterator[RaceUploadService]:
    """
    Connect to both stores and build the upload pipeline for one request.

    Raises:
        InfrastructureError: a store client or session could not be created
    """
    with ExitStack() as stack:
        try:
            storage_service = get_file_storage_service(settings)
            repository = get_race_marker_repository(settings, stack)
        except (BotoCoreError, SQLAlchemyError, ImportError, ValueError) as e:
            raise InfrastructureError(f"could not initialize store clients: {e}") from e

        yield RaceUploadServiceImpl(XMLDocumentValidator(), RaceRegistrar(repository), storage_service)


def get_race_upload_service_factory(settings: Settings = Depends(get_settings)) -> RaceUploadServiceFactory:
    """FastAPI dependency; tests override it to inject in-memory stores."""
    return partial(open_race_upload_service, settings)
