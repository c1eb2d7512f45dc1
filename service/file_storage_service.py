from abc import ABC, abstractmethod
import logging
import os
from typing import Optional
import boto3
from botocore.exceptions import BotoCoreError, ClientError
from models.errors import ObjectWriteError

logger = logging.getLogger(__name__)


class FileStorageService(ABC):
    @abstractmethod
    async def save_file(self, file_bytes: bytes, file_key: str, content_type: str = "application/octet-stream") -> str:
        """Save a file under a fixed key, replacing any previous content.

        Args:
            file_bytes: The content of the file in bytes.
            file_key: The key/path the file is stored under.
            content_type: MIME type recorded with the object where supported.

        Returns:
            The storage path or URL of the saved file.

        Raises:
            ObjectWriteError: the write failed.
        """
        pass


class S3FileStorageService(FileStorageService):
    """S3-compatible storage service (works with AWS S3, MinIO, etc.)"""

    def __init__(
        self,
        bucket_name: str,
        endpoint_url: Optional[str] = None,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
        region_name: str = "eu-central-1"
    ):
        """
        Initialize S3 storage service.

        Args:
            bucket_name: Name of the S3 bucket
            endpoint_url: Optional endpoint URL for S3-compatible services (e.g., MinIO)
            aws_access_key_id: AWS access key ID
            aws_secret_access_key: AWS secret access key
            region_name: AWS region name
        """
        self.bucket_name = bucket_name

        self.s3_client = boto3.client(
            's3',
            endpoint_url=endpoint_url,
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key,
            region_name=region_name
        )

    async def save_file(self, file_bytes: bytes, file_key: str, content_type: str = "application/octet-stream") -> str:
        """
        Save file to S3 bucket. Objects are not versioned, last write wins.

        Returns:
            The S3 key (path) of the saved file.
        """
        try:
            response = self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=file_key,
                Body=file_bytes,
                ContentType=content_type
            )
        except (ClientError, BotoCoreError) as e:
            raise ObjectWriteError(f"error uploading {file_key} to S3: {e}") from e

        logger.debug(f"[Storage] S3 put object out: {response.get('ETag')}")
        return f"s3://{self.bucket_name}/{file_key}"


class LocalFileStorageService(FileStorageService):
    """Filesystem storage service for local development."""

    def __init__(self, base_path: str = "mock_storage"):
        self.base_path = base_path

    async def save_file(self, file_bytes: bytes, file_key: str, content_type: str = "application/octet-stream") -> str:
        """Save file to local filesystem."""
        file_path = os.path.join(self.base_path, file_key)

        try:
            # Create subdirectories if needed
            os.makedirs(os.path.dirname(file_path) or self.base_path, exist_ok=True)

            with open(file_path, "wb") as f:
                f.write(file_bytes)
        except OSError as e:
            raise ObjectWriteError(f"error writing {file_key} to {self.base_path}: {e}") from e

        return file_path
