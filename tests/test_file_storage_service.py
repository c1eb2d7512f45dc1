"""
Tests for service.file_storage_service
"""

from __future__ import annotations

import pytest
from botocore.stub import Stubber

from models.errors import ObjectWriteError
from service.file_storage_service import LocalFileStorageService, S3FileStorageService


@pytest.fixture
def s3_storage() -> S3FileStorageService:
    return S3FileStorageService(
        bucket_name="4745a-xmlresults",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        region_name="eu-central-1",
    )


class TestS3FileStorageService:
    @pytest.mark.asyncio
    async def test_put_object_under_key(self, s3_storage):
        with Stubber(s3_storage.s3_client) as stubber:
            stubber.add_response(
                "put_object",
                {"ETag": '"9b2cf535f27731c974343645a3985328"'},
                {
                    "Bucket": "4745a-xmlresults",
                    "Key": "42.xml",
                    "Body": b"<race/>",
                    "ContentType": "application/xml",
                },
            )

            location = await s3_storage.save_file(b"<race/>", "42.xml", "application/xml")

            stubber.assert_no_pending_responses()

        assert location == "s3://4745a-xmlresults/42.xml"

    @pytest.mark.asyncio
    async def test_client_error_raises_object_write_error(self, s3_storage):
        with Stubber(s3_storage.s3_client) as stubber:
            stubber.add_client_error(
                "put_object",
                service_error_code="AccessDenied",
                service_message="Access Denied",
                http_status_code=403,
            )

            with pytest.raises(ObjectWriteError, match="42.xml"):
                await s3_storage.save_file(b"<race/>", "42.xml", "application/xml")


class TestLocalFileStorageService:
    @pytest.mark.asyncio
    async def test_writes_and_overwrites(self, tmp_path):
        storage = LocalFileStorageService(base_path=str(tmp_path / "bucket"))

        await storage.save_file(b"<race>first</race>", "42.xml")
        path = await storage.save_file(b"<race>second</race>", "42.xml")

        assert (tmp_path / "bucket" / "42.xml").read_bytes() == b"<race>second</race>"
        assert path == str(tmp_path / "bucket" / "42.xml")

    @pytest.mark.asyncio
    async def test_unwritable_location_raises_object_write_error(self, tmp_path):
        blocker = tmp_path / "bucket"
        blocker.write_text("not a directory")
        storage = LocalFileStorageService(base_path=str(blocker))

        with pytest.raises(ObjectWriteError):
            await storage.save_file(b"<race/>", "42.xml")
