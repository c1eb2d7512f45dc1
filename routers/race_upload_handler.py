"""
Transport-independent handling of a race upload request.

Both the FastAPI route and the Lambda entry point hand the raw request body
to `handle_race_upload`, which returns exactly one UploadResponse.
"""

import json
import logging
from http import HTTPStatus
from typing import Union
from pydantic import ValidationError
from dependencies.race_dependencies import RaceUploadServiceFactory
from models.errors import ClientInputError, InfrastructureError, UploadError
from models.race_upload import RaceUploadRequest, UploadResponse

logger = logging.getLogger(__name__)

UPLOAD_SUCCESS_MESSAGE = "upload successful"


def parse_upload_request(body: Union[str, bytes, None]) -> RaceUploadRequest:
    """
    Extract and check the `xml` and `id` fields of an upload body.

    Raises:
        ClientInputError: the body is not a JSON object, a field has the
            wrong type, `xml` is missing/empty or `id` is missing/zero
    """
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ClientInputError("request body is not valid UTF-8") from e

    if body is None or not body.strip():
        payload = {}
    else:
        try:
            payload = json.loads(body)
        except json.JSONDecodeError as e:
            raise ClientInputError(f"request body is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise ClientInputError("request body must be a JSON object")

    try:
        request = RaceUploadRequest.model_validate(payload)
    except ValidationError as e:
        fields = ", ".join(f"`{err['loc'][0]}`" for err in e.errors() if err["loc"])
        raise ClientInputError(f"invalid parameter {fields}") from e

    if not request.document:
        raise ClientInputError("missing parameter `xml`")

    if not request.race_id:
        raise ClientInputError("missing parameter `id`")

    return request


async def handle_race_upload(body: Union[str, bytes, None], service_factory: RaceUploadServiceFactory) -> UploadResponse:
    """
    Run one upload request end to end and map the outcome to a response.

    Field checks happen before any store connection is opened.
    """
    try:
        request = parse_upload_request(body)
    except ClientInputError as e:
        logger.warning(f"[API] Rejected upload request: {e}")
        return UploadResponse(status_code=e.status_code, body=str(e))

    logger.info(f"[API] Received race {request.race_id} ({len(request.document)} chars)")

    try:
        with service_factory() as service:
            await service.upload(request.document, request.race_id)
    except InfrastructureError as e:
        logger.error(f"[API] Could not initialize store clients: {e}")
        return UploadResponse(status_code=e.status_code, body=HTTPStatus(e.status_code).phrase)
    except UploadError as e:
        log = logger.warning if e.client_error else logger.error
        log(f"[API] Upload of race {request.race_id} failed: {e}")
        return UploadResponse(status_code=e.status_code, body=f"failed to upload to bucket: {e}")

    return UploadResponse(status_code=HTTPStatus.OK.value, body=UPLOAD_SUCCESS_MESSAGE)
