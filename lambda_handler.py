"""
AWS Lambda entry point for API Gateway proxy integrations.

The event body is handed to the same request handler the HTTP service uses;
stores are connected per invocation and nothing is kept between calls.
"""

import asyncio
import base64
import binascii
import logging
from typing import Any, Dict
from config.logging_config import configure_logging
from config.settings import get_settings
from dependencies.race_dependencies import open_race_upload_service
from models.errors import ClientInputError
from models.race_upload import UploadResponse
from routers.race_upload_handler import handle_race_upload

logger = logging.getLogger(__name__)


def _event_body(event: Dict[str, Any]):
    body = event.get("body")
    if body is not None and event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ClientInputError("request body is not valid base64") from e
    return body


def _proxy_response(response: UploadResponse) -> Dict[str, Any]:
    logger.info(f"[Lambda] Responding with status {response.status_code}")
    return {
        "statusCode": response.status_code,
        "headers": response.headers,
        "body": response.body,
    }


def handle_race_upload_request(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """
    Synchronous wrapper for Lambda to call the async upload handler.

    Returns:
        API Gateway proxy response with statusCode, headers and body
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    try:
        body = _event_body(event)
    except ClientInputError as e:
        logger.warning(f"[Lambda] Rejected event: {e}")
        return _proxy_response(UploadResponse(status_code=e.status_code, body=str(e)))

    response = asyncio.run(
        handle_race_upload(body, lambda: open_race_upload_service(settings))
    )
    return _proxy_response(response)
