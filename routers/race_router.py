from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from dependencies.race_dependencies import RaceUploadServiceFactory, get_race_upload_service_factory
from routers.race_upload_handler import handle_race_upload

router = APIRouter(prefix="/race", tags=["race"])

@router.post("/upload")
async def upload_race_result(
    request: Request,
    service_factory: RaceUploadServiceFactory = Depends(get_race_upload_service_factory)
):
    """
    Upload a race result document.

    Body: {"xml": "<race>...</race>", "id": 42}

    Flow:
    1. Check `xml` is present and `id` is non-zero (400 otherwise)
    2. Check the XML is well-formed (400 otherwise)
    3. Register the race id if it has never been seen
    4. Store the document as <id>.xml, overwriting earlier uploads

    The body of the response is plain text even though the content type is
    application/json, as existing clients expect.
    """
    body = await request.body()
    result = await handle_race_upload(body, service_factory)

    return Response(
        content=result.body,
        status_code=result.status_code,
        headers=result.headers
    )

@router.get("/health")
async def health():
    return {"status": "ok"}
