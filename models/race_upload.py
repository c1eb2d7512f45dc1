import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

UINT64_MAX = 2**64 - 1


class RaceUploadRequest(BaseModel):
    """Inbound upload body: `xml` holds the document, `id` the race identifier."""

    model_config = ConfigDict(populate_by_name=True)

    document: Optional[str] = Field(default=None, alias="xml")
    race_id: Optional[int] = Field(default=None, alias="id", ge=0, le=UINT64_MAX)


class RegistrationStatus(str, enum.Enum):
    REGISTERED = "Registered"
    ALREADY_EXISTED = "AlreadyExisted"


class UploadResult(BaseModel):
    race_id: int
    storage_key: str
    location: str
    registration: RegistrationStatus


class UploadResponse(BaseModel):
    """Status code, headers and plain-text body handed back to the gateway."""

    status_code: int
    body: str
    headers: dict[str, str] = Field(default_factory=lambda: {"Content-Type": "application/json"})
