from typing import Any

from pydantic import BaseModel, Field


class VomSyncItemResult(BaseModel):
    localId: int
    name: str | None = None
    status: str
    vomId: str | None = None
    error: str | None = None


class VomSyncResponse(BaseModel):
    message: str
    locationId: int
    total: int
    created: int = 0
    matched: int = 0
    alreadyMapped: int = 0
    failed: int = 0
    results: list[VomSyncItemResult] = Field(default_factory=list)
    details: dict[str, Any] | None = None
