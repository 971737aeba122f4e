from typing import Any

from pydantic import BaseModel, Field


class LoyaltyCardCreate(BaseModel):
    CustomerId: int = Field(..., gt=0)
    TemplateId: str | None = None
    Platform: str = "android"
    Language: str = "en"
    InitialCashback: float = 0


class LoyaltyCardResponse(BaseModel):
    message: str
    customerId: int
    boukakCustomerId: str | None = None
    boukakCardId: str
    applePassUrl: str | None = None
    passWalletUrl: str | None = None
    status: str


class StampsCreate(BaseModel):
    OrderId: int = Field(..., gt=0)
    Stamps: int = Field(default=1, ge=1)


class StampsResponse(BaseModel):
    message: str
    orderId: int
    customerId: int
    boukakCardId: str
    stampsAdded: int
    activeStamps: int
    rewards: int


class BoukakWebhookData(BaseModel):
    cardId: str | None = None
    customerId: str | None = None


class BoukakWebhookPayload(BaseModel):
    event: str = Field(..., min_length=1)
    data: BoukakWebhookData | None = None


class BulkSyncResult(BaseModel):
    customerId: int
    customerName: str | None = None
    status: str
    boukakCardId: str | None = None
    error: str | None = None


class BulkSyncResponse(BaseModel):
    message: str
    total: int
    created: int
    existing: int
    failed: int
    results: list[BulkSyncResult] = Field(default_factory=list)


class BulkSyncQueuedResponse(BaseModel):
    message: str
    job_id: str | None


class WebhookAck(BaseModel):
    message: str
    details: dict[str, Any] | None = None
