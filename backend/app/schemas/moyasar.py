from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MoyasarPaymentSource(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str | None = None


class MoyasarPaymentData(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1)
    status: str | None = None
    amount: int | None = None
    currency: str | None = None
    source: MoyasarPaymentSource | None = None
    metadata: dict[str, Any] | None = None


class MoyasarWebhookPayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    type: str | None = None
    data: MoyasarPaymentData


class MoyasarWebhookResponse(BaseModel):
    Status: int
    Message: str
    PaymentId: str | None = None
