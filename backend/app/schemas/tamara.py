from typing import Any

from pydantic import BaseModel, ConfigDict


class TamaraSessionRequest(BaseModel):
    """In-store session body, forwarded to Tamara as received."""

    model_config = ConfigDict(extra="allow")

    total_amount: Any
    order_reference_id: str
    order_number: str
    items: list[Any]
    additional_data: Any
    phone_number: str | None = None


class TamaraSessionResponse(BaseModel):
    success: bool
    message: str
    checkout_id: str | None
    order_id: str | None
    checkout_deeplink: str | None
    warning: str | None = None

