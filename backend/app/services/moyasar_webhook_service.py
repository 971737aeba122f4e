"""Persist Moyasar payment notifications."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

from sqlalchemy.orm import Session

from app.models.moyasar_payment_webhook import MoyasarPaymentWebhook
from app.repositories.moyasar_webhook_repository import MoyasarWebhookRepository
from app.schemas.moyasar import MoyasarWebhookPayload

logger = logging.getLogger(__name__)


def _as_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _as_decimal(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return Decimal(str(value).strip())
    except InvalidOperation:
        return None


def parse_metadata(metadata: dict[str, Any] | None) -> dict[str, Any]:
    """Pull the POS fields out of Moyasar metadata, ignoring unparseable values."""
    metadata = metadata or {}
    phone = metadata.get("CustomerPhoneNumber")
    return {
        "customer_id": _as_int(metadata.get("CustomerID")),
        "customer_phone_number": str(phone) if phone is not None else None,
        "offer_id": _as_int(metadata.get("OfferID")),
        "payment_value": _as_decimal(metadata.get("PaymentValue")),
    }


class MoyasarWebhookService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = MoyasarWebhookRepository(db)

    def record(self, payload: MoyasarWebhookPayload, raw_body: str) -> MoyasarPaymentWebhook:
        """Insert or update the row for the payment in *payload*."""
        data = payload.data
        fields: dict[str, Any] = {
            "status": data.status,
            "amount": data.amount,
            "currency": data.currency,
            "payment_method": data.source.type if data.source else None,
            "webhook_payload": raw_body,
            "event_type": payload.type,
            "is_verified": True,
            **parse_metadata(data.metadata),
        }
        record, created = self.repo.upsert(data.id, fields)
        logger.info(
            "%s Moyasar payment %s (status=%s)",
            "Stored" if created else "Updated",
            data.id,
            data.status,
        )
        return record
