"""Tamara in-store checkout sessions and order status webhooks."""

import logging
import re
from typing import Any

from sqlalchemy.orm import Session

from app.core.phone import is_valid_saudi_mobile, to_international
from app.models.shared import OrderStatus
from app.repositories.order_repository import OrderRepository
from app.repositories.tamara_order_repository import TamaraOrderRepository
from app.services.integrations.tamara import TamaraClient
from app.services.integrations.unifonic import UnifonicClient

logger = logging.getLogger(__name__)

CHECKOUT_SMS_MESSAGE_TYPE = 3

EVENT_STATUSES: dict[str, OrderStatus] = {
    "order_approved": OrderStatus.APPROVED,
    "order_canceled": OrderStatus.CANCELED,
    "order_refunded": OrderStatus.REFUNDED,
}

ALLOWED_EVENTS = frozenset(
    {
        "order_approved",
        "order_authorised",
        "order_canceled",
        "order_updated",
        "order_captured",
        "order_refunded",
    }
)

_NON_DIGITS = re.compile(r"\D")

MAX_ORDER_ID = 2**31 - 1


class TamaraSessionError(ValueError):
    pass


def order_id_from_reference(order_reference_id: str | None) -> int | None:
    """``ORD-1042`` -> ``1042``; None when the digits do not form an order id."""
    digits = _NON_DIGITS.sub("", order_reference_id or "")
    if not digits:
        return None
    order_id = int(digits)
    return order_id if order_id <= MAX_ORDER_ID else None


class TamaraService:
    def __init__(
        self,
        db: Session,
        tamara: TamaraClient | None = None,
        sms: UnifonicClient | None = None,
    ):
        self.db = db
        self.tamara = tamara or TamaraClient()
        self.sms = sms or UnifonicClient()
        self.order_repo = OrderRepository(db)
        self.link_repo = TamaraOrderRepository(db)

    def create_session(self, payload: dict[str, Any], phone_number: str | None) -> dict[str, Any]:
        """Open a Tamara session for a POS order and text the checkout link.

        Raises:
            TamaraSessionError: Tamara rejected the session.
        """
        result = self.tamara.create_in_store_session(payload)
        if not result.success:
            raise TamaraSessionError(result.error or "Tamara API request failed")

        body = result.external_data or {}
        checkout_id = body.get("checkout_id")
        tamara_order_id = result.external_id
        checkout_deeplink = body.get("checkout_deeplink")

        reply: dict[str, Any] = {
            "success": True,
            "message": "Tamara session created successfully",
            "checkout_id": checkout_id,
            "order_id": tamara_order_id,
            "checkout_deeplink": checkout_deeplink,
        }

        order_id = order_id_from_reference(payload.get("order_reference_id"))
        if order_id is not None and checkout_id and tamara_order_id:
            try:
                self.link_repo.create(order_id, tamara_order_id, str(checkout_id))
            except Exception:
                self.db.rollback()
                logger.exception(
                    "Failed to link order %s to Tamara order %s", order_id, tamara_order_id
                )
                reply["message"] = (
                    "Tamara session created successfully but failed to save to database"
                )
                reply["warning"] = "Database save failed"
            else:
                logger.info("Linked order %s to Tamara order %s", order_id, tamara_order_id)
        else:
            logger.warning(
                "Tamara session missing link fields: order=%s checkout=%s tamara_order=%s",
                order_id,
                checkout_id,
                tamara_order_id,
            )

        if checkout_deeplink and is_valid_saudi_mobile(phone_number):
            self._send_checkout_sms(to_international(phone_number or ""), checkout_deeplink)

        return reply

    def _send_checkout_sms(self, recipient: str, checkout_url: str) -> None:
        result = self.sms.send_sms(
            recipient,
            f"Complete your Tamara payment: {checkout_url}",
            message_type=CHECKOUT_SMS_MESSAGE_TYPE,
        )
        if not result.success:
            logger.error("Failed to send Tamara checkout SMS to %s: %s", recipient, result.error)

    def apply_status_event(self, tamara_order_id: str | None, event_type: str) -> bool:
        """Move the linked POS order to the status for *event_type* in one transaction.

        Returns False when no linked order exists. Any failure rolls back the
        order and link updates together and re-raises.
        """
        status = EVENT_STATUSES[event_type]
        if not tamara_order_id:
            logger.warning("Tamara %s event without order_id", event_type)
            return False

        try:
            link = self.link_repo.get_by_tamara_order_id(tamara_order_id)
            if link is None:
                logger.warning("No order linked to Tamara order %s", tamara_order_id)
                return False
            order = self.order_repo.get_by_id(link.order_id)  # type: ignore[arg-type]
            if order is None:
                logger.warning(
                    "Tamara order %s links to missing order %s", tamara_order_id, link.order_id
                )
                return False
            self.order_repo.set_status(order, status.value)
            self.link_repo.record_event(link, event_type, status.value)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Order %s set to status %s for Tamara order %s", order.id, status.value, tamara_order_id
        )
        return True
