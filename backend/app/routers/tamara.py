"""Tamara in-store checkout endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.core.auth import SessionPrincipal, get_session_principal, verify_tamara_token
from app.core.database import get_db
from app.core.request_body import read_json_object, validate_payload
from app.schemas.tamara import TamaraSessionRequest, TamaraSessionResponse
from app.services.integrations.tamara import TamaraClient
from app.services.integrations.unifonic import UnifonicClient
from app.services.tamara_service import (
    ALLOWED_EVENTS,
    EVENT_STATUSES,
    TamaraService,
    TamaraSessionError,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_tamara_client() -> TamaraClient:
    return TamaraClient()


def get_sms_client() -> UnifonicClient:
    return UnifonicClient()


@router.post(
    "/sessions",
    response_model=TamaraSessionResponse,
    response_model_exclude_unset=True,
    summary="Create Tamara session",
    responses={
        400: {"description": "Invalid body or Tamara rejected the session"},
        401: {"description": "Invalid session"},
    },
)
async def create_session(
    request: Request,
    db: Session = Depends(get_db),
    principal: SessionPrincipal = Depends(get_session_principal),
    tamara: TamaraClient = Depends(get_tamara_client),
    sms: UnifonicClient = Depends(get_sms_client),
) -> TamaraSessionResponse:
    """Open a Tamara in-store checkout for a POS order.

    The checkout link is texted to ``phone_number`` when it is a Saudi mobile.
    """
    data = validate_payload(await read_json_object(request), TamaraSessionRequest)
    payload = data.model_dump(exclude={"phone_number"})

    service = TamaraService(db, tamara=tamara, sms=sms)
    try:
        result = service.create_session(payload, data.phone_number)
    except TamaraSessionError as e:
        raise HTTPException(status_code=400, detail={"success": False, "message": str(e)}) from None
    logger.info("Tamara session created at location %s", principal.location_id)
    return TamaraSessionResponse.model_validate(result)


@router.post(
    "/webhook",
    summary="Tamara webhook",
    responses={
        400: {"description": "Unsupported event type"},
        401: {"description": "Missing or invalid tamaraToken"},
    },
)
async def tamara_webhook(
    request: Request,
    db: Session = Depends(get_db),
    claims: dict[str, Any] = Depends(verify_tamara_token),
) -> dict[str, Any]:
    """Apply an order status notification from Tamara."""
    body = await read_json_object(request)
    event_type = body.get("event_type")
    if not isinstance(event_type, str) or event_type not in ALLOWED_EVENTS:
        raise HTTPException(
            status_code=400, detail={"success": False, "message": "Unsupported event type"}
        )

    if event_type not in EVENT_STATUSES:
        logger.info("Unhandled Tamara event type: %s", event_type)
        return {"message": f"Event {event_type} received but not processed"}

    order_id = body.get("order_id")
    try:
        TamaraService(db).apply_status_event(
            str(order_id) if order_id is not None else None, event_type
        )
    except Exception:
        logger.exception("Error processing Tamara %s for order %s", event_type, order_id)
        return {"message": "Webhook received with errors - check logs"}
    return {"message": f"Received event: {event_type}", "data": body}
