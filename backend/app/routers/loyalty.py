"""Boukak loyalty card endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.request_body import parse_json_body, read_json_object
from app.schemas.loyalty import (
    BoukakWebhookPayload,
    BulkSyncQueuedResponse,
    BulkSyncResponse,
    LoyaltyCardCreate,
    LoyaltyCardResponse,
    StampsCreate,
    StampsResponse,
    WebhookAck,
)
from app.services.integrations.boukak import BoukakClient
from app.services.loyalty_service import LoyaltyRequestError, LoyaltyService
from app.tasks import enqueue_loyalty_card_sync

logger = logging.getLogger(__name__)

router = APIRouter()


def get_boukak_client() -> BoukakClient:
    return BoukakClient()


@router.post(
    "/cards",
    response_model=LoyaltyCardResponse,
    summary="Create loyalty card",
    responses={
        400: {"description": "Invalid body or Boukak rejected the card"},
        404: {"description": "Customer not found or inactive"},
    },
)
async def create_card(
    request: Request,
    db: Session = Depends(get_db),
    boukak: BoukakClient = Depends(get_boukak_client),
) -> LoyaltyCardResponse:
    """Create a Boukak wallet card for a customer.

    Customers that already hold a card at their location get the stored card
    back without another call to Boukak.
    """
    data = await parse_json_body(request, LoyaltyCardCreate)
    service = LoyaltyService(db, boukak)
    try:
        result = service.create_card(
            customer_id=data.CustomerId,
            template_id=data.TemplateId,
            platform=data.Platform,
            language=data.Language,
            initial_cashback=data.InitialCashback,
        )
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    except LoyaltyRequestError as e:
        raise HTTPException(status_code=400, detail=e.payload) from None
    return LoyaltyCardResponse.model_validate(result)


@router.post(
    "/cards/bulk-sync",
    response_model=BulkSyncResponse | BulkSyncQueuedResponse,
    summary="Bulk create loyalty cards",
)
async def bulk_sync_cards(
    background: bool = Query(default=False),
    limit: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    boukak: BoukakClient = Depends(get_boukak_client),
) -> BulkSyncResponse | BulkSyncQueuedResponse:
    """Create cards for the first active customers, inline or on the worker."""
    if background:
        job = await enqueue_loyalty_card_sync(limit)
        return BulkSyncQueuedResponse(
            message="Loyalty card sync queued",
            job_id=job.job_id if job is not None else None,
        )

    summary = LoyaltyService(db, boukak).sync_first_customers(limit)
    return BulkSyncResponse(
        message="Boukak bulk sync completed",
        total=summary.total,
        created=summary.created,
        existing=summary.existing,
        failed=summary.failed,
        results=summary.results,  # type: ignore[arg-type]
    )


@router.post(
    "/stamps",
    response_model=StampsResponse,
    summary="Add stamps",
    responses={
        400: {"description": "Order cannot earn stamps or Boukak rejected the request"},
        404: {"description": "Order not found"},
    },
)
async def add_stamps(
    request: Request,
    db: Session = Depends(get_db),
    boukak: BoukakClient = Depends(get_boukak_client),
) -> StampsResponse:
    """Add stamps to the card of a completed order's customer."""
    data = await parse_json_body(request, StampsCreate)
    service = LoyaltyService(db, boukak)
    try:
        result = service.add_stamps(data.OrderId, data.Stamps)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    except LoyaltyRequestError as e:
        raise HTTPException(status_code=400, detail=e.payload) from None
    return StampsResponse.model_validate(result)


@router.post(
    "/webhook",
    response_model=WebhookAck,
    summary="Boukak webhook",
    responses={400: {"description": "Missing event"}},
)
async def boukak_webhook(
    request: Request,
    db: Session = Depends(get_db),
    boukak: BoukakClient = Depends(get_boukak_client),
) -> WebhookAck:
    payload = await read_json_object(request)
    if not payload.get("event"):
        raise HTTPException(status_code=400, detail="Invalid webhook payload")

    try:
        webhook = BoukakWebhookPayload.model_validate(payload)
        card_id = webhook.data.cardId if webhook.data else None
        LoyaltyService(db, boukak).handle_webhook(webhook.event, card_id)
    except Exception:
        logger.exception("Error processing Boukak webhook")
        return WebhookAck(message="Webhook received with errors - check logs")
    return WebhookAck(message="Webhook received successfully")
