import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.core.auth import verify_moyasar_secret
from app.core.database import get_db
from app.core.request_body import read_json_object, validate_payload
from app.schemas.moyasar import MoyasarWebhookPayload, MoyasarWebhookResponse
from app.services.moyasar_webhook_service import MoyasarWebhookService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/webhook",
    response_model=MoyasarWebhookResponse,
    summary="Moyasar payment webhook",
    dependencies=[Depends(verify_moyasar_secret)],
    responses={
        400: {"description": "Invalid webhook structure"},
        401: {"description": "Invalid or missing x-event-secret"},
    },
)
async def moyasar_webhook(
    request: Request,
    db: Session = Depends(get_db),
) -> MoyasarWebhookResponse:
    """Store a Moyasar payment notification; repeats update the same payment row."""
    raw_body = (await request.body()).decode("utf-8", errors="replace")
    body = await read_json_object(request)
    if not isinstance(body.get("data"), dict):
        raise HTTPException(status_code=400, detail="Invalid webhook structure")
    payload = validate_payload(body, MoyasarWebhookPayload)

    try:
        MoyasarWebhookService(db).record(payload, raw_body)
    except Exception:
        logger.exception("Error processing Moyasar webhook for payment %s", payload.data.id)
        return MoyasarWebhookResponse(
            Status=200,
            Message="Webhook received with errors - check logs",
            PaymentId=payload.data.id,
        )
    return MoyasarWebhookResponse(
        Status=200, Message="Webhook processed successfully", PaymentId=payload.data.id
    )
