"""LoyalPro reward and redeem proxies."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request

from app.core.auth import SessionPrincipal, get_session_principal
from app.core.request_body import parse_json_body
from app.schemas.loyalpro import LoyalProRedeemRequest, LoyalProResponse, LoyalProRewardRequest
from app.services.integrations.base import IntegrationSyncResult
from app.services.integrations.loyalpro import LoyalProClient

router = APIRouter()


def get_loyalpro_client() -> LoyalProClient:
    return LoyalProClient()


def _respond(result: IntegrationSyncResult) -> LoyalProResponse:
    if not result.success:
        raise HTTPException(
            status_code=400,
            detail={
                "success": False,
                "message": result.error,
                "details": result.details.get("response"),
            },
        )
    return LoyalProResponse(success=True, data=result.details.get("data"))


def _with_reference(principal: SessionPrincipal, fields: dict[str, Any]) -> dict[str, Any]:
    return {"business_reference": principal.business_reference, **fields}


@router.post(
    "/reward",
    response_model=LoyalProResponse,
    summary="Apply LoyalPro reward",
    responses={
        400: {"description": "Invalid body or LoyalPro rejected the request"},
        401: {"description": "Invalid session"},
    },
)
async def reward(
    request: Request,
    principal: SessionPrincipal = Depends(get_session_principal),
    client: LoyalProClient = Depends(get_loyalpro_client),
) -> LoyalProResponse:
    data = await parse_json_body(request, LoyalProRewardRequest)
    return _respond(client.reward(_with_reference(principal, data.model_dump())))


@router.post(
    "/redeem",
    response_model=LoyalProResponse,
    summary="Redeem LoyalPro reward",
    responses={
        400: {"description": "Invalid body or LoyalPro rejected the request"},
        401: {"description": "Invalid session"},
    },
)
async def redeem(
    request: Request,
    principal: SessionPrincipal = Depends(get_session_principal),
    client: LoyalProClient = Depends(get_loyalpro_client),
) -> LoyalProResponse:
    data = await parse_json_body(request, LoyalProRedeemRequest)
    return _respond(client.redeem(_with_reference(principal, data.model_dump())))
