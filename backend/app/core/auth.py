"""Request authentication dependencies.

Each credential mode is a FastAPI dependency that either returns the
authenticated principal or raises ``HTTPException`` before the handler runs.
"""

import base64
import hmac
import logging
import re
from dataclasses import dataclass, field
from typing import Any

import jwt
from fastapi import Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.services.integrations.identity import IdentityClient

logger = logging.getLogger(__name__)

_BEARER = re.compile(r"^bearer(\s+|$)", re.IGNORECASE)
_COMPANY_CODE = re.compile(r"^POS-([A-Za-z0-9]+)", re.IGNORECASE)
_BUSINESS_REFERENCE = re.compile(r"^(POS-[A-Za-z0-9]+?)(?=\d{10,}|$)")


@dataclass
class SessionPrincipal:
    """Authenticated POS session context."""

    user_id: int
    location_id: int
    session_token: str
    company_code: str
    business_reference: str
    location_name: str | None = None
    company_title: str | None = None
    session: dict[str, Any] = field(default_factory=dict)


def _mask(token: str) -> str:
    return f"{token[:8]}..." if len(token) > 8 else "***"


def strip_bearer(header_value: str) -> str:
    return _BEARER.sub("", header_value.strip(), count=1).strip()


def extract_company_code(session_token: str) -> str | None:
    """``POS-3d6kqv638...`` -> ``POS-3D6KQV``."""
    match = _COMPANY_CODE.match(session_token)
    if not match:
        return None
    return f"POS-{match.group(1)[:6].upper()}"


def extract_business_reference(session_token: str) -> str:
    """``POS-KARAGE638954291932370545WDD1`` -> ``POS-KARAGE``."""
    match = _BUSINESS_REFERENCE.match(session_token)
    return match.group(1) if match else session_token


def decode_signed_token(token: str, key: bytes, issuer: str) -> dict[str, Any] | None:
    """Validate an HS256 token with a required issuer and expiry and no leeway.

    Returns the claims, or None if the token is invalid for any reason.
    """
    try:
        claims: dict[str, Any] = jwt.decode(
            token,
            key,
            algorithms=["HS256"],
            issuer=issuer,
            leeway=0,
            options={"require": ["exp", "iss"]},
        )
    except (jwt.PyJWTError, ValueError, TypeError) as e:
        logger.warning("Signed token rejected: %s", e)
        return None
    return claims


def _require_shared_secret(provided: str | None, expected: str, label: str) -> None:
    if not provided:
        logger.warning("Rejected request without %s", label)
        raise HTTPException(status_code=401, detail="Unauthorized")
    if not expected:
        logger.error("%s is not configured", label)
        raise HTTPException(status_code=500, detail="Server authentication is not configured")
    if not hmac.compare_digest(provided.encode(), expected.encode()):
        logger.warning("Rejected request with invalid %s", label)
        raise HTTPException(status_code=401, detail="Unauthorized")


def get_api_key_user(request: Request, db: Session = Depends(get_db)) -> User:
    """Resolve the merchant user owning the ``X-API-Key`` header."""
    api_key = request.headers.get("X-API-Key")
    if not api_key:
        raise HTTPException(status_code=401, detail="API key is required")

    user = UserRepository(db).get_active_by_api_key(api_key)
    if user is None:
        logger.warning("Invalid API key %s", _mask(api_key))
        raise HTTPException(status_code=401, detail="Invalid API key")
    return user


def get_identity_client() -> IdentityClient:
    return IdentityClient()


def get_session_principal(
    request: Request,
    db: Session = Depends(get_db),
    identity: IdentityClient = Depends(get_identity_client),
) -> SessionPrincipal:
    """Validate a POS session token against the identity API."""
    auth_header = request.headers.get("Authorization")
    if auth_header is None:
        raise HTTPException(status_code=401, detail="Authorization header is required")

    session_token = strip_bearer(auth_header)
    if not session_token:
        raise HTTPException(status_code=401, detail="Session token is required")

    company_code = extract_company_code(session_token)
    if company_code is None:
        logger.warning("Could not extract company code from session %s", _mask(session_token))
        raise HTTPException(status_code=401, detail="Invalid session")

    user = UserRepository(db).get_active_by_company_code(company_code)
    if user is None:
        logger.warning("No active user for company code %s", company_code)
        raise HTTPException(status_code=401, detail="Invalid session")

    try:
        identity_user = identity.validate_session(
            int(user.id), session_token  # type: ignore[arg-type]
        )
    except Exception:
        logger.exception("Identity API call failed for user %s", user.id)
        raise HTTPException(status_code=500, detail="Session validation failed") from None

    if identity_user is None:
        raise HTTPException(status_code=401, detail="Invalid session")

    sessions = identity_user["LoginSessions"]
    selected = next(
        (s for s in sessions if isinstance(s, dict) and s.get("Session") == session_token),
        sessions[0],
    )
    if not isinstance(selected, dict):
        raise HTTPException(status_code=401, detail="Invalid session")
    location_id = selected.get("LocationID") or identity_user.get("LocationID")
    if location_id is None:
        raise HTTPException(status_code=401, detail="Invalid session")

    logger.info("Session validated for user %s at location %s", user.id, location_id)
    return SessionPrincipal(
        user_id=int(user.id),  # type: ignore[arg-type]
        location_id=int(location_id),
        session_token=session_token,
        company_code=company_code,
        business_reference=extract_business_reference(session_token),
        location_name=selected.get("LocationName"),
        company_title=selected.get("CompanyTitle"),
        session=selected,
    )


def get_customer_id(request: Request) -> str:
    """Return the ``customerID`` claim of a customer bearer token."""
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid or missing authorization token")

    try:
        key = base64.b64decode(settings.CUSTOMER_JWT_SECRET, validate=True)
    except ValueError:
        logger.error("CUSTOMER_JWT_SECRET is not valid base64")
        raise HTTPException(
            status_code=500, detail="Server authentication is not configured"
        ) from None
    if not key:
        logger.error("CUSTOMER_JWT_SECRET is not configured")
        raise HTTPException(status_code=500, detail="Server authentication is not configured")

    claims = decode_signed_token(auth_header[7:], key, settings.CUSTOMER_JWT_ISSUER)
    customer_id = claims.get(settings.CUSTOMER_JWT_CLAIM) if claims else None
    if customer_id is None:
        raise HTTPException(status_code=401, detail="Invalid or missing authorization token")
    return str(customer_id)


def verify_tamara_token(
    tamara_token: str | None = Query(None, alias="tamaraToken"),
) -> dict[str, Any]:
    """Validate the JWT Tamara appends to its webhook URL."""
    if not tamara_token:
        raise HTTPException(status_code=401, detail="Missing tamaraToken in query params")
    if not settings.TAMARA_NOTIFICATION_TOKEN:
        logger.error("TAMARA_NOTIFICATION_TOKEN is not configured")
        raise HTTPException(status_code=500, detail="Server authentication is not configured")

    claims = decode_signed_token(
        tamara_token, settings.TAMARA_NOTIFICATION_TOKEN.encode("ascii"), "Tamara"
    )
    if claims is None:
        raise HTTPException(status_code=401, detail="Invalid tamaraToken format or issuer")
    return claims


def verify_moyasar_secret(request: Request) -> None:
    _require_shared_secret(
        request.headers.get("x-event-secret"),
        settings.MOYASAR_WEBHOOK_SECRET,
        "Moyasar webhook secret",
    )


def verify_otp_token(request: Request) -> None:
    _require_shared_secret(
        request.headers.get("X-Auth-Token"), settings.API_SECRET_TOKEN, "OTP auth token"
    )
