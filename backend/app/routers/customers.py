"""Customer API endpoints for POS partners."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from app.core.auth import get_api_key_user
from app.core.database import get_db
from app.core.phone import local_part, normalize_phone
from app.core.request_body import read_json_object, validate_payload
from app.models.customer import Customer
from app.models.user import User
from app.repositories.customer_repository import CustomerRepository
from app.schemas.customer import CustomerCreate, CustomerResponse, CustomerUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(customer: Customer) -> CustomerResponse:
    return CustomerResponse(
        customerId=customer.id,  # type: ignore[arg-type]
        name=customer.full_name,  # type: ignore[arg-type]
        email=customer.email,  # type: ignore[arg-type]
        phone=local_part(customer.mobile),  # type: ignore[arg-type]
    )


def _combined_mobile(phone: str, phone_prefix: int) -> str:
    mobile = normalize_phone(f"+{phone_prefix}{phone.strip()}")
    if mobile is None:
        raise HTTPException(status_code=400, detail="Invalid phone number format")
    return mobile


@router.get(
    "",
    response_model=CustomerResponse,
    summary="Find customer by phone",
    responses={
        400: {"description": "Missing or invalid phone number"},
        401: {"description": "Invalid or missing API key"},
        404: {"description": "No customer with this phone number"},
    },
)
async def search_customer(
    phone: str | None = Query(default=None, alias="filter[phone]"),
    db: Session = Depends(get_db),
    user: User = Depends(get_api_key_user),
) -> CustomerResponse:
    """Look up an active customer by phone number, in any common Saudi format."""
    if not phone or not phone.strip():
        raise HTTPException(status_code=400, detail="Phone number is required")
    mobile = normalize_phone(phone)
    if mobile is None:
        raise HTTPException(status_code=400, detail="Invalid phone number format")

    customer = CustomerRepository(db).get_active_by_mobile(mobile)
    if customer is None:
        raise HTTPException(
            status_code=404, detail="No customer found with the provided phone number"
        )
    return _to_response(customer)


@router.post(
    "",
    response_model=CustomerResponse,
    status_code=201,
    summary="Create customer",
    responses={
        400: {"description": "Missing phone or phone_prefix, or invalid body"},
        401: {"description": "Invalid or missing API key"},
        409: {"description": "A customer with this mobile number already exists"},
    },
)
async def create_customer(
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_api_key_user),
) -> CustomerResponse:
    payload = await read_json_object(request)
    if not payload.get("phone") or payload.get("phone_prefix") in (None, ""):
        raise HTTPException(status_code=400, detail="Phone and phone_prefix are required")
    data = validate_payload(payload, CustomerCreate)

    mobile = _combined_mobile(data.phone, data.phone_prefix)
    repo = CustomerRepository(db)
    if repo.mobile_exists(mobile):
        raise HTTPException(
            status_code=409, detail="Customer with this mobile number already exists"
        )

    customer = repo.create(mobile=mobile, full_name=data.name, email=data.email)
    logger.info("Customer %s created by user %s", customer.id, user.id)
    return _to_response(customer)


@router.put(
    "/{customer_id}",
    response_model=CustomerResponse,
    summary="Update customer",
    responses={
        400: {"description": "Invalid body"},
        401: {"description": "Invalid or missing API key"},
        404: {"description": "Customer not found"},
    },
)
async def update_customer(
    customer_id: int,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_api_key_user),
) -> CustomerResponse:
    """Update name and email when present; the phone changes only with its prefix."""
    data = validate_payload(await read_json_object(request), CustomerUpdate)
    repo = CustomerRepository(db)
    customer = repo.get_by_id(customer_id)
    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")

    fields: dict[str, object] = {}
    if "name" in data.model_fields_set:
        fields["full_name"] = data.name
    if "email" in data.model_fields_set:
        fields["email"] = data.email
    if data.phone and data.phone_prefix is not None:
        fields["mobile"] = _combined_mobile(data.phone, data.phone_prefix)

    customer = repo.update(customer, **fields)
    return _to_response(customer)
