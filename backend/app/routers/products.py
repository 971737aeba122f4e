"""Product catalog endpoints."""

from math import ceil

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.auth import get_api_key_user
from app.core.database import get_db
from app.models.user import User
from app.repositories.item_repository import ItemRepository
from app.repositories.location_repository import LocationRepository
from app.schemas.merchant import ProductPageResponse, ProductResponse

router = APIRouter()

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@router.get(
    "",
    response_model=ProductPageResponse,
    summary="List products",
    responses={401: {"description": "Invalid or missing API key"}},
)
async def list_products(
    page: int = Query(default=1),
    page_size: int = Query(default=DEFAULT_PAGE_SIZE, alias="pageSize"),
    db: Session = Depends(get_db),
    user: User = Depends(get_api_key_user),
) -> ProductPageResponse:
    """Page through the products shared across the merchant's locations.

    Each cross-location product appears once. ``page`` below 1 is treated as 1
    and ``pageSize`` is clamped to 1..100.
    """
    page = max(page, 1)
    page_size = min(max(page_size, 1), MAX_PAGE_SIZE)

    location_ids = LocationRepository(db).get_ids_for_user(user.id)  # type: ignore[arg-type]
    products = ItemRepository(db).get_unique_products(location_ids)
    total_count = len(products)
    start = (page - 1) * page_size
    page_items = products[start : start + page_size]

    return ProductPageResponse(
        totalCount=total_count,
        currentPage=page,
        pageSize=page_size,
        totalPages=ceil(total_count / page_size),
        userId=user.id,  # type: ignore[arg-type]
        products=[
            ProductResponse(
                itemID=mapping.item_id,  # type: ignore[arg-type]
                name=mapping.product_name,  # type: ignore[arg-type]
                price=item.price,  # type: ignore[arg-type]
            )
            for mapping, item in page_items
        ],
    )
