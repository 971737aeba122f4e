import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.responses import Response

from app.core.config import settings
from app.routers import (
    customers,
    discounts,
    locations,
    loyalpro,
    loyalty,
    merchants,
    moyasar,
    orders,
    otp,
    products,
    sadeq,
    tamara,
    vom,
)

logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {"name": "Customers", "description": "Find, create, and update POS customers."},
    {"name": "Merchants", "description": "Verify merchant API keys."},
    {"name": "Locations", "description": "List a merchant's active locations."},
    {"name": "Products", "description": "Page through products shared across locations."},
    {"name": "Orders", "description": "Order payloads for loyalty partners."},
    {"name": "Discounts", "description": "Active discounts for authenticated customers."},
    {"name": "Loyalty", "description": "Boukak wallet cards, stamps, and webhooks."},
    {"name": "LoyalPro", "description": "Apply and redeem LoyalPro rewards."},
    {"name": "OTP", "description": "Send one-time passwords by SMS."},
    {"name": "Tamara", "description": "Tamara in-store checkout sessions and webhooks."},
    {"name": "Moyasar", "description": "Moyasar payment webhooks."},
    {"name": "Sadeq", "description": "Merchant contract e-signatures through Sadeq."},
    {"name": "VOM", "description": "Push units, suppliers, categories, products, and bills."},
]

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.version,
    description=(
        "Integration backend for the Karage POS. "
        "Connects merchants, customers, and orders to loyalty, payment, "
        "e-signature, SMS, and accounting providers."
    ),
    openapi_tags=OPENAPI_TAGS,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def options_handler(request: Request, call_next):  # type: ignore[no-untyped-def]
    if request.method == "OPTIONS":
        origin = request.headers.get("origin", "*")
        return Response(
            status_code=200,
            headers={
                "Access-Control-Allow-Origin": origin,
                "Access-Control-Allow-Methods": "*",
                "Access-Control-Allow-Headers": "*",
                "Access-Control-Allow-Credentials": "true",
                "Access-Control-Max-Age": "86400",
            },
        )
    return await call_next(request)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(customers.router, prefix="/v1/customers", tags=["Customers"])
app.include_router(merchants.router, prefix="/v1/merchants", tags=["Merchants"])
app.include_router(locations.router, prefix="/v1/locations", tags=["Locations"])
app.include_router(products.router, prefix="/v1/products", tags=["Products"])
app.include_router(orders.router, prefix="/v1/orders", tags=["Orders"])
app.include_router(discounts.router, prefix="/v1/discounts", tags=["Discounts"])
app.include_router(loyalty.router, prefix="/v1/loyalty", tags=["Loyalty"])
app.include_router(loyalpro.router, prefix="/v1/loyalpro", tags=["LoyalPro"])
app.include_router(otp.router, prefix="/v1/otp", tags=["OTP"])
app.include_router(tamara.router, prefix="/v1/tamara", tags=["Tamara"])
app.include_router(moyasar.router, prefix="/v1/moyasar", tags=["Moyasar"])
app.include_router(sadeq.router, prefix="/v1/sadeq", tags=["Sadeq"])
app.include_router(vom.router, prefix="/v1/vom", tags=["VOM"])


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "app": settings.APP_NAME,
        "version": settings.version,
        "status": "running",
    }
