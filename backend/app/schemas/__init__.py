from app.schemas.customer import CustomerCreate, CustomerResponse, CustomerUpdate
from app.schemas.discount import DiscountListResponse, DiscountResponse
from app.schemas.loyalpro import LoyalProRedeemRequest, LoyalProResponse, LoyalProRewardRequest
from app.schemas.loyalty import (
    BoukakWebhookPayload,
    BulkSyncQueuedResponse,
    BulkSyncResponse,
    BulkSyncResult,
    LoyaltyCardCreate,
    LoyaltyCardResponse,
    StampsCreate,
    StampsResponse,
    WebhookAck,
)
from app.schemas.merchant import (
    LocationResponse,
    MerchantVerifyResponse,
    ProductPageResponse,
    ProductResponse,
)
from app.schemas.moyasar import MoyasarWebhookPayload, MoyasarWebhookResponse
from app.schemas.order import OrderPayloadItem, OrderPayloadResponse
from app.schemas.otp import OtpSendRequest, OtpSendResponse
from app.schemas.sadeq import SadeqContractListResponse, SadeqContractResponse, SadeqRequestCreate
from app.schemas.tamara import TamaraSessionRequest, TamaraSessionResponse
from app.schemas.vom import VomSyncItemResult, VomSyncResponse

__all__ = [
    "BoukakWebhookPayload",
    "BulkSyncQueuedResponse",
    "BulkSyncResponse",
    "BulkSyncResult",
    "CustomerCreate",
    "CustomerResponse",
    "CustomerUpdate",
    "DiscountListResponse",
    "DiscountResponse",
    "LocationResponse",
    "LoyalProRedeemRequest",
    "LoyalProResponse",
    "LoyalProRewardRequest",
    "LoyaltyCardCreate",
    "LoyaltyCardResponse",
    "MerchantVerifyResponse",
    "MoyasarWebhookPayload",
    "MoyasarWebhookResponse",
    "OrderPayloadItem",
    "OrderPayloadResponse",
    "OtpSendRequest",
    "OtpSendResponse",
    "ProductPageResponse",
    "ProductResponse",
    "SadeqContractListResponse",
    "SadeqContractResponse",
    "SadeqRequestCreate",
    "StampsCreate",
    "StampsResponse",
    "TamaraSessionRequest",
    "TamaraSessionResponse",
    "VomSyncItemResult",
    "VomSyncResponse",
    "WebhookAck",
]
