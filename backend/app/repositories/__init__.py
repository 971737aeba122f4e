from app.repositories.catalog_repository import CatalogRepository
from app.repositories.customer_repository import CustomerRepository
from app.repositories.discount_repository import DiscountRepository
from app.repositories.integration_mapping_repository import (
    IntegrationMappingRepository,
    MappingKey,
)
from app.repositories.item_repository import ItemRepository
from app.repositories.location_repository import LocationRepository
from app.repositories.moyasar_webhook_repository import MoyasarWebhookRepository
from app.repositories.order_repository import OrderRepository
from app.repositories.sadeq_contract_repository import SadeqContractRepository
from app.repositories.tamara_order_repository import TamaraOrderRepository
from app.repositories.user_repository import UserRepository

__all__ = [
    "CatalogRepository",
    "CustomerRepository",
    "DiscountRepository",
    "IntegrationMappingRepository",
    "ItemRepository",
    "LocationRepository",
    "MappingKey",
    "MoyasarWebhookRepository",
    "OrderRepository",
    "SadeqContractRepository",
    "TamaraOrderRepository",
    "UserRepository",
]
