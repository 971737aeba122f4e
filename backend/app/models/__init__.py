from app.models.bill import Bill, BillDetail
from app.models.category import Category, SubCategory
from app.models.customer import Customer
from app.models.discount import Discount
from app.models.integration_mapping import IntegrationMapping, IntegrationProvider, MappableType
from app.models.item import Item, UniqueItemMap
from app.models.location import Location
from app.models.moyasar_payment_webhook import MoyasarPaymentWebhook
from app.models.order import Order, OrderCheckout, OrderDetail
from app.models.sadeq_contract import SadeqContract
from app.models.shared import ACTIVE_STATUS, OrderLineStatus, OrderStatus
from app.models.supplier import Supplier
from app.models.tamara_order import TamaraOrder
from app.models.unit import Unit
from app.models.user import User

__all__ = [
    "ACTIVE_STATUS",
    "Bill",
    "BillDetail",
    "Category",
    "Customer",
    "Discount",
    "IntegrationMapping",
    "IntegrationProvider",
    "Item",
    "Location",
    "MappableType",
    "MoyasarPaymentWebhook",
    "Order",
    "OrderCheckout",
    "OrderDetail",
    "OrderLineStatus",
    "OrderStatus",
    "SadeqContract",
    "SubCategory",
    "Supplier",
    "TamaraOrder",
    "UniqueItemMap",
    "Unit",
    "User",
]
