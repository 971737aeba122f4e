"""Order payload shared with loyalty partners (PascalCase on the wire)."""

from pydantic import BaseModel


class OrderEvent(BaseModel):
    ID: str


class OrderCustomer(BaseModel):
    Id: int
    Phone: str


class OrderSummary(BaseModel):
    OrderID: int
    OrderCreatedDT: str


class OrderPayloadItem(BaseModel):
    ItemID: int | None
    Name: str
    Price: float | None
    Quantity: float
    TotalPrice: float


class OrderPayloadResponse(BaseModel):
    Event: OrderEvent
    POSBusinessReference: str
    LocationID: int
    Customer: OrderCustomer
    AmountTotal: float | None
    DiscountedAmount: float | None
    Order: OrderSummary
    OrderItems: list[OrderPayloadItem]
    OriginalOrderId: int | None = None
