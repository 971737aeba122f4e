from datetime import datetime, time

from pydantic import BaseModel


class DiscountResponse(BaseModel):
    DiscountID: int
    Name: str | None
    DiscountType: str | None
    Value: float | None
    FromDate: datetime | None
    ToDate: datetime | None
    FromTime: time | None
    ToTime: time | None
    LocationID: int
    LastUpdatedDate: datetime | None
    LastUpdatedBy: str | None
    StatusID: int | None
    DiscountBy: str | None
    IsCouponCode: bool | None
    Code: str | None
    NoOfRedemption: int | None


class DiscountListResponse(BaseModel):
    message: str
    customer_id: str
    LocationID: int
    total_discounts: int
    discounts: list[DiscountResponse]
