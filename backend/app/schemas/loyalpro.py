from typing import Any

from pydantic import BaseModel, Field


class LoyalProRewardRequest(BaseModel):
    branch_id: str = Field(..., min_length=1)
    reward_code: str = Field(..., min_length=1)


class LoyalProRedeemRequest(BaseModel):
    discount_amount: float
    redeemed_products: list[Any]
    redeemed_combos: list[Any] = Field(default_factory=list)
    user_id: str
    branch_id: str
    order_id: str
    reward_code: str


class LoyalProResponse(BaseModel):
    success: bool
    data: Any = None
