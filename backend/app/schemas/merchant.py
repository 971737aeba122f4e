from pydantic import BaseModel


class MerchantVerifyResponse(BaseModel):
    Company: str | None
    CompanyCode: str | None


class LocationResponse(BaseModel):
    locationId: int
    name: str | None


class ProductResponse(BaseModel):
    itemID: int
    name: str
    price: float | None


class ProductPageResponse(BaseModel):
    totalCount: int
    currentPage: int
    pageSize: int
    totalPages: int
    userId: int
    products: list[ProductResponse]
