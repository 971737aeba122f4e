from pydantic import BaseModel, Field


class CustomerCreate(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    phone: str = Field(..., min_length=1, max_length=20)
    phone_prefix: int = Field(..., ge=1)


class CustomerUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=20)
    phone_prefix: int | None = Field(default=None, ge=1)


class CustomerResponse(BaseModel):
    customerId: int
    name: str | None
    email: str | None
    phone: str
    phone_prefix: int = 966
