from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class SadeqRequestCreate(BaseModel):
    companyCode: str = Field(..., min_length=1)
    destinationName: str = Field(..., min_length=1)
    destinationEmail: EmailStr
    destinationPhoneNumber: str = Field(..., min_length=1)
    nationalId: str = Field(..., min_length=1)
    templateId: str = Field(..., min_length=1)
    terminals: str | None = None


class SadeqContractResponse(BaseModel):
    id: int
    company_code: str | None
    company_name: str | None
    phone_number: str | None
    terminals: str | None
    national_id: str | None
    email: str | None
    template_id: str | None
    document_id: str | None
    envelope_id: str | None
    pdf_file_name: str | None
    sadeq_sent: bool
    signed: bool
    error_message: str | None
    created_at: datetime
    updated_at: datetime | None

    model_config = {"from_attributes": True}


class SadeqContractListResponse(BaseModel):
    success: bool
    count: int
    data: list[SadeqContractResponse]
