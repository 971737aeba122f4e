from pydantic import BaseModel, Field


class OtpSendRequest(BaseModel):
    recipient: str = Field(..., min_length=1)


class OtpSendResponse(BaseModel):
    success: bool
    otp: str
