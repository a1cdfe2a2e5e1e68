from typing import Literal, Optional
from pydantic import Field, field_validator
from app.schemas.common import CamelModel


class InitiatePlanPaymentRequest(CamelModel):
    plan_id: int
    gateway: Optional[Literal["ALATPAY", "FLUTTERWAVE"]] = None
    redirect_url: Optional[str] = None

    @field_validator("gateway", mode="before")
    @classmethod
    def _upper(cls, v):
        return v.upper() if isinstance(v, str) else v


class PaymentCallbackRequest(CamelModel):
    transaction_id: str = Field(min_length=1)


class SignedUrlRequest(CamelModel):
    public_id: str = Field(min_length=1)
    resource_type: str = "raw"
