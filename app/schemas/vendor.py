from typing import List, Literal, Optional
from pydantic import EmailStr, Field, constr
from app.schemas.common import CamelModel


class CompleteProfileRequest(CamelModel):
    vendor_type: Literal["individual", "registered"]
    selfie_image: str = Field(min_length=1)
    identification_type: str = Field(min_length=1)
    identification_number: str = Field(min_length=1)
    tax_identification_number: str = Field(min_length=1)
    gender: str = Field(min_length=1)
    cac_certificate_url: Optional[str] = None


class UpgradeRegisteredRequest(CamelModel):
    business_name: str = Field(min_length=1)
    registration_number: str = Field(min_length=1)
    cac_certificate_url: str = Field(min_length=1)


class BankAccountRequest(CamelModel):
    bank_name: str = Field(min_length=1)
    account_name: str = Field(min_length=1)
    account_number: constr(pattern=r"^\d{10}$")
    bank_code: Optional[str] = None


class VendorUpdateRequest(CamelModel):
    first_name: Optional[str] = Field(default=None, min_length=1)
    last_name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    business_type: Optional[str] = None
    service_category: Optional[str] = None
    skills: Optional[List[str]] = None
    gender: Optional[str] = None


class ServiceCreateRequest(CamelModel):
    title: str = Field(min_length=1, max_length=150)
    description: str = Field(min_length=1)
    average_price: float = Field(gt=0)
    category: str = Field(min_length=1)
    image_url: str = Field(min_length=1)


class ServiceUpdateRequest(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=150)
    description: Optional[str] = None
    average_price: Optional[float] = Field(default=None, gt=0)
    category: Optional[str] = None
    image_url: Optional[str] = None
    is_active: Optional[bool] = None
