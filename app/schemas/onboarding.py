from datetime import date
from typing import List, Optional
from pydantic import EmailStr, Field, field_validator
from app.schemas.common import CamelModel
from app.utils.phone import normalize_phone


class UserOnboardRequest(CamelModel):
    full_name: str = Field(min_length=1, max_length=150)
    email: EmailStr
    mobile_number: str
    date_of_birth: Optional[date] = None

    @field_validator("mobile_number", mode="before")
    @classmethod
    def _digits_only(cls, v):
        return normalize_phone(v)


class UserProfileUpdateRequest(CamelModel):
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None


class VendorOnboardRequest(CamelModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    business_type: str = Field(min_length=1)
    mobile_number: str
    service_category: str = Field(min_length=1)
    skills: List[str] = Field(min_length=1)

    @field_validator("mobile_number", mode="before")
    @classmethod
    def _digits_only(cls, v):
        return normalize_phone(v)
