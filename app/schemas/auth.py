from typing import Literal, Optional
from pydantic import Field, field_validator, constr
from app.schemas.common import CamelModel
from app.utils.phone import normalize_phone


class PhoneNumberMixin(CamelModel):
    phone_number: str

    @field_validator("phone_number", mode="before")
    @classmethod
    def _digits_only(cls, v):
        return normalize_phone(v)


class GenerateOTPRequest(PhoneNumberMixin):
    type: constr(min_length=1, max_length=40)


class VerifyOTPRequest(PhoneNumberMixin):
    otp: constr(pattern=r"^\d{6}$")
    type: constr(min_length=1, max_length=40)


class CheckUserRequest(CamelModel):
    email: Optional[str] = None
    phone_number: Optional[str] = None

    @field_validator("phone_number", mode="before")
    @classmethod
    def _digits_only(cls, v):
        if v in (None, ""):
            return None
        return normalize_phone(v)


class UserSendOTPRequest(PhoneNumberMixin):
    type: Literal["USER_LOGIN", "USER_REGISTRATION"] = "USER_LOGIN"


class UserVerifyOTPRequest(PhoneNumberMixin):
    otp: constr(pattern=r"^\d{6}$")
    type: Literal["USER_LOGIN", "USER_REGISTRATION"] = "USER_LOGIN"
    full_name: Optional[str] = None
    email: Optional[str] = None
    date_of_birth: Optional[str] = None


class VendorSendOTPRequest(PhoneNumberMixin):
    pass


class VendorVerifyOTPRequest(PhoneNumberMixin):
    otp: constr(pattern=r"^\d{6}$")


class RefreshTokenRequest(CamelModel):
    refresh_token: str = Field(min_length=1)
