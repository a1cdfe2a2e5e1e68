from typing import Optional
from sqlalchemy import or_
from models.vendor import Vendor
from app.errors import APIError


def check_user_exists(email: Optional[str] = None, phone_number: Optional[str] = None) -> bool:
    """Return True if a vendor already holds the email or phone number."""
    if not email and not phone_number:
        raise APIError("Email or phone number is required")
    filters = []
    if email:
        filters.append(Vendor.email == email.strip().lower())
    if phone_number:
        filters.append(Vendor.mobile_number == phone_number)
    return Vendor.query.filter(or_(*filters)).first() is not None
