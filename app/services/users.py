from datetime import date
from typing import Optional
from sqlalchemy import or_
from models import db
from models.user import User
from app.errors import APIError, ConflictError, NotFoundError


def find_user_by_phone(phone_number: str) -> Optional[User]:
    return User.query.filter_by(mobile_number=phone_number).first()


def _parse_date(value) -> Optional[date]:
    if value in (None, ""):
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise APIError("dateOfBirth must be an ISO date (YYYY-MM-DD)")


def create_user(mobile_number: str, full_name: str = None, email: str = None, date_of_birth=None) -> User:
    email = email.strip().lower() if email else None
    filters = [User.mobile_number == mobile_number]
    if email:
        filters.append(User.email == email)
    if User.query.filter(or_(*filters)).first():
        raise ConflictError("User with this email or mobile number already exists")
    user = User(
        mobile_number=mobile_number,
        full_name=full_name,
        email=email,
        date_of_birth=_parse_date(date_of_birth),
    )
    db.session.add(user)
    db.session.flush()
    return user


def update_profile(user: User, full_name=None, gender=None, date_of_birth=None) -> User:
    if user is None:
        raise NotFoundError("User not found")
    if full_name is not None:
        user.full_name = full_name
    if gender is not None:
        user.gender = gender
    if date_of_birth is not None:
        user.date_of_birth = _parse_date(date_of_birth)
    return user
