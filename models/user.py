# --- models/user.py ---
from models import db, BIGINT
from datetime import datetime


# --- OTP Model ---
class Otp(db.Model):
    __tablename__ = "otp"
    __table_args__ = (
        db.UniqueConstraint("phone_number", "type", name="uq_otp_phone_type"),
    )

    id = db.Column(BIGINT, primary_key=True)
    phone_number = db.Column(db.String(20), nullable=False)
    type = db.Column(db.String(40), nullable=False)  # USER_LOGIN, USER_REGISTRATION, vendor_login, ...
    otp = db.Column(db.String(6), nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Otp phone={self.phone_number} type={self.type}>"


# --- User Model ---

class User(db.Model):
    __tablename__ = "user"

    id = db.Column(BIGINT, primary_key=True)
    full_name = db.Column(db.String(150), nullable=True)
    email = db.Column(db.String(255), unique=True, nullable=True)
    mobile_number = db.Column(db.String(20), unique=True, nullable=False)
    date_of_birth = db.Column(db.Date, nullable=True)
    gender = db.Column(db.String(20), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "fullName": self.full_name,
            "email": self.email,
            "mobileNumber": self.mobile_number,
            "dateOfBirth": self.date_of_birth.isoformat() if self.date_of_birth else None,
            "gender": self.gender,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<User id={self.id} mobile={self.mobile_number}>"
