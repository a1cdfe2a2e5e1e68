import logging
import random
from datetime import datetime, timedelta
from flask import current_app
from models import db
from models.user import Otp
from app.errors import APIError

logger = logging.getLogger(__name__)

VENDOR_LOGIN = "vendor_login"
USER_LOGIN = "USER_LOGIN"
USER_REGISTRATION = "USER_REGISTRATION"


class OtpError(APIError):
    status_code = 400


def generate_otp() -> str:
    return str(random.randint(100000, 999999))


def issue_otp(phone_number: str, otp_type: str) -> Otp:
    """Create or replace the code for (phone_number, otp_type)."""
    minutes = current_app.config.get("OTP_EXPIRY_MINUTES", 10)
    code = generate_otp()
    expires_at = datetime.utcnow() + timedelta(minutes=minutes)
    record = Otp.query.filter_by(phone_number=phone_number, type=otp_type).first()
    if record is None:
        record = Otp(phone_number=phone_number, type=otp_type)
        db.session.add(record)
    record.otp = code
    record.expires_at = expires_at
    db.session.flush()
    logger.debug({"event": "otp_issued", "phoneNumber": phone_number, "type": otp_type})
    return record


def verify_otp(phone_number: str, otp_type: str, code: str) -> None:
    """Check a submitted code and consume it.

    Raises OtpError when no code was issued, when the code differs or
    when it has expired. A valid code is deleted so it works only once.
    """
    record = Otp.query.filter_by(phone_number=phone_number, type=otp_type).first()
    if record is None:
        logger.warning({"event": "otp_missing", "phoneNumber": phone_number, "type": otp_type})
        raise OtpError("Invalid OTP or phone number")
    if record.otp != str(code):
        raise OtpError("Invalid OTP")
    if record.expires_at < datetime.utcnow():
        raise OtpError("OTP has expired")
    db.session.delete(record)


def dispatch_otp(phone_number: str, code: str) -> None:
    from app.tasks.notifications import send_otp_message_task

    body = f"Your verification code is {code}"
    if current_app.config.get("TESTING"):
        send_otp_message_task(phone_number, body)
    else:
        send_otp_message_task.delay(phone_number, body)


def otp_response_data(record: Otp) -> dict:
    data = {"phoneNumber": record.phone_number, "expiresAt": record.expires_at.isoformat()}
    if current_app.config.get("OTP_RETURN_IN_RESPONSE"):
        data["otp"] = record.otp
    return data
