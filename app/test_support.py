from flask import Blueprint, request
from app.utils.responses import ok, error
import logging
from app.utils.jwt import create_access_token, create_refresh_token
from models import db
from models.user import User
from models.vendor import Vendor


test_support_bp = Blueprint("test_support_bp", __name__)


@test_support_bp.route("/__ok", methods=["GET"])
def __ok():
    return ok({"ping": "pong"})


@test_support_bp.route("/__boom", methods=["GET"])
def __boom():
    raise RuntimeError("boom")


@test_support_bp.route("/__log", methods=["GET"])
def __log():
    logging.getLogger(__name__).info("test log line")
    return ok({"logged": True})


@test_support_bp.route("/__auth/login_stub", methods=["POST"])
def __login_stub():
    """Create a bare vendor or user for a phone number and issue tokens.

    Body: {"phone": "0800...", "role": "VENDOR" | "USER"}
    """
    j = request.get_json() or {}
    phone = str(j.get("phone", "08000000000"))
    role = j.get("role", "VENDOR").upper()
    if role == "VENDOR":
        account = Vendor.query.filter_by(mobile_number=phone).first()
        if not account:
            account = Vendor(
                first_name="Test",
                last_name="Vendor",
                email=f"{phone}@vendor.test",
                mobile_number=phone,
                business_type="Salon",
                service_category="Beauty",
                skills=["hair"],
            )
            db.session.add(account)
    elif role == "USER":
        account = User.query.filter_by(mobile_number=phone).first()
        if not account:
            account = User(mobile_number=phone, full_name="Test User")
            db.session.add(account)
    else:
        return error("Unsupported role", status=400)
    db.session.commit()
    plan_id = getattr(account, "current_plan_id", None)
    return ok({
        "id": account.id,
        "access": create_access_token(account.id, role, plan_id),
        "refresh": create_refresh_token(account.id, role),
    })
