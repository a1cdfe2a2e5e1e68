from flask import Blueprint, request, g
from app.version import API_PREFIX
from app.utils import auth_required, role_required
from app.utils import ok, created, error, transactional, issue_tokens
from app.utils.validation import validate_schema
from app.schemas.auth import UserSendOTPRequest, UserVerifyOTPRequest
from app.schemas.onboarding import UserOnboardRequest, UserProfileUpdateRequest
from app.services import otp as otp_service
from app.services import users as user_service
from app.routes.onboarding.auth import otp_send_limits, login_limits
import logging

user_bp = Blueprint("user", __name__, url_prefix=f"{API_PREFIX}/user")

USER_ROLE = "USER"


@user_bp.route("/auth/send-otp", methods=["POST"])
@otp_send_limits
@validate_schema(UserSendOTPRequest)
def user_send_otp():
    """
    Send a login or registration code to a user
    ---
    tags: [User]
    responses:
      200: {description: OTP sent}
      404: {description: No user for a login request}
      409: {description: User already registered}
    """
    data: UserSendOTPRequest = request.validated_data
    existing = user_service.find_user_by_phone(data.phone_number)
    if data.type == otp_service.USER_LOGIN and existing is None:
        return error("User not found", status=404)
    if data.type == otp_service.USER_REGISTRATION and existing is not None:
        return error("User already exists", status=409)

    with transactional("Failed to create OTP"):
        record = otp_service.issue_otp(data.phone_number, data.type)
    otp_service.dispatch_otp(record.phone_number, record.otp)
    return ok(otp_service.otp_response_data(record), message="OTP sent")


@user_bp.route("/auth/verify-otp", methods=["POST"])
@login_limits
@validate_schema(UserVerifyOTPRequest)
def user_verify_otp():
    """
    Verify a user code; logs in or registers depending on type
    ---
    tags: [User]
    responses:
      200: {description: Logged in}
      201: {description: Registered}
      400: {description: Invalid or expired OTP}
      409: {description: Email or phone already registered}
    """
    data: UserVerifyOTPRequest = request.validated_data
    with transactional("Failed to verify user OTP"):
        otp_service.verify_otp(data.phone_number, data.type, data.otp)
        if data.type == otp_service.USER_REGISTRATION:
            user = user_service.create_user(
                data.phone_number,
                full_name=data.full_name,
                email=data.email,
                date_of_birth=data.date_of_birth,
            )
        else:
            user = user_service.find_user_by_phone(data.phone_number)
    if user is None:
        return error("User not found", status=404)

    payload = issue_tokens(user.id, USER_ROLE)
    payload["user"] = user.to_dict()
    if data.type == otp_service.USER_REGISTRATION:
        logging.info("User %s registered", user.id)
        return created(payload, message="User registered")
    return ok(payload, message="Login successful")


@user_bp.route("/onboard", methods=["POST"])
@validate_schema(UserOnboardRequest)
def onboard_user():
    """
    Register a user without an OTP round trip
    ---
    tags: [User]
    responses:
      201: {description: User created}
      409: {description: Email or mobile number already registered}
    """
    data: UserOnboardRequest = request.validated_data
    with transactional("Failed to onboard user"):
        user = user_service.create_user(
            data.mobile_number,
            full_name=data.full_name,
            email=data.email,
            date_of_birth=data.date_of_birth,
        )
    payload = issue_tokens(user.id, USER_ROLE)
    payload["user"] = user.to_dict()
    return created(payload, message="User onboarded")


@user_bp.route("/profile", methods=["PUT"])
@auth_required
@role_required(USER_ROLE)
@validate_schema(UserProfileUpdateRequest)
def update_user_profile():
    """
    Update the authenticated user's profile
    ---
    tags: [User]
    security: [{Bearer: []}]
    responses:
      200: {description: Profile updated}
      401: {description: Missing or invalid token}
      403: {description: Not a user token}
    """
    data: UserProfileUpdateRequest = request.validated_data
    with transactional("Failed to update user profile"):
        user = user_service.update_profile(
            request.account,
            full_name=data.full_name,
            gender=data.gender,
            date_of_birth=data.date_of_birth,
        )
    logging.info("Profile updated for user %s", g.subject_id)
    return ok(user.to_dict(), message="Profile updated")
