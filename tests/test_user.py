from models.user import User
from app.version import API_PREFIX
from conftest import auth_header

USER = f"{API_PREFIX}/user"


def send_otp(client, phone, otp_type):
    return client.post(f"{USER}/auth/send-otp", json={"phoneNumber": phone, "type": otp_type})


def register(client, phone="08055550000", email="ada@ficago.ng"):
    code = send_otp(client, phone, "USER_REGISTRATION").get_json()["data"]["otp"]
    return client.post(f"{USER}/auth/verify-otp", json={
        "phoneNumber": phone,
        "otp": code,
        "type": "USER_REGISTRATION",
        "fullName": "Ada Obi",
        "email": email,
        "dateOfBirth": "1995-04-12",
    })


def test_login_otp_for_unknown_user_is_404(client):
    response = send_otp(client, "08055550001", "USER_LOGIN")
    assert response.status_code == 404
    assert response.get_json()["message"] == "User not found"


def test_registration_otp_for_known_user_is_409(client, user_login):
    response = send_otp(client, "08022222222", "USER_REGISTRATION")
    assert response.status_code == 409


def test_unknown_otp_type_rejected(client):
    response = send_otp(client, "08055550002", "SOMETHING_ELSE")
    assert response.status_code == 400


def test_register_via_otp(client, app):
    response = register(client)
    assert response.status_code == 201
    data = response.get_json()["data"]
    assert data["token"] and data["refreshToken"]
    assert data["user"]["email"] == "ada@ficago.ng"
    assert data["user"]["dateOfBirth"] == "1995-04-12"
    assert User.query.filter_by(mobile_number="08055550000").count() == 1


def test_login_via_otp(client, app):
    register(client)
    code = send_otp(client, "08055550000", "USER_LOGIN").get_json()["data"]["otp"]
    response = client.post(f"{USER}/auth/verify-otp", json={
        "phoneNumber": "08055550000",
        "otp": code,
        "type": "USER_LOGIN",
    })
    assert response.status_code == 200
    assert response.get_json()["message"] == "Login successful"


def test_register_with_taken_email_conflicts(client, app):
    register(client)
    response = register(client, phone="08055550009", email="ADA@ficago.ng")
    assert response.status_code == 409


def test_onboard_user(client, app):
    body = {
        "fullName": "Chidi Eze",
        "email": "chidi@ficago.ng",
        "mobileNumber": "08066660000",
        "dateOfBirth": "1990-01-01",
    }
    response = client.post(f"{USER}/onboard", json=body)
    assert response.status_code == 201
    assert response.get_json()["data"]["user"]["mobileNumber"] == "08066660000"
    again = client.post(f"{USER}/onboard", json=body)
    assert again.status_code == 409


def test_onboard_user_invalid_email(client):
    response = client.post(f"{USER}/onboard", json={
        "fullName": "X",
        "email": "not-an-email",
        "mobileNumber": "08066660001",
    })
    assert response.status_code == 400
    fields = [e["field"] for e in response.get_json()["errors"]]
    assert "email" in fields


def test_update_profile(client, user_login):
    response = client.put(f"{USER}/profile", headers=user_login["headers"], json={
        "fullName": "New Name",
        "gender": "female",
        "dateOfBirth": "2000-02-29",
    })
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["fullName"] == "New Name"
    assert data["gender"] == "female"
    assert data["dateOfBirth"] == "2000-02-29"


def test_update_profile_requires_user_role(client, vendor_login):
    response = client.put(f"{USER}/profile", headers=vendor_login["headers"], json={"fullName": "X"})
    assert response.status_code == 403


def test_update_profile_requires_token(client):
    response = client.put(f"{USER}/profile", json={"fullName": "X"})
    assert response.status_code == 401
    assert response.get_json()["message"] == "Token not provided"


def test_update_profile_bad_token(client):
    response = client.put(f"{USER}/profile", headers=auth_header("garbage"), json={"fullName": "X"})
    assert response.status_code == 401
    assert response.get_json()["message"] == "invalid token"
