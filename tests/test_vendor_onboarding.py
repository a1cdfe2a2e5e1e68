from models import db
from models.vendor import Vendor
from app.version import API_PREFIX
from conftest import auth_header

VENDOR = f"{API_PREFIX}/vendor"

ONBOARD_BODY = {
    "firstName": "Bola",
    "lastName": "Ade",
    "email": "Bola@Ficago.ng",
    "businessType": "Salon",
    "mobileNumber": "08077770000",
    "serviceCategory": "Beauty",
    "skills": ["braiding", "makeup"],
}

PROFILE_BODY = {
    "vendorType": "individual",
    "selfieImage": "https://res.cloudinary.com/demo/selfie.jpg",
    "identificationType": "nin",
    "identificationNumber": "12345678901",
    "taxIdentificationNumber": "TIN-001",
    "gender": "female",
}

BANK_BODY = {"bankName": "GTBank", "accountName": "Bola Ade", "accountNumber": "0123456789"}

SERVICE_BODY = {
    "title": "Box braids",
    "description": "Medium length box braids",
    "averagePrice": 15000,
    "category": "Hair",
    "imageUrl": "https://res.cloudinary.com/demo/braids.jpg",
}


def onboard(client, **overrides):
    body = dict(ONBOARD_BODY, **overrides)
    return client.post(f"{VENDOR}/onboard", json=body)


def test_onboard_vendor(client, app):
    response = onboard(client)
    assert response.status_code == 201
    data = response.get_json()["data"]
    assert data["token"]
    assert data["vendor"]["email"] == "bola@ficago.ng"
    assert data["vendor"]["onboardingStatus"] == "in_progress"
    assert data["vendor"]["skills"] == ["braiding", "makeup"]


def test_onboard_duplicate_email(client, app):
    onboard(client)
    response = onboard(client, mobileNumber="08077770001", email="bola@ficago.ng")
    assert response.status_code == 409
    assert response.get_json()["message"] == "Vendor with this email already exists"


def test_onboard_duplicate_mobile(client, app):
    onboard(client)
    response = onboard(client, email="other@ficago.ng")
    assert response.status_code == 409
    assert response.get_json()["message"] == "Vendor with this mobile number already exists"


def test_onboard_requires_skills(client):
    response = onboard(client, skills=[])
    assert response.status_code == 400


def test_vendor_login_otp_flow(client, app):
    onboard(client)
    sent = client.post(f"{VENDOR}/login/send-otp", json={"phoneNumber": "08077770000"})
    assert sent.status_code == 200
    code = sent.get_json()["data"]["otp"]
    response = client.post(f"{VENDOR}/login/verify-otp", json={"phoneNumber": "08077770000", "otp": code})
    assert response.status_code == 200
    token = response.get_json()["data"]["token"]
    me = client.get(f"{VENDOR}/me", headers=auth_header(token))
    assert me.get_json()["data"]["mobileNumber"] == "08077770000"


def test_vendor_login_unknown_phone(client):
    response = client.post(f"{VENDOR}/login/send-otp", json={"phoneNumber": "08077779999"})
    assert response.status_code == 404


def test_vendor_routes_need_vendor_token(client, user_login):
    assert client.get(f"{VENDOR}/me").status_code == 401
    assert client.get(f"{VENDOR}/me", headers=user_login["headers"]).status_code == 403


def test_update_me(client, vendor_login):
    response = client.patch(f"{VENDOR}/me", headers=vendor_login["headers"], json={
        "businessType": "Spa",
        "skills": ["massage"],
    })
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["businessType"] == "Spa"
    assert data["skills"] == ["massage"]


def test_update_me_email_taken(client, vendor_login, app):
    onboard(client)
    response = client.patch(f"{VENDOR}/me", headers=vendor_login["headers"], json={"email": "bola@ficago.ng"})
    assert response.status_code == 409


def test_complete_profile_registered_requires_cac(client, vendor_login):
    body = dict(PROFILE_BODY, vendorType="registered")
    response = client.post(f"{VENDOR}/complete-profile", headers=vendor_login["headers"], json=body)
    assert response.status_code == 400
    assert "cacCertificateUrl" in response.get_json()["message"]


def test_steps_and_submission(client, vendor_login):
    headers = vendor_login["headers"]
    steps = client.get(f"{VENDOR}/onboarding/steps", headers=headers).get_json()["data"]
    assert steps == {
        "profile": "pending",
        "bank_account": "pending",
        "services": "pending",
        "business_verification": "not_required",
    }

    early = client.post(f"{VENDOR}/onboarding/submit", headers=headers)
    assert early.status_code == 400
    assert early.get_json()["data"]["missingSteps"] == ["profile", "bank_account", "services"]

    assert client.post(f"{VENDOR}/complete-profile", headers=headers, json=PROFILE_BODY).status_code == 200
    completion = client.get(f"{VENDOR}/profile/completion", headers=headers).get_json()["data"]
    assert completion["completionPercent"] == 33

    assert client.post(f"{VENDOR}/bank-account", headers=headers, json=BANK_BODY).status_code == 200
    assert client.post(f"{VENDOR}/services", headers=headers, json=SERVICE_BODY).status_code == 201

    status = client.get(f"{VENDOR}/onboarding/status", headers=headers).get_json()["data"]
    assert status["hasProfile"] and status["hasBank"] and status["hasServices"]
    assert status["completionPercent"] == 100

    submitted = client.post(f"{VENDOR}/onboarding/submit", headers=headers)
    assert submitted.status_code == 200
    data = submitted.get_json()["data"]
    assert data["onboardingStatus"] == "pending_review"
    assert data["submittedAt"]

    again = client.post(f"{VENDOR}/onboarding/submit", headers=headers)
    assert again.status_code == 409


def test_upgrade_to_registered_needs_verification_step(client, vendor_login):
    headers = vendor_login["headers"]
    client.post(f"{VENDOR}/complete-profile", headers=headers, json=PROFILE_BODY)
    response = client.post(f"{VENDOR}/upgrade/registered", headers=headers, json={
        "businessName": "Bola Beauty Ltd",
        "registrationNumber": "RC123456",
        "cacCertificateUrl": "https://res.cloudinary.com/demo/cac.pdf",
    })
    assert response.status_code == 200
    assert response.get_json()["data"]["vendorType"] == "registered"
    steps = client.get(f"{VENDOR}/onboarding/steps", headers=headers).get_json()["data"]
    assert steps["business_verification"] == "completed"


def test_bank_account_is_replaced(client, vendor_login, app):
    headers = vendor_login["headers"]
    client.post(f"{VENDOR}/bank-account", headers=headers, json=BANK_BODY)
    response = client.post(f"{VENDOR}/bank-account", headers=headers, json=dict(BANK_BODY, bankName="Access"))
    assert response.get_json()["data"]["bankName"] == "Access"
    vendor = db.session.get(Vendor, vendor_login["id"])
    assert vendor.bank_account.bank_name == "Access"


def test_bank_account_number_must_be_ten_digits(client, vendor_login):
    response = client.post(
        f"{VENDOR}/bank-account", headers=vendor_login["headers"], json=dict(BANK_BODY, accountNumber="12345")
    )
    assert response.status_code == 400
