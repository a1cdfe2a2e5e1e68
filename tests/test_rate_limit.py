import pytest
import extensions
from app.version import API_PREFIX
from conftest import make_app


@pytest.fixture()
def limited_client():
    app = make_app(RATELIMIT_ENABLED=True, OTP_SEND_LIMIT_PER_PHONE="3 per 15 minutes")
    extensions.limiter.reset()
    yield app.test_client()
    extensions.limiter.reset()
    extensions.limiter.enabled = False


def test_otp_send_rate_limit_per_phone(limited_client):
    for _ in range(4):
        r = limited_client.post(
            f"{API_PREFIX}/ekyc/generate-otp", json={"phoneNumber": "09111111111", "type": "vendor_signup"}
        )
    assert r.status_code == 429
    assert "too many otp requests" in r.get_json()["message"].lower()


def test_other_phone_not_limited(limited_client):
    for _ in range(3):
        limited_client.post(
            f"{API_PREFIX}/ekyc/generate-otp", json={"phoneNumber": "09111111112", "type": "vendor_signup"}
        )
    r = limited_client.post(
        f"{API_PREFIX}/ekyc/generate-otp", json={"phoneNumber": "09111111113", "type": "vendor_signup"}
    )
    assert r.status_code == 200


def test_phone_limit_ignores_surrounding_whitespace(limited_client):
    for phone in ("09111111114", " 09111111114", "09111111114 "):
        r = limited_client.post(
            f"{API_PREFIX}/ekyc/generate-otp", json={"phoneNumber": phone, "type": "vendor_signup"}
        )
        assert r.status_code == 200
    r = limited_client.post(
        f"{API_PREFIX}/ekyc/generate-otp", json={"phoneNumber": "\t09111111114", "type": "vendor_signup"}
    )
    assert r.status_code == 429
    assert "phone number" in r.get_json()["message"].lower()
