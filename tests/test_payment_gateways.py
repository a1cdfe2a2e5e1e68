import hashlib
import hmac
import pytest
import requests
from app.errors import APIError
from app.services.payments.alatpay import AlatPayMockedService
from app.services.payments.flutterwave import (
    FlutterwaveService,
    FlutterwaveSubscriptionService,
    PaymentGatewayError,
)
from conftest import FakeResponse, FakeSession


def flutterwave(*responses, cls=FlutterwaveService, **kwargs):
    session = FakeSession(*responses)
    options = {"secret_key": "sk", "webhook_secret": "whsec", "session": session}
    options.update(kwargs)
    return cls(**options), session


def test_not_configured_raises():
    client, session = flutterwave(secret_key=None)
    with pytest.raises(PaymentGatewayError) as excinfo:
        client.verify_payment(1)
    assert excinfo.value.message == "Flutterwave is not configured"
    assert excinfo.value.status_code == 502
    assert session.calls == []


def test_initialize_payment_payload():
    client, session = flutterwave(FakeResponse({"status": "success", "data": {"link": "l"}}))
    client.initialize_payment(
        reference="ref-1",
        amount="1500.00",
        currency=None,
        redirect_url="https://ficago.ng/done",
        customer={"email": "a@ficago.ng", "name": "A B", "phone": "0801"},
        payment_plan="77",
    )
    body = session.calls[0]["json"]
    assert body["amount"] == 1500.0
    assert body["currency"] == "NGN"
    assert body["customer"] == {"email": "a@ficago.ng", "name": "A B", "phonenumber": "0801"}
    assert body["payment_plan"] == "77"
    assert session.calls[0]["timeout"] == 15


def test_verify_payment_returns_data():
    client, session = flutterwave(FakeResponse({"status": "success", "data": {"id": 9, "status": "successful"}}))
    assert client.verify_payment("9") == {"id": 9, "status": "successful"}
    assert session.calls[0]["url"] == "https://api.flutterwave.com/v3/transactions/9/verify"


def test_http_error_wrapped():
    client, _ = flutterwave(FakeResponse({"message": "Transaction not found"}, 404))
    with pytest.raises(PaymentGatewayError) as excinfo:
        client.verify_payment_by_reference("ref-x")
    assert excinfo.value.message == "Flutterwave verification failed: Transaction not found"


def test_network_and_decode_errors_wrapped():
    client, _ = flutterwave(requests.Timeout("slow"), FakeResponse(ValueError("no json")))
    with pytest.raises(PaymentGatewayError):
        client.refund_payment(1)
    with pytest.raises(PaymentGatewayError):
        client.refund_payment(1, amount=10)


def test_webhook_signature():
    client, _ = flutterwave()
    raw = b'{"event":"charge.completed"}'
    good = hmac.new(b"whsec", raw, hashlib.sha256).hexdigest()
    assert client.verify_webhook_signature(raw, good)
    assert client.verify_webhook_signature(raw.decode(), good)
    assert not client.verify_webhook_signature(raw, "0" * 64)
    assert not client.verify_webhook_signature(raw, None)
    unsigned, _ = flutterwave(webhook_secret=None)
    assert not unsigned.verify_webhook_signature(raw, good)


def test_subscription_endpoints():
    client, session = flutterwave(cls=FlutterwaveSubscriptionService)
    client.create_plan("Basic", 1500, "Monthly", duration=12)
    client.update_plan(5, status="active")
    client.cancel_plan(5)
    client.get_subscription("a@ficago.ng")
    client.cancel_subscription(3)
    calls = [(c["method"], c["url"].rsplit("/v3", 1)[1]) for c in session.calls]
    assert calls == [
        ("POST", "/payment-plans"),
        ("PUT", "/payment-plans/5"),
        ("PUT", "/payment-plans/5/cancel"),
        ("GET", "/subscriptions"),
        ("PUT", "/subscriptions/3/cancel"),
    ]
    assert session.calls[0]["json"] == {
        "name": "Basic", "amount": 1500.0, "interval": "monthly", "currency": "NGN", "duration": 12,
    }
    assert session.calls[1]["json"] == {"status": "active"}
    assert session.calls[3]["params"] == {"email": "a@ficago.ng"}


def test_handle_webhook_classifies_events():
    client, _ = flutterwave(cls=FlutterwaveSubscriptionService)
    raw = b"{}"
    sig = hmac.new(b"whsec", raw, hashlib.sha256).hexdigest()
    assert client.handle_webhook(raw, {"event": "charge.completed", "data": {"id": 1}}, sig) == {
        "type": "payment", "data": {"id": 1},
    }
    assert client.handle_webhook(raw, {"event.type": "subscription.cancelled"}, sig)["type"] == "subscription_cancelled"
    assert client.handle_webhook(raw, {"event": "other"}, sig)["type"] == "unknown"
    with pytest.raises(APIError):
        client.handle_webhook(raw, {}, "nope")


def test_alatpay_mock_round_trip():
    gateway = AlatPayMockedService(mock_status="successful", account_ttl_hours=1)
    created = gateway.generate_virtual_account(
        amount=1500, currency="NGN", order_id="plan-1", description="Basic", customer={"email": "a@ficago.ng"},
    )
    assert created["success"] is True
    account = created["data"]
    assert account["orderId"] == "plan-1"
    assert account["virtualAccountNumber"].isdigit()

    confirmed = gateway.confirm_transaction_status(account["transactionId"])["data"]
    assert confirmed["status"] == "successful"
    assert confirmed["amount"] == 1500.0
    assert confirmed["isCallbackValidated"] is True
    assert confirmed["isAmountDiscrepant"] is False


def test_alatpay_mock_unknown_and_failed(app):
    gateway = AlatPayMockedService(mock_status="FAILED")
    assert gateway.confirm_transaction_status("nope") == {
        "success": False,
        "error": "Transaction not found",
        "message": "Unknown transaction id (MOCKED)",
    }
    tx_id = gateway.generate_virtual_account(1, "NGN", "o", "d", {})["data"]["transactionId"]
    data = gateway.confirm_transaction_status(tx_id)["data"]
    assert data["status"] == "failed"
    assert data["isCallbackValidated"] is False
