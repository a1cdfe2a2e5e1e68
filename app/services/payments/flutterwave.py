import hashlib
import hmac
import logging
import requests
from app.errors import APIError

logger = logging.getLogger(__name__)


class PaymentGatewayError(APIError):
    status_code = 502


class FlutterwaveService:
    """Thin client for the Flutterwave v3 REST API."""

    def __init__(self, secret_key=None, public_key=None, webhook_secret=None,
                 base_url="https://api.flutterwave.com/v3", timeout=15, session=None):
        self.secret_key = secret_key
        self.public_key = public_key
        self.webhook_secret = webhook_secret
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config):
        return cls(
            secret_key=config.get("FLUTTERWAVE_SECRET_KEY"),
            public_key=config.get("FLUTTERWAVE_PUBLIC_KEY"),
            webhook_secret=config.get("FLUTTERWAVE_WEBHOOK_SECRET"),
            base_url=config.get("FLUTTERWAVE_BASE_URL", "https://api.flutterwave.com/v3"),
            timeout=config.get("FLUTTERWAVE_TIMEOUT", 15),
        )

    @property
    def configured(self) -> bool:
        return bool(self.secret_key)

    def _headers(self):
        return {
            "Authorization": f"Bearer {self.secret_key}",
            "Content-Type": "application/json",
        }

    def _request(self, method, path, context, **kwargs):
        if not self.configured:
            raise PaymentGatewayError("Flutterwave is not configured")
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method, url, headers=self._headers(), timeout=self.timeout, **kwargs
            )
            response.raise_for_status()
            return response.json()
        except requests.HTTPError as e:
            body = _safe_json(e.response)
            message = body.get("message") or str(e)
            logger.error({
                "event": "flutterwave_error",
                "context": context,
                "status": getattr(e.response, "status_code", None),
                "error": message,
            })
            raise PaymentGatewayError(f"Flutterwave {context} failed: {message}")
        except (requests.RequestException, ValueError) as e:
            logger.error("Flutterwave %s error: %s", context, e)
            raise PaymentGatewayError(f"Flutterwave {context} failed")

    def initialize_payment(self, reference, amount, currency, redirect_url, customer,
                           title="Payment", description=None, metadata=None, payment_plan=None):
        payload = {
            "tx_ref": reference,
            "amount": float(amount),
            "currency": currency or "NGN",
            "redirect_url": redirect_url,
            "payment_options": "card,banktransfer,ussd",
            "customer": {
                "email": customer.get("email"),
                "name": customer.get("name"),
                "phonenumber": customer.get("phone"),
            },
            "customizations": {
                "title": title,
                "description": description or "Payment for services",
            },
            "meta": metadata or {},
        }
        if payment_plan:
            payload["payment_plan"] = payment_plan
        return self._request("POST", "/payments", "initialization", json=payload)

    def verify_payment(self, transaction_id):
        body = self._request("GET", f"/transactions/{int(transaction_id)}/verify", "verification")
        return body.get("data") or {}

    def verify_payment_by_reference(self, tx_ref):
        body = self._request(
            "GET", "/transactions/verify_by_reference", "verification", params={"tx_ref": tx_ref}
        )
        return body.get("data") or {}

    def refund_payment(self, transaction_id, amount=None):
        payload = {} if amount is None else {"amount": float(amount)}
        return self._request("POST", f"/transactions/{transaction_id}/refund", "refund", json=payload)

    def verify_webhook_signature(self, raw_body: bytes, signature) -> bool:
        """HMAC-SHA256 of the raw request body, hex encoded."""
        if not self.webhook_secret or not signature:
            return False
        if isinstance(raw_body, str):
            raw_body = raw_body.encode("utf-8")
        expected = hmac.new(
            self.webhook_secret.encode("utf-8"), raw_body or b"", hashlib.sha256
        ).hexdigest()
        return hmac.compare_digest(expected, str(signature))


class FlutterwaveSubscriptionService(FlutterwaveService):
    """Payment plans and recurring subscriptions."""

    def create_plan(self, name, amount, interval, currency="NGN", duration=None):
        payload = {
            "name": name,
            "amount": float(amount),
            "interval": (interval or "monthly").lower(),
            "currency": currency,
        }
        if duration:
            payload["duration"] = duration
        return self._request("POST", "/payment-plans", "create_plan", json=payload)

    def get_plan(self, plan_id):
        return self._request("GET", f"/payment-plans/{plan_id}", "get_plan")

    def update_plan(self, plan_id, name=None, status=None):
        payload = {k: v for k, v in {"name": name, "status": status}.items() if v is not None}
        return self._request("PUT", f"/payment-plans/{plan_id}", "update_plan", json=payload)

    def cancel_plan(self, plan_id):
        return self._request("PUT", f"/payment-plans/{plan_id}/cancel", "cancel_plan")

    def get_subscriptions(self):
        return self._request("GET", "/subscriptions", "get_subscriptions")

    def get_subscription(self, email):
        return self._request("GET", "/subscriptions", "get_subscription", params={"email": email})

    def activate_subscription(self, subscription_id):
        return self._request("PUT", f"/subscriptions/{subscription_id}/activate", "activate_subscription")

    def cancel_subscription(self, subscription_id):
        return self._request("PUT", f"/subscriptions/{subscription_id}/cancel", "cancel_subscription")

    def handle_webhook(self, raw_body, payload, signature) -> dict:
        """Verify and classify a webhook delivery."""
        if not self.verify_webhook_signature(raw_body, signature):
            logger.error("Invalid webhook signature")
            raise APIError("Invalid webhook signature")
        payload = payload or {}
        event = payload.get("event.type") or payload.get("event")
        logger.info("Processing Flutterwave webhook event: %s", event)
        if event == "charge.completed":
            return {"type": "payment", "data": payload.get("data") or {}}
        if event == "subscription.cancelled":
            return {"type": "subscription_cancelled", "data": payload.get("data") or {}}
        return {"type": "unknown", "data": payload}


def _safe_json(response):
    if response is None:
        return {}
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}
