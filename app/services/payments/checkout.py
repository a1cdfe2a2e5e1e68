"""Plan checkout and the payment transaction lifecycle.

A plan purchase moves through:

    initiate -> gateway call -> callback / webhook -> reconcile -> activate

``reconcile_transaction`` is the only function that moves a transaction
out of PENDING. Once SUCCESSFUL or FAILED a transaction never changes
again, so repeated callbacks and webhook retries are harmless.
"""
import logging
import time
from decimal import Decimal, InvalidOperation
from flask import current_app
from models.plan import VendorSubscription
from models.vendor import Vendor
from app.errors import APIError
from app.metrics import record_payment, record_webhook
from app.version import API_PREFIX
from app.services import transactions
from app.services.transactions import PENDING, SUCCESSFUL, FAILED, TransactionNotFound
from app.services.plans import get_plan
from app.services.subscriptions import activate_subscription, cancel_active_subscription
from app.services.payments.flutterwave import PaymentGatewayError
from app.telemetry import payment_span

logger = logging.getLogger(__name__)

ALATPAY = "ALATPAY"
FLUTTERWAVE = "FLUTTERWAVE"
GATEWAYS = (ALATPAY, FLUTTERWAVE)

PLAN_SUBSCRIPTION = "PLAN_SUBSCRIPTION"
CALLBACK_ENDPOINT = f"{API_PREFIX}/vendor/plans/payment-callback"

_FAILED_GATEWAY_STATUSES = {"failed", "cancelled", "expired", "reversed"}


def get_gateway(name):
    gateways = current_app.extensions.get("payment_gateways", {})
    try:
        return gateways[name]
    except KeyError:
        raise APIError(f"Payment gateway {name} is not available")


def _reference(plan, vendor) -> str:
    return f"plan-{plan.id}-{vendor.id}-{int(time.time() * 1000)}"


def initiate_plan_payment(vendor, plan_id, gateway=None, redirect_url=None) -> dict:
    """Start paying for a plan.

    Returns a dict with the pending transaction and what the client needs
    to pay: the virtual account for ALATPAY, the hosted checkout link for
    FLUTTERWAVE. When the gateway call fails the transaction is marked
    FAILED and the dict carries ``error``; nothing is raised so the
    failure is persisted by the caller's commit.
    """
    plan = get_plan(plan_id)
    gateway = (gateway or current_app.config.get("PAYMENT_DEFAULT_GATEWAY", ALATPAY)).upper()
    if gateway not in GATEWAYS:
        raise APIError(f"Unsupported payment gateway: {gateway}")

    reference = _reference(plan, vendor)
    description = f"Subscription to {plan.name}"
    logger.info({
        "event": "plan_payment_initiated",
        "vendorId": vendor.id,
        "planId": plan.id,
        "reference": reference,
        "gateway": gateway,
    })
    tx = transactions.create_transaction(
        amount=plan.price,
        type=PLAN_SUBSCRIPTION,
        reference=reference,
        currency=plan.currency,
        vendor_id=vendor.id,
        plan_id=plan.id,
        description=description,
        payment_type="BANK_TRANSFER" if gateway == ALATPAY else "CARD",
        transaction_type="SUBSCRIPTION",
        gateway=gateway,
    )

    try:
        with payment_span(gateway, "initiate", reference=reference, plan_id=plan.id):
            if gateway == ALATPAY:
                data = _initiate_alatpay(tx, plan, vendor, description)
            else:
                data = _initiate_flutterwave(tx, plan, vendor, description, redirect_url)
    except PaymentGatewayError as e:
        logger.error("Plan payment initiation failed for transaction %s: %s", tx.id, e.message)
        transactions.update_transaction(tx.id, status=FAILED, meta={"error": e.message})
        record_payment(gateway, FAILED)
        return {"transaction": tx, "error": e.message}

    record_payment(gateway, PENDING)
    data.update({"transactionId": tx.id, "reference": reference, "gateway": gateway})
    return {"transaction": tx, "data": data}


def _initiate_alatpay(tx, plan, vendor, description) -> dict:
    result = get_gateway(ALATPAY).generate_virtual_account(
        amount=plan.price,
        currency=plan.currency,
        order_id=tx.reference,
        description=description,
        customer={
            "email": vendor.email,
            "phone": vendor.mobile_number,
            "firstName": vendor.first_name,
            "lastName": vendor.last_name,
            "metadata": {"vendorId": vendor.id, "planId": plan.id},
        },
    )
    if not result.get("success"):
        raise PaymentGatewayError(result.get("error") or "Failed to initiate payment")
    account = result["data"]
    transactions.update_transaction(
        tx.id, external_reference=account["transactionId"], meta=dict(account)
    )
    data = dict(account)
    data["gatewayTransactionId"] = account["transactionId"]
    data["callbackEndpoint"] = CALLBACK_ENDPOINT
    return data


def _initiate_flutterwave(tx, plan, vendor, description, redirect_url) -> dict:
    body = get_gateway(FLUTTERWAVE).initialize_payment(
        reference=tx.reference,
        amount=plan.price,
        currency=plan.currency,
        redirect_url=redirect_url or current_app.config.get("PAYMENT_REDIRECT_URL"),
        customer={
            "email": vendor.email,
            "name": f"{vendor.first_name} {vendor.last_name}",
            "phone": vendor.mobile_number,
        },
        title=f"{plan.name} plan",
        description=description,
        metadata={"vendorId": vendor.id, "planId": plan.id, "transactionId": tx.id},
        payment_plan=plan.external_plan_id,
    )
    link = (body.get("data") or {}).get("link")
    if body.get("status") != "success" or not link:
        raise PaymentGatewayError(body.get("message") or "Failed to initialize payment with Flutterwave")
    transactions.update_transaction(tx.id, external_reference=tx.reference, meta={"initialize": body})
    return {"link": link}


def schedule_pending_check(transaction_id) -> None:
    """Queue a status re-check for a transaction still pending later on."""
    if not current_app.config.get("PAYMENT_PENDING_CHECK_ENABLED", True):
        return
    from app.tasks.payments import reconcile_pending_transaction_task

    delay = current_app.config.get("PAYMENT_PENDING_CHECK_SECONDS", 600)
    try:
        reconcile_pending_transaction_task.apply_async(args=[transaction_id], countdown=delay)
    except Exception as e:
        logger.error("Failed to schedule pending check for transaction %s: %s", transaction_id, e)


def _amount_mismatch(tx, amount, currency):
    if amount is not None:
        try:
            if Decimal(str(amount)).quantize(Decimal("0.01")) != Decimal(tx.amount).quantize(Decimal("0.01")):
                return f"Amount mismatch: expected {tx.amount}, received {amount}"
        except (InvalidOperation, ValueError):
            return f"Invalid amount received: {amount}"
    if currency and tx.currency and str(currency).upper() != tx.currency.upper():
        return f"Currency mismatch: expected {tx.currency}, received {currency}"
    return None


def _subscription_for(tx):
    return VendorSubscription.query.filter_by(transaction_id=tx.id).first()


def reconcile_transaction(tx, gateway_status, payload=None, amount=None, currency=None):
    """Apply a gateway's verdict to a pending transaction.

    ``gateway_status`` is one of PENDING, SUCCESSFUL or FAILED. A success
    whose amount or currency disagrees with the transaction is recorded
    as FAILED. Successful plan payments activate the subscription.
    Returns the subscription tied to the transaction, if any.
    """
    if tx.is_terminal:
        logger.info("Transaction %s already %s; ignoring %s", tx.id, tx.status, gateway_status)
        return _subscription_for(tx) if tx.status == SUCCESSFUL else None
    if gateway_status not in (SUCCESSFUL, FAILED):
        return None

    meta = dict(tx.meta or {})
    if payload is not None:
        meta["confirmation"] = payload
    status = gateway_status
    if status == SUCCESSFUL:
        reason = _amount_mismatch(tx, amount, currency)
        if reason:
            logger.warning("Transaction %s rejected: %s", tx.id, reason)
            meta["failureReason"] = reason
            status = FAILED

    transactions.update_transaction(tx.id, status=status, meta=meta)
    record_payment(tx.gateway, status)
    logger.info("Transaction %s reconciled as %s", tx.id, status)

    if status == SUCCESSFUL and tx.type == PLAN_SUBSCRIPTION:
        return activate_subscription(tx.vendor_id, tx.plan_id, transaction=tx)
    return None


def _alatpay_status(data) -> str:
    status = (data.get("status") or "").lower()
    if status == "successful" and data.get("isCallbackValidated") and not data.get("isAmountDiscrepant"):
        return SUCCESSFUL
    if status == "successful" and data.get("isAmountDiscrepant"):
        return FAILED
    if status in _FAILED_GATEWAY_STATUSES:
        return FAILED
    return PENDING


def _flutterwave_status(data) -> str:
    status = (data.get("status") or "").lower()
    if status == "successful":
        return SUCCESSFUL
    if status in _FAILED_GATEWAY_STATUSES:
        return FAILED
    return PENDING


def handle_bank_transfer_callback(gateway_transaction_id) -> dict:
    """Confirm a bank transfer with the gateway and settle the transaction."""
    tx = transactions.find_by_external_reference(gateway_transaction_id)
    if tx is None:
        logger.warning("Callback for unknown gateway transaction %s", gateway_transaction_id)
        raise TransactionNotFound()

    with payment_span(ALATPAY, "confirm", reference=tx.reference):
        result = get_gateway(ALATPAY).confirm_transaction_status(gateway_transaction_id)
    if not result.get("success"):
        logger.warning("Callback verification failed for %s: %s", gateway_transaction_id, result.get("error"))
        raise APIError(result.get("error") or "Callback verification failed")

    data = result.get("data") or {}
    subscription = reconcile_transaction(
        tx,
        _alatpay_status(data),
        payload=data,
        amount=data.get("amount"),
        currency=data.get("currency"),
    )
    return {
        "status": tx.status,
        "isValidated": bool(data.get("isCallbackValidated")),
        "transaction": tx.to_dict(),
        "subscription": subscription.to_dict() if subscription else None,
    }


def _handle_charge(data) -> dict:
    reference = data.get("tx_ref")
    tx = transactions.find_by_reference(reference)
    if tx is None:
        logger.warning("Transaction not found for webhook reference %s", reference)
        return {"processed": False, "reference": reference}

    if not tx.is_terminal and data.get("id") is not None:
        transactions.update_transaction(
            tx.id,
            gateway_transaction_id=str(data["id"]),
            charge_amount=data.get("charged_amount"),
        )
    status = SUCCESSFUL if (data.get("status") or "").lower() == "successful" else FAILED
    reconcile_transaction(
        tx, status, payload=data, amount=data.get("amount"), currency=data.get("currency")
    )
    return {"processed": True, "transactionId": tx.id, "status": tx.status}


def _handle_subscription_cancelled(data) -> dict:
    customer = data.get("customer")
    email = (customer.get("email") if isinstance(customer, dict) else None) or data.get("email")
    vendor = None
    if isinstance(email, str) and email.strip():
        vendor = Vendor.query.filter_by(email=email.strip().lower()).first()
    if vendor is None:
        logger.warning("Subscription cancellation for unknown customer")
        return {"processed": False}
    subscription = cancel_active_subscription(vendor)
    return {"processed": subscription is not None, "vendorId": vendor.id}


def handle_flutterwave_webhook(raw_body, payload, signature) -> dict:
    event = get_gateway("FLUTTERWAVE_SUBSCRIPTIONS").handle_webhook(raw_body, payload, signature)
    record_webhook(FLUTTERWAVE, event["type"])
    if event["type"] == "payment":
        result = _handle_charge(event["data"])
    elif event["type"] == "subscription_cancelled":
        result = _handle_subscription_cancelled(event["data"])
    else:
        logger.info("Ignoring unhandled webhook event")
        result = {"processed": False}
    result["event"] = event["type"]
    return result


def refresh_pending_transaction(tx):
    """Ask the gateway about a PENDING transaction and reconcile it."""
    if tx.status != PENDING:
        return _subscription_for(tx) if tx.status == SUCCESSFUL else None
    try:
        with payment_span(tx.gateway or "UNKNOWN", "status_check", reference=tx.reference):
            data, status = _gateway_verdict(tx)
    except PaymentGatewayError as e:
        logger.warning("Could not verify transaction %s: %s", tx.id, e.message)
        return None
    if status is None:
        return None
    return reconcile_transaction(
        tx, status, payload=data, amount=data.get("amount"), currency=data.get("currency")
    )


def _gateway_verdict(tx):
    """Return (payload, status) from the gateway, or (None, None) when unknown."""
    if tx.gateway == ALATPAY:
        if not tx.external_reference:
            return None, None
        result = get_gateway(ALATPAY).confirm_transaction_status(tx.external_reference)
        if not result.get("success"):
            logger.warning("Status check failed for transaction %s: %s", tx.id, result.get("error"))
            return None, None
        data = result.get("data") or {}
        return data, _alatpay_status(data)
    if tx.gateway == FLUTTERWAVE:
        data = get_gateway(FLUTTERWAVE).verify_payment_by_reference(tx.reference)
        return data, _flutterwave_status(data)
    return None, None


def check_plan_payment_status(vendor, transaction_id) -> dict:
    tx = transactions.get_transaction(transaction_id)
    if tx.vendor_id != vendor.id:
        raise TransactionNotFound()
    refresh_pending_transaction(tx)
    subscription = _subscription_for(tx)
    return {
        "status": tx.status,
        "transaction": tx.to_dict(),
        "subscription": subscription.to_dict() if subscription else None,
    }
