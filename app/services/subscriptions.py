import logging
from datetime import datetime, timedelta
from dateutil.relativedelta import relativedelta
from flask import current_app
from models import db
from models.plan import Plan, VendorSubscription
from models.vendor import Vendor

logger = logging.getLogger(__name__)

ACTIVE = "ACTIVE"
EXPIRED = "EXPIRED"
CANCELLED = "CANCELLED"

_INTERVALS = {
    "weekly": timedelta(days=7),
    "monthly": relativedelta(months=1),
    "quarterly": relativedelta(months=3),
    "yearly": relativedelta(years=1),
    "annually": relativedelta(years=1),
}


def compute_expiry(interval, start: datetime) -> datetime:
    """Expiry for a plan interval; unknown intervals run one month."""
    step = _INTERVALS.get((interval or "").strip().lower(), relativedelta(months=1))
    return start + step


def activate_subscription(vendor_id, plan_id, transaction=None, now=None):
    """Start a subscription for a vendor on a plan.

    Returns None when the vendor or plan no longer exists. A transaction
    activates at most one subscription; a repeat call returns the one
    already created for it.
    """
    if transaction is not None and transaction.id is not None:
        existing = VendorSubscription.query.filter_by(transaction_id=transaction.id).first()
        if existing:
            logger.info("Transaction %s already activated subscription %s", transaction.id, existing.id)
            return existing

    vendor = db.session.get(Vendor, vendor_id) if vendor_id else None
    plan = db.session.get(Plan, plan_id) if plan_id else None
    if vendor is None or plan is None:
        logger.error("Cannot activate subscription: vendor=%s plan=%s", vendor_id, plan_id)
        return None

    started_at = now or datetime.utcnow()
    expires_at = compute_expiry(plan.interval, started_at)

    for current in VendorSubscription.query.filter_by(vendor_id=vendor.id, status=ACTIVE).all():
        current.status = CANCELLED
        current.cancelled_at = started_at

    subscription = VendorSubscription(
        vendor_id=vendor.id,
        plan_id=plan.id,
        transaction_id=transaction.id if transaction is not None else None,
        status=ACTIVE,
        started_at=started_at,
        expires_at=expires_at,
    )
    db.session.add(subscription)
    vendor.current_plan_id = plan.id
    vendor.plan_started_at = started_at
    vendor.plan_expires_at = expires_at
    db.session.flush()
    logger.info("Subscription %s activated for vendor %s on plan %s", subscription.id, vendor.id, plan.id)

    _queue_confirmation(vendor, plan, expires_at)
    return subscription


def _queue_confirmation(vendor, plan, expires_at):
    from app.tasks.notifications import send_email_task

    subject = "Subscription Activated"
    text = (
        f"Hello {vendor.first_name}, your subscription to {plan.name} has been "
        f"successfully activated. It will expire on {expires_at.strftime('%B %d, %Y')}."
    )
    try:
        if current_app.config.get("TESTING"):
            send_email_task(vendor.email, subject, text)
        else:
            send_email_task.delay(vendor.email, subject, text)
    except Exception as e:
        logger.error("Failed to queue subscription e-mail for vendor %s: %s", vendor.id, e)


def current_subscription(vendor):
    return (
        VendorSubscription.query.filter_by(vendor_id=vendor.id, status=ACTIVE)
        .order_by(VendorSubscription.expires_at.desc())
        .first()
    )


def _clear_vendor_plan(vendor):
    vendor.current_plan_id = None
    vendor.plan_started_at = None
    vendor.plan_expires_at = None


def cancel_active_subscription(vendor, now=None):
    subscription = current_subscription(vendor)
    if subscription is None:
        return None
    subscription.status = CANCELLED
    subscription.cancelled_at = now or datetime.utcnow()
    _clear_vendor_plan(vendor)
    logger.info("Subscription %s cancelled for vendor %s", subscription.id, vendor.id)
    return subscription


def expire_subscriptions(now=None) -> int:
    """Mark ACTIVE subscriptions past their expiry as EXPIRED."""
    now = now or datetime.utcnow()
    due = VendorSubscription.query.filter(
        VendorSubscription.status == ACTIVE,
        VendorSubscription.expires_at <= now,
    ).all()
    for subscription in due:
        subscription.status = EXPIRED
        vendor = subscription.vendor
        if vendor is not None and vendor.current_plan_id == subscription.plan_id:
            _clear_vendor_plan(vendor)
    if due:
        logger.info("Expired %d subscriptions", len(due))
    return len(due)
