import logging
from decimal import Decimal
from flask import current_app
from models import db
from models.plan import Plan
from app.errors import NotFoundError
from app.services.payments.flutterwave import PaymentGatewayError

logger = logging.getLogger(__name__)

DEFAULT_PLANS = [
    {
        "name": "Basic",
        "price": 1500,
        "currency": "NGN",
        "interval": "monthly",
        "features": [
            "Visibility to FicaGo Subscribers",
            "Post a single service",
        ],
        "is_popular": True,
        "role": "VENDOR",
    },
    {
        "name": "Premium",
        "price": 2500,
        "currency": "NGN",
        "interval": "monthly",
        "features": [
            "Visibility to FicaGo Subscribers",
            "Post multiple services",
            "Verification badge",
        ],
        "is_popular": False,
        "role": "VENDOR",
    },
    {
        "name": "Pro",
        "price": 5000,
        "currency": "NGN",
        "interval": "monthly",
        "features": [
            "Visibility to FicaGo Subscribers",
            "Post multiple services",
            "Verification badge",
            "Priority on search Page",
        ],
        "is_popular": True,
        "role": "VENDOR",
    },
]


def list_plans(role: str):
    return Plan.query.filter_by(role=role).order_by(Plan.price.asc(), Plan.id.asc()).all()


def get_plan(plan_id) -> Plan:
    plan = db.session.get(Plan, plan_id)
    if plan is None:
        raise NotFoundError("Plan not found")
    return plan


def _create_external_plan(subscriptions, plan_def) -> str:
    try:
        response = subscriptions.create_plan(
            name=plan_def["name"],
            amount=plan_def["price"],
            interval=plan_def["interval"],
            currency=plan_def["currency"],
        )
    except PaymentGatewayError as e:
        logger.error("Failed to create plan on Flutterwave: %s (%s)", plan_def["name"], e.message)
        return None
    plan_id = (response.get("data") or {}).get("id")
    if plan_id is None:
        return None
    logger.info("Plan created on Flutterwave: %s (%s)", plan_def["name"], plan_id)
    return str(plan_id)


def seed_plans() -> int:
    """Create the default vendor plans when none exist.

    When Flutterwave keys are configured each plan is also created as a
    Flutterwave payment plan. A gateway failure is logged and the plan is
    stored without an external id. Returns the number of plans created.
    """
    if Plan.query.count() > 0:
        logger.info("Plans already exist, skipping seeding")
        return 0

    subscriptions = None
    gateways = current_app.extensions.get("payment_gateways", {})
    cfg = current_app.config
    if cfg.get("SEED_FLUTTERWAVE_PLANS") and cfg.get("FLUTTERWAVE_SECRET_KEY"):
        subscriptions = gateways.get("FLUTTERWAVE_SUBSCRIPTIONS")

    logger.info("Seeding plans...")
    for plan_def in DEFAULT_PLANS:
        external_id = _create_external_plan(subscriptions, plan_def) if subscriptions else None
        db.session.add(Plan(
            name=plan_def["name"],
            price=Decimal(plan_def["price"]),
            currency=plan_def["currency"],
            interval=plan_def["interval"],
            features=list(plan_def["features"]),
            is_popular=plan_def["is_popular"],
            role=plan_def["role"],
            external_plan_id=external_id,
        ))
    db.session.flush()
    logger.info("Plans seeded successfully")
    return len(DEFAULT_PLANS)
