from flask import Flask, request, g
from dotenv import load_dotenv
from app.config import get_config_class
from app.logging import configure_logging
from app.errors import errors_bp
from app.cli import register_cli
from app.api import register_api_v1
from app.routes.onboarding import auth as auth_routes
from app.version import API_PREFIX
from app import metrics as app_metrics
from app.services.storage import init_cloudinary
from app.services.payments.alatpay import AlatPayMockedService
from app.services.payments.flutterwave import FlutterwaveService, FlutterwaveSubscriptionService
from app.utils import transactional
from flask_cors import CORS
from flasgger import Swagger
from prometheus_client import CollectorRegistry
from prometheus_flask_exporter import PrometheusMetrics
from flask_migrate import Migrate
import celery_app  # noqa: F401
import extensions
import logging
import os
import uuid
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator
from app.telemetry import init_tracing
from models import db


def init_payment_gateways(app):
    """Gateway clients live on app.extensions so tests can swap them."""
    app.extensions["payment_gateways"] = {
        "ALATPAY": AlatPayMockedService.from_config(app.config),
        "FLUTTERWAVE": FlutterwaveService.from_config(app.config),
        "FLUTTERWAVE_SUBSCRIPTIONS": FlutterwaveSubscriptionService.from_config(app.config),
    }


def _seed_plans_on_startup(app):
    from app.services.plans import seed_plans

    with app.app_context():
        try:
            with transactional("Failed to seed plans"):
                seed_plans()
        except Exception as e:
            logging.error("Error seeding plans: %s", e)


def create_app(config_object=None):
    """Application factory."""
    load_dotenv()
    app = Flask(__name__)

    if config_object is not None:
        if isinstance(config_object, str):
            app.config.from_object(config_object)
        else:
            app.config.from_object(config_object)
    else:
        app.config.from_object(get_config_class())

    configure_logging(app)
    register_cli(app)
    auth_routes.init_twilio(app)
    init_payment_gateways(app)
    init_cloudinary(app)

    # Initialize extensions
    limiter = extensions.limiter
    limiter.init_app(app)
    app.limiter = limiter

    migrate = Migrate(app, db, compare_type=True, render_as_batch=True)
    swagger = Swagger(
        app,
        config={
            "headers": [],
            "specs": [
                {
                    "endpoint": "apispec",
                    "route": "/apispec.json",
                    "rule_filter": lambda rule: rule.rule.startswith(
                        f"{API_PREFIX}/"
                    ),
                    "model_filter": lambda tag: True,
                }
            ],
            "swagger_ui": True,
            "specs_route": "/docs/",
        },
        template={
            "tags": [
                {"name": "Auth", "description": "OTP and token endpoints"},
                {"name": "User", "description": "User accounts"},
                {"name": "Vendor", "description": "Vendor onboarding and services"},
                {"name": "Plans", "description": "Subscription plans"},
                {"name": "Payments", "description": "Plan checkout, callbacks and webhooks"},
                {"name": "Uploads", "description": "File uploads"},
            ]
        },
    )
    registry = CollectorRegistry() if app.config.get("TESTING") else None
    metrics = PrometheusMetrics(app, path="/metrics", registry=registry)
    if not app.config.get("TESTING") and not os.environ.get("METRICS_APP_INFO_SET"):
        metrics.info("app_info", "Application info", version="1.0.0")
        os.environ["METRICS_APP_INFO_SET"] = "1"

    # Configure CORS
    allowed = app.config.get("CORS_ALLOWED_ORIGINS", "*")
    if isinstance(allowed, str):
        allowed = allowed.strip()
        origins = "*" if allowed == "*" else [o.strip() for o in allowed.split(",") if o.strip()]
    else:
        origins = allowed or "*"
    CORS(
        app,
        origins=origins,
        supports_credentials=True,
        expose_headers=["X-Request-ID"],
    )

    app.register_blueprint(errors_bp)
    if app.config.get("TESTING"):
        from app.test_support import test_support_bp
        app.register_blueprint(test_support_bp)
        app.register_blueprint(test_support_bp, url_prefix=f"{API_PREFIX}/test_support", name="test_support_bp_v1")

    register_api_v1(app)

    @app.before_request
    def _set_request_id():
        incoming = request.headers.get("X-Request-ID")
        rid = (incoming or uuid.uuid4().hex)[:100]
        g.request_id = rid
        app.logger.info(f"request start {request.method} {request.path}")

    @app.after_request
    def _add_request_id_header(resp):
        try:
            rid = getattr(g, "request_id", None)
            if rid:
                resp.headers["X-Request-ID"] = rid
        except Exception:
            pass
        return resp

    @app.after_request
    def _set_security_headers(resp):
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        existing = resp.headers.get("Access-Control-Expose-Headers", "")
        if "X-Request-ID" not in existing:
            existing = (
                existing
                + ("," if existing and not existing.endswith(",") else "")
                + "X-Request-ID"
            ).strip(",")
        if "traceparent" not in existing:
            existing = (
                existing
                + ("," if existing and not existing.endswith(",") else "")
                + "traceparent"
            ).strip(",")
        resp.headers["Access-Control-Expose-Headers"] = existing
        return resp

    @app.after_request
    def _add_trace_header(resp):
        carrier = {}
        TraceContextTextMapPropagator().inject(carrier)
        tp = carrier.get("traceparent")
        if tp:
            resp.headers["traceparent"] = tp
        return resp

    db.init_app(app)
    init_tracing(app)
    app_metrics.init_app(app)
    if app.config.get("DEBUG") or app.config.get("TESTING"):
        with app.app_context():
            db.create_all()
            logging.info("Tables created")
    if app.config.get("SEED_PLANS_ON_STARTUP"):
        _seed_plans_on_startup(app)

    @app.route("/health")
    def health():
        return {"status": "ok"}, 200

    return app
