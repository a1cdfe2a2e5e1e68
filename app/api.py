from app.routes import (
    auth_bp,
    ekyc_bp,
    user_bp,
    vendor_bp,
    vendor_onboarding_bp,
    plans_bp,
    webhook_bp,
    upload_bp,
)


def register_api_v1(app):
    """Register blueprint routes under the API version prefix."""
    app.register_blueprint(auth_bp)
    app.register_blueprint(ekyc_bp)
    app.register_blueprint(user_bp)
    app.register_blueprint(vendor_onboarding_bp)
    app.register_blueprint(vendor_bp)
    app.register_blueprint(plans_bp)
    app.register_blueprint(webhook_bp)
    app.register_blueprint(upload_bp)
