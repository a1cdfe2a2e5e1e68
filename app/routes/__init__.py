from .onboarding.auth import auth_bp, ekyc_bp
from .onboarding.user import user_bp
from .vendor import vendor_bp, vendor_onboarding_bp
from .plans import plans_bp
from .webhooks import webhook_bp
from .uploads import upload_bp


__all__ = [
    'auth_bp',
    'ekyc_bp',
    'user_bp',
    'vendor_bp',
    'vendor_onboarding_bp',
    'plans_bp',
    'webhook_bp',
    'upload_bp',
]
