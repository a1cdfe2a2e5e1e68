from functools import wraps
from flask import request, g
from .responses import error
from app.auth.permissions import role_has_scope
from .jwt import decode_token, TokenError
from models import db
from models.user import User
from models.vendor import Vendor

ROLE_MODELS = {
    "VENDOR": Vendor,
    "USER": User,
}


def load_account(role, subject_id):
    model = ROLE_MODELS.get(role)
    if model is None:
        return None
    try:
        return db.session.get(model, int(subject_id))
    except (TypeError, ValueError):
        return None


def auth_required(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        auth = request.headers.get("Authorization", "")
        if not auth:
            return error("Token not provided", status=401)
        token = auth.split(" ", 1)[1] if auth.startswith("Bearer ") else auth
        try:
            payload = decode_token(token, expected_type="access")
        except TokenError as e:
            return error(str(e), status=401)

        g.subject_id = payload["sub"]
        g.role = payload.get("role")
        g.plan_id = payload.get("plan")
        request.account = load_account(g.role, g.subject_id)
        return func(*args, **kwargs)

    return wrapper


def _to_set(obj):
    return set(obj) if isinstance(obj, (list, tuple, set)) else {obj}


def role_required(required):
    """Authorize based on token role or scoped action."""
    required_set = _to_set(required)

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            role = getattr(g, "role", None)
            if not role:
                return error("Role missing", status=403)
            for entry in required_set:
                if ":" in entry:
                    r, action = entry.split(":", 1)
                    if role == r and role_has_scope(role, action):
                        break
                else:
                    if role == entry:
                        break
            else:
                return error("Forbidden", status=403)
            return fn(*args, **kwargs)

        return wrapper

    return decorator
