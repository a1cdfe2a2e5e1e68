from .responses import ok, created, error
from .auth import auth_required, role_required, load_account
from .validation import validate_schema
from .db import transactional
from .jwt import (
    create_access_token,
    create_refresh_token,
    issue_tokens,
    decode_token,
    TokenError,
)
from .phone import normalize_phone

__all__ = [
    'ok',
    'created',
    'error',
    'auth_required',
    'role_required',
    'load_account',
    'create_access_token',
    'create_refresh_token',
    'issue_tokens',
    'decode_token',
    'TokenError',
    'validate_schema',
    'transactional',
    'normalize_phone',
]
