from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Global limiter instance used across the app; storage and default
# limits come from RATELIMIT_* config keys at init_app time.
limiter = Limiter(
    key_func=get_remote_address,
    strategy="fixed-window",
)
