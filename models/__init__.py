from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import BigInteger, Integer

# Use BigInteger in production but fall back to Integer for SQLite
BIGINT = BigInteger().with_variant(Integer, "sqlite")

db = SQLAlchemy()

# Re-export common models for convenience
from .user import User, Otp  # noqa: F401,E402
from .vendor import Vendor, VendorBankAccount, Service  # noqa: F401,E402
from .plan import Plan, VendorSubscription  # noqa: F401,E402
from .transaction import Transaction  # noqa: F401,E402
