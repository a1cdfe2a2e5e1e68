import logging
import uuid
from decimal import Decimal
from models import db
from models.transaction import Transaction
from app.errors import NotFoundError

logger = logging.getLogger(__name__)

PENDING = "PENDING"
SUCCESSFUL = "SUCCESSFUL"
FAILED = "FAILED"

UPDATABLE_FIELDS = {
    "status",
    "external_reference",
    "gateway_transaction_id",
    "charge_amount",
    "description",
    "payment_type",
    "meta",
}


class TransactionNotFound(NotFoundError):
    def __init__(self, message="Transaction not found", **kwargs):
        super().__init__(message, **kwargs)


def create_transaction(
    amount,
    type,
    reference=None,
    currency="NGN",
    vendor_id=None,
    user_id=None,
    plan_id=None,
    description=None,
    payment_type=None,
    transaction_type=None,
    gateway=None,
    meta=None,
) -> Transaction:
    tx = Transaction(
        uuid=str(uuid.uuid4()),
        amount=Decimal(str(amount)),
        type=type,
        status=PENDING,
        reference=reference,
        currency=currency,
        vendor_id=vendor_id,
        user_id=user_id,
        plan_id=plan_id,
        description=description,
        payment_type=payment_type,
        transaction_type=transaction_type,
        gateway=gateway,
        meta=meta,
    )
    db.session.add(tx)
    db.session.flush()
    logger.info("Transaction %s created (%s, %s)", tx.id, type, reference)
    return tx


def get_transaction(transaction_id) -> Transaction:
    tx = db.session.get(Transaction, transaction_id)
    if tx is None:
        raise TransactionNotFound()
    return tx


def update_transaction(transaction_id, **fields) -> Transaction:
    """Apply whitelisted field updates to a transaction."""
    tx = get_transaction(transaction_id)
    for key, value in fields.items():
        if key not in UPDATABLE_FIELDS:
            logger.warning("Ignoring non-updatable transaction field %s", key)
            continue
        if key == "charge_amount" and value is not None:
            value = Decimal(str(value))
        setattr(tx, key, value)
    return tx


def check_status(transaction_id) -> str:
    return get_transaction(transaction_id).status


def transaction_exists(transaction_id) -> bool:
    return db.session.get(Transaction, transaction_id) is not None


def find_by_reference(reference):
    if not reference:
        return None
    return Transaction.query.filter_by(reference=reference).first()


def find_by_external_reference(external_reference):
    if not external_reference:
        return None
    return Transaction.query.filter_by(external_reference=str(external_reference)).first()
