import logging
from celery import shared_task
from models import db
from models.transaction import Transaction
from app.utils import transactional

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=2, default_retry_delay=300)
def reconcile_pending_transaction_task(self, transaction_id: int) -> str:
    """Re-check a transaction that may still be pending with its gateway."""
    from app.services.payments.checkout import refresh_pending_transaction

    tx = db.session.get(Transaction, transaction_id)
    if tx is None:
        logger.warning("Pending check for missing transaction %s", transaction_id)
        return "MISSING"
    with transactional("Failed to reconcile pending transaction"):
        refresh_pending_transaction(tx)
    logger.info("Pending check for transaction %s: %s", transaction_id, tx.status)
    return tx.status
