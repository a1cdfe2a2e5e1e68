import logging
from celery import shared_task
from app.utils import transactional

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=2, default_retry_delay=60)
def expire_subscriptions_task(self) -> int:
    from app.services.subscriptions import expire_subscriptions

    with transactional("Failed to expire subscriptions"):
        count = expire_subscriptions()
    return count
