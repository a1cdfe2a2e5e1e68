import os
import logging
from celery import Celery, Task
from celery.signals import task_failure, task_retry
from flask import has_app_context

broker_url = os.environ.get("CELERY_BROKER_URL", "memory://")
backend_url = os.environ.get("CELERY_RESULT_BACKEND", "cache+memory://")

_flask_app = None


def _get_flask_app():
    global _flask_app
    if _flask_app is None:
        from app import create_app
        _flask_app = create_app()
    return _flask_app


class FlaskTask(Task):
    """Run every task inside a Flask app context."""

    def __call__(self, *args, **kwargs):
        if has_app_context():
            return super().__call__(*args, **kwargs)
        with _get_flask_app().app_context():
            return super().__call__(*args, **kwargs)


celery_app = Celery("ficago", broker=broker_url, backend=backend_url, task_cls=FlaskTask)
celery_app.set_default()
celery_app.conf.task_always_eager = os.environ.get("CELERY_TASK_ALWAYS_EAGER", "0") == "1"
celery_app.conf.task_eager_propagates = True
celery_app.conf.task_store_eager_result = False
celery_app.conf.imports = (
    "app.tasks.notifications",
    "app.tasks.payments",
    "app.tasks.subscriptions",
)
celery_app.conf.beat_schedule = {
    "expire-subscriptions": {
        "task": "app.tasks.subscriptions.expire_subscriptions_task",
        "schedule": float(os.environ.get("SUBSCRIPTION_EXPIRY_INTERVAL_SECONDS", 3600)),
    },
}

logger = logging.getLogger(__name__)

@task_failure.connect
def _log_failure(sender=None, task_id=None, exception=None, **kwargs):
    logger.error("Task %s failed: %s", getattr(sender, 'name', task_id), exception)

@task_retry.connect
def _log_retry(sender=None, request=None, reason=None, **kwargs):
    logger.warning("Task %s retry due to: %s", getattr(sender, 'name', ''), reason)
