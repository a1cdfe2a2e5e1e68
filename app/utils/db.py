from contextlib import contextmanager
import logging
from models import db

@contextmanager
def transactional(message="DB transaction failed"):
    """Context manager to wrap a database transaction.

    Client errors (anything carrying a 4xx ``status_code``) roll back
    quietly; everything else is logged with its traceback.
    """
    try:
        yield
        db.session.commit()
    except Exception as e:
        if getattr(e, "status_code", 500) >= 500:
            logging.error(f"{message}: %s", e, exc_info=True)
        db.session.rollback()
        raise
