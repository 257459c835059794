"""
Transaction helpers for the mutating booking/quota operations.

Each mutating operation runs as one transaction holding row locks
(select_for_update) on the rows it validates against. When the database
aborts the transaction because of a write conflict (deadlock or
serialization failure surface as OperationalError), the whole operation is
re-run from the start, so callers only ever see a single winner or a typed
business-rule failure.
"""
import logging
import time
from functools import wraps

from django.conf import settings
from django.db import OperationalError, transaction

logger = logging.getLogger(__name__)


def atomic_with_retry(func):
    """
    Run `func` inside transaction.atomic(), retrying on OperationalError.

    Retries happen only when this call owns the outermost transaction: inside
    an enclosing atomic block the conflict is left for the owner to handle.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        if transaction.get_connection().in_atomic_block:
            with transaction.atomic():
                return func(*args, **kwargs)

        attempts = max(1, getattr(settings, 'BOOKING_TX_RETRIES', 3))
        delay = getattr(settings, 'BOOKING_TX_RETRY_DELAY', 0.05)
        for attempt in range(1, attempts + 1):
            try:
                with transaction.atomic():
                    return func(*args, **kwargs)
            except OperationalError as exc:
                if attempt == attempts:
                    raise
                logger.warning(
                    'Write conflict in %s (attempt %d/%d), retrying: %s',
                    func.__name__, attempt, attempts, exc,
                )
                time.sleep(delay)
    return wrapper
