"""
Notification Stores

Every store exposes get/put/discard/latest over NotificationRecord, keyed by
Status, holding at most one record per status.
"""

import logging

logger = logging.getLogger(__name__)


class InMemoryNotificationStore:
    """Process-local store used when no DATABASE_URL is configured."""

    def __init__(self):
        self._records = {}

    def get(self, status):
        return self._records.get(status)

    def put(self, status, record):
        self._records[status] = record

    def discard(self, status):
        self._records.pop(status, None)

    def latest(self):
        if not self._records:
            return None
        return max(self._records.values(), key=lambda record: record.sent_at)


def create_store(database_url=None):
    """
    Pick the notification store for a configuration.

    Args:
        database_url (str, optional): SQLAlchemy URL; None keeps records in memory

    Returns:
        A store with get/put/discard/latest
    """
    if not database_url:
        logger.info("No DATABASE_URL set; notification state will not survive restarts")
        return InMemoryNotificationStore()

    from config.database import SqlNotificationStore

    store = SqlNotificationStore(database_url)
    store.init_database()
    return store
