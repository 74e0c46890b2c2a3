"""
Database Persistence (SQLAlchemy)

Stores the last notification sent for each status so a restarted monitor
does not re-announce a status it already posted.
"""

import logging
from datetime import timezone
from sqlalchemy import create_engine, select, delete
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from config.models import Base, StatusNotification
from monitoring.status import Status, NotificationRecord

logger = logging.getLogger(__name__)


def create_db_engine(database_url):
    """
    Create an engine for a SQLAlchemy URL.

    In-memory sqlite gets a single shared connection so every session sees
    the same database.
    """
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, echo=False, pool_pre_ping=True)


def _to_record(row):
    sent_at = row.sent_at
    # sqlite drops tzinfo on the way back
    if sent_at.tzinfo is None:
        sent_at = sent_at.replace(tzinfo=timezone.utc)
    return NotificationRecord(Status(row.status), row.message_id, sent_at)


class SqlNotificationStore:
    """NotificationRecord store backed by the status_notifications table."""

    def __init__(self, database_url=None, engine=None):
        self.engine = engine or create_db_engine(database_url)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def init_database(self):
        """
        Create the status_notifications table if it does not exist.
        """
        logger.info("Initializing database...")
        Base.metadata.create_all(bind=self.engine)

    def get_db_session(self):
        return self.SessionLocal()

    def get(self, status):
        """
        Get the stored notification for a status.

        Returns:
            NotificationRecord or None: None if nothing is stored or the read failed
        """
        session = self.get_db_session()
        try:
            row = session.get(StatusNotification, status.value)
            return _to_record(row) if row else None
        except Exception as e:
            logger.error(f"Error reading notification for {status.value}: {e}")
            return None
        finally:
            session.close()

    def latest(self):
        """
        Get the most recently sent notification across all statuses.
        """
        session = self.get_db_session()
        try:
            stmt = select(StatusNotification).order_by(StatusNotification.sent_at.desc()).limit(1)
            row = session.execute(stmt).scalar_one_or_none()
            return _to_record(row) if row else None
        except Exception as e:
            logger.error(f"Error reading latest notification: {e}")
            return None
        finally:
            session.close()

    def put(self, status, record):
        """
        Store a notification, replacing any previous one for the same status.
        """
        session = self.get_db_session()
        try:
            row = session.get(StatusNotification, status.value)
            if row is None:
                row = StatusNotification(status=status.value)
                session.add(row)
            row.message_id = record.message_id
            row.sent_at = record.sent_at
            session.commit()
            logger.info(f"Saved {status.value} notification {record.message_id}")
        except Exception as e:
            logger.error(f"Error saving notification for {status.value}: {e}")
            session.rollback()
        finally:
            session.close()

    def discard(self, status):
        """
        Remove the stored notification for a status.
        """
        session = self.get_db_session()
        try:
            result = session.execute(delete(StatusNotification).where(StatusNotification.status == status.value))
            session.commit()
            if result.rowcount > 0:
                logger.info(f"Discarded stale {status.value} notification")
        except Exception as e:
            logger.error(f"Error discarding notification for {status.value}: {e}")
            session.rollback()
        finally:
            session.close()
