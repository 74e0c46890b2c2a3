"""
SQLAlchemy ORM Models
"""

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import declarative_base

Base = declarative_base()

class StatusNotification(Base):
    __tablename__ = 'status_notifications'

    # One row per status value; writes replace the row
    status = Column(String(16), primary_key=True)
    message_id = Column(String(64), nullable=False)
    sent_at = Column(DateTime(timezone=True), nullable=False)
