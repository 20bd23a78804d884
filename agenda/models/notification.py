"""Notification model definitions."""

from sqlalchemy import Column, DateTime, String
from agenda.database import Base


class Notification(Base):
    """Represents one notification attempt on one channel."""
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True)
    recipient_id = Column(String(36), nullable=False, index=True)
    channel = Column(String, nullable=False)
    message = Column(String, nullable=False)
    status = Column(String, nullable=False, default="PENDING")  # PENDING/SENT/FAILED
    created_at = Column(DateTime, nullable=False)
