"""Availability model definitions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from agenda.database import Base


class Availability(Base):
    """Represents one recurring weekly availability window."""
    __tablename__ = "availability"

    id = Column(String(36), primary_key=True)
    professional_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    day_of_week = Column(Integer, nullable=False)  # 0-6 (Sunday-Saturday)
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)  # HH:MM
    created_at = Column(DateTime, server_default=func.now())
