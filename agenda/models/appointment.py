"""Appointment model definitions."""

from sqlalchemy import Column, DateTime, ForeignKey, String, func
from agenda.database import Base


class Appointment(Base):
    """Represents a booked appointment. Times are stored as naive UTC."""
    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True)
    professional_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    client_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    starts_at = Column(DateTime, nullable=False)
    ends_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
