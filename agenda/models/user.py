"""User model definitions."""

from sqlalchemy import Column, DateTime, String, func
from agenda.database import Base


class User(Base):
    """Represents a person known to the directory."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    email = Column(String, unique=True, index=True, nullable=False)
    first_name = Column(String, nullable=False, default="")
    last_name = Column(String, nullable=False, default="")
    role = Column(String, nullable=False)  # PROFESSIONAL/CLIENT
    created_at = Column(DateTime, server_default=func.now())
