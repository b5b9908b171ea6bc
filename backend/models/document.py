"""Document model definitions."""

from sqlalchemy import Column, DateTime, Integer, String, Text
from backend.database import Base


class Document(Base):
    """One persisted collection, stored as a JSON array."""
    __tablename__ = "documents"

    name = Column(String, primary_key=True)
    payload = Column(Text, nullable=False)
    last_id = Column(Integer, default=0)
    updated_at = Column(DateTime)
