"""SQLAlchemy models mirroring the JSON documents kept under DATA_DIR."""
from __future__ import annotations

from sqlalchemy import JSON, Column, DateTime, String, func

from .session import Base


class Document(Base):
    """One row per named document (styles, reviews, products, booking-config)."""

    __tablename__ = "documents"

    name = Column(String(64), primary_key=True)
    payload = Column(JSON, nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
