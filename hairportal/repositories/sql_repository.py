"""Document store backed by SQLAlchemy (one row per document)."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from hairportal.db.models import Document
from hairportal.db.session import get_session

from .base import fresh_default, matches_default

logger = logging.getLogger(__name__)


class SqlDocumentStore:
    """Same load/save contract as the JSON store, persisted in the ``documents`` table."""

    def __init__(self, name: str, default: Any) -> None:
        self.name = name
        self.default = default

    def load(self) -> Any:
        with get_session() as session:
            entity = session.get(Document, self.name)
            if entity is None:
                entity = Document(
                    name=self.name,
                    payload=fresh_default(self.default),
                    updated_at=datetime.now(timezone.utc),
                )
                session.add(entity)
                session.commit()
                return fresh_default(self.default)
            value = entity.payload
        if value is None or not matches_default(value, self.default):
            logger.warning("Unexpected payload for document %s; using default", self.name)
            return fresh_default(self.default)
        return value

    def save(self, value: Any) -> None:
        now = datetime.now(timezone.utc)
        with get_session() as session:
            entity = session.get(Document, self.name)
            if entity is None:
                session.add(Document(name=self.name, payload=value, updated_at=now))
            else:
                entity.payload = value
                entity.updated_at = now
            session.commit()

    def __repr__(self) -> str:
        return f"SqlDocumentStore({self.name!r})"
