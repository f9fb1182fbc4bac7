"""
Create the ``documents`` table for the SQL backend and report what exists.

Uso:
  python -m hairportal.db.create_tables
"""
from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from .models import Document
from .session import Base, get_engine

logger = logging.getLogger(__name__)


def create_all() -> list[str]:
    """Create missing tables; return the table names present afterwards."""
    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    tables = sorted(inspect(engine).get_table_names())
    logger.info("SQL backend ready at %s (tables: %s)", engine.url.render_as_string(hide_password=True),
                ", ".join(tables))
    return tables


if __name__ == "__main__":
    try:
        tables = create_all()
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
    if Document.__tablename__ not in tables:
        raise SystemExit(f"Table {Document.__tablename__!r} missing after create_all")
    print(f"Tables on {get_engine().url.render_as_string(hide_password=True)}: {', '.join(tables)}")
