"""
Engine/session for the SQL document backend.

``DATABASE_URL`` selects the database; when it is empty the documents live in
a SQLite file next to the JSON ones (``DATA_DIR/portal.db``).
"""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from hairportal.core.config import Settings, get_settings

SQLITE_FILENAME = "portal.db"

Base = declarative_base()


def database_url(settings: Settings) -> str:
    url = (settings.database_url or "").strip()
    if url:
        return url
    return f"sqlite:///{settings.data_dir / SQLITE_FILENAME}"


@lru_cache
def get_engine() -> Engine:
    settings = get_settings()
    if not settings.database_url.strip():
        settings.data_dir.mkdir(parents=True, exist_ok=True)
    url = database_url(settings)
    kwargs = {"future": True, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        # Request handlers run in a thread pool.
        kwargs["connect_args"] = {"check_same_thread": False}
    return create_engine(url, **kwargs)


@lru_cache
def _get_sessionmaker():
    return sessionmaker(bind=get_engine(), autoflush=False, expire_on_commit=False, future=True)


@contextmanager
def get_session() -> Session:
    session: Session = _get_sessionmaker()()
    try:
        yield session
    finally:
        session.close()
