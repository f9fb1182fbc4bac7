"""SQL document backend: engine/session, the ``documents`` model and table creation."""

from .create_tables import create_all
from .models import Document
from .session import Base, database_url, get_engine, get_session

__all__ = ["Base", "Document", "create_all", "database_url", "get_engine", "get_session"]
