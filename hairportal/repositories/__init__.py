"""
Persistence adapters.

Every collection is a whole document: services ``load()`` it, mutate it in
memory and ``save()`` it back.  The JSON file backend is the default; the
SQL backend keeps the same contract so services never know which one is in
use.
"""
from __future__ import annotations

from typing import Any

from hairportal.core.config import get_settings

from .base import DocumentStore
from .json_storage import JsonDocumentStore
from .sql_repository import SqlDocumentStore

STYLES = "styles"
REVIEWS = "reviews"
PRODUCTS = "products"
BOOKING_CONFIG = "booking-config"


def open_store(name: str, default: Any) -> DocumentStore:
    """Build the store for ``name`` using the configured backend."""
    settings = get_settings()
    if settings.storage_backend == "sql":
        return SqlDocumentStore(name, default)
    return JsonDocumentStore(settings.data_dir / f"{name}.json", default)


__all__ = [
    "BOOKING_CONFIG",
    "DocumentStore",
    "JsonDocumentStore",
    "PRODUCTS",
    "REVIEWS",
    "STYLES",
    "SqlDocumentStore",
    "open_store",
]
