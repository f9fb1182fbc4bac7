"""Read-only products list (populated out-of-band, see scripts/import_products.py)."""
from __future__ import annotations

from typing import Optional

from hairportal.repositories import PRODUCTS, DocumentStore, open_store


class ProductService:
    def __init__(self, store: Optional[DocumentStore] = None) -> None:
        self.store = store or open_store(PRODUCTS, [])

    def list(self) -> list[dict]:
        return self.store.load()
