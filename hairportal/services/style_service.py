"""Styles catalog use cases (list, create, update, delete)."""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from hairportal.core.errors import NotFoundError, ValidationError
from hairportal.core.utils import make_id
from hairportal.repositories import STYLES, DocumentStore, open_store
from hairportal.schemas.style import StyleCreate, StyleUpdate

logger = logging.getLogger(__name__)


def _issues(exc: PydanticValidationError) -> list[dict]:
    issues = []
    for err in exc.errors(include_url=False):
        field = ".".join(str(part) for part in err.get("loc", ()))
        issues.append({"field": field, "message": err.get("msg", "")})
    return issues


class StyleService:
    """CRUD over the styles document; every mutation rewrites the whole list."""

    def __init__(self, store: Optional[DocumentStore] = None) -> None:
        self.store = store or open_store(STYLES, [])

    def list(self) -> list[dict]:
        return self.store.load()

    def create(self, payload: Any) -> dict:
        try:
            data = StyleCreate.model_validate(payload if isinstance(payload, dict) else {})
        except PydanticValidationError as exc:
            raise ValidationError("invalid_payload", details=_issues(exc)) from exc
        styles = self.store.load()
        item = {"id": make_id(), **data.model_dump()}
        styles.append(item)
        self.store.save(styles)
        logger.info("Created style %s (%s)", item["id"], item["name"])
        return item

    def update(self, style_id: str, payload: Any) -> dict:
        try:
            data = StyleUpdate.model_validate(payload if isinstance(payload, dict) else {})
        except PydanticValidationError as exc:
            raise ValidationError("invalid_payload", details=_issues(exc)) from exc
        styles = self.store.load()
        for idx, style in enumerate(styles):
            if isinstance(style, dict) and style.get("id") == style_id:
                styles[idx] = {**style, **data.changes(), "id": style_id}
                self.store.save(styles)
                logger.info("Updated style %s", style_id)
                return styles[idx]
        raise NotFoundError()

    def delete(self, style_id: str) -> None:
        styles = self.store.load()
        remaining = [s for s in styles if not (isinstance(s, dict) and s.get("id") == style_id)]
        if len(remaining) == len(styles):
            raise NotFoundError()
        self.store.save(remaining)
        logger.info("Deleted style %s", style_id)
