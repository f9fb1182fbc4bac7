"""
Review submission and aggregation.

Submissions pass two anti-spam checks before field validation: a honeypot
field that humans never fill and a minimum delay between the form being
rendered and submitted.  Accepted reviews are published immediately
(``approved: true``); moderation happens outside this service.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from hairportal.core.config import get_settings
from hairportal.core.errors import SpamRejected, ValidationError
from hairportal.core.utils import is_number, make_id, now_ms, utc_now_iso
from hairportal.domain.reviews import (
    MAX_RATING,
    MIN_RATING,
    compute_stats,
    published,
    round_half_up,
)
from hairportal.repositories import REVIEWS, DocumentStore, open_store

logger = logging.getLogger(__name__)

INVALID_SUBMISSION = "invalid submission"
TOO_QUICK = "submission too quick"


class ReviewService:
    def __init__(
        self,
        store: Optional[DocumentStore] = None,
        *,
        min_elapsed_ms: Optional[int] = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.store = store or open_store(REVIEWS, [])
        if min_elapsed_ms is None:
            min_elapsed_ms = get_settings().review_min_elapsed_ms
        self.min_elapsed_ms = min_elapsed_ms
        self._clock = clock

    # ---------------------------- anti-spam ----------------------------
    def _check_honeypot(self, honeypot: Any) -> None:
        if honeypot is None:
            return
        if not isinstance(honeypot, str) or honeypot.strip():
            logger.warning("Review rejected: honeypot filled")
            raise SpamRejected(INVALID_SUBMISSION)

    def _check_elapsed(self, form_loaded_at: Any) -> None:
        if form_loaded_at is None:
            return
        if not is_number(form_loaded_at):
            logger.warning("Review rejected: malformed form timestamp %r", form_loaded_at)
            raise SpamRejected(INVALID_SUBMISSION)
        elapsed = self._clock() - form_loaded_at
        if elapsed < self.min_elapsed_ms:
            logger.warning("Review rejected: submitted %.0f ms after form load", elapsed)
            raise SpamRejected(TOO_QUICK)

    # ---------------------------- use cases ----------------------------
    def create(self, payload: Any) -> dict:
        payload = payload if isinstance(payload, dict) else {}
        self._check_honeypot(payload.get("honeypot"))
        self._check_elapsed(payload.get("timestamp"))

        name = payload.get("name")
        name = name.strip() if isinstance(name, str) else ""
        if not name:
            raise ValidationError("name is required")

        rating = payload.get("rating")
        if not is_number(rating) or not (MIN_RATING <= rating <= MAX_RATING):
            raise ValidationError(f"rating must be a number between {MIN_RATING} and {MAX_RATING}")

        text = payload.get("text")
        text = text.strip() if isinstance(text, str) else ""
        if not text:
            raise ValidationError("text is required")

        review = {
            "id": make_id(),
            "name": name,
            "rating": int(round_half_up(rating)),
            "text": text,
            "createdAt": utc_now_iso(),
            "approved": True,
        }
        reviews = self.store.load()
        reviews.append(review)
        self.store.save(reviews)
        logger.info("Stored review %s (%s stars)", review["id"], review["rating"])
        return review

    def list(self) -> list[dict]:
        return published(self.store.load())

    def stats(self) -> dict:
        return compute_stats(self.store.load())
