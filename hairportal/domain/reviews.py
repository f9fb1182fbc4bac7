"""Review helpers: rating normalisation, visibility and aggregation."""
from __future__ import annotations

import math
from typing import Any, Iterable, Mapping

from hairportal.core.utils import is_number

MIN_RATING = 1
MAX_RATING = 5
RATING_VALUES = range(MIN_RATING, MAX_RATING + 1)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round .5 away from zero for positive numbers (2.5 -> 3, 4.65 -> 4.7)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def is_published(review: Mapping[str, Any]) -> bool:
    """Only an explicit ``approved: false`` hides a review."""
    return review.get("approved") is not False


def published(reviews: Iterable[Mapping[str, Any]]) -> list:
    return [r for r in reviews if isinstance(r, Mapping) and is_published(r)]


def compute_stats(reviews: Iterable[Mapping[str, Any]]) -> dict:
    """Average (1 decimal), count and 1..5 histogram over published reviews with a numeric rating."""
    distribution = {str(star): 0 for star in RATING_VALUES}
    ratings = []
    for review in published(reviews):
        rating = review.get("rating")
        if not is_number(rating):
            continue
        ratings.append(rating)
        bucket = str(int(round_half_up(rating)))
        if bucket in distribution:
            distribution[bucket] += 1
    average = round_half_up(sum(ratings) / len(ratings), 1) if ratings else 0
    return {
        "averageRating": average,
        "totalReviews": len(ratings),
        "ratingDistribution": distribution,
    }
