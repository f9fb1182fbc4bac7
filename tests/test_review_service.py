from __future__ import annotations

import pytest

from hairportal.core.errors import SpamRejected, ValidationError
from hairportal.core.utils import is_number
from hairportal.repositories import JsonDocumentStore
from hairportal.services.review_service import ReviewService

NOW_MS = 1_700_000_000_000


@pytest.fixture()
def store(tmp_path):
    return JsonDocumentStore(tmp_path / "reviews.json", [])


@pytest.fixture()
def service(store):
    return ReviewService(store, min_elapsed_ms=3000, clock=lambda: NOW_MS)


def _valid(**overrides):
    payload = {"name": "  Maria ", "rating": 5, "text": " Lovely cut! "}
    payload.update(overrides)
    return payload


def test_create_trims_and_publishes(service, store):
    review = service.create(_valid())

    assert review["name"] == "Maria"
    assert review["text"] == "Lovely cut!"
    assert review["rating"] == 5
    assert review["approved"] is True
    assert review["id"]
    assert review["createdAt"].endswith("Z")
    assert store.load() == [review]


@pytest.mark.parametrize("rating, stored", [(4.6, 5), (4.4, 4), (2.5, 3), (1, 1)])
def test_fractional_ratings_are_rounded(service, rating, stored):
    assert service.create(_valid(rating=rating))["rating"] == stored


@pytest.mark.parametrize("rating", [0, 6, 5.5, -1, "5", None, True])
def test_rating_outside_range_rejected(service, rating):
    with pytest.raises(ValidationError) as excinfo:
        service.create(_valid(rating=rating))

    assert "between 1 and 5" in excinfo.value.message


@pytest.mark.parametrize("field", ["name", "text"])
@pytest.mark.parametrize("value", ["", "   ", None, 42])
def test_blank_name_or_text_rejected(service, field, value):
    with pytest.raises(ValidationError) as excinfo:
        service.create(_valid(**{field: value}))

    assert field in excinfo.value.message


def test_filled_honeypot_rejected(service, store):
    with pytest.raises(SpamRejected) as excinfo:
        service.create(_valid(honeypot="http://spam.example"))

    assert excinfo.value.message == "invalid submission"
    assert store.load() == []


def test_blank_honeypot_allowed(service):
    assert service.create(_valid(honeypot="   "))["name"] == "Maria"


def test_quick_submission_rejected(service):
    with pytest.raises(SpamRejected) as excinfo:
        service.create(_valid(timestamp=NOW_MS - 2999))

    assert excinfo.value.message == "submission too quick"


def test_future_timestamp_counts_as_too_quick(service):
    with pytest.raises(SpamRejected):
        service.create(_valid(timestamp=NOW_MS + 60_000))


def test_slow_enough_submission_accepted(service):
    assert service.create(_valid(timestamp=NOW_MS - 3000))["rating"] == 5


def test_missing_timestamp_skips_timing_check(service):
    assert service.create(_valid())["approved"] is True


def test_list_hides_unapproved(service, store):
    store.save([
        {"id": "a", "name": "A", "rating": 5, "text": "x", "approved": True},
        {"id": "b", "name": "B", "rating": 1, "text": "y", "approved": False},
        {"id": "c", "name": "C", "rating": 3, "text": "z"},
    ])

    assert [r["id"] for r in service.list()] == ["a", "c"]


def test_stats_without_reviews(service):
    assert service.stats() == {
        "averageRating": 0,
        "totalReviews": 0,
        "ratingDistribution": {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0},
    }


def test_stats_over_ratings(service):
    for rating in (5, 4, 5):
        service.create(_valid(rating=rating))

    assert service.stats() == {
        "averageRating": 4.7,
        "totalReviews": 3,
        "ratingDistribution": {"1": 0, "2": 0, "3": 0, "4": 1, "5": 2},
    }


def test_stats_ignore_unapproved(service, store):
    store.save([
        {"id": "a", "rating": 2, "approved": True},
        {"id": "b", "rating": 5, "approved": False},
    ])

    stats = service.stats()
    assert stats["totalReviews"] == 1
    assert stats["averageRating"] == 2
    assert stats["ratingDistribution"]["5"] == 0


def test_stats_skip_records_without_numeric_rating(service, store):
    store.save([
        {"id": "a", "rating": 4},
        {"id": "b", "rating": "5"},
        {"id": "c"},
        {"id": "d", "rating": True},
    ])

    stats = service.stats()
    assert stats["totalReviews"] == 1
    assert stats["averageRating"] == 4
    assert sum(stats["ratingDistribution"].values()) == stats["totalReviews"]


@pytest.mark.parametrize(
    "value, expected",
    [(3, True), (4.5, True), (0, True), (True, False), ("3", False), (None, False), (float("nan"), False), (float("inf"), False)],
)
def test_is_number(value, expected):
    assert is_number(value) is expected
