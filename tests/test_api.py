"""End-to-end checks of the HTTP surface against a temporary data dir."""
from __future__ import annotations

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from hairportal.app import create_app
from hairportal.services.inspiration_service import InspirationService
from hairportal.services.review_service import ReviewService


@pytest.fixture()
def client(data_dir, monkeypatch):
    monkeypatch.setenv("WRITE_RATE_LIMIT", "50")
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    res = client.get("/health")

    assert res.status_code == 200
    assert res.text == "OK"
    assert res.headers["x-content-type-options"] == "nosniff"
    assert res.headers["x-frame-options"] == "SAMEORIGIN"
    assert res.headers["content-security-policy"]


def test_info_reports_data_dir(client, data_dir):
    body = client.get("/info").json()

    assert body["name"] == "hairstyleportal"
    assert body["dataDir"] == str(data_dir.resolve())
    assert body["storage"] == "json"


def test_request_id_is_generated_and_propagated(client):
    assert client.get("/health").headers["x-request-id"]
    assert client.get("/info", headers={"X-Request-Id": "req-123"}).headers["x-request-id"] == "req-123"


def test_styles_crud(client, data_dir):
    created = client.post("/api/styles", json={"name": "Bob Cut", "description": "Classic", "imageUrl": ""})
    assert created.status_code == 201
    style_id = created.json()["id"]

    listing = client.get("/api/styles")
    assert listing.status_code == 200
    assert [s["id"] for s in listing.json()] == [style_id]

    updated = client.put(f"/api/styles/{style_id}", json={"description": "Updated"})
    assert updated.status_code == 200
    assert updated.json() == {"id": style_id, "name": "Bob Cut", "description": "Updated", "imageUrl": ""}

    on_disk = json.loads((data_dir / "styles.json").read_text(encoding="utf-8"))
    assert on_disk == [updated.json()]

    deleted = client.delete(f"/api/styles/{style_id}")
    assert deleted.status_code == 204
    assert client.get("/api/styles").json() == []


def test_styles_validation_and_not_found(client):
    invalid = client.post("/api/styles", json={"description": "no name"})
    assert invalid.status_code == 400
    assert invalid.json()["error"] == "invalid_payload"
    assert invalid.json()["details"]

    empty_update = client.put("/api/styles/whatever", json={})
    assert empty_update.status_code == 400

    assert client.put("/api/styles/missing", json={"name": "x"}).status_code == 404
    missing = client.delete("/api/styles/missing")
    assert missing.status_code == 404
    assert missing.json() == {"error": "not found"}


def test_malformed_json_body(client):
    res = client.post("/api/styles", content="{bad", headers={"Content-Type": "application/json"})

    assert res.status_code == 400
    assert res.json() == {"error": "invalid_json"}


def test_products_are_read_from_store(client, data_dir):
    assert client.get("/api/products").json() == []

    products = [{"brand": "Kérastase", "name": "Elixir", "price": 39.5, "stock": 4, "url": "https://shop.example/elixir"}]
    (data_dir / "products.json").write_text(json.dumps(products), encoding="utf-8")

    assert client.get("/api/products").json() == products


def test_reviews_flow(client):
    for rating in (5, 4, 5):
        res = client.post("/api/reviews", json={"name": "Ana", "rating": rating, "text": "Great"})
        assert res.status_code == 201

    assert len(client.get("/api/reviews").json()) == 3
    assert client.get("/api/reviews/stats").json() == {
        "averageRating": 4.7,
        "totalReviews": 3,
        "ratingDistribution": {"1": 0, "2": 0, "3": 0, "4": 1, "5": 2},
    }


def test_review_rejections(client):
    out_of_range = client.post("/api/reviews", json={"name": "Ana", "rating": 9, "text": "x"})
    assert out_of_range.status_code == 400
    assert "1 and 5" in out_of_range.json()["error"]

    blank = client.post("/api/reviews", json={"name": "  ", "rating": 3, "text": "x"})
    assert blank.status_code == 400

    honeypot = client.post("/api/reviews", json={"name": "Ana", "rating": 3, "text": "x", "honeypot": "bot"})
    assert honeypot.json() == {"error": "invalid submission"}

    review_service: ReviewService = client.app.state.review_service
    quick = client.post(
        "/api/reviews",
        json={"name": "Ana", "rating": 3, "text": "x", "timestamp": review_service._clock() - 100},
    )
    assert quick.status_code == 400
    assert quick.json() == {"error": "submission too quick"}

    assert client.get("/api/reviews").json() == []


def test_booking_config_and_initiate(client):
    assert client.get("/api/booking/config").json() == {"provider": None, "settings": {}}

    fallback = client.post("/api/booking/initiate", json={"service": "Haircut"})
    assert fallback.status_code == 200
    assert fallback.json()["action"] == "fallback"
    assert fallback.json()["fallbackUrl"] == "#contact"

    config = {"provider": "whatsapp", "settings": {"phoneNumber": "+1234567890"}}
    saved = client.post("/api/booking/config", json=config)
    assert saved.status_code == 200
    assert saved.json() == config
    assert client.get("/api/booking/config").json() == config

    rejected = client.post("/api/booking/config", json={"provider": "bogus"})
    assert rejected.status_code == 400
    assert client.get("/api/booking/config").json() == config

    assert client.post("/api/booking/config", json={"settings": {}}).status_code == 400
    assert client.post("/api/booking/config").status_code == 400
    assert client.get("/api/booking/config").json() == config

    result = client.post("/api/booking/initiate", json={"service": "Haircut", "stylist": "John"}).json()
    assert result["action"] == "whatsapp"
    assert "wa.me/1234567890" in result["url"]
    assert "Haircut" in result["message"] and "John" in result["message"]


def test_initiate_without_body(client):
    res = client.post("/api/booking/initiate")

    assert res.status_code == 200
    assert res.json()["action"] == "fallback"


def test_inspiration_placeholders_without_key(client):
    res = client.get("/api/inspiration")

    assert res.status_code == 200
    assert len(res.json()) == 12


def test_inspiration_upstream_failure_is_502(data_dir):
    failing = InspirationService("key", transport=httpx.MockTransport(lambda request: httpx.Response(500)))
    with TestClient(create_app(inspiration_service=failing)) as client:
        res = client.get("/api/inspiration")

    assert res.status_code == 502
    assert res.json() == {"error": "inspiration_unavailable"}


def test_unexpected_errors_are_opaque(data_dir):
    class BrokenStore:
        def load(self):
            raise OSError("disk on fire")

        def save(self, value):
            raise OSError("disk on fire")

    from hairportal.services.style_service import StyleService

    app = create_app(style_service=StyleService(BrokenStore()))
    with TestClient(app, raise_server_exceptions=False) as client:
        res = client.get("/api/styles")

    assert res.status_code == 500
    assert res.json() == {"error": "internal_error"}
    assert res.headers["x-request-id"]
    assert res.headers["x-content-type-options"] == "nosniff"
    assert res.headers["x-frame-options"] == "SAMEORIGIN"


def test_unknown_route_and_method(client):
    assert client.get("/api/nothing-here").status_code == 404
    assert client.get("/api/nothing-here").json() == {"error": "not_found"}
    assert client.patch("/api/styles").status_code == 405


def test_write_rate_limit(data_dir, monkeypatch):
    monkeypatch.setenv("WRITE_RATE_LIMIT", "2")
    from hairportal.core import config as core_config

    core_config.get_settings.cache_clear()
    with TestClient(create_app()) as client:
        for i in range(2):
            assert client.post("/api/styles", json={"name": f"S{i}"}).status_code == 201
        blocked = client.post("/api/styles", json={"name": "Excess"})
        # reads only count against the general /api limiter
        assert client.get("/api/styles").status_code == 200

    assert blocked.status_code == 429
    assert blocked.json() == {"error": "too_many_requests"}


def test_api_reads_report_rate_limit_headers(client):
    first = client.get("/api/products")
    second = client.get("/api/products")

    assert first.status_code == 200
    assert first.headers["ratelimit-limit"] == "300"
    assert first.headers["ratelimit-remaining"] == "299"
    assert second.headers["ratelimit-remaining"] == "298"
    assert 0 < int(first.headers["ratelimit-reset"]) <= 900
    # only /api is counted
    assert "ratelimit-limit" not in client.get("/health").headers


def test_api_rate_limit_blocks_reads(data_dir, monkeypatch):
    monkeypatch.setenv("API_RATE_LIMIT", "2")
    from hairportal.core import config as core_config

    core_config.get_settings.cache_clear()
    with TestClient(create_app()) as client:
        for _ in range(2):
            assert client.get("/api/products").status_code == 200
        blocked = client.get("/api/products")

    assert blocked.status_code == 429
    assert blocked.json() == {"error": "too_many_requests"}
    assert blocked.headers["ratelimit-remaining"] == "0"
    assert blocked.headers["x-request-id"]
