"""
Hairstyle inspiration proxy.

With an Unsplash access key the service runs one photo search and maps the
results; without one it returns a fixed list of placeholder images.  Any
upstream problem surfaces as a single ``UpstreamError`` (no partial results).
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from hairportal.core.config import get_settings
from hairportal.core.errors import UpstreamError

logger = logging.getLogger(__name__)

UNSPLASH_SEARCH_URL = "https://api.unsplash.com/search/photos"
RESULTS_PER_PAGE = 12
FALLBACK_COUNT = 12
DEFAULT_ALT = "hairstyle inspiration"


def fallback_photos(count: int = FALLBACK_COUNT) -> list[dict]:
    return [
        {
            "id": f"fallback-{n}",
            "src": f"https://picsum.photos/seed/hairstyle-{n}/600/800",
            "alt": f"{DEFAULT_ALT} {n}",
            "author": "",
            "link": "",
        }
        for n in range(1, count + 1)
    ]


def map_photo(item: dict) -> dict:
    urls = item.get("urls") or {}
    user = item.get("user") or {}
    links = item.get("links") or {}
    return {
        "id": item.get("id"),
        "src": urls.get("small") or urls.get("regular") or "",
        "alt": item.get("alt_description") or item.get("description") or DEFAULT_ALT,
        "author": user.get("name") or "",
        "link": links.get("html") or "",
    }


class InspirationService:
    def __init__(
        self,
        access_key: Optional[str] = None,
        *,
        query: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        settings = get_settings()
        self.access_key = settings.unsplash_access_key if access_key is None else access_key
        self.query = query or settings.inspiration_query
        self.timeout = timeout if timeout is not None else settings.inspiration_timeout_seconds
        self._transport = transport

    def search(self) -> list[dict]:
        if not self.access_key:
            return fallback_photos()
        try:
            return self._search_unsplash()
        except UpstreamError:
            raise
        except Exception as exc:
            logger.error("Inspiration lookup failed: %s", exc)
            raise UpstreamError() from exc

    def _search_unsplash(self) -> list[dict]:
        params = {"query": self.query, "per_page": RESULTS_PER_PAGE, "orientation": "portrait"}
        headers = {"Authorization": f"Client-ID {self.access_key}", "Accept-Version": "v1"}
        with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
            response = client.get(UNSPLASH_SEARCH_URL, params=params, headers=headers)
        if not response.is_success:
            logger.error("Unsplash answered %s", response.status_code)
            raise UpstreamError()
        results = response.json().get("results") or []
        photos = [map_photo(item) for item in results if isinstance(item, dict)]
        return [photo for photo in photos if photo["src"]]
