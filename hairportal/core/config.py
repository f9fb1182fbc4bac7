"""
Configuration helpers for the salon portal backend.

Settings are read from environment variables once and cached; tests call
``get_settings.cache_clear()`` after patching the environment.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

ROOT_DIR = Path(__file__).resolve().parents[2]


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_name: str
    app_version: str
    app_env: str
    log_level: str
    log_file: str
    data_dir: Path
    public_dir: Path
    public_base_url: str
    storage_backend: str
    database_url: str
    unsplash_access_key: str
    inspiration_query: str
    inspiration_timeout_seconds: int
    review_min_elapsed_ms: int
    write_rate_limit: int
    write_rate_window_seconds: int
    api_rate_limit: int
    api_rate_window_seconds: int


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _path(value: str | None, default: Path) -> Path:
        if not value or not value.strip():
            return default
        return Path(value.strip()).expanduser().resolve()

    backend = (os.getenv("STORAGE_BACKEND") or "json").strip().lower()
    if backend not in {"json", "sql"}:
        backend = "json"

    return Settings(
        app_name=os.getenv("APP_NAME", "hairstyleportal"),
        app_version=os.getenv("APP_VERSION", "1.0.0"),
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_file=os.getenv("LOG_FILE", ""),
        data_dir=_path(os.getenv("DATA_DIR"), ROOT_DIR / "data"),
        public_dir=_path(os.getenv("PUBLIC_DIR"), ROOT_DIR / "public"),
        public_base_url=os.getenv("PUBLIC_BASE_URL", "").rstrip("/"),
        storage_backend=backend,
        database_url=os.getenv("DATABASE_URL", ""),
        unsplash_access_key=(os.getenv("UNSPLASH_ACCESS_KEY") or "").strip(),
        inspiration_query=os.getenv("INSPIRATION_QUERY", "hairstyle"),
        inspiration_timeout_seconds=_int(os.getenv("INSPIRATION_TIMEOUT_SECONDS", "8"), 8),
        review_min_elapsed_ms=_int(os.getenv("REVIEW_MIN_ELAPSED_MS", "3000"), 3000),
        write_rate_limit=_int(os.getenv("WRITE_RATE_LIMIT", "100"), 100),
        write_rate_window_seconds=_int(os.getenv("WRITE_RATE_WINDOW_SECONDS", "900"), 900),
        api_rate_limit=_int(os.getenv("API_RATE_LIMIT", "300"), 300),
        api_rate_window_seconds=_int(os.getenv("API_RATE_WINDOW_SECONDS", "900"), 900),
    )
