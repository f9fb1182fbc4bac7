from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Garante que o pacote hairportal seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from hairportal.core import config as core_config  # noqa: E402


@pytest.fixture()
def data_dir(tmp_path, monkeypatch):
    """Point DATA_DIR at a temporary folder and reset cached settings."""
    target = tmp_path / "data"
    monkeypatch.setenv("DATA_DIR", str(target))
    monkeypatch.setenv("STORAGE_BACKEND", "json")
    monkeypatch.delenv("UNSPLASH_ACCESS_KEY", raising=False)
    monkeypatch.delenv("API_RATE_LIMIT", raising=False)
    core_config.get_settings.cache_clear()
    yield target
    core_config.get_settings.cache_clear()
