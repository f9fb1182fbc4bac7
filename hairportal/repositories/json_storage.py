"""
JSON file persistence adapter.

Each document lives in its own file under DATA_DIR.  Reads always go to disk;
writes replace the whole file (last writer wins).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
import json
import logging
import os
import tempfile

from .base import fresh_default, matches_default

logger = logging.getLogger(__name__)


class JsonDocumentStore:
    """Whole-document store backed by a single JSON file."""

    def __init__(self, path: Path | str, default: Any) -> None:
        self.path = Path(path)
        self.default = default

    def _ensure_file(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.save(fresh_default(self.default))

    def load(self) -> Any:
        self._ensure_file()
        text = self.path.read_text(encoding="utf-8")
        if not text.strip():
            return fresh_default(self.default)
        try:
            value = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning("Could not parse %s (%s); using default", self.path, exc)
            return fresh_default(self.default)
        if not matches_default(value, self.default):
            logger.warning("Unexpected document type in %s; using default", self.path)
            return fresh_default(self.default)
        return value

    def save(self, value: Any) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(value, ensure_ascii=False, indent=2)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def __repr__(self) -> str:
        return f"JsonDocumentStore({str(self.path)!r})"
