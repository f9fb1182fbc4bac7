"""One-off migration script: JSON documents under DATA_DIR -> SQL backend."""
from __future__ import annotations

import json
from pathlib import Path
import sys

# Garante que o pacote seja importável quando rodado diretamente
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from hairportal.core.config import get_settings
from hairportal.db.create_tables import create_all
from hairportal.repositories import BOOKING_CONFIG, PRODUCTS, REVIEWS, STYLES, SqlDocumentStore

DOCUMENTS = (STYLES, REVIEWS, PRODUCTS, BOOKING_CONFIG)


def _load_json(path: Path):
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def migrate() -> None:
    settings = get_settings()
    create_all()
    for name in DOCUMENTS:
        path = settings.data_dir / f"{name}.json"
        if not path.exists():
            print(f"- {name}: {path} not found, skipped")
            continue
        try:
            value = _load_json(path)
        except json.JSONDecodeError as exc:
            raise SystemExit(f"Invalid JSON in {path}: {exc}") from exc
        SqlDocumentStore(name, value).save(value)
        size = len(value) if isinstance(value, (list, dict)) else 1
        print(f"- {name}: {size} entries migrated")


if __name__ == "__main__":
    migrate()
    print("Migration finished.")
