#!/usr/bin/env python3
"""
Import the products list from a JSON file into the configured store.

Uso:
  python scripts/import_products.py products.json [--append]
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from hairportal.core.utils import is_number
from hairportal.repositories import PRODUCTS, open_store

REQUIRED_TEXT = ("brand", "name")
REQUIRED_NUMBERS = ("price", "stock")


def validate_product(item) -> list[str]:
    """Return the problems found in one product record (empty when valid)."""
    if not isinstance(item, dict):
        return ["not an object"]
    problems = []
    for key in REQUIRED_TEXT:
        if not isinstance(item.get(key), str) or not item[key].strip():
            problems.append(f"{key} is required")
    for key in REQUIRED_NUMBERS:
        if not is_number(item.get(key)):
            problems.append(f"{key} must be a number")
    url = item.get("url")
    if url is not None and not isinstance(url, str):
        problems.append("url must be a string")
    return problems


def main() -> None:
    ap = argparse.ArgumentParser(description="Import products into the portal store")
    ap.add_argument("file", help="JSON file holding an array of products")
    ap.add_argument("--append", action="store_true", help="keep the products already stored")
    args = ap.parse_args()

    path = Path(args.file)
    if not path.exists():
        raise SystemExit(f"File not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        items = json.load(f)
    if not isinstance(items, list):
        raise SystemExit("Expected a JSON array of products")

    for idx, item in enumerate(items):
        problems = validate_product(item)
        if problems:
            raise SystemExit(f"Product #{idx}: {', '.join(problems)}")

    store = open_store(PRODUCTS, [])
    products = store.load() if args.append else []
    products.extend(items)
    store.save(products)
    print(f"{len(items)} products imported ({len(products)} stored).")


if __name__ == "__main__":
    main()
