#!/usr/bin/env python3
"""CLI entrypoint for fuzzy searching the catalog from a terminal."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

ROOT = Path(__file__).resolve().parents[1]
APP_ROOT = ROOT / "catalog-api"
if str(APP_ROOT) not in sys.path:  # pragma: no cover - import side effect
    sys.path.insert(0, str(APP_ROOT))

from catalog.config import Settings
from catalog.content.store import ContentStore
from catalog.errors import CatalogError
from catalog.search import SearchResult, highlight_matches, resolve_field


def _render_field(result: SearchResult, query: str) -> str:
    if not result.matches:
        return ""
    key = result.matches[0]
    parts: List[str] = []
    for segment in highlight_matches(resolve_field(result.item, key), query.strip()):
        parts.append(f"[{segment.text}]" if segment.highlight else segment.text)
    return f"{key}: {''.join(parts)}"


def _label(result: SearchResult) -> str:
    item = result.item
    if "code" in item:
        return f"{item['code']} {item.get('name', '')}"
    return f"{item.get('narrative_id', '')} {item.get('title', '')}"


def main(argv: Optional[List[str]] = None) -> int:
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(description="Fuzzy search mental models or narratives")
    parser.add_argument("query", help="Text to search for (empty string lists the catalog)")
    parser.add_argument("--collection", choices=("models", "narratives"), default="models")
    parser.add_argument("--keys", nargs="+", default=None, help="Field paths to search (dot notation)")
    parser.add_argument("--threshold", type=float, default=settings.search_threshold)
    parser.add_argument("--limit", type=int, default=settings.search_limit)
    parser.add_argument("--catalog", type=Path, default=settings.catalog_path, help="Catalog YAML/JSON file")
    args = parser.parse_args(argv)

    try:
        store = ContentStore.from_path(args.catalog, threshold=args.threshold, limit=args.limit)
    except CatalogError as exc:
        print(f"error: {exc.message} ({exc.error_type.value})", file=sys.stderr)
        return 1

    if args.collection == "models":
        results = store.search_models(args.query, keys=args.keys)
    else:
        results = store.search_narratives(args.query, keys=args.keys)

    if not results:
        print("No matches.")
        return 0
    for result in results:
        print(f"{result.score:.2f}  {_label(result)}")
        rendered = _render_field(result, args.query)
        if rendered:
            print(f"      {rendered}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
