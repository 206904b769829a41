# main.py
"""
Entry Point: coverfinder

Purpose
-------
Resolve one media code to a cover image from the command line and print the
response envelope as JSON:
  1) Load settings (--settings JSON, defaults, COVERFINDER_* env overrides).
  2) Build the default provider chain (catalog search -> CDN guess -> affiliate API).
  3) Resolve with a JSON-file cache (or none with --no-cache).

Usage
-----
    python main.py ABC-123
    python main.py "abc_123" --title "[ABC-123] Some title" --cache data/covers.json --verbose
    COVERFINDER_API_ID=... COVERFINDER_AFFILIATE_ID=... python main.py XYZ-100
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from coverfinder.core.cache import JsonFileCacheStore, MemoryCacheStore
from coverfinder.inputs import load_settings
from coverfinder.orchestrators import build_default_resolver
from coverfinder.schemas.models import CoverRequest


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Resolve a media code to its best available cover image.")
    p.add_argument("code", type=str, help="Code or free text containing a code (e.g. ABC-123)")
    p.add_argument("--title", type=str, default="", help="Row title; may contain an alternative code")
    p.add_argument("--settings", type=str, default=None, help="Path to a settings JSON file")
    p.add_argument("--cache", type=str, default="data/covers.json", help="Path to the JSON cache file")
    p.add_argument("--no-cache", action="store_true", help="Use a throwaway in-memory cache")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args.settings)
    except (FileNotFoundError, ValueError) as e:
        print(f"settings error: {e}")
        return 2

    store = MemoryCacheStore() if args.no_cache else JsonFileCacheStore(Path(args.cache))
    resolver = build_default_resolver(settings, store=store)

    response = resolver.handle(CoverRequest(code=args.code, title=args.title))
    print(response.model_dump_json(indent=2, exclude_none=True))
    return 0 if response.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
