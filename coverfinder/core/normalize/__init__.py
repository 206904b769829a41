# coverfinder/core/normalize/__init__.py
from __future__ import annotations

from .codes import (
    build_queries,
    codes_match,
    extract_code,
    is_canonical,
    normalize_code,
    normalize_content_id,
    to_loose_code,
)

__all__ = [
    "extract_code",
    "normalize_code",
    "is_canonical",
    "to_loose_code",
    "codes_match",
    "normalize_content_id",
    "build_queries",
]
