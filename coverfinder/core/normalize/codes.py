# coverfinder/core/normalize/codes.py
"""
Media code normalizer.

A code is PREFIX-NUMBER: 2-7 letters, then 2-5 digits, canonically upper-case
and hyphen-joined ("abc_0123" -> "ABC-0123"). The "loose" form strips leading
zeros from the number so that ABC-007 and ABC-7 compare equal.

No function here raises: an unparseable input yields "" because "no code in
this text" is a routine outcome for callers scanning free-form titles.
"""

from __future__ import annotations

import re

# First PREFIX[-_ ]NUMBER token bounded by non-word characters.
_CODE_RE = re.compile(r"\b([A-Z]{2,7})[-_ ]?(\d{2,5})\b", re.ASCII)
_CANONICAL_RE = re.compile(r"^([A-Z]{2,7})-(\d{2,5})$", re.ASCII)
_CONTENT_ID_RE = re.compile(r"^([A-Z]+)(\d{2,5})", re.ASCII)


def extract_code(text: str | None) -> str:
    """Return the first code found in `text` as 'PREFIX-NUMBER', or '' when there is none."""
    m = _CODE_RE.search(str(text or "").upper())
    if not m:
        return ""
    return f"{m.group(1)}-{m.group(2)}"


def normalize_code(code: str | None) -> str:
    """Canonicalize a code-like input. Idempotent on canonical codes."""
    return extract_code(code)


def is_canonical(code: str | None) -> bool:
    return bool(_CANONICAL_RE.match(code or ""))


def to_loose_code(code: str | None) -> str:
    """'ABC-007' -> 'ABC-7', 'ABC-000' -> 'ABC-0'. Non-canonical input -> ''."""
    m = _CANONICAL_RE.match(str(code or "").upper())
    if not m:
        return ""
    stripped = m.group(2).lstrip("0")
    return f"{m.group(1)}-{stripped or '0'}"


def codes_match(candidate: str | None, query: str | None) -> bool:
    """Exact-equal or loosely-equal. Empty codes never match."""
    if not candidate or not query:
        return False
    if candidate == query:
        return True
    loose_candidate = to_loose_code(candidate)
    return bool(loose_candidate) and loose_candidate == to_loose_code(query)


def normalize_content_id(content_id: str | None) -> str:
    """
    Affiliate content ids look like 'abc00123' or '1start00045so'.
    Leading letters + 2-5 digits are re-hyphenated; anything else -> ''.
    """
    if not content_id:
        return ""
    m = _CONTENT_ID_RE.match(content_id.upper())
    if not m:
        return ""
    return f"{m.group(1)}-{m.group(2)}"


def build_queries(code: str, title: str | None = None) -> tuple[str, ...]:
    """
    Ordered, de-duplicated keyword list for search APIs:
    the code, the code without its hyphen, then any different code found in the title.
    """
    out: list[str] = []
    for q in (code, code.replace("-", "", 1), extract_code(title or "")):
        if q and q not in out:
            out.append(q)
    return tuple(out)


__all__ = [
    "extract_code",
    "normalize_code",
    "is_canonical",
    "to_loose_code",
    "codes_match",
    "normalize_content_id",
    "build_queries",
]
