# coverfinder/providers/cdn_guess.py
"""
CDN guess provider.

The image CDN stores covers as <base>/<cid>/<cid><suffix>, where the cid is
the lower-case label glued to some rendering of the number (raw, unpadded,
or zero-padded to 3/4/5 digits), sometimes with a leading "1" on the label.
We enumerate those guesses and return the first URL that exists and is not
a blank placeholder.

The "1"-prefix ordering is a heuristic: labels in FIRST_ONE_PREFIXED are
tried with the "1" first, all others try it last.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Sequence

from coverfinder.core.media import CoverScreener
from coverfinder.core.normalize import normalize_code
from coverfinder.schemas.models import (
    DEFAULT_CDN_BASES,
    DEFAULT_CDN_SUFFIXES,
    CoverCandidate,
    CoverQuery,
    CoverSource,
    ProviderLookup,
)

from .base import miss

logger = logging.getLogger(__name__)

_STRICT_CODE_RE = re.compile(r"^([A-Z]{2,7})-(\d{2,5})$")

# Labels known to live under "1"-prefixed cids on the CDN
FIRST_ONE_PREFIXED: frozenset[str] = frozenset({"start"})


def _dedupe(items: Sequence[str]) -> list[str]:
    return list(dict.fromkeys(i for i in items if i))


def build_cid_candidates(prefix: str, raw_num: str) -> list[str]:
    """
    Ordered cid guesses for a label and its digit string.

    >>> build_cid_candidates("abc", "07")[:4]
    ['abc07', 'abc7', 'abc007', 'abc0007']
    """
    prefix = prefix.lower()
    num_no_zero = str(int(raw_num)) if raw_num.isdigit() else raw_num
    numbers = _dedupe([raw_num, num_no_zero, raw_num.zfill(3), raw_num.zfill(4), raw_num.zfill(5)])

    prefixes = [prefix]
    if not prefix.startswith("1"):
        if prefix in FIRST_ONE_PREFIXED:
            prefixes.insert(0, f"1{prefix}")
        else:
            prefixes.append(f"1{prefix}")

    return _dedupe([f"{p}{n}" for p in prefixes for n in numbers])


def candidate_urls(
    code: str,
    *,
    bases: Sequence[str] = DEFAULT_CDN_BASES,
    suffixes: Sequence[str] = DEFAULT_CDN_SUFFIXES,
) -> Iterator[str]:
    """Yield every guessed URL for `code` in probe order. Non-conforming codes yield nothing."""
    m = _STRICT_CODE_RE.match(normalize_code(code))
    if not m:
        return
    for cid in build_cid_candidates(m.group(1), m.group(2)):
        for base in bases:
            for suffix in suffixes:
                yield f"{base.rstrip('/')}/{cid}/{cid}{suffix}"


class CdnGuessProvider:
    """Probes guessed CDN URLs; no search, no credentials."""

    name = "cdn-guess"
    source: CoverSource = "cdn-guess"
    reason_label = "CDN"
    link_label = "DMM Image"

    def __init__(
        self,
        screener: CoverScreener,
        *,
        bases: Sequence[str] = DEFAULT_CDN_BASES,
        suffixes: Sequence[str] = DEFAULT_CDN_SUFFIXES,
    ) -> None:
        self._screener = screener
        self._bases = tuple(bases)
        self._suffixes = tuple(suffixes)

    def lookup(self, query: CoverQuery) -> ProviderLookup:
        url = self.guess(query.code)
        if not url:
            return miss()
        return ProviderLookup(
            candidate=CoverCandidate(cover_url=url, title=query.code, item_url="", link_label=self.link_label)
        )

    def guess(self, code: str) -> str:
        for url in candidate_urls(code, bases=self._bases, suffixes=self._suffixes):
            if self._screener.exists_and_not_blank(url):
                logger.debug("CDN guess hit for %s: %s", code, url)
                return url
        return ""


__all__ = [
    "FIRST_ONE_PREFIXED",
    "build_cid_candidates",
    "candidate_urls",
    "CdnGuessProvider",
]
