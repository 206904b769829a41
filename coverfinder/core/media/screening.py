# coverfinder/core/media/screening.py
"""
Cover URL screening.

Two rules are exposed because providers apply different subsets:
  - is_usable_cover_url: keyword blocklist, then existence probe, then blank-image check.
    Used for scraped catalog covers.
  - exists_and_not_blank: existence probe and blank-image check only.
    Used for guessed CDN URLs, whose filenames never carry placeholder keywords.
"""

from __future__ import annotations

import logging

from coverfinder.core.fetch import FETCHER_ERRORS, HttpLike

from .blank_detector import is_blank_image

logger = logging.getLogger(__name__)

# URL substrings that mark provider placeholder art
BLOCKED_KEYWORDS: tuple[str, ...] = (
    "noimage",
    "nowprinting",
    "now_printing",
    "placeholder",
    "default",
)


def has_blocked_keyword(url: str) -> bool:
    low = url.lower()
    return any(k in low for k in BLOCKED_KEYWORDS)


class CoverScreener:
    """Applies existence and placeholder checks to candidate cover URLs."""

    def __init__(self, http: HttpLike) -> None:
        self._http = http

    def is_likely_blank_url(self, url: str) -> bool:
        """
        Download the image and run the blank heuristic. Any failure (HTTP error,
        non-image content type, undecodable bytes) counts as not blank.
        """
        try:
            data, content_type = self._http.get_bytes(url)
        except FETCHER_ERRORS as e:
            logger.debug("Blank check skipped for %s: %s", url, e)
            return False
        if content_type and not content_type.startswith("image/"):
            return False
        return is_blank_image(data)

    def exists_and_not_blank(self, url: str) -> bool:
        if not url:
            return False
        if not self._http.url_exists(url):
            return False
        return not self.is_likely_blank_url(url)

    def is_usable_cover_url(self, url: str) -> bool:
        if not url:
            return False
        if has_blocked_keyword(url):
            logger.debug("Rejected placeholder-looking cover URL %s", url)
            return False
        return self.exists_and_not_blank(url)


__all__ = [
    "BLOCKED_KEYWORDS",
    "has_blocked_keyword",
    "CoverScreener",
]
