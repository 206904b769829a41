# coverfinder/providers/catalog_search.py
"""
Catalog search provider (scraped HTML).

For each mirror, in order:
  1) GET <base>/search?q=<code>&f=all and collect '/v/<id>' detail links.
     No links -> remember "search returned no detail links (...)" and move on.
  2) Visit up to `max_candidates` detail pages. Each needs og:image; og:title
     is optional. The title's code is compared to the query (exact or loose).
  3) The first matching candidate wins immediately, across all mirrors.
  4) Otherwise the first candidate seen anywhere is kept as a fallback and
     returned once every mirror is exhausted.

The chosen cover is then screened (blocklist, existence, blank image).
Network failures never escape: a failed search moves to the next mirror, a
failed detail page is skipped, and the last failure becomes the miss reason.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from urllib.parse import quote

from coverfinder.core.fetch import FETCHER_ERRORS, HttpLike
from coverfinder.core.media import (
    CoverScreener,
    cleanup_og_title,
    extract_detail_paths,
    extract_meta_content,
    hosts_for,
    to_absolute_url,
)
from coverfinder.core.normalize import codes_match, extract_code
from coverfinder.schemas.models import (
    DEFAULT_CATALOG_BASES,
    CatalogItem,
    CoverCandidate,
    CoverQuery,
    CoverSource,
    ProviderLookup,
)

from .base import miss

logger = logging.getLogger(__name__)

NO_LINKS_REASON = "search returned no detail links (possible anti-bot or layout change)"
SCREENING_REASON = "cover image failed screening"
MAX_DETAIL_CANDIDATES = 8


class CatalogSearchProvider:
    """Scrapes the catalog search UI and its detail pages' OpenGraph tags."""

    name = "catalog-search"
    source: CoverSource = "catalog"
    reason_label = "Catalog"
    link_label = "Open JavDB"

    def __init__(
        self,
        http: HttpLike,
        screener: CoverScreener,
        *,
        bases: Sequence[str] = DEFAULT_CATALOG_BASES,
        max_candidates: int = MAX_DETAIL_CANDIDATES,
        site_name: str = "JavDB",
    ) -> None:
        self._http = http
        self._screener = screener
        self._bases = tuple(bases)
        self._hosts = hosts_for(self._bases)
        self._max_candidates = max_candidates
        self._site_name = site_name

    # -------- public API --------

    def lookup(self, query: CoverQuery) -> ProviderLookup:
        item, reason = self.search(query.code)
        if item is None:
            return miss(reason)

        if not self._screener.is_usable_cover_url(item.cover_url):
            logger.debug("Catalog cover for %s rejected: %s", query.code, item.cover_url)
            return miss(SCREENING_REASON)

        return ProviderLookup(
            candidate=CoverCandidate(
                cover_url=item.cover_url,
                title=item.title or query.code,
                item_url=item.item_url,
                link_label=self.link_label,
            )
        )

    def search(self, code: str) -> tuple[CatalogItem | None, str]:
        """
        Return (item, reason). `reason` is empty whenever an item is returned.
        """
        last_reason = ""
        fallback: CatalogItem | None = None

        for base in self._bases:
            search_url = f"{base.rstrip('/')}/search?q={quote(code)}&f=all"
            try:
                search_html = self._http.get_text(search_url)
            except FETCHER_ERRORS as e:
                logger.debug("Catalog search failed on %s: %s", base, e)
                last_reason = str(e)
                continue

            paths = extract_detail_paths(search_html, self._hosts)
            if not paths:
                logger.debug("No detail links for %s on %s", code, base)
                last_reason = NO_LINKS_REASON
                continue

            for path in paths[: self._max_candidates]:
                detail_url = to_absolute_url(base, path)
                try:
                    item, title_code = self._read_detail(base, detail_url, code)
                except FETCHER_ERRORS as e:
                    logger.debug("Catalog detail failed for %s: %s", detail_url, e)
                    last_reason = str(e)
                    continue
                if item is None:
                    continue

                if codes_match(title_code, code):
                    logger.debug("Catalog match for %s at %s", code, detail_url)
                    return item, ""

                if fallback is None:
                    fallback = item

        if fallback is not None:
            logger.debug("Catalog fallback for %s: %s", code, fallback.item_url)
            return fallback, ""
        return None, last_reason

    # -------- internals --------

    def _read_detail(self, base: str, detail_url: str, code: str) -> tuple[CatalogItem | None, str]:
        html = self._http.get_text(detail_url)
        cover_url = extract_meta_content(html, "og:image")
        if not cover_url:
            return None, ""

        raw_title = extract_meta_content(html, "og:title")
        item = CatalogItem(
            title=cleanup_og_title(raw_title, self._site_name) or code,
            cover_url=to_absolute_url(base, cover_url),
            item_url=detail_url,
        )
        return item, extract_code(raw_title)


__all__ = [
    "CatalogSearchProvider",
    "NO_LINKS_REASON",
    "SCREENING_REASON",
    "MAX_DETAIL_CANDIDATES",
]
