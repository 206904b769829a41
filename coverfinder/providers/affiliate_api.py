# coverfinder/providers/affiliate_api.py
"""
Affiliate keyword-search API provider.

Disabled (silent miss) unless both credentials are present. For each query
string, and for each (service, floor) pair in SERVICE_FLOORS, one ItemList
request is made. The first request that returns any items decides the
outcome: the best-scoring item if any signal matched, else the first item.

Images from this provider are trusted as-is (no blank-image screening).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from pydantic import ValidationError

from coverfinder.core.fetch import FETCHER_ERRORS, HttpLike
from coverfinder.core.normalize import extract_code, normalize_code, normalize_content_id, to_loose_code
from coverfinder.schemas.models import (
    AffiliateCredentials,
    AffiliateItem,
    CoverCandidate,
    CoverQuery,
    CoverSource,
    ProviderLookup,
)

from .base import miss

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://api.dmm.com/affiliate/v3/ItemList"

SERVICE_FLOORS: tuple[tuple[str, str], ...] = (
    ("digital", "videoa"),
    ("mono", "dvd"),
)

# Match signal weights (they accumulate)
TITLE_CODE_EXACT_WEIGHT = 3
CONTENT_ID_EXACT_WEIGHT = 2
TITLE_CODE_LOOSE_WEIGHT = 2
CONTENT_ID_LOOSE_WEIGHT = 1
TITLE_CONTAINS_WEIGHT = 1

CredentialsSource = AffiliateCredentials | Callable[[], AffiliateCredentials]


def score_item(item: AffiliateItem, query: str) -> int:
    """Accumulated match score of one API item against a query. 0 = no signal."""
    normalized_query = normalize_code(query)
    if not normalized_query:
        return 0
    loose_query = to_loose_code(normalized_query)

    title_code = extract_code(item.title)
    content_id = normalize_content_id(item.content_id)
    loose_title_code = to_loose_code(title_code)
    loose_content_id = to_loose_code(content_id)

    score = 0
    if title_code and title_code == normalized_query:
        score += TITLE_CODE_EXACT_WEIGHT
    if content_id and content_id == normalized_query:
        score += CONTENT_ID_EXACT_WEIGHT
    if loose_title_code and loose_title_code == loose_query:
        score += TITLE_CODE_LOOSE_WEIGHT
    if loose_content_id and loose_content_id == loose_query:
        score += CONTENT_ID_LOOSE_WEIGHT
    if normalized_query in item.title.upper():
        score += TITLE_CONTAINS_WEIGHT
    return score


def pick_best_match(items: Sequence[AffiliateItem], query: str) -> AffiliateItem | None:
    """Highest-scoring item (first wins ties), or None when nothing scores above 0."""
    best: AffiliateItem | None = None
    best_score = 0
    for item in items:
        s = score_item(item, query)
        if s > best_score:
            best, best_score = item, s
    return best


def select_item(items: Sequence[AffiliateItem], query: str) -> AffiliateItem | None:
    """Best match, defaulting to the first item when no item scores."""
    if not items:
        return None
    return pick_best_match(items, query) or items[0]


def parse_items(payload: Any) -> list[AffiliateItem]:
    """Extract result.items from an ItemList payload; malformed items are skipped."""
    result = payload.get("result") if isinstance(payload, dict) else None
    raw_items = result.get("items") if isinstance(result, dict) else None
    if not isinstance(raw_items, list):
        return []
    items: list[AffiliateItem] = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            continue
        try:
            items.append(AffiliateItem.model_validate(raw))
        except ValidationError as e:
            logger.debug("Skipping malformed affiliate item: %s", e)
    return items


class AffiliateApiProvider:
    """Keyword search against the affiliate ItemList API."""

    name = "affiliate-api"
    source: CoverSource = "affiliate-api"
    reason_label = "Affiliate API"
    link_label = "Open FANZA"

    def __init__(
        self,
        http: HttpLike,
        credentials: CredentialsSource,
        *,
        endpoint: str = DEFAULT_ENDPOINT,
        site: str = "FANZA",
        hits: int = 20,
        service_floors: Sequence[tuple[str, str]] = SERVICE_FLOORS,
    ) -> None:
        self._http = http
        self._credentials = credentials
        self._endpoint = endpoint
        self._site = site
        self._hits = hits
        self._service_floors = tuple(service_floors)

    def current_credentials(self) -> AffiliateCredentials:
        creds = self._credentials
        return creds() if callable(creds) else creds

    def lookup(self, query: CoverQuery) -> ProviderLookup:
        creds = self.current_credentials()
        if not creds.complete:
            logger.debug("Affiliate API skipped: credentials not configured")
            return miss()

        item = self.first_match(query.queries or (query.code,), creds)
        if item is None:
            return miss()

        cover_url = item.image_urls.best()
        if not cover_url:
            logger.debug("Affiliate item for %s has no image URL", query.code)
            return miss()

        return ProviderLookup(
            candidate=CoverCandidate(
                cover_url=cover_url,
                title=item.title or query.code,
                item_url=item.url or item.affiliate_url,
                link_label=self.link_label,
            )
        )

    def first_match(self, queries: Sequence[str], creds: AffiliateCredentials) -> AffiliateItem | None:
        for q in queries:
            for service, floor in self._service_floors:
                items = self.fetch_items(q, service=service, floor=floor, creds=creds)
                if not items:
                    continue
                return select_item(items, q)
        return None

    def fetch_items(self, keyword: str, *, service: str, floor: str, creds: AffiliateCredentials) -> list[AffiliateItem]:
        params = {
            "api_id": creds.api_id,
            "affiliate_id": creds.affiliate_id,
            "site": self._site,
            "service": service,
            "floor": floor,
            "keyword": keyword,
            "hits": str(self._hits),
            "sort": "rank",
            "output": "json",
        }
        try:
            payload = self._http.get_json(self._endpoint, params=params)
        except FETCHER_ERRORS as e:
            logger.debug("Affiliate API request failed (%s, %s/%s): %s", keyword, service, floor, e)
            return []
        return parse_items(payload)


__all__ = [
    "SERVICE_FLOORS",
    "TITLE_CODE_EXACT_WEIGHT",
    "CONTENT_ID_EXACT_WEIGHT",
    "TITLE_CODE_LOOSE_WEIGHT",
    "CONTENT_ID_LOOSE_WEIGHT",
    "TITLE_CONTAINS_WEIGHT",
    "score_item",
    "pick_best_match",
    "select_item",
    "parse_items",
    "AffiliateApiProvider",
]
