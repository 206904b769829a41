# coverfinder/orchestrators/cover_orchestrator.py
"""
Cover resolution orchestrator.

Flow (single pass, no retries across providers):
  normalize code (CodeParseError if empty)
    -> cache lookup (skipped for bypassed prefixes)
    -> providers in order, first found candidate wins
    -> CoverResult stamped with the code and the provider's source
    -> cache write, return
  If every provider misses, raise CoverNotFoundError with the providers'
  diagnostic reasons; nothing is written to the cache.

The resolver holds no mutable state of its own; everything persistent lives in
the cache store. Callers that fan out resolutions are responsible for
collapsing duplicate in-flight requests for the same code.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import timedelta

from coverfinder.core.cache import CacheStore, CoverCache, MemoryCacheStore
from coverfinder.core.fetch import HttpClient, HttpLike
from coverfinder.core.media import CoverScreener
from coverfinder.core.normalize import build_queries, normalize_code
from coverfinder.providers import AffiliateApiProvider, CatalogSearchProvider, CdnGuessProvider, CoverProvider
from coverfinder.schemas.models import (
    AffiliateCredentials,
    CoverQuery,
    CoverRequest,
    CoverResponse,
    CoverResult,
    ProviderLookup,
    ResolverSettings,
)

from .errors import CodeParseError, CoverNotFoundError, CoverResolutionError

logger = logging.getLogger(__name__)


class CoverResolver:
    """Runs the provider chain for one code at a time, with caching."""

    def __init__(self, providers: Sequence[CoverProvider], cache: CoverCache | None = None) -> None:
        self._providers = list(providers)
        self._cache = cache

    @property
    def providers(self) -> list[CoverProvider]:
        return list(self._providers)

    @property
    def cache(self) -> CoverCache | None:
        return self._cache

    def resolve(self, code: str, title: str = "") -> CoverResult:
        normalized = normalize_code(code)
        if not normalized:
            raise CodeParseError(code)

        if self._cache is not None:
            cached = self._cache.lookup(normalized)
            if cached is not None:
                return cached

        query = CoverQuery(code=normalized, title=title or "", queries=build_queries(normalized, title))
        reasons: dict[str, str] = {}

        for provider in self._providers:
            outcome = self._run_provider(provider, query)
            if outcome.found and outcome.candidate is not None:
                cand = outcome.candidate
                result = CoverResult(
                    code=normalized,
                    title=cand.title or normalized,
                    cover_url=cand.cover_url,
                    item_url=cand.item_url,
                    link_label=cand.link_label,
                    source=provider.source,
                )
                logger.debug("Cover for %s resolved via %s", normalized, provider.name)
                if self._cache is not None:
                    self._cache.save(result)
                return result
            if outcome.reason:
                reasons[provider.reason_label] = outcome.reason

        logger.debug("No cover found for %s", normalized)
        raise CoverNotFoundError(normalized, reasons)

    def handle(self, request: CoverRequest) -> CoverResponse:
        """Envelope form of `resolve`: never raises for resolution failures."""
        try:
            return CoverResponse(ok=True, data=self.resolve(request.code, request.title))
        except CoverResolutionError as e:
            return CoverResponse(ok=False, error=str(e))

    def _run_provider(self, provider: CoverProvider, query: CoverQuery) -> ProviderLookup:
        try:
            return provider.lookup(query)
        except Exception as e:  # noqa: BLE001
            logger.warning("%s unexpected error for %s: %s", provider.name, query.code, e)
            return ProviderLookup()


def build_default_resolver(
    settings: ResolverSettings | None = None,
    *,
    store: CacheStore | None = None,
    credentials: AffiliateCredentials | Callable[[], AffiliateCredentials] | None = None,
    http: HttpLike | None = None,
) -> CoverResolver:
    """
    Wire the standard chain: catalog search, then CDN guess, then affiliate API.

    `credentials` defaults to the ones in `settings`; pass a callable to read
    them fresh on every resolution.
    """
    cfg = settings or ResolverSettings()
    client: HttpLike = http or HttpClient(timeout_s=cfg.request_timeout_s, user_agent=cfg.user_agent)
    screener = CoverScreener(client)

    providers: list[CoverProvider] = [
        CatalogSearchProvider(
            client,
            screener,
            bases=cfg.catalog_bases,
            max_candidates=cfg.max_detail_candidates,
            site_name=cfg.catalog_site_name,
        ),
        CdnGuessProvider(screener, bases=cfg.cdn_bases, suffixes=cfg.cdn_suffixes),
        AffiliateApiProvider(
            client,
            credentials if credentials is not None else cfg.credentials,
            endpoint=cfg.affiliate_endpoint,
            site=cfg.affiliate_site,
            hits=cfg.affiliate_hits,
        ),
    ]
    cache = CoverCache(
        store if store is not None else MemoryCacheStore(),
        ttl=timedelta(days=cfg.cache_ttl_days),
        bypass_prefixes=cfg.cache_bypass_prefixes,
    )
    return CoverResolver(providers, cache)


__all__ = [
    "CoverResolver",
    "build_default_resolver",
]
