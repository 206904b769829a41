# coverfinder/core/cache/cover_cache.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta, timezone

from pydantic import ValidationError

from coverfinder.schemas.models import CacheEntry, CoverResult

from .stores import CacheStore

logger = logging.getLogger(__name__)

CACHE_PREFIX = "cover:"
DEFAULT_TTL = timedelta(days=14)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CoverCache:
    """
    Time-bounded cover cache over any CacheStore.

    Entries are keyed 'cover:<CODE>'. An entry is fresh while its age is
    strictly below the TTL; older entries read as misses but are left in the
    store until the next successful resolution overwrites them. Codes that
    start with one of `bypass_prefixes` always read as misses.
    """

    def __init__(
        self,
        store: CacheStore,
        *,
        ttl: timedelta = DEFAULT_TTL,
        bypass_prefixes: Iterable[str] = (),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._ttl = ttl
        self._bypass = tuple(p.upper() for p in bypass_prefixes if p)
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    @staticmethod
    def key_for(code: str) -> str:
        return CACHE_PREFIX + code

    def should_bypass(self, code: str) -> bool:
        return any(code.upper().startswith(p) for p in self._bypass)

    def lookup(self, code: str) -> CoverResult | None:
        if self.should_bypass(code):
            logger.debug("Cache bypassed for %s", code)
            return None

        raw = self._store.get(self.key_for(code))
        if raw is None:
            logger.debug("Cache miss for %s", code)
            return None

        try:
            entry = CacheEntry.model_validate(raw)
        except ValidationError as e:
            logger.debug("Ignoring malformed cache entry for %s: %s", code, e)
            return None

        timestamp = entry.timestamp
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        age = self._clock() - timestamp
        if age >= self._ttl:
            logger.debug("Cache entry for %s is stale (age=%s)", code, age)
            return None

        logger.debug("Cache hit for %s", code)
        return entry.data

    def save(self, result: CoverResult) -> CacheEntry:
        entry = CacheEntry(timestamp=self._clock(), data=result)
        self._store.set(self.key_for(result.code), entry.model_dump(mode="json"))
        return entry


__all__ = [
    "CACHE_PREFIX",
    "DEFAULT_TTL",
    "CoverCache",
]
