# coverfinder/providers/base.py
"""
Cover Provider Interface

Purpose
-------
Define a minimal, provider-agnostic contract for cover lookups so the
orchestrator can walk an ordered list of providers and stop at the first hit,
independent of how many providers there are or how each one works.

Public API
----------
class CoverProvider(Protocol):
    name: str           # for logging
    source: CoverSource # stamped onto the CoverResult
    reason_label: str   # prefix used when a miss reason reaches the caller
    def lookup(self, query: CoverQuery) -> ProviderLookup

Invariants & Guardrails
-----------------------
- Providers must not raise for network failures; they return a miss
  (candidate=None) and may explain it in `reason`.
- A returned candidate always has a non-empty cover_url.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from coverfinder.schemas.models import CoverQuery, CoverSource, ProviderLookup


@runtime_checkable
class CoverProvider(Protocol):
    name: str
    source: CoverSource
    reason_label: str

    def lookup(self, query: CoverQuery) -> ProviderLookup: ...


MISS = ProviderLookup()


def miss(reason: str = "") -> ProviderLookup:
    return ProviderLookup(candidate=None, reason=reason) if reason else MISS


__all__ = [
    "CoverProvider",
    "MISS",
    "miss",
]
