# coverfinder/__init__.py
"""
coverfinder: resolve a short media code (e.g. ``ABC-123``) to a single cover
image by consulting a prioritized chain of providers, with a time-bounded cache.

    from coverfinder import build_default_resolver, ResolverSettings

    resolver = build_default_resolver(ResolverSettings())
    result = resolver.resolve("abc_123", title="[ABC-123] Some title")
"""

from __future__ import annotations

from coverfinder.orchestrators.cover_orchestrator import CoverResolver, build_default_resolver
from coverfinder.orchestrators.errors import CodeParseError, CoverNotFoundError, CoverResolutionError
from coverfinder.schemas.models import CoverRequest, CoverResponse, CoverResult, ResolverSettings

__version__ = "0.3.0"

__all__ = [
    "CoverResolver",
    "build_default_resolver",
    "CoverResolutionError",
    "CodeParseError",
    "CoverNotFoundError",
    "CoverRequest",
    "CoverResponse",
    "CoverResult",
    "ResolverSettings",
]
