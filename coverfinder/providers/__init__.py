# coverfinder/providers/__init__.py
"""
Cover providers, in the order the default resolver consults them:

    CatalogSearchProvider  (scraped catalog, og:image)
    CdnGuessProvider       (guessed CDN filenames)
    AffiliateApiProvider   (keyword-search JSON API, needs credentials)
"""

from __future__ import annotations

from .affiliate_api import AffiliateApiProvider, pick_best_match, score_item
from .base import CoverProvider
from .catalog_search import CatalogSearchProvider
from .cdn_guess import CdnGuessProvider, build_cid_candidates, candidate_urls

__all__ = [
    "CoverProvider",
    "CatalogSearchProvider",
    "CdnGuessProvider",
    "AffiliateApiProvider",
    "score_item",
    "pick_best_match",
    "build_cid_candidates",
    "candidate_urls",
]
