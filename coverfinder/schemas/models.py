# coverfinder/schemas/models.py

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

CoverSource = Literal["catalog", "cdn-guess", "affiliate-api"]

# =========================
# Resolved covers
# =========================


class CoverCandidate(BaseModel):
    """
    A provider's proposed cover, before the orchestrator stamps it with the
    normalized code and the provider's source tag.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    cover_url: str = Field(..., description="Absolute URL of the cover image.")
    title: str = Field("", description="Display title (empty = fall back to the code).")
    item_url: str = Field("", description="Link to the item page on the provider, if any.")
    link_label: str = Field("", description="Human-readable label for item_url.")


class CoverResult(BaseModel):
    """The resolved answer for one code. This is the unit cached and returned to callers."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    code: str = Field(..., description="Normalized PREFIX-NUMBER code.")
    title: str = Field(..., description="Display title; the code itself when the provider has none.")
    cover_url: str = Field(..., description="Cover image URL. Never empty.")
    item_url: str = Field("", description="Provider item page, may be empty (e.g. CDN guesses).")
    link_label: str = Field("", description="Label for item_url.")
    source: CoverSource = Field(..., description="Which provider produced this result.")

    @field_validator("cover_url")
    @classmethod
    def _cover_url_required(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("cover_url must be non-empty")
        return v


class ProviderLookup(BaseModel):
    """Outcome of one provider: a candidate (or None) plus an optional diagnostic reason."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    candidate: CoverCandidate | None = None
    reason: str = ""

    @property
    def found(self) -> bool:
        return self.candidate is not None and bool(self.candidate.cover_url.strip())


class CoverQuery(BaseModel):
    """Normalized request handed to every provider in the chain."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    code: str = Field(..., description="Normalized code, e.g. 'ABC-123'.")
    title: str = Field("", description="Free-text title supplied by the caller.")
    queries: tuple[str, ...] = Field(default_factory=tuple, description="Ordered keyword list for search APIs.")


# =========================
# Cache
# =========================


class CacheEntry(BaseModel):
    """Stored under 'cover:<CODE>'. Freshness is judged from `timestamp` only."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    timestamp: datetime = Field(..., description="UTC time the result was resolved.")
    data: CoverResult


# =========================
# Provider-specific records
# =========================


class CatalogItem(BaseModel):
    """One scraped catalog detail page."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str = ""
    cover_url: str = ""
    item_url: str = ""


class AffiliateImageUrls(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    large: str = ""
    small: str = ""
    list: str = ""

    @field_validator("large", "small", "list", mode="before")
    @classmethod
    def _none_to_empty(cls, v: object) -> object:
        return "" if v is None else v

    def best(self) -> str:
        """First non-blank URL in preference order: large, small, list."""
        for url in (self.large, self.small, self.list):
            if url.strip():
                return url.strip()
        return ""


class AffiliateItem(BaseModel):
    """
    One item from the affiliate ItemList JSON. Field names follow the API payload;
    unknown fields are ignored and missing ones default to empty.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    title: str = ""
    content_id: str = ""
    url: str = Field("", alias="URL")
    affiliate_url: str = Field("", alias="affiliateURL")
    image_urls: AffiliateImageUrls = Field(default_factory=AffiliateImageUrls, alias="imageURL")

    @field_validator("title", "content_id", "url", "affiliate_url", mode="before")
    @classmethod
    def _none_to_empty(cls, v: object) -> object:
        return "" if v is None else v

    @field_validator("image_urls", mode="before")
    @classmethod
    def _image_urls_default(cls, v: object) -> object:
        return {} if v is None else v


# =========================
# Inbound envelope
# =========================


class CoverRequest(BaseModel):
    """Inbound request: a code-like string plus the row title it came from."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    code: str = ""
    title: str = ""


class CoverResponse(BaseModel):
    """Uniform response envelope: either `data` (ok=True) or an `error` message (ok=False)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    ok: bool
    data: CoverResult | None = None
    error: str | None = None


# =========================
# Settings
# =========================

DEFAULT_CATALOG_BASES: tuple[str, ...] = ("https://javdb.com", "https://www.javdb.com")
DEFAULT_CDN_BASES: tuple[str, ...] = (
    "https://pics.dmm.co.jp/mono/movie/adult",
    "https://pics.dmm.co.jp/digital/video",
    "https://pics.dmm.co.jp/digital/videoa",
)
DEFAULT_CDN_SUFFIXES: tuple[str, ...] = ("pl.jpg", "ps.jpg", "jp.jpg")


class AffiliateCredentials(BaseModel):
    """Credentials for the affiliate keyword-search API. Both are required to enable it."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    api_id: str = ""
    affiliate_id: str = ""

    @property
    def complete(self) -> bool:
        return bool(self.api_id.strip()) and bool(self.affiliate_id.strip())


class ResolverSettings(BaseModel):
    """
    Runtime configuration for the resolution pipeline.

    Credentials are externally owned; leaving either blank disables the
    affiliate provider without raising.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    api_id: str = Field("", alias="apiId", description="Affiliate API id.")
    affiliate_id: str = Field("", alias="affiliateId", description="Affiliate partner id.")

    request_timeout_s: float = Field(10.0, gt=0, description="Per-request HTTP timeout in seconds.")
    user_agent: str = Field(
        "Mozilla/5.0 (X11; Linux x86_64) coverfinder/0.3",
        description="User-Agent header sent with every request.",
    )

    cache_ttl_days: float = Field(14.0, gt=0, description="Cache entries older than this are treated as misses.")
    cache_bypass_prefixes: tuple[str, ...] = Field(
        ("START-",),
        description="Codes starting with any of these prefixes skip cache reads (results are still written).",
    )

    catalog_bases: tuple[str, ...] = Field(DEFAULT_CATALOG_BASES, min_length=1, description="Catalog mirrors, tried in order.")
    catalog_site_name: str = Field("JavDB", description="Site name stripped from the end of og:title.")
    max_detail_candidates: int = Field(8, ge=1, description="Detail pages visited per mirror.")

    cdn_bases: tuple[str, ...] = Field(DEFAULT_CDN_BASES, description="CDN base paths probed by the guesser.")
    cdn_suffixes: tuple[str, ...] = Field(DEFAULT_CDN_SUFFIXES, description="Filename suffixes probed by the guesser.")

    affiliate_endpoint: str = Field("https://api.dmm.com/affiliate/v3/ItemList", description="ItemList endpoint.")
    affiliate_site: str = Field("FANZA", description="Value of the 'site' query parameter.")
    affiliate_hits: int = Field(20, ge=1, le=100, description="Page size for ItemList requests.")

    @field_validator("cache_bypass_prefixes", mode="before")
    @classmethod
    def _split_prefixes(cls, v: object) -> object:
        if isinstance(v, str):
            return tuple(p.strip().upper() for p in v.split(",") if p.strip())
        if isinstance(v, (list, tuple)):
            return tuple(str(p).strip().upper() for p in v if str(p).strip())
        return v

    @property
    def credentials(self) -> AffiliateCredentials:
        return AffiliateCredentials(api_id=self.api_id, affiliate_id=self.affiliate_id)

    @property
    def has_affiliate_credentials(self) -> bool:
        return self.credentials.complete


__all__ = [
    "CoverSource",
    "CoverCandidate",
    "CoverResult",
    "ProviderLookup",
    "CoverQuery",
    "CacheEntry",
    "CatalogItem",
    "AffiliateImageUrls",
    "AffiliateItem",
    "CoverRequest",
    "CoverResponse",
    "AffiliateCredentials",
    "ResolverSettings",
    "DEFAULT_CATALOG_BASES",
    "DEFAULT_CDN_BASES",
    "DEFAULT_CDN_SUFFIXES",
]
