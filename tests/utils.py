# tests/utils.py
"""
Single source of truth for test data, fakes, and canonical payloads.
Update values here to cascade across the test suite.
"""

from __future__ import annotations

import io
import struct
import zlib
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any

from PIL import Image

from coverfinder.core.fetch import FetchError
from coverfinder.schemas.models import CoverCandidate, CoverQuery, CoverResult, CoverSource, ProviderLookup

# -----------------------------
# Global defaults (edit once)
# -----------------------------

DEFAULT_CODE = "ABC-123"
DEFAULT_COVER_URL = "https://img.example.com/covers/abc123pl.jpg"
FIXED_NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)

CATALOG_BASE = "https://javdb.com"
CATALOG_MIRROR = "https://www.javdb.com"

# -----------------------------
# Images
# -----------------------------


def png_bytes(width: int = 32, height: int = 32, color: tuple[int, int, int] = (255, 255, 255)) -> bytes:
    """Solid-colour PNG."""
    img = Image.new("RGB", (width, height), color)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def checkerboard_png(width: int = 32, height: int = 32, cell: int = 4) -> bytes:
    """Alternating black/white cells: high luma variance."""
    img = Image.new("RGB", (width, height), (255, 255, 255))
    px = img.load()
    for y in range(height):
        for x in range(width):
            if ((x // cell) + (y // cell)) % 2 == 0:
                px[x, y] = (0, 0, 0)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


WHITE_PNG = png_bytes()
PHOTO_PNG = checkerboard_png()


def oversized_png(width: int = 20000, height: int = 20000) -> bytes:
    """Tiny PNG whose IHDR claims width x height; trips Pillow's decompression-bomb guard on open."""
    data = bytearray(png_bytes(1, 1))
    ihdr = bytes(data[12:16]) + struct.pack(">II", width, height) + bytes(data[24:29])
    data[16:24] = struct.pack(">II", width, height)
    data[29:33] = struct.pack(">I", zlib.crc32(ihdr) & 0xFFFFFFFF)
    return bytes(data)


# -----------------------------
# HTML pages
# -----------------------------


def search_page(*hrefs: str) -> str:
    links = "\n".join(f'<a class="box" href="{h}">item</a>' for h in hrefs)
    return f"<html><body><div class='movie-list'>{links}</div></body></html>"


def detail_page(*, image: str | None = None, title: str | None = None, reversed_attrs: bool = False) -> str:
    metas: list[str] = []
    if image is not None:
        if reversed_attrs:
            metas.append(f'<meta content="{image}" property="og:image">')
        else:
            metas.append(f'<meta property="og:image" content="{image}">')
    if title is not None:
        metas.append(f'<meta name="og:title" content="{title}">')
    return f"<html><head>{''.join(metas)}</head><body></body></html>"


# -----------------------------
# Fakes
# -----------------------------


class FakeHttp:
    """
    In-memory stand-in for HttpClient with per-method call logs.

    pages:    url -> HTML text for get_text
    images:   url -> (bytes, content_type) for get_bytes
    existing: urls for which url_exists() is True
    api:      callable(params) -> JSON payload for get_json
    errors:   url -> exception raised by get_text/get_bytes
    """

    def __init__(
        self,
        *,
        pages: Mapping[str, str] | None = None,
        images: Mapping[str, tuple[bytes, str]] | None = None,
        existing: set[str] | None = None,
        api: Callable[[dict[str, str]], Any] | None = None,
        errors: Mapping[str, Exception] | None = None,
    ) -> None:
        self.pages = dict(pages or {})
        self.images = dict(images or {})
        self.existing = set(existing or set())
        self.api = api
        self.errors = dict(errors or {})
        self.text_calls: list[str] = []
        self.bytes_calls: list[str] = []
        self.json_calls: list[dict[str, str]] = []
        self.probe_calls: list[str] = []

    @property
    def total_calls(self) -> int:
        return len(self.text_calls) + len(self.bytes_calls) + len(self.json_calls) + len(self.probe_calls)

    def get_text(self, url: str) -> str:
        self.text_calls.append(url)
        if url in self.errors:
            raise self.errors[url]
        if url not in self.pages:
            raise FetchError("HTTP 404", url=url, status=404)
        return self.pages[url]

    def get_bytes(self, url: str) -> tuple[bytes, str]:
        self.bytes_calls.append(url)
        if url in self.errors:
            raise self.errors[url]
        if url not in self.images:
            raise FetchError("HTTP 404", url=url, status=404)
        return self.images[url]

    def get_json(self, url: str, params: Mapping[str, str] | None = None) -> Any:
        p = dict(params or {})
        self.json_calls.append(p)
        if self.api is None:
            return {"result": {"items": []}}
        return self.api(p)

    def url_exists(self, url: str) -> bool:
        self.probe_calls.append(url)
        return url in self.existing


class StaticProvider:
    """Provider double returning a fixed lookup and counting calls."""

    def __init__(
        self,
        *,
        name: str,
        source: CoverSource,
        cover_url: str = "",
        reason: str = "",
        reason_label: str = "",
        error: Exception | None = None,
    ) -> None:
        self.name = name
        self.source = source
        self.reason_label = reason_label or name
        self._cover_url = cover_url
        self._reason = reason
        self._error = error
        self.calls: list[CoverQuery] = []

    def lookup(self, query: CoverQuery) -> ProviderLookup:
        self.calls.append(query)
        if self._error is not None:
            raise self._error
        if not self._cover_url:
            return ProviderLookup(candidate=None, reason=self._reason)
        return ProviderLookup(
            candidate=CoverCandidate(cover_url=self._cover_url, title=f"{query.code} from {self.name}", link_label=self.name)
        )


class FakeClock:
    """Mutable 'now' for cache freshness tests."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


# -----------------------------
# Factories
# -----------------------------


def make_result(code: str = DEFAULT_CODE, *, source: CoverSource = "catalog", cover_url: str = DEFAULT_COVER_URL) -> CoverResult:
    return CoverResult(
        code=code,
        title=f"{code} Sample Title",
        cover_url=cover_url,
        item_url="https://javdb.com/v/xyz12",
        link_label="Open JavDB",
        source=source,
    )


def affiliate_payload(*items: dict[str, Any]) -> dict[str, Any]:
    return {"result": {"status": 200, "result_count": len(items), "items": list(items)}}


def affiliate_item(
    title: str = "",
    content_id: str = "",
    *,
    large: str = "",
    small: str = "",
    thumb: str = "",
    url: str = "",
) -> dict[str, Any]:
    return {
        "title": title,
        "content_id": content_id,
        "URL": url,
        "imageURL": {"large": large, "small": small, "list": thumb},
    }
