# coverfinder/core/media/html_finder.py
"""
HTML helpers for the catalog provider.

Pure functions over page text; nothing here touches the network.
  - extract_detail_paths: '/v/<id>' links from a search results page
  - extract_meta_content: OpenGraph/meta values (og:image, og:title)
  - to_absolute_url:      resolve scraped URLs against a mirror base
  - cleanup_og_title:     drop the trailing ' - <SiteName>' suffix
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from urllib.parse import urlparse

from bs4 import BeautifulSoup

_DETAIL_PATH_RE = re.compile(r"^/v/[A-Za-z0-9]+$")
_ABS_URL_RE = re.compile(r"^https?://", re.IGNORECASE)


def _dedupe(items: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for it in items:
        if it and it not in seen:
            seen.add(it)
            out.append(it)
    return out


def hosts_for(bases: Iterable[str]) -> set[str]:
    """Lower-cased netlocs of the given base URLs."""
    return {urlparse(b).netloc.lower() for b in bases if urlparse(b).netloc}


def extract_detail_paths(html: str, hosts: Iterable[str] = ()) -> list[str]:
    """
    Return detail-page paths ('/v/abc12') in document order, de-duplicated.

    Accepts relative hrefs and absolute ones pointing at any of `hosts`;
    absolute forms are reduced to their path.
    """
    allowed = {h.lower() for h in hosts}
    soup = BeautifulSoup(html or "", "html.parser")
    paths: list[str] = []
    for el in soup.find_all(href=True):
        href = str(el.get("href") or "").strip()
        if _ABS_URL_RE.match(href):
            parsed = urlparse(href)
            if parsed.netloc.lower() not in allowed or parsed.query or parsed.fragment:
                continue
            href = parsed.path
        if _DETAIL_PATH_RE.match(href):
            paths.append(href)
    return _dedupe(paths)


def extract_meta_content(html: str, name: str) -> str:
    """
    Content of the first <meta property|name="<name>" content="..."> tag.

    Attribute order does not matter; the property name compares case-insensitively.
    Entities are decoded. Returns '' when the tag is absent or empty.
    """
    wanted = name.strip().lower()
    soup = BeautifulSoup(html or "", "html.parser")
    for meta in soup.find_all("meta"):
        keys = {str(meta.get(attr) or "").strip().lower() for attr in ("property", "name")}
        if wanted not in keys:
            continue
        content = str(meta.get("content") or "").strip()
        if content:
            return content
    return ""


def to_absolute_url(base: str, url: str) -> str:
    if not url:
        return ""
    if _ABS_URL_RE.match(url):
        return url
    if url.startswith("//"):
        return "https:" + url
    return base.rstrip("/") + (url if url.startswith("/") else f"/{url}")


def cleanup_og_title(title: str, site_name: str = "JavDB") -> str:
    """'ABC-123 Some Title - JavDB' -> 'ABC-123 Some Title'."""
    if not title:
        return ""
    if site_name:
        title = re.sub(rf"\s*-\s*{re.escape(site_name)}\s*$", "", title, flags=re.IGNORECASE)
    return title.strip()


__all__ = [
    "hosts_for",
    "extract_detail_paths",
    "extract_meta_content",
    "to_absolute_url",
    "cleanup_og_title",
]
