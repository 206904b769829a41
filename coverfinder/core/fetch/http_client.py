# coverfinder/core/fetch/http_client.py
"""
Time-bounded HTTP helpers built on a shared requests.Session.

Every call is exactly one round trip with a per-request timeout, except
`url_exists`, which retries as GET when a server rejects HEAD with 405.
There are no internal retries.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

import requests

from .errors import FetchError, fetcher_error_guard

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 10.0
DEFAULT_USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64) coverfinder/0.3"


@runtime_checkable
class HttpLike(Protocol):
    """The subset of HttpClient that providers and screeners depend on."""

    def get_text(self, url: str) -> str: ...

    def get_bytes(self, url: str) -> tuple[bytes, str]: ...

    def get_json(self, url: str, params: Mapping[str, str] | None = None) -> Any: ...

    def url_exists(self, url: str) -> bool: ...


def _is_success(status: int) -> bool:
    return 200 <= status < 300


class HttpClient:
    """
    Thin wrapper over requests.Session with uniform error typing.

    Non-2xx responses raise FetchError(status=...), an elapsed deadline raises
    FetchTimeoutError, and transport problems raise NetworkError.
    """

    def __init__(
        self,
        *,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        user_agent: str = DEFAULT_USER_AGENT,
        session: requests.Session | None = None,
    ) -> None:
        self.timeout_s = float(timeout_s)
        self.user_agent = user_agent
        self._session = session or requests.Session()
        self._session.headers["User-Agent"] = user_agent

    # -------- public API --------

    def get_text(self, url: str) -> str:
        resp = self._request("GET", url)
        return resp.text

    def get_bytes(self, url: str) -> tuple[bytes, str]:
        """Return (body, content_type). Content type is lower-cased without parameters."""
        resp = self._request("GET", url)
        content_type = (resp.headers.get("Content-Type") or "").split(";", 1)[0].strip().lower()
        return resp.content, content_type

    def get_json(self, url: str, params: Mapping[str, str] | None = None) -> Any:
        resp = self._request("GET", url, params=params)
        with fetcher_error_guard(url=url):
            return resp.json()

    def url_exists(self, url: str) -> bool:
        """HEAD the URL (GET on 405). True only for 2xx; never raises."""
        if not url:
            return False
        try:
            head = self._session.head(url, timeout=self.timeout_s, allow_redirects=True)
            if _is_success(head.status_code):
                return True
            if head.status_code != 405:
                return False
            get = self._session.get(url, timeout=self.timeout_s)
            return _is_success(get.status_code)
        except requests.RequestException as e:
            logger.debug("Probe failed for %s: %s", url, e)
            return False

    def close(self) -> None:
        self._session.close()

    # -------- internals --------

    def _request(self, method: str, url: str, *, params: Mapping[str, str] | None = None) -> requests.Response:
        with fetcher_error_guard(url=url):
            resp = self._session.request(method, url, params=params, timeout=self.timeout_s)
        if not _is_success(resp.status_code):
            raise FetchError(f"HTTP {resp.status_code}", url=url, status=resp.status_code)
        return resp


def fetch_text(url: str, *, timeout_s: float = DEFAULT_TIMEOUT_S) -> str:
    """One-shot GET returning the body text (new session per call)."""
    client = HttpClient(timeout_s=timeout_s)
    try:
        return client.get_text(url)
    finally:
        client.close()


__all__ = [
    "HttpLike",
    "HttpClient",
    "fetch_text",
    "DEFAULT_TIMEOUT_S",
    "DEFAULT_USER_AGENT",
]
