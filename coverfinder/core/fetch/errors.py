# coverfinder/core/fetch/errors.py
"""
Typed errors + utilities for the HTTP layer.

Exports
-------
- CoverFetchError, FetchError, FetchTimeoutError, NetworkError
- FETCHER_ERRORS
- classify_fetcher_error(exc, url="")
- fetcher_error_guard(url="")
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import requests

# =========================
# Exception types
# =========================


class CoverFetchError(RuntimeError):
    """Base class for HTTP fetch failures."""

    def __init__(self, message: str, *, url: str = "") -> None:
        super().__init__(message)
        self.url = url


class FetchError(CoverFetchError):
    """The server answered outside the 2xx range. `status` holds the HTTP status code."""

    def __init__(self, message: str, *, url: str = "", status: int | None = None) -> None:
        super().__init__(message, url=url)
        self.status = status


class FetchTimeoutError(FetchError):
    """The per-request deadline elapsed before a response arrived."""

    def __init__(self, message: str, *, url: str = "") -> None:
        super().__init__(message, url=url, status=None)


class NetworkError(CoverFetchError):
    """Connection, DNS, TLS or other transport failure."""


# Selector tuple for grouped exception handling (includes the unclassified base)
FETCHER_ERRORS = (
    CoverFetchError,
    FetchError,
    FetchTimeoutError,
    NetworkError,
)

# =========================
# Classification helpers
# =========================


def classify_fetcher_error(exc: Exception, *, url: str = "") -> CoverFetchError:
    """
    Map arbitrary exceptions raised inside the HTTP layer to a typed CoverFetchError.

    Heuristics:
      - Any CoverFetchError subclass -> passed through
      - requests.Timeout             -> FetchTimeoutError
      - requests.HTTPError           -> FetchError (status from the attached response)
      - other requests errors        -> NetworkError
      - ValueError (bad JSON/body)   -> FetchError without status
      - Fallback                     -> CoverFetchError
    """
    if isinstance(exc, CoverFetchError):
        return exc

    if isinstance(exc, requests.Timeout):
        return FetchTimeoutError(f"Timed out fetching {url or 'resource'}", url=url)

    if isinstance(exc, requests.HTTPError):
        resp = getattr(exc, "response", None)
        status = getattr(resp, "status_code", None)
        return FetchError(f"HTTP {status}" if status else str(exc), url=url, status=status)

    if isinstance(exc, requests.RequestException):
        return NetworkError(f"{type(exc).__name__}: {exc}", url=url)

    if isinstance(exc, ValueError):
        return FetchError(f"Invalid response body: {exc}", url=url)

    return CoverFetchError(f"{type(exc).__name__}: {exc}", url=url)


@contextmanager
def fetcher_error_guard(*, url: str = "") -> Iterator[None]:
    """Context manager to normalize unexpected exceptions from HTTP internals."""
    try:
        yield
    except CoverFetchError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise classify_fetcher_error(exc, url=url) from exc


__all__ = [
    "CoverFetchError",
    "FetchError",
    "FetchTimeoutError",
    "NetworkError",
    "FETCHER_ERRORS",
    "classify_fetcher_error",
    "fetcher_error_guard",
]
