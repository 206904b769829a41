# coverfinder/core/fetch/__init__.py
from .errors import (
    FETCHER_ERRORS,
    CoverFetchError,
    FetchError,
    FetchTimeoutError,
    NetworkError,
    classify_fetcher_error,
    fetcher_error_guard,
)
from .http_client import DEFAULT_TIMEOUT_S, HttpClient, HttpLike, fetch_text

__all__ = [
    "CoverFetchError",
    "FetchError",
    "FetchTimeoutError",
    "NetworkError",
    "FETCHER_ERRORS",
    "classify_fetcher_error",
    "fetcher_error_guard",
    "HttpClient",
    "HttpLike",
    "fetch_text",
    "DEFAULT_TIMEOUT_S",
]
