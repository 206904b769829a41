# tests/conftest.py
from __future__ import annotations

import pytest

from coverfinder.core.cache import CoverCache, MemoryCacheStore
from coverfinder.core.media import CoverScreener
from tests.utils import FakeClock, FakeHttp, checkerboard_png, png_bytes


# -------- Environment isolation --------
@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in (
        "COVERFINDER_API_ID",
        "COVERFINDER_AFFILIATE_ID",
        "COVERFINDER_TIMEOUT_S",
        "COVERFINDER_CACHE_TTL_DAYS",
        "COVERFINDER_BYPASS_PREFIXES",
    ):
        monkeypatch.delenv(key, raising=False)
    yield


# -------- Fakes --------
@pytest.fixture
def fake_http_factory():
    """
    Callable factory for FakeHttp.

    Usage:
        http = fake_http_factory(pages={...}, existing={...})
    """

    def _factory(**kwargs) -> FakeHttp:
        return FakeHttp(**kwargs)

    return _factory


@pytest.fixture
def fake_http() -> FakeHttp:
    return FakeHttp()


@pytest.fixture
def screener_for():
    """Build a CoverScreener over a given fake."""

    def _factory(http: FakeHttp) -> CoverScreener:
        return CoverScreener(http)

    return _factory


# -------- Cache --------
@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_store() -> MemoryCacheStore:
    return MemoryCacheStore()


@pytest.fixture
def cover_cache(memory_store: MemoryCacheStore, clock: FakeClock) -> CoverCache:
    return CoverCache(memory_store, clock=clock)


# -------- Images --------
@pytest.fixture
def white_png() -> bytes:
    return png_bytes(64, 64, (255, 255, 255))


@pytest.fixture
def photo_png() -> bytes:
    return checkerboard_png(64, 64)


# -------- Pytest markers --------
def pytest_configure(config):
    config.addinivalue_line("markers", "integration: marks integration tests")
