# tests/__init__.py
"""
Expose common test utilities so tests can import directly:
    from tests import FakeHttp, make_result
"""

from .utils import FakeHttp, StaticProvider, make_result

__all__ = ["FakeHttp", "StaticProvider", "make_result"]
