# coverfinder/core/cache/__init__.py
from .cover_cache import CACHE_PREFIX, DEFAULT_TTL, CoverCache
from .stores import CacheStore, JsonFileCacheStore, MemoryCacheStore

__all__ = [
    "CACHE_PREFIX",
    "DEFAULT_TTL",
    "CoverCache",
    "CacheStore",
    "MemoryCacheStore",
    "JsonFileCacheStore",
]
