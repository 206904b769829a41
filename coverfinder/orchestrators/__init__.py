# coverfinder/orchestrators/__init__.py
from .cover_orchestrator import CoverResolver, build_default_resolver
from .errors import CodeParseError, CoverNotFoundError, CoverResolutionError

__all__ = [
    "CoverResolver",
    "build_default_resolver",
    "CoverResolutionError",
    "CodeParseError",
    "CoverNotFoundError",
]
