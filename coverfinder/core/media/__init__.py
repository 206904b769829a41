# coverfinder/core/media/__init__.py
from .blank_detector import is_blank_image, luma_stats
from .html_finder import cleanup_og_title, extract_detail_paths, extract_meta_content, hosts_for, to_absolute_url
from .screening import BLOCKED_KEYWORDS, CoverScreener, has_blocked_keyword

__all__ = [
    "is_blank_image",
    "luma_stats",
    "extract_detail_paths",
    "extract_meta_content",
    "to_absolute_url",
    "cleanup_og_title",
    "hosts_for",
    "BLOCKED_KEYWORDS",
    "CoverScreener",
    "has_blocked_keyword",
]
