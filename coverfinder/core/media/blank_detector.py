# coverfinder/core/media/blank_detector.py

from __future__ import annotations

import io
import logging

import numpy as np
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

# Placeholder covers are near-white and nearly flat.
BLANK_MEAN_THRESHOLD = 246.0
BLANK_VARIANCE_THRESHOLD = 12.0
SAMPLE_MAX_SIDE = 64


def load_sample(data: bytes, max_side: int = SAMPLE_MAX_SIDE) -> Image.Image:
    """Decode `data` and downsample to at most max_side x max_side RGB."""
    img = Image.open(io.BytesIO(data))
    img = img.convert("RGB")
    img.thumbnail((max_side, max_side), Image.Resampling.BILINEAR)
    return img


def luma_stats(data: bytes) -> tuple[float, float] | None:
    """
    Return (mean, variance) of per-pixel luma, where luma = (R + G + B) / 3,
    or None when the bytes cannot be decoded as an image.
    """
    try:
        img = load_sample(data)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        logger.debug("Image decode failed: %s", e)
        return None

    a: NDArray[np.float64] = np.asarray(img, dtype=np.float64)
    if a.size == 0:
        return None
    luma = a.mean(axis=2)
    mean = float(luma.mean())
    variance = float(luma.var())
    if not np.isfinite(mean) or not np.isfinite(variance):
        return None
    return mean, variance


def is_blank_image(data: bytes) -> bool:
    """
    True when the image looks like a blank/placeholder: mean luma > 246 and
    variance < 12. Undecodable input is reported as not blank.
    """
    if not data:
        return False
    stats = luma_stats(data)
    if stats is None:
        return False
    mean, variance = stats
    return mean > BLANK_MEAN_THRESHOLD and variance < BLANK_VARIANCE_THRESHOLD


__all__ = [
    "BLANK_MEAN_THRESHOLD",
    "BLANK_VARIANCE_THRESHOLD",
    "SAMPLE_MAX_SIDE",
    "load_sample",
    "luma_stats",
    "is_blank_image",
]
