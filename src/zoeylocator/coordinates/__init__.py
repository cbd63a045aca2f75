"""Coordinate-space normalization."""

from .capture_meta import adjust_match_result, adjust_point, build_capture_meta
from .normalizer import CoordinateNormalizer, normalize_scale, scale_int

__all__ = [
    "CoordinateNormalizer",
    "normalize_scale",
    "scale_int",
    "build_capture_meta",
    "adjust_point",
    "adjust_match_result",
]
