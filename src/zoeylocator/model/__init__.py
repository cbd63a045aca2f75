"""Data model for zoeylocator."""

from .geometry import Point, Quad, Region
from .grid import GridPosition
from .match import DEFAULT_MATCH_METHODS, CaptureMeta, MatchMethod, MatchResult
from .options import LocatorOptions
from .text import MatchTier, OCRResult, TextMatch

__all__ = [
    "Point",
    "Quad",
    "Region",
    "GridPosition",
    "MatchMethod",
    "DEFAULT_MATCH_METHODS",
    "MatchResult",
    "CaptureMeta",
    "LocatorOptions",
    "OCRResult",
    "TextMatch",
    "MatchTier",
]
