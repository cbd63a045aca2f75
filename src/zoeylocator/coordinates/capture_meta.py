"""Mapping matcher output back to full-screen capture space.

A capture handed to the matchers may be a region crop and, on some
platforms, may not have the pixel size the screen geometry predicts.
CaptureMeta records both so that a match found at image pixel ``v`` maps
to ``round(v / scale) + offset``.
"""

from ..model import CaptureMeta, MatchResult, Point, Region
from .normalizer import scale_int


def build_capture_meta(
    image_size: tuple[int, int],
    expected_size: tuple[int, int],
    region: Region | None = None,
) -> CaptureMeta:
    """Describe a capture relative to full-screen capture space.

    Args:
        image_size: (width, height) of the captured image
        expected_size: Physical screen size, or the region size for region captures
        region: Captured region, None for a full-screen capture
    """
    image_w, image_h = image_size
    expected_w, expected_h = expected_size
    scale_x = image_w / expected_w if expected_w > 0 and image_w > 0 else 1.0
    scale_y = image_h / expected_h if expected_h > 0 and image_h > 0 else 1.0
    offset_x, offset_y = (region.x, region.y) if region is not None else (0, 0)
    return CaptureMeta(scale_x=scale_x, scale_y=scale_y, offset_x=offset_x, offset_y=offset_y)


def adjust_point(point: Point, meta: CaptureMeta) -> Point:
    """Map an image-pixel point into full-screen capture space."""
    return Point(
        scale_int(point.x, 1.0 / meta.scale_x) + meta.offset_x,
        scale_int(point.y, 1.0 / meta.scale_y) + meta.offset_y,
    )


def adjust_match_result(result: MatchResult, meta: CaptureMeta) -> MatchResult:
    """Map a match's centre and quad into full-screen capture space."""
    if meta == CaptureMeta():
        return result
    return MatchResult(
        center=adjust_point(result.center, meta),
        quad=result.quad.map_points(lambda p: adjust_point(p, meta)),
        confidence=result.confidence,
        elapsed_ms=result.elapsed_ms,
        method=result.method,
    )
