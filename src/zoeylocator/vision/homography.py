"""Homography estimation and geometric validation for feature matches.

Turns query/source point correspondences into a quadrilateral in source
coordinates plus a confidence score. Every geometric failure raises
:class:`DegenerateGeometryError`, which feature matchers catch and report
as "no match".
"""

from dataclasses import dataclass
from typing import Any

import cv2
import numpy as np

from ..config import LocatorSettings
from ..model import Point, Quad
from ..vision_exceptions import DegenerateGeometryError

DISTANCE_SCALE = 100.0


@dataclass(frozen=True)
class HomographyParams:
    """RANSAC and validation tunables."""

    reproj_threshold: float = 5.0
    max_iters: int = 2000
    confidence: float = 0.995
    min_inlier_count: int = 4
    min_inlier_rate: float = 0.3
    corner_tolerance_px: float = 8.0
    corner_tolerance_ratio: float = 0.02

    @classmethod
    def from_settings(cls, settings: LocatorSettings) -> "HomographyParams":
        return cls(
            reproj_threshold=settings.ransac_reproj_threshold,
            max_iters=settings.ransac_max_iters,
            confidence=settings.ransac_confidence,
            min_inlier_count=settings.min_inlier_count,
            min_inlier_rate=settings.min_inlier_rate,
            corner_tolerance_px=settings.corner_tolerance_px,
            corner_tolerance_ratio=settings.corner_tolerance_ratio,
        )


@dataclass(frozen=True)
class GeometryFit:
    """Validated match geometry in source pixel coordinates."""

    center: Point
    quad: Quad
    confidence: float


def fit_homography(
    query_pts: np.ndarray[Any, Any],
    source_pts: np.ndarray[Any, Any],
    query_size: tuple[int, int],
    source_size: tuple[int, int],
    params: HomographyParams,
) -> GeometryFit:
    """Fit a RANSAC homography and project the query corners through it.

    Confidence is ``(1 + inlier_ratio) / 2``.

    Args:
        query_pts: Nx2 float32 points in the query image
        source_pts: Nx2 float32 points in the source image (N >= 4)
        query_size: Query (width, height)
        source_size: Source (width, height)
        params: RANSAC and validation tunables

    Raises:
        DegenerateGeometryError: On a singular fit, too few inliers or a bad quad
    """
    count = len(query_pts)
    if count < 4:
        raise DegenerateGeometryError("homography needs at least 4 correspondences", count=count)

    H, mask = cv2.findHomography(
        query_pts.reshape(-1, 1, 2),
        source_pts.reshape(-1, 1, 2),
        cv2.RANSAC,
        params.reproj_threshold,
        maxIters=params.max_iters,
        confidence=params.confidence,
    )
    if H is None or H.shape != (3, 3) or not np.all(np.isfinite(H)):
        raise DegenerateGeometryError("no homography found", count=count)

    inliers = int(mask.sum()) if mask is not None else 0
    inlier_rate = inliers / count
    if inliers < params.min_inlier_count or inlier_rate < params.min_inlier_rate:
        raise DegenerateGeometryError(
            "insufficient inliers", inliers=inliers, count=count, rate=inlier_rate
        )

    w, h = query_size
    corners = np.float32([[0, 0], [w, 0], [w, h], [0, h]]).reshape(-1, 1, 2)
    projected = cv2.perspectiveTransform(corners, H).reshape(-1, 2)

    quad = validate_corners(projected, source_size, params)
    tl, br = projected[0], projected[2]
    center = Point(int((tl[0] + br[0]) / 2), int((tl[1] + br[1]) / 2))
    return GeometryFit(center=center, quad=quad, confidence=(1.0 + inlier_rate) / 2.0)


def fit_fixed_box(
    source_pts: np.ndarray[Any, Any],
    distances: list[float],
    query_size: tuple[int, int],
    source_size: tuple[int, int],
    params: HomographyParams,
) -> GeometryFit:
    """Place a query-sized box on the centroid of two or three correspondences.

    Confidence comes from the mean descriptor distance:
    ``(1 + max(0, 1 - mean / 100)) / 2``.
    """
    if len(source_pts) < 2:
        raise DegenerateGeometryError("need at least 2 correspondences", count=len(source_pts))

    cx, cy = source_pts.mean(axis=0)
    half_w, half_h = query_size[0] / 2.0, query_size[1] / 2.0
    corners = np.float32(
        [
            [cx - half_w, cy - half_h],
            [cx + half_w, cy - half_h],
            [cx + half_w, cy + half_h],
            [cx - half_w, cy + half_h],
        ]
    )
    quad = validate_corners(corners, source_size, params)
    return GeometryFit(
        center=Point(int(cx), int(cy)),
        quad=quad,
        confidence=distance_confidence(distances),
    )


def distance_confidence(distances: list[float]) -> float:
    if not distances:
        return 0.0
    mean = sum(distances) / len(distances)
    return (1.0 + max(0.0, 1.0 - mean / DISTANCE_SCALE)) / 2.0


def corner_tolerance(dimension: int, params: HomographyParams) -> float:
    """Allowed overshoot past a source edge: ``max(px, ratio * dimension)``."""
    return max(params.corner_tolerance_px, params.corner_tolerance_ratio * dimension)


def validate_corners(
    corners: np.ndarray[Any, Any], source_size: tuple[int, int], params: HomographyParams
) -> Quad:
    """Check projected corners and convert them to an integer Quad.

    Corners are ordered top-left, top-right, bottom-right, bottom-left.

    Raises:
        DegenerateGeometryError: On NaN/Inf, out-of-bounds corners or
            a polygon area below one square pixel
    """
    if not np.all(np.isfinite(corners)):
        raise DegenerateGeometryError("non-finite corner coordinates")

    width, height = source_size
    tol_x = corner_tolerance(width, params)
    tol_y = corner_tolerance(height, params)
    for x, y in corners:
        if x < -tol_x or x > width + tol_x or y < -tol_y or y > height + tol_y:
            raise DegenerateGeometryError(
                "corner outside source bounds", corner=(float(x), float(y)), source=source_size
            )

    quad = Quad(*(Point(int(x), int(y)) for x, y in corners))
    area = quad.area()
    if area < 1.0:
        raise DegenerateGeometryError("polygon area below 1px", area=area)
    return quad
