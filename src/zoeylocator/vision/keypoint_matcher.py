"""Feature-point matching (AKAZE, BRISK, ORB, KAZE, SIFT).

Keypoints and descriptors are detected on both images and matched with a
brute-force KNN search (k=2) under the norm suited to the descriptor.
Correspondences surviving Lowe's ratio test are turned into geometry:

- 4 or more: RANSAC homography, confidence ``(1 + inlier_ratio) / 2``
- 2 or 3: query-sized box on their centroid, distance-based confidence
- fewer than 2: no match

The query is tried at every configured scale candidate against one set of
source keypoints; the most confident validated fit wins.
"""

import time
from collections.abc import Callable, Sequence
from typing import Any

import cv2
import numpy as np

from ..logging import get_logger
from ..model import MatchMethod, MatchResult
from ..vision_exceptions import DegenerateGeometryError
from .base import BaseMatcher
from .homography import GeometryFit, HomographyParams, fit_fixed_box, fit_homography
from .image_utils import check_source_larger, image_size, to_gray

logger = get_logger(__name__)

# Scaled queries narrower than this carry too few keypoints to fit.
MIN_SCALED_SIDE = 8

# Detector factory and descriptor norm per method. AKAZE's default MLDB
# descriptor is binary, so it is matched under Hamming like BRISK and ORB.
FEATURE_DETECTORS: dict[MatchMethod, tuple[Callable[[], Any], int]] = {
    MatchMethod.AKAZE: (lambda: cv2.AKAZE_create(), cv2.NORM_HAMMING),
    MatchMethod.BRISK: (lambda: cv2.BRISK_create(), cv2.NORM_HAMMING),
    MatchMethod.ORB: (lambda: cv2.ORB_create(), cv2.NORM_HAMMING),
    MatchMethod.KAZE: (lambda: cv2.KAZE_create(), cv2.NORM_L1),
    MatchMethod.SIFT: (lambda: cv2.SIFT_create(), cv2.NORM_L2),
}


class FeaturePointMatcher(BaseMatcher):
    """Keypoint correspondence matcher for one detector kind."""

    def __init__(
        self,
        method: MatchMethod,
        threshold: float = 0.8,
        ratio_test: float = 0.75,
        params: HomographyParams | None = None,
        scale_candidates: Sequence[float] = (1.0,),
    ) -> None:
        """Initialize feature matcher.

        Args:
            method: One of the feature-based MatchMethod members
            threshold: Minimum confidence (0.0 to 1.0)
            ratio_test: Nearest/second-nearest distance ratio to keep a match
            params: RANSAC and geometric validation tunables
            scale_candidates: Query rescale factors, tried in order
        """
        if method not in FEATURE_DETECTORS:
            raise ValueError(f"{method} is not a feature-point method")
        super().__init__(threshold)
        self.method = method
        self.ratio_test = ratio_test
        self.params = params or HomographyParams()
        self.scale_candidates = tuple(scale_candidates) or (1.0,)
        factory, self.norm = FEATURE_DETECTORS[method]
        self._detector = factory()

    def find_best(
        self, query: np.ndarray[Any, Any], source: np.ndarray[Any, Any]
    ) -> MatchResult | None:
        start = time.perf_counter()
        check_source_larger(query, source)

        try:
            fit = self._match(query, source)
        except cv2.error as e:
            logger.debug("feature_opencv_error", method=self.method.value, error=str(e))
            return None

        if fit is None:
            return None

        confidence = min(max(fit.confidence, 0.0), 1.0)
        if confidence < self.threshold:
            logger.debug(
                "feature_below_threshold",
                method=self.method.value,
                confidence=confidence,
                threshold=self.threshold,
            )
            return None

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        logger.debug(
            "feature_found",
            method=self.method.value,
            center=(fit.center.x, fit.center.y),
            confidence=confidence,
            elapsed_ms=elapsed_ms,
        )
        return MatchResult(
            center=fit.center,
            quad=fit.quad,
            confidence=confidence,
            elapsed_ms=elapsed_ms,
            method=self.method,
        )

    def _match(
        self, query: np.ndarray[Any, Any], source: np.ndarray[Any, Any]
    ) -> GeometryFit | None:
        kp_source, desc_source = self._detector.detectAndCompute(to_gray(source), None)
        if len(kp_source) < 2 or desc_source is None:
            logger.debug("feature_too_few_keypoints", method=self.method.value, source=len(kp_source))
            return None

        source_size = image_size(source)
        best: GeometryFit | None = None
        for scale in self.scale_candidates:
            scaled = self._rescale(query, scale, source_size)
            if scaled is None:
                continue
            try:
                fit = self._fit(scaled, kp_source, desc_source, source_size)
            except DegenerateGeometryError as e:
                logger.debug(
                    "feature_geometry_rejected",
                    method=self.method.value,
                    scale=scale,
                    reason=e.message,
                )
                continue
            except cv2.error as e:
                logger.debug(
                    "feature_opencv_error", method=self.method.value, scale=scale, error=str(e)
                )
                continue
            if fit is not None and (best is None or fit.confidence > best.confidence):
                best = fit
        return best

    def _fit(
        self,
        query: np.ndarray[Any, Any],
        kp_source: Any,
        desc_source: np.ndarray[Any, Any],
        source_size: tuple[int, int],
    ) -> GeometryFit | None:
        kp_query, desc_query = self._detector.detectAndCompute(to_gray(query), None)
        if len(kp_query) < 2 or desc_query is None:
            return None

        matcher = cv2.BFMatcher(self.norm)
        knn = matcher.knnMatch(desc_query, desc_source, k=2)
        good = self._ratio_filter(knn)

        logger.debug(
            "feature_correspondences",
            method=self.method.value,
            keypoints=(len(kp_query), len(kp_source)),
            good=len(good),
        )
        if len(good) < 2:
            return None

        query_pts = np.float32([kp_query[m.queryIdx].pt for m in good])
        source_pts = np.float32([kp_source[m.trainIdx].pt for m in good])
        query_size = image_size(query)

        if len(good) >= 4:
            return fit_homography(query_pts, source_pts, query_size, source_size, self.params)
        return fit_fixed_box(
            source_pts, [m.distance for m in good], query_size, source_size, self.params
        )

    @staticmethod
    def _rescale(
        query: np.ndarray[Any, Any], scale: float, source_size: tuple[int, int]
    ) -> np.ndarray[Any, Any] | None:
        """Resize the query, or None when it would vanish or outgrow the source."""
        if scale == 1.0:
            return query
        qw, qh = image_size(query)
        width, height = round(qw * scale), round(qh * scale)
        if min(width, height) < MIN_SCALED_SIDE or width > source_size[0] or height > source_size[1]:
            return None
        interpolation = cv2.INTER_AREA if scale < 1.0 else cv2.INTER_LINEAR
        return cv2.resize(query, (width, height), interpolation=interpolation)

    def _ratio_filter(self, knn: Any) -> list[Any]:
        good = [
            pair[0]
            for pair in knn
            if len(pair) >= 2 and pair[0].distance < self.ratio_test * pair[1].distance
        ]
        good.sort(key=lambda m: m.distance)
        return good

    def __repr__(self) -> str:
        return f"FeaturePointMatcher(method={self.method.value}, threshold={self.threshold})"
