"""Multi-scale template matching.

Handles an unknown scale ratio between query and capture, e.g. templates
recorded at 100% DPI replayed on a 150% display, or 1080p versus 4K.

The source is downsampled so its longest side is at most ``scale_max``
pixels. The query is then resized so that its dominant dimension covers
``ratio`` of the source's, for ratio in [0.01, 0.99] stepping by
``scale_step``. The best correlation is mapped back to original-resolution
coordinates and re-scored on the original-resolution crop so that resize
artefacts cannot inflate the reported confidence.
"""

import time
from dataclasses import dataclass
from typing import Any

import cv2
import numpy as np

from ..logging import get_logger
from ..model import MatchMethod, MatchResult, Point, Quad
from .base import BaseMatcher
from .confidence import DEFAULT_RGB_CLAMP, ccoeff_confidence, clamp_confidence, rgb_confidence
from .image_utils import check_source_larger, to_gray

logger = get_logger(__name__)

RATIO_MIN = 0.01
RATIO_MAX = 0.99
MIN_TEMPLATE_SIDE = 10


@dataclass
class _ScaleCandidate:
    ratio: float
    score: float
    location: tuple[int, int]
    width: int
    height: int


class MultiScaleTemplateMatcher(BaseMatcher):
    """Template search across a sweep of query scales."""

    method = MatchMethod.MULTISCALE_TEMPLATE

    def __init__(
        self,
        threshold: float = 0.8,
        rgb_validate: bool = False,
        scale_max: int = 800,
        scale_step: float = 0.005,
        deadline_s: float = 3.0,
        rgb_clamp: tuple[int, int] = DEFAULT_RGB_CLAMP,
    ) -> None:
        """Initialize multi-scale matcher.

        Args:
            threshold: Minimum confidence (0.0 to 1.0)
            rgb_validate: Score the final crop by its weakest colour channel
            scale_max: Longest source side used while searching
            scale_step: Ratio increment between attempts
            deadline_s: Soft deadline; once exceeded a passing best result is returned
            rgb_clamp: Pixel band kept for RGB scoring
        """
        super().__init__(threshold)
        self.rgb_validate = rgb_validate
        self.scale_max = scale_max
        self.scale_step = scale_step
        self.deadline_s = deadline_s
        self.rgb_clamp = rgb_clamp

    def find_best(
        self, query: np.ndarray[Any, Any], source: np.ndarray[Any, Any]
    ) -> MatchResult | None:
        start = time.perf_counter()
        check_source_larger(query, source)

        source_gray = to_gray(source)
        query_gray = to_gray(query)

        src_h, src_w = source_gray.shape[:2]
        sr = min(self.scale_max / max(src_h, src_w), 1.0)
        if sr < 1.0:
            scaled_source = cv2.resize(
                source_gray,
                (max(int(src_w * sr), 1), max(int(src_h * sr), 1)),
                interpolation=cv2.INTER_LINEAR,
            )
        else:
            scaled_source = source_gray

        found = self._search(scaled_source, query_gray, query, source, sr, start)
        if found is None:
            logger.debug("multiscale_no_candidate")
            return None

        confidence, (x, y), w, h = found
        if confidence < self.threshold:
            logger.debug(
                "multiscale_below_threshold", confidence=confidence, threshold=self.threshold
            )
            return None

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        logger.debug(
            "multiscale_found", location=(x, y), size=(w, h), confidence=confidence, elapsed_ms=elapsed_ms
        )
        return MatchResult(
            center=Point(x + w // 2, y + h // 2),
            quad=Quad.from_rect(x, y, w, h),
            confidence=confidence,
            elapsed_ms=elapsed_ms,
            method=self.method,
        )

    def _search(
        self,
        scaled_source: np.ndarray[Any, Any],
        query_gray: np.ndarray[Any, Any],
        query: np.ndarray[Any, Any],
        source: np.ndarray[Any, Any],
        sr: float,
        start: float,
    ) -> tuple[float, tuple[int, int], int, int] | None:
        src_h, src_w = scaled_source.shape[:2]
        search_h, search_w = query_gray.shape[:2]
        height_dominant = search_h / src_h >= search_w / src_w

        best: _ScaleCandidate | None = None
        steps = int(round((RATIO_MAX - RATIO_MIN) / self.scale_step))

        for i in range(steps + 1):
            ratio = RATIO_MIN + i * self.scale_step
            if height_dominant:
                tr = src_h * ratio / search_h
            else:
                tr = src_w * ratio / search_w

            new_w = max(int(search_w * tr), 1)
            new_h = max(int(search_h * tr), 1)
            if new_w < MIN_TEMPLATE_SIDE or new_h < MIN_TEMPLATE_SIDE:
                continue
            if new_w > src_w or new_h > src_h:
                continue

            scaled_query = cv2.resize(query_gray, (new_w, new_h), interpolation=cv2.INTER_LINEAR)
            result = cv2.matchTemplate(scaled_source, scaled_query, cv2.TM_CCOEFF_NORMED)
            _, max_val, _, max_loc = cv2.minMaxLoc(result)

            if best is None or max_val > best.score:
                best = _ScaleCandidate(ratio, float(max_val), max_loc, new_w, new_h)

            if time.perf_counter() - start > self.deadline_s and best.score >= self.threshold:
                loc, w, h = self._original_size(best, sr)
                confidence = self._crop_confidence(query, source, loc, w, h)
                if confidence >= self.threshold:
                    logger.debug("multiscale_deadline_exit", ratio=best.ratio, confidence=confidence)
                    return confidence, loc, w, h

        if best is None:
            return None

        loc, w, h = self._original_size(best, sr)
        return self._crop_confidence(query, source, loc, w, h), loc, w, h

    @staticmethod
    def _original_size(candidate: _ScaleCandidate, sr: float) -> tuple[tuple[int, int], int, int]:
        x, y = candidate.location
        return (int(x / sr), int(y / sr)), int(candidate.width / sr), int(candidate.height / sr)

    def _crop_confidence(
        self,
        query: np.ndarray[Any, Any],
        source: np.ndarray[Any, Any],
        loc: tuple[int, int],
        w: int,
        h: int,
    ) -> float:
        x, y = loc
        src_h, src_w = source.shape[:2]
        if x < 0 or y < 0 or w <= 0 or h <= 0 or x + w > src_w or y + h > src_h:
            return 0.0

        q_h, q_w = query.shape[:2]
        resized = cv2.resize(source[y : y + h, x : x + w], (q_w, q_h), interpolation=cv2.INTER_LINEAR)
        if self.rgb_validate:
            return clamp_confidence(rgb_confidence(resized, query, self.rgb_clamp))
        return clamp_confidence(ccoeff_confidence(resized, query))
