"""Fixed-scale template matching using OpenCV normalized cross-correlation."""

import time
from typing import Any

import cv2
import numpy as np

from ..logging import get_logger
from ..model import MatchMethod, MatchResult, Point, Quad
from .base import BaseMatcher
from .confidence import DEFAULT_RGB_CLAMP, clamp_confidence, rgb_confidence
from .image_utils import check_source_larger, to_gray

logger = get_logger(__name__)

MAX_RESULT_COUNT = 10


class ExactTemplateMatcher(BaseMatcher):
    """Grayscale TM_CCOEFF_NORMED search at the query's native size.

    Fastest strategy; only succeeds when query and capture share a scale.
    """

    method = MatchMethod.TEMPLATE

    def __init__(
        self,
        threshold: float = 0.8,
        rgb_validate: bool = False,
        rgb_clamp: tuple[int, int] = DEFAULT_RGB_CLAMP,
    ) -> None:
        """Initialize template matcher.

        Args:
            threshold: Minimum confidence (0.0 to 1.0)
            rgb_validate: Re-score hits by the weakest colour channel
            rgb_clamp: Pixel band kept for RGB re-scoring
        """
        super().__init__(threshold)
        self.rgb_validate = rgb_validate
        self.rgb_clamp = rgb_clamp

    def find_best(
        self, query: np.ndarray[Any, Any], source: np.ndarray[Any, Any]
    ) -> MatchResult | None:
        start = time.perf_counter()
        check_source_larger(query, source)

        result = self._result_matrix(query, source)
        _, max_val, _, max_loc = cv2.minMaxLoc(result)

        h, w = query.shape[:2]
        confidence = self._confidence(query, source, max_loc, max_val)
        if confidence < self.threshold:
            logger.debug("template_below_threshold", confidence=confidence, threshold=self.threshold)
            return None

        match = self._build_result(max_loc, w, h, confidence, start)
        logger.debug("template_found", location=max_loc, confidence=confidence)
        return match

    def find_all(
        self,
        query: np.ndarray[Any, Any],
        source: np.ndarray[Any, Any],
        max_results: int = MAX_RESULT_COUNT,
    ) -> list[MatchResult]:
        """Find up to ``max_results`` occurrences, best first.

        After each hit the correlation map is blanked over a query-sized
        window centred on the hit location before searching again.
        """
        start = time.perf_counter()
        check_source_larger(query, source)

        result = self._result_matrix(query, source)
        h, w = query.shape[:2]
        matches: list[MatchResult] = []

        while len(matches) < max_results:
            _, max_val, _, max_loc = cv2.minMaxLoc(result)
            confidence = self._confidence(query, source, max_loc, max_val)
            if confidence < self.threshold:
                break

            matches.append(self._build_result(max_loc, w, h, confidence, start))

            x, y = max_loc
            cv2.rectangle(
                result,
                (x - w // 2, y - h // 2),
                (x + w // 2, y + h // 2),
                color=0,
                thickness=-1,
            )

        logger.debug("templates_found", count=len(matches), threshold=self.threshold)
        return matches

    def _result_matrix(
        self, query: np.ndarray[Any, Any], source: np.ndarray[Any, Any]
    ) -> np.ndarray[Any, Any]:
        return cv2.matchTemplate(to_gray(source), to_gray(query), cv2.TM_CCOEFF_NORMED)

    def _confidence(
        self,
        query: np.ndarray[Any, Any],
        source: np.ndarray[Any, Any],
        max_loc: tuple[int, int],
        max_val: float,
    ) -> float:
        if self.rgb_validate:
            h, w = query.shape[:2]
            x, y = max_loc
            return clamp_confidence(rgb_confidence(source[y : y + h, x : x + w], query, self.rgb_clamp))
        return clamp_confidence(max_val)

    def _build_result(
        self, top_left: tuple[int, int], w: int, h: int, confidence: float, start: float
    ) -> MatchResult:
        x, y = top_left
        return MatchResult(
            center=Point(x + w // 2, y + h // 2),
            quad=Quad.from_rect(x, y, w, h),
            confidence=confidence,
            elapsed_ms=(time.perf_counter() - start) * 1000.0,
            method=self.method,
        )
