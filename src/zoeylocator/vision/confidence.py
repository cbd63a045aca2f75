"""Confidence scoring for template hits.

Scores are TM_CCOEFF_NORMED maxima, which OpenCV reports in [-1, 1];
:func:`clamp_confidence` maps them into the [0, 1] range callers see.
"""

import math
from typing import Any

import cv2
import numpy as np

from .image_utils import ensure_bgr, to_gray

DEFAULT_RGB_CLAMP = (10, 245)


def clamp_confidence(value: float) -> float:
    """Clamp into [0, 1]; NaN and infinities score 0."""
    if math.isnan(value) or math.isinf(value):
        return 0.0
    return min(max(float(value), 0.0), 1.0)


def clamp_pixels(image: np.ndarray[Any, Any], low: int, high: int) -> np.ndarray[Any, Any]:
    """Truncate values above ``high`` and zero values below ``low``.

    Suppresses saturated-pixel bias before per-channel correlation.
    """
    _, truncated = cv2.threshold(image, high, high, cv2.THRESH_TRUNC)
    _, clamped = cv2.threshold(truncated, low, 0, cv2.THRESH_TOZERO)
    return clamped


def rgb_confidence(
    crop: np.ndarray[Any, Any],
    query: np.ndarray[Any, Any],
    clamp: tuple[int, int] = DEFAULT_RGB_CLAMP,
) -> float:
    """Minimum per-channel correlation between two equally sized colour images.

    Args:
        crop: Region cut from the source at the match location
        query: Query image
        clamp: (low, high) pixel band kept before correlating

    Returns:
        Lowest channel score, or 0.0 when sizes differ
    """
    if crop.shape[:2] != query.shape[:2]:
        return 0.0

    low, high = clamp
    src_channels = cv2.split(clamp_pixels(ensure_bgr(crop), low, high))
    query_channels = cv2.split(clamp_pixels(ensure_bgr(query), low, high))

    min_confidence = 1.0
    for src, search in zip(src_channels, query_channels, strict=True):
        result = cv2.matchTemplate(src, search, cv2.TM_CCOEFF_NORMED)
        _, max_val, _, _ = cv2.minMaxLoc(result)
        min_confidence = min(min_confidence, float(max_val))
    return min_confidence


def ccoeff_confidence(crop: np.ndarray[Any, Any], query: np.ndarray[Any, Any]) -> float:
    """Grayscale TM_CCOEFF_NORMED score of two equally sized images."""
    if crop.shape[:2] != query.shape[:2]:
        return 0.0
    result = cv2.matchTemplate(to_gray(crop), to_gray(query), cv2.TM_CCOEFF_NORMED)
    _, max_val, _, _ = cv2.minMaxLoc(result)
    return float(max_val)
