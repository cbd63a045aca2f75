"""Image conversion helpers shared by the matchers.

Matchers operate on OpenCV-style ``numpy`` arrays in BGR order. Capture
backends hand out PIL images, so conversion happens at that boundary.
"""

from typing import Any

import cv2
import numpy as np
from PIL import Image

from ..vision_exceptions import SizeMismatchError


def pil_to_cv2(image: Image.Image) -> np.ndarray[Any, Any]:
    """Convert PIL Image to OpenCV format.

    Args:
        image: PIL Image

    Returns:
        OpenCV image array (BGR format)
    """
    if image.mode != "RGB":
        image = image.convert("RGB")
    np_image = np.array(image)
    return cv2.cvtColor(np_image, cv2.COLOR_RGB2BGR)


def cv2_to_pil(cv_image: np.ndarray[Any, Any]) -> Image.Image:
    """Convert OpenCV image to PIL format.

    Args:
        cv_image: OpenCV image array

    Returns:
        PIL Image
    """
    if cv_image.ndim == 3:
        rgb_image = cv2.cvtColor(cv_image, cv2.COLOR_BGR2RGB)
    else:
        rgb_image = cv_image
    return Image.fromarray(rgb_image)


def ensure_bgr(image: np.ndarray[Any, Any]) -> np.ndarray[Any, Any]:
    """Normalize a grayscale, BGR or BGRA array to 3-channel uint8 BGR."""
    if image.dtype != np.uint8:
        image = np.clip(image, 0, 255).astype(np.uint8)
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    return image


def to_gray(image: np.ndarray[Any, Any]) -> np.ndarray[Any, Any]:
    """Convert to a single-channel image, copying if already gray."""
    if image.ndim == 2:
        return image.copy()
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


def image_size(image: np.ndarray[Any, Any]) -> tuple[int, int]:
    """Return (width, height)."""
    return int(image.shape[1]), int(image.shape[0])


def check_source_larger(query: np.ndarray[Any, Any], source: np.ndarray[Any, Any]) -> None:
    """Raise SizeMismatchError when the query does not fit inside the source."""
    qw, qh = image_size(query)
    sw, sh = image_size(source)
    if qw > sw or qh > sh:
        raise SizeMismatchError((qw, qh), (sw, sh))

