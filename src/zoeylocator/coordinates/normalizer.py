"""Capture-space to input-space coordinate normalization.

Three coordinate spaces are involved:

1. Capture space: physical pixels, what screenshots and matchers use.
2. Logical space: DPI-scaled pixels some OS APIs report.
3. Input space: what synthetic input expects. Depending on the process's
   DPI awareness this equals either of the other two.

Rather than guess, the scale is detected by comparing a full-screen capture
with the OS-reported screen size::

    scale = capture_size / reported_size

    to_input_space:   x / scale
    to_capture_space: x * scale

On platforms without this ambiguity the normalizer is the identity.
"""

import math
import sys
import threading

from ..hal.config import NormalizationMode
from ..hal.interfaces import IScreenCapture
from ..hardware_exceptions import ScreenCaptureException
from ..logging import get_logger
from ..model import Point, Region

logger = get_logger(__name__)

MIN_SCALE = 0.5
MAX_SCALE = 4.0
UNITY_TOLERANCE = 0.05


def normalize_scale(value: float) -> float:
    """Sanity-bound a detected ratio.

    NaN, infinities and values outside [0.5, 4.0] fall back to 1.0, and
    ratios within 5% of 1.0 snap to exactly 1.0.
    """
    if math.isnan(value) or math.isinf(value):
        return 1.0
    if value < MIN_SCALE or value > MAX_SCALE:
        return 1.0
    if abs(value - 1.0) < UNITY_TOLERANCE:
        return 1.0
    return value


def scale_int(value: int, factor: float) -> int:
    """Scale and round half away from zero; non-positive factors are identity."""
    if factor <= 0:
        return value
    scaled = value * factor
    return int(math.copysign(math.floor(abs(scaled) + 0.5), scaled))


class CoordinateNormalizer:
    """Detects and caches the capture-to-input scale factor.

    Detection runs lazily on first use and is cached for the lifetime of
    the instance; a failed capture is retried on the next call. Call
    :meth:`reset` after a display configuration change.
    Thread-safe: the cache is guarded by its own lock.

    Example:
        normalizer = CoordinateNormalizer(screen_capture)
        x, y = normalizer.to_input_space(match.center.x, match.center.y)
    """

    def __init__(
        self,
        screen_capture: IScreenCapture,
        mode: NormalizationMode | str = NormalizationMode.AUTO,
    ) -> None:
        self.screen_capture = screen_capture
        self.mode = NormalizationMode(mode)
        self._lock = threading.Lock()
        self._scale: tuple[float, float] | None = None

    @property
    def enabled(self) -> bool:
        """Whether scale detection runs at all."""
        if self.mode is NormalizationMode.ALWAYS:
            return True
        if self.mode is NormalizationMode.NEVER:
            return False
        return sys.platform == "win32"

    def scale(self) -> tuple[float, float]:
        """Return the cached (scale_x, scale_y), detecting on first call.

        A failed detection capture yields unity without caching it, so the
        next call detects again.
        """
        with self._lock:
            if self._scale is None:
                if not self.enabled:
                    self._scale = (1.0, 1.0)
                else:
                    detected = self._detect()
                    if detected is None:
                        return (1.0, 1.0)
                    self._scale = detected
            return self._scale

    def reset(self) -> None:
        """Invalidate the cached scale."""
        with self._lock:
            self._scale = None
        logger.debug("coordinate_scale_reset")

    def _detect(self) -> tuple[float, float] | None:
        reported_w, reported_h = self.screen_capture.screen_size()
        if reported_w <= 0 or reported_h <= 0:
            return (1.0, 1.0)

        try:
            image = self.screen_capture.capture_full_screen()
        except ScreenCaptureException as e:
            logger.warning("coordinate_scale_capture_failed", error=str(e), fallback=1.0)
            return None

        capture_w, capture_h = image.size
        if capture_w <= 0 or capture_h <= 0:
            return (1.0, 1.0)

        scale_x = normalize_scale(capture_w / reported_w)
        scale_y = normalize_scale(capture_h / reported_h)
        logger.info(
            "coordinate_scale_detected",
            reported=(reported_w, reported_h),
            captured=(capture_w, capture_h),
            scale=(scale_x, scale_y),
        )
        return (scale_x, scale_y)

    def to_input_space(self, x: int, y: int) -> tuple[int, int]:
        """Convert a capture-space point to input space."""
        sx, sy = self.scale()
        return scale_int(x, 1.0 / sx), scale_int(y, 1.0 / sy)

    def to_capture_space(self, x: int, y: int) -> tuple[int, int]:
        """Convert an input-space point to capture space."""
        sx, sy = self.scale()
        return scale_int(x, sx), scale_int(y, sy)

    def point_to_input_space(self, point: Point) -> Point:
        return Point(*self.to_input_space(point.x, point.y))

    def region_to_input_space(self, region: Region) -> Region:
        """Convert a capture-space region; positive sizes never shrink below 1."""
        sx, sy = self.scale()
        width = scale_int(region.width, 1.0 / sx)
        height = scale_int(region.height, 1.0 / sy)
        if region.width > 0 and width < 1:
            width = 1
        if region.height > 0 and height < 1:
            height = 1
        return Region(scale_int(region.x, 1.0 / sx), scale_int(region.y, 1.0 / sy), width, height)

    def region_to_capture_space(self, region: Region) -> Region:
        """Convert an input-space region to capture space."""
        sx, sy = self.scale()
        return Region(
            scale_int(region.x, sx),
            scale_int(region.y, sy),
            scale_int(region.width, sx),
            scale_int(region.height, sy),
        )

    def physical_screen_size(self) -> tuple[int, int]:
        """Screen size in capture pixels."""
        w, h = self.screen_capture.screen_size()
        sx, sy = self.scale()
        return scale_int(w, sx), scale_int(h, sy)
