"""MSS-based screen capture implementation."""

import sys
import threading

import mss
from mss.base import MSSBase
from PIL import Image

from ...hardware_exceptions import ScreenCaptureException, hal_error_context
from ...logging import get_logger
from ..config import HALConfig
from ..interfaces.screen_capture import IScreenCapture

logger = get_logger(__name__)


class MSSScreenCapture(IScreenCapture):
    """Fast screen capture implementation using MSS.

    Captures the primary monitor. On Windows, importing mss makes the
    process DPI aware, so captures are in physical pixels while
    ``screen_size`` asks the OS directly.
    """

    def __init__(self, config: HALConfig | None = None) -> None:
        """Initialize MSS screen capture.

        Args:
            config: HAL configuration
        """
        self.config = config or HALConfig()
        self._thread_local = threading.local()
        logger.info("mss_capture_initialized")

    @property
    def sct(self) -> MSSBase:
        """Get or create thread-local mss instance.

        Each thread gets its own mss instance; Windows GDI handles are
        thread-affine.
        """
        if not hasattr(self._thread_local, "sct"):
            self._thread_local.sct = mss.mss()
            logger.debug("mss_instance_created", thread_id=threading.current_thread().ident)
        return self._thread_local.sct

    def capture_full_screen(self) -> Image.Image:
        try:
            sct_img = self.sct.grab(self.sct.monitors[1])
        except Exception as e:
            raise ScreenCaptureException(str(e), monitor=1) from e

        image = Image.frombytes("RGB", (sct_img.width, sct_img.height), sct_img.bgra, "raw", "BGRX")
        logger.debug("screen_captured", size=(image.width, image.height))
        return image

    def capture_region(self, x: int, y: int, width: int, height: int) -> Image.Image:
        if width <= 0 or height <= 0:
            raise ScreenCaptureException(f"invalid region size {width}x{height}")

        primary = self.sct.monitors[1]
        region = {
            "left": primary["left"] + x,
            "top": primary["top"] + y,
            "width": width,
            "height": height,
        }
        try:
            sct_img = self.sct.grab(region)
        except Exception as e:
            raise ScreenCaptureException(str(e), region=(x, y, width, height)) from e

        image = Image.frombytes("RGB", (sct_img.width, sct_img.height), sct_img.bgra, "raw", "BGRX")
        logger.debug("region_captured", region=(x, y, width, height))
        return image

    def screen_size(self) -> tuple[int, int]:
        with hal_error_context("screen_size", platform=sys.platform):
            if sys.platform == "win32":
                import ctypes

                user32 = ctypes.windll.user32
                return int(user32.GetSystemMetrics(0)), int(user32.GetSystemMetrics(1))

            primary = self.sct.monitors[1]
            return int(primary["width"]), int(primary["height"])

    def close(self) -> None:
        """Close the calling thread's mss instance."""
        sct = getattr(self._thread_local, "sct", None)
        if sct is not None:
            sct.close()
            del self._thread_local.sct
        logger.debug("mss_capture_closed")

    def __enter__(self) -> "MSSScreenCapture":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
