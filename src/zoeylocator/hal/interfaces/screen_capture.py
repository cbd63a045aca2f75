"""Screen capture interface definition."""

from abc import ABC, abstractmethod

from PIL import Image


class IScreenCapture(ABC):
    """Interface for screen capture operations.

    Captures are always in physical (capture) pixels. ``screen_size`` reports
    whatever the OS considers the screen size, which may be DPI-scaled
    logical pixels; the coordinate normalizer reconciles the two.
    """

    @abstractmethod
    def capture_full_screen(self) -> Image.Image:
        """Capture the primary screen.

        Returns:
            PIL Image of screenshot

        Raises:
            ScreenCaptureException: If capture fails
        """
        pass

    @abstractmethod
    def capture_region(self, x: int, y: int, width: int, height: int) -> Image.Image:
        """Capture specific region.

        Args:
            x: X coordinate of top-left corner
            y: Y coordinate of top-left corner
            width: Region width in pixels
            height: Region height in pixels

        Returns:
            PIL Image of region

        Raises:
            ScreenCaptureException: If capture fails
        """
        pass

    @abstractmethod
    def screen_size(self) -> tuple[int, int]:
        """Get the OS-reported screen size.

        Returns:
            Tuple of (width, height)
        """
        pass

    def close(self) -> None:
        """Release capture resources."""
        return None
