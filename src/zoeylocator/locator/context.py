"""Explicit engine object owning the locators' shared state."""

from dataclasses import dataclass, field

from ..coordinates import CoordinateNormalizer
from ..hal import HALContainer, NormalizationMode
from ..hal.container import OCREngineFactory
from ..hal.interfaces import IMouseController, IScreenCapture
from ..logging import get_logger
from ..ocr import TextRecognizer

logger = get_logger(__name__)


@dataclass
class LocatorContext:
    """Platform capabilities plus the two pieces of shared mutable state.

    The coordinate-scale cache (inside ``normalizer``) and the OCR engine
    handle (inside ``recognizer``) each carry their own lock, so one context
    may serve concurrent locator calls. Independent contexts share nothing.

    Attributes:
        screen_capture: Screen capture capability
        mouse: Mouse input capability
        normalizer: Capture-to-input coordinate normalizer
        recognizer: Lazily constructed OCR engine handle
    """

    screen_capture: IScreenCapture
    mouse: IMouseController
    normalizer: CoordinateNormalizer
    recognizer: TextRecognizer = field(default_factory=lambda: TextRecognizer(None))

    @classmethod
    def create(
        cls,
        screen_capture: IScreenCapture,
        mouse: IMouseController,
        ocr_engine_factory: OCREngineFactory | None = None,
        normalization_mode: NormalizationMode | str = NormalizationMode.AUTO,
    ) -> "LocatorContext":
        """Build a context from individual capabilities."""
        return cls(
            screen_capture=screen_capture,
            mouse=mouse,
            normalizer=CoordinateNormalizer(screen_capture, normalization_mode),
            recognizer=TextRecognizer(ocr_engine_factory),
        )

    @classmethod
    def from_hal(cls, hal: HALContainer) -> "LocatorContext":
        """Build a context from an initialized HAL container."""
        return cls.create(
            hal.screen_capture,
            hal.mouse_controller,
            ocr_engine_factory=hal.ocr_engine_factory,
            normalization_mode=hal.config.normalization_mode,
        )

    def reset_display(self) -> None:
        """Invalidate the coordinate-scale cache after a display change."""
        self.normalizer.reset()
        logger.info("display_reset")

    def close(self) -> None:
        """Release the OCR engine."""
        self.recognizer.close()

    def __enter__(self) -> "LocatorContext":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
