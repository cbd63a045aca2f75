"""HAL Container for dependency injection.

Holds the platform capabilities the locators depend on, replacing
process-wide singletons with one explicit object per application.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from ..logging import get_logger
from .config import HALConfig
from .interfaces import IMouseController, IOCREngine, IScreenCapture, IWindowManager

logger = get_logger(__name__)

OCREngineFactory = Callable[[], IOCREngine]


@dataclass
class HALContainer:
    """Container for HAL component instances.

    Screen capture and mouse input are created eagerly. The OCR engine is
    expensive to build, so the container only holds a factory; the text
    recognizer invokes it on first use.

    Attributes:
        screen_capture: Screen capture implementation
        mouse_controller: Mouse input implementation
        ocr_engine_factory: Builds the OCR engine, or None when OCR is disabled
        window_manager: Optional window management implementation
        config: HAL configuration used to create these components

    Example:
        >>> from zoeylocator.hal import HALConfig, initialize_hal
        >>> hal = initialize_hal(HALConfig(ocr_backend="none"))
        >>> hal.screen_capture.screen_size()
    """

    screen_capture: IScreenCapture
    mouse_controller: IMouseController
    ocr_engine_factory: OCREngineFactory | None = None
    window_manager: IWindowManager | None = None
    config: HALConfig = field(default_factory=HALConfig)

    @classmethod
    def create_from_config(cls, config: HALConfig) -> "HALContainer":
        """Create HAL container from configuration.

        Args:
            config: HAL configuration specifying which backends to use

        Returns:
            HALContainer with capture and input initialized

        Raises:
            ImportError: If required backend library is not installed
            ValueError: If backend configuration is invalid
        """
        from .initialization import (
            _create_mouse_controller,
            _create_ocr_engine_factory,
            _create_screen_capture,
        )

        return cls(
            screen_capture=_create_screen_capture(config),
            mouse_controller=_create_mouse_controller(config),
            ocr_engine_factory=_create_ocr_engine_factory(config),
            config=config,
        )

    def cleanup(self) -> None:
        """Release capture resources held by the calling thread."""
        self.screen_capture.close()
        logger.debug("hal_container_cleaned_up")
