"""HAL initialization and lifecycle management.

Backends are imported only when selected, so an install without easyocr
still works with ``ocr_backend="none"``.
"""

from ..hardware_exceptions import HALInitializationError
from .config import HALConfig, OCRBackend
from .container import HALContainer, OCREngineFactory
from .interfaces import IMouseController, IOCREngine, IScreenCapture


def initialize_hal(config: HALConfig | None = None) -> HALContainer:
    """Initialize HAL components and return container.

    Args:
        config: HAL configuration. If None, uses default config.

    Returns:
        HALContainer with components initialized

    Raises:
        HALInitializationError: If any component fails to initialize

    Example:
        >>> hal = initialize_hal()
        >>> try:
        ...     context = LocatorContext.from_hal(hal)
        ... finally:
        ...     shutdown_hal(hal)
    """
    if config is None:
        config = HALConfig()

    try:
        config.validate()
    except ValueError as e:
        raise HALInitializationError("configuration", str(e)) from e

    try:
        return HALContainer.create_from_config(config)
    except ImportError as e:
        raise HALInitializationError(
            "backend", f"{e}. Make sure required libraries are installed."
        ) from e
    except Exception as e:
        raise HALInitializationError("components", str(e)) from e


def shutdown_hal(container: HALContainer | None) -> None:
    """Shutdown HAL components and release resources.

    Args:
        container: HAL container to shutdown
    """
    if container:
        container.cleanup()


def _create_screen_capture(config: HALConfig) -> IScreenCapture:
    backend = config.capture_backend.lower()

    if backend == "mss":
        from .implementations.mss_capture import MSSScreenCapture

        return MSSScreenCapture(config)

    raise ValueError(f"Unsupported screen capture backend: {backend}")


def _create_mouse_controller(config: HALConfig) -> IMouseController:
    backend = config.input_backend.lower()

    if backend == "pynput":
        from .implementations.pynput_controller import PynputMouseController

        return PynputMouseController(config)

    raise ValueError(f"Unsupported input backend: {backend}")


def _create_ocr_engine_factory(config: HALConfig) -> OCREngineFactory | None:
    backend = config.ocr_backend.lower()

    if backend == OCRBackend.NONE.value:
        return None

    if backend == OCRBackend.EASYOCR.value:

        def build() -> IOCREngine:
            from .implementations.easyocr_engine import EasyOCREngine

            return EasyOCREngine(config)

        return build

    raise ValueError(f"Unsupported OCR backend: {backend}")
