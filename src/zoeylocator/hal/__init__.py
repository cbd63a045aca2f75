"""Hardware Abstraction Layer (HAL).

Platform capabilities consumed by the locators: screen capture, mouse
input, OCR and window management. The matching core depends only on the
interfaces; default implementations use mss, pynput and easyocr.

Usage:
    from zoeylocator.hal import initialize_hal, shutdown_hal

    hal = initialize_hal()
    try:
        image = hal.screen_capture.capture_full_screen()
    finally:
        shutdown_hal(hal)
"""

from .config import HALConfig, NormalizationMode
from .container import HALContainer
from .initialization import initialize_hal, shutdown_hal
from .interfaces import (
    IMouseController,
    IOCREngine,
    IScreenCapture,
    IWindowManager,
    MouseButton,
    Window,
)

__all__ = [
    "HALConfig",
    "NormalizationMode",
    "HALContainer",
    "initialize_hal",
    "shutdown_hal",
    "IScreenCapture",
    "IMouseController",
    "MouseButton",
    "IOCREngine",
    "IWindowManager",
    "Window",
]
