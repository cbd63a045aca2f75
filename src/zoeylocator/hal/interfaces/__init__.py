"""HAL interface definitions."""

from .mouse_controller import IMouseController, MouseButton
from .ocr_engine import IOCREngine
from .screen_capture import IScreenCapture
from .window_manager import IWindowManager, Window

__all__ = [
    "IScreenCapture",
    "IMouseController",
    "MouseButton",
    "IOCREngine",
    "IWindowManager",
    "Window",
]
