"""Exception hierarchy for zoeylocator.

This module re-exports all exceptions from domain-specific modules
for convenience.
"""

from .base_exceptions import LocatorException, OperationCancelledError
from .config_exceptions import ConfigurationException, GridParseError, InvalidOptionsError
from .hardware_exceptions import (
    HALError,
    HALInitializationError,
    HardwareException,
    MouseOperationException,
    ScreenCaptureException,
    hal_error_context,
)
from .vision_exceptions import (
    DegenerateGeometryError,
    ElementNotFoundException,
    ImageNotFoundException,
    InvalidImageException,
    OCRError,
    OCRUnavailableError,
    PerceptionException,
    SizeMismatchError,
    TextNotFoundException,
)

__all__ = [
    "LocatorException",
    "OperationCancelledError",
    "PerceptionException",
    "SizeMismatchError",
    "ElementNotFoundException",
    "ImageNotFoundException",
    "TextNotFoundException",
    "InvalidImageException",
    "DegenerateGeometryError",
    "OCRError",
    "OCRUnavailableError",
    "HardwareException",
    "ScreenCaptureException",
    "MouseOperationException",
    "HALError",
    "HALInitializationError",
    "hal_error_context",
    "ConfigurationException",
    "InvalidOptionsError",
    "GridParseError",
]
