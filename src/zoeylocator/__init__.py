"""zoeylocator: find images and text on screen and click them.

Template, multi-scale and feature-point matching with fallback, OCR fuzzy
text search, DPI-aware coordinate normalization and a polling facade over a
small hardware abstraction layer.
"""

from .config import LocatorSettings, get_settings, reset_settings
from .coordinates import CoordinateNormalizer
from .exceptions import (
    ConfigurationException,
    ElementNotFoundException,
    GridParseError,
    HALError,
    ImageNotFoundException,
    InvalidImageException,
    InvalidOptionsError,
    LocatorException,
    OCRUnavailableError,
    OperationCancelledError,
    ScreenCaptureException,
    SizeMismatchError,
    TextNotFoundException,
)
from .hal import HALConfig, HALContainer, initialize_hal, shutdown_hal
from .locator import (
    GridIterator,
    Locator,
    LocatorContext,
    TextLocator,
    grid_cell_center,
    grid_center_from_string,
    parse_grid_position,
)
from .logging import get_logger, setup_logging
from .model import (
    CaptureMeta,
    GridPosition,
    LocatorOptions,
    MatchMethod,
    MatchResult,
    OCRResult,
    Point,
    Quad,
    Region,
    TextMatch,
)
from .ocr import TextRecognizer, similarity
from .vision import MatcherChain, Template

__version__ = "0.1.0"

__all__ = [
    # Facades
    "Locator",
    "TextLocator",
    "LocatorContext",
    # Model
    "Point",
    "Quad",
    "Region",
    "MatchResult",
    "CaptureMeta",
    "MatchMethod",
    "LocatorOptions",
    "OCRResult",
    "TextMatch",
    "GridPosition",
    # Matching and OCR
    "MatcherChain",
    "Template",
    "TextRecognizer",
    "similarity",
    "CoordinateNormalizer",
    # Grid
    "GridIterator",
    "parse_grid_position",
    "grid_cell_center",
    "grid_center_from_string",
    # HAL
    "HALConfig",
    "HALContainer",
    "initialize_hal",
    "shutdown_hal",
    # Configuration and logging
    "LocatorSettings",
    "get_settings",
    "reset_settings",
    "setup_logging",
    "get_logger",
    # Exceptions
    "LocatorException",
    "ConfigurationException",
    "InvalidOptionsError",
    "GridParseError",
    "ElementNotFoundException",
    "ImageNotFoundException",
    "TextNotFoundException",
    "InvalidImageException",
    "SizeMismatchError",
    "OCRUnavailableError",
    "ScreenCaptureException",
    "HALError",
    "OperationCancelledError",
]
