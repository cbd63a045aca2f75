"""Vision and perception-related exceptions.

This module contains exceptions for image matching, text recognition
and the typed "not found" outcomes of the locator poll loop.
"""

from .base_exceptions import LocatorException


class PerceptionException(LocatorException):
    """Base exception for perception/matching errors."""

    pass


class SizeMismatchError(PerceptionException):
    """Raised when the query image is larger than the searchable area.

    Fatal for the call: geometry cannot change inside a poll loop.
    """

    def __init__(self, query_size: tuple[int, int], source_size: tuple[int, int]) -> None:
        """Initialize with both (width, height) pairs."""
        super().__init__(
            f"Query image {query_size[0]}x{query_size[1]} is larger than "
            f"source image {source_size[0]}x{source_size[1]}",
            error_code="SIZE_MISMATCH",
            context={"query_size": query_size, "source_size": source_size},
        )
        self.query_size = query_size
        self.source_size = source_size


class ElementNotFoundException(PerceptionException):
    """Raised when an element is still missing after the retry budget."""

    def __init__(
        self, element_description: str, timeout_ms: int | None = None, **kwargs
    ) -> None:
        """Initialize with search details."""
        message = f"Element '{element_description}' not found"
        if timeout_ms is not None:
            message += f" within {timeout_ms}ms"

        super().__init__(
            message,
            error_code="ELEMENT_NOT_FOUND",
            context={"element": element_description, "timeout_ms": timeout_ms, **kwargs},
        )


class ImageNotFoundException(ElementNotFoundException):
    """Raised when an image cannot be found on screen before the timeout."""

    def __init__(self, image: str, threshold: float, timeout_ms: int | None = None, **kwargs) -> None:
        """Initialize with image search details."""
        super().__init__(f"Image {image} (threshold: {threshold})", timeout_ms=timeout_ms, **kwargs)
        self.context["threshold"] = threshold


class TextNotFoundException(ElementNotFoundException):
    """Raised when text cannot be found on screen before the timeout."""

    def __init__(self, text: str, timeout_ms: int | None = None, **kwargs) -> None:
        """Initialize with text search details."""
        super().__init__(f"Text '{text}'", timeout_ms=timeout_ms, **kwargs)


class InvalidImageException(PerceptionException):
    """Raised when an image is invalid or cannot be decoded."""

    def __init__(self, image: str, reason: str, **kwargs) -> None:
        """Initialize with image details."""
        super().__init__(
            f"Invalid image '{image}': {reason}",
            error_code="INVALID_IMAGE",
            context={"image": image, "reason": reason, **kwargs},
        )


class DegenerateGeometryError(PerceptionException):
    """Raised when a fitted homography yields an unusable quadrilateral.

    Never escapes a matcher: it is caught and downgraded to "no match".
    """

    def __init__(self, reason: str, **kwargs) -> None:
        """Initialize with the rejection reason."""
        super().__init__(
            f"Degenerate match geometry: {reason}",
            error_code="DEGENERATE_GEOMETRY",
            context={"reason": reason, **kwargs},
        )


class OCRError(PerceptionException):
    """Raised when an OCR operation fails."""

    def __init__(self, reason: str, **kwargs) -> None:
        """Initialize with OCR error details."""
        super().__init__(
            f"OCR operation failed: {reason}",
            error_code="OCR_ERROR",
            context={"reason": reason, **kwargs},
        )


class OCRUnavailableError(OCRError):
    """Raised when the OCR engine is not provisioned or cannot be built."""

    def __init__(self, reason: str, **kwargs) -> None:
        """Initialize with the provisioning failure."""
        super().__init__(reason, **kwargs)
        self.message = f"OCR engine unavailable: {reason}"
        self.error_code = "OCR_UNAVAILABLE"
        self.args = (self.message,)
