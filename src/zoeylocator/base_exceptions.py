"""Base exception classes for zoeylocator.

This module contains the root exception hierarchy that all other
zoeylocator exceptions inherit from.
"""

from typing import Any


class LocatorException(Exception):
    """Base exception for all zoeylocator errors.

    Attributes:
        message: Human-readable error message
        error_code: Optional error code for programmatic handling
        context: Additional context information
    """

    def __init__(
        self, message: str, error_code: str | None = None, context: dict[str, Any] | None = None
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message
            error_code: Optional error code
            context: Optional context dictionary
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation."""
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class OperationCancelledError(LocatorException):
    """Raised when a caller cancels a wait between poll iterations."""

    def __init__(self, operation: str, elapsed_ms: float) -> None:
        """Initialize with the interrupted operation."""
        super().__init__(
            f"Operation '{operation}' cancelled after {elapsed_ms:.0f}ms",
            error_code="CANCELLED",
            context={"operation": operation, "elapsed_ms": elapsed_ms},
        )
