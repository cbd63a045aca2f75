"""Hardware and HAL exceptions.

This module contains exceptions for screen capture, mouse input
and HAL layer errors.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from .base_exceptions import LocatorException


class HardwareException(LocatorException):
    """Base exception for hardware/system errors."""

    pass


class ScreenCaptureException(HardwareException):
    """Raised when screen capture fails.

    Never retried by the poll loop: a failing capture is surfaced immediately.
    """

    def __init__(self, reason: str, monitor: int | None = None, **kwargs) -> None:
        """Initialize with capture details."""
        message = "Screen capture failed"
        if monitor is not None:
            message += f" on monitor {monitor}"
        message += f": {reason}"

        super().__init__(
            message,
            error_code="CAPTURE_FAILED",
            context={"reason": reason, "monitor": monitor, **kwargs},
        )


class MouseOperationException(HardwareException):
    """Raised when a mouse operation fails."""

    def __init__(self, operation: str, reason: str, **kwargs) -> None:
        """Initialize with operation details."""
        super().__init__(
            f"Mouse operation '{operation}' failed: {reason}",
            error_code="MOUSE_FAILED",
            context={"operation": operation, "reason": reason, **kwargs},
        )


class HALError(LocatorException):
    """Base exception for HAL layer errors."""

    pass


class HALInitializationError(HALError):
    """Raised when HAL backends cannot be created."""

    def __init__(self, component: str, reason: str) -> None:
        """Initialize with the failing component."""
        super().__init__(
            f"Failed to initialize {component}: {reason}",
            error_code="HAL_INIT_FAILED",
            context={"component": component, "reason": reason},
        )


@contextmanager
def hal_error_context(operation: str, **details: Any) -> Iterator[None]:
    """Context manager to add HAL operation context to exceptions.

    Usage:
        with hal_error_context("screen_capture", monitor=0):
            capture_screen()

    Args:
        operation: HAL operation being performed
        **details: Additional details about the operation

    Raises:
        HALError: Wraps non-library exceptions with HAL context
    """
    try:
        yield
    except LocatorException:
        raise
    except Exception as e:
        raise HALError(f"{operation} failed: {e}", context={"operation": operation, **details}) from e
