"""Tests for the exception hierarchy and its error codes."""

import pytest

from zoeylocator import exceptions
from zoeylocator.exceptions import (
    ConfigurationException,
    DegenerateGeometryError,
    ElementNotFoundException,
    GridParseError,
    HardwareException,
    ImageNotFoundException,
    LocatorException,
    OCRError,
    OCRUnavailableError,
    OperationCancelledError,
    PerceptionException,
    ScreenCaptureException,
    SizeMismatchError,
    TextNotFoundException,
)


def test_every_exported_exception_derives_from_base() -> None:
    for name in exceptions.__all__:
        obj = getattr(exceptions, name)
        if isinstance(obj, type):
            assert issubclass(obj, LocatorException), name


@pytest.mark.parametrize(
    "error, parent, code",
    [
        (SizeMismatchError((50, 50), (10, 10)), PerceptionException, "SIZE_MISMATCH"),
        (ImageNotFoundException("logo.png", 0.8, 1000), ElementNotFoundException, "ELEMENT_NOT_FOUND"),
        (TextNotFoundException("Submit", 0), ElementNotFoundException, "ELEMENT_NOT_FOUND"),
        (DegenerateGeometryError("collinear corners"), PerceptionException, "DEGENERATE_GEOMETRY"),
        (OCRUnavailableError("no model"), OCRError, "OCR_UNAVAILABLE"),
        (ScreenCaptureException("denied", monitor=2), HardwareException, "CAPTURE_FAILED"),
        (GridParseError("1.2", "expected format"), ConfigurationException, "GRID_PARSE_ERROR"),
        (OperationCancelledError("locate.image", 120.0), LocatorException, "CANCELLED"),
    ],
)
def test_error_codes(error, parent, code) -> None:
    assert isinstance(error, parent)
    assert error.error_code == code
    assert str(error).startswith(f"[{code}]")


def test_not_found_carries_context() -> None:
    error = ImageNotFoundException("logo.png", 0.9, 2500, elapsed_ms=2510.0)
    assert error.context["threshold"] == 0.9
    assert error.context["timeout_ms"] == 2500
    assert error.context["elapsed_ms"] == 2510.0


def test_size_mismatch_names_both_sizes() -> None:
    error = SizeMismatchError((640, 480), (320, 240))
    assert error.context == {"query_size": (640, 480), "source_size": (320, 240)}


def test_plain_exception_without_code() -> None:
    error = LocatorException("something odd")
    assert str(error) == "something odd"
    assert error.context == {}
