"""Configuration exceptions.

This module contains exceptions for invalid locator options and
malformed grid position strings.
"""

from .base_exceptions import LocatorException


class ConfigurationException(LocatorException):
    """Base exception for configuration errors."""

    pass


class InvalidOptionsError(ConfigurationException):
    """Raised when a locator option is out of range."""

    def __init__(self, option: str, reason: str, **kwargs) -> None:
        """Initialize with option details."""
        super().__init__(
            f"Invalid option '{option}': {reason}",
            error_code="INVALID_OPTIONS",
            context={"option": option, "reason": reason, **kwargs},
        )


class GridParseError(ConfigurationException, ValueError):
    """Raised when a grid position string cannot be parsed."""

    def __init__(self, value: str, reason: str) -> None:
        """Initialize with the offending string."""
        super().__init__(
            f"Invalid grid position '{value}': {reason}",
            error_code="GRID_PARSE_ERROR",
            context={"value": value, "reason": reason},
        )
