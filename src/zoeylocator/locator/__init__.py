"""Locator facades, their shared context and grid helpers."""

from .context import LocatorContext
from .grid import (
    GridIterator,
    format_grid_position,
    grid_cell_center,
    grid_cell_region,
    grid_center_from_string,
    parse_grid_position,
)
from .locator import Locator
from .text_locator import TextLocator

__all__ = [
    "LocatorContext",
    "Locator",
    "TextLocator",
    "GridIterator",
    "parse_grid_position",
    "format_grid_position",
    "grid_cell_center",
    "grid_center_from_string",
    "grid_cell_region",
]
