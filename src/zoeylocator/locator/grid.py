"""Grid position parsing and cell geometry.

A region is divided into ``rows x cols`` equal cells; ``"2.2.1.1"`` names
the top-left cell of a 2x2 grid. Cell centres are truncated to integers.
"""

import re
from collections.abc import Iterator

from ..config_exceptions import GridParseError
from ..model import GridPosition, Point, Region

_INT_RE = re.compile(r"^[+-]?\d+$")
_SEGMENT_NAMES = ("rows", "cols", "row", "col")


def parse_grid_position(value: str) -> GridPosition:
    """Parse ``"rows.cols.row.col"``.

    Raises:
        GridParseError: On empty input, a segment count other than 4,
            non-numeric segments, non-positive values or row/col out of range
    """
    if not value:
        raise GridParseError(value, "empty grid position")

    parts = value.split(".")
    if len(parts) != 4:
        raise GridParseError(value, "expected format rows.cols.row.col")

    numbers = []
    for name, part in zip(_SEGMENT_NAMES, parts, strict=True):
        if not _INT_RE.match(part):
            raise GridParseError(value, f"{name} is not an integer: {part!r}")
        numbers.append(int(part))

    rows, cols, row, col = numbers
    if rows < 1 or cols < 1:
        raise GridParseError(value, f"rows and cols must be positive (rows={rows}, cols={cols})")
    if row < 1 or col < 1:
        raise GridParseError(value, f"row and col must be positive (row={row}, col={col})")
    if row > rows or col > cols:
        raise GridParseError(value, f"cell ({row}, {col}) outside {rows}x{cols} grid")

    return GridPosition(rows=rows, cols=cols, row=row, col=col)


def format_grid_position(rows: int, cols: int, row: int, col: int) -> str:
    return f"{rows}.{cols}.{row}.{col}"


def grid_cell_center(region: Region, grid: GridPosition | None) -> Point:
    """Centre of a grid cell, or of the whole region when ``grid`` is None."""
    if grid is None:
        return region.center

    cell_w = region.width / grid.cols
    cell_h = region.height / grid.rows
    return Point(
        int(region.x + (grid.col - 0.5) * cell_w),
        int(region.y + (grid.row - 0.5) * cell_h),
    )


def grid_center_from_string(region: Region, value: str) -> Point:
    """Parse and locate a cell centre; an empty string means the region centre."""
    if not value:
        return region.center
    return grid_cell_center(region, parse_grid_position(value))


def grid_cell_region(region: Region, rows: int, cols: int, row: int, col: int) -> Region:
    """Rectangle covered by one cell (1-based row/col)."""
    cell_w = region.width / cols
    cell_h = region.height / rows
    return Region(
        int(region.x + (col - 1) * cell_w),
        int(region.y + (row - 1) * cell_h),
        int(cell_w),
        int(cell_h),
    )


class GridIterator:
    """Row-major iteration over every cell centre of a grid."""

    def __init__(self, region: Region, rows: int, cols: int) -> None:
        self.region = region
        self.rows = rows
        self.cols = cols
        self._current = 0

    def __iter__(self) -> Iterator[Point]:
        return self

    def __next__(self) -> Point:
        if self._current >= self.rows * self.cols:
            raise StopIteration
        row = self._current // self.cols + 1
        col = self._current % self.cols + 1
        self._current += 1
        return grid_cell_center(self.region, GridPosition(self.rows, self.cols, row, col))

    def __len__(self) -> int:
        return self.rows * self.cols

    def reset(self) -> None:
        self._current = 0
