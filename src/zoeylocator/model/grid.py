"""Grid position value type.

A grid position string has the form ``"rows.cols.row.col"`` where row and
col are 1-based, e.g. ``"2.2.1.1"`` is the top-left cell of a 2x2 grid.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class GridPosition:
    """A cell in a rows x cols grid (row and col are 1-based)."""

    rows: int
    cols: int
    row: int
    col: int

    def __str__(self) -> str:
        return f"{self.rows}.{self.cols}.{self.row}.{self.col}"
