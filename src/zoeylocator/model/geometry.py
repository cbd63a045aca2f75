"""Geometry types shared by matchers, the normalizer and the locators.

All coordinates are integer pixels. Which space a value lives in (capture,
logical or input) is decided by the producer; the types themselves are
space-agnostic.
"""

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """An integer (x, y) pixel position."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Point":
        """Return a copy moved by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"Point(x={self.x}, y={self.y})"


@dataclass(frozen=True)
class Region:
    """An axis-aligned rectangle given by its top-left corner and size."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width // 2, self.y + self.height // 2)

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"Region(x={self.x}, y={self.y}, w={self.width}, h={self.height})"


@dataclass(frozen=True)
class Quad:
    """Four corner points of a matched area.

    Not necessarily axis-aligned: feature-point matches project the query
    corners through a homography and may come out perspective-distorted.
    """

    top_left: Point
    top_right: Point
    bottom_right: Point
    bottom_left: Point

    @classmethod
    def from_rect(cls, x: int, y: int, width: int, height: int) -> "Quad":
        """Build an axis-aligned quad."""
        return cls(
            Point(x, y),
            Point(x + width, y),
            Point(x + width, y + height),
            Point(x, y + height),
        )

    def corners(self) -> tuple[Point, Point, Point, Point]:
        """Corners in clockwise order starting at the top-left."""
        return (self.top_left, self.top_right, self.bottom_right, self.bottom_left)

    def center(self) -> Point:
        """Midpoint of the top-left to bottom-right diagonal."""
        return Point(
            (self.top_left.x + self.bottom_right.x) // 2,
            (self.top_left.y + self.bottom_right.y) // 2,
        )

    def area(self) -> float:
        """Polygon area by the shoelace formula."""
        pts = self.corners()
        total = 0
        for i, p in enumerate(pts):
            q = pts[(i + 1) % 4]
            total += p.x * q.y - q.x * p.y
        return abs(total) / 2.0

    def bounding_region(self) -> Region:
        """Smallest axis-aligned region containing all corners."""
        xs = [p.x for p in self.corners()]
        ys = [p.y for p in self.corners()]
        return Region(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))

    def map_points(self, fn: Callable[[Point], Point]) -> "Quad":
        """Apply a point transform to every corner."""
        return Quad(*(fn(p) for p in self.corners()))
