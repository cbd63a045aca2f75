"""Match results and the matcher-kind enumeration."""

from dataclasses import dataclass, field, replace
from enum import Enum

from .geometry import Point, Quad


class MatchMethod(Enum):
    """Closed set of matcher kinds understood by the matcher chain."""

    TEMPLATE = "template"
    MULTISCALE_TEMPLATE = "multiscale_template"
    AKAZE = "akaze"
    BRISK = "brisk"
    ORB = "orb"
    KAZE = "kaze"
    SIFT = "sift"

    @property
    def is_feature_based(self) -> bool:
        return self not in (MatchMethod.TEMPLATE, MatchMethod.MULTISCALE_TEMPLATE)

    @classmethod
    def parse(cls, value: "str | MatchMethod") -> "MatchMethod":
        """Resolve a MatchMethod from its value or name, case-insensitively."""
        if isinstance(value, MatchMethod):
            return value
        key = value.strip().lower()
        for member in cls:
            if member.value == key or member.name.lower() == key:
                return member
        raise ValueError(f"Unknown match method: {value!r}")


# Fast feature matcher first, near-guaranteed multi-scale search as fallback
DEFAULT_MATCH_METHODS: tuple[MatchMethod, ...] = (
    MatchMethod.BRISK,
    MatchMethod.MULTISCALE_TEMPLATE,
)


@dataclass(frozen=True)
class MatchResult:
    """A located query image.

    Attributes:
        center: Click-able point of the match
        quad: Corners of the matched area
        confidence: Score in [0, 1]; never below the caller's threshold
        elapsed_ms: Time spent producing the result
        method: Matcher that produced the result
    """

    center: Point
    quad: Quad
    confidence: float
    elapsed_ms: float = 0.0
    method: MatchMethod | None = field(default=None, compare=False)

    def with_elapsed(self, elapsed_ms: float) -> "MatchResult":
        return replace(self, elapsed_ms=elapsed_ms)


@dataclass(frozen=True)
class CaptureMeta:
    """Relation between a captured image and full-screen capture space.

    Attributes:
        scale_x: Image pixels per expected pixel, horizontally
        scale_y: Image pixels per expected pixel, vertically
        offset_x: X origin of the captured region
        offset_y: Y origin of the captured region
    """

    scale_x: float = 1.0
    scale_y: float = 1.0
    offset_x: int = 0
    offset_y: int = 0
