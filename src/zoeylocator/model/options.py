"""Per-call locator options."""

import threading
from dataclasses import dataclass, field, replace
from typing import Any

from ..config import LocatorSettings, get_settings
from ..config_exceptions import InvalidOptionsError
from .geometry import Point, Region
from .match import DEFAULT_MATCH_METHODS, MatchMethod


@dataclass
class LocatorOptions:
    """Options recognized by the image and text locators.

    Created per call and discarded. ``timeout_ms == 0`` turns every wait into
    a single existence check.

    Attributes:
        threshold: Minimum confidence for an image match
        timeout_ms: Retry budget in milliseconds
        poll_interval_ms: Sleep between poll iterations
        methods: Matcher kinds tried in order
        rgb_validate: Re-score template hits per colour channel
        region: Restrict capture to this screen region
        click_offset: Added to the match centre before clicking
        double_click: Double-click instead of single click
        right_click: Right-click (wins over double_click)
        scale_max: Longest source side for the multi-scale search
        scale_step: Ratio increment for the multi-scale search
        similarity_threshold: Minimum fuzzy similarity for text search
        grid: Optional "rows.cols.row.col" cell to click inside the match
        cancel_event: Set from another thread to interrupt a wait
    """

    threshold: float = 0.8
    timeout_ms: int = 3000
    poll_interval_ms: int = 200
    methods: tuple[MatchMethod, ...] = DEFAULT_MATCH_METHODS
    rgb_validate: bool = False
    region: Region | None = None
    click_offset: Point = Point(0, 0)
    double_click: bool = False
    right_click: bool = False
    scale_max: int = 800
    scale_step: float = 0.005
    similarity_threshold: float = 0.8
    grid: str | None = None
    cancel_event: threading.Event | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        self.methods = tuple(MatchMethod.parse(m) for m in self.methods)

    @classmethod
    def from_settings(cls, settings: LocatorSettings | None = None, **overrides: Any) -> "LocatorOptions":
        """Build options whose defaults come from LocatorSettings."""
        settings = settings or get_settings()
        values: dict[str, Any] = {
            "threshold": settings.threshold,
            "timeout_ms": settings.timeout_ms,
            "poll_interval_ms": settings.poll_interval_ms,
            "methods": tuple(settings.match_methods),
            "rgb_validate": settings.rgb_validate,
            "scale_max": settings.scale_max,
            "scale_step": settings.scale_step,
            "similarity_threshold": settings.similarity_threshold,
        }
        values.update(overrides)
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> "LocatorOptions":
        """Return a copy with the given fields replaced."""
        return replace(self, **overrides)

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            InvalidOptionsError: If any option is out of range
        """
        if not (0.0 <= self.threshold <= 1.0):
            raise InvalidOptionsError("threshold", f"must be in [0, 1], got {self.threshold}")
        if not (0.0 <= self.similarity_threshold <= 1.0):
            raise InvalidOptionsError(
                "similarity_threshold", f"must be in [0, 1], got {self.similarity_threshold}"
            )
        if self.timeout_ms < 0:
            raise InvalidOptionsError("timeout_ms", f"must be >= 0, got {self.timeout_ms}")
        if self.poll_interval_ms <= 0:
            raise InvalidOptionsError(
                "poll_interval_ms", f"must be > 0, got {self.poll_interval_ms}"
            )
        if not self.methods:
            raise InvalidOptionsError("methods", "at least one match method is required")
        if self.scale_max < 16:
            raise InvalidOptionsError("scale_max", f"must be >= 16, got {self.scale_max}")
        if not (0.0 < self.scale_step < 1.0):
            raise InvalidOptionsError("scale_step", f"must be in (0, 1), got {self.scale_step}")
        if self.region is not None and (self.region.width <= 0 or self.region.height <= 0):
            raise InvalidOptionsError("region", f"must have a positive size, got {self.region}")
