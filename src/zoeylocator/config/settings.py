"""Configuration management for zoeylocator using pydantic-settings.

Every value can be overridden through ``ZOEYLOCATOR_*`` environment
variables or a ``.env`` file. Components accept explicit settings; the
singleton returned by :func:`get_settings` is only used as a default.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class LocatorSettings(BaseSettings):
    """Tunables for matching, polling, OCR and logging."""

    # Polling
    threshold: float = Field(0.8, ge=0.0, le=1.0, description="Minimum match confidence")
    timeout_ms: int = Field(3000, ge=0, description="Retry budget for wait operations")
    poll_interval_ms: int = Field(200, ge=1, description="Delay between poll iterations")
    click_settle_ms: int = Field(50, ge=0, description="Pause between cursor move and click")

    # Matcher chain
    match_methods: list[str] = Field(
        default_factory=lambda: ["brisk", "multiscale_template"],
        description="Matchers tried in order, by MatchMethod value",
    )
    rgb_validate: bool = Field(False, description="Re-score template hits per colour channel")
    rgb_clamp_low: int = Field(10, ge=0, le=255, description="Channel values below are zeroed")
    rgb_clamp_high: int = Field(245, ge=0, le=255, description="Channel values above are truncated")

    # Multi-scale template
    scale_max: int = Field(800, ge=16, description="Longest source side before downscaling")
    scale_step: float = Field(0.005, gt=0.0, lt=1.0, description="Ratio increment per iteration")
    multiscale_deadline_s: float = Field(
        3.0, gt=0.0, description="Soft deadline after which a passing best result is accepted"
    )

    # Feature points
    ratio_test: float = Field(0.75, gt=0.0, lt=1.0, description="Lowe ratio for KNN matches")
    ransac_reproj_threshold: float = Field(5.0, gt=0.0, description="RANSAC reprojection error (px)")
    ransac_max_iters: int = Field(2000, ge=1, description="RANSAC iteration cap")
    ransac_confidence: float = Field(0.995, gt=0.0, lt=1.0, description="RANSAC confidence")
    min_inlier_count: int = Field(4, ge=4, description="Minimum RANSAC inliers")
    min_inlier_rate: float = Field(0.3, ge=0.0, le=1.0, description="Minimum inlier ratio")
    corner_tolerance_px: float = Field(8.0, ge=0.0, description="Absolute corner tolerance (px)")
    corner_tolerance_ratio: float = Field(
        0.02, ge=0.0, le=1.0, description="Corner tolerance relative to source dimension"
    )
    feature_scale_candidates: list[float] = Field(
        default_factory=lambda: [0.5, 0.75, 1.0, 1.25, 1.5, 2.0],
        description="Query rescale factors tried by feature matchers, best confidence wins",
    )

    # Text
    similarity_threshold: float = Field(
        0.8, ge=0.0, le=1.0, description="Minimum fuzzy similarity for text matches"
    )

    # Logging
    debug_mode: bool = Field(False, description="Enable debug logging")
    log_level: str = Field("INFO", description="Log level when not in debug mode")
    log_path: Path | None = Field(None, description="Directory for log files")

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_prefix = "ZOEYLOCATOR_"
        case_sensitive = False
        extra = "ignore"

    def validate_clamp(self) -> None:
        """Validate that the RGB clamp describes a non-empty band."""
        if self.rgb_clamp_low >= self.rgb_clamp_high:
            raise ValueError(
                f"rgb_clamp_low ({self.rgb_clamp_low}) must be below "
                f"rgb_clamp_high ({self.rgb_clamp_high})"
            )

    def validate_scale_candidates(self) -> None:
        """Validate feature scale candidates. An empty list means unscaled only."""
        if not self.feature_scale_candidates:
            self.feature_scale_candidates = [1.0]
        bad = [s for s in self.feature_scale_candidates if s <= 0]
        if bad:
            raise ValueError(f"feature_scale_candidates must be positive, got {bad}")

    def model_post_init(self, __context) -> None:
        """Post-initialization validation."""
        self.validate_clamp()
        self.validate_scale_candidates()


_settings: LocatorSettings | None = None


def get_settings() -> LocatorSettings:
    """Get the singleton settings instance.

    Returns:
        LocatorSettings instance
    """
    global _settings

    if _settings is None:
        _settings = LocatorSettings()

    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (mainly for testing)."""
    global _settings
    _settings = None
