"""Ordered fallback across matching strategies.

Matcher kinds are a closed enum resolved through ``MATCHER_REGISTRY``;
the chain tries them in order against one capture and the first result
clearing the threshold wins.
"""

import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

import cv2
import numpy as np

from ..config import LocatorSettings, get_settings
from ..logging import get_logger, get_performance_logger
from ..model import DEFAULT_MATCH_METHODS, LocatorOptions, MatchMethod, MatchResult
from .base import BaseMatcher
from .homography import HomographyParams
from .keypoint_matcher import FeaturePointMatcher
from .multiscale_matcher import MultiScaleTemplateMatcher
from .template_matcher import ExactTemplateMatcher

logger = get_logger(__name__)


@dataclass(frozen=True)
class MatcherConfig:
    """Everything a matcher factory needs to build one strategy."""

    threshold: float
    rgb_validate: bool
    scale_max: int
    scale_step: float
    settings: LocatorSettings

    @property
    def rgb_clamp(self) -> tuple[int, int]:
        return (self.settings.rgb_clamp_low, self.settings.rgb_clamp_high)


def _template(config: MatcherConfig) -> BaseMatcher:
    return ExactTemplateMatcher(
        threshold=config.threshold,
        rgb_validate=config.rgb_validate,
        rgb_clamp=config.rgb_clamp,
    )


def _multiscale(config: MatcherConfig) -> BaseMatcher:
    return MultiScaleTemplateMatcher(
        threshold=config.threshold,
        rgb_validate=config.rgb_validate,
        scale_max=config.scale_max,
        scale_step=config.scale_step,
        deadline_s=config.settings.multiscale_deadline_s,
        rgb_clamp=config.rgb_clamp,
    )


def _feature(method: MatchMethod) -> Callable[[MatcherConfig], BaseMatcher]:
    def build(config: MatcherConfig) -> BaseMatcher:
        return FeaturePointMatcher(
            method,
            threshold=config.threshold,
            ratio_test=config.settings.ratio_test,
            params=HomographyParams.from_settings(config.settings),
            scale_candidates=config.settings.feature_scale_candidates,
        )

    return build


MATCHER_REGISTRY: dict[MatchMethod, Callable[[MatcherConfig], BaseMatcher]] = {
    MatchMethod.TEMPLATE: _template,
    MatchMethod.MULTISCALE_TEMPLATE: _multiscale,
    MatchMethod.AKAZE: _feature(MatchMethod.AKAZE),
    MatchMethod.BRISK: _feature(MatchMethod.BRISK),
    MatchMethod.ORB: _feature(MatchMethod.ORB),
    MatchMethod.KAZE: _feature(MatchMethod.KAZE),
    MatchMethod.SIFT: _feature(MatchMethod.SIFT),
}


def create_matcher(method: MatchMethod | str, config: MatcherConfig) -> BaseMatcher:
    """Build a single matcher from the registry."""
    return MATCHER_REGISTRY[MatchMethod.parse(method)](config)


class MatcherChain:
    """Tries matchers in order until one clears the threshold.

    Example:
        chain = MatcherChain([MatchMethod.TEMPLATE], threshold=0.9)
        result = chain.find_best(query, screenshot)
    """

    def __init__(
        self,
        methods: Iterable[MatchMethod | str] = DEFAULT_MATCH_METHODS,
        threshold: float = 0.8,
        rgb_validate: bool = False,
        scale_max: int = 800,
        scale_step: float = 0.005,
        settings: LocatorSettings | None = None,
    ) -> None:
        self.methods = tuple(MatchMethod.parse(m) for m in methods)
        self.config = MatcherConfig(
            threshold=threshold,
            rgb_validate=rgb_validate,
            scale_max=scale_max,
            scale_step=scale_step,
            settings=settings or get_settings(),
        )
        self._matchers: dict[MatchMethod, BaseMatcher] = {}

    @classmethod
    def from_options(
        cls, options: LocatorOptions, settings: LocatorSettings | None = None
    ) -> "MatcherChain":
        return cls(
            methods=options.methods,
            threshold=options.threshold,
            rgb_validate=options.rgb_validate,
            scale_max=options.scale_max,
            scale_step=options.scale_step,
            settings=settings,
        )

    def matcher(self, method: MatchMethod) -> BaseMatcher:
        """Return the matcher for ``method``, building it on first use."""
        if method not in self._matchers:
            self._matchers[method] = MATCHER_REGISTRY[method](self.config)
        return self._matchers[method]

    def find_best(
        self, query: np.ndarray[Any, Any], source: np.ndarray[Any, Any]
    ) -> MatchResult | None:
        """Run the chain against one capture.

        Raises:
            SizeMismatchError: If the query is larger than the source
        """
        perf = get_performance_logger()
        for method in self.methods:
            start = time.perf_counter()
            try:
                result = self.matcher(method).find_best(query, source)
            except (cv2.error, ValueError, ArithmeticError) as e:
                logger.warning(
                    "matcher_failed", method=method.value, error=str(e), error_type=type(e).__name__
                )
                result = None

            elapsed_ms = (time.perf_counter() - start) * 1000.0
            perf.log_timing(f"match.{method.value}", elapsed_ms, success=result is not None)

            if result is not None and result.confidence >= self.config.threshold:
                logger.debug(
                    "chain_match",
                    method=method.value,
                    confidence=result.confidence,
                    center=(result.center.x, result.center.y),
                )
                return result

        logger.debug("chain_no_match", methods=[m.value for m in self.methods])
        return None
