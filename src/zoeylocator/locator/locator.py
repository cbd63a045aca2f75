"""Image locator facade.

Capture, run the matcher chain, map the hit back to screen space and
optionally click it, retrying until the options' timeout.

Example:
    hal = initialize_hal()
    locator = Locator(LocatorContext.from_hal(hal))
    match = locator.click_image("button.png", LocatorOptions(timeout_ms=5000))
"""

import time
from dataclasses import replace
from typing import Union

from ..coordinates import adjust_match_result
from ..logging import get_logger
from ..model import LocatorOptions, MatchResult, Point, Region
from ..vision import ExactTemplateMatcher, MatcherChain, Template, pil_to_cv2
from ..vision.template import TemplateSource
from ..vision_exceptions import ImageNotFoundException, SizeMismatchError
from .base import BaseLocator
from .grid import grid_center_from_string, parse_grid_position

logger = get_logger(__name__)

TemplateLike = Union[Template, TemplateSource]


class Locator(BaseLocator):
    """Finds and clicks template images on screen."""

    def _match_once(
        self, template: Template, chain: MatcherChain, options: LocatorOptions
    ) -> MatchResult | None:
        start = time.perf_counter()
        image, meta = self._capture(options)
        source = pil_to_cv2(image)

        result = chain.find_best(template.image, source)
        if result is None:
            return None

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        return adjust_match_result(result, meta).with_elapsed(elapsed_ms)

    def wait_for_image(
        self, template: TemplateLike, options: LocatorOptions | None = None
    ) -> MatchResult:
        """Poll until the template is found.

        Raises:
            ImageNotFoundException: If nothing clears the threshold in time
            SizeMismatchError: If the template is larger than the capture
            ScreenCaptureException: If capturing fails
            OperationCancelledError: If ``options.cancel_event`` is set
        """
        options = self._resolve_options(options)
        query = Template.of(template)
        chain = MatcherChain.from_options(options, self.settings)

        result = self._poll(
            "locate.image",
            options,
            lambda: self._match_once(query, chain, options),
            lambda elapsed: ImageNotFoundException(
                query.name, options.threshold, options.timeout_ms, elapsed_ms=elapsed
            ),
        )
        logger.debug(
            "image_found",
            template=query.name,
            method=result.method.value if result.method else None,
            confidence=result.confidence,
            center=(result.center.x, result.center.y),
        )
        return result

    def find_image(
        self, template: TemplateLike, options: LocatorOptions | None = None
    ) -> MatchResult | None:
        """Single capture and match; None when nothing clears the threshold.

        Raises:
            SizeMismatchError: If the template is larger than the capture
            ScreenCaptureException: If capturing fails
        """
        options = self._resolve_options(options, timeout_ms=0)
        try:
            return self.wait_for_image(template, options)
        except ImageNotFoundException:
            return None

    def image_exists(self, template: TemplateLike, options: LocatorOptions | None = None) -> bool:
        """Whether the template is on screen right now.

        Size mismatches count as absent; capture failures still propagate.
        """
        try:
            return self.find_image(template, options) is not None
        except SizeMismatchError as e:
            logger.debug("image_exists_size_mismatch", error=str(e))
            return False

    def find_all_images(
        self, template: TemplateLike, options: LocatorOptions | None = None
    ) -> list[MatchResult]:
        """Every non-overlapping exact-template occurrence in one capture, best first."""
        options = self._resolve_options(options)
        query = Template.of(template)
        matcher = ExactTemplateMatcher(
            threshold=options.threshold,
            rgb_validate=options.rgb_validate,
            rgb_clamp=(self.settings.rgb_clamp_low, self.settings.rgb_clamp_high),
        )

        image, meta = self._capture(options)
        source = pil_to_cv2(image)

        return [adjust_match_result(m, meta) for m in matcher.find_all(query.image, source)]

    def click_image(
        self, template: TemplateLike, options: LocatorOptions | None = None
    ) -> MatchResult:
        """Wait for the template and click its centre.

        When ``options.grid`` is set the click goes to that grid cell of the
        match's bounding box instead.
        """
        options = self._resolve_options(options)
        if options.grid:
            return self.click_image_with_grid(template, options.grid, options)

        result = self.wait_for_image(template, options)
        self._click_at(result.center, options)
        return result

    def click_image_with_grid(
        self, template: TemplateLike, grid: str, options: LocatorOptions | None = None
    ) -> MatchResult:
        """Wait for the template, then click a cell of a grid laid over it.

        Raises:
            GridParseError: If ``grid`` is malformed
        """
        options = self._resolve_options(options)
        if grid:
            parse_grid_position(grid)
        result = self.wait_for_image(template, replace(options, grid=None))

        box = result.quad.bounding_region()
        box = Region(box.x, box.y, max(1, box.width), max(1, box.height))
        point = grid_center_from_string(box, grid)
        self._click_at(point, options)
        return result

    def click_grid(self, region: Region, grid: str, options: LocatorOptions | None = None) -> Point:
        """Click a grid cell of a capture-space region without matching.

        Returns:
            The clicked point in input space
        """
        options = self._resolve_options(options)
        return self._click_at(grid_center_from_string(region, grid), options)
