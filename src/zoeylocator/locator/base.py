"""Shared capture, poll and click machinery for the locators."""

import time
from collections.abc import Callable
from typing import Any, TypeVar

from PIL import Image

from ..base_exceptions import LocatorException, OperationCancelledError
from ..config import LocatorSettings, get_settings
from ..coordinates import build_capture_meta
from ..hal.interfaces import MouseButton
from ..logging import get_logger, get_performance_logger
from ..model import CaptureMeta, LocatorOptions, Point
from .context import LocatorContext

logger = get_logger(__name__)

T = TypeVar("T")


class BaseLocator:
    """Common behaviour of :class:`Locator` and :class:`TextLocator`.

    Holds no per-call state: every operation builds its own capture,
    matchers and results, so one instance may be used from several threads.
    """

    def __init__(self, context: LocatorContext, settings: LocatorSettings | None = None) -> None:
        self.context = context
        self.settings = settings or get_settings()

    def _resolve_options(self, options: LocatorOptions | None, **overrides: Any) -> LocatorOptions:
        if options is None:
            options = LocatorOptions.from_settings(self.settings)
        if overrides:
            options = options.with_overrides(**overrides)
        options.validate()
        return options

    def _capture(self, options: LocatorOptions) -> tuple[Image.Image, CaptureMeta]:
        """Capture the screen (or the options' region) with its CaptureMeta.

        Capture failures propagate unchanged.
        """
        screen = self.context.screen_capture
        region = options.region
        if region is None:
            image = screen.capture_full_screen()
            expected = self.context.normalizer.physical_screen_size()
        else:
            image = screen.capture_region(region.x, region.y, region.width, region.height)
            expected = (region.width, region.height)

        meta = build_capture_meta(image.size, expected, region)
        return image, meta

    def _poll(
        self,
        operation: str,
        options: LocatorOptions,
        attempt: Callable[[], T | None],
        not_found: Callable[[float], LocatorException],
    ) -> T:
        """Run ``attempt`` until it returns a result or the budget runs out.

        ``timeout_ms == 0`` means exactly one attempt and no sleep. The wait
        between attempts observes ``options.cancel_event``.

        Raises:
            OperationCancelledError: If the cancel event is set
            LocatorException: Built by ``not_found`` once the budget is spent
        """
        start = time.monotonic()
        cancel = options.cancel_event
        attempts = 0

        while True:
            if cancel is not None and cancel.is_set():
                raise OperationCancelledError(operation, (time.monotonic() - start) * 1000.0)

            attempts += 1
            result = attempt()
            elapsed_ms = (time.monotonic() - start) * 1000.0

            if result is not None:
                get_performance_logger().log_timing(operation, elapsed_ms, attempts=attempts)
                return result

            if options.timeout_ms == 0 or elapsed_ms >= options.timeout_ms:
                get_performance_logger().log_timing(
                    operation, elapsed_ms, success=False, attempts=attempts
                )
                logger.debug("poll_exhausted", operation=operation, attempts=attempts)
                raise not_found(elapsed_ms)

            interval_s = options.poll_interval_ms / 1000.0
            if cancel is None:
                time.sleep(interval_s)
            elif cancel.wait(interval_s):
                raise OperationCancelledError(operation, (time.monotonic() - start) * 1000.0)

    def _click_at(self, point: Point, options: LocatorOptions) -> Point:
        """Click a capture-space point; returns the input-space target."""
        target = point.offset(options.click_offset.x, options.click_offset.y)
        target = self.context.normalizer.point_to_input_space(target)

        if options.right_click:
            button, double = MouseButton.RIGHT, False
        else:
            button, double = MouseButton.LEFT, options.double_click

        mouse = self.context.mouse
        mouse.move_cursor(target.x, target.y)
        if self.settings.click_settle_ms > 0:
            time.sleep(self.settings.click_settle_ms / 1000.0)
        mouse.click(button, double)

        logger.info("clicked", x=target.x, y=target.y, button=button.value, double=double)
        return target
