"""Text locator facade over the shared OCR engine."""

from dataclasses import replace

from ..coordinates import adjust_point
from ..logging import get_logger
from ..model import CaptureMeta, LocatorOptions, OCRResult, Region, TextMatch
from ..vision_exceptions import TextNotFoundException
from .base import BaseLocator
from .grid import grid_center_from_string, parse_grid_position

logger = get_logger(__name__)


def _adjust_text_match(match: TextMatch, meta: CaptureMeta) -> TextMatch:
    if meta == CaptureMeta():
        return match
    return replace(
        match,
        position=adjust_point(match.position, meta),
        quad=match.quad.map_points(lambda p: adjust_point(p, meta)),
    )


def _adjust_ocr_result(result: OCRResult, meta: CaptureMeta) -> OCRResult:
    if meta == CaptureMeta():
        return result
    return replace(result, quad=result.quad.map_points(lambda p: adjust_point(p, meta)))


class TextLocator(BaseLocator):
    """Finds and clicks on-screen text.

    OCR runs through the context's :class:`~zoeylocator.ocr.TextRecognizer`,
    so the engine is built once and shared by every locator on the context.
    An unavailable engine fails the call immediately, without polling.
    """

    def _search_once(self, text: str, options: LocatorOptions) -> TextMatch | None:
        image, meta = self._capture(options)
        match = self.context.recognizer.find_text(image, text, options.similarity_threshold)
        if match is None:
            return None
        return _adjust_text_match(match, meta)

    def wait_for_text(self, text: str, options: LocatorOptions | None = None) -> TextMatch:
        """Poll until ``text`` is recognized on screen.

        Raises:
            TextNotFoundException: If no tier accepts any result in time
            OCRUnavailableError: If the OCR engine cannot be built
            ScreenCaptureException: If capturing fails
            OperationCancelledError: If ``options.cancel_event`` is set
        """
        options = self._resolve_options(options)
        match = self._poll(
            "locate.text",
            options,
            lambda: self._search_once(text, options),
            lambda elapsed: TextNotFoundException(text, options.timeout_ms, elapsed_ms=elapsed),
        )
        logger.debug(
            "text_found",
            target=text,
            recognized=match.text,
            tier=match.tier.value,
            similarity=match.similarity,
        )
        return match

    def find_text(self, text: str, options: LocatorOptions | None = None) -> TextMatch | None:
        """Single capture and OCR pass; None when nothing matches."""
        options = self._resolve_options(options, timeout_ms=0)
        try:
            return self.wait_for_text(text, options)
        except TextNotFoundException:
            return None

    def text_exists(self, text: str, options: LocatorOptions | None = None) -> bool:
        return self.find_text(text, options) is not None

    def click_text(self, text: str, options: LocatorOptions | None = None) -> TextMatch:
        """Wait for ``text`` and click the centre of its box.

        ``options.grid`` selects a cell of the text box instead of its centre.
        """
        options = self._resolve_options(options)
        if options.grid:
            parse_grid_position(options.grid)

        match = self.wait_for_text(text, options)
        if options.grid:
            box = match.quad.bounding_region()
            box = Region(box.x, box.y, max(1, box.width), max(1, box.height))
            point = grid_center_from_string(box, options.grid)
        else:
            point = match.position

        self._click_at(point, options)
        return match

    def recognize(self, options: LocatorOptions | None = None) -> list[OCRResult]:
        """Every text box on screen (or in ``options.region``), in screen coordinates."""
        options = self._resolve_options(options)
        image, meta = self._capture(options)
        return [_adjust_ocr_result(r, meta) for r in self.context.recognizer.recognize(image)]

    def get_all_text(self, options: LocatorOptions | None = None) -> str:
        """All recognized text joined by single spaces."""
        return " ".join(r.text for r in self.recognize(options) if r.text)
