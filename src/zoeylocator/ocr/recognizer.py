"""Lazily constructed, mutex-guarded OCR engine handle."""

import threading
import time

from PIL import Image

from ..hal.container import OCREngineFactory
from ..hal.interfaces import IOCREngine
from ..logging import get_logger, get_performance_logger
from ..model import OCRResult, TextMatch
from ..vision_exceptions import OCRError, OCRUnavailableError
from .text_matcher import DEFAULT_SIMILARITY_THRESHOLD, find_all_texts, find_best_text

logger = get_logger(__name__)


class TextRecognizer:
    """Owns one OCR engine, built on first use.

    The engine is expensive to construct and not reentrant, so a single lock
    covers both construction and every ``recognize`` call. A construction
    failure is remembered and re-raised without retrying until
    :meth:`close` is called.
    """

    def __init__(self, engine_factory: OCREngineFactory | None) -> None:
        self._factory = engine_factory
        self._engine: IOCREngine | None = None
        self._failure: str | None = None
        self._lock = threading.Lock()

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    def _get_engine(self) -> IOCREngine:
        # Caller holds self._lock
        if self._engine is not None:
            return self._engine
        if self._failure is not None:
            raise OCRUnavailableError(self._failure)
        if self._factory is None:
            self._failure = "no OCR engine configured"
            raise OCRUnavailableError(self._failure)

        start = time.perf_counter()
        try:
            self._engine = self._factory()
        except Exception as e:
            self._failure = f"{type(e).__name__}: {e}"
            logger.error("ocr_engine_init_failed", error=self._failure)
            raise OCRUnavailableError(self._failure) from e

        logger.info("ocr_engine_initialized", elapsed_ms=(time.perf_counter() - start) * 1000.0)
        return self._engine

    def recognize(self, image: Image.Image) -> list[OCRResult]:
        """Run OCR on an image.

        Raises:
            OCRUnavailableError: If the engine cannot be built
            OCRError: If recognition fails
        """
        start = time.perf_counter()
        with self._lock:
            engine = self._get_engine()
            try:
                results = engine.recognize(image)
            except Exception as e:
                raise OCRError(str(e), error_type=type(e).__name__) from e

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        get_performance_logger().log_timing("ocr.recognize", elapsed_ms, count=len(results))
        return results

    def find_text(
        self, image: Image.Image, target: str, threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    ) -> TextMatch | None:
        match = find_best_text(self.recognize(image), target, threshold)
        logger.debug(
            "text_search",
            target=target,
            found=match is not None,
            tier=match.tier.value if match else None,
        )
        return match

    def find_all_text(
        self, image: Image.Image, target: str, threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    ) -> list[TextMatch]:
        return find_all_texts(self.recognize(image), target, threshold)

    def get_all_text(self, image: Image.Image) -> str:
        """All recognized text joined by single spaces."""
        return " ".join(r.text for r in self.recognize(image) if r.text)

    def close(self) -> None:
        """Release the engine; the next call rebuilds it."""
        with self._lock:
            if self._engine is not None:
                self._engine.close()
            self._engine = None
            self._failure = None
        logger.debug("ocr_engine_released")
