"""Tests for the lazily built, lock-guarded OCR engine handle."""

import threading

import pytest
from conftest import ScriptedOCR, ocr_box
from PIL import Image

from zoeylocator.model import MatchTier
from zoeylocator.ocr import TextRecognizer
from zoeylocator.vision_exceptions import OCRError, OCRUnavailableError


@pytest.fixture
def image() -> Image.Image:
    return Image.new("RGB", (100, 40), "white")


class CountingFactory:
    def __init__(self, engine=None, error: Exception | None = None) -> None:
        self.engine = engine
        self.error = error
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.engine


def test_engine_built_lazily_once(image) -> None:
    factory = CountingFactory(ScriptedOCR([ocr_box("Hello", 0, 0, 10, 10)]))
    recognizer = TextRecognizer(factory)

    assert not recognizer.is_initialized
    assert factory.calls == 0

    recognizer.recognize(image)
    recognizer.recognize(image)

    assert recognizer.is_initialized
    assert factory.calls == 1


def test_find_text_and_get_all_text(image) -> None:
    engine = ScriptedOCR(
        [ocr_box("File", 0, 0, 20, 10), ocr_box("", 0, 0, 1, 1), ocr_box("Edit", 30, 0, 20, 10)]
    )
    recognizer = TextRecognizer(lambda: engine)

    match = recognizer.find_text(image, "edit")
    assert match is not None
    assert match.tier is MatchTier.EXACT

    assert recognizer.get_all_text(image) == "File Edit"
    assert [m.text for m in recognizer.find_all_text(image, "fi", threshold=0.9)] == ["File"]


def test_construction_failure_is_not_retried(image) -> None:
    factory = CountingFactory(error=RuntimeError("model files missing"))
    recognizer = TextRecognizer(factory)

    with pytest.raises(OCRUnavailableError) as first:
        recognizer.recognize(image)
    with pytest.raises(OCRUnavailableError) as second:
        recognizer.find_text(image, "anything")

    assert factory.calls == 1
    assert "model files missing" in str(first.value)
    assert second.value.error_code == "OCR_UNAVAILABLE"


def test_close_allows_retry(image) -> None:
    factory = CountingFactory(error=RuntimeError("not yet"))
    recognizer = TextRecognizer(factory)
    with pytest.raises(OCRUnavailableError):
        recognizer.recognize(image)

    factory.error = None
    factory.engine = ScriptedOCR([])
    recognizer.close()

    assert recognizer.recognize(image) == []
    assert factory.calls == 2


def test_close_releases_engine(image) -> None:
    engine = ScriptedOCR([])
    recognizer = TextRecognizer(lambda: engine)
    recognizer.recognize(image)

    recognizer.close()

    assert engine.closed
    assert not recognizer.is_initialized


def test_missing_factory_is_unavailable(image) -> None:
    with pytest.raises(OCRUnavailableError):
        TextRecognizer(None).recognize(image)


def test_engine_error_is_wrapped(image) -> None:
    class BrokenEngine(ScriptedOCR):
        def recognize(self, image):
            raise RuntimeError("inference crashed")

    recognizer = TextRecognizer(lambda: BrokenEngine([]))

    with pytest.raises(OCRError) as exc_info:
        recognizer.recognize(image)
    assert not isinstance(exc_info.value, OCRUnavailableError)


@pytest.mark.timeout(30)
def test_concurrent_calls_are_serialized(image) -> None:
    factory = CountingFactory(ScriptedOCR([ocr_box("Go", 0, 0, 10, 10)], delay_s=0.02))
    recognizer = TextRecognizer(factory)
    start = threading.Barrier(6)

    def worker() -> None:
        start.wait()
        for _ in range(3):
            recognizer.recognize(image)

    threads = [threading.Thread(target=worker) for _ in range(6)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert factory.calls == 1
    assert factory.engine.calls == 18
    assert not factory.engine.overlapped
