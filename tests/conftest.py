"""Pytest configuration and shared fakes.

The fakes implement the HAL interfaces in memory so the locators can be
exercised without a display, a mouse or an OCR model.
"""

import os
import threading
import time

import cv2
import numpy as np
import pytest
from PIL import Image

os.environ.setdefault("ZOEYLOCATOR_DISABLE_CONSOLE_LOGGING", "1")

from zoeylocator.config import LocatorSettings, reset_settings  # noqa: E402
from zoeylocator.hal import (  # noqa: E402
    IMouseController,
    IOCREngine,
    IScreenCapture,
    MouseButton,
    NormalizationMode,
)
from zoeylocator.locator import LocatorContext  # noqa: E402
from zoeylocator.model import OCRResult, Quad  # noqa: E402


class FakeScreen(IScreenCapture):
    """Serves BGR frames as PIL images; the last frame repeats forever."""

    def __init__(self, frames: list[np.ndarray], reported_size: tuple[int, int] | None = None):
        self.frames = list(frames)
        self.reported_size = reported_size
        self.capture_count = 0
        self.region_calls: list[tuple[int, int, int, int]] = []
        self.error: Exception | None = None

    def _next_frame(self) -> np.ndarray:
        if self.error is not None:
            raise self.error
        frame = self.frames[min(self.capture_count, len(self.frames) - 1)]
        self.capture_count += 1
        return frame

    def capture_full_screen(self) -> Image.Image:
        frame = self._next_frame()
        return Image.fromarray(cv2.cvtColor(frame, cv2.COLOR_BGR2RGB))

    def capture_region(self, x: int, y: int, width: int, height: int) -> Image.Image:
        self.region_calls.append((x, y, width, height))
        frame = self._next_frame()[y : y + height, x : x + width]
        return Image.fromarray(cv2.cvtColor(frame, cv2.COLOR_BGR2RGB))

    def screen_size(self) -> tuple[int, int]:
        if self.reported_size is not None:
            return self.reported_size
        h, w = self.frames[0].shape[:2]
        return w, h


class RecordingMouse(IMouseController):
    """Records cursor moves and clicks."""

    def __init__(self) -> None:
        self.events: list[tuple] = []
        self._position = (0, 0)

    def move_cursor(self, x: int, y: int) -> None:
        self._position = (x, y)
        self.events.append(("move", x, y))

    def click(self, button: MouseButton = MouseButton.LEFT, double: bool = False) -> None:
        self.events.append(("click", button, double))

    def position(self) -> tuple[int, int]:
        return self._position


class ScriptedOCR(IOCREngine):
    """Returns canned results and detects overlapping calls."""

    def __init__(self, results: list[OCRResult], delay_s: float = 0.0) -> None:
        self.results = results
        self.delay_s = delay_s
        self.calls = 0
        self.overlapped = False
        self.closed = False
        self._active = 0
        self._guard = threading.Lock()

    def recognize(self, image: Image.Image) -> list[OCRResult]:
        with self._guard:
            self._active += 1
            if self._active > 1:
                self.overlapped = True
            self.calls += 1
        try:
            if self.delay_s:
                time.sleep(self.delay_s)
            return list(self.results)
        finally:
            with self._guard:
                self._active -= 1

    def close(self) -> None:
        self.closed = True


def ocr_box(text: str, x: int, y: int, w: int, h: int, confidence: float = 0.9) -> OCRResult:
    return OCRResult(text=text, confidence=confidence, quad=Quad.from_rect(x, y, w, h))


def gray_canvas(width: int, height: int, value: int = 128) -> np.ndarray:
    return np.full((height, width, 3), value, dtype=np.uint8)


def noise_image(width: int, height: int, seed: int = 1) -> np.ndarray:
    """Uniform colour noise; every window is unique."""
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)


def random_shapes(width: int, height: int, seed: int = 7, count: int = 120) -> np.ndarray:
    """Dense random rectangles and circles, rich in corners for keypoint detectors."""
    rng = np.random.default_rng(seed)
    image = gray_canvas(width, height, 90)
    for _ in range(count):
        color = tuple(int(c) for c in rng.integers(0, 256, size=3))
        x, y = int(rng.integers(0, width)), int(rng.integers(0, height))
        if rng.random() < 0.5:
            w, h = int(rng.integers(8, 60)), int(rng.integers(8, 60))
            cv2.rectangle(image, (x, y), (x + w, y + h), color, -1)
        else:
            cv2.circle(image, (x, y), int(rng.integers(5, 30)), color, -1)
    return image


def shape_template() -> np.ndarray:
    """An 80x60 asymmetric pattern, lightly blurred so it survives resampling."""
    image = gray_canvas(80, 60, 200)
    cv2.rectangle(image, (6, 6), (34, 28), (30, 30, 160), -1)
    cv2.circle(image, (58, 18), 12, (40, 150, 40), -1)
    pts = np.array([[10, 54], [40, 34], [70, 54]], dtype=np.int32)
    cv2.fillPoly(image, [pts], (150, 60, 20))
    cv2.line(image, (44, 4), (76, 40), (0, 0, 0), 2)
    return cv2.GaussianBlur(image, (5, 5), 1.2)


def paste(source: np.ndarray, patch: np.ndarray, x: int, y: int) -> np.ndarray:
    out = source.copy()
    h, w = patch.shape[:2]
    out[y : y + h, x : x + w] = patch
    return out


@pytest.fixture(autouse=True)
def fresh_settings():
    """Isolate the settings singleton per test."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings() -> LocatorSettings:
    return LocatorSettings(click_settle_ms=0)


@pytest.fixture
def mouse() -> RecordingMouse:
    return RecordingMouse()


@pytest.fixture
def make_context(mouse):
    """Build a LocatorContext over in-memory fakes."""

    def build(
        frames: list[np.ndarray],
        ocr: IOCREngine | None = None,
        reported_size: tuple[int, int] | None = None,
        mode: NormalizationMode = NormalizationMode.NEVER,
    ) -> LocatorContext:
        screen = FakeScreen(frames, reported_size)
        factory = (lambda: ocr) if ocr is not None else None
        return LocatorContext.create(screen, mouse, ocr_engine_factory=factory, normalization_mode=mode)

    return build
