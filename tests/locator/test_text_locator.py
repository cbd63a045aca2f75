"""Tests for the text locator and the shared locator context."""

import pytest
from conftest import FakeScreen, RecordingMouse, ScriptedOCR, gray_canvas, ocr_box

from zoeylocator.hal import (
    HALConfig,
    HALContainer,
    IWindowManager,
    MouseButton,
    NormalizationMode,
    Window,
)
from zoeylocator.locator import LocatorContext, TextLocator
from zoeylocator.model import LocatorOptions, MatchTier, Point, Region
from zoeylocator.vision_exceptions import OCRUnavailableError, TextNotFoundException

SCREEN = gray_canvas(640, 480, 230)


@pytest.fixture
def engine() -> ScriptedOCR:
    return ScriptedOCR(
        [
            ocr_box("File", 10, 5, 30, 14),
            ocr_box("Submit", 100, 50, 60, 20),
            ocr_box("Cancel", 200, 50, 60, 20),
        ]
    )


def options(**overrides) -> LocatorOptions:
    values = {"timeout_ms": 0, "poll_interval_ms": 10}
    values.update(overrides)
    return LocatorOptions(**values)


class TestFindText:
    def test_exact_match(self, make_context, settings, engine) -> None:
        match = TextLocator(make_context([SCREEN], ocr=engine), settings).find_text(
            "submit", options()
        )
        assert match is not None
        assert match.text == "Submit"
        assert match.tier is MatchTier.EXACT
        assert match.position == Point(130, 60)

    def test_fuzzy_match_uses_similarity_threshold(self, make_context, settings, engine) -> None:
        locator = TextLocator(make_context([SCREEN], ocr=engine), settings)

        assert locator.find_text("Cancle", options()) is None
        match = locator.find_text("Cancle", options(similarity_threshold=0.6))
        assert match is not None
        assert match.tier is MatchTier.SIMILAR

    def test_absent_returns_none(self, make_context, settings, engine) -> None:
        assert TextLocator(make_context([SCREEN], ocr=engine), settings).find_text(
            "Preferences", options(timeout_ms=5000)
        ) is None
        assert engine.calls == 1

    def test_region_offsets_position(self, make_context, settings, engine) -> None:
        context = make_context([SCREEN], ocr=engine)

        match = TextLocator(context, settings).find_text(
            "Submit", options(region=Region(200, 100, 300, 200))
        )

        assert match is not None
        assert match.position == Point(330, 160)
        assert match.quad.top_left == Point(300, 150)
        assert context.screen_capture.region_calls == [(200, 100, 300, 200)]

    def test_text_exists(self, make_context, settings, engine) -> None:
        locator = TextLocator(make_context([SCREEN], ocr=engine), settings)
        assert locator.text_exists("File", options())
        assert not locator.text_exists("Window", options())


class TestWaitForText:
    def test_times_out_with_typed_error(self, make_context, settings, engine) -> None:
        with pytest.raises(TextNotFoundException) as exc_info:
            TextLocator(make_context([SCREEN], ocr=engine), settings).wait_for_text(
                "Preferences", options(timeout_ms=50)
            )
        assert exc_info.value.error_code == "ELEMENT_NOT_FOUND"
        assert engine.calls >= 2

    def test_finds_text_that_appears_later(self, make_context, settings) -> None:
        class AppearingOCR(ScriptedOCR):
            def recognize(self, image):
                super().recognize(image)
                return list(self.results) if self.calls >= 3 else []

        engine = AppearingOCR([ocr_box("Done", 20, 20, 40, 10)])

        match = TextLocator(make_context([SCREEN], ocr=engine), settings).wait_for_text(
            "Done", options(timeout_ms=5000)
        )

        assert match.text == "Done"
        assert engine.calls == 3

    def test_unavailable_engine_fails_fast(self, make_context, settings) -> None:
        context = make_context([SCREEN])

        with pytest.raises(OCRUnavailableError):
            TextLocator(context, settings).wait_for_text("Submit", options(timeout_ms=5000))
        assert context.screen_capture.capture_count == 1

    def test_unavailable_engine_is_not_a_miss(self, make_context, settings) -> None:
        with pytest.raises(OCRUnavailableError):
            TextLocator(make_context([SCREEN]), settings).text_exists("Submit", options())


class TestClickText:
    def test_clicks_box_center(self, make_context, settings, mouse, engine) -> None:
        TextLocator(make_context([SCREEN], ocr=engine), settings).click_text("Submit", options())
        assert mouse.events == [("move", 130, 60), ("click", MouseButton.LEFT, False)]

    def test_click_with_region_and_offset(self, make_context, settings, mouse, engine) -> None:
        TextLocator(make_context([SCREEN], ocr=engine), settings).click_text(
            "Cancel",
            options(region=Region(10, 10, 400, 300), click_offset=Point(0, 3), right_click=True),
        )
        assert mouse.events == [("move", 240, 73), ("click", MouseButton.RIGHT, False)]

    def test_click_grid_cell_of_text_box(self, make_context, settings, mouse, engine) -> None:
        TextLocator(make_context([SCREEN], ocr=engine), settings).click_text(
            "Submit", options(grid="1.2.1.2")
        )
        assert mouse.events[0] == ("move", 145, 60)

    def test_not_found_never_clicks(self, make_context, settings, mouse, engine) -> None:
        with pytest.raises(TextNotFoundException):
            TextLocator(make_context([SCREEN], ocr=engine), settings).click_text("Quit", options())
        assert mouse.events == []


class TestRecognize:
    def test_recognize_maps_boxes_to_screen(self, make_context, settings, engine) -> None:
        results = TextLocator(make_context([SCREEN], ocr=engine), settings).recognize(
            options(region=Region(50, 40, 400, 300))
        )
        assert [r.text for r in results] == ["File", "Submit", "Cancel"]
        assert results[0].quad.top_left == Point(60, 45)

    def test_get_all_text(self, make_context, settings, engine) -> None:
        text = TextLocator(make_context([SCREEN], ocr=engine), settings).get_all_text(options())
        assert text == "File Submit Cancel"

    def test_engine_shared_across_locators(self, make_context, settings, engine) -> None:
        built = []

        def factory():
            built.append(1)
            return engine

        context = LocatorContext.create(FakeScreen([SCREEN]), RecordingMouse(), factory, "never")
        TextLocator(context, settings).find_text("File", options())
        TextLocator(context, settings).find_text("Submit", options())

        assert built == [1]
        assert engine.calls == 2


class TestLocatorContext:
    def test_from_hal(self, engine) -> None:
        screen = FakeScreen([SCREEN])
        hal = HALContainer(
            screen_capture=screen,
            mouse_controller=RecordingMouse(),
            ocr_engine_factory=lambda: engine,
            config=HALConfig(ocr_backend="none", normalization_mode="always"),
        )

        context = LocatorContext.from_hal(hal)

        assert context.screen_capture is screen
        assert context.normalizer.mode is NormalizationMode.ALWAYS
        assert not context.recognizer.is_initialized

    def test_reset_display_redetects_scale(self) -> None:
        screen = FakeScreen([gray_canvas(400, 300)], reported_size=(200, 150))
        context = LocatorContext.create(screen, RecordingMouse(), normalization_mode="always")

        assert context.normalizer.scale() == (2.0, 2.0)
        screen.reported_size = (400, 300)
        context.reset_display()

        assert context.normalizer.scale() == (1.0, 1.0)

    def test_window_region_restricts_search(self, make_context, settings, engine) -> None:
        class StaticWindows(IWindowManager):
            def list_windows(self) -> list[Window]:
                return [Window(handle=1, title="Editor", x=40, y=30, width=300, height=200)]

            def activate_window(self, title: str) -> bool:
                return any(title.lower() in w.title.lower() for w in self.list_windows())

        windows = StaticWindows()
        editor = windows.list_windows()[0]
        context = make_context([SCREEN], ocr=engine)

        match = TextLocator(context, settings).find_text("File", options(region=editor.region))

        assert windows.activate_window("editor")
        assert match is not None
        assert match.position == Point(65, 42)
        assert context.screen_capture.region_calls == [(40, 30, 300, 200)]

    def test_context_manager_closes_engine(self, make_context, settings, engine) -> None:
        with make_context([SCREEN], ocr=engine) as context:
            TextLocator(context, settings).find_text("File", options())
        assert engine.closed
