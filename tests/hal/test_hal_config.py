"""Tests for HAL configuration, container and initialization."""

import pytest
from conftest import FakeScreen, RecordingMouse, gray_canvas

from zoeylocator.hal import HALConfig, HALContainer, initialize_hal, shutdown_hal
from zoeylocator.hal.initialization import _create_ocr_engine_factory
from zoeylocator.hardware_exceptions import (
    HALError,
    HALInitializationError,
    ScreenCaptureException,
    hal_error_context,
)


class TestHALConfig:
    def test_defaults(self, monkeypatch) -> None:
        for name in ("CAPTURE_BACKEND", "INPUT_BACKEND", "OCR_BACKEND", "OCR_LANGUAGES"):
            monkeypatch.delenv(f"ZOEYLOCATOR_{name}", raising=False)

        config = HALConfig()

        assert config.capture_backend == "mss"
        assert config.input_backend == "pynput"
        assert config.ocr_backend == "easyocr"
        assert config.ocr_languages == ["en"]
        assert config.validate()

    def test_environment_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("ZOEYLOCATOR_OCR_BACKEND", "none")
        monkeypatch.setenv("ZOEYLOCATOR_OCR_LANGUAGES", "en, ja ,")
        monkeypatch.setenv("ZOEYLOCATOR_OCR_GPU_ENABLED", "TRUE")
        monkeypatch.setenv("ZOEYLOCATOR_NORMALIZATION_MODE", "never")

        config = HALConfig()

        assert config.ocr_backend == "none"
        assert config.ocr_languages == ["en", "ja"]
        assert config.ocr_gpu_enabled is True
        assert config.normalization_mode == "never"

    @pytest.mark.parametrize(
        "field, value, message",
        [
            ("capture_backend", "x11grab", "capture backend"),
            ("input_backend", "xdotool", "input backend"),
            ("ocr_backend", "tesseract", "OCR backend"),
            ("normalization_mode", "sometimes", "normalization mode"),
        ],
    )
    def test_validate_rejects_unknown_values(self, field, value, message) -> None:
        config = HALConfig(**{field: value})
        with pytest.raises(ValueError, match=message):
            config.validate()

    def test_ocr_requires_a_language(self) -> None:
        with pytest.raises(ValueError, match="language"):
            HALConfig(ocr_backend="easyocr", ocr_languages=[]).validate()
        assert HALConfig(ocr_backend="none", ocr_languages=[]).validate()

    def test_dict_round_trip(self) -> None:
        config = HALConfig(ocr_backend="none", ocr_languages=["de"], normalization_mode="always")
        assert HALConfig.from_dict(config.to_dict()) == config
        assert "ocr=none" in str(config)


class TestInitialization:
    def test_invalid_config_is_typed_error(self) -> None:
        with pytest.raises(HALInitializationError) as exc_info:
            initialize_hal(HALConfig(capture_backend="x11grab"))
        assert exc_info.value.error_code == "HAL_INIT_FAILED"
        assert "capture backend" in str(exc_info.value)

    def test_ocr_factory_is_deferred(self) -> None:
        assert _create_ocr_engine_factory(HALConfig(ocr_backend="none")) is None
        assert callable(_create_ocr_engine_factory(HALConfig(ocr_backend="easyocr")))

    def test_shutdown_tolerates_none(self) -> None:
        shutdown_hal(None)

    def test_shutdown_closes_capture(self) -> None:
        class ClosingScreen(FakeScreen):
            closed = False

            def close(self) -> None:
                self.closed = True

        screen = ClosingScreen([gray_canvas(10, 10)])
        shutdown_hal(HALContainer(screen_capture=screen, mouse_controller=RecordingMouse()))
        assert screen.closed


class TestHalErrorContext:
    def test_wraps_foreign_errors(self) -> None:
        with pytest.raises(HALError) as exc_info:
            with hal_error_context("screen_size", monitor=1):
                raise OSError("XGetImage failed")

        assert "screen_size failed" in str(exc_info.value)
        assert exc_info.value.context == {"operation": "screen_size", "monitor": 1}
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_passes_library_errors_through(self) -> None:
        with pytest.raises(ScreenCaptureException):
            with hal_error_context("capture"):
                raise ScreenCaptureException("display gone")
