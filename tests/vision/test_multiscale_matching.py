"""Tests for multi-scale template matching."""

import cv2
import pytest
from conftest import gray_canvas, paste, shape_template

from zoeylocator.model import MatchMethod
from zoeylocator.vision import ExactTemplateMatcher, MultiScaleTemplateMatcher
from zoeylocator.vision_exceptions import SizeMismatchError

SCALES = [0.5, 0.75, 1.0, 1.25, 1.5, 2.0]


def scaled_scene(scale: float):
    """Paste the template resized by ``scale`` into a flat 480x360 source."""
    template = shape_template()
    h, w = template.shape[:2]
    size = (int(round(w * scale)), int(round(h * scale)))
    interpolation = cv2.INTER_AREA if scale < 1.0 else cv2.INTER_LINEAR
    patch = cv2.resize(template, size, interpolation=interpolation)
    x, y = 150, 110
    source = paste(gray_canvas(480, 360), patch, x, y)
    return template, source, (x + size[0] // 2, y + size[1] // 2)


@pytest.mark.slow
@pytest.mark.parametrize("scale", SCALES)
def test_found_at_every_scale(scale: float) -> None:
    template, source, expected_center = scaled_scene(scale)

    result = MultiScaleTemplateMatcher(threshold=0.8).find_best(template, source)

    assert result is not None
    assert 0.8 <= result.confidence <= 1.0
    assert result.method is MatchMethod.MULTISCALE_TEMPLATE
    assert abs(result.center.x - expected_center[0]) <= 4
    assert abs(result.center.y - expected_center[1]) <= 4


@pytest.mark.parametrize("scale", [0.5, 2.0])
def test_exact_matcher_misses_rescaled_template(scale: float) -> None:
    template, source, _ = scaled_scene(scale)
    assert ExactTemplateMatcher(threshold=0.8).find_best(template, source) is None


def test_exact_matcher_hits_native_scale() -> None:
    template, source, expected_center = scaled_scene(1.0)
    result = ExactTemplateMatcher(threshold=0.8).find_best(template, source)
    assert result is not None
    assert (result.center.x, result.center.y) == expected_center


def test_downsamples_large_sources() -> None:
    template = shape_template()
    source = paste(gray_canvas(1600, 1000), template, 700, 500)

    result = MultiScaleTemplateMatcher(threshold=0.8, scale_max=800).find_best(template, source)

    assert result is not None
    assert abs(result.center.x - 740) <= 6
    assert abs(result.center.y - 530) <= 6


def test_flat_source_has_no_match() -> None:
    result = MultiScaleTemplateMatcher(threshold=0.8).find_best(shape_template(), gray_canvas(300, 300))
    assert result is None


def test_query_larger_than_source_raises() -> None:
    with pytest.raises(SizeMismatchError):
        MultiScaleTemplateMatcher().find_best(gray_canvas(200, 50), gray_canvas(100, 100))
