"""Multi-scale search against the real OpenCV backend."""

import cv2
import numpy as np
import pytest

from scalesight.find import MultiScaleMatcher
from scalesight.hal.implementations import (
    OpenCVCorrelationEngine,
    OpenCVImageScaler,
    annotate_match,
)


@pytest.fixture
def matcher() -> MultiScaleMatcher:
    return MultiScaleMatcher(
        OpenCVCorrelationEngine(threads=1), OpenCVImageScaler(), annotator=annotate_match
    )


def test_exact_copy_found_at_original_scale(matcher, marked_screen):
    screen, template = marked_screen

    result = matcher.match(screen, template, 0.95)

    assert result.found is True
    assert result.location == (450, 450)
    assert result.scale == 1.0
    assert result.scales_tried == [1.0]
    assert result.score == pytest.approx(1.0, abs=1e-3)
    assert result.scaled_size == (1000, 1000)


def test_annotated_image_is_outlined_copy(matcher, marked_screen):
    screen, template = marked_screen
    original = screen.copy()

    result = matcher.match(screen, template, 0.95)

    np.testing.assert_array_equal(screen, original)
    assert result.annotated_image.shape == screen.shape
    # Rectangle edge at the top-left corner of the match is blue
    assert tuple(result.annotated_image[400, 420]) == (255, 0, 0)


def test_shrunken_screenshot_found_by_upscaling(matcher, checker_screen):
    screen, template = checker_screen
    small = cv2.resize(screen, (683, 683), interpolation=cv2.INTER_AREA)

    result = matcher.match(small, template, 0.9)

    assert result.found is True
    assert result.scale > 1.0
    # Center mapped back to the 1000px original lands on the checkerboard center
    x, y = result.location
    width, height = result.scaled_size
    assert x / width * 1000 == pytest.approx(450, abs=15)
    assert y / height * 1000 == pytest.approx(450, abs=15)


def test_noise_screen_does_not_contain_template(matcher, marked_screen):
    _, template = marked_screen
    rng = np.random.default_rng(7)
    noise = rng.integers(0, 256, size=(600, 600, 3), dtype=np.uint8)

    result = matcher.match(noise, template, 0.9)

    assert result.found is False
    assert result.location is None
    assert result.annotated_image is None
    assert -1.0 <= result.score < 0.9
    assert result.scales_tried


def test_template_larger_than_screen_is_not_found(matcher, marked_screen):
    screen, _ = marked_screen
    banner = np.full((2100, 2100, 3), 90, dtype=np.uint8)

    result = matcher.match(screen, banner, 0.5)

    assert result.found is False
    assert result.scales_tried == []


def test_wide_short_target_ends_without_backend_error(matcher):
    rng = np.random.default_rng(5)
    strip = rng.integers(0, 256, size=(6, 1000, 3), dtype=np.uint8)
    template = rng.integers(0, 256, size=(3, 10, 3), dtype=np.uint8)

    result = matcher.match(strip, template, 0.99)

    assert result.found is False
    assert result.scales_tried
