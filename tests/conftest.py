"""Pytest configuration and fixtures."""

import os
from collections.abc import Callable
from dataclasses import dataclass

import cv2
import numpy as np
import pytest

from scalesight.config import ScalesightSettings, reset_settings
from scalesight.exceptions import CorrelationEngineError, TemplateGeometryError
from scalesight.hal.interfaces import ICorrelationEngine, IImageScaler, ScoredLocation


@dataclass(frozen=True)
class FakeImage:
    """Stand-in image that only carries its size."""

    width: int
    height: int

    @property
    def shape(self) -> tuple[int, int]:
        return (self.height, self.width)


@dataclass(frozen=True)
class FakeSurface:
    """Score surface reduced to the scripted best score."""

    score: float
    top_left: tuple[int, int]


class ScriptedEngine(ICorrelationEngine):
    """Correlation engine that returns scripted scores in call order.

    Rounds beyond the script return ``default``. Images the template does not
    fit into raise TemplateGeometryError without consuming a scripted score.
    """

    def __init__(
        self,
        scores: list[float] | None = None,
        default: float = 0.0,
        top_left: tuple[int, int] = (10, 20),
        fail_on_round: int | None = None,
        error: Exception | None = None,
    ) -> None:
        self.scores = list(scores or [])
        self.default = default
        self.top_left = top_left
        self.fail_on_round = fail_on_round
        self.error = error
        self.widths: list[int] = []
        self.skipped_widths: list[int] = []

    def correlate(self, target, template):
        if template.shape[1] > target.shape[1] or template.shape[0] > target.shape[0]:
            self.skipped_widths.append(target.shape[1])
            raise TemplateGeometryError(
                (target.shape[1], target.shape[0]), (template.shape[1], template.shape[0])
            )

        round_index = len(self.widths)
        if self.fail_on_round is not None and round_index == self.fail_on_round:
            raise self.error  # type: ignore[misc]

        self.widths.append(target.shape[1])
        score = self.scores[round_index] if round_index < len(self.scores) else self.default
        return FakeSurface(score, self.top_left)

    def locate_best_score(self, surface):
        return ScoredLocation(score=surface.score, top_left=surface.top_left)


class RecordingScaler(IImageScaler):
    """Scaler that resizes FakeImages and records every call.

    Like the OpenCV scaler, it refuses to produce an empty image.
    """

    def __init__(self, error: Exception | None = None, fail_on_call: int | None = None) -> None:
        self.calls: list[tuple[int, float]] = []
        self.error = error
        self.fail_on_call = fail_on_call

    def resize(self, image, width_factor, height_factor):
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise self.error  # type: ignore[misc]
        self.calls.append((image.width, width_factor))
        width = int(image.width * width_factor)
        height = int(image.height * height_factor)
        if width <= 0 or height <= 0:
            raise CorrelationEngineError(f"Cannot resize to {width}x{height}", operation="resize")
        return FakeImage(width, height)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep the settings singleton and SCALESIGHT_* env vars out of tests."""
    for name in list(os.environ):
        if name.startswith("SCALESIGHT_"):
            monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings(tmp_path) -> ScalesightSettings:
    """Settings writing result images to a temporary directory."""
    return ScalesightSettings(result_dir=tmp_path / "results", matcher_threads=1)


@pytest.fixture
def fake_image() -> Callable[[int, int], FakeImage]:
    """Factory for size-only images."""
    return FakeImage


@pytest.fixture
def scripted_engine() -> type[ScriptedEngine]:
    return ScriptedEngine


@pytest.fixture
def recording_scaler() -> type[RecordingScaler]:
    return RecordingScaler


@pytest.fixture
def marked_screen() -> tuple[np.ndarray, np.ndarray]:
    """1000x1000 screen with a textured 100x100 red square at (400, 400).

    Returns:
        (screen, template) where the template is an exact copy of the square
    """
    screen = np.full((1000, 1000, 3), 200, dtype=np.uint8)
    screen[400:500, 400:500] = (0, 0, 255)
    # Texture so the square is not a flat patch
    cv2.line(screen, (400, 400), (499, 499), (255, 255, 255), 3)
    cv2.line(screen, (499, 400), (400, 499), (255, 255, 255), 3)
    cv2.rectangle(screen, (430, 430), (470, 470), (0, 0, 0), -1)
    template = screen[400:500, 400:500].copy()
    return screen, template


@pytest.fixture
def checker_screen() -> tuple[np.ndarray, np.ndarray]:
    """1000x1000 gray screen with a blurred 4x4 checkerboard at (400, 400).

    Returns:
        (screen, template) where the template is the checkerboard region
    """
    screen = np.full((1000, 1000, 3), 128, dtype=np.uint8)
    rows, cols = np.indices((100, 100))
    checker = (((rows // 25) + (cols // 25)) % 2 * 200 + 30).astype(np.uint8)
    screen[400:500, 400:500] = checker[:, :, np.newaxis]
    screen = cv2.GaussianBlur(screen, (0, 0), 3)
    template = screen[400:500, 400:500].copy()
    return screen, template
