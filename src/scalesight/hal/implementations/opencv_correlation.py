"""OpenCV-based correlation and scaling implementation."""

from typing import Any

import cv2
import numpy as np
from PIL import Image

from ...exceptions import CorrelationEngineError, TemplateGeometryError
from ...logging import get_logger
from ..interfaces.correlation_engine import ICorrelationEngine, IImageScaler, ScoredLocation

logger = get_logger(__name__)


def to_opencv(image: Any) -> np.ndarray:
    """Convert supported image formats to an OpenCV array.

    Args:
        image: PIL Image or numpy array

    Returns:
        OpenCV image (BGR or single channel)

    Raises:
        CorrelationEngineError: If the format is unsupported or the image is empty
    """
    if isinstance(image, np.ndarray):
        array = image
    elif isinstance(image, Image.Image):
        if image.mode not in ("RGB", "L"):
            image = image.convert("RGB")
        array = np.array(image)
        if array.ndim == 3:
            array = cv2.cvtColor(array, cv2.COLOR_RGB2BGR)
    else:
        raise CorrelationEngineError(
            f"Unsupported image type: {type(image)}. Expected PIL Image or numpy array",
            operation="convert",
        )

    if array.size == 0:
        raise CorrelationEngineError("Image is empty", operation="convert")

    return array


def _match_channels(target: np.ndarray, template: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Bring target and template to the same channel layout.

    Alpha channels are dropped; a grayscale image is promoted to BGR when the
    other one has color.
    """
    if target.ndim == 3 and target.shape[2] == 4:
        target = cv2.cvtColor(target, cv2.COLOR_BGRA2BGR)
    if template.ndim == 3 and template.shape[2] == 4:
        template = cv2.cvtColor(template, cv2.COLOR_BGRA2BGR)

    if target.ndim == 3 and template.ndim == 2:
        template = cv2.cvtColor(template, cv2.COLOR_GRAY2BGR)
    elif target.ndim == 2 and template.ndim == 3:
        target = cv2.cvtColor(target, cv2.COLOR_GRAY2BGR)

    return target, template


class OpenCVCorrelationEngine(ICorrelationEngine):
    """Normalized cross-correlation (TM_CCOEFF_NORMED) using OpenCV."""

    method = cv2.TM_CCOEFF_NORMED

    def __init__(self, threads: int | None = None) -> None:
        """Initialize the engine.

        Args:
            threads: Number of OpenCV worker threads (None leaves OpenCV's default)
        """
        if threads is not None:
            cv2.setNumThreads(threads)
        logger.debug("opencv_correlation_engine_initialized", threads=threads)

    def correlate(self, target: Any, template: Any) -> np.ndarray:
        """Correlate the template against every valid placement in the target.

        Args:
            target: Image to search in
            template: Image to search for

        Returns:
            Score surface of normalized coefficients in [-1, 1]

        Raises:
            TemplateGeometryError: If the surface would have non-positive dimensions
            CorrelationEngineError: If OpenCV fails
        """
        target_cv, template_cv = _match_channels(to_opencv(target), to_opencv(template))

        target_h, target_w = target_cv.shape[:2]
        template_h, template_w = template_cv.shape[:2]
        if target_w - template_w + 1 <= 0 or target_h - template_h + 1 <= 0:
            raise TemplateGeometryError((target_w, target_h), (template_w, template_h))

        try:
            surface = cv2.matchTemplate(target_cv, template_cv, self.method)
        except cv2.error as e:
            raise CorrelationEngineError(str(e), operation="matchTemplate") from e

        # Flat windows produce non-finite coefficients on some builds
        return np.nan_to_num(surface, nan=-1.0, posinf=1.0, neginf=-1.0)

    def locate_best_score(self, surface: np.ndarray) -> ScoredLocation:
        """Find the highest score on a score surface.

        Args:
            surface: Score surface returned by correlate()

        Returns:
            Best score and its top-left (x, y) position
        """
        try:
            _, max_val, _, max_loc = cv2.minMaxLoc(surface)
        except cv2.error as e:
            raise CorrelationEngineError(str(e), operation="minMaxLoc") from e

        return ScoredLocation(score=float(max_val), top_left=(int(max_loc[0]), int(max_loc[1])))


class OpenCVImageScaler(IImageScaler):
    """Image resizing using cv2.resize."""

    def __init__(self, interpolation: int = cv2.INTER_LINEAR) -> None:
        """Initialize the scaler.

        Args:
            interpolation: OpenCV interpolation flag
        """
        self.interpolation = interpolation

    def resize(self, image: Any, width_factor: float, height_factor: float) -> np.ndarray:
        """Resize an image by the given factors.

        The new size is truncated to whole pixels.

        Raises:
            CorrelationEngineError: If the result would be empty or OpenCV fails
        """
        array = to_opencv(image)
        height, width = array.shape[:2]
        new_width = int(width * width_factor)
        new_height = int(height * height_factor)

        if new_width <= 0 or new_height <= 0:
            raise CorrelationEngineError(
                f"Cannot resize {width}x{height} to {new_width}x{new_height}",
                operation="resize",
            )

        try:
            return cv2.resize(array, (new_width, new_height), interpolation=self.interpolation)
        except cv2.error as e:
            raise CorrelationEngineError(str(e), operation="resize") from e
