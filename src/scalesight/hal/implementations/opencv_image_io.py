"""OpenCV-based image loading, annotation and diagnostic output."""

from pathlib import Path
from typing import Any

import cv2
import numpy as np

from ...exceptions import ImageLoadError, ImageWriteError
from ...logging import get_logger
from ..interfaces.image_io import IDiagnosticSink, IImageLoader
from .opencv_correlation import to_opencv

logger = get_logger(__name__)


class OpenCVImageLoader(IImageLoader):
    """Load images with cv2.imread."""

    def __init__(self, flags: int = cv2.IMREAD_COLOR) -> None:
        self.flags = flags

    def load(self, path: str | Path) -> np.ndarray:
        """Load an image as a BGR array.

        Raises:
            ImageLoadError: If the file is missing or cannot be decoded
        """
        path = Path(path)
        if not path.is_file():
            raise ImageLoadError(str(path), "file not found")

        image = cv2.imread(str(path), self.flags)
        if image is None:
            raise ImageLoadError(str(path), "unsupported or corrupt image data")

        logger.debug("image_loaded", path=str(path), width=image.shape[1], height=image.shape[0])
        return image


class OpenCVDiagnosticWriter(IDiagnosticSink):
    """Write annotated match images with cv2.imwrite."""

    def save(self, image: np.ndarray, path: str | Path) -> Path:
        """Write an image, creating parent directories as needed.

        Raises:
            ImageWriteError: If the directory cannot be created or encoding fails
        """
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ImageWriteError(str(path), str(e)) from e

        try:
            written = cv2.imwrite(str(path), image)
        except cv2.error as e:
            raise ImageWriteError(str(path), str(e)) from e

        if not written:
            raise ImageWriteError(str(path), "encoder rejected the image")

        return path


def annotate_match(
    image: Any,
    top_left: tuple[int, int],
    size: tuple[int, int],
    color: tuple[int, int, int] = (255, 0, 0),
    thickness: int = 10,
) -> np.ndarray:
    """Draw the matched region onto a copy of the image.

    Args:
        image: Image the match was found in (numpy array or PIL image)
        top_left: Top-left corner of the match
        size: Template (width, height)
        color: Rectangle color (BGR)
        thickness: Line thickness in pixels

    Returns:
        Annotated copy; the input is left untouched
    """
    annotated = to_opencv(image).copy()
    if annotated.ndim == 2:
        annotated = cv2.cvtColor(annotated, cv2.COLOR_GRAY2BGR)

    x, y = top_left
    width, height = size
    cv2.rectangle(annotated, (x, y), (x + width, y + height), color, thickness)
    return annotated
