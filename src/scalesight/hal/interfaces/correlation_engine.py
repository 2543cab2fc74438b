"""Correlation and scaling interface definitions."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import numpy as np


@dataclass(frozen=True)
class ScoredLocation:
    """Correlation score and the top-left pixel where it was reached."""

    score: float
    top_left: tuple[int, int]


class ICorrelationEngine(ABC):
    """Interface for single-scale template correlation."""

    @abstractmethod
    def correlate(self, target: Any, template: Any) -> np.ndarray:
        """Correlate the template against every valid placement in the target.

        Args:
            target: Image to search in
            template: Image to search for

        Returns:
            Score surface of shape (target_h - template_h + 1, target_w - template_w + 1),
            higher values meaning a better match

        Raises:
            TemplateGeometryError: If the template does not fit inside the target
            CorrelationEngineError: If the backend fails
        """
        pass

    @abstractmethod
    def locate_best_score(self, surface: np.ndarray) -> ScoredLocation:
        """Find the highest score on a score surface.

        Args:
            surface: Score surface returned by correlate()

        Returns:
            Best score and its top-left (x, y) position
        """
        pass


class IImageScaler(ABC):
    """Interface for resizing images by a factor."""

    @abstractmethod
    def resize(self, image: Any, width_factor: float, height_factor: float) -> np.ndarray:
        """Resize an image.

        Args:
            image: Image to resize
            width_factor: Horizontal scale factor
            height_factor: Vertical scale factor

        Returns:
            Resized image

        Raises:
            CorrelationEngineError: If the backend fails
        """
        pass
