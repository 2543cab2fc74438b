"""Image loading and diagnostic output interface definitions."""

from abc import ABC, abstractmethod
from pathlib import Path

import numpy as np


class IImageLoader(ABC):
    """Interface for reading images from storage."""

    @abstractmethod
    def load(self, path: str | Path) -> np.ndarray:
        """Load an image.

        Args:
            path: Image file path

        Returns:
            Decoded image

        Raises:
            ImageLoadError: If the file is missing or cannot be decoded
        """
        pass


class IDiagnosticSink(ABC):
    """Interface for persisting annotated match images."""

    @abstractmethod
    def save(self, image: np.ndarray, path: str | Path) -> Path:
        """Write an image.

        Args:
            image: Image to write
            path: Destination file path

        Returns:
            Path that was written

        Raises:
            ImageWriteError: If the image cannot be written
        """
        pass
