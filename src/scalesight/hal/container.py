"""Backend container for dependency injection.

Holds the collaborator instances the matchers need, so callers and tests can
swap any of them without touching global state.
"""

from dataclasses import dataclass

from ..config import ScalesightSettings
from .interfaces import ICorrelationEngine, IDiagnosticSink, IImageLoader, IImageScaler


@dataclass
class VisionBackend:
    """Container for all backend component instances.

    Attributes:
        engine: Single-scale correlation implementation
        scaler: Resize-by-factor implementation
        loader: Image file reader
        sink: Writer for annotated diagnostic images

    Example:
        >>> from scalesight.config import get_settings
        >>> backend = VisionBackend.create_from_settings(get_settings())
        >>> surface = backend.engine.correlate(screenshot, button)
    """

    engine: ICorrelationEngine
    scaler: IImageScaler
    loader: IImageLoader
    sink: IDiagnosticSink

    @classmethod
    def create_from_settings(cls, settings: ScalesightSettings) -> "VisionBackend":
        """Create the OpenCV backend.

        Args:
            settings: Settings providing the OpenCV thread count

        Returns:
            VisionBackend with OpenCV implementations

        Raises:
            ImportError: If OpenCV is not installed
        """
        from .implementations.opencv_correlation import (
            OpenCVCorrelationEngine,
            OpenCVImageScaler,
        )
        from .implementations.opencv_image_io import OpenCVDiagnosticWriter, OpenCVImageLoader

        return cls(
            engine=OpenCVCorrelationEngine(threads=settings.matcher_threads),
            scaler=OpenCVImageScaler(),
            loader=OpenCVImageLoader(),
            sink=OpenCVDiagnosticWriter(),
        )
