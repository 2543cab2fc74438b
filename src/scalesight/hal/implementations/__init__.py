"""OpenCV backend implementations."""

from .opencv_correlation import OpenCVCorrelationEngine, OpenCVImageScaler, to_opencv
from .opencv_image_io import OpenCVDiagnosticWriter, OpenCVImageLoader, annotate_match

__all__ = [
    "OpenCVCorrelationEngine",
    "OpenCVImageScaler",
    "OpenCVImageLoader",
    "OpenCVDiagnosticWriter",
    "annotate_match",
    "to_opencv",
]
