"""Image backend abstraction for scalesight.

Correlation, scaling and image I/O sit behind small interfaces so the search
logic can run against OpenCV or against scripted fakes.
"""

from .container import VisionBackend
from .interfaces import (
    ICorrelationEngine,
    IDiagnosticSink,
    IImageLoader,
    IImageScaler,
    ScoredLocation,
)

__all__ = [
    "VisionBackend",
    "ICorrelationEngine",
    "IImageScaler",
    "IImageLoader",
    "IDiagnosticSink",
    "ScoredLocation",
]
