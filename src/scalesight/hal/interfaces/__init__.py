"""Backend interface definitions.

These interfaces define the contracts that all backend implementations must follow.
"""

from .correlation_engine import ICorrelationEngine, IImageScaler, ScoredLocation
from .image_io import IDiagnosticSink, IImageLoader

__all__ = [
    "ScoredLocation",
    "ICorrelationEngine",
    "IImageScaler",
    "IImageLoader",
    "IDiagnosticSink",
]
