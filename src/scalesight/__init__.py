"""scalesight: scale-independent template matching for visual UI checks.

Finds a reference image (template) inside a screenshot (target) whose
resolution or DPI scaling is unknown.

Usage:
    from scalesight import TemplateMatcher

    result = TemplateMatcher().match("screen.png", "login_button.png", threshold=0.9)
    if result.found:
        print(result.location)
"""

from .config import ScalesightSettings, get_settings
from .exceptions import (
    ConfigurationError,
    CorrelationEngineError,
    ImageLoadError,
    ImageWriteError,
    ScalesightException,
    TemplateGeometryError,
)
from .find import MatchResult, MultiScaleMatcher, ScaleSweep, TemplateMatcher
from .hal import VisionBackend

__version__ = "0.1.0"

__all__ = [
    "TemplateMatcher",
    "MultiScaleMatcher",
    "ScaleSweep",
    "MatchResult",
    "VisionBackend",
    "ScalesightSettings",
    "get_settings",
    "ScalesightException",
    "ConfigurationError",
    "CorrelationEngineError",
    "ImageLoadError",
    "ImageWriteError",
    "TemplateGeometryError",
]
