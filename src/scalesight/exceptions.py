"""Exception hierarchy for scalesight.

This module re-exports all exceptions from domain-specific modules
for convenience.
"""

from .base_exceptions import ScalesightException
from .config_exceptions import (
    ConfigurationError,
    ConfigurationException,
    InvalidConfigurationException,
)
from .vision_exceptions import (
    CorrelationEngineError,
    ImageLoadError,
    ImageWriteError,
    PerceptionException,
    TemplateGeometryError,
)

__all__ = [
    "ScalesightException",
    "ConfigurationException",
    "ConfigurationError",
    "InvalidConfigurationException",
    "PerceptionException",
    "ImageLoadError",
    "ImageWriteError",
    "TemplateGeometryError",
    "CorrelationEngineError",
]
