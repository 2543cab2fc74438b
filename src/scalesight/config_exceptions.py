"""Configuration exceptions.

This module contains exceptions for disabled features and invalid settings.
"""

from .base_exceptions import ScalesightException


class ConfigurationException(ScalesightException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration is invalid."""

    def __init__(self, config_key: str, reason: str, **kwargs) -> None:
        """Initialize with config details."""
        super().__init__(
            f"Invalid configuration for '{config_key}': {reason}",
            error_code="INVALID_CONFIG",
            context={"config_key": config_key, "reason": reason, **kwargs},
        )


class ConfigurationError(ConfigurationException):
    """Raised when a capability is switched off by configuration."""

    def __init__(self, config_key: str, reason: str, **kwargs) -> None:
        """Initialize with configuration details."""
        super().__init__(
            f"Configuration error for '{config_key}': {reason}",
            error_code="CONFIGURATION_ERROR",
            context={"config_key": config_key, "reason": reason, **kwargs},
        )
