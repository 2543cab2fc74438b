"""Configuration management for scalesight using pydantic-settings.

Supports environment variables, .env files, and type validation.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScalesightSettings(BaseSettings):
    """Main configuration settings for scalesight."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SCALESIGHT_",
        case_sensitive=False,
        extra="forbid",
    )

    # Feature gate
    visual_matching_enabled: bool = Field(
        True, description="Enable visual template matching (requires OpenCV)"
    )

    # Scale sweep settings
    min_image_width: int = Field(
        320, gt=0, description="Stop downscaling once the target is this narrow"
    )
    max_image_width: int = Field(
        2048, gt=0, description="Stop upscaling once the target is this wide"
    )
    downscale_factor: float = Field(
        0.9, gt=0.0, lt=1.0, description="Factor applied per downscale step"
    )
    upscale_factor: float = Field(1.1, gt=1.0, description="Factor applied per upscale step")
    default_threshold: float = Field(0.9, description="Threshold used when none is given")

    # Diagnostic output
    save_annotated_results: bool = Field(
        True, description="Write an annotated copy of the target on a successful match"
    )
    result_dir: Path = Field(
        default_factory=lambda: Path.cwd() / "target",
        description="Directory for annotated result images",
    )
    result_file_extension: str = Field("png", description="Extension of annotated result images")
    description_date_pattern: str = Field(
        "%Y-%m-%d %H.%M.%S", description="strftime pattern for the default check description"
    )
    annotation_color: tuple[int, int, int] = Field(
        (255, 0, 0), description="BGR color of the match rectangle"
    )
    annotation_thickness: int = Field(10, gt=0, description="Line thickness of the match rectangle")

    # Performance settings
    matcher_threads: int = Field(4, ge=0, description="Number of OpenCV worker threads")

    # Logging
    debug_mode: bool = Field(False, description="Enable debug logging")
    log_path: Path | None = Field(None, description="Directory for log files")

    def validate_widths(self) -> None:
        """Validate that the width floor lies below the width ceiling."""
        if self.min_image_width >= self.max_image_width:
            raise ValueError(
                f"min_image_width ({self.min_image_width}) must be below "
                f"max_image_width ({self.max_image_width})"
            )

    def model_post_init(self, __context) -> None:
        """Post-initialization validation."""
        self.validate_widths()


# Singleton instance
_settings: ScalesightSettings | None = None


def get_settings() -> ScalesightSettings:
    """Get the singleton settings instance.

    Returns:
        ScalesightSettings instance
    """
    global _settings

    if _settings is None:
        _settings = ScalesightSettings()

    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (mainly for testing)."""
    global _settings
    _settings = None
