"""Vision and matching exceptions.

This module contains exceptions for image I/O, template geometry and
failures of the correlation backend.
"""

from .base_exceptions import ScalesightException


class PerceptionException(ScalesightException):
    """Base exception for perception/matching errors."""

    pass


class ImageLoadError(PerceptionException, OSError):
    """Raised when an image file is missing or cannot be decoded."""

    def __init__(self, image_path: str, reason: str, **kwargs) -> None:
        """Initialize with image details."""
        super().__init__(
            f"Cannot load image '{image_path}': {reason}",
            error_code="IMAGE_LOAD_FAILED",
            context={"image_path": image_path, "reason": reason, **kwargs},
        )


class ImageWriteError(PerceptionException, OSError):
    """Raised when an image cannot be written."""

    def __init__(self, image_path: str, reason: str, **kwargs) -> None:
        """Initialize with image details."""
        super().__init__(
            f"Cannot write image '{image_path}': {reason}",
            error_code="IMAGE_WRITE_FAILED",
            context={"image_path": image_path, "reason": reason, **kwargs},
        )


class TemplateGeometryError(PerceptionException):
    """Raised when the template does not fit inside the (scaled) target."""

    def __init__(
        self, target_size: tuple[int, int], template_size: tuple[int, int], **kwargs
    ) -> None:
        """Initialize with both sizes as (width, height)."""
        super().__init__(
            f"Template {template_size[0]}x{template_size[1]} does not fit "
            f"into target {target_size[0]}x{target_size[1]}",
            error_code="TEMPLATE_GEOMETRY",
            context={"target_size": target_size, "template_size": template_size, **kwargs},
        )


class CorrelationEngineError(PerceptionException):
    """Raised when the correlation or resize backend fails."""

    def __init__(self, reason: str, operation: str | None = None, **kwargs) -> None:
        """Initialize with backend failure details."""
        message = "Correlation backend failed"
        if operation:
            message += f" during {operation}"
        message += f": {reason}"

        super().__init__(
            message,
            error_code="CORRELATION_ENGINE_FAILED",
            context={"reason": reason, "operation": operation, **kwargs},
        )
