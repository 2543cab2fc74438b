"""Template matcher for visual checks in UI tests.

Checks whether a given image (template) is part of another one (target),
e.g. whether an expected button is visible on a captured screenshot. The target
is scaled down and up between a minimum and maximum width so the check does not
depend on the screenshot's resolution.

The first match that reaches the threshold wins. It is not necessarily the
best possible match.
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Any

from ..config import ScalesightSettings, get_settings
from ..exceptions import ConfigurationError, ImageWriteError, InvalidConfigurationException
from ..hal import VisionBackend
from ..hal.interfaces import ICorrelationEngine, IDiagnosticSink, IImageLoader, IImageScaler
from ..logging import LogContext, get_logger
from .match_result import MatchResult
from .multiscale_matcher import MultiScaleMatcher, ScaleSweep

logger = get_logger(__name__)

_PATH_SEPARATORS = re.compile(r"[\\/]")


class TemplateMatcher:
    """Path-based entry point for visual template checks.

    Wraps MultiScaleMatcher with the surrounding concerns of a check: the
    feature gate, image loading, logging of the verdict and persistence of the
    annotated result image.

    Example:
        >>> matcher = TemplateMatcher()
        >>> result = matcher.match("screen.png", "login_button.png", 0.9, "login visible")
        >>> result.found, result.location
        (True, (640, 412))
    """

    def __init__(
        self,
        settings: ScalesightSettings | None = None,
        engine: ICorrelationEngine | None = None,
        scaler: IImageScaler | None = None,
        loader: IImageLoader | None = None,
        sink: IDiagnosticSink | None = None,
    ) -> None:
        """Initialize the matcher.

        Collaborators that are not given come from the OpenCV backend, which is
        only created when at least one of them is missing.

        Args:
            settings: Settings (defaults to the global settings)
            engine: Correlation implementation
            scaler: Resize implementation
            loader: Image file reader
            sink: Writer for annotated result images

        Raises:
            InvalidConfigurationException: If the scale sweep bounds are inconsistent
        """
        self.settings = settings or get_settings()

        if engine is None or scaler is None or loader is None or sink is None:
            backend = VisionBackend.create_from_settings(self.settings)
            engine = engine or backend.engine
            scaler = scaler or backend.scaler
            loader = loader or backend.loader
            sink = sink or backend.sink

        try:
            sweep = ScaleSweep.from_settings(self.settings)
        except ValueError as e:
            raise InvalidConfigurationException("scale_sweep", str(e)) from e

        from ..hal.implementations.opencv_image_io import annotate_match

        self.loader = loader
        self.sink = sink
        self.matcher = MultiScaleMatcher(
            engine,
            scaler,
            sweep=sweep,
            annotator=annotate_match,
            annotation_color=self.settings.annotation_color,
            annotation_thickness=self.settings.annotation_thickness,
        )

    def match(
        self,
        target_file: str | Path,
        template_file: str | Path,
        threshold: float | None = None,
        description: str | None = None,
    ) -> MatchResult:
        """Check whether the template appears anywhere within the target image.

        Args:
            target_file: Path to the target image
            template_file: Path to the template image
            threshold: Matching threshold (defaults to settings.default_threshold)
            description: Name of the check, used for the result image file name
                (defaults to the current timestamp)

        Returns:
            MatchResult

        Raises:
            ConfigurationError: If visual matching is disabled
            ImageLoadError: If either image cannot be loaded
            CorrelationEngineError: If the correlation backend fails
        """
        self._check_enabled()
        target = self.loader.load(target_file)
        template = self.loader.load(template_file)
        return self._run(
            target, template, str(target_file), str(template_file), threshold, description
        )

    def match_images(
        self,
        target: Any,
        template: Any,
        threshold: float | None = None,
        description: str | None = None,
    ) -> MatchResult:
        """Check whether the template appears within an in-memory target image.

        Args:
            target: Image to search in (numpy array or PIL image)
            template: Image to search for
            threshold: Matching threshold (defaults to settings.default_threshold)
            description: Name of the check (defaults to the current timestamp)

        Returns:
            MatchResult

        Raises:
            ConfigurationError: If visual matching is disabled
            CorrelationEngineError: If the correlation backend fails
        """
        self._check_enabled()
        return self._run(target, template, "<memory>", "<memory>", threshold, description)

    def result_path(self, description: str) -> Path:
        """Path of the annotated result image for a check description.

        Path separators in the description are replaced, so the file always
        lands directly in result_dir.
        """
        name = _PATH_SEPARATORS.sub("_", description)
        return self.settings.result_dir / f"{name}.{self.settings.result_file_extension}"

    def _run(
        self,
        target: Any,
        template: Any,
        target_name: str,
        template_name: str,
        threshold: float | None,
        description: str | None,
    ) -> MatchResult:
        if threshold is None:
            threshold = self.settings.default_threshold
        if description is None:
            description = datetime.now().strftime(self.settings.description_date_pattern)

        with LogContext(logger, target=target_name, template=template_name) as log:
            result = self.matcher.match(target, template, threshold)

            if not result.found:
                log.info(
                    "template_not_found",
                    closest_quality=result.score,
                    threshold=threshold,
                )
                return result

            log.info(
                "template_found",
                quality=result.score,
                scale=result.scale,
                location=result.location,
            )

            if self.settings.save_annotated_results and result.annotated_image is not None:
                self._save_result(result, description, log)

        return result

    def _save_result(self, result: MatchResult, description: str, log: Any) -> None:
        """Write the annotated image; failures are logged, never raised."""
        path = self.result_path(description)
        log.info("writing_match_result", path=str(path))
        try:
            saved = self.sink.save(result.annotated_image, path)  # type: ignore[arg-type]
        except (ImageWriteError, OSError) as e:
            log.warning("match_result_not_written", path=str(path), error=str(e))
            return
        result.result_file = saved

    def _check_enabled(self) -> None:
        """Check whether visual matching is enabled."""
        if not self.settings.visual_matching_enabled:
            raise ConfigurationError(
                "visual_matching_enabled",
                "Visual matching is disabled. Set SCALESIGHT_VISUAL_MATCHING_ENABLED=true",
            )
