"""Multi-scale template search.

Locates a template inside a target image whose scale relative to the template
is unknown, e.g. a UI element on a screenshot taken at a different resolution
or DPI setting. Only the target is rescaled; the template keeps its size.

The search walks the target down from its original size towards a width
floor, then, if nothing acceptable was seen, walks it up from the original size
towards a width ceiling. It returns on the first round that reaches the
threshold, so the result is not necessarily the best possible match.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import numpy as np

from ..config import ScalesightSettings
from ..exceptions import TemplateGeometryError
from ..hal.interfaces import ICorrelationEngine, IImageScaler, ScoredLocation
from ..logging import get_logger
from .match_result import BestMatch, MatchResult

logger = get_logger(__name__)

Annotator = Callable[
    [np.ndarray, tuple[int, int], tuple[int, int], tuple[int, int, int], int], Any
]


def image_size(image: Any) -> tuple[int, int]:
    """Return (width, height) of a numpy array or PIL image."""
    if hasattr(image, "shape"):
        return int(image.shape[1]), int(image.shape[0])
    width, height = image.size
    return int(width), int(height)


def _vanishes(image: Any, factor: float) -> bool:
    """Check whether scaling by ``factor`` would truncate a side to zero pixels."""
    width, height = image_size(image)
    return int(width * factor) < 1 or int(height * factor) < 1


@dataclass(frozen=True)
class ScaleSweep:
    """Scale range and step factors of the search.

    Attributes:
        min_width: Downscaling stops once the target is this narrow or narrower
        max_width: Upscaling stops once the target is this wide or wider
        downscale_factor: Factor applied per downscale step
        upscale_factor: Factor applied per upscale step
    """

    min_width: int = 320
    max_width: int = 2048
    downscale_factor: float = 0.9
    upscale_factor: float = 1.1

    def __post_init__(self) -> None:
        if not 0.0 < self.downscale_factor < 1.0:
            raise ValueError(f"downscale_factor must be in (0, 1), got {self.downscale_factor}")
        if self.upscale_factor <= 1.0:
            raise ValueError(f"upscale_factor must be above 1, got {self.upscale_factor}")
        if self.min_width >= self.max_width:
            raise ValueError(
                f"min_width ({self.min_width}) must be below max_width ({self.max_width})"
            )

    @classmethod
    def from_settings(cls, settings: ScalesightSettings) -> "ScaleSweep":
        """Build the sweep from configured policy values."""
        return cls(
            min_width=settings.min_image_width,
            max_width=settings.max_image_width,
            downscale_factor=settings.downscale_factor,
            upscale_factor=settings.upscale_factor,
        )


class MultiScaleMatcher:
    """Two-phase scale sweep over a single-scale correlation primitive.

    Phase 1 shrinks the target step by step and accepts as soon as the best
    score seen so far reaches the threshold. Phase 2 restarts from the original
    target, grows it step by step, and accepts only when the current round's own
    score reaches the threshold.

    Example:
        >>> backend = VisionBackend.create_from_settings(get_settings())
        >>> matcher = MultiScaleMatcher(backend.engine, backend.scaler)
        >>> result = matcher.match(screenshot, button, threshold=0.9)
        >>> if result.found:
        ...     click(*result.location)
    """

    def __init__(
        self,
        engine: ICorrelationEngine,
        scaler: IImageScaler,
        sweep: ScaleSweep | None = None,
        annotator: Annotator | None = None,
        annotation_color: tuple[int, int, int] = (255, 0, 0),
        annotation_thickness: int = 10,
    ) -> None:
        """Initialize the matcher.

        Args:
            engine: Single-scale correlation implementation
            scaler: Resize-by-factor implementation
            sweep: Scale range and step factors (defaults: 320..2048, 0.9 / 1.1)
            annotator: Draws the match rectangle on a copy of the winning image,
                e.g. annotate_match; None leaves MatchResult.annotated_image empty
            annotation_color: Rectangle color (BGR)
            annotation_thickness: Rectangle line thickness
        """
        self.engine = engine
        self.scaler = scaler
        self.sweep = sweep or ScaleSweep()
        self.annotator = annotator
        self.annotation_color = annotation_color
        self.annotation_thickness = annotation_thickness

    def match(self, target: Any, template: Any, threshold: float) -> MatchResult:
        """Search the target for the template across scales.

        Args:
            target: Image to search in
            template: Image to search for (never rescaled)
            threshold: Minimum acceptable score; a score equal to it is accepted

        Returns:
            MatchResult with the template center in the winning scaled image

        Raises:
            CorrelationEngineError: If correlation or resizing fails
        """
        template_size = image_size(template)
        down = self.sweep.downscale_factor
        up = self.sweep.upscale_factor
        best = BestMatch()
        scales_tried: list[float] = []

        # Phase 1: original size, then smaller
        image, scale = target, 1.0
        while image_size(image)[0] > self.sweep.min_width:
            self._evaluate(image, template, scale, best, scales_tried)
            if best.reaches(threshold):
                break
            if _vanishes(image, down):
                # Wide, short targets lose their last row before reaching the floor
                break
            image = self.scaler.resize(image, down, down)
            scale *= down

        # Phase 2: back to the original size, then larger
        if not best.reaches(threshold):
            image, scale = target, 1.0
            while not best.reaches(threshold) and image_size(image)[0] < self.sweep.max_width:
                current = self._evaluate(image, template, scale, best, scales_tried)
                if current is not None and current.score >= threshold:
                    break
                image = self.scaler.resize(image, up, up)
                scale *= up

        if not best.reaches(threshold):
            logger.debug(
                "sweep_finished",
                found=False,
                best_score=best.score,
                best_scale=best.scale,
                rounds=len(scales_tried),
            )
            return MatchResult(
                found=False,
                score=best.score,
                scale=best.scale,
                threshold=threshold,
                template_size=template_size,
                scales_tried=scales_tried,
            )

        top_left: tuple[int, int] = best.top_left  # type: ignore[assignment]
        x, y = top_left
        width, height = template_size
        location = (x + width // 2, y + height // 2)

        annotated = None
        if self.annotator is not None:
            annotated = self.annotator(
                best.image,
                top_left,
                template_size,
                self.annotation_color,
                self.annotation_thickness,
            )

        logger.debug(
            "sweep_finished",
            found=True,
            best_score=best.score,
            best_scale=best.scale,
            location=location,
            rounds=len(scales_tried),
        )
        return MatchResult(
            found=True,
            location=location,
            score=best.score,
            scale=best.scale,
            threshold=threshold,
            template_size=template_size,
            scaled_size=image_size(best.image),
            annotated_image=annotated,
            scales_tried=scales_tried,
        )

    def _evaluate(
        self,
        image: Any,
        template: Any,
        scale: float,
        best: BestMatch,
        scales_tried: list[float],
    ) -> ScoredLocation | None:
        """Correlate one scale and fold the result into ``best``.

        Returns:
            The round's best location, or None if the template does not fit
        """
        try:
            surface = self.engine.correlate(image, template)
        except TemplateGeometryError as e:
            logger.debug("scale_skipped", scale=scale, reason=e.message)
            return None

        current = self.engine.locate_best_score(surface)
        scales_tried.append(scale)
        improved = best.offer(current, scale, image)
        logger.debug(
            "scale_evaluated",
            scale=scale,
            width=image_size(image)[0],
            score=current.score,
            improved=improved,
        )
        return current
