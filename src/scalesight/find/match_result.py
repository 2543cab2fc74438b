"""Value types produced by the multi-scale search."""

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np

from ..hal.interfaces import ScoredLocation


@dataclass
class BestMatch:
    """Highest score observed so far within one search call.

    Starts at ``-inf`` ("no match seen yet") and only ever moves upward.
    """

    score: float = -math.inf
    top_left: tuple[int, int] | None = None
    scale: float | None = None
    image: np.ndarray[Any, Any] | None = field(default=None, repr=False)

    def offer(self, candidate: ScoredLocation, scale: float, image: np.ndarray[Any, Any]) -> bool:
        """Keep ``candidate`` if it beats the current best.

        Args:
            candidate: Best location of the latest correlation round
            scale: Scale of the target image the round ran on
            image: Target image at that scale

        Returns:
            True if the best match was replaced
        """
        if candidate.score > self.score:
            self.score = candidate.score
            self.top_left = candidate.top_left
            self.scale = scale
            self.image = image
            return True
        return False

    def reaches(self, threshold: float) -> bool:
        """Check whether a match was recorded and its score is acceptable."""
        return self.top_left is not None and self.score >= threshold


@dataclass
class MatchResult:
    """Outcome of a template search.

    Attributes:
        found: Whether a score at or above the threshold was reached
        location: Center of the matched template in the winning scaled image
        score: Best score observed (``-inf`` when no scale could be matched)
        scale: Scale of the target image at which ``score`` was recorded
        threshold: Threshold the search was run with
        template_size: Template (width, height)
        scaled_size: Target (width, height) at the winning scale
        annotated_image: Copy of the winning scaled image with the match outlined
        scales_tried: Every scale that was correlated, in scan order
        result_file: Where the annotated image was written, if it was
    """

    found: bool
    location: tuple[int, int] | None = None
    score: float = -math.inf
    scale: float | None = None
    threshold: float | None = None
    template_size: tuple[int, int] | None = None
    scaled_size: tuple[int, int] | None = None
    annotated_image: np.ndarray[Any, Any] | None = field(default=None, repr=False)
    scales_tried: list[float] = field(default_factory=list)
    result_file: Path | None = None

    @property
    def x(self) -> int | None:
        """Horizontal center coordinate, if found."""
        return self.location[0] if self.location else None

    @property
    def y(self) -> int | None:
        """Vertical center coordinate, if found."""
        return self.location[1] if self.location else None

    @property
    def bounds(self) -> tuple[int, int, int, int] | None:
        """Matched region as (x, y, width, height) in the winning scaled image."""
        if self.location is None or self.template_size is None:
            return None
        width, height = self.template_size
        return (self.location[0] - width // 2, self.location[1] - height // 2, width, height)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dict (without image data)."""
        return {
            "found": self.found,
            "location": list(self.location) if self.location else None,
            "score": self.score if math.isfinite(self.score) else None,
            "scale": self.scale,
            "threshold": self.threshold,
            "template_size": list(self.template_size) if self.template_size else None,
            "scaled_size": list(self.scaled_size) if self.scaled_size else None,
            "scales_tried": len(self.scales_tried),
            "result_file": str(self.result_file) if self.result_file else None,
        }
