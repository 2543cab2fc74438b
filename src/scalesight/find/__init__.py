"""Template finding.

- MultiScaleMatcher: two-phase scale sweep over a correlation backend
- TemplateMatcher: file-based visual check with logging and result images
"""

from .match_result import BestMatch, MatchResult
from .multiscale_matcher import MultiScaleMatcher, ScaleSweep, image_size
from .template_matcher import TemplateMatcher

__all__ = [
    "BestMatch",
    "MatchResult",
    "MultiScaleMatcher",
    "ScaleSweep",
    "TemplateMatcher",
    "image_size",
]
