"""scalesight Command Line Interface.

Usage:
    python -m scalesight.cli match screen.png button.png --threshold 0.9
    python -m scalesight.cli match screen.png a.png b.png --format junit

Or via the installed entry point:
    scalesight --help
"""

from .main import main

__all__ = ["main"]
