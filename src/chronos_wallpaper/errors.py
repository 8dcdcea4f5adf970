"""Exception types shared across the wallpaper engine."""

from __future__ import annotations


class ChronosError(Exception):
    """Base class for all wallpaper engine errors."""


class ConfigError(ChronosError):
    """Raised when a wallpaper configuration cannot be loaded or is invalid."""


class CanvasError(ChronosError, ValueError):
    """Raised when the target canvas has a non-positive width or height."""

    def __init__(self, width: float, height: float):
        self.width = width
        self.height = height
        super().__init__(f"Canvas must be positive, got {width}x{height}")
