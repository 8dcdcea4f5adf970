"""Pillow-backed rendering of composed Scenes."""

from .renderer import SceneRenderer

__all__ = ["SceneRenderer"]
