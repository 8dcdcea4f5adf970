from .composer import compose
from .primitives import Circle, Layer, Line, Rect, Scene, Text, TextRun

__all__ = ["Circle", "Layer", "Line", "Rect", "Scene", "Text", "TextRun", "compose"]
