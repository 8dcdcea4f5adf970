"""Renderable primitives and the Scene that orders them.

A Scene is a flat, z-ordered list of tagged primitives in absolute pixel
coordinates. It is what the composer produces and what a renderer
consumes; nothing in it changes after composition.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar

from ..model import RGB, CanvasSpec, to_hex


class Layer(str, Enum):
    """Composition layers, bottom to top."""

    GRID = "grid"
    LABEL = "label"
    STATS = "stats"
    TEXT = "text"
    PLUGIN = "plugin"


@dataclass(frozen=True)
class PercentPosition:
    """Anchor given as a percentage (0-100) of the canvas width/height."""

    x: float
    y: float


@dataclass(frozen=True)
class PixelPosition:
    x: float
    y: float


Position = PercentPosition | PixelPosition


def resolve_position(position: Position, canvas: CanvasSpec) -> tuple[float, float]:
    """Turn any position into absolute pixels on ``canvas``."""
    if isinstance(position, PercentPosition):
        return (canvas.width * position.x / 100.0, canvas.height * position.y / 100.0)
    return (position.x, position.y)


@dataclass(frozen=True)
class TextRun:
    """A span of uniformly colored text inside a Text primitive."""

    text: str
    color: RGB


@dataclass(frozen=True)
class Circle:
    kind: ClassVar[str] = "circle"

    cx: float
    cy: float
    radius: float
    fill: RGB | None
    layer: Layer
    outline: RGB | None = None
    stroke_width: float = 0.0
    state: str | None = None
    index: int | None = None


@dataclass(frozen=True)
class Rect:
    kind: ClassVar[str] = "rect"

    x: float
    y: float
    width: float
    height: float
    fill: RGB | None
    layer: Layer
    radius: float = 0.0
    outline: RGB | None = None
    stroke_width: float = 0.0
    state: str | None = None
    index: int | None = None


@dataclass(frozen=True)
class Text:
    """Text anchored at (x, y).

    ``anchor`` uses Pillow's two-letter anchor codes: horizontal
    l/m/r then vertical a (top) or m (middle), so "mm" centers the text
    box on the point and "la" hangs it from its top-left corner.
    """

    kind: ClassVar[str] = "text"

    x: float
    y: float
    runs: tuple[TextRun, ...]
    font_size: float
    font_family: str
    layer: Layer
    anchor: str = "la"
    max_width: float | None = None

    @property
    def content(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass(frozen=True)
class Line:
    kind: ClassVar[str] = "line"

    x1: float
    y1: float
    x2: float
    y2: float
    color: RGB
    layer: Layer
    width: float = 1.0


Primitive = Circle | Rect | Text | Line


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, TextRun):
        return {"text": value.text, "color": to_hex(value.color)}
    if isinstance(value, tuple):
        if len(value) == 3 and all(isinstance(c, int) for c in value):
            return to_hex(value)
        return [_jsonable(v) for v in value]
    return value


def primitive_to_dict(primitive: Primitive) -> dict[str, Any]:
    data: dict[str, Any] = {"type": primitive.kind}
    for f in fields(primitive):
        value = getattr(primitive, f.name)
        if value is not None:
            data[f.name] = _jsonable(value)
    if isinstance(primitive, Text):
        data["content"] = primitive.content
    return data


@dataclass(frozen=True)
class Scene:
    """Ordered primitives for one wallpaper; later entries draw on top."""

    width: int
    height: int
    background: RGB
    primitives: tuple[Primitive, ...]

    def __len__(self) -> int:
        return len(self.primitives)

    def on_layer(self, layer: Layer) -> list[Primitive]:
        return [p for p in self.primitives if p.layer == layer]

    @property
    def cells(self) -> list[Circle | Rect]:
        return [p for p in self.primitives if isinstance(p, (Circle, Rect)) and p.state is not None]

    @property
    def stats_text(self) -> str | None:
        stats = self.on_layer(Layer.STATS)
        return stats[0].content if stats else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "background": to_hex(self.background),
            "primitives": [primitive_to_dict(p) for p in self.primitives],
        }
