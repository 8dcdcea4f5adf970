"""Engine input types: canvas, layout ratios, style, view modes, overlays.

Layout and style are pydantic models so the configuration loader can
validate them directly; the engine only ever reads them. View modes and
the canvas are plain frozen dataclasses.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import CanvasError

RGB = tuple[int, int, int]

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


def parse_color(v: Any) -> RGB:
    """Accept "#RRGGBB", "RRGGBB" or [R, G, B] and return an RGB tuple."""
    if isinstance(v, str):
        match = _HEX_RE.match(v.strip())
        if match:
            raw = match.group(1)
            return (int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16))
    elif isinstance(v, (list, tuple)) and len(v) == 3:
        r, g, b = v
        if all(isinstance(c, int) and 0 <= c <= 255 for c in (r, g, b)):
            return (r, g, b)
    raise ValueError(f"Invalid color: {v!r}. Expected '#RRGGBB' or [R, G, B] with 0-255 values.")


def to_hex(color: RGB) -> str:
    return "#{:02x}{:02x}{:02x}".format(*color)


class GridShape(str, Enum):
    CIRCLE = "circle"
    ROUNDED_RECT = "rounded_rect"


class YearViewLayout(str, Enum):
    MONTHS = "months"
    DAYS = "days"


class DaysLayoutMode(str, Enum):
    CALENDAR = "calendar"
    CONTINUOUS = "continuous"


Align = Literal["left", "center", "right"]


@dataclass(frozen=True)
class CanvasSpec:
    """Target image size in pixels."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise CanvasError(self.width, self.height)

    @property
    def aspect_ratio(self) -> float:
        return self.height / self.width


@dataclass(frozen=True)
class YearView:
    year_view_layout: YearViewLayout = YearViewLayout.MONTHS
    days_layout_mode: DaysLayoutMode = DaysLayoutMode.CONTINUOUS
    is_monday_first: bool = False


@dataclass(frozen=True)
class LifeView:
    birth_date: date


ViewMode = YearView | LifeView


class LayoutConfig(BaseModel):
    """Padding and spacing ratios, each a fraction of canvas width/height."""

    model_config = ConfigDict(frozen=True)

    top_padding: float = Field(default=0.25, ge=0.0, le=0.5)
    bottom_padding: float = Field(default=0.15, ge=0.0, le=0.5)
    side_padding: float = Field(default=0.18, ge=0.0, le=0.5)
    dot_spacing: float = Field(default=0.7, ge=0.0, le=1.0)


class ColorsConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    background: RGB = (0x1A, 0x1A, 0x1A)
    past: RGB = (0xFF, 0xFF, 0xFF)
    current: RGB = (0xFF, 0x6B, 0x35)
    future: RGB = (0x40, 0x40, 0x40)
    text: RGB = (0x88, 0x88, 0x88)

    @field_validator("background", "past", "current", "future", "text", mode="before")
    @classmethod
    def validate_color(cls, v: Any) -> RGB:
        return parse_color(v)


class TypographyConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    font_family: str = "monospace"
    font_size: float = Field(default=0.035, gt=0.0, le=0.5)
    stats_visible: bool = True


class StyleConfig(BaseModel):
    """Palette, typography and the mark shape used for grid cells."""

    model_config = ConfigDict(frozen=True)

    colors: ColorsConfig = Field(default_factory=ColorsConfig)
    typography: TypographyConfig = Field(default_factory=TypographyConfig)
    shape: GridShape = GridShape.CIRCLE


class TextElement(BaseModel):
    """User-authored text anchored by percentage of the canvas size."""

    model_config = ConfigDict(frozen=True)

    id: str
    content: str | None = None
    x: float = 50.0
    y: float = 50.0
    font_size: float | None = Field(default=None, gt=0)
    font_family: str | None = None
    color: RGB | None = None
    align: Align = "left"
    visible: bool = True

    @field_validator("color", mode="before")
    @classmethod
    def validate_color(cls, v: Any) -> RGB | None:
        if v is None:
            return None
        return parse_color(v)

    @field_validator("content", mode="before")
    @classmethod
    def stringify_content(cls, v: Any) -> str | None:
        if v is None or isinstance(v, str):
            return v
        return str(v)


PluginElementType = Literal["text", "rect", "circle", "line"]


class PluginElement(BaseModel):
    """Plugin-authored primitive positioned in absolute pixels.

    ``x``/``y`` is the text anchor, the rect's top-left corner, the
    circle's center or the line's start point.
    """

    model_config = ConfigDict(frozen=True)

    type: PluginElementType
    x: float
    y: float
    content: str | None = None
    color: RGB | None = None
    font_size: float | None = Field(default=None, gt=0)
    font_family: str | None = None
    max_width: float | None = Field(default=None, gt=0)
    align: Align = "left"
    width: float | None = Field(default=None, ge=0)
    height: float | None = Field(default=None, ge=0)
    radius: float | None = Field(default=None, ge=0)
    x2: float | None = None
    y2: float | None = None
    stroke_width: float = Field(default=1.0, gt=0)

    @field_validator("color", mode="before")
    @classmethod
    def validate_color(cls, v: Any) -> RGB | None:
        if v is None:
            return None
        return parse_color(v)

    @field_validator("content", mode="before")
    @classmethod
    def stringify_content(cls, v: Any) -> str | None:
        if v is None or isinstance(v, str):
            return v
        return str(v)

    def missing_fields(self) -> list[str]:
        """Names of the fields this element's type needs but lacks."""
        required = {
            "text": ("content",),
            "rect": ("width", "height"),
            "circle": ("radius",),
            "line": ("x2", "y2"),
        }[self.type]
        return [name for name in required if getattr(self, name) is None]
