"""Merge grid cells, labels, stats and overlays into one Scene.

Z-order, bottom to top:
  1. grid cells (empty calendar padding is never drawn)
  2. month / year labels
  3. stats footer
  4. user text elements (percent-anchored, resolved to pixels here)
  5. plugin elements (pixel-anchored)

Overlays are untrusted input: an element that fails validation or lacks
the fields its type needs is dropped with a warning, and the rest of the
scene is still produced.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..layout.cells import Cell, CellState
from ..layout.planner import GridSpec
from ..model import (
    RGB,
    CanvasSpec,
    GridShape,
    LifeView,
    PluginElement,
    StyleConfig,
    TextElement,
    ViewMode,
)
from ..temporal import TemporalContext
from .primitives import (
    Circle,
    Layer,
    Line,
    PercentPosition,
    PixelPosition,
    Primitive,
    Rect,
    Scene,
    Text,
    TextRun,
    resolve_position,
)

logger = logging.getLogger(__name__)

ROUNDED_RECT_RADIUS = 0.15  # of the cell size
STATS_SEPARATOR = " · "
LIFE_STATS_HORIZON = 90  # years quoted in the life view footer
DEFAULT_OVERLAY_FONT_SIZE = 16  # px, for overlay text without its own size

# Pillow anchors: percent-anchored text is vertically centered on its point,
# plugin text hangs from it.
_TEXT_ANCHORS = {"left": "lm", "center": "mm", "right": "rm"}
_PLUGIN_ANCHORS = {"left": "la", "center": "ma", "right": "ra"}

M = TypeVar("M", bound=BaseModel)


def _coerce(model: type[M], raw: M | Mapping[str, Any], what: str) -> M | None:
    """Validate a raw overlay element, returning None if it is malformed."""
    if isinstance(raw, model):
        return raw
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        logger.warning("Dropping malformed %s: %s", what, e.errors(include_url=False))
        return None


def _format_percentage(value: float) -> str:
    return f"{value:g}"


def _state_color(state: CellState, style: StyleConfig) -> RGB:
    colors = style.colors
    if state is CellState.PAST:
        return colors.past
    if state is CellState.CURRENT:
        return colors.current
    return colors.future


def compose_cells(grid: GridSpec, cells: Iterable[Cell], style: StyleConfig) -> list[Primitive]:
    size = grid.cell_size
    out: list[Primitive] = []
    for cell in cells:
        if not cell.drawn:
            continue
        x, y = grid.cell_position(cell.row, cell.col, cell.block)
        fill = _state_color(cell.state, style)
        if style.shape is GridShape.ROUNDED_RECT:
            out.append(
                Rect(
                    x=x,
                    y=y,
                    width=size,
                    height=size,
                    fill=fill,
                    layer=Layer.GRID,
                    radius=size * ROUNDED_RECT_RADIUS,
                    state=cell.state.value,
                    index=cell.index,
                )
            )
        else:
            out.append(
                Circle(
                    cx=x + size / 2,
                    cy=y + size / 2,
                    radius=size / 2,
                    fill=fill,
                    layer=Layer.GRID,
                    state=cell.state.value,
                    index=cell.index,
                )
            )
    return out


def compose_labels(grid: GridSpec, style: StyleConfig) -> list[Primitive]:
    family = style.typography.font_family
    color = style.colors.text
    out: list[Primitive] = []
    for block in grid.blocks:
        out.append(
            Text(
                x=block.label_x,
                y=block.label_y,
                runs=(TextRun(block.label, color),),
                font_size=grid.label_size,
                font_family=family,
                layer=Layer.LABEL,
                anchor="la",
            )
        )
    for label in grid.labels:
        out.append(
            Text(
                x=label.x,
                y=label.y,
                runs=(TextRun(label.text, color),),
                font_size=grid.label_size,
                font_family=family,
                layer=Layer.LABEL,
                anchor="rm",
            )
        )
    return out


def stats_runs(view: ViewMode, temporal: TemporalContext, style: StyleConfig) -> tuple[TextRun, ...]:
    """Footer text: days left and year percent, or life percentage."""
    colors = style.colors
    if isinstance(view, LifeView):
        text = f"{_format_percentage(temporal.life_percentage)}% to {LIFE_STATS_HORIZON}"
        return (TextRun(text, colors.current),)
    return (
        TextRun(f"{temporal.days_left_in_year}d left", colors.current),
        TextRun(STATS_SEPARATOR, colors.text),
        TextRun(f"{temporal.year_percent}%", colors.text),
    )


def compose_stats(
    grid: GridSpec,
    view: ViewMode,
    temporal: TemporalContext,
    style: StyleConfig,
    canvas: CanvasSpec,
) -> list[Primitive]:
    if not style.typography.stats_visible:
        return []
    return [
        Text(
            x=canvas.width / 2,
            y=grid.stats_y,
            runs=stats_runs(view, temporal, style),
            font_size=grid.stats_font_size,
            font_family=style.typography.font_family,
            layer=Layer.STATS,
            anchor="ma",
        )
    ]


def compose_text_elements(
    elements: Iterable[TextElement | Mapping[str, Any]],
    style: StyleConfig,
    canvas: CanvasSpec,
) -> list[Primitive]:
    out: list[Primitive] = []
    for raw in elements:
        element = _coerce(TextElement, raw, "text element")
        if element is None or not element.visible or element.content is None:
            continue
        content = element.content.strip()
        if not content:
            continue
        x, y = resolve_position(PercentPosition(element.x, element.y), canvas)
        out.append(
            Text(
                x=x,
                y=y,
                runs=(TextRun(content, element.color or style.colors.text),),
                font_size=element.font_size or DEFAULT_OVERLAY_FONT_SIZE,
                font_family=element.font_family or style.typography.font_family,
                layer=Layer.TEXT,
                anchor=_TEXT_ANCHORS[element.align],
            )
        )
    return out


def compose_plugin_elements(
    elements: Iterable[PluginElement | Mapping[str, Any]],
    style: StyleConfig,
    canvas: CanvasSpec,
) -> list[Primitive]:
    out: list[Primitive] = []
    for raw in elements:
        element = _coerce(PluginElement, raw, "plugin element")
        if element is None:
            continue
        missing = element.missing_fields()
        if missing:
            logger.warning(
                "Dropping plugin %s element missing %s", element.type, ", ".join(missing)
            )
            continue

        color = element.color or style.colors.text
        x, y = resolve_position(PixelPosition(element.x, element.y), canvas)
        if element.type == "text":
            content = element.content.strip()
            if not content:
                continue
            out.append(
                Text(
                    x=x,
                    y=y,
                    runs=(TextRun(content, color),),
                    font_size=element.font_size or DEFAULT_OVERLAY_FONT_SIZE,
                    font_family=element.font_family or style.typography.font_family,
                    layer=Layer.PLUGIN,
                    anchor=_PLUGIN_ANCHORS[element.align],
                    max_width=element.max_width,
                )
            )
        elif element.type == "rect":
            out.append(
                Rect(
                    x=x,
                    y=y,
                    width=element.width,
                    height=element.height,
                    fill=color,
                    layer=Layer.PLUGIN,
                )
            )
        elif element.type == "circle":
            out.append(
                Circle(
                    cx=x,
                    cy=y,
                    radius=element.radius,
                    fill=color,
                    layer=Layer.PLUGIN,
                )
            )
        else:
            x2, y2 = resolve_position(PixelPosition(element.x2, element.y2), canvas)
            out.append(
                Line(
                    x1=x,
                    y1=y,
                    x2=x2,
                    y2=y2,
                    color=color,
                    layer=Layer.PLUGIN,
                    width=element.stroke_width,
                )
            )
    return out


def compose(
    grid: GridSpec,
    cells: Iterable[Cell],
    style: StyleConfig,
    text_elements: Iterable[TextElement | Mapping[str, Any]],
    plugin_elements: Iterable[PluginElement | Mapping[str, Any]],
    *,
    view: ViewMode,
    temporal: TemporalContext,
    canvas: CanvasSpec,
) -> Scene:
    """Assemble the full, z-ordered Scene."""
    primitives: list[Primitive] = []
    primitives += compose_cells(grid, cells, style)
    primitives += compose_labels(grid, style)
    primitives += compose_stats(grid, view, temporal, style, canvas)
    primitives += compose_text_elements(text_elements, style, canvas)
    primitives += compose_plugin_elements(plugin_elements, style, canvas)
    return Scene(
        width=canvas.width,
        height=canvas.height,
        background=style.colors.background,
        primitives=tuple(primitives),
    )
