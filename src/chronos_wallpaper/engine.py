"""End-to-end pipeline: temporal context -> grid plan -> cells -> Scene.

``build_scene`` is the pure engine. ``compose_wallpaper`` is the
convenience entry used by the CLI: it takes a validated config, asks the
plugin hosts for their elements, then builds the scene.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .config import WallpaperConfig
from .layout.cells import layout_cells
from .layout.planner import plan_grid
from .model import (
    CanvasSpec,
    LayoutConfig,
    LifeView,
    PluginElement,
    StyleConfig,
    TextElement,
    ViewMode,
)
from .plugins import BUILTIN_PLUGINS, PluginContext, PluginHost, run_plugins
from .scene.composer import compose
from .scene.primitives import Scene
from .temporal import DateLike, TemporalContext, local_date

logger = logging.getLogger(__name__)


def build_scene(
    canvas: CanvasSpec,
    view: ViewMode,
    style: StyleConfig,
    layout: LayoutConfig,
    reference: DateLike,
    timezone: str | None = None,
    text_elements: Iterable[TextElement | Mapping[str, Any]] = (),
    plugin_elements: Iterable[PluginElement | Mapping[str, Any]] = (),
) -> Scene:
    """Compose the wallpaper Scene for ``reference`` (the explicit "now")."""
    birth_date = view.birth_date if isinstance(view, LifeView) else None
    temporal = TemporalContext.derive(reference, timezone, birth_date)
    grid = plan_grid(canvas, view, layout, temporal)
    cells = layout_cells(grid, view, temporal)
    return compose(
        grid,
        cells,
        style,
        text_elements,
        plugin_elements,
        view=view,
        temporal=temporal,
        canvas=canvas,
    )


def compose_wallpaper(
    config: WallpaperConfig,
    reference: DateLike,
    hosts: Iterable[PluginHost] = BUILTIN_PLUGINS,
) -> Scene:
    """Run the configured plugins, then build the Scene for ``config``."""
    canvas = config.canvas
    context = PluginContext(
        width=canvas.width,
        height=canvas.height,
        colors=config.colors,
        typography=config.typography,
        view_mode=config.view_mode,
        timezone=config.timezone,
        current_date=local_date(reference, config.timezone),
        birth_date=config.birth_date,
    )
    plugin_elements = run_plugins(hosts, config.plugins, context)

    scene = build_scene(
        canvas,
        config.view,
        config.style,
        config.layout,
        reference,
        timezone=config.timezone,
        text_elements=config.text_elements,
        plugin_elements=plugin_elements,
    )
    logger.info(
        "Composed %s view scene for %dx%d: %d primitives (%d from plugins)",
        config.view_mode,
        canvas.width,
        canvas.height,
        len(scene),
        len(plugin_elements),
    )
    return scene
