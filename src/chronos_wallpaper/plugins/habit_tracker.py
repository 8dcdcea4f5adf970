"""Built-in plugin: a row of done/undone dots, one per habit.

Config:
  habits: habit names, in display order
  done: names of the habits already done today
  position: top-left | top-right | bottom-left | bottom-right
"""

from __future__ import annotations

from ..model import PluginElement
from .host import PluginContext

DEFAULT_HABITS = ("Exercise", "Read", "Meditate")
CORNERS = ("top-left", "top-right", "bottom-left", "bottom-right")
MARGIN = 0.06  # of the canvas width


class HabitTrackerPlugin:
    plugin_id = "habit_tracker"

    def execute(self, context: PluginContext) -> list[PluginElement]:
        cfg = context.config
        habits = [str(h) for h in cfg.get("habits") or DEFAULT_HABITS]
        done = {str(h) for h in cfg.get("done") or ()}
        position = cfg.get("position", "top-right")
        if position not in CORNERS:
            raise ValueError(f"Unknown habit tracker position: {position!r}")

        font_size = float(cfg.get("font_size", max(12, round(context.width * 0.022))))
        radius = font_size * 0.4
        line_height = font_size * 1.6
        margin = context.width * MARGIN
        vertical, horizontal = position.split("-")

        top = context.height * 0.08 if vertical == "top" else (
            context.height * 0.92 - line_height * len(habits)
        )
        right_side = horizontal == "right"

        elements: list[PluginElement] = []
        for i, habit in enumerate(habits):
            y = top + i * line_height
            dot_x = context.width - margin - radius if right_side else margin + radius
            color = context.colors.current if habit in done else context.colors.future
            elements.append(
                PluginElement(type="circle", x=dot_x, y=y + font_size / 2, radius=radius, color=color)
            )
            label_x = dot_x - radius * 3 if right_side else dot_x + radius * 3
            elements.append(
                PluginElement(
                    type="text",
                    x=label_x,
                    y=y,
                    content=habit,
                    color=context.colors.text,
                    font_size=font_size,
                    font_family=context.typography.font_family,
                    align="right" if right_side else "left",
                )
            )
        return elements
