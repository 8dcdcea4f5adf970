"""Built-in plugin: today's moon phase as a disc and a caption."""

from __future__ import annotations

import math
from datetime import date

from ..model import PluginElement
from .host import PluginContext

SYNODIC_MONTH = 29.530588853  # days
# New moon of 2000-01-06 18:14 UTC, as a fractional day offset from midnight
REFERENCE_NEW_MOON = date(2000, 1, 6)
REFERENCE_NEW_MOON_OFFSET = 18.23 / 24

PHASE_NAMES = (
    "New Moon",
    "Waxing Crescent",
    "First Quarter",
    "Waxing Gibbous",
    "Full Moon",
    "Waning Gibbous",
    "Last Quarter",
    "Waning Crescent",
)


def moon_age(day: date) -> float:
    """Days since the last new moon, at local noon of ``day``."""
    elapsed = (day - REFERENCE_NEW_MOON).days + 0.5 - REFERENCE_NEW_MOON_OFFSET
    return elapsed % SYNODIC_MONTH


def phase_name(age: float) -> str:
    index = int((age / SYNODIC_MONTH) * len(PHASE_NAMES) + 0.5) % len(PHASE_NAMES)
    return PHASE_NAMES[index]


def illumination(age: float) -> float:
    """Lit fraction of the disc, 0.0 (new) to 1.0 (full)."""
    return (1 - math.cos(2 * math.pi * age / SYNODIC_MONTH)) / 2


class MoonPhasePlugin:
    plugin_id = "moon_phase"

    def execute(self, context: PluginContext) -> list[PluginElement]:
        cfg = context.config
        x = float(cfg.get("x", context.width / 2))
        y = float(cfg.get("y", context.height * 0.9))
        font_size = float(cfg.get("font_size", max(12, round(context.width * 0.025))))
        radius = font_size * 0.6

        age = moon_age(context.current_date)
        lit = illumination(age)
        caption = phase_name(age)
        if cfg.get("show_illumination", True):
            caption = f"{caption} · {round(lit * 100)}%"

        disc_color = context.colors.past if lit >= 0.5 else context.colors.future
        return [
            PluginElement(type="circle", x=x, y=y - radius * 2, radius=radius, color=disc_color),
            PluginElement(
                type="text",
                x=x,
                y=y,
                content=caption,
                color=context.colors.text,
                font_size=font_size,
                align="center",
                max_width=context.width * 0.8,
            ),
        ]
