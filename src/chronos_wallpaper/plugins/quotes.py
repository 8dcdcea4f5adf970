"""Built-in plugin: one quote per day, picked from a fixed or configured list."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from ..model import PluginElement
from .host import PluginContext

DEFAULT_QUOTES = (
    "The days are long, but the years are short.",
    "What we do every day matters more than what we do once in a while.",
    "Lost time is never found again.",
    "Don't count the days, make the days count.",
    "The best time to plant a tree was 20 years ago. The second best time is now.",
    "Time you enjoy wasting is not wasted time.",
    "Well begun is half done.",
)

# Vertical anchor of the quote, as a fraction of the canvas height
POSITIONS = {"top": 0.08, "center": 0.5, "bottom": 0.9}


def quote_for(day: date, quotes: Sequence[str]) -> str:
    """Same quote all day, the next one tomorrow."""
    return quotes[day.toordinal() % len(quotes)]


class QuotesPlugin:
    plugin_id = "quotes"

    def execute(self, context: PluginContext) -> list[PluginElement]:
        cfg = context.config
        quotes = [str(q) for q in cfg.get("quotes") or () if str(q).strip()] or DEFAULT_QUOTES
        position = cfg.get("position", "bottom")
        if position not in POSITIONS:
            raise ValueError(f"Unknown quote position: {position!r}")

        font_size = float(cfg.get("font_size", max(12, round(context.width * 0.028))))
        return [
            PluginElement(
                type="text",
                x=context.width / 2,
                y=context.height * POSITIONS[position],
                content=quote_for(context.current_date, quotes),
                color=context.colors.text,
                font_size=font_size,
                font_family=context.typography.font_family,
                align="center",
                max_width=context.width * 0.8,
            )
        ]
