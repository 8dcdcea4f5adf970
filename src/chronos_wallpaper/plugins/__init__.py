"""Plugin host boundary and built-in plugins."""

from .habit_tracker import HabitTrackerPlugin
from .host import PluginContext, PluginHost, run_plugins
from .moon_phase import MoonPhasePlugin
from .quotes import QuotesPlugin

BUILTIN_PLUGINS: tuple[PluginHost, ...] = (
    QuotesPlugin(),
    HabitTrackerPlugin(),
    MoonPhasePlugin(),
)

__all__ = [
    "BUILTIN_PLUGINS",
    "HabitTrackerPlugin",
    "MoonPhasePlugin",
    "PluginContext",
    "PluginHost",
    "QuotesPlugin",
    "run_plugins",
]
