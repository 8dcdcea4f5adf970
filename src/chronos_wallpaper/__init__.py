"""Progress-grid phone wallpapers: year and life views composed into Scenes."""

from .config import WallpaperConfig, load_config, parse_config
from .engine import build_scene, compose_wallpaper
from .errors import CanvasError, ChronosError, ConfigError
from .model import (
    CanvasSpec,
    ColorsConfig,
    DaysLayoutMode,
    GridShape,
    LayoutConfig,
    LifeView,
    PluginElement,
    StyleConfig,
    TextElement,
    TypographyConfig,
    YearView,
    YearViewLayout,
)
from .scene.primitives import Scene

__version__ = "0.1.0"

__all__ = [
    "CanvasError",
    "CanvasSpec",
    "ChronosError",
    "ColorsConfig",
    "ConfigError",
    "DaysLayoutMode",
    "GridShape",
    "LayoutConfig",
    "LifeView",
    "PluginElement",
    "Scene",
    "StyleConfig",
    "TextElement",
    "TypographyConfig",
    "WallpaperConfig",
    "YearView",
    "YearViewLayout",
    "build_scene",
    "compose_wallpaper",
    "load_config",
    "parse_config",
]
