"""YAML wallpaper config loader with Pydantic validation.

Everything the engine needs arrives here already validated and
defaulted: a Life view without a birth date, a device without
dimensions, an unknown timezone or a malformed date is rejected with a
descriptive ``ConfigError`` before any layout work starts.
"""

from __future__ import annotations

import os
import re
from datetime import date
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .devices import get_device_by_model
from .errors import ConfigError
from .model import (
    CanvasSpec,
    ColorsConfig,
    DaysLayoutMode,
    GridShape,
    LayoutConfig,
    LifeView,
    StyleConfig,
    TextElement,
    TypographyConfig,
    ViewMode,
    YearView,
    YearViewLayout,
)
from .temporal import resolve_timezone


def _resolve_env_vars(value: str) -> str:
    """Replace ${VAR_NAME} with environment variable values."""
    pattern = re.compile(r"\$\{(\w+)\}")
    def replacer(match: re.Match) -> str:
        var_name = match.group(1)
        env_val = os.environ.get(var_name)
        if env_val is None:
            raise ConfigError(f"Environment variable {var_name} is not set")
        return env_val
    return pattern.sub(replacer, value)


def _resolve_env_recursive(data: Any) -> Any:
    """Walk a nested dict/list and resolve env vars in string values."""
    if isinstance(data, str):
        return _resolve_env_vars(data)
    if isinstance(data, dict):
        return {k: _resolve_env_recursive(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_resolve_env_recursive(item) for item in data]
    return data


class DeviceConfig(BaseModel):
    """Target screen, either a catalogue model name or explicit pixels."""

    model: str | None = None
    width: int | None = Field(default=None, gt=0)
    height: int | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def resolve_dimensions(self) -> DeviceConfig:
        if self.width is not None and self.height is not None:
            return self
        if self.model:
            device = get_device_by_model(self.model)
            if device is None:
                raise ValueError(f"Unknown device model: {self.model!r}")
            self.width = self.width or device.width
            self.height = self.height or device.height
            return self
        raise ValueError("Device configuration requires width and height or a known model")


class PluginConfig(BaseModel):
    plugin_id: str
    enabled: bool = True
    config: dict[str, Any] = Field(default_factory=dict)


class WallpaperConfig(BaseModel):
    device: DeviceConfig
    view_mode: Literal["year", "life"] = "year"
    year_view_layout: YearViewLayout = YearViewLayout.MONTHS
    days_layout_mode: DaysLayoutMode = DaysLayoutMode.CONTINUOUS
    is_monday_first: bool = False
    birth_date: date | None = None
    timezone: str = "UTC"
    colors: ColorsConfig = Field(default_factory=ColorsConfig)
    typography: TypographyConfig = Field(default_factory=TypographyConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    shape: GridShape = GridShape.CIRCLE
    text_elements: list[TextElement] = Field(default_factory=list)
    plugins: list[PluginConfig] = Field(default_factory=list)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        resolve_timezone(v)
        return v

    @field_validator("text_elements")
    @classmethod
    def validate_unique_ids(cls, v: list[TextElement]) -> list[TextElement]:
        seen: set[str] = set()
        for element in v:
            if element.id in seen:
                raise ValueError(f"Duplicate text element id: {element.id!r}")
            seen.add(element.id)
        return v

    @model_validator(mode="after")
    def require_birth_date_for_life(self) -> WallpaperConfig:
        if self.view_mode == "life" and self.birth_date is None:
            raise ValueError("birth_date is required for the life view")
        return self

    @property
    def canvas(self) -> CanvasSpec:
        return CanvasSpec(self.device.width, self.device.height)

    @property
    def style(self) -> StyleConfig:
        return StyleConfig(colors=self.colors, typography=self.typography, shape=self.shape)

    @property
    def view(self) -> ViewMode:
        if self.view_mode == "life":
            return LifeView(birth_date=self.birth_date)
        return YearView(
            year_view_layout=self.year_view_layout,
            days_layout_mode=self.days_layout_mode,
            is_monday_first=self.is_monday_first,
        )


def parse_config(raw: dict[str, Any] | None) -> WallpaperConfig:
    """Validate an already-parsed mapping, resolving ${ENV} references."""
    resolved = _resolve_env_recursive(raw or {})
    try:
        return WallpaperConfig(**resolved)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
            for err in e.errors(include_url=False)
        )
        raise ConfigError(f"Invalid wallpaper config: {problems}") from e


def load_config(config_path: str | Path | None = None) -> WallpaperConfig:
    """Load and validate config from YAML file.

    Resolution order:
    1. Explicit path argument
    2. CHRONOS_CONFIG env var
    3. config/local.yaml (gitignored, personal settings)
    4. config/default.yaml (checked in)
    """
    if config_path is None:
        env_path = os.environ.get("CHRONOS_CONFIG")
        if env_path:
            config_path = Path(env_path)
        else:
            project_root = Path(__file__).parent.parent.parent
            local = project_root / "config" / "local.yaml"
            default = project_root / "config" / "default.yaml"
            config_path = local if local.exists() else default

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed YAML in {config_path}: {e}") from e

    if raw is not None and not isinstance(raw, dict):
        raise ConfigError(f"Config root must be a mapping, got {type(raw).__name__}")
    return parse_config(raw)
