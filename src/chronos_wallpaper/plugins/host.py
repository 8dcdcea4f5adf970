"""Plugin host boundary.

Plugins are external code that produce pixel-positioned overlay
elements. The engine never runs plugin code itself: it asks a
``PluginHost`` for elements and treats whatever comes back as untrusted.
One failing plugin never blanks the wallpaper; its elements are simply
missing.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Protocol, runtime_checkable

from ..model import ColorsConfig, PluginElement, TypographyConfig

logger = logging.getLogger(__name__)

RawElement = PluginElement | Mapping[str, Any]


@dataclass(frozen=True)
class PluginContext:
    """What a plugin is told about the wallpaper it decorates."""

    width: int
    height: int
    colors: ColorsConfig
    typography: TypographyConfig
    view_mode: str
    timezone: str
    current_date: date
    birth_date: date | None = None
    config: Mapping[str, Any] = field(default_factory=dict)


@runtime_checkable
class PluginHost(Protocol):
    plugin_id: str

    def execute(self, context: PluginContext) -> list[RawElement]: ...


class PluginConfigLike(Protocol):
    plugin_id: str
    enabled: bool
    config: dict[str, Any]


def run_plugins(
    hosts: Iterable[PluginHost],
    plugin_configs: Iterable[PluginConfigLike],
    context: PluginContext,
) -> list[RawElement]:
    """Execute every enabled, known plugin in config order.

    Returns the concatenated raw elements; validation of each element is
    left to the scene composer.
    """
    registry = {host.plugin_id: host for host in hosts}
    elements: list[RawElement] = []

    for plugin_config in plugin_configs:
        if not plugin_config.enabled:
            logger.debug("Plugin %s: disabled, skipping", plugin_config.plugin_id)
            continue

        host = registry.get(plugin_config.plugin_id)
        if host is None:
            logger.warning("Plugin %s: not found", plugin_config.plugin_id)
            continue

        try:
            produced = host.execute(replace(context, config=dict(plugin_config.config)))
        except Exception as e:
            logger.warning("Plugin %s execution error: %s", plugin_config.plugin_id, e)
            continue

        if not isinstance(produced, (list, tuple)):
            logger.warning(
                "Plugin %s returned %s, expected a list of elements",
                plugin_config.plugin_id,
                type(produced).__name__,
            )
            continue

        logger.debug("Plugin %s returned %d elements", plugin_config.plugin_id, len(produced))
        elements.extend(produced)

    return elements
