"""Render a preview wallpaper for every catalogue device.

Writes tools/previews/<brand>_<model>_<view>.png for each device, in the
months, days and life views, so layout tiering can be eyeballed across
aspect ratios.
"""

from datetime import date
from pathlib import Path

from chronos_wallpaper.devices import DEVICE_MODELS
from chronos_wallpaper.engine import build_scene
from chronos_wallpaper.model import (
    CanvasSpec,
    LayoutConfig,
    LifeView,
    StyleConfig,
    YearView,
    YearViewLayout,
)
from chronos_wallpaper.render import SceneRenderer

REFERENCE = date(2024, 7, 15)

VIEWS = {
    "months": YearView(year_view_layout=YearViewLayout.MONTHS),
    "days": YearView(year_view_layout=YearViewLayout.DAYS),
    "life": LifeView(birth_date=date(1990, 5, 17)),
}

out_dir = Path("tools/previews")
out_dir.mkdir(parents=True, exist_ok=True)

renderer = SceneRenderer()
style = StyleConfig()
layout = LayoutConfig()

for device in DEVICE_MODELS:
    canvas = CanvasSpec(device.width, device.height)
    slug = f"{device.brand}_{device.model}".lower().replace(" ", "_").replace("+", "plus")
    for view_name, view in VIEWS.items():
        scene = build_scene(canvas, view, style, layout, REFERENCE)
        (out_dir / f"{slug}_{view_name}.png").write_bytes(renderer.render(scene))

print(f"Generated previews in {out_dir}/")
for f in sorted(out_dir.glob("*.png")):
    print(f"  {f.name}")
