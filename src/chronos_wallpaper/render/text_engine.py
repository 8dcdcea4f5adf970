"""Font loading, text measuring and wrapping for the renderer.

Font families are resolved to system font files; a family may also be
a path to a .ttf/.otf/.ttc file. Anything unresolvable falls back to
Pillow's built-in font at the requested size.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from PIL import ImageDraw, ImageFont

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont

_FONT_PATHS: dict[str, list[str]] = {
    "monospace": [
        "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
        "/System/Library/Fonts/Menlo.ttc",
    ],
    "sans-serif": [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
        "/System/Library/Fonts/Helvetica.ttc",
    ],
    "serif": [
        "/usr/share/fonts/truetype/dejavu/DejaVuSerif.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSerif-Regular.ttf",
        "/System/Library/Fonts/Times.ttc",
    ],
}
_FONT_SUFFIXES = (".ttf", ".otf", ".ttc")


def _candidate_paths(family: str) -> list[str]:
    key = family.strip().lower()
    candidates: list[str] = []
    if key.endswith(_FONT_SUFFIXES):
        candidates.append(family.strip())
    candidates += _FONT_PATHS.get(key, [])
    candidates += _FONT_PATHS["sans-serif"]
    return candidates


@lru_cache(maxsize=64)
def get_font(size: int, family: str = "monospace") -> Font:
    """Load a font at the given pixel size, with caching."""
    size = max(1, size)
    for path in _candidate_paths(family):
        if Path(path).exists():
            try:
                return ImageFont.truetype(path, size)
            except OSError:
                continue
    return ImageFont.load_default(size=size)


def text_size(draw: ImageDraw.ImageDraw, text: str, font: Font) -> tuple[int, int]:
    """Width and height of the ink box of ``text``."""
    bbox = draw.textbbox((0, 0), text, font=font)
    return bbox[2] - bbox[0], bbox[3] - bbox[1]


def wrap_text(
    draw: ImageDraw.ImageDraw, text: str, font: Font, max_width: float
) -> list[str]:
    """Greedy word wrap. A single word wider than ``max_width`` gets its own line."""
    lines: list[str] = []
    for paragraph in text.splitlines() or [""]:
        current = ""
        for word in paragraph.split():
            candidate = f"{current} {word}" if current else word
            if current and text_size(draw, candidate, font)[0] > max_width:
                lines.append(current)
                current = word
            else:
                current = candidate
        lines.append(current)
    return lines
