"""Pillow renderer for composed Scenes.

The engine stops at the Scene; this module is the collaborator that
turns it into image bytes. Primitives are drawn strictly in Scene order.
"""

from __future__ import annotations

import io
import logging

from PIL import Image, ImageDraw

from ..scene.primitives import Circle, Line, Primitive, Rect, Scene, Text
from .text_engine import get_font, text_size, wrap_text

logger = logging.getLogger(__name__)

LINE_SPACING = 1.2


def anchor_offset(anchor: str, width: float, height: float) -> tuple[float, float]:
    """Offset from an anchor point to the top-left of a width x height box."""
    horizontal, vertical = anchor[0], anchor[1]
    dx = {"l": 0.0, "m": -width / 2, "r": -width}[horizontal]
    dy = {"a": 0.0, "m": -height / 2, "d": -height}.get(vertical, 0.0)
    return dx, dy


class SceneRenderer:
    """Renders a Scene to encoded image bytes (PNG by default)."""

    def __init__(self, image_format: str = "PNG") -> None:
        self.image_format = image_format

    def render_image(self, scene: Scene) -> Image.Image:
        img = Image.new("RGB", (scene.width, scene.height), scene.background)
        draw = ImageDraw.Draw(img)
        for primitive in scene.primitives:
            self._draw(draw, primitive)
        return img

    def render(self, scene: Scene) -> bytes:
        img = self.render_image(scene)
        buf = io.BytesIO()
        img.save(buf, format=self.image_format)
        logger.debug("Rendered %d primitives to %d bytes", len(scene), buf.tell())
        return buf.getvalue()

    def _draw(self, draw: ImageDraw.ImageDraw, primitive: Primitive) -> None:
        if isinstance(primitive, Circle):
            r = primitive.radius
            draw.ellipse(
                [primitive.cx - r, primitive.cy - r, primitive.cx + r, primitive.cy + r],
                fill=primitive.fill,
                outline=primitive.outline,
                width=round(primitive.stroke_width),
            )
        elif isinstance(primitive, Rect):
            box = [
                primitive.x,
                primitive.y,
                primitive.x + primitive.width,
                primitive.y + primitive.height,
            ]
            if primitive.radius > 0:
                draw.rounded_rectangle(
                    box,
                    radius=primitive.radius,
                    fill=primitive.fill,
                    outline=primitive.outline,
                    width=round(primitive.stroke_width),
                )
            else:
                draw.rectangle(
                    box,
                    fill=primitive.fill,
                    outline=primitive.outline,
                    width=round(primitive.stroke_width),
                )
        elif isinstance(primitive, Line):
            draw.line(
                [(primitive.x1, primitive.y1), (primitive.x2, primitive.y2)],
                fill=primitive.color,
                width=max(1, round(primitive.width)),
            )
        elif isinstance(primitive, Text):
            self._draw_text(draw, primitive)

    def _draw_text(self, draw: ImageDraw.ImageDraw, text: Text) -> None:
        font = get_font(round(text.font_size), text.font_family)

        if len(text.runs) == 1 and text.max_width is not None:
            run = text.runs[0]
            lines = wrap_text(draw, run.text, font, text.max_width)
            line_height = text.font_size * LINE_SPACING
            widths = [text_size(draw, line, font)[0] for line in lines]
            block_height = line_height * len(lines)
            _, dy = anchor_offset(text.anchor, 0, block_height)
            for i, (line, width) in enumerate(zip(lines, widths)):
                dx, _ = anchor_offset(text.anchor, width, 0)
                draw.text(
                    (text.x + dx, text.y + dy + i * line_height),
                    line,
                    fill=run.color,
                    font=font,
                )
            return

        # Runs sit side by side on one line, measured as a single box
        widths = [draw.textlength(run.text, font=font) for run in text.runs]
        _, height = text_size(draw, text.content, font)
        dx, dy = anchor_offset(text.anchor, sum(widths), height)
        x = text.x + dx
        for run, width in zip(text.runs, widths):
            draw.text((x, text.y + dy), run.text, fill=run.color, font=font)
            x += width
