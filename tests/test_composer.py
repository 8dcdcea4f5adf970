"""Tests for Scene composition: cells, labels, stats and overlays."""

import logging
from datetime import date, timedelta

import pytest

from chronos_wallpaper.engine import build_scene
from chronos_wallpaper.model import (
    CanvasSpec,
    GridShape,
    LayoutConfig,
    LifeView,
    StyleConfig,
    TextElement,
    TypographyConfig,
    YearView,
    YearViewLayout,
)
from chronos_wallpaper.scene.primitives import (
    Circle,
    Layer,
    Line,
    PercentPosition,
    PixelPosition,
    Rect,
    Text,
    resolve_position,
)

CANVAS = CanvasSpec(1170, 2532)
REFERENCE = date(2024, 7, 15)


def _scene(view=None, style=None, **kwargs):
    return build_scene(
        CANVAS,
        view or YearView(),
        style or StyleConfig(),
        LayoutConfig(),
        REFERENCE,
        **kwargs,
    )


class TestReferenceScenario:
    def test_stats_text(self):
        assert _scene().stats_text == "169d left · 54%"

    def test_cells(self):
        scene = _scene()
        assert len(scene.cells) == 366
        current = [c for c in scene.cells if c.state == "current"]
        assert len(current) == 1
        assert current[0].index == 197
        assert current[0].fill == (0xFF, 0x6B, 0x35)

    def test_month_labels(self):
        labels = _scene().on_layer(Layer.LABEL)
        assert [t.content for t in labels] == [
            "Jan", "Feb", "Mar", "Apr", "May", "Jun",
            "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
        ]

    def test_composition_is_deterministic(self):
        assert _scene() == _scene()
        assert _scene().to_dict() == _scene().to_dict()

    def test_background(self):
        assert _scene().background == (0x1A, 0x1A, 0x1A)


class TestStats:
    def test_hidden(self):
        style = StyleConfig(typography=TypographyConfig(stats_visible=False))
        assert _scene(style=style).stats_text is None

    def test_runs_are_colored_separately(self):
        stats = _scene().on_layer(Layer.STATS)[0]
        assert [run.text for run in stats.runs] == ["169d left", " · ", "54%"]
        assert stats.runs[0].color == (0xFF, 0x6B, 0x35)
        assert stats.runs[2].color == (0x88, 0x88, 0x88)
        assert stats.x == pytest.approx(CANVAS.width / 2)

    def test_life_view(self):
        birth = date(1990, 1, 1)
        scene = build_scene(
            CANVAS,
            LifeView(birth),
            StyleConfig(),
            LayoutConfig(),
            birth + timedelta(weeks=416),
        )
        assert scene.stats_text == "10% to 90"
        assert len(scene.cells) == 4160
        assert len(scene.on_layer(Layer.LABEL)) == 16

    def test_days_layout(self):
        scene = _scene(view=YearView(year_view_layout=YearViewLayout.DAYS))
        assert scene.stats_text == "169d left · 54%"
        assert len(scene.on_layer(Layer.LABEL)) == 0


class TestShapes:
    def test_circles_by_default(self):
        assert all(isinstance(c, Circle) for c in _scene().cells)

    def test_rounded_rects(self):
        scene = _scene(style=StyleConfig(shape=GridShape.ROUNDED_RECT))
        cells = scene.cells
        assert all(isinstance(c, Rect) for c in cells)
        assert cells[0].radius == pytest.approx(cells[0].width * 0.15)
        assert cells[0].width == cells[0].height


class TestTextElements:
    def test_percent_position_resolved(self):
        scene = _scene(
            text_elements=[{"id": "motto", "content": "Hello", "x": 50, "y": 10, "align": "center"}]
        )
        (text,) = scene.on_layer(Layer.TEXT)
        assert text.content == "Hello"
        assert text.x == pytest.approx(585)
        assert text.y == pytest.approx(253.2)
        assert text.anchor == "mm"

    @pytest.mark.parametrize("align, anchor", [("left", "lm"), ("right", "rm")])
    def test_alignment_anchor(self, align, anchor):
        scene = _scene(text_elements=[TextElement(id="a", content="x", align=align)])
        assert scene.on_layer(Layer.TEXT)[0].anchor == anchor

    def test_defaults_from_style(self):
        scene = _scene(text_elements=[TextElement(id="a", content="x")])
        text = scene.on_layer(Layer.TEXT)[0]
        assert text.font_size == 16
        assert text.font_family == "monospace"
        assert text.runs[0].color == (0x88, 0x88, 0x88)

    def test_hidden_and_blank_skipped(self):
        scene = _scene(
            text_elements=[
                {"id": "a", "content": "shown"},
                {"id": "b", "content": "hidden", "visible": False},
                {"id": "c", "content": "   "},
                {"id": "d"},
            ]
        )
        assert [t.content for t in scene.on_layer(Layer.TEXT)] == ["shown"]

    def test_malformed_dropped_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            scene = _scene(
                text_elements=[{"content": "no id"}, {"id": "ok", "content": "kept"}]
            )
        assert [t.content for t in scene.on_layer(Layer.TEXT)] == ["kept"]
        assert "Dropping malformed text element" in caplog.text


class TestPluginElements:
    def test_each_type(self):
        scene = _scene(
            plugin_elements=[
                {"type": "text", "x": 10, "y": 20, "content": "moon", "align": "center"},
                {"type": "rect", "x": 1, "y": 2, "width": 30, "height": 40, "color": "#00ff00"},
                {"type": "circle", "x": 5, "y": 6, "radius": 7},
                {"type": "line", "x": 0, "y": 0, "x2": 100, "y2": 100, "stroke_width": 3},
            ]
        )
        text, rect, circle, line = scene.on_layer(Layer.PLUGIN)
        assert isinstance(text, Text) and text.anchor == "ma"
        assert isinstance(rect, Rect) and rect.fill == (0, 255, 0)
        assert isinstance(circle, Circle) and (circle.cx, circle.cy) == (5, 6)
        assert isinstance(line, Line) and line.width == 3

    def test_incomplete_elements_dropped(self, caplog):
        with caplog.at_level(logging.WARNING):
            scene = _scene(
                plugin_elements=[
                    {"type": "rect", "x": 1, "y": 2, "width": 3},
                    {"type": "triangle", "x": 1, "y": 2},
                    {"type": "circle", "x": 5, "y": 5, "radius": 3},
                    {"type": "text", "x": 5, "y": 5},
                ]
            )
        plugin = scene.on_layer(Layer.PLUGIN)
        assert len(plugin) == 1
        assert isinstance(plugin[0], Circle)
        assert "missing height" in caplog.text


    def test_default_font_size(self):
        scene = _scene(plugin_elements=[{"type": "text", "x": 10, "y": 20, "content": "moon"}])
        assert scene.on_layer(Layer.PLUGIN)[0].font_size == 16

    def test_pixel_anchor_is_not_scaled(self):
        element = {"id": "a", "content": "same", "x": 50, "y": 10}
        scene = _scene(
            text_elements=[element],
            plugin_elements=[{"type": "text", "x": 50, "y": 10, "content": "same"}],
        )
        text = scene.on_layer(Layer.TEXT)[0]
        plugin = scene.on_layer(Layer.PLUGIN)[0]
        assert (plugin.x, plugin.y) == (50, 10)
        assert (text.x, text.y) != (plugin.x, plugin.y)
        assert text.x == pytest.approx(585)

    def test_line_end_point_in_pixels(self):
        scene = _scene(plugin_elements=[{"type": "line", "x": 1, "y": 2, "x2": 30, "y2": 40}])
        line = scene.on_layer(Layer.PLUGIN)[0]
        assert (line.x1, line.y1, line.x2, line.y2) == (1, 2, 30, 40)


class TestPositions:
    def test_percent_and_pixel_resolve_differently(self):
        assert resolve_position(PercentPosition(50, 10), CANVAS) == pytest.approx((585, 253.2))
        assert resolve_position(PixelPosition(50, 10), CANVAS) == (50, 10)


class TestLifeLabels:
    def test_right_aligned_against_grid(self):
        birth = date(1990, 1, 1)
        scene = build_scene(
            CANVAS, LifeView(birth), StyleConfig(), LayoutConfig(side_padding=0.0), REFERENCE
        )
        labels = scene.on_layer(Layer.LABEL)
        first_cell_x = min(c.cx - c.radius for c in scene.cells)
        assert labels[0].content == "1990"
        assert all(label.anchor == "rm" for label in labels)
        assert all(0 < label.x < first_cell_x for label in labels)


class TestZOrder:
    def test_layers_never_interleave(self):
        scene = _scene(
            text_elements=[{"id": "a", "content": "user"}],
            plugin_elements=[{"type": "circle", "x": 5, "y": 5, "radius": 3}],
        )
        order = list(Layer)
        ranks = [order.index(p.layer) for p in scene.primitives]
        assert ranks == sorted(ranks)
        assert {p.layer for p in scene.primitives} == set(Layer)

    def test_scene_json(self):
        data = _scene().to_dict()
        assert data["width"] == 1170
        assert data["background"] == "#1a1a1a"
        stats = [p for p in data["primitives"] if p["layer"] == "stats"]
        assert stats[0]["content"] == "169d left · 54%"
        assert data["primitives"][0]["type"] == "circle"
