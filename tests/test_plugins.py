"""Tests for the plugin host boundary and the moon phase plugin."""

import logging
from datetime import date

import pytest

from chronos_wallpaper.config import PluginConfig, parse_config
from chronos_wallpaper.engine import compose_wallpaper
from chronos_wallpaper.model import ColorsConfig, PluginElement, TypographyConfig
from chronos_wallpaper.plugins import (
    BUILTIN_PLUGINS,
    HabitTrackerPlugin,
    MoonPhasePlugin,
    PluginContext,
    QuotesPlugin,
    run_plugins,
)
from chronos_wallpaper.plugins.quotes import DEFAULT_QUOTES, quote_for
from chronos_wallpaper.plugins.moon_phase import SYNODIC_MONTH, illumination, moon_age, phase_name
from chronos_wallpaper.scene.primitives import Circle, Layer, Text


def _context(**overrides) -> PluginContext:
    values = dict(
        width=1000,
        height=2000,
        colors=ColorsConfig(),
        typography=TypographyConfig(),
        view_mode="year",
        timezone="UTC",
        current_date=date(2024, 7, 15),
    )
    values.update(overrides)
    return PluginContext(**values)


class FakePlugin:
    def __init__(self, plugin_id, result=None, error=None):
        self.plugin_id = plugin_id
        self.result = result if result is not None else []
        self.error = error
        self.seen: list[PluginContext] = []

    def execute(self, context):
        self.seen.append(context)
        if self.error:
            raise self.error
        return self.result


class TestRunPlugins:
    def test_elements_concatenated_in_config_order(self):
        a = FakePlugin("a", [{"type": "circle", "x": 1, "y": 1, "radius": 1}])
        b = FakePlugin("b", [{"type": "circle", "x": 2, "y": 2, "radius": 2}])
        out = run_plugins([a, b], [PluginConfig(plugin_id="b"), PluginConfig(plugin_id="a")], _context())
        assert [e["x"] for e in out] == [2, 1]

    def test_plugin_receives_its_own_config(self):
        a = FakePlugin("a")
        run_plugins([a], [PluginConfig(plugin_id="a", config={"k": 1})], _context())
        assert a.seen[0].config == {"k": 1}
        assert a.seen[0].width == 1000

    def test_disabled_plugin_not_executed(self):
        a = FakePlugin("a", [{"type": "circle"}])
        out = run_plugins([a], [PluginConfig(plugin_id="a", enabled=False)], _context())
        assert out == []
        assert a.seen == []

    def test_unknown_plugin_skipped(self, caplog):
        with caplog.at_level(logging.WARNING):
            out = run_plugins([], [PluginConfig(plugin_id="ghost")], _context())
        assert out == []
        assert "ghost: not found" in caplog.text

    def test_failing_plugin_isolated(self, caplog):
        bad = FakePlugin("bad", error=RuntimeError("boom"))
        good = FakePlugin("good", [{"type": "circle", "x": 1, "y": 1, "radius": 1}])
        with caplog.at_level(logging.WARNING):
            out = run_plugins(
                [bad, good],
                [PluginConfig(plugin_id="bad"), PluginConfig(plugin_id="good")],
                _context(),
            )
        assert len(out) == 1
        assert "boom" in caplog.text

    def test_non_list_result_ignored(self, caplog):
        weird = FakePlugin("weird", result="nope")
        with caplog.at_level(logging.WARNING):
            out = run_plugins([weird], [PluginConfig(plugin_id="weird")], _context())
        assert out == []
        assert "expected a list" in caplog.text


class TestMoonPhase:
    def test_phase_names(self):
        assert phase_name(0.0) == "New Moon"
        assert phase_name(SYNODIC_MONTH / 4) == "First Quarter"
        assert phase_name(SYNODIC_MONTH / 2) == "Full Moon"
        assert phase_name(SYNODIC_MONTH * 0.99) == "New Moon"

    def test_illumination(self):
        assert illumination(0.0) == pytest.approx(0.0)
        assert illumination(SYNODIC_MONTH / 2) == pytest.approx(1.0)

    def test_age_within_cycle(self):
        for day in (date(1999, 3, 3), date(2024, 7, 15), date(2031, 12, 31)):
            assert 0 <= moon_age(day) < SYNODIC_MONTH

    def test_known_full_moon(self):
        age = moon_age(date(2000, 1, 21))
        assert phase_name(age) == "Full Moon"

    def test_elements(self):
        elements = MoonPhasePlugin().execute(_context(current_date=date(2000, 1, 21)))
        disc, caption = elements
        assert isinstance(disc, PluginElement) and disc.type == "circle"
        assert caption.type == "text"
        assert caption.content.startswith("Full Moon · ")
        assert caption.align == "center"
        assert caption.x == 500

    def test_caption_without_illumination(self):
        ctx = _context(current_date=date(2000, 1, 21), config={"show_illumination": False, "y": 100})
        caption = MoonPhasePlugin().execute(ctx)[1]
        assert caption.content == "Full Moon"
        assert caption.y == 100


class TestQuotes:
    def test_same_quote_all_day_and_changes_next_day(self):
        plugin = QuotesPlugin()
        today = plugin.execute(_context(current_date=date(2024, 7, 15)))[0]
        again = plugin.execute(_context(current_date=date(2024, 7, 15)))[0]
        tomorrow = plugin.execute(_context(current_date=date(2024, 7, 16)))[0]
        assert today.content == again.content
        assert today.content != tomorrow.content
        assert today.content in DEFAULT_QUOTES

    def test_configured_quotes(self):
        quotes = ["alpha", "beta"]
        element = QuotesPlugin().execute(
            _context(current_date=date(2024, 7, 15), config={"quotes": quotes})
        )[0]
        assert element.content == quote_for(date(2024, 7, 15), quotes)
        assert element.content in quotes

    def test_position_and_layout(self):
        element = QuotesPlugin().execute(_context(config={"position": "top"}))[0]
        assert element.type == "text"
        assert element.align == "center"
        assert element.x == 500
        assert element.y == pytest.approx(160)
        assert element.max_width == pytest.approx(800)

    def test_unknown_position_rejected(self):
        with pytest.raises(ValueError, match="Unknown quote position"):
            QuotesPlugin().execute(_context(config={"position": "sideways"}))


class TestHabitTracker:
    def test_default_habits(self):
        elements = HabitTrackerPlugin().execute(_context())
        dots = [e for e in elements if e.type == "circle"]
        labels = [e.content for e in elements if e.type == "text"]
        assert labels == ["Exercise", "Read", "Meditate"]
        assert len(dots) == 3
        assert all(d.color == ColorsConfig().future for d in dots)

    def test_done_habits_highlighted(self):
        ctx = _context(config={"habits": ["Run", "Write"], "done": ["Write"]})
        dots = [e for e in HabitTrackerPlugin().execute(ctx) if e.type == "circle"]
        assert [d.color for d in dots] == [ColorsConfig().future, ColorsConfig().current]

    def test_right_corner_labels_sit_left_of_dots(self):
        elements = HabitTrackerPlugin().execute(_context(config={"position": "top-right"}))
        dot, label = elements[0], elements[1]
        assert label.align == "right"
        assert label.x < dot.x < 1000

    def test_bottom_left_corner(self):
        elements = HabitTrackerPlugin().execute(_context(config={"position": "bottom-left"}))
        dot, label = elements[0], elements[1]
        assert label.align == "left"
        assert dot.x < label.x
        assert dot.y > 1000

    def test_unknown_position_rejected(self):
        with pytest.raises(ValueError, match="Unknown habit tracker position"):
            HabitTrackerPlugin().execute(_context(config={"position": "middle"}))


class TestBuiltins:
    def test_registered_ids(self):
        assert [p.plugin_id for p in BUILTIN_PLUGINS] == ["quotes", "habit_tracker", "moon_phase"]


class TestComposeWallpaper:
    def test_enabled_plugin_reaches_scene(self):
        config = parse_config({
            "device": {"width": 600, "height": 1300},
            "plugins": [{"plugin_id": "moon_phase"}],
        })
        scene = compose_wallpaper(config, date(2000, 1, 21))
        disc, caption = scene.on_layer(Layer.PLUGIN)
        assert isinstance(disc, Circle)
        assert isinstance(caption, Text)
        assert caption.content.startswith("Full Moon")

    def test_all_builtins_together(self):
        config = parse_config({
            "device": {"width": 600, "height": 1300},
            "plugins": [
                {"plugin_id": "quotes"},
                {"plugin_id": "habit_tracker", "config": {"done": ["Read"]}},
                {"plugin_id": "moon_phase", "enabled": False},
            ],
        })
        scene = compose_wallpaper(config, date(2024, 7, 15))
        plugin = scene.on_layer(Layer.PLUGIN)
        assert len(plugin) == 1 + 6
        assert plugin[0].content in DEFAULT_QUOTES

    def test_no_plugins_configured(self):
        config = parse_config({"device": {"width": 600, "height": 1300}})
        scene = compose_wallpaper(config, date(2024, 7, 15))
        assert scene.on_layer(Layer.PLUGIN) == []
        assert scene.stats_text == "169d left · 54%"
