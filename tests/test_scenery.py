"""Tests for background painting."""
from __future__ import annotations

import pytest

from neonrun.game.geometry import Viewport
from neonrun.game.scenery import draw_backdrop, draw_ground, draw_sky, wrap
from neonrun.graphics.recording import RecordingSurface


class TestWrap:
    def test_inside_cycle_unchanged(self) -> None:
        assert wrap(150, 1160, -100) == 150

    def test_folds_past_left_edge(self) -> None:
        assert wrap(-150, 1160, -100) == pytest.approx(1010)

    def test_long_scroll_stays_in_range(self) -> None:
        for scroll in range(0, 100_000, 997):
            x = wrap(150 - scroll * 0.1, 1160, -100)
            assert -100 <= x < 1160


def test_sky_covers_viewport(viewport: Viewport) -> None:
    surface = RecordingSurface()
    draw_sky(surface, viewport)
    (command,) = surface.commands
    assert (command.args["width"], command.args["height"]) == (960, 540)


def test_backdrop_moon_and_stars(viewport: Viewport) -> None:
    surface = RecordingSurface()
    draw_backdrop(surface, viewport, scroll=0)
    circles = surface.named("fill_circle")
    assert len(circles) == 21
    moon = circles[0]
    assert (moon.args["cx"], moon.args["cy"], moon.args["radius"]) == (150, 80, 40)
    assert moon.state.glow_blur == 30
    # Stars are drawn without glow
    assert circles[1].state.glow_blur == 0


def test_ground_band(viewport: Viewport) -> None:
    surface = RecordingSurface()
    draw_ground(surface, viewport)
    band = surface.named("fill_vertical_gradient")[0]
    assert band.args["y"] == 440
    assert band.args["height"] == 100
    (edge,) = surface.named("polyline")
    assert edge.args["points"] == [(0, 440), (960, 440)]
    assert edge.state.glow_blur == 10
    # Dot rows at 460, 485, 510, 535 for every 30px column
    assert len(surface.named("fill_circle")) == 32 * 4
