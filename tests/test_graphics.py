"""Tests for the drawing surfaces."""
from __future__ import annotations

import math

import numpy as np
import pytest

from neonrun.graphics.primitives import box_blur, polygon_mask
from neonrun.graphics.raster import BufferSurface
from neonrun.graphics.recording import RecordingSurface
from neonrun.graphics.surface import hex_color

RED = (255, 0, 0)


class TestDrawState:
    def test_scope_restores(self) -> None:
        surface = RecordingSurface()
        with surface.scope():
            surface.translate(10, 5)
            surface.set_alpha(0.5)
            surface.set_glow(20, RED)
        assert surface.state.tx == 0
        assert surface.state.alpha == 1
        assert surface.state.glow_blur == 0

    def test_translate_in_rotated_frame(self) -> None:
        surface = RecordingSurface()
        surface.translate(100, 100)
        surface.rotate(math.pi / 2)
        surface.translate(10, 0)
        assert surface.state.tx == pytest.approx(100)
        assert surface.state.ty == pytest.approx(110)

    def test_alpha_clamped(self) -> None:
        surface = RecordingSurface()
        surface.set_alpha(3)
        assert surface.state.alpha == 1
        surface.set_alpha(-1)
        assert surface.state.alpha == 0

    def test_recording_keeps_state_copy(self) -> None:
        surface = RecordingSurface()
        surface.set_alpha(0.25)
        surface.fill_rect(0, 0, 1, 1, RED)
        surface.set_alpha(1)
        assert surface.commands[0].state.alpha == 0.25


class TestBufferSurface:
    def test_fill_rect(self) -> None:
        surface = BufferSurface(20, 20)
        surface.fill_rect(5, 5, 10, 10, RED)
        assert surface.pixel(10, 10) == RED
        assert surface.pixel(2, 2) == (0, 0, 0)

    def test_translation(self) -> None:
        surface = BufferSurface(20, 20)
        surface.translate(10, 10)
        surface.fill_rect(0, 0, 5, 5, RED)
        assert surface.pixel(12, 12) == RED
        assert surface.pixel(2, 2) == (0, 0, 0)

    def test_alpha_blends(self) -> None:
        surface = BufferSurface(10, 10)
        surface.clear((0, 0, 200))
        surface.set_alpha(0.5)
        surface.fill_rect(0, 0, 10, 10, RED)
        r, g, b = surface.pixel(5, 5)
        assert r == pytest.approx(127, abs=1)
        assert b == pytest.approx(100, abs=1)

    def test_glow_spills_outside_shape(self) -> None:
        plain = BufferSurface(60, 60)
        plain.fill_circle(30, 30, 5, RED)

        glowing = BufferSurface(60, 60)
        glowing.set_glow(20, RED)
        glowing.fill_circle(30, 30, 5, RED)

        assert plain.pixel(30, 40) == (0, 0, 0)
        assert glowing.pixel(30, 40)[0] > 0

    def test_offscreen_is_noop(self) -> None:
        surface = BufferSurface(10, 10)
        surface.fill_rect(-100, -100, 5, 5, RED)
        surface.fill_circle(500, 500, 4, RED)
        assert not surface.buffer.any()

    def test_gradient(self) -> None:
        surface = BufferSurface(4, 100)
        surface.fill_vertical_gradient(0, 0, 4, 100, [(0.0, (0, 0, 0)), (1.0, (0, 0, 200))])
        assert surface.pixel(0, 0)[2] < surface.pixel(0, 99)[2]

    def test_polyline_and_ellipse(self) -> None:
        surface = BufferSurface(40, 40)
        surface.polyline([(0, 20), (39, 20)], RED, line_width=3)
        surface.fill_ellipse(20, 5, 6, 3, (0, 255, 0))
        assert surface.pixel(10, 20) == RED
        assert surface.pixel(20, 5) == (0, 255, 0)

    def test_rotated_square_covers_center(self) -> None:
        surface = BufferSurface(40, 40)
        with surface.scope():
            surface.translate(20, 20)
            surface.rotate(math.pi / 4)
            surface.fill_rect(-10, -10, 20, 20, RED)
        assert surface.pixel(20, 20) == RED
        # Corner of the unrotated square is outside the diamond
        assert surface.pixel(11, 11) == (0, 0, 0)

    def test_resize(self) -> None:
        surface = BufferSurface(10, 10)
        surface.resize(30, 20)
        assert surface.buffer.shape == (20, 30, 3)
        assert surface.pixel(29, 19) == (0, 0, 0)
        assert surface.pixel(30, 0) is None


class TestPrimitives:
    def test_box_blur_keeps_shape_and_mass(self) -> None:
        values = np.zeros((11, 11), dtype=np.float32)
        values[5, 5] = 1.0
        blurred = box_blur(values, 2)
        assert blurred.shape == values.shape
        assert blurred.sum() == pytest.approx(1.0, rel=1e-5)

    def test_polygon_mask_triangle(self) -> None:
        mask = polygon_mask([(0, 0), (10, 0), (0, 10)], (0, 0, 10, 10))
        assert mask[1, 1] == 1
        assert mask[8, 8] == 0


def test_hex_color() -> None:
    assert hex_color("#02ff70") == (2, 255, 112)
