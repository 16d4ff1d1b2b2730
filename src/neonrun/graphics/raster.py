"""Numpy raster implementation of the drawing surface."""

from typing import Callable, Optional, Sequence, Tuple
import math

import numpy as np

from neonrun.graphics.primitives import (
    Box, Buffer, Color, Mask, Point,
    blend, box_blur, clip_box, ellipse_mask, new_buffer,
    polygon_mask, polyline_mask, ring_mask, vertical_gradient,
)
from neonrun.graphics.surface import DrawingSurface, ellipse_points, rect_points

# Halo radius is a fraction of the requested blur, capped to keep frames cheap
GLOW_SCALE = 0.4
GLOW_MAX_RADIUS = 12
GLOW_STRENGTH = 0.6


class BufferSurface(DrawingSurface):
    """
    Draws into a (height, width, 3) uint8 buffer.

    The buffer can be pushed to a pygame surface with
    ``pygame.surfarray.blit_array(target, surface.buffer.swapaxes(0, 1))``.
    """

    def __init__(self, width: int, height: int) -> None:
        super().__init__(width, height)
        self._buffer = new_buffer(self.width, self.height)

    @property
    def buffer(self) -> Buffer:
        """The live pixel buffer."""
        return self._buffer

    def resize(self, width: int, height: int) -> None:
        super().resize(width, height)
        self._buffer = new_buffer(self.width, self.height)

    def clear(self, color: Color = (0, 0, 0)) -> None:
        self._buffer[:, :] = color

    # Shape commands

    def fill_rect(self, x: float, y: float, width: float, height: float, color: Color) -> None:
        self.fill_polygon(rect_points(x, y, width, height), color)

    def stroke_rect(
        self, x: float, y: float, width: float, height: float,
        color: Color, line_width: float = 1.0,
    ) -> None:
        self.polyline(rect_points(x, y, width, height), color, line_width, closed=True)

    def fill_circle(self, cx: float, cy: float, radius: float, color: Color) -> None:
        dx, dy = self.state.apply(cx, cy)
        self._paint(
            [dx - radius, dx + radius], [dy - radius, dy + radius],
            lambda box: ellipse_mask(dx, dy, radius, radius, box),
            color,
        )

    def stroke_circle(
        self, cx: float, cy: float, radius: float,
        color: Color, line_width: float = 1.0,
    ) -> None:
        dx, dy = self.state.apply(cx, cy)
        reach = radius + line_width
        self._paint(
            [dx - reach, dx + reach], [dy - reach, dy + reach],
            lambda box: ring_mask(dx, dy, radius, line_width, box),
            color,
        )

    def fill_ellipse(self, cx: float, cy: float, rx: float, ry: float, color: Color) -> None:
        if self.state.rotation:
            self.fill_polygon(ellipse_points(cx, cy, rx, ry), color)
            return
        dx, dy = self.state.apply(cx, cy)
        self._paint(
            [dx - rx, dx + rx], [dy - ry, dy + ry],
            lambda box: ellipse_mask(dx, dy, rx, ry, box),
            color,
        )

    def polyline(
        self, points: Sequence[Point], color: Color,
        line_width: float = 1.0, closed: bool = False,
    ) -> None:
        if len(points) < 2:
            return
        device = self.transform_points(points)
        pad = line_width / 2 + 1
        self._paint(
            [p[0] for p in device], [p[1] for p in device],
            lambda box: polyline_mask(device, line_width, box, closed=closed),
            color,
            pad=pad,
        )

    def fill_polygon(self, points: Sequence[Point], color: Color) -> None:
        if len(points) < 3:
            return
        device = self.transform_points(points)
        self._paint(
            [p[0] for p in device], [p[1] for p in device],
            lambda box: polygon_mask(device, box),
            color,
        )

    def fill_vertical_gradient(
        self, x: float, y: float, width: float, height: float,
        stops: Sequence[Tuple[float, Color]],
    ) -> None:
        # Gradients ignore rotation; they only paint backgrounds.
        if width <= 0 or height <= 0:
            return
        dx, dy = x + self.state.tx, y + self.state.ty
        if clip_box(self._buffer, [dx, dx + width - 1], [dy, dy + height - 1]) is None:
            return

        full_h = max(1, int(math.ceil(height)))
        full_w = max(1, int(math.ceil(width)))
        top = int(math.floor(dy))
        left = int(math.floor(dx))
        colors = vertical_gradient(full_h, full_w, stops)
        coverage = np.ones((full_h, full_w), dtype=np.float32)
        blend(self._buffer, left, top, coverage, colors, self.state.alpha)

    # Compositing

    def _paint(
        self,
        xs: Sequence[float],
        ys: Sequence[float],
        make_mask: Callable[[Box], Mask],
        color: Color,
        pad: float = 1.0,
    ) -> None:
        state = self.state
        if state.alpha <= 0:
            return

        radius = self._glow_radius()
        box = clip_box(self._buffer, xs, ys, pad=pad + radius)
        if box is None:
            return

        mask = make_mask(box)
        x0, y0 = box[0], box[1]

        if radius:
            halo = box_blur(mask, radius)
            glow_color = state.glow_color or color
            blend(self._buffer, x0, y0, halo, glow_color, state.alpha * GLOW_STRENGTH)

        blend(self._buffer, x0, y0, mask, color, state.alpha)

    def _glow_radius(self) -> int:
        blur = self.state.glow_blur
        if blur <= 0:
            return 0
        return max(1, min(GLOW_MAX_RADIUS, int(blur * GLOW_SCALE)))

    def snapshot(self) -> Buffer:
        """Copy of the current buffer."""
        return self._buffer.copy()

    def pixel(self, x: int, y: int) -> Optional[Color]:
        """Color at (x, y), or None outside the buffer."""
        if 0 <= x < self.width and 0 <= y < self.height:
            r, g, b = self._buffer[y, x]
            return int(r), int(g), int(b)
        return None
