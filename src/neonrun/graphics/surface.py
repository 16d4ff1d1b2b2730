"""
Abstract drawing surface.

The game issues shape commands in a local coordinate space and never
reads anything back. A saved/restored drawing state carries the
translation, rotation, global opacity and glow of subsequent commands.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Iterator, Optional, Sequence, Tuple
import math

from neonrun.graphics.primitives import Color, Point


@dataclass
class DrawState:
    """Transform and effect parameters applied to draw commands."""

    tx: float = 0.0
    ty: float = 0.0
    rotation: float = 0.0
    alpha: float = 1.0
    glow_blur: float = 0.0
    glow_color: Optional[Color] = None

    def apply(self, x: float, y: float) -> Point:
        """Map a local point to surface coordinates."""
        if self.rotation:
            c = math.cos(self.rotation)
            s = math.sin(self.rotation)
            x, y = x * c - y * s, x * s + y * c
        return x + self.tx, y + self.ty


class DrawingSurface(ABC):
    """Abstract base class for render targets.

    Usage:
        with surface.scope():
            surface.translate(cx, cy)
            surface.rotate(angle)
            surface.set_glow(15, color)
            surface.fill_rect(-20, -20, 40, 40, color)
    """

    def __init__(self, width: int, height: int) -> None:
        self._width = max(1, int(width))
        self._height = max(1, int(height))
        self._state = DrawState()
        self._stack: list[DrawState] = []

    @property
    def width(self) -> int:
        """Surface width in pixels."""
        return self._width

    @property
    def height(self) -> int:
        """Surface height in pixels."""
        return self._height

    @property
    def state(self) -> DrawState:
        """Current drawing state."""
        return self._state

    # Drawing state

    def save(self) -> None:
        """Push a copy of the current drawing state."""
        self._stack.append(replace(self._state))

    def restore(self) -> None:
        """Pop the last saved drawing state."""
        if self._stack:
            self._state = self._stack.pop()

    @contextmanager
    def scope(self) -> Iterator["DrawingSurface"]:
        """Save the drawing state and restore it on exit."""
        self.save()
        try:
            yield self
        finally:
            self.restore()

    def translate(self, dx: float, dy: float) -> None:
        """Move the local origin, in local coordinates."""
        self._state.tx, self._state.ty = self._state.apply(dx, dy)

    def rotate(self, angle: float) -> None:
        """Rotate the local axes clockwise by ``angle`` radians."""
        self._state.rotation += angle

    def set_alpha(self, alpha: float) -> None:
        """Set global opacity for subsequent commands."""
        self._state.alpha = max(0.0, min(1.0, alpha))

    def set_glow(self, blur: float, color: Optional[Color] = None) -> None:
        """Set a glow halo (0 disables it)."""
        self._state.glow_blur = max(0.0, blur)
        self._state.glow_color = color

    def transform_points(self, points: Sequence[Point]) -> list[Point]:
        """Map local points to surface coordinates."""
        return [self._state.apply(x, y) for x, y in points]

    def resize(self, width: int, height: int) -> None:
        """Change the surface size (clamped to at least 1x1)."""
        self._width = max(1, int(width))
        self._height = max(1, int(height))

    # Shape commands

    @abstractmethod
    def clear(self, color: Color = (0, 0, 0)) -> None:
        """Fill the whole surface, ignoring the drawing state."""
        ...

    @abstractmethod
    def fill_rect(self, x: float, y: float, width: float, height: float, color: Color) -> None:
        ...

    @abstractmethod
    def stroke_rect(
        self, x: float, y: float, width: float, height: float,
        color: Color, line_width: float = 1.0,
    ) -> None:
        ...

    @abstractmethod
    def fill_circle(self, cx: float, cy: float, radius: float, color: Color) -> None:
        ...

    @abstractmethod
    def stroke_circle(
        self, cx: float, cy: float, radius: float,
        color: Color, line_width: float = 1.0,
    ) -> None:
        ...

    @abstractmethod
    def fill_ellipse(self, cx: float, cy: float, rx: float, ry: float, color: Color) -> None:
        ...

    @abstractmethod
    def polyline(
        self, points: Sequence[Point], color: Color,
        line_width: float = 1.0, closed: bool = False,
    ) -> None:
        ...

    @abstractmethod
    def fill_polygon(self, points: Sequence[Point], color: Color) -> None:
        ...

    @abstractmethod
    def fill_vertical_gradient(
        self, x: float, y: float, width: float, height: float,
        stops: Sequence[Tuple[float, Color]],
    ) -> None:
        """Fill a rectangle with a top-to-bottom gradient."""
        ...


def rect_points(x: float, y: float, width: float, height: float) -> list[Point]:
    """Corners of a rectangle, clockwise from top-left."""
    return [(x, y), (x + width, y), (x + width, y + height), (x, y + height)]


def ellipse_points(
    cx: float, cy: float, rx: float, ry: float, segments: int = 32
) -> list[Point]:
    """Polygon approximation of an ellipse."""
    return [
        (cx + math.cos(2 * math.pi * i / segments) * rx,
         cy + math.sin(2 * math.pi * i / segments) * ry)
        for i in range(segments)
    ]


def hex_color(value: str) -> Color:
    """Parse ``#rrggbb`` (an ``aa`` suffix is ignored)."""
    value = value.lstrip("#")
    if len(value) not in (6, 8):
        raise ValueError(f"Invalid color: #{value}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)
