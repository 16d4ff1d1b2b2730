"""Motion trail: a bounded, fading history of recent positions."""

from collections import deque
from dataclasses import dataclass
from typing import Deque, List

from neonrun.game.particles import LIFE_PRECISION
from neonrun.graphics.primitives import Color
from neonrun.graphics.surface import DrawingSurface


@dataclass
class TrailPoint:
    x: float
    y: float
    life: float = 1.0


class Trail:
    """Oldest-first samples; the oldest is evicted once capacity is exceeded."""

    def __init__(self, capacity: int = 20, decay: float = 0.05, max_size: float = 8.0):
        self.capacity = capacity
        self.decay = decay
        self.max_size = max_size
        self._points: Deque[TrailPoint] = deque(maxlen=capacity)

    @property
    def points(self) -> List[TrailPoint]:
        return list(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def add_point(self, x: float, y: float) -> None:
        self._points.append(TrailPoint(x, y))

    def update(self) -> None:
        """Fade every sample and drop the expired ones."""
        for point in self._points:
            point.life = round(point.life - self.decay, LIFE_PRECISION)
        self._points = deque(
            (p for p in self._points if p.life > 0), maxlen=self.capacity
        )

    def clear(self) -> None:
        self._points.clear()

    def draw(self, surface: DrawingSurface, color: Color) -> None:
        """Fading squares; older and very recent samples are dimmer and smaller."""
        count = len(self._points)
        if not count:
            return

        with surface.scope():
            surface.set_glow(15, color)
            for i, point in enumerate(self._points):
                alpha = point.life * (i / count)
                if alpha <= 0:
                    continue
                surface.set_alpha(alpha)
                size = self.max_size * alpha
                surface.fill_rect(point.x - size / 2, point.y - size / 2, size, size, color)
