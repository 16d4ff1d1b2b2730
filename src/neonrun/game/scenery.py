"""Backdrop painting: sky, moon, stars and the ground band."""

import math

from neonrun.game.geometry import Viewport
from neonrun.graphics.primitives import Color
from neonrun.graphics.surface import DrawingSurface

SKY_STOPS: list[tuple[float, Color]] = [(0.0, (0, 17, 34)), (1.0, (0, 0, 0))]
GROUND_STOPS: list[tuple[float, Color]] = [
    (0.0, (51, 51, 51)),
    (0.3, (68, 68, 68)),
    (1.0, (34, 34, 34)),
]
MOON_COLOR: Color = (255, 255, 204)
STAR_COLOR: Color = (255, 255, 255)
EDGE_COLOR: Color = (0, 255, 255)
DOT_COLOR: Color = (85, 85, 85)

STAR_COUNT = 20


def wrap(position: float, cycle: float, low: float) -> float:
    """Fold ``position`` into one loop of length ``cycle`` starting near ``low``."""
    position = math.fmod(position, cycle)
    return position + cycle if position < low else position


def draw_sky(surface: DrawingSurface, viewport: Viewport) -> None:
    surface.fill_vertical_gradient(0, 0, viewport.width, viewport.height, SKY_STOPS)


def draw_backdrop(surface: DrawingSurface, viewport: Viewport, scroll: float) -> None:
    """Moon and stars, scrolling slower than the ground."""
    with surface.scope():
        surface.set_glow(30, MOON_COLOR)
        moon_x = wrap(150 - scroll * 0.1, viewport.width + 200, -100)
        surface.fill_circle(moon_x, 80, 40, MOON_COLOR)

    star_cycle = viewport.width + 100
    for i in range(STAR_COUNT):
        star_x = wrap(i * 100 - scroll * 0.2, star_cycle, -50)
        star_y = 50 + (i * 17) % 150
        surface.fill_circle(star_x, star_y, 1 + (i % 3), STAR_COLOR)


def draw_ground(surface: DrawingSurface, viewport: Viewport) -> None:
    ground_y = viewport.ground_y
    surface.fill_vertical_gradient(0, ground_y, viewport.width, viewport.ground_height, GROUND_STOPS)

    with surface.scope():
        surface.set_glow(10, EDGE_COLOR)
        surface.polyline([(0, ground_y), (viewport.width, ground_y)], EDGE_COLOR, line_width=3)

    for x in range(0, viewport.width, 30):
        y = ground_y + 20
        while y < viewport.height:
            surface.fill_circle(x, y, 2, DOT_COLOR)
            y += 25
