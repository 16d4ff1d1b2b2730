"""Obstacle catalog, procedural generation and collision testing.

Obstacles arrive from the right with a random gap of at least
``min_spacing`` to the previous one, scroll left at the game speed and
are dropped once they are well past the left edge.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence
import logging
import math
import random

from neonrun.game.geometry import AABB, Vector2, Viewport
from neonrun.game.player import Player
from neonrun.graphics.primitives import Color, Point
from neonrun.graphics.surface import DrawingSurface, hex_color
from neonrun.settings import GameplaySettings

logger = logging.getLogger(__name__)


class ObstacleKind(Enum):
    SPIKE = "spike"
    CUBE = "cube"
    ORB = "orb"
    ROBOT = "robot"
    SHIP = "ship"
    BALL = "ball"
    WAVE = "wave"
    SPIDER = "spider"
    SWING = "swing"
    UFO = "ufo"
    STAR = "star"


@dataclass(frozen=True)
class ObstacleTemplate:
    """Read-only catalog entry."""

    kind: ObstacleKind
    width: float
    height: float
    color: Color
    ground: bool = True
    glow: bool = False
    filled: bool = False


OBSTACLE_CATALOG: tuple[ObstacleTemplate, ...] = (
    # Ground obstacles
    ObstacleTemplate(ObstacleKind.SPIKE, 40, 60, hex_color("#02ff70"), glow=True),
    ObstacleTemplate(ObstacleKind.CUBE, 50, 50, hex_color("#8844ff"), filled=True),
    ObstacleTemplate(ObstacleKind.CUBE, 50, 50, hex_color("#4488ff"), filled=False),
    ObstacleTemplate(ObstacleKind.ORB, 35, 35, hex_color("#ffff00"), glow=True),
    ObstacleTemplate(ObstacleKind.ROBOT, 45, 55, hex_color("#00ff88")),
    ObstacleTemplate(ObstacleKind.SHIP, 60, 35, hex_color("#ff8800")),
    ObstacleTemplate(ObstacleKind.BALL, 40, 40, hex_color("#ff44ff")),
    ObstacleTemplate(ObstacleKind.WAVE, 55, 30, hex_color("#44ffff")),
    ObstacleTemplate(ObstacleKind.SPIDER, 50, 40, hex_color("#ff4444")),
    ObstacleTemplate(ObstacleKind.SWING, 45, 50, hex_color("#88ff44")),
    # Sky obstacles
    ObstacleTemplate(ObstacleKind.UFO, 60, 25, hex_color("#aaaaaa"), ground=False),
    ObstacleTemplate(ObstacleKind.STAR, 30, 30, hex_color("#ffff00"), ground=False, glow=True),
    ObstacleTemplate(ObstacleKind.STAR, 20, 20, hex_color("#ffff88"), ground=False, glow=True),
)


@dataclass
class Obstacle:
    """An active obstacle. Only ``x`` changes after spawning."""

    x: float
    y: float
    width: float
    height: float
    kind: ObstacleKind
    color: Color
    is_air: bool = False
    glow: bool = False
    filled: bool = False

    @classmethod
    def from_template(cls, template: ObstacleTemplate, x: float, y: float) -> "Obstacle":
        return cls(
            x=x,
            y=y,
            width=template.width,
            height=template.height,
            kind=template.kind,
            color=template.color,
            is_air=not template.ground,
            glow=template.glow,
            filled=template.filled,
        )

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def bounds(self) -> AABB:
        return AABB(self.x, self.y, self.width, self.height)


class ObstacleGenerator:
    """Spawns, scrolls, culls and collision-tests obstacles."""

    def __init__(
        self,
        gameplay: GameplaySettings,
        viewport: Viewport,
        catalog: Sequence[ObstacleTemplate] = OBSTACLE_CATALOG,
        rng: Optional[random.Random] = None,
    ):
        if not catalog:
            raise ValueError("Obstacle catalog is empty")
        self.gameplay = gameplay
        self.viewport = viewport
        self.catalog = tuple(catalog)
        self._rng = rng or random.Random()

        self.obstacles: List[Obstacle] = []
        self.next_obstacle_x = float(viewport.width)

    def update(self, speed: float, distance: float) -> None:
        """Scroll, drop the obstacles that left the screen, spawn when due."""
        for obstacle in self.obstacles:
            obstacle.x -= speed

        margin = self.gameplay.despawn_margin
        self.obstacles = [o for o in self.obstacles if o.right > -margin]

        if not self.obstacles or self.obstacles[-1].x < self.viewport.width:
            self._spawn(speed, distance)

    def _spawn(self, speed: float, distance: float) -> Obstacle:
        gp = self.gameplay
        if self.obstacles:
            gap = self._rng.uniform(gp.min_spacing, gp.max_spacing)
            self.next_obstacle_x = self.obstacles[-1].x + gap
        else:
            self.next_obstacle_x = self.viewport.width + gp.first_spawn_offset

        template = self._rng.choice(self.catalog)
        if template.ground:
            y = self.viewport.ground_y - template.height
        else:
            y = self._rng.uniform(gp.air_min_y, gp.air_max_y)

        obstacle = Obstacle.from_template(template, self.next_obstacle_x, y)
        self.obstacles.append(obstacle)
        logger.debug(
            f"Spawned {obstacle.kind.value} at x={obstacle.x:.0f} "
            f"(speed={speed:.2f}, distance={distance:.0f})"
        )
        return obstacle

    def check_collision(self, player: Player) -> bool:
        """True if the player's hit box overlaps any active obstacle."""
        bounds = player.get_bounds()
        return any(bounds.overlaps(o.bounds) for o in self.obstacles)

    def draw(self, surface: DrawingSurface, offset: Optional[Vector2] = None) -> None:
        offset = offset or Vector2.zero()
        margin = self.gameplay.draw_margin

        for obstacle in self.obstacles:
            draw_x = obstacle.x + offset.x
            if draw_x < -margin or draw_x > self.viewport.width + margin:
                continue

            with surface.scope():
                surface.translate(offset.x, offset.y)
                surface.set_glow(30 if obstacle.glow else 20, obstacle.color)
                DRAW_ROUTINES[obstacle.kind](surface, obstacle)

    def reset(self) -> None:
        self.obstacles = []
        self.next_obstacle_x = float(self.viewport.width)


# Draw routines, one per kind. Each paints inside the obstacle's bounds.

def _draw_spike(surface: DrawingSurface, o: Obstacle) -> None:
    surface.fill_polygon(
        [(o.x + 5, o.bottom), (o.x + o.width / 2, o.y), (o.right - 5, o.bottom)],
        o.color,
    )


def _draw_cube(surface: DrawingSurface, o: Obstacle) -> None:
    if o.filled:
        surface.fill_rect(o.x, o.y, o.width, o.height, o.color)
    else:
        surface.stroke_rect(o.x, o.y, o.width, o.height, o.color, line_width=3)


def _draw_orb(surface: DrawingSurface, o: Obstacle) -> None:
    surface.fill_circle(o.x + o.width / 2, o.y + o.height / 2, o.width / 2, o.color)


def _draw_robot(surface: DrawingSurface, o: Obstacle) -> None:
    surface.fill_rect(o.x + 10, o.y + 15, o.width - 20, o.height - 15, o.color)  # body
    surface.fill_rect(o.x + 15, o.y, o.width - 30, 20, o.color)  # head
    surface.fill_rect(o.x + 5, o.y + 20, 8, 15, o.color)
    surface.fill_rect(o.right - 13, o.y + 20, 8, 15, o.color)


def _draw_ship(surface: DrawingSurface, o: Obstacle) -> None:
    hull = o.width * 0.7
    surface.fill_rect(o.x, o.y + o.height / 3, hull, o.height / 3, o.color)
    surface.fill_polygon(
        [
            (o.x + hull, o.y + o.height / 3),
            (o.right, o.y + o.height / 2),
            (o.x + hull, o.y + o.height * 2 / 3),
        ],
        o.color,
    )


def _draw_ball(surface: DrawingSurface, o: Obstacle) -> None:
    cx, cy = o.x + o.width / 2, o.y + o.height / 2
    surface.fill_circle(cx, cy, o.width / 2, o.color)
    surface.stroke_circle(cx, cy, o.width / 3, (255, 255, 255), line_width=2)


def _draw_wave(surface: DrawingSurface, o: Obstacle) -> None:
    mid = o.y + o.height / 2
    amplitude = min(10.0, o.height / 2)
    points: List[Point] = [
        (o.x + i, mid + math.sin(i * 0.3) * amplitude)
        for i in range(0, int(o.width), 5)
    ]
    surface.polyline(points, o.color, line_width=4)


def _draw_spider(surface: DrawingSurface, o: Obstacle) -> None:
    surface.fill_rect(o.x + 15, o.y + 10, o.width - 30, o.height - 20, o.color)
    for i in range(4):
        surface.polyline([(o.x + 15, o.y + 15 + i * 5), (o.x + 5, o.y + 20 + i * 3)], o.color, 3)
        surface.polyline([(o.right - 15, o.y + 15 + i * 5), (o.right - 5, o.y + 20 + i * 3)], o.color, 3)


def _draw_swing(surface: DrawingSurface, o: Obstacle) -> None:
    chain_x = o.x + o.width / 2
    surface.polyline([(chain_x, o.y), (chain_x, o.bottom - 15)], (136, 136, 136), 2)
    surface.fill_rect(o.x + 10, o.bottom - 15, o.width - 20, 15, o.color)


def _draw_ufo(surface: DrawingSurface, o: Obstacle) -> None:
    cx = o.x + o.width / 2
    surface.fill_ellipse(cx, o.y + o.height / 2, o.width / 2, o.height / 3, o.color)
    surface.fill_ellipse(cx, o.y + o.height / 3, o.width / 3, o.height / 4, o.color)


def _draw_star(surface: DrawingSurface, o: Obstacle) -> None:
    cx, cy = o.x + o.width / 2, o.y + o.height / 2
    points: List[Point] = []
    for i in range(5):
        outer = -math.pi / 2 + i * 2 * math.pi / 5
        inner = outer + math.pi / 5
        points.append((cx + math.cos(outer) * o.width / 2, cy + math.sin(outer) * o.height / 2))
        points.append((cx + math.cos(inner) * o.width / 4, cy + math.sin(inner) * o.height / 4))
    surface.fill_polygon(points, o.color)


DrawRoutine = Callable[[DrawingSurface, Obstacle], None]

DRAW_ROUTINES: Dict[ObstacleKind, DrawRoutine] = {
    ObstacleKind.SPIKE: _draw_spike,
    ObstacleKind.CUBE: _draw_cube,
    ObstacleKind.ORB: _draw_orb,
    ObstacleKind.ROBOT: _draw_robot,
    ObstacleKind.SHIP: _draw_ship,
    ObstacleKind.BALL: _draw_ball,
    ObstacleKind.WAVE: _draw_wave,
    ObstacleKind.SPIDER: _draw_spider,
    ObstacleKind.SWING: _draw_swing,
    ObstacleKind.UFO: _draw_ufo,
    ObstacleKind.STAR: _draw_star,
}
