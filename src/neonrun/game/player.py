"""The player: a spinning square with gravity, jumps and a trail."""

from enum import Enum
import logging

from neonrun.game.geometry import AABB, Vector2, Viewport
from neonrun.game.trail import Trail
from neonrun.graphics.primitives import Color
from neonrun.graphics.surface import DrawingSurface
from neonrun.settings import EffectSettings, PhysicsSettings

logger = logging.getLogger(__name__)

PLAYER_COLOR: Color = (0, 255, 255)
CORE_COLOR: Color = (255, 255, 255)


class PlayerStatus(Enum):
    ALIVE = "alive"
    DEAD = "dead"  # Reserved for self-inflicted deaths; collisions are checked by the generator


class Player:
    """Physics body living between the ceiling (y = 0) and the ground line."""

    def __init__(
        self,
        physics: PhysicsSettings,
        viewport: Viewport,
        effects: EffectSettings | None = None,
    ):
        self.physics = physics
        self.viewport = viewport
        effects = effects or EffectSettings()

        self.size = float(physics.player_size)
        self.color = PLAYER_COLOR
        self.trail = Trail(capacity=effects.trail_capacity)

        self.x = 0.0
        self.y = 0.0
        self.velocity_y = 0.0
        self.on_ground = False
        self.rotation = 0.0
        self.reset()

    def reset(self) -> None:
        """Stand at the start position, resting on the ground."""
        self.x = self.physics.player_x
        self.y = self.viewport.ground_y - self.size
        self.velocity_y = 0.0
        self.on_ground = True
        self.rotation = 0.0
        self.trail.clear()

    @property
    def center(self) -> Vector2:
        return Vector2(self.x + self.size / 2, self.y + self.size / 2)

    def jump(self) -> bool:
        """Launch if standing on the ground. Returns whether a jump started."""
        if not self.on_ground:
            return False
        self.velocity_y = self.physics.jump_force
        self.on_ground = False
        return True

    def update(self) -> PlayerStatus:
        """Advance physics one tick."""
        self.velocity_y += self.physics.gravity
        self.y += self.velocity_y

        ground_y = self.viewport.ground_y
        if self.y + self.size >= ground_y:
            self.y = ground_y - self.size
            self.velocity_y = 0.0
            self.on_ground = True
            self.rotation = 0.0
        else:
            self.on_ground = False
            self.rotation += self.physics.spin_rate

        if self.y <= 0:
            self.y = 0.0
            self.velocity_y = 0.0

        center = self.center
        self.trail.add_point(center.x, center.y)
        self.trail.update()

        return PlayerStatus.ALIVE

    def get_bounds(self) -> AABB:
        """Hit box, inset from the drawn square."""
        return AABB(self.x, self.y, self.size, self.size).inset(self.physics.hitbox_inset)

    def draw(self, surface: DrawingSurface) -> None:
        self.trail.draw(surface, self.color)

        half = self.size / 2
        with surface.scope():
            surface.translate(self.x + half, self.y + half)
            surface.rotate(self.rotation)
            surface.set_glow(15, self.color)
            surface.fill_rect(-half, -half, self.size, self.size, self.color)

            surface.set_glow(0)
            inner = self.size / 3
            surface.fill_rect(-inner, -inner, inner * 2, inner * 2, CORE_COLOR)
