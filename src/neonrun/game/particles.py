"""Particles for the death burst."""

from dataclasses import dataclass
from typing import List, Optional
import random

from neonrun.game.geometry import Vector2
from neonrun.graphics.primitives import Color
from neonrun.graphics.surface import DrawingSurface

# Life values are rounded after each decay step so that, e.g., 1.0 with a
# decay of 0.02 lands on exactly 0.0 after 50 ticks.
LIFE_PRECISION = 9

DEATH_COLOR: Color = (255, 51, 51)


@dataclass
class Particle:
    """A single short-lived, decaying point."""

    x: float
    y: float
    color: Color
    vx: float = 0.0
    vy: float = 0.0
    life: float = 1.0
    decay: float = 0.02
    size: float = 4.0
    gravity: float = 0.2
    shrink: float = 0.98

    @classmethod
    def create(
        cls,
        x: float,
        y: float,
        color: Color,
        velocity: Optional[Vector2] = None,
        rng: Optional[random.Random] = None,
    ) -> "Particle":
        """Create a particle; without a velocity it drifts randomly in [-5, 5]."""
        rng = rng or random
        if velocity is None:
            velocity = Vector2(rng.uniform(-5, 5), rng.uniform(-5, 5))
        return cls(
            x=x,
            y=y,
            color=color,
            vx=velocity.x,
            vy=velocity.y,
            size=rng.uniform(2, 6),
        )

    @property
    def is_dead(self) -> bool:
        """Check if particle has expired."""
        return self.life <= 0

    def update(self) -> None:
        """Advance one tick."""
        self.x += self.vx
        self.y += self.vy
        self.vy += self.gravity
        self.life = round(self.life - self.decay, LIFE_PRECISION)
        self.size *= self.shrink

    def draw(self, surface: DrawingSurface) -> None:
        if self.is_dead:
            return
        with surface.scope():
            surface.set_alpha(self.life)
            surface.set_glow(10, self.color)
            surface.fill_rect(self.x, self.y, self.size, self.size, self.color)


def spawn_burst(
    x: float,
    y: float,
    color: Color,
    count: int,
    spread: float,
    rng: Optional[random.Random] = None,
) -> List[Particle]:
    """Particles flying out of (x, y) with velocities in [-spread/2, spread/2]."""
    rng = rng or random
    half = spread / 2
    return [
        Particle.create(
            x, y, color,
            velocity=Vector2(rng.uniform(-half, half), rng.uniform(-half, half)),
            rng=rng,
        )
        for _ in range(count)
    ]


def update_particles(particles: List[Particle]) -> List[Particle]:
    """Advance every particle and return the survivors."""
    alive = []
    for particle in particles:
        particle.update()
        if not particle.is_dead:
            alive.append(particle)
    return alive
