"""Screen shake."""

from typing import Optional
import random

from neonrun.game.geometry import Vector2

# Below this the shake is invisible; snapping stops the offset for good
MIN_SHAKE = 0.05


class Camera:
    """Decaying shake magnitude, turned into a random render offset."""

    def __init__(self, decay: float = 0.9, rng: Optional[random.Random] = None):
        self.decay = decay
        self.shake = 0.0
        self._rng = rng or random.Random()

    def update(self) -> None:
        if self.shake > 0:
            self.shake *= self.decay
            if self.shake < MIN_SHAKE:
                self.shake = 0.0

    def add_shake(self, intensity: float) -> None:
        """Raise the shake to ``intensity``; repeated triggers do not stack."""
        self.shake = max(self.shake, intensity)

    def get_shake_offset(self) -> Vector2:
        """Fresh random offset within [-shake/2, shake/2] on each axis."""
        if self.shake <= 0:
            return Vector2.zero()
        half = self.shake / 2
        return Vector2(self._rng.uniform(-half, half), self._rng.uniform(-half, half))

    def reset(self) -> None:
        self.shake = 0.0
