"""Shared geometry: vectors, bounding boxes and the viewport."""

from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)


@dataclass
class Vector2:
    """Real-valued 2D pair used for positions, velocities and offsets."""

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def zero(cls) -> "Vector2":
        return cls(0.0, 0.0)


@dataclass(frozen=True)
class AABB:
    """Axis-aligned bounding box with positive extents."""

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"AABB needs positive size, got {self.width}x{self.height}")

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def inset(self, margin: float) -> "AABB":
        """Shrink by ``margin`` on every side."""
        return AABB(
            self.x + margin,
            self.y + margin,
            self.width - 2 * margin,
            self.height - 2 * margin,
        )

    def overlaps(self, other: "AABB") -> bool:
        return aabb_overlap(self, other)


def aabb_overlap(a: AABB, b: AABB) -> bool:
    """True when the boxes share interior area. Touching edges do not count."""
    return (
        a.x < b.right
        and a.right > b.x
        and a.y < b.bottom
        and a.bottom > b.y
    )


class Viewport:
    """
    Visible play area, shared by reference between game objects.

    The ground band occupies the bottom ``ground_height`` rows; the
    ground line is its top edge.
    """

    def __init__(self, width: int, height: int, ground_height: int) -> None:
        self.ground_height = max(0, ground_height)
        self.width = 1
        self.height = 1
        self.resize(width, height)

    @property
    def ground_y(self) -> float:
        """Y coordinate of the ground line."""
        return float(max(0, self.height - self.ground_height))

    def resize(self, width: int, height: int) -> None:
        """Change the visible size. Dimensions are clamped to at least 1."""
        if width < 1 or height < 1:
            logger.warning(f"Viewport size {width}x{height} clamped to a minimum of 1")
        self.width = max(1, int(width))
        self.height = max(1, int(height))

    def __repr__(self) -> str:
        return f"Viewport({self.width}x{self.height}, ground_y={self.ground_y})"
