"""Drawing surface that records commands instead of rasterizing them.

Used for headless runs and for asserting on what the game drew.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Sequence, Tuple

from neonrun.graphics.primitives import Color, Point
from neonrun.graphics.surface import DrawState, DrawingSurface


@dataclass
class DrawCommand:
    """One recorded shape command with the state it was issued under."""

    name: str
    args: dict[str, Any] = field(default_factory=dict)
    state: DrawState = field(default_factory=DrawState)


class RecordingSurface(DrawingSurface):
    """Keeps every command issued since the last ``reset``."""

    def __init__(self, width: int = 960, height: int = 540) -> None:
        super().__init__(width, height)
        self.commands: list[DrawCommand] = []

    def reset(self) -> None:
        """Forget recorded commands."""
        self.commands.clear()

    def named(self, name: str) -> list[DrawCommand]:
        """Recorded commands with the given name."""
        return [c for c in self.commands if c.name == name]

    def _record(self, name: str, **args: Any) -> None:
        self.commands.append(DrawCommand(name, args, replace(self.state)))

    def clear(self, color: Color = (0, 0, 0)) -> None:
        self._record("clear", color=color)

    def fill_rect(self, x: float, y: float, width: float, height: float, color: Color) -> None:
        self._record("fill_rect", x=x, y=y, width=width, height=height, color=color)

    def stroke_rect(
        self, x: float, y: float, width: float, height: float,
        color: Color, line_width: float = 1.0,
    ) -> None:
        self._record(
            "stroke_rect", x=x, y=y, width=width, height=height,
            color=color, line_width=line_width,
        )

    def fill_circle(self, cx: float, cy: float, radius: float, color: Color) -> None:
        self._record("fill_circle", cx=cx, cy=cy, radius=radius, color=color)

    def stroke_circle(
        self, cx: float, cy: float, radius: float,
        color: Color, line_width: float = 1.0,
    ) -> None:
        self._record(
            "stroke_circle", cx=cx, cy=cy, radius=radius,
            color=color, line_width=line_width,
        )

    def fill_ellipse(self, cx: float, cy: float, rx: float, ry: float, color: Color) -> None:
        self._record("fill_ellipse", cx=cx, cy=cy, rx=rx, ry=ry, color=color)

    def polyline(
        self, points: Sequence[Point], color: Color,
        line_width: float = 1.0, closed: bool = False,
    ) -> None:
        self._record(
            "polyline", points=list(points), color=color,
            line_width=line_width, closed=closed,
        )

    def fill_polygon(self, points: Sequence[Point], color: Color) -> None:
        self._record("fill_polygon", points=list(points), color=color)

    def fill_vertical_gradient(
        self, x: float, y: float, width: float, height: float,
        stops: Sequence[Tuple[float, Color]],
    ) -> None:
        self._record(
            "fill_vertical_gradient", x=x, y=y, width=width, height=height,
            stops=list(stops),
        )
