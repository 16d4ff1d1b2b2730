"""Graphics module: drawing surface contract and its implementations."""

from neonrun.graphics.surface import (
    DrawingSurface,
    DrawState,
    hex_color,
)
from neonrun.graphics.raster import BufferSurface
from neonrun.graphics.recording import DrawCommand, RecordingSurface

__all__ = [
    "DrawingSurface",
    "DrawState",
    "BufferSurface",
    "RecordingSurface",
    "DrawCommand",
    "hex_color",
]
