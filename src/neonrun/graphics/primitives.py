"""Raster primitives for RGB numpy buffers.

Shapes are rasterized as coverage masks over a clipped bounding box
(pixel centers at +0.5) and then alpha-blended into the buffer.
"""

from typing import Optional, Sequence, Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Point = Tuple[float, float]
Buffer = NDArray[np.uint8]
Mask = NDArray[np.float32]
Box = Tuple[int, int, int, int]  # x0, y0, x1, y1 (exclusive)


def new_buffer(width: int, height: int, color: Color = (0, 0, 0)) -> Buffer:
    """Allocate a (height, width, 3) buffer filled with ``color``."""
    buffer = np.zeros((max(1, height), max(1, width), 3), dtype=np.uint8)
    buffer[:, :] = color
    return buffer


def clip_box(
    buffer: Buffer,
    xs: Sequence[float],
    ys: Sequence[float],
    pad: float = 0.0,
) -> Optional[Box]:
    """Integer bounding box of the given coordinates, clipped to the buffer.

    Returns:
        (x0, y0, x1, y1) or None when nothing is on screen
    """
    h, w = buffer.shape[:2]
    x0 = max(0, int(np.floor(min(xs) - pad)))
    y0 = max(0, int(np.floor(min(ys) - pad)))
    x1 = min(w, int(np.ceil(max(xs) + pad)) + 1)
    y1 = min(h, int(np.ceil(max(ys) + pad)) + 1)
    if x1 <= x0 or y1 <= y0:
        return None
    return x0, y0, x1, y1


def pixel_grid(box: Box) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Pixel-center coordinates for every pixel in ``box``."""
    x0, y0, x1, y1 = box
    xs = np.arange(x0, x1, dtype=np.float64) + 0.5
    ys = np.arange(y0, y1, dtype=np.float64) + 0.5
    return np.meshgrid(xs, ys)


def polygon_mask(points: Sequence[Point], box: Box) -> Mask:
    """Even-odd fill of a closed polygon."""
    px, py = pixel_grid(box)
    inside = np.zeros(px.shape, dtype=bool)
    n = len(points)

    for i in range(n):
        xa, ya = points[i]
        xb, yb = points[(i + 1) % n]
        if ya == yb:
            continue
        crosses = (ya > py) != (yb > py)
        x_cross = xa + (py - ya) * (xb - xa) / (yb - ya)
        inside ^= crosses & (px < x_cross)

    return inside.astype(np.float32)


def ellipse_mask(cx: float, cy: float, rx: float, ry: float, box: Box) -> Mask:
    """Filled axis-aligned ellipse."""
    px, py = pixel_grid(box)
    rx = max(rx, 0.5)
    ry = max(ry, 0.5)
    dist = ((px - cx) / rx) ** 2 + ((py - cy) / ry) ** 2
    return (dist <= 1.0).astype(np.float32)


def ring_mask(cx: float, cy: float, radius: float, width: float, box: Box) -> Mask:
    """Circle outline of the given stroke width."""
    px, py = pixel_grid(box)
    dist = np.sqrt((px - cx) ** 2 + (py - cy) ** 2)
    half = max(width / 2, 0.5)
    return (np.abs(dist - radius) <= half).astype(np.float32)


def polyline_mask(
    points: Sequence[Point],
    width: float,
    box: Box,
    closed: bool = False,
) -> Mask:
    """Union of thick segments through ``points``."""
    px, py = pixel_grid(box)
    half_sq = max(width / 2, 0.75) ** 2
    covered = np.zeros(px.shape, dtype=bool)

    segments = list(zip(points, points[1:]))
    if closed and len(points) > 2:
        segments.append((points[-1], points[0]))

    for (ax, ay), (bx, by) in segments:
        dx, dy = bx - ax, by - ay
        length_sq = dx * dx + dy * dy
        if length_sq == 0:
            t = 0.0
        else:
            t = np.clip(((px - ax) * dx + (py - ay) * dy) / length_sq, 0.0, 1.0)
        nx = ax + t * dx
        ny = ay + t * dy
        covered |= (px - nx) ** 2 + (py - ny) ** 2 <= half_sq

    return covered.astype(np.float32)


def box_blur(values: Mask, radius: int) -> Mask:
    """Separable box blur that keeps the input shape."""
    if radius <= 0:
        return values

    k = 2 * radius + 1
    padded = np.pad(values, radius, mode="constant")

    # Vertical pass
    c = np.cumsum(padded, axis=0, dtype=np.float64)
    c = np.vstack([np.zeros((1, c.shape[1])), c])
    rows = (c[k:] - c[:-k]) / k

    # Horizontal pass
    c = np.cumsum(rows, axis=1)
    c = np.hstack([np.zeros((c.shape[0], 1)), c])
    return ((c[:, k:] - c[:, :-k]) / k).astype(np.float32)


def blend(
    buffer: Buffer,
    x0: int,
    y0: int,
    coverage: Mask,
    color: Color | NDArray[np.float32],
    alpha: float = 1.0,
) -> None:
    """Alpha-blend ``color`` into the buffer where ``coverage`` > 0.

    Args:
        buffer: Target numpy array (height, width, 3)
        x0: Buffer x of the coverage's left column (may be off-buffer)
        y0: Buffer y of the coverage's top row (may be off-buffer)
        coverage: Per-pixel weights in [0, 1]
        color: RGB tuple, or a per-pixel color array shaped like coverage
        alpha: Global opacity multiplier
    """
    if alpha <= 0:
        return

    h, w = buffer.shape[:2]
    ch, cw = coverage.shape
    x1, y1 = max(0, x0), max(0, y0)
    x2, y2 = min(w, x0 + cw), min(h, y0 + ch)
    if x2 <= x1 or y2 <= y1:
        return

    weights = coverage[y1 - y0:y2 - y0, x1 - x0:x2 - x0] * min(alpha, 1.0)
    if not weights.any():
        return

    src = np.asarray(color, dtype=np.float32)
    if src.ndim == 3:
        src = src[y1 - y0:y2 - y0, x1 - x0:x2 - x0]

    weights = weights[..., None]
    region = buffer[y1:y2, x1:x2].astype(np.float32)
    buffer[y1:y2, x1:x2] = (region * (1.0 - weights) + src * weights).astype(np.uint8)


def vertical_gradient(
    height: int,
    width: int,
    stops: Sequence[Tuple[float, Color]],
) -> NDArray[np.float32]:
    """Per-pixel colors for a top-to-bottom gradient.

    Args:
        height: Rows in the gradient
        width: Columns in the gradient
        stops: (offset in [0, 1], color) pairs, in ascending offset order
    """
    offsets = [s[0] for s in stops]
    t = (np.arange(height, dtype=np.float32) + 0.5) / max(height, 1)
    rows = np.stack(
        [np.interp(t, offsets, [s[1][ch] for s in stops]) for ch in range(3)],
        axis=-1,
    ).astype(np.float32)
    return np.broadcast_to(rows[:, None, :], (height, width, 3))
