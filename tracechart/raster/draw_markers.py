from __future__ import annotations

import numpy as np

from tracechart.raster.canvas import RGBA, draw_pixel


def draw_markers(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGBA, radius: int = 4) -> None:
    px = np.rint(xs).astype(np.int64)
    py = np.rint(ys).astype(np.int64)
    for x, y in zip(px.tolist(), py.tolist(), strict=True):
        draw_circle(dst, int(x), int(y), color=color, radius=radius)


def draw_circle(dst: np.ndarray, x: int, y: int, color: RGBA, radius: int) -> None:
    r2 = radius * radius
    for yy in range(y - radius, y + radius + 1):
        for xx in range(x - radius, x + radius + 1):
            if (xx - x) * (xx - x) + (yy - y) * (yy - y) <= r2:
                draw_pixel(dst, xx, yy, color)
