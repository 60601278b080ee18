from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from tracechart.config import DEFAULT_PALETTE, HEX_COLOR


RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class SeriesStyle:
    """Line color per series; dots and legend swatch default to the line color."""

    index: int
    color: str
    marker_color: str | None = None
    legend_color: str | None = None


def color_for(index: int, palette: Sequence[str] = DEFAULT_PALETTE) -> str:
    if not palette:
        raise ValueError("palette must contain at least one color")
    return palette[index % len(palette)]


def assign_styles(series_count: int, palette: Sequence[str] = DEFAULT_PALETTE) -> tuple[SeriesStyle, ...]:
    return tuple(SeriesStyle(index=i, color=color_for(i, palette)) for i in range(series_count))


def parse_hex_color(color: str) -> RGBA:
    """`#RRGGBB` or `#RRGGBBAA` to an RGBA tuple."""
    if not HEX_COLOR.match(color):
        raise ValueError(f"not a hex color: {color!r}")
    r = int(color[1:3], 16)
    g = int(color[3:5], 16)
    b = int(color[5:7], 16)
    a = int(color[7:9], 16) if len(color) == 9 else 255
    return (r, g, b, a)
