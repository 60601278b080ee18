from __future__ import annotations

from dataclasses import asdict, dataclass, replace
import re
from typing import Any, Literal, Mapping

HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")

ShapePolicy = Literal["reject", "coerce"]

DEFAULT_PALETTE: tuple[str, ...] = ("#e74c3c", "#3498db", "#2ecc71")


@dataclass(frozen=True)
class ChartConfig:
    """Surface geometry and styling for one mounted chart.

    `width`/`height` are the outer surface size; the plot area is what is
    left after the margins.
    """

    margin_top: int = 40
    margin_right: int = 30
    margin_bottom: int = 40
    margin_left: int = 50
    width: int = 1100
    height: int = 500
    palette: tuple[str, ...] = DEFAULT_PALETTE
    tick_count: int = 10
    marker_radius: int = 4
    line_width: int = 2
    tooltip_offset: tuple[int, int] = (10, -28)
    shape_policy: ShapePolicy = "reject"
    background: str = "#ffffff"
    axis_color: str = "#333333"
    text_color: str = "#222222"
    tooltip_background: str = "#000000b3"
    tooltip_text_color: str = "#ffffff"
    single_line_color: str = "#999999"
    single_marker_color: str = "#3498db"
    single_legend_color: str = "#4682b4"
    placeholder_color: str = "#f3f4f6"
    placeholder_radius: int = 24
    placeholder_text: str = "Loading ..."
    font_size_px: float = 11.0

    @property
    def plot_width(self) -> int:
        return self.width - self.margin_left - self.margin_right

    @property
    def plot_height(self) -> int:
        return self.height - self.margin_top - self.margin_bottom


SINGLE_SERIES_CONFIG = ChartConfig(height=500)
MULTI_SERIES_CONFIG = ChartConfig(height=450)


def single_series_config(**overrides: Any) -> ChartConfig:
    return validate_config(overrides, base=SINGLE_SERIES_CONFIG)


def multi_series_config(**overrides: Any) -> ChartConfig:
    return validate_config(overrides, base=MULTI_SERIES_CONFIG)


def validate_config(overrides: Mapping[str, Any] | None = None, *, base: ChartConfig = SINGLE_SERIES_CONFIG) -> ChartConfig:
    """Merge `overrides` into `base` and check the result is drawable."""

    raw: dict[str, Any] = asdict(base)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown chart config key: {key}")
            raw[key] = value

    for key in ("margin_top", "margin_right", "margin_bottom", "margin_left"):
        if not isinstance(raw[key], int) or raw[key] < 0:
            raise ValueError(f"`{key}` must be a non-negative integer")
    for key in ("width", "height", "tick_count", "line_width"):
        if not isinstance(raw[key], int) or raw[key] <= 0:
            raise ValueError(f"`{key}` must be a positive integer")
    if not isinstance(raw["marker_radius"], int) or raw["marker_radius"] < 0:
        raise ValueError("`marker_radius` must be a non-negative integer")
    if not isinstance(raw["placeholder_radius"], int) or raw["placeholder_radius"] < 0:
        raise ValueError("`placeholder_radius` must be a non-negative integer")
    if not isinstance(raw["placeholder_text"], str):
        raise ValueError("`placeholder_text` must be a string")

    palette = tuple(raw["palette"])
    if not palette:
        raise ValueError("`palette` must contain at least one color")
    for color in palette:
        if not isinstance(color, str) or not HEX_COLOR.match(color):
            raise ValueError(f"palette color {color!r} must be a hex color (#RRGGBB or #RRGGBBAA)")
    for key in (
        "background",
        "axis_color",
        "text_color",
        "tooltip_background",
        "tooltip_text_color",
        "single_line_color",
        "single_marker_color",
        "single_legend_color",
        "placeholder_color",
    ):
        if not isinstance(raw[key], str) or not HEX_COLOR.match(raw[key]):
            raise ValueError(f"`{key}` must be a hex color (#RRGGBB or #RRGGBBAA)")

    if raw["shape_policy"] not in ("reject", "coerce"):
        raise ValueError("`shape_policy` must be 'reject' or 'coerce'")
    offset = tuple(raw["tooltip_offset"])
    if len(offset) != 2:
        raise ValueError("`tooltip_offset` must be an (dx, dy) pair")
    if not isinstance(raw["font_size_px"], (int, float)) or float(raw["font_size_px"]) <= 0:
        raise ValueError("`font_size_px` must be a positive number")

    config = replace(
        base,
        **{k: v for k, v in raw.items() if k not in ("palette", "tooltip_offset", "font_size_px")},
        palette=palette,
        tooltip_offset=(int(offset[0]), int(offset[1])),
        font_size_px=float(raw["font_size_px"]),
    )
    if config.plot_width <= 1 or config.plot_height <= 1:
        raise ValueError("margins leave no room for the plot area")
    return config
