from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from tracechart.config import ChartConfig
from tracechart.geometry import Geometry, LegendEntry, LinePath, Marker, build_geometry
from tracechart.normalize import NormalizedSeries, normalize
from tracechart.palette import SeriesStyle, assign_styles
from tracechart.records import Sample, SeriesShape
from tracechart.scales import AxisTicks, ScalePair, build_axis, build_scales


MULTI_LEGEND_ITEM_SPACING = 120
MULTI_LEGEND_SWATCH = 12
SINGLE_LEGEND_SWATCH = 10


@dataclass(frozen=True)
class LegendItem:
    """Legend entry placed in surface coordinates (top-left of its swatch)."""

    entry: LegendEntry
    x: int
    y: int
    swatch: int
    text_x: int


@dataclass(frozen=True)
class DrawCommands:
    width: int
    height: int
    origin: tuple[int, int]
    plot_size: tuple[int, int]
    normalized: NormalizedSeries
    scales: ScalePair | None = None
    x_axis: AxisTicks | None = None
    y_axis: AxisTicks | None = None
    geometry: Geometry | None = None
    legend: tuple[LegendItem, ...] = ()

    @property
    def blank(self) -> bool:
        return self.geometry is None

    @property
    def paths(self) -> tuple[LinePath, ...]:
        return self.geometry.paths if self.geometry is not None else ()

    @property
    def markers(self) -> tuple[Marker, ...]:
        return self.geometry.markers if self.geometry is not None else ()


def render(points: Sequence[Sample], config: ChartConfig, *, shape: SeriesShape | None = None) -> DrawCommands:
    """Compute everything one update paints, without touching a surface."""

    normalized = normalize(points, shape, policy=config.shape_policy)
    base = DrawCommands(
        width=config.width,
        height=config.height,
        origin=(config.margin_left, config.margin_top),
        plot_size=(config.plot_width, config.plot_height),
        normalized=normalized,
    )
    if normalized.is_empty:
        return base

    x_values = normalized.all_x if normalized.is_multi else None
    scales = build_scales(
        normalized.series,
        config.plot_width,
        config.plot_height,
        tick_count=config.tick_count,
        x_values=x_values,
    )
    styles = series_styles(normalized, config)
    geometry = build_geometry(normalized, scales, styles, marker_radius=config.marker_radius)
    return DrawCommands(
        width=base.width,
        height=base.height,
        origin=base.origin,
        plot_size=base.plot_size,
        normalized=normalized,
        scales=scales,
        x_axis=build_axis(scales.x, count=config.tick_count, integer_labels=True),
        y_axis=build_axis(scales.y, count=config.tick_count),
        geometry=geometry,
        legend=layout_legend(geometry.legend, config, multi=normalized.is_multi),
    )


def layout_legend(entries: Sequence[LegendEntry], config: ChartConfig, *, multi: bool) -> tuple[LegendItem, ...]:
    if multi:
        # One row above the plot, starting at the left margin.
        return tuple(
            LegendItem(
                entry=entry,
                x=config.margin_left + i * MULTI_LEGEND_ITEM_SPACING,
                y=10,
                swatch=MULTI_LEGEND_SWATCH,
                text_x=config.margin_left + i * MULTI_LEGEND_ITEM_SPACING + MULTI_LEGEND_SWATCH + 6,
            )
            for i, entry in enumerate(entries)
        )
    x = config.margin_left + config.plot_width - 90
    y = max(0, config.margin_top - 30)
    return tuple(
        LegendItem(entry=entry, x=x, y=y, swatch=SINGLE_LEGEND_SWATCH, text_x=x + SINGLE_LEGEND_SWATCH + 5)
        for entry in entries
    )


def series_styles(normalized: NormalizedSeries, config: ChartConfig) -> tuple[SeriesStyle, ...]:
    """Palette colors per series; a single series uses its own line/dot/legend colors."""
    if normalized.is_multi:
        return assign_styles(normalized.series_count, config.palette)
    return (
        SeriesStyle(
            index=0,
            color=config.single_line_color,
            marker_color=config.single_marker_color,
            legend_color=config.single_legend_color,
        ),
    )
