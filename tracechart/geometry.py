from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from tracechart.normalize import NormalizedSeries
from tracechart.palette import SeriesStyle
from tracechart.scales import ScalePair


SINGLE_SERIES_LABEL = "Single Series"


@dataclass(frozen=True)
class LinePath:
    """Polyline for one series, in plot-area pixel coordinates (input order)."""

    series_index: int
    color: str
    xs: np.ndarray
    ys: np.ndarray

    def __len__(self) -> int:
        return int(self.xs.size)

    @property
    def is_empty(self) -> bool:
        return self.xs.size == 0

    def vertices(self) -> list[tuple[float, float]]:
        return list(zip(self.xs.tolist(), self.ys.tolist(), strict=True))

    def svg_path(self) -> str:
        if self.is_empty:
            return ""
        parts = [f"{x:g},{y:g}" for x, y in self.vertices()]
        return "M" + "L".join(parts)


@dataclass(frozen=True)
class Marker:
    marker_id: str
    series_index: int
    cx: float
    cy: float
    x: float
    y: float
    color: str
    radius: int = 4

    def contains(self, px: float, py: float) -> bool:
        dx = px - self.cx
        dy = py - self.cy
        return dx * dx + dy * dy <= float(self.radius * self.radius)


@dataclass(frozen=True)
class LegendEntry:
    index: int
    label: str
    color: str


@dataclass(frozen=True)
class Geometry:
    paths: tuple[LinePath, ...]
    markers: tuple[Marker, ...]
    legend: tuple[LegendEntry, ...]

    def marker(self, marker_id: str) -> Marker | None:
        for m in self.markers:
            if m.marker_id == marker_id:
                return m
        return None


def marker_id_for(series_index: int, ordinal: int) -> str:
    return f"s{series_index}-p{ordinal}"


def legend_label(index: int, *, multi: bool) -> str:
    return f"Series {index + 1}" if multi else SINGLE_SERIES_LABEL


def build_geometry(
    normalized: NormalizedSeries,
    scales: ScalePair,
    styles: Sequence[SeriesStyle],
    *,
    marker_radius: int = 4,
) -> Geometry:
    if len(styles) < normalized.series_count:
        raise ValueError(f"need {normalized.series_count} series styles, got {len(styles)}")

    paths: list[LinePath] = []
    markers: list[Marker] = []
    legend: list[LegendEntry] = []
    for points in normalized.series:
        style = styles[points.index]
        marker_color = style.marker_color or style.color
        xs = np.asarray(scales.x(points.x), dtype=np.float64)
        ys = np.asarray(scales.y(points.y), dtype=np.float64)
        paths.append(LinePath(series_index=points.index, color=style.color, xs=xs, ys=ys))
        for ordinal, (cx, cy, x, y) in enumerate(zip(xs.tolist(), ys.tolist(), points.x.tolist(), points.y.tolist(), strict=True)):
            markers.append(
                Marker(
                    marker_id=marker_id_for(points.index, ordinal),
                    series_index=points.index,
                    cx=cx,
                    cy=cy,
                    x=x,
                    y=y,
                    color=marker_color,
                    radius=marker_radius,
                )
            )
        legend.append(
            LegendEntry(
                index=points.index,
                label=legend_label(points.index, multi=normalized.is_multi),
                color=style.legend_color or style.color,
            )
        )
    return Geometry(paths=tuple(paths), markers=tuple(markers), legend=tuple(legend))
