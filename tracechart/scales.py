from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import math

import numpy as np

from tracechart.errors import ChartDataError
from tracechart.normalize import SeriesPoints


_E10 = math.sqrt(50.0)
_E5 = math.sqrt(10.0)
_E2 = math.sqrt(2.0)


@dataclass(frozen=True)
class LinearScale:
    """Affine map from `domain` onto `range`.

    A collapsed domain maps every value to the middle of the range.
    """

    domain: tuple[float, float]
    range: tuple[float, float]

    @property
    def degenerate(self) -> bool:
        return self.domain[0] == self.domain[1]

    def __call__(self, value: float | np.ndarray) -> float | np.ndarray:
        d0, d1 = self.domain
        r0, r1 = self.range
        if self.degenerate:
            mid = (r0 + r1) / 2.0
            if isinstance(value, np.ndarray):
                return np.full(value.shape, mid, dtype=np.float64)
            return mid
        t = (np.asarray(value, dtype=np.float64) - d0) / (d1 - d0)
        out = r0 + t * (r1 - r0)
        if isinstance(value, np.ndarray):
            return out
        return float(out)


@dataclass(frozen=True)
class ScalePair:
    x: LinearScale
    y: LinearScale


@dataclass(frozen=True)
class AxisTicks:
    values: tuple[float, ...]
    positions: tuple[float, ...]
    labels: tuple[str, ...]


def data_extent(
    series: Sequence[SeriesPoints],
    x_values: np.ndarray | None = None,
) -> tuple[float, float, float, float] | None:
    """Min/max of x and y over retained points.

    `x_values`, when given, replaces the retained x for the x extent.
    """
    xs = [s.x for s in series if s.x.size]
    ys = [s.y for s in series if s.y.size]
    if not xs or not ys:
        return None
    x_all = np.asarray(x_values, dtype=np.float64) if x_values is not None and np.size(x_values) else np.concatenate(xs)
    y_all = np.concatenate(ys)
    return (float(np.min(x_all)), float(np.max(x_all)), float(np.min(y_all)), float(np.max(y_all)))


def build_scales(
    series: Sequence[SeriesPoints],
    width: float,
    height: float,
    *,
    tick_count: int = 10,
    x_values: np.ndarray | None = None,
) -> ScalePair:
    extent = data_extent(series, x_values)
    if extent is None:
        raise ChartDataError("cannot build scales for series with no points")
    xmin, xmax, ymin, ymax = extent
    y_domain = nice_domain(ymin, ymax, tick_count)
    return ScalePair(
        x=LinearScale(domain=(xmin, xmax), range=(0.0, float(width))),
        y=LinearScale(domain=y_domain, range=(float(height), 0.0)),
    )


def tick_increment(start: float, stop: float, count: int) -> float:
    """Tick step for `count` ticks; negative values encode 1 / step."""
    step = (stop - start) / max(0, count)
    if step <= 0 or not math.isfinite(step):
        return 0.0
    power = math.floor(math.log10(step))
    error = step / (10.0**power)
    if error >= _E10:
        factor = 10.0
    elif error >= _E5:
        factor = 5.0
    elif error >= _E2:
        factor = 2.0
    else:
        factor = 1.0
    if power >= 0:
        return factor * (10.0**power)
    return -(10.0 ** (-power)) / factor


def nice_domain(vmin: float, vmax: float, count: int = 10) -> tuple[float, float]:
    """Extend `[vmin, vmax]` outward to whole tick steps."""
    if count <= 0:
        raise ValueError("count must be > 0")
    start, stop = float(vmin), float(vmax)
    reverse = stop < start
    if reverse:
        start, stop = stop, start
    previous: float | None = None
    for _ in range(10):
        step = tick_increment(start, stop, count)
        if step == previous:
            break
        if step > 0:
            start = math.floor(start / step) * step
            stop = math.ceil(stop / step) * step
        elif step < 0:
            start = math.ceil(start * step) / step
            stop = math.floor(stop * step) / step
        else:
            break
        previous = step
    start, stop = float(start) + 0.0, float(stop) + 0.0
    return (stop, start) if reverse else (start, stop)


def generate_ticks(vmin: float, vmax: float, count: int = 10) -> np.ndarray:
    if count <= 0:
        raise ValueError("count must be > 0")
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)
    lo, hi = min(vmin, vmax), max(vmin, vmax)
    inc = tick_increment(lo, hi, count)
    if inc == 0:
        return np.asarray([], dtype=np.float64)
    if inc > 0:
        i0 = math.ceil(lo / inc)
        i1 = math.floor(hi / inc)
        ticks = np.arange(i0, i1 + 1, dtype=np.float64) * inc
    else:
        i0 = math.ceil(lo * -inc)
        i1 = math.floor(hi * -inc)
        ticks = np.arange(i0, i1 + 1, dtype=np.float64) / -inc
    # Normalize floating-point drift so values like -4.44e-16 become 0.
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=abs(hi - lo) * 1e-12)] = 0.0
    return ticks


def build_axis(scale: LinearScale, *, count: int = 10, integer_labels: bool = False) -> AxisTicks:
    d0, d1 = scale.domain
    ticks = generate_ticks(d0, d1, count)
    positions = scale(ticks)
    if integer_labels:
        labels = [format_integer_tick(float(v)) for v in ticks]
    else:
        labels = format_ticks_for_axis(ticks)
    return AxisTicks(
        values=tuple(float(v) for v in ticks.tolist()),
        positions=tuple(float(p) for p in np.asarray(positions).tolist()),
        labels=tuple(labels),
    )


def format_integer_tick(value: float) -> str:
    out = f"{value:.0f}"
    return "0" if out == "-0" else out


def format_tick(value: float, *, step: float | None = None) -> str:
    """Fixed-point label with thousands grouping; decimals follow the tick step."""
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    if step is None:
        out = f"{value:,.12g}"
    else:
        out = f"{value:,.{precision_fixed(step)}f}"
    if out.startswith("-") and float(out[1:].replace(",", "")) == 0.0:
        out = out[1:]
    return out


def format_ticks_for_axis(ticks: np.ndarray) -> list[str]:
    if ticks.size == 0:
        return []
    if ticks.size == 1:
        return [format_tick(float(ticks[0]))]
    step = float(abs(ticks[1] - ticks[0]))
    return [format_tick(float(v), step=step) for v in ticks]


def precision_fixed(step: float) -> int:
    """Decimals needed to tell ticks `step` apart, e.g. 0.2 -> 1, 5 -> 0."""
    if step <= 0 or not np.isfinite(step):
        return 0
    # Tick differences carry float noise (0.1 can arrive as 0.09999999999999998).
    step = float(f"{abs(step):.12g}")
    return max(0, -math.floor(math.log10(step)))
