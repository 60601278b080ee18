from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal
import logging
from typing import Any

import numpy as np

from tracechart.config import ShapePolicy
from tracechart.errors import ChartDataError, ChartShapeError
from tracechart.records import MultiShape, Sample, SeriesShape, SingleShape, infer_shape, is_vector


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeriesPoints:
    index: int
    x: np.ndarray
    y: np.ndarray

    def __len__(self) -> int:
        return int(self.x.size)

    def pairs(self) -> list[tuple[float, float]]:
        return list(zip(self.x.tolist(), self.y.tolist(), strict=True))


@dataclass(frozen=True)
class NormalizedSeries:
    series_count: int
    series: tuple[SeriesPoints, ...]
    shape: SeriesShape | None = None
    # x of every sample, including samples whose values are all absent.
    all_x: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.float64))

    @property
    def is_multi(self) -> bool:
        return isinstance(self.shape, MultiShape)

    @property
    def is_empty(self) -> bool:
        return self.series_count == 0 or all(len(s) == 0 for s in self.series)


def normalize(
    points: Sequence[Sample],
    shape: SeriesShape | None = None,
    *,
    policy: ShapePolicy = "reject",
) -> NormalizedSeries:
    """Reshape a record's samples into one point list per series.

    Absent values (`None` or non-finite) are dropped per series, so one
    series can keep a sample another series loses.
    """
    if shape is None:
        shape = infer_shape(points)
    if shape is None:
        return NormalizedSeries(series_count=0, series=(), shape=None)

    count = shape.series_count
    n = len(points)
    x = np.empty(n, dtype=np.float64)
    y = np.full((n, count), np.nan, dtype=np.float64)
    for i, sample in enumerate(points):
        if not is_vector(sample) or len(sample) != 2:
            raise ChartDataError(f"sample {i} must be an (x, y) pair, got {sample!r}")
        raw_x, raw_y = sample
        x[i] = _coerce_value(raw_x, label="x", index=i)
        if not np.isfinite(x[i]):
            raise ChartDataError(f"sample {i} has a non-finite x value: {raw_x!r}")
        values = _sample_values(raw_y, shape, index=i, policy=policy)
        for j, raw in enumerate(values):
            y[i, j] = _coerce_value(raw, label="y", index=i)

    series: list[SeriesPoints] = []
    for j in range(count):
        column = y[:, j]
        mask = np.isfinite(column)
        series.append(SeriesPoints(index=j, x=x[mask].copy(), y=column[mask].copy()))
    return NormalizedSeries(series_count=count, series=tuple(series), shape=shape, all_x=x)


def _sample_values(raw_y: Any, shape: SeriesShape, *, index: int, policy: ShapePolicy) -> Sequence[Any]:
    if isinstance(shape, SingleShape):
        if is_vector(raw_y):
            if policy == "coerce" and len(raw_y) > 0:
                LOGGER.warning("sample %d: expected a scalar y, keeping first of %d values", index, len(raw_y))
                return (raw_y[0],)
            raise ChartShapeError(f"sample {index}: expected a scalar y, got {len(raw_y)} values", sample_index=index)
        return (raw_y,)

    count = shape.series_count
    if not is_vector(raw_y):
        if policy == "coerce":
            LOGGER.warning("sample %d: expected %d y values, got a scalar", index, count)
            return (raw_y,)[:count]
        raise ChartShapeError(f"sample {index}: expected {count} y values, got a scalar", sample_index=index)
    if len(raw_y) != count:
        if policy == "coerce":
            LOGGER.warning("sample %d: expected %d y values, got %d", index, count, len(raw_y))
            return tuple(raw_y)[:count]
        raise ChartShapeError(f"sample {index}: expected {count} y values, got {len(raw_y)}", sample_index=index)
    return raw_y


def _coerce_value(raw: Any, *, label: str, index: int) -> float:
    if raw is None:
        return np.nan
    if isinstance(raw, Decimal):
        return float(raw)
    if isinstance(raw, (bool, str, bytes)):
        raise ChartDataError(f"{label} contains non-numeric value at sample {index}: {raw!r}")
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ChartDataError(f"{label} contains non-numeric value at sample {index}: {raw!r}") from exc
