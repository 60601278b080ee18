from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import json
from pathlib import Path
from typing import Any, Mapping, TypeAlias

from tracechart.errors import ChartDataError


Sample: TypeAlias = tuple[Any, Any]


@dataclass(frozen=True)
class SingleShape:
    series_count: int = 1


@dataclass(frozen=True)
class MultiShape:
    series_count: int

    def __post_init__(self) -> None:
        if self.series_count < 0:
            raise ValueError("series_count must be >= 0")


SeriesShape: TypeAlias = SingleShape | MultiShape


@dataclass(frozen=True)
class ChartRecord:
    title: str
    points: tuple[Sample, ...] = ()
    shape: SeriesShape | None = None

    @property
    def resolved_shape(self) -> SeriesShape | None:
        if self.shape is not None:
            return self.shape
        return infer_shape(self.points)


def is_vector(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def infer_shape(points: Sequence[Sample]) -> SeriesShape | None:
    """Classify a point list from its first sample; `None` when empty."""
    if not points:
        return None
    first = points[0]
    if not is_vector(first) or len(first) != 2:
        raise ChartDataError(f"sample 0 must be an (x, y) pair, got {first!r}")
    y = first[1]
    if is_vector(y):
        return MultiShape(series_count=len(y))
    return SingleShape()


def parse_records(raw: Any) -> list[ChartRecord]:
    """Build chart records from the decoded JSON chart list.

    Each entry is a mapping with a `title` and either `data` or `points`.
    """
    if not isinstance(raw, list):
        raise ChartDataError("chart data must be a list of chart entries")
    records: list[ChartRecord] = []
    for i, entry in enumerate(raw):
        if not isinstance(entry, Mapping):
            raise ChartDataError(f"chart entry {i} must be an object")
        title = entry.get("title", "")
        if not isinstance(title, str):
            raise ChartDataError(f"chart entry {i} title must be a string")
        points = entry.get("data", entry.get("points"))
        if points is None:
            raise ChartDataError(f"chart entry {i} has no `data` or `points`")
        if not isinstance(points, list):
            raise ChartDataError(f"chart entry {i} points must be a list")
        samples: list[Sample] = []
        for j, sample in enumerate(points):
            if not is_vector(sample) or len(sample) != 2:
                raise ChartDataError(f"chart entry {i} sample {j} must be an [x, y] pair")
            y = tuple(sample[1]) if is_vector(sample[1]) else sample[1]
            samples.append((sample[0], y))
        records.append(ChartRecord(title=title, points=tuple(samples)))
    return records


def load_records(path: str | Path) -> list[ChartRecord]:
    with Path(path).open("r", encoding="utf-8") as fh:
        raw = json.load(fh)
    return parse_records(raw)
