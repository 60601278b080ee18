from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging

import numpy as np

from tracechart.config import ChartConfig, multi_series_config, single_series_config
from tracechart.host import ChartHost
from tracechart.records import ChartRecord, MultiShape, Sample, SeriesShape, infer_shape


LOGGER = logging.getLogger(__name__)


def config_for_shape(shape: SeriesShape | None) -> ChartConfig:
    """Multi-series records get the shorter multi-series surface."""
    if isinstance(shape, MultiShape):
        return multi_series_config()
    return single_series_config()


def config_for_points(points: Sequence[Sample]) -> ChartConfig:
    return config_for_shape(infer_shape(points))


class ChartView:
    """One mountable chart: a title plus a host drawing its points."""

    def __init__(self, title: str, points: Sequence[Sample], config: ChartConfig | None = None) -> None:
        self.title = title
        self.points: tuple[Sample, ...] = tuple(points)
        self.config = config if config is not None else config_for_points(self.points)
        self.host = ChartHost(self.config)

    @classmethod
    def from_record(cls, record: ChartRecord, config: ChartConfig | None = None) -> "ChartView":
        if config is None:
            config = config_for_shape(record.resolved_shape)
        view = cls(record.title, record.points, config)
        view.host.shape = record.shape
        return view

    @property
    def loading(self) -> bool:
        return self.host.loading

    def mount(self) -> "ChartView":
        self.host.mount()
        self.host.update(self.points)
        return self

    def replace(self, points: Sequence[Sample]) -> "ChartView":
        self.points = tuple(points)
        self.host.update(self.points)
        return self

    def frame(self) -> np.ndarray:
        return self.host.frame()

    def close(self) -> None:
        self.host.close()

    def __enter__(self) -> "ChartView":
        if not self.host.mounted:
            self.mount()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def mount_views(records: Iterable[ChartRecord]) -> list[ChartView]:
    """Mount one view per record, in order; already-mounted views are closed on failure."""
    views: list[ChartView] = []
    try:
        for record in records:
            views.append(ChartView.from_record(record).mount())
    except Exception:
        for view in views:
            view.close()
        raise
    LOGGER.debug("mounted %d chart views", len(views))
    return views
