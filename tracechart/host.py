from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
import logging
from typing import Any

import numpy as np

from tracechart.config import ChartConfig
from tracechart.errors import ChartHostError
from tracechart.interaction import HoverController, TooltipState, parse_pointer_event
from tracechart.paint import paint, paint_placeholder, paint_tooltip
from tracechart.palette import parse_hex_color
from tracechart.records import Sample, SeriesShape
from tracechart.render import DrawCommands, render
from tracechart.scales import AxisTicks
from tracechart.surface import DrawingSurface, compile_full_rewrite_batch


LOGGER = logging.getLogger(__name__)


@dataclass
class AxisContainer:
    """Persistent axis slot; its ticks are redrawn against each update's scale."""

    name: str
    ticks: AxisTicks | None = None


class ChartHost:
    """Owns one chart's drawing surface and redraws it on every data change.

    `mount()` allocates the surface once and shows a loading placeholder.
    Each `update()` clears everything previously drawn and repaints from
    scratch; only the tooltip state survives between updates.
    """

    def __init__(
        self,
        config: ChartConfig,
        *,
        shape: SeriesShape | None = None,
        surface_origin: tuple[float, float] = (0.0, 0.0),
        pointer_position: Callable[[], tuple[float, float]] | None = None,
    ) -> None:
        self.config = config
        self.shape = shape
        self.hover = HoverController(
            pointer_position=pointer_position,
            surface_origin=surface_origin,
            offset=(float(config.tooltip_offset[0]), float(config.tooltip_offset[1])),
        )
        self.surface: DrawingSurface | None = None
        self.x_axis: AxisContainer | None = None
        self.y_axis: AxisContainer | None = None
        self._drawn: dict[str, tuple[Any, ...]] = {}
        self._commands: DrawCommands | None = None
        self._base_frame: np.ndarray | None = None
        self._loading = True
        self._closed = False
        self.update_count = 0

    @property
    def mounted(self) -> bool:
        return self.surface is not None and not self._closed

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def commands(self) -> DrawCommands | None:
        return self._commands

    @property
    def tooltip(self) -> TooltipState:
        return self.hover.tooltip

    def drawn(self, kind: str) -> tuple[Any, ...]:
        return self._drawn.get(kind, ())

    def mount(self) -> "ChartHost":
        if self._closed:
            raise ChartHostError("chart host is closed")
        if self.surface is not None:
            raise ChartHostError("chart host is already mounted")
        self.surface = DrawingSurface(
            height=self.config.height,
            width=self.config.width,
            background=parse_hex_color(self.config.background),
        )
        self.x_axis = AxisContainer(name="x-axis")
        self.y_axis = AxisContainer(name="y-axis")
        self._loading = True
        self.surface.submit_write_batch(compile_full_rewrite_batch(paint_placeholder(self.config)))
        LOGGER.debug("mounted chart surface %dx%d", self.config.width, self.config.height)
        return self

    def update(self, points: Sequence[Sample]) -> DrawCommands:
        surface = self._require_surface()
        self._clear_drawn()
        self._loading = False

        commands = render(points, self.config, shape=self.shape)
        self._commands = commands
        self.update_count += 1
        if commands.blank:
            self.hover.bind(())
            self._base_frame = paint(commands, self.config)
            surface.clear()
            LOGGER.debug("update %d: no series data, surface left blank", self.update_count)
            return commands

        assert self.x_axis is not None and self.y_axis is not None
        self.x_axis.ticks = commands.x_axis
        self.y_axis.ticks = commands.y_axis
        self._drawn = {
            "line-path": commands.paths,
            "dot": commands.markers,
            "legend": commands.legend,
        }
        self.hover.bind(commands.markers)
        self._base_frame = paint(commands, self.config)
        surface.submit_write_batch(compile_full_rewrite_batch(self._composite()))
        LOGGER.debug(
            "update %d: %d series, %d markers",
            self.update_count,
            commands.normalized.series_count,
            len(commands.markers),
        )
        return commands

    def on_pointer_enter(self, marker_id: str, position: tuple[float, float] | None = None) -> TooltipState:
        self._require_surface()
        state = self.hover.on_pointer_enter(marker_id, position)
        self._repaint_tooltip()
        return state

    def on_pointer_leave(self, marker_id: str | None = None) -> TooltipState:
        self._require_surface()
        state = self.hover.on_pointer_leave(marker_id)
        self._repaint_tooltip()
        return state

    def on_pointer_move(self, x: float, y: float) -> TooltipState:
        self._require_surface()
        before = self.hover.tooltip
        state = self.hover.on_pointer_move(x, y, hit_offset=(self.config.margin_left, self.config.margin_top))
        if state != before:
            self._repaint_tooltip()
        return state

    def dispatch(self, event_type: str, payload: object) -> TooltipState:
        """Route a raw pointer event; anything that is not one is ignored."""
        event = parse_pointer_event(event_type, payload)
        if event is None:
            return self.hover.tooltip
        if event.phase == "move":
            assert event.x is not None and event.y is not None
            return self.on_pointer_move(event.x, event.y)
        if event.phase == "enter":
            assert event.marker_id is not None
            position = (event.x, event.y) if event.x is not None and event.y is not None else None
            return self.on_pointer_enter(event.marker_id, position)
        return self.on_pointer_leave(event.marker_id)

    def frame(self) -> np.ndarray:
        return self._require_surface().to_numpy()

    def close(self) -> None:
        if self._closed:
            return
        self.hover.unbind()
        self._clear_drawn()
        if self.surface is not None:
            self.surface.close()
        self._base_frame = None
        self._commands = None
        self._closed = True
        LOGGER.debug("closed chart host after %d updates", self.update_count)

    def __enter__(self) -> "ChartHost":
        if self.surface is None:
            self.mount()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _require_surface(self) -> DrawingSurface:
        if self._closed:
            raise ChartHostError("chart host is closed")
        if self.surface is None:
            raise ChartHostError("chart host is not mounted")
        return self.surface

    def _clear_drawn(self) -> None:
        self._drawn = {}
        if self.x_axis is not None:
            self.x_axis.ticks = None
        if self.y_axis is not None:
            self.y_axis.ticks = None

    def _composite(self) -> np.ndarray:
        assert self._base_frame is not None
        if not self.hover.tooltip.visible:
            return self._base_frame
        frame = self._base_frame.copy()
        paint_tooltip(frame, self.hover.tooltip, self.config)
        return frame

    def _repaint_tooltip(self) -> None:
        if self._base_frame is None or self.surface is None:
            return
        self.surface.submit_write_batch(compile_full_rewrite_batch(self._composite()))
