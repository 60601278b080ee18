from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Literal, Mapping

from tracechart.geometry import Marker


PointerPhase = Literal["enter", "leave", "move"]
HoverState = Literal["idle", "hovering"]

_EVENT_PHASES: dict[str, PointerPhase] = {
    "pointer_enter": "enter",
    "pointer_leave": "leave",
    "pointer_move": "move",
}


@dataclass(frozen=True)
class PointerEvent:
    """Pointer event in surface coordinates; `marker_id` for enter/leave."""

    phase: PointerPhase
    marker_id: str | None = None
    x: float | None = None
    y: float | None = None


@dataclass(frozen=True)
class TooltipState:
    visible: bool = False
    anchor: tuple[float, float] = (0.0, 0.0)
    content: tuple[float, float] | None = None


HIDDEN_TOOLTIP = TooltipState()


def parse_pointer_event(event_type: str, payload: object) -> PointerEvent | None:
    """Parse a pointer payload mapping into a typed event, `None` if it is not one."""

    phase = _EVENT_PHASES.get(event_type)
    if phase is None or not isinstance(payload, Mapping):
        return None
    marker_id = payload.get("marker_id")
    if marker_id is not None:
        marker_id = str(marker_id)
    x = payload.get("x")
    y = payload.get("y")
    if x is not None and y is not None:
        try:
            x = float(x)
            y = float(y)
        except (TypeError, ValueError):
            return None
    else:
        x = y = None
    if phase == "enter" and marker_id is None:
        return None
    if phase == "move" and x is None:
        return None
    return PointerEvent(phase=phase, marker_id=marker_id, x=x, y=y)


def tooltip_lines(state: TooltipState) -> tuple[str, ...]:
    if not state.visible or state.content is None:
        return ()
    x, y = state.content
    return (f"x: {x:g}", f"y: {y:g}")


class HoverController:
    """Idle/hovering tooltip state machine driven by marker pointer events.

    `pointer_position` reports the pointer in the same frame as
    `surface_origin`; the tooltip anchor is their difference plus `offset`.
    Entering a marker while another is hovered replaces the tooltip.
    """

    def __init__(
        self,
        *,
        pointer_position: Callable[[], tuple[float, float]] | None = None,
        surface_origin: tuple[float, float] = (0.0, 0.0),
        offset: tuple[float, float] = (10.0, -28.0),
    ) -> None:
        self._pointer_position = pointer_position
        self.surface_origin = surface_origin
        self.offset = offset
        self._markers: dict[str, Marker] = {}
        self._hovered: str | None = None
        self.tooltip: TooltipState = HIDDEN_TOOLTIP

    @property
    def state(self) -> HoverState:
        return "hovering" if self.tooltip.visible else "idle"

    @property
    def hovered_marker(self) -> str | None:
        return self._hovered

    @property
    def listener_count(self) -> int:
        return len(self._markers)

    def bind(self, markers: Iterable[Marker]) -> None:
        """Attach hover listeners to `markers`, replacing any earlier set."""
        self._markers = {m.marker_id: m for m in markers}
        if self._hovered is not None and self._hovered not in self._markers:
            self._hovered = None

    def unbind(self) -> None:
        self._markers = {}
        self.reset()

    def reset(self) -> TooltipState:
        self._hovered = None
        self.tooltip = HIDDEN_TOOLTIP
        return self.tooltip

    def on_pointer_enter(self, marker_id: str, position: tuple[float, float] | None = None) -> TooltipState:
        marker = self._markers.get(marker_id)
        if marker is None:
            return self.tooltip
        if position is None:
            position = self._pointer_position() if self._pointer_position is not None else (marker.cx, marker.cy)
        left = position[0] - self.surface_origin[0] + self.offset[0]
        top = position[1] - self.surface_origin[1] + self.offset[1]
        self._hovered = marker_id
        self.tooltip = TooltipState(visible=True, anchor=(left, top), content=(marker.x, marker.y))
        return self.tooltip

    def on_pointer_leave(self, marker_id: str | None = None) -> TooltipState:
        return self.reset()

    def on_pointer_move(self, x: float, y: float, *, hit_offset: tuple[float, float] = (0.0, 0.0)) -> TooltipState:
        """Hit-test markers at `(x, y)` and synthesize enter/leave transitions.

        `hit_offset` is subtracted from the pointer to reach marker coordinates.
        """
        hx = x - hit_offset[0]
        hy = y - hit_offset[1]
        hit: Marker | None = None
        for marker in reversed(list(self._markers.values())):
            if marker.contains(hx, hy):
                hit = marker
                break
        if hit is None:
            # The hovered marker may have vanished in a redraw; hide regardless.
            if self.tooltip.visible or self._hovered is not None:
                return self.on_pointer_leave(self._hovered)
            return self.tooltip
        if hit.marker_id != self._hovered:
            return self.on_pointer_enter(hit.marker_id, position=(x, y))
        return self.tooltip

    def dispatch(self, event: PointerEvent) -> TooltipState:
        if event.phase == "enter" and event.marker_id is not None:
            position = (event.x, event.y) if event.x is not None and event.y is not None else None
            return self.on_pointer_enter(event.marker_id, position=position)
        if event.phase == "leave":
            return self.on_pointer_leave(event.marker_id)
        if event.phase == "move" and event.x is not None and event.y is not None:
            return self.on_pointer_move(event.x, event.y)
        return self.tooltip
