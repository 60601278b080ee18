from __future__ import annotations

import unittest

from tracechart import HoverController, TooltipState, parse_pointer_event
from tracechart.geometry import Marker
from tracechart.interaction import tooltip_lines


def _markers() -> list[Marker]:
    return [
        Marker(marker_id="s0-p0", series_index=0, cx=10.0, cy=20.0, x=0.0, y=1.0, color="#e74c3c"),
        Marker(marker_id="s0-p1", series_index=0, cx=50.0, cy=60.0, x=2.0, y=3.0, color="#e74c3c"),
    ]


class HoverControllerTests(unittest.TestCase):
    def test_starts_idle(self) -> None:
        hover = HoverController()
        self.assertEqual(hover.state, "idle")
        self.assertFalse(hover.tooltip.visible)

    def test_enter_shows_marker_values_offset_from_pointer(self) -> None:
        hover = HoverController(surface_origin=(100.0, 200.0))
        hover.bind(_markers())
        state = hover.on_pointer_enter("s0-p1", position=(150.0, 260.0))
        self.assertEqual(hover.state, "hovering")
        self.assertEqual(state, TooltipState(visible=True, anchor=(60.0, 32.0), content=(2.0, 3.0)))

    def test_pointer_position_capability_is_used(self) -> None:
        hover = HoverController(pointer_position=lambda: (40.0, 40.0))
        hover.bind(_markers())
        state = hover.on_pointer_enter("s0-p0")
        self.assertEqual(state.anchor, (50.0, 12.0))

    def test_last_enter_wins(self) -> None:
        hover = HoverController()
        hover.bind(_markers())
        hover.on_pointer_enter("s0-p0", position=(0.0, 0.0))
        state = hover.on_pointer_enter("s0-p1", position=(5.0, 5.0))
        self.assertEqual(state.content, (2.0, 3.0))
        self.assertEqual(hover.hovered_marker, "s0-p1")

    def test_leaving_any_marker_hides(self) -> None:
        hover = HoverController()
        hover.bind(_markers())
        hover.on_pointer_enter("s0-p1", position=(0.0, 0.0))
        state = hover.on_pointer_leave("s0-p0")
        self.assertFalse(state.visible)
        self.assertEqual(hover.state, "idle")

    def test_unknown_marker_is_ignored(self) -> None:
        hover = HoverController()
        hover.bind(_markers())
        state = hover.on_pointer_enter("s9-p9", position=(0.0, 0.0))
        self.assertFalse(state.visible)

    def test_pointer_move_hit_tests_markers(self) -> None:
        hover = HoverController()
        hover.bind(_markers())
        state = hover.on_pointer_move(61.0, 82.0, hit_offset=(10.0, 20.0))
        self.assertTrue(state.visible)
        self.assertEqual(state.content, (2.0, 3.0))
        self.assertEqual(state.anchor, (71.0, 54.0))
        state = hover.on_pointer_move(300.0, 300.0, hit_offset=(10.0, 20.0))
        self.assertFalse(state.visible)

    def test_move_hides_tooltip_left_by_a_rebind(self) -> None:
        hover = HoverController()
        hover.bind(_markers())
        hover.on_pointer_enter("s0-p1", position=(0.0, 0.0))
        hover.bind(_markers()[:1])
        self.assertIsNone(hover.hovered_marker)
        self.assertTrue(hover.tooltip.visible)
        state = hover.on_pointer_move(300.0, 300.0)
        self.assertFalse(state.visible)
        self.assertEqual(hover.state, "idle")

    def test_unbind_releases_listeners_and_hides(self) -> None:
        hover = HoverController()
        hover.bind(_markers())
        hover.on_pointer_enter("s0-p0", position=(0.0, 0.0))
        hover.unbind()
        self.assertEqual(hover.listener_count, 0)
        self.assertFalse(hover.tooltip.visible)

    def test_dispatch_routes_parsed_events(self) -> None:
        hover = HoverController()
        hover.bind(_markers())
        enter = parse_pointer_event("pointer_enter", {"marker_id": "s0-p0", "x": 1, "y": 2})
        assert enter is not None
        self.assertTrue(hover.dispatch(enter).visible)
        leave = parse_pointer_event("pointer_leave", {"marker_id": "s0-p0"})
        assert leave is not None
        self.assertFalse(hover.dispatch(leave).visible)

    def test_tooltip_lines(self) -> None:
        self.assertEqual(tooltip_lines(TooltipState()), ())
        state = TooltipState(visible=True, anchor=(0.0, 0.0), content=(3.0, 2.5))
        self.assertEqual(tooltip_lines(state), ("x: 3", "y: 2.5"))


class ParsePointerEventTests(unittest.TestCase):
    def test_rejects_non_pointer_events(self) -> None:
        self.assertIsNone(parse_pointer_event("key_down", {"key": "a"}))
        self.assertIsNone(parse_pointer_event("pointer_enter", "not-a-mapping"))
        self.assertIsNone(parse_pointer_event("pointer_enter", {"x": 1, "y": 2}))
        self.assertIsNone(parse_pointer_event("pointer_move", {"marker_id": "s0-p0"}))

    def test_parses_move(self) -> None:
        event = parse_pointer_event("pointer_move", {"x": "3.5", "y": 4})
        assert event is not None
        self.assertEqual((event.phase, event.x, event.y), ("move", 3.5, 4.0))


if __name__ == "__main__":
    unittest.main()
