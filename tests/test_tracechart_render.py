from __future__ import annotations

import unittest

import numpy as np

from tracechart import TooltipState, multi_series_config, render, single_series_config
from tracechart.paint import paint, paint_placeholder
from tracechart.palette import parse_hex_color


class RenderTests(unittest.TestCase):
    def test_empty_points_render_blank(self) -> None:
        commands = render([], single_series_config())
        self.assertTrue(commands.blank)
        self.assertEqual(commands.normalized.series_count, 0)
        self.assertEqual(commands.paths, ())
        self.assertEqual(commands.legend, ())
        self.assertIsNone(commands.x_axis)

    def test_all_absent_points_render_blank(self) -> None:
        commands = render([(0, None), (1, None)], single_series_config())
        self.assertTrue(commands.blank)

    def test_single_series_layout(self) -> None:
        config = single_series_config()
        commands = render([(0, 1), (1, None), (2, 3)], config)
        self.assertEqual((commands.width, commands.height), (1100, 500))
        self.assertEqual(commands.origin, (50, 40))
        self.assertEqual(commands.plot_size, (1020, 420))
        self.assertEqual(len(commands.paths[0]), 2)
        assert commands.scales is not None
        self.assertEqual(commands.scales.y.domain, (1.0, 3.0))
        self.assertEqual(len(commands.legend), 1)
        item = commands.legend[0]
        self.assertEqual(item.entry.label, "Single Series")
        self.assertEqual((item.x, item.y), (50 + 1020 - 90, 10))

    def test_multi_series_layout(self) -> None:
        commands = render([(0, [1, 2]), (1, [3, 4])], multi_series_config())
        self.assertEqual(commands.plot_size, (1020, 370))
        self.assertEqual(len(commands.paths), 2)
        self.assertEqual([item.entry.label for item in commands.legend], ["Series 1", "Series 2"])
        self.assertEqual([item.x for item in commands.legend], [50, 170])

    def test_axes_have_about_ten_ticks(self) -> None:
        commands = render([(t, t * 0.5) for t in range(101)], single_series_config())
        assert commands.x_axis is not None and commands.y_axis is not None
        self.assertEqual(commands.x_axis.labels[1], "10")
        self.assertGreaterEqual(len(commands.y_axis.values), 6)
        self.assertLessEqual(len(commands.y_axis.values), 15)

    def test_multi_series_x_domain_includes_all_absent_samples(self) -> None:
        commands = render([(0, [None, None]), (1, [1, 2]), (2, [3, 4])], multi_series_config())
        assert commands.scales is not None
        self.assertEqual(commands.scales.x.domain, (0.0, 2.0))
        self.assertEqual(commands.markers[0].cx, 510.0)

    def test_single_series_x_domain_uses_present_points(self) -> None:
        commands = render([(0, None), (1, 1), (2, 3)], single_series_config())
        assert commands.scales is not None
        self.assertEqual(commands.scales.x.domain, (1.0, 2.0))

    def test_single_series_colors(self) -> None:
        commands = render([(0, 1), (1, 2)], single_series_config())
        self.assertEqual(commands.paths[0].color, "#999999")
        self.assertEqual({m.color for m in commands.markers}, {"#3498db"})
        self.assertEqual(commands.legend[0].entry.color, "#4682b4")
        custom = render([(0, 1), (1, 2)], single_series_config(single_line_color="#000000"))
        self.assertEqual(custom.paths[0].color, "#000000")

    def test_multi_series_colors_follow_palette(self) -> None:
        commands = render([(0, [1, 2]), (1, [3, 4])], multi_series_config())
        self.assertEqual([p.color for p in commands.paths], ["#e74c3c", "#3498db"])
        self.assertEqual([m.color for m in commands.markers], ["#e74c3c", "#e74c3c", "#3498db", "#3498db"])
        self.assertEqual([item.entry.color for item in commands.legend], ["#e74c3c", "#3498db"])

    def test_render_is_repeatable(self) -> None:
        points = [(0, [1, None]), (1, [2, 3]), (4, [None, 7])]
        a = render(points, multi_series_config())
        b = render(points, multi_series_config())
        self.assertEqual([p.vertices() for p in a.paths], [p.vertices() for p in b.paths])
        self.assertEqual(a.markers, b.markers)
        self.assertEqual(a.x_axis, b.x_axis)
        self.assertEqual(a.y_axis, b.y_axis)


class PaintTests(unittest.TestCase):
    def test_blank_frame_is_background(self) -> None:
        config = single_series_config()
        frame = paint(render([], config), config)
        self.assertEqual(frame.shape, (500, 1100, 4))
        self.assertTrue(np.all(frame == 255))

    def test_placeholder_is_a_rounded_gray_block(self) -> None:
        config = single_series_config()
        frame = paint_placeholder(config)
        self.assertEqual(frame.shape, (500, 1100, 4))
        self.assertEqual(tuple(int(v) for v in frame[250, 100]), parse_hex_color(config.placeholder_color))
        self.assertEqual(tuple(int(v) for v in frame[0, 0]), (255, 255, 255, 255))
        self.assertEqual(tuple(int(v) for v in frame[0, 550]), parse_hex_color(config.placeholder_color))
        label_band = frame[240:260, 500:600, :3]
        self.assertTrue(np.any(label_band < 128))

    def test_markers_are_painted_in_series_color(self) -> None:
        config = single_series_config()
        commands = render([(0, 1), (1, None), (2, 3)], config)
        frame = paint(commands, config)
        marker = commands.markers[0]
        px = int(round(marker.cx)) + commands.origin[0]
        py = int(round(marker.cy)) + commands.origin[1]
        self.assertEqual(tuple(int(v) for v in frame[py, px]), parse_hex_color(marker.color))

    def test_tooltip_layer_only_when_visible(self) -> None:
        config = single_series_config()
        commands = render([(0, 1), (1, None), (2, 3)], config)
        hidden = paint(commands, config, TooltipState())
        shown = paint(commands, config, TooltipState(visible=True, anchor=(210.0, 172.0), content=(0.0, 1.0)))
        self.assertTrue(np.all(hidden[173, 211, :3] == 255))
        self.assertTrue(np.all(shown[173, 211, :3] < 128))


if __name__ == "__main__":
    unittest.main()
