from __future__ import annotations

import math
import unittest

import numpy as np

from tracechart import ChartDataError, LinearScale, build_scales, nice_domain, normalize
from tracechart.scales import build_axis, format_ticks_for_axis, generate_ticks, precision_fixed, tick_increment


class ScaleTests(unittest.TestCase):
    def test_linear_scale_maps_scalars_and_arrays(self) -> None:
        scale = LinearScale(domain=(0.0, 10.0), range=(0.0, 100.0))
        self.assertEqual(scale(5.0), 50.0)
        np.testing.assert_allclose(scale(np.asarray([0.0, 10.0])), [0.0, 100.0])

    def test_inverted_range(self) -> None:
        scale = LinearScale(domain=(1.0, 3.0), range=(420.0, 0.0))
        self.assertEqual(scale(1.0), 420.0)
        self.assertEqual(scale(3.0), 0.0)
        self.assertEqual(scale(2.0), 210.0)

    def test_degenerate_domain_maps_to_range_midpoint(self) -> None:
        scale = LinearScale(domain=(4.0, 4.0), range=(420.0, 0.0))
        self.assertTrue(scale.degenerate)
        self.assertEqual(scale(4.0), 210.0)
        out = scale(np.asarray([4.0, 4.0]))
        self.assertTrue(np.all(np.isfinite(out)))
        np.testing.assert_allclose(out, [210.0, 210.0])

    def test_tick_increment_encodes_fractional_steps_as_negative(self) -> None:
        self.assertEqual(tick_increment(0.0, 100.0, 10), 10.0)
        self.assertEqual(tick_increment(1.0, 3.0, 10), -5.0)
        self.assertEqual(tick_increment(2.0, 2.0, 10), 0.0)

    def test_nice_domain_rounds_outward(self) -> None:
        self.assertEqual(nice_domain(1.0, 3.0), (1.0, 3.0))
        self.assertEqual(nice_domain(0.13, 9.7), (0.0, 10.0))
        self.assertEqual(nice_domain(-3.2, 47.0), (-5.0, 50.0))

    def test_nice_domain_keeps_collapsed_domain(self) -> None:
        self.assertEqual(nice_domain(7.0, 7.0), (7.0, 7.0))

    def test_build_scales_uses_all_series_extents(self) -> None:
        out = normalize([(0, [1, None]), (1, [2, 3]), (10, [None, 9.5])])
        scales = build_scales(out.series, 1020, 370)
        self.assertEqual(scales.x.domain, (0.0, 10.0))
        self.assertEqual(scales.x.range, (0.0, 1020.0))
        self.assertEqual(scales.y.domain, (1.0, 10.0))
        self.assertEqual(scales.y.range, (370.0, 0.0))

    def test_single_series_scenario_domain(self) -> None:
        out = normalize([(0, 1), (1, None), (2, 3)])
        scales = build_scales(out.series, 1020, 420)
        self.assertEqual(scales.y.domain, (1.0, 3.0))
        self.assertEqual(scales.x(2.0), 1020.0)
        self.assertEqual(scales.y(3.0), 0.0)

    def test_build_scales_rejects_empty_input(self) -> None:
        with self.assertRaises(ChartDataError):
            build_scales([], 100, 100)
        with self.assertRaises(ChartDataError):
            build_scales(normalize([(0, None)]).series, 100, 100)

    def test_single_point_scales_stay_finite(self) -> None:
        scales = build_scales(normalize([(5, 7)]).series, 1020, 420)
        self.assertEqual(scales.x(5.0), 510.0)
        self.assertEqual(scales.y(7.0), 210.0)
        self.assertFalse(math.isnan(scales.y(7.0)))

    def test_generate_ticks_about_ten(self) -> None:
        ticks = generate_ticks(0.0, 100.0, 10)
        np.testing.assert_allclose(ticks, np.arange(0.0, 101.0, 10.0))
        ticks = generate_ticks(1.0, 3.0, 10)
        self.assertEqual(ticks.size, 11)
        self.assertAlmostEqual(float(ticks[1]), 1.2)

    def test_x_axis_labels_are_integer_formatted(self) -> None:
        axis = build_axis(LinearScale(domain=(0.0, 100.0), range=(0.0, 1000.0)), integer_labels=True)
        self.assertEqual(axis.labels[:3], ("0", "10", "20"))
        self.assertEqual(axis.positions[1], 100.0)

    def test_y_axis_labels_keep_fixed_step_decimals(self) -> None:
        axis = build_axis(LinearScale(domain=(1.0, 3.0), range=(420.0, 0.0)))
        self.assertEqual(axis.labels[:3], ("1.0", "1.2", "1.4"))
        self.assertEqual(axis.labels[5], "2.0")
        self.assertEqual(axis.labels[-1], "3.0")

    def test_y_axis_labels_group_thousands(self) -> None:
        axis = build_axis(LinearScale(domain=(1000.0, 10000.0), range=(420.0, 0.0)))
        self.assertEqual(axis.labels[:2], ("1,000", "2,000"))
        self.assertEqual(axis.labels[-1], "10,000")

    def test_tick_precision_follows_step(self) -> None:
        self.assertEqual(precision_fixed(0.2), 1)
        self.assertEqual(precision_fixed(0.09999999999999998), 1)
        self.assertEqual(precision_fixed(0.05), 2)
        self.assertEqual(precision_fixed(5.0), 0)
        self.assertEqual(precision_fixed(1000.0), 0)

    def test_tick_formatting_preserves_integer_trailing_zeros(self) -> None:
        labels = format_ticks_for_axis(np.asarray([20.0, 30.0, 40.0], dtype=np.float64))
        self.assertEqual(labels, ["20", "30", "40"])

    def test_tick_formatting_snaps_near_zero(self) -> None:
        labels = format_ticks_for_axis(np.asarray([-1.0, -4.4409e-16, 1.0], dtype=np.float64))
        self.assertEqual(labels, ["-1", "0", "1"])
        labels = format_ticks_for_axis(np.asarray([-0.5, 0.0, 0.5], dtype=np.float64))
        self.assertEqual(labels, ["-0.5", "0.0", "0.5"])

    def test_multi_series_x_domain_spans_all_samples(self) -> None:
        normalized = normalize([(0, [None, None]), (1, [1, 2]), (2, [3, 4])])
        scales = build_scales(normalized.series, 100, 100, x_values=normalized.all_x)
        self.assertEqual(scales.x.domain, (0.0, 2.0))
        self.assertEqual(build_scales(normalized.series, 100, 100).x.domain, (1.0, 2.0))


if __name__ == "__main__":
    unittest.main()
