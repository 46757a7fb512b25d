from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
import io
import unittest

import numpy as np

from charplot import (
    ArgumentMismatchError,
    AxisSettings,
    Color,
    InvalidConfigurationError,
    LinePen,
    OversizeContentError,
    Plot,
    PlotSettings,
    PointPen,
    SystemLineBrushes,
    SystemPointBrushes,
    plot,
)
from charplot.raster.brushes import is_braille
from charplot.raster.draw_lines import INT_MAX, INT_MIN
from charplot.renderer import build_converter, map_to_virtual
from charplot.scales import CoordinateConverter


def _row(image, y: int) -> list[str]:
    return [image.get_pixel(x, y).glyph for x in range(image.width)]


class PlotRenderTests(unittest.TestCase):
    def test_rising_quadratic_with_axes_and_labels(self) -> None:
        plt = Plot(80, 22)
        series = plt.add_series([1, 2, 3], [1, 4, 9])
        layout = plt.draw()
        image = plt.get_image()
        converter = build_converter(layout)

        cross_x = round(converter.convert_x(layout.axis_cross[0]))
        cross_y = round(converter.convert_y(layout.axis_cross[1]))
        self.assertEqual(image.get_pixel(cross_x, cross_y).glyph, "┼")
        self.assertEqual(image.get_pixel(cross_x, cross_y).color, Color.WHITE)

        # Every data point lands in a braille cell of the series color, rising left to right.
        scaled = converter.scaled(2, 4)
        cells = [(px // 2, py // 4) for px, py in map_to_virtual(series.xs, series.ys, scaled)]
        for x, y in cells:
            cell = image.get_pixel(x, y)
            self.assertTrue(is_braille(cell.glyph), (x, y, cell.glyph))
            self.assertEqual(cell.color, series.pen.color)
        self.assertEqual(cells, sorted(cells))
        self.assertLess(cells[0][1], cells[-1][1])

        lines = plt.to_text().splitlines()
        self.assertEqual(len(lines), 22)
        self.assertIn("10", lines[0])
        self.assertIn("1.2", lines[-1])
        self.assertIn("3", lines[-1])

    def test_nan_breaks_the_line(self) -> None:
        plt = Plot(20, 5, settings=PlotSettings().with_all_hidden())
        plt.add_series([0, 1, 2, 3, 4], [0, 0, np.nan, 0, 0])
        plt.draw()
        row = _row(plt.get_image(), 2)
        self.assertTrue(all(is_braille(g) for g in row[0:6]))
        self.assertEqual(row[6:14], [" "] * 8)
        self.assertTrue(all(is_braille(g) for g in row[14:20]))

    def test_positive_infinity_reaches_the_top_row(self) -> None:
        plt = Plot(20, 5, settings=PlotSettings().with_all_hidden())
        plt.add_series([0, 1, 2], [0, np.inf, 0])
        plt.draw()
        top = _row(plt.get_image(), 4)
        self.assertTrue(is_braille(top[0]))
        self.assertTrue(is_braille(top[18]))
        self.assertEqual(top[1:18], [" "] * 17)

    def test_grid_axes_and_ticks_stay_inside_drawing_area(self) -> None:
        labels = replace(PlotSettings().ticks.labels, attach_to_axis=False)
        settings = replace(PlotSettings(), ticks=replace(PlotSettings().ticks, labels=labels))
        plt = Plot(60, 15, settings=settings)
        plt.add_series(np.arange(10.0), np.arange(10.0) ** 2)
        layout = plt.draw()
        image = plt.get_image()
        area = layout.drawing_area
        line_glyphs = set("│─┼╎╴┤")
        for y in range(image.height):
            for x in range(image.width):
                if image.get_pixel(x, y).glyph in line_glyphs:
                    self.assertTrue(area.contains(x, y), (x, y))

    def test_ascii_pens(self) -> None:
        brush = SystemLineBrushes.ASCII
        base = PlotSettings()
        settings = replace(
            base,
            axis=replace(base.axis, pen=LinePen(brush, Color.WHITE)),
            grid=replace(base.grid, pen=LinePen(brush, Color.DARK_GRAY)),
            ticks=replace(base.ticks, pen=LinePen(brush, Color.WHITE)),
        )
        plt = Plot(40, 12, settings=settings)
        plt.add_series([-2, 0, 2], [-1, 1, -1], PointPen(SystemPointBrushes.STAR, Color.YELLOW))
        plt.draw()
        text = plt.to_text()
        self.assertIn("+", text)
        self.assertIn("*", text)
        self.assertFalse(any(ord(ch) > 127 for ch in text))

    def test_redraw_is_stable(self) -> None:
        plt = plot(50, 12)
        plt.add_series(np.linspace(0, 6, 30), np.cos(np.linspace(0, 6, 30)))
        plt.draw()
        first = plt.to_text()
        plt.draw()
        self.assertEqual(plt.to_text(), first)
        self.assertIsNotNone(plt.last_layout())

    def test_render_writes_one_line_per_row(self) -> None:
        plt = Plot(10, 4)
        plt.add_series([0, 1], [0, 1])
        plt.draw()
        out = io.StringIO()
        plt.render(out, use_color=False)
        self.assertEqual(out.getvalue().count("\n"), 4)
        self.assertEqual(out.getvalue(), plt.to_text() + "\n")


    def test_extreme_ranges_still_draw(self) -> None:
        for ys in ([-1.7e308, 1.7e308], [5e-324, 1e-323]):
            plt = Plot(80, 22)
            plt.add_series([0, 1], ys)
            with self.assertLogs("charplot.layout", level="WARNING"):
                layout = plt.draw()
            self.assertEqual((layout.bounds.ymin, layout.bounds.ymax), tuple(ys))
            glyphs = [plt.get_image().get_pixel(x, y).glyph for y in range(22) for x in range(80)]
            self.assertTrue(any(is_braille(g) for g in glyphs), ys)


class PlotValidationTests(unittest.TestCase):
    def test_rejects_non_positive_size(self) -> None:
        with self.assertRaises(ArgumentMismatchError):
            Plot(0, 10)
        with self.assertRaises(ArgumentMismatchError):
            Plot(10, -2)

    def test_rejects_length_mismatch(self) -> None:
        plt = Plot(10, 5)
        with self.assertRaises(ArgumentMismatchError):
            plt.add_series([1, 2, 3], [1, 2])
        self.assertEqual(plt.series, [])

    def test_invalid_settings_fail_before_drawing(self) -> None:
        plt = Plot(10, 5)
        plt.add_series([0, 1], [0, 1])
        plt.get_image().set_pixel(0, 0, "x", Color.RED)
        bad = replace(PlotSettings(), axis=AxisSettings(pen=None))
        with self.assertRaises(InvalidConfigurationError):
            plt.draw(bad)
        self.assertEqual(plt.get_image().get_pixel(0, 0).glyph, "x")

    def test_invalid_tick_settings(self) -> None:
        plt = Plot(10, 5)
        base = PlotSettings()
        with self.assertRaises(InvalidConfigurationError):
            plt.draw(replace(base, ticks=replace(base.ticks, desired_x_step=0)))
        with self.assertRaises(InvalidConfigurationError):
            plt.draw(replace(base, ticks=replace(base.ticks, labels=replace(base.ticks.labels, format="Q"))))
        with self.assertRaises(InvalidConfigurationError):
            plt.draw(replace(base, default_brush=None))

    def test_oversize_label_is_skipped_with_warning(self) -> None:
        plt = Plot(3, 5)
        plt.add_series([0, 1], [10000, 20000])
        with self.assertLogs("charplot.renderer", level="WARNING"):
            plt.draw()

    def test_oversize_label_raises_in_strict_mode(self) -> None:
        base = PlotSettings()
        strict = replace(base, ticks=replace(base.ticks, labels=replace(base.ticks.labels, strict=True)))
        plt = Plot(3, 5, settings=strict)
        plt.add_series([0, 1], [10000, 20000])
        with self.assertRaises(OversizeContentError):
            plt.draw()


class PlotSeriesTests(unittest.TestCase):
    def test_palette_skips_used_colors(self) -> None:
        plt = Plot(10, 5)
        self.assertEqual(plt.add_series([0], [0]).pen.color, Color.BLUE)
        self.assertEqual(plt.add_series([0], [0]).pen.color, Color.GREEN)
        plt.add_series([0], [0], PointPen(SystemPointBrushes.DOT, Color.CYAN))
        self.assertEqual(plt.add_series([0], [0]).pen.color, Color.RED)

    def test_palette_skips_visible_grid_color(self) -> None:
        base = PlotSettings()
        settings = replace(base, grid=replace(base.grid, pen=LinePen(SystemLineBrushes.DASHED, Color.BLUE)))
        self.assertEqual(Plot(10, 5, settings=settings).add_series([0], [0]).pen.color, Color.GREEN)
        hidden = replace(settings, grid=replace(settings.grid, visible=False))
        self.assertEqual(Plot(10, 5, settings=hidden).add_series([0], [0]).pen.color, Color.BLUE)

    def test_default_brush_comes_from_settings(self) -> None:
        plt = Plot(10, 5, settings=replace(PlotSettings(), default_brush=SystemPointBrushes.QUADRANT))
        self.assertIs(plt.add_series([0], [0]).pen.brush, SystemPointBrushes.QUADRANT)

    def test_mixed_python_values(self) -> None:
        plt = Plot(10, 5)
        series = plt.add_series([Decimal("1.5"), 2, None], (1.0, 2.0, 3.0), label="mixed")
        self.assertEqual(series.xs.dtype, np.float64)
        self.assertTrue(np.isnan(series.xs[2]))
        self.assertEqual(series.label, "mixed")
        self.assertFalse(series.xs.flags.writeable)
        self.assertEqual(len(series), 3)
        self.assertEqual(series.finite_mask.tolist(), [True, True, False])

    def test_rejects_non_numeric_and_nested_input(self) -> None:
        plt = Plot(10, 5)
        with self.assertRaises(ArgumentMismatchError):
            plt.add_series(["a", "b"], [1, 2])
        with self.assertRaises(ArgumentMismatchError):
            plt.add_series(np.zeros((2, 2)), [1, 2])

    def test_pandas_series_input(self) -> None:
        try:
            import pandas as pd
        except ImportError:
            self.skipTest("pandas is not installed")
        plt = Plot(10, 5)
        series = plt.add_series(pd.Series([1, 2, 3]), pd.DataFrame({"value": [3.0, 2.0, 1.0]}))
        self.assertEqual(series.ys.tolist(), [3.0, 2.0, 1.0])

    def test_torch_tensor_input(self) -> None:
        try:
            import torch
        except ImportError:
            self.skipTest("torch is not installed")
        plt = Plot(10, 5)
        series = plt.add_series(torch.arange(3), torch.tensor([0.5, 1.5, 2.5]))
        self.assertEqual(series.xs.tolist(), [0.0, 1.0, 2.0])


class MapToVirtualTests(unittest.TestCase):
    def test_nan_and_infinity(self) -> None:
        converter = CoordinateConverter(source_x=(0.0, 1.0), source_y=(0.0, 1.0), target_x=(0, 10), target_y=(0, 10))
        points = map_to_virtual(
            np.asarray([0.0, 0.5, np.nan, np.inf, 0.25]),
            np.asarray([0.0, 0.5, 0.5, -np.inf, np.nan]),
            converter,
        )
        self.assertEqual(points, [(0, 0), (5, 5), None, (INT_MAX, INT_MIN), None])

    def test_rounds_half_to_even(self) -> None:
        converter = CoordinateConverter(source_x=(0.0, 4.0), source_y=(0.0, 4.0), target_x=(0, 38), target_y=(0, 38))
        points = map_to_virtual(np.asarray([1.0, 3.0]), np.asarray([1.0, 3.0]), converter)
        self.assertEqual(points, [(10, 10), (28, 28)])


if __name__ == "__main__":
    unittest.main()
