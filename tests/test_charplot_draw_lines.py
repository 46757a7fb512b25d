from __future__ import annotations

import unittest

from charplot.raster.canvas import Rectangle
from charplot.raster.draw_lines import INT_MAX, INT_MIN, clamp_infinite, clip_line, draw_line, draw_polyline, walk_line


def _painted(clip: Rectangle, *segments: tuple[int, int, int, int]) -> set[tuple[int, int]]:
    cells: set[tuple[int, int]] = set()
    for seg in segments:
        draw_line(clip, lambda x, y: cells.add((x, y)), *seg)
    return cells


class ClipLineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clip = Rectangle(0, 0, 10, 10)

    def test_inside_segment_is_unchanged(self) -> None:
        self.assertEqual(clip_line(self.clip, 1, 2, 8, 9), (1, 2, 8, 9))

    def test_segment_beside_clip_is_rejected(self) -> None:
        self.assertIsNone(clip_line(self.clip, -5, 0, -1, 9))
        self.assertIsNone(clip_line(self.clip, 0, 12, 9, 15))

    def test_crossing_segment_is_cut_at_edges(self) -> None:
        self.assertEqual(clip_line(self.clip, -5, 5, 15, 5), (0, 5, 9, 5))
        self.assertEqual(clip_line(self.clip, 5, -5, 5, 15), (5, 0, 5, 9))

    def test_empty_clip_draws_nothing(self) -> None:
        self.assertIsNone(clip_line(Rectangle(0, 0, 0, 10), 0, 0, 5, 5))
        self.assertEqual(_painted(Rectangle(3, 3, 0, 0), (0, 0, 9, 9)), set())

    def test_extreme_coordinates_are_clipped_exactly(self) -> None:
        self.assertEqual(clip_line(self.clip, 0, 0, INT_MAX, 0), (0, 0, 9, 0))
        self.assertEqual(clip_line(self.clip, 0, 0, INT_MAX, INT_MAX), (0, 0, 9, 9))
        self.assertEqual(clip_line(self.clip, 5, INT_MIN, 5, 5), (5, 0, 5, 5))

    def test_painted_cells_stay_inside_clip(self) -> None:
        clip = Rectangle(2, 2, 5, 4)
        cells = _painted(clip, (-10, -7, 20, 13), (0, 6, 30, 2), (4, -100, 4, 100))
        self.assertTrue(cells)
        for x, y in cells:
            self.assertTrue(clip.contains(x, y), (x, y))


class WalkLineTests(unittest.TestCase):
    def test_includes_both_endpoints_and_is_eight_connected(self) -> None:
        for end in [(7, 3), (-4, 9), (0, -6), (5, 5), (-8, -1)]:
            points = list(walk_line(0, 0, *end))
            self.assertEqual(points[0], (0, 0))
            self.assertEqual(points[-1], end)
            self.assertEqual(len(points), max(abs(end[0]), abs(end[1])) + 1)
            for (ax, ay), (bx, by) in zip(points, points[1:]):
                self.assertEqual(max(abs(bx - ax), abs(by - ay)), 1)

    def test_single_point(self) -> None:
        self.assertEqual(list(walk_line(3, 4, 3, 4)), [(3, 4)])


class PolylineTests(unittest.TestCase):
    def test_none_breaks_the_line(self) -> None:
        cells: set[tuple[int, int]] = set()
        draw_polyline(Rectangle(0, 0, 10, 10), lambda x, y: cells.add((x, y)), [(0, 0), (3, 0), None, (5, 0), (8, 0)])
        self.assertEqual({x for x, _ in cells}, {0, 1, 2, 3, 5, 6, 7, 8})

    def test_single_point_draws_nothing(self) -> None:
        cells: list[tuple[int, int]] = []
        draw_polyline(Rectangle(0, 0, 10, 10), lambda x, y: cells.append((x, y)), [(1, 1)])
        self.assertEqual(cells, [])


class ClampInfiniteTests(unittest.TestCase):
    def test_clamp(self) -> None:
        self.assertEqual(clamp_infinite(float("inf")), INT_MAX)
        self.assertEqual(clamp_infinite(float("-inf")), INT_MIN)
        self.assertIsNone(clamp_infinite(1.5))


if __name__ == "__main__":
    unittest.main()
