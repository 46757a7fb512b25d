from __future__ import annotations

from charplot.raster.brushes import PointPen
from charplot.raster.canvas import GridImage, Rectangle
from charplot.raster.draw_lines import draw_line, draw_polyline
from charplot.raster.graphics import fit_clip


class SubCellGraphics:
    """Virtual surface with ``hres x vres`` points per cell, composited into glyphs.

    Points drawn with the pen's color accumulate into the existing glyph; a cell
    holding another color is treated as blank before the point is added.
    """

    def __init__(self, image: GridImage, pen: PointPen) -> None:
        self.image = image
        self.pen = pen
        self.horizontal_resolution = pen.brush.horizontal_resolution
        self.vertical_resolution = pen.brush.vertical_resolution
        self.width = image.width * self.horizontal_resolution
        self.height = image.height * self.vertical_resolution
        self._clip = Rectangle(0, 0, self.width, self.height)

    @property
    def clip(self) -> Rectangle:
        return self._clip

    def set_clip(self, clip: Rectangle) -> None:
        self._clip = fit_clip(clip, self.width, self.height)

    def reset_clip(self) -> None:
        self._clip = Rectangle(0, 0, self.width, self.height)

    def draw_point(self, x: int, y: int) -> None:
        cell_x, sub_x = divmod(x, self.horizontal_resolution)
        cell_y, sub_y = divmod(y, self.vertical_resolution)
        if not (0 <= cell_x < self.image.width and 0 <= cell_y < self.image.height):
            return
        current = self.image.get_pixel(cell_x, cell_y)
        base = current.glyph if current.color == self.pen.color else " "
        glyph = self.pen.brush.render_point(base, sub_x, sub_y)
        self.image.set_pixel(cell_x, cell_y, glyph, self.pen.color)

    def draw_line(self, x1: int, y1: int, x2: int, y2: int) -> None:
        draw_line(self._clip, self.draw_point, x1, y1, x2, y2)

    def draw_polyline(self, points: list[tuple[int, int] | None]) -> None:
        draw_polyline(self._clip, self.draw_point, points)
