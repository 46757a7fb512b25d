from __future__ import annotations

from enum import Enum

from charplot.errors import OversizeContentError
from charplot.raster.brushes import CellPointPen, LinePen
from charplot.raster.canvas import Color, GridImage, Rectangle
from charplot.raster.draw_lines import draw_line


class TextDirection(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


def fit_clip(clip: Rectangle, width: int, height: int) -> Rectangle:
    x = max(0, clip.x)
    y = max(0, clip.y)
    return Rectangle(x, y, max(0, min(clip.width, width - x)), max(0, min(clip.height, height - y)))


class CellGraphics:
    """Drawing surface at cell resolution; every operation honours the clip rectangle."""

    def __init__(self, image: GridImage) -> None:
        self.image = image
        self._clip = Rectangle(0, 0, image.width, image.height)

    @property
    def clip(self) -> Rectangle:
        return self._clip

    def set_clip(self, clip: Rectangle) -> None:
        self._clip = fit_clip(clip, self.image.width, self.image.height)

    def reset_clip(self) -> None:
        self._clip = Rectangle(0, 0, self.image.width, self.image.height)

    def clear(self, glyph: str = " ", color: Color = Color.WHITE) -> None:
        self.image.clear(glyph, color)

    def draw_point(self, pen: CellPointPen, x: int, y: int) -> None:
        if self._clip.contains(x, y):
            self.image.set_pixel(x, y, pen.brush.glyph, pen.color)

    def draw_line(self, pen: CellPointPen, x1: int, y1: int, x2: int, y2: int) -> None:
        draw_line(self._clip, lambda x, y: self.draw_point(pen, x, y), x1, y1, x2, y2)

    def draw_horizontal(self, pen: LinePen, y: int, x1: int | None = None, x2: int | None = None) -> None:
        """Horizontal line across the clip, or between ``x1`` and ``x2`` when both are given."""
        if not self._clip.contains_y(y):
            return
        if x1 is None or x2 is None:
            start, end = self._clip.left, self._clip.right
        else:
            if x1 > x2:
                x1, x2 = x2, x1
            start = max(self._clip.left, x1)
            end = min(self._clip.right, x2)
        for x in range(start, end + 1):
            self._merge_horizontal(pen, x, y)

    def draw_horizontal_at(self, pen: LinePen, x: int, y: int) -> None:
        if self._clip.contains(x, y):
            self._merge_horizontal(pen, x, y)

    def draw_vertical(self, pen: LinePen, x: int, y1: int | None = None, y2: int | None = None) -> None:
        """Vertical line across the clip, or between ``y1`` and ``y2`` when both are given."""
        if not self._clip.contains_x(x):
            return
        if y1 is None or y2 is None:
            start, end = self._clip.bottom, self._clip.top
        else:
            if y1 > y2:
                y1, y2 = y2, y1
            start = max(self._clip.bottom, y1)
            end = min(self._clip.top, y2)
        for y in range(start, end + 1):
            self._merge_vertical(pen, x, y)

    def draw_vertical_at(self, pen: LinePen, x: int, y: int) -> None:
        if self._clip.contains(x, y):
            self._merge_vertical(pen, x, y)

    def draw_string(
        self,
        text: str,
        color: Color,
        x: int,
        y: int,
        *,
        direction: TextDirection = TextDirection.HORIZONTAL,
        ensure_visible: bool = False,
    ) -> None:
        """Draw ``text`` starting at (x, y); vertical text runs downwards.

        With ``ensure_visible`` the anchor is clamped so the whole string lies in
        the clip, and :class:`OversizeContentError` is raised if it cannot fit.
        """
        clip = self._clip
        if ensure_visible:
            if direction is TextDirection.HORIZONTAL:
                if len(text) > clip.width:
                    raise OversizeContentError(f"text of length {len(text)} exceeds clip width {clip.width}")
                x = _clamp(x, clip.left, clip.right - len(text) + 1)
                y = _clamp(y, clip.bottom, clip.top)
            else:
                if len(text) > clip.height:
                    raise OversizeContentError(f"text of length {len(text)} exceeds clip height {clip.height}")
                x = _clamp(x, clip.left, clip.right)
                y = _clamp(y, clip.bottom + len(text) - 1, clip.top)

        for i, char in enumerate(text):
            cx = x + i if direction is TextDirection.HORIZONTAL else x
            cy = y if direction is TextDirection.HORIZONTAL else y - i
            if clip.contains(cx, cy):
                self.image.set_pixel(cx, cy, char, color)
            elif ensure_visible:
                break

    def _merge_horizontal(self, pen: LinePen, x: int, y: int) -> None:
        brush = pen.brush
        current = self.image.get_pixel(x, y).glyph
        glyph = brush.cross if current in (brush.vertical, brush.cross) else brush.horizontal
        self.image.set_pixel(x, y, glyph, pen.color)

    def _merge_vertical(self, pen: LinePen, x: int, y: int) -> None:
        brush = pen.brush
        current = self.image.get_pixel(x, y).glyph
        glyph = brush.cross if current in (brush.horizontal, brush.cross) else brush.vertical
        self.image.set_pixel(x, y, glyph, pen.color)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))
