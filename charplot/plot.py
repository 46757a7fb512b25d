from __future__ import annotations

import logging
from typing import Any, TextIO

from charplot.adapters import normalize_xy
from charplot.errors import ArgumentMismatchError
from charplot.layout import PlotLayout, plan_layout
from charplot.raster.brushes import PointPen, SystemPointBrushes
from charplot.raster.canvas import Color, GridImage
from charplot.renderer import PlotRenderer
from charplot.series import Series
from charplot.settings import PlotSettings


LOGGER = logging.getLogger(__name__)

# Series colors in the order they are handed out.
SERIES_PALETTE: tuple[Color, ...] = (
    Color.BLUE,
    Color.GREEN,
    Color.CYAN,
    Color.RED,
    Color.MAGENTA,
    Color.YELLOW,
    Color.DARK_BLUE,
    Color.DARK_GREEN,
    Color.DARK_CYAN,
    Color.DARK_RED,
    Color.DARK_MAGENTA,
    Color.DARK_YELLOW,
)


class Plot:
    """A character-grid plot: collect series, ``draw()``, then read or print the grid."""

    def __init__(self, width: int, height: int, settings: PlotSettings | None = None) -> None:
        if width <= 0 or height <= 0:
            raise ArgumentMismatchError(f"width and height must be > 0, got {width}x{height}")
        self.width = width
        self.height = height
        self.settings = settings if settings is not None else PlotSettings()
        self.series: list[Series] = []
        self._image = GridImage(width, height)
        self._last_layout: PlotLayout | None = None

    def add_series(self, xs: Any, ys: Any, pen: PointPen | None = None, *, label: str | None = None) -> Series:
        x_arr, y_arr = normalize_xy(xs, ys)
        if pen is None:
            brush = self.settings.default_brush or SystemPointBrushes.BRAILLE
            pen = PointPen(brush, self._next_available_color())
        series = Series(xs=x_arr, ys=y_arr, pen=pen, label=label)
        self.series.append(series)
        return series

    def clear_series(self) -> "Plot":
        self.series.clear()
        return self

    def draw(self, settings: PlotSettings | None = None) -> PlotLayout:
        settings = settings if settings is not None else self.settings
        settings.validate()
        layout = plan_layout(self.series, settings, self.width, self.height)
        PlotRenderer(self._image, layout, settings, self.series).draw()
        self._last_layout = layout
        return layout

    def get_image(self) -> GridImage:
        return self._image

    def last_layout(self) -> PlotLayout | None:
        return self._last_layout

    def render(self, stream: TextIO | None = None, *, use_color: bool = True) -> None:
        self._image.render(stream, use_color=use_color)

    def to_text(self) -> str:
        return self._image.to_text()

    def _next_available_color(self) -> Color:
        used = {s.pen.color for s in self.series}
        if self.settings.axis.visible and self.settings.axis.pen is not None:
            used.add(self.settings.axis.pen.color)
        if self.settings.grid.visible and self.settings.grid.pen is not None:
            used.add(self.settings.grid.pen.color)
        for color in SERIES_PALETTE:
            if color not in used:
                return color
        color = SERIES_PALETTE[len(self.series) % len(SERIES_PALETTE)]
        LOGGER.debug("series palette exhausted; reusing %s", color.name)
        return color
