from __future__ import annotations

import logging

import numpy as np

from charplot.errors import OversizeContentError
from charplot.layout import PlotLayout
from charplot.raster.brushes import LinePen, PointPen
from charplot.raster.canvas import Color, GridImage
from charplot.raster.draw_lines import clamp_infinite
from charplot.raster.graphics import CellGraphics
from charplot.raster.subcell import SubCellGraphics
from charplot.scales import CoordinateConverter, Tick
from charplot.series import Series
from charplot.settings import PlotSettings


LOGGER = logging.getLogger(__name__)


def build_converter(layout: PlotLayout) -> CoordinateConverter:
    area = layout.drawing_area
    bounds = layout.bounds
    return CoordinateConverter(
        source_x=(bounds.xmin, bounds.xmax),
        source_y=(bounds.ymin, bounds.ymax),
        target_x=(area.left, area.right),
        target_y=(area.bottom, area.top),
    )


def map_to_virtual(
    xs: np.ndarray,
    ys: np.ndarray,
    converter: CoordinateConverter,
) -> list[tuple[int, int] | None]:
    """Round data points to virtual cells; NaN gives ``None``, +/-inf clamps to the int extremes."""
    with np.errstate(invalid="ignore", over="ignore"):
        px = np.rint(converter.convert_x(xs))
        py = np.rint(converter.convert_y(ys))
    broken = np.isnan(xs) | np.isnan(ys)

    points: list[tuple[int, int] | None] = []
    for i in range(xs.size):
        if broken[i]:
            points.append(None)
            continue
        points.append((_clamped(xs[i], px[i]), _clamped(ys[i], py[i])))
    return points


def _clamped(value: float, converted: float) -> int:
    clamped = clamp_infinite(value)
    return clamped if clamped is not None else int(converted)


class GraphGraphics:
    """Data-space drawing on top of a cell surface."""

    def __init__(self, graphics: CellGraphics, converter: CoordinateConverter) -> None:
        self.graphics = graphics
        self.converter = converter

    def draw_lines(self, pen: PointPen, xs: np.ndarray, ys: np.ndarray) -> None:
        surface = SubCellGraphics(self.graphics.image, pen)
        converter = self.converter.scaled(surface.horizontal_resolution, surface.vertical_resolution)
        surface.draw_polyline(map_to_virtual(xs, ys, converter))

    def draw_vertical(self, pen: LinePen, x: float) -> None:
        self.graphics.draw_vertical(pen, self.cell_x(x))

    def draw_vertical_at(self, pen: LinePen, x: float, y: float) -> None:
        self.graphics.draw_vertical_at(pen, self.cell_x(x), self.cell_y(y))

    def draw_horizontal(self, pen: LinePen, y: float) -> None:
        self.graphics.draw_horizontal(pen, self.cell_y(y))

    def draw_horizontal_at(self, pen: LinePen, x: float, y: float) -> None:
        self.graphics.draw_horizontal_at(pen, self.cell_x(x), self.cell_y(y))

    def cell_x(self, x: float) -> int:
        return round(self.converter.convert_x(x))

    def cell_y(self, y: float) -> int:
        return round(self.converter.convert_y(y))


class PlotRenderer:
    def __init__(self, image: GridImage, layout: PlotLayout, settings: PlotSettings, series: list[Series]) -> None:
        self.image = image
        self.layout = layout
        self.settings = settings
        self.series = series

    def draw(self) -> None:
        graphics = CellGraphics(self.image)
        graph = GraphGraphics(graphics, build_converter(self.layout))

        graphics.clear(" ", Color.WHITE)
        graphics.set_clip(self.layout.drawing_area)

        if self.settings.grid.visible:
            self._draw_grid(graph)
        if self.settings.axis.visible:
            self._draw_axes(graph)
        if self.settings.ticks.visible:
            self._draw_ticks(graph)

        graphics.reset_clip()

        for series in self.series:
            graph.draw_lines(series.pen, series.xs, series.ys)

        if self.settings.ticks.labels.visible:
            self._draw_x_labels(graph)
            self._draw_y_labels(graph)

    def _draw_grid(self, graph: GraphGraphics) -> None:
        pen = self.settings.grid.pen
        for tick in self.layout.x_ticks:
            graph.draw_vertical(pen, tick.value)
        for tick in self.layout.y_ticks:
            graph.draw_horizontal(pen, tick.value)

    def _draw_axes(self, graph: GraphGraphics) -> None:
        pen = self.settings.axis.pen
        cross_x, cross_y = self.layout.axis_cross
        graph.draw_horizontal(pen, cross_y)
        graph.draw_vertical(pen, cross_x)

    def _draw_ticks(self, graph: GraphGraphics) -> None:
        pen = self.settings.ticks.pen
        cross_x, cross_y = self.layout.axis_cross
        for tick in self.layout.x_ticks:
            graph.draw_vertical_at(pen, tick.value, cross_y)
        for tick in self.layout.y_ticks:
            graph.draw_horizontal_at(pen, cross_x, tick.value)

    def _draw_x_labels(self, graph: GraphGraphics) -> None:
        labels = self.settings.ticks.labels
        cross_x, cross_y = self.layout.axis_cross
        y = graph.cell_y(cross_y) if labels.attach_to_axis else 0
        for tick in self.layout.x_ticks:
            # The crossing tick is labelled by the Y axis.
            if labels.attach_to_axis and tick.value == cross_x:
                continue
            x = graph.cell_x(tick.value)
            self._draw_label(graph, tick, x - len(tick.label) // 2, y - 1)

    def _draw_y_labels(self, graph: GraphGraphics) -> None:
        labels = self.settings.ticks.labels
        cross_x, cross_y = self.layout.axis_cross
        if labels.attach_to_axis:
            x = graph.cell_x(cross_x)
        else:
            x = max((len(t.label) for t in self.layout.y_ticks), default=0)
        for tick in self.layout.y_ticks:
            y = graph.cell_y(tick.value)
            if labels.attach_to_axis and tick.value == cross_y:
                y -= 1
            self._draw_label(graph, tick, x - len(tick.label), y)

    def _draw_label(self, graph: GraphGraphics, tick: Tick, x: int, y: int) -> None:
        labels = self.settings.ticks.labels
        try:
            graph.graphics.draw_string(tick.label, labels.color, x, y, ensure_visible=True)
        except OversizeContentError:
            if labels.strict:
                raise
            LOGGER.warning("tick label %r does not fit the %dx%d grid; skipped", tick.label, self.image.width, self.image.height)
