from charplot.api import plot
from charplot.errors import (
    ArgumentMismatchError,
    InvalidConfigurationError,
    OutOfRangeError,
    OversizeContentError,
    PlotError,
)
from charplot.layout import PlotLayout
from charplot.plot import Plot
from charplot.raster import (
    Color,
    GridImage,
    LineBrush,
    LinePen,
    PointPen,
    Rectangle,
    SystemLineBrushes,
    SystemPointBrushes,
)
from charplot.scales import CoordinateConverter, Tick
from charplot.series import Series
from charplot.settings import AxisSettings, GridSettings, LabelSettings, PlotSettings, TickSettings

__all__ = [
    "ArgumentMismatchError",
    "AxisSettings",
    "Color",
    "CoordinateConverter",
    "GridImage",
    "GridSettings",
    "InvalidConfigurationError",
    "LabelSettings",
    "LineBrush",
    "LinePen",
    "OutOfRangeError",
    "OversizeContentError",
    "Plot",
    "PlotError",
    "PlotLayout",
    "PlotSettings",
    "PointPen",
    "Rectangle",
    "Series",
    "SystemLineBrushes",
    "SystemPointBrushes",
    "Tick",
    "TickSettings",
    "plot",
]
