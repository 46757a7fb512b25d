from .brushes import (
    BrailleBrush,
    CellPointBrush,
    CellPointPen,
    LineBrush,
    LinePen,
    PointBrush,
    PointPen,
    QuadrantBrush,
    SystemLineBrushes,
    SystemPointBrushes,
)
from .canvas import Cell, Color, GridImage, Rectangle
from .draw_lines import clip_line, draw_line, draw_polyline, walk_line
from .graphics import CellGraphics, TextDirection
from .subcell import SubCellGraphics

__all__ = [
    "BrailleBrush",
    "Cell",
    "CellGraphics",
    "CellPointBrush",
    "CellPointPen",
    "Color",
    "GridImage",
    "LineBrush",
    "LinePen",
    "PointBrush",
    "PointPen",
    "QuadrantBrush",
    "Rectangle",
    "SubCellGraphics",
    "SystemLineBrushes",
    "SystemPointBrushes",
    "TextDirection",
    "clip_line",
    "draw_line",
    "draw_polyline",
    "walk_line",
]
