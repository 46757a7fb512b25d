from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from charplot.raster.canvas import Color


@runtime_checkable
class PointBrush(Protocol):
    """Glyph alphabet that packs ``horizontal x vertical`` sub-points into one cell.

    ``render_point`` receives the glyph currently in the cell and the sub-position
    being switched on (``sub_y == 0`` is the bottom row of the cell) and returns
    the glyph that shows both.
    """

    @property
    def horizontal_resolution(self) -> int: ...

    @property
    def vertical_resolution(self) -> int: ...

    def render_point(self, current_glyph: str, sub_x: int, sub_y: int) -> str: ...


@dataclass(frozen=True)
class CellPointBrush:
    glyph: str

    @property
    def horizontal_resolution(self) -> int:
        return 1

    @property
    def vertical_resolution(self) -> int:
        return 1

    def render_point(self, current_glyph: str, sub_x: int, sub_y: int) -> str:
        return self.glyph


QUADRANT_GLYPHS = " ▖▗▄▘▌▚▙▝▞▐▟▀▛▜█"


@dataclass(frozen=True)
class QuadrantBrush:
    @property
    def horizontal_resolution(self) -> int:
        return 2

    @property
    def vertical_resolution(self) -> int:
        return 2

    def render_point(self, current_glyph: str, sub_x: int, sub_y: int) -> str:
        if sub_x not in (0, 1) or sub_y not in (0, 1):
            raise ValueError(f"invalid quadrant sub-position: ({sub_x}, {sub_y})")
        index = QUADRANT_GLYPHS.find(current_glyph) if len(current_glyph) == 1 else -1
        if index == -1:
            index = 0
        index |= 1 << (sub_y * 2 + sub_x)
        return QUADRANT_GLYPHS[index]


BRAILLE_BLANK = "\u2800"
BRAILLE_FULL = "\u28ff"

# Bit offset of each dot, keyed by (sub_x, sub_y) with sub_y counted from the bottom.
# As displayed:
#   0 3
#   1 4
#   2 5
#   6 7
_BRAILLE_DOT_OFFSETS = {
    (0, 0): 6,
    (0, 1): 2,
    (0, 2): 1,
    (0, 3): 0,
    (1, 0): 7,
    (1, 1): 5,
    (1, 2): 4,
    (1, 3): 3,
}


@dataclass(frozen=True)
class BrailleBrush:
    @property
    def horizontal_resolution(self) -> int:
        return 2

    @property
    def vertical_resolution(self) -> int:
        return 4

    def render_point(self, current_glyph: str, sub_x: int, sub_y: int) -> str:
        offset = _BRAILLE_DOT_OFFSETS.get((sub_x, sub_y))
        if offset is None:
            raise ValueError(f"invalid braille sub-position: ({sub_x}, {sub_y})")
        if not is_braille(current_glyph):
            current_glyph = BRAILLE_BLANK
        return chr(ord(current_glyph) | (1 << offset))


def is_braille(glyph: str) -> bool:
    return len(glyph) == 1 and BRAILLE_BLANK <= glyph <= BRAILLE_FULL


@dataclass(frozen=True)
class LineBrush:
    vertical: str
    horizontal: str
    cross: str


@dataclass(frozen=True)
class PointPen:
    brush: PointBrush
    color: Color


@dataclass(frozen=True)
class CellPointPen:
    brush: CellPointBrush
    color: Color


@dataclass(frozen=True)
class LinePen:
    brush: LineBrush
    color: Color


class SystemPointBrushes:
    BRAILLE = BrailleBrush()
    QUADRANT = QuadrantBrush()
    BLOCK = CellPointBrush("█")
    STAR = CellPointBrush("*")
    DOT = CellPointBrush("•")


class SystemLineBrushes:
    THIN = LineBrush("│", "─", "┼")
    BOLD = LineBrush("┃", "━", "╋")
    DOUBLE = LineBrush("║", "═", "╬")
    DOTTED = LineBrush("┊", "╌", "┼")
    DOTTED_BOLD = LineBrush("┋", "╍", "╋")
    DASHED = LineBrush("╎", "╴", "┤")
    DASHED_BOLD = LineBrush("╏", "╸", "┫")
    ASCII = LineBrush("|", "-", "+")
