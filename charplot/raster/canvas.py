from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
import sys
from typing import Iterator, TextIO

import numpy as np

from charplot.errors import ArgumentMismatchError, OutOfRangeError


class Color(IntEnum):
    BLACK = 0
    DARK_BLUE = 1
    DARK_GREEN = 2
    DARK_CYAN = 3
    DARK_RED = 4
    DARK_MAGENTA = 5
    DARK_YELLOW = 6
    GRAY = 7
    DARK_GRAY = 8
    BLUE = 9
    GREEN = 10
    CYAN = 11
    RED = 12
    MAGENTA = 13
    YELLOW = 14
    WHITE = 15

    @property
    def ansi_code(self) -> int:
        return _ANSI_FOREGROUND[self]


_ANSI_FOREGROUND = {
    Color.BLACK: 30,
    Color.DARK_BLUE: 34,
    Color.DARK_GREEN: 32,
    Color.DARK_CYAN: 36,
    Color.DARK_RED: 31,
    Color.DARK_MAGENTA: 35,
    Color.DARK_YELLOW: 33,
    Color.GRAY: 37,
    Color.DARK_GRAY: 90,
    Color.BLUE: 94,
    Color.GREEN: 92,
    Color.CYAN: 96,
    Color.RED: 91,
    Color.MAGENTA: 95,
    Color.YELLOW: 93,
    Color.WHITE: 97,
}
ANSI_RESET = "\x1b[0m"


@dataclass(frozen=True)
class Cell:
    glyph: str
    color: Color


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned cell rectangle; ``y`` is the bottom row, rows grow upwards."""

    x: int
    y: int
    width: int
    height: int

    @property
    def left(self) -> int:
        return self.x

    @property
    def bottom(self) -> int:
        return self.y

    @property
    def right(self) -> int:
        return self.x + self.width - 1

    @property
    def top(self) -> int:
        return self.y + self.height - 1

    def contains_x(self, x: int) -> bool:
        return self.left <= x <= self.right

    def contains_y(self, y: int) -> bool:
        return self.bottom <= y <= self.top

    def contains(self, x: int, y: int) -> bool:
        return self.contains_x(x) and self.contains_y(y)


class GridImage:
    """Character grid of (glyph, color) cells backed by two numpy planes."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ArgumentMismatchError("width and height must be > 0")
        self.width = width
        self.height = height
        self._glyphs = np.full((height, width), " ", dtype="<U1")
        self._colors = np.full((height, width), int(Color.WHITE), dtype=np.int16)

    def set_pixel(self, x: int, y: int, glyph: str, color: Color) -> None:
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            return
        self._glyphs[y, x] = glyph
        self._colors[y, x] = int(color)

    def get_pixel(self, x: int, y: int) -> Cell:
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            raise OutOfRangeError(f"cell ({x}, {y}) is outside a {self.width}x{self.height} image")
        return Cell(glyph=str(self._glyphs[y, x]), color=Color(int(self._colors[y, x])))

    def clear(self, glyph: str = " ", color: Color = Color.WHITE) -> None:
        self._glyphs.fill(glyph)
        self._colors.fill(int(color))

    def glyph_plane(self) -> np.ndarray:
        """Read-only copy of the glyphs, indexed ``[y, x]`` with row 0 at the bottom."""
        return self._glyphs.copy()

    def color_plane(self) -> np.ndarray:
        return self._colors.copy()

    def rows(self) -> Iterator[list[Cell]]:
        for y in range(self.height):
            yield [self.get_pixel(x, y) for x in range(self.width)]

    def to_text(self) -> str:
        return "\n".join("".join(self._glyphs[y].tolist()) for y in range(self.height - 1, -1, -1))

    def render(self, stream: TextIO | None = None, *, use_color: bool = True) -> None:
        out = stream if stream is not None else sys.stdout
        for y in range(self.height - 1, -1, -1):
            glyphs = self._glyphs[y].tolist()
            if not use_color:
                out.write("".join(glyphs))
                out.write("\n")
                continue
            parts: list[str] = []
            current: int | None = None
            for glyph, color in zip(glyphs, self._colors[y].tolist(), strict=True):
                if color != current:
                    parts.append(f"\x1b[{Color(color).ansi_code}m")
                    current = color
                parts.append(glyph)
            parts.append(ANSI_RESET)
            out.write("".join(parts))
            out.write("\n")
