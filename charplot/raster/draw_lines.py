from __future__ import annotations

from typing import Callable, Iterator

from charplot.raster.canvas import Rectangle


INT_MAX = 2**31 - 1
INT_MIN = -(2**31)

_INSIDE = 0
_LEFT = 1
_RIGHT = 2
_BOTTOM = 4
_TOP = 8

PaintFn = Callable[[int, int], None]


def draw_line(clip: Rectangle, paint: PaintFn, x1: int, y1: int, x2: int, y2: int) -> None:
    clipped = clip_line(clip, x1, y1, x2, y2)
    if clipped is None:
        return
    for x, y in walk_line(*clipped):
        paint(x, y)


def draw_polyline(clip: Rectangle, paint: PaintFn, points: list[tuple[int, int] | None]) -> None:
    """Connect consecutive points; a ``None`` entry starts a new segment."""
    previous: tuple[int, int] | None = None
    for point in points:
        if previous is not None and point is not None:
            draw_line(clip, paint, previous[0], previous[1], point[0], point[1])
        previous = point


def clip_line(clip: Rectangle, x1: int, y1: int, x2: int, y2: int) -> tuple[int, int, int, int] | None:
    """Cohen-Sutherland clip of a segment; returns ``None`` when nothing is visible."""
    if clip.width <= 0 or clip.height <= 0:
        return None

    code1 = _outcode(clip, x1, y1)
    code2 = _outcode(clip, x2, y2)

    while True:
        if (code1 | code2) == 0:
            return (x1, y1, x2, y2)
        if (code1 & code2) != 0:
            return None

        code_out = code1 if code1 != 0 else code2
        if code_out & _TOP:
            x = x1 + _div_trunc((x2 - x1) * (clip.top - y1), y2 - y1)
            y = clip.top
        elif code_out & _BOTTOM:
            x = x1 + _div_trunc((x2 - x1) * (clip.bottom - y1), y2 - y1)
            y = clip.bottom
        elif code_out & _RIGHT:
            y = y1 + _div_trunc((y2 - y1) * (clip.right - x1), x2 - x1)
            x = clip.right
        else:
            y = y1 + _div_trunc((y2 - y1) * (clip.left - x1), x2 - x1)
            x = clip.left

        if code_out == code1:
            x1, y1 = x, y
            code1 = _outcode(clip, x1, y1)
        else:
            x2, y2 = x, y
            code2 = _outcode(clip, x2, y2)


def walk_line(x1: int, y1: int, x2: int, y2: int) -> Iterator[tuple[int, int]]:
    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy

    while True:
        yield (x1, y1)
        if x1 == x2 and y1 == y2:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x1 += sx
        if e2 < dx:
            err += dx
            y1 += sy


def clamp_infinite(value: float) -> int | None:
    if value == float("inf"):
        return INT_MAX
    if value == float("-inf"):
        return INT_MIN
    return None


def _outcode(clip: Rectangle, x: int, y: int) -> int:
    code = _INSIDE
    if x < clip.left:
        code |= _LEFT
    elif x > clip.right:
        code |= _RIGHT
    if y < clip.bottom:
        code |= _BOTTOM
    elif y > clip.top:
        code |= _TOP
    return code


def _div_trunc(numerator: int, denominator: int) -> int:
    # Integer division rounding toward zero, exact for arbitrarily large operands.
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient
