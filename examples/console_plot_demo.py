from __future__ import annotations

import argparse
from dataclasses import replace
import logging
import sys

import numpy as np

from charplot import (
    Color,
    LinePen,
    PointPen,
    SystemLineBrushes,
    SystemPointBrushes,
    plot,
)


def basic_demo(width: int, height: int, use_color: bool) -> None:
    plt = plot(width, height)
    plt.add_series([1, 2, 3, 4, 5], [1, 4, 9, 16, 25])
    plt.draw()
    plt.render(use_color=use_color)


def multiple_series_demo(width: int, height: int, use_color: bool) -> None:
    plt = plot(width, height)
    xs = np.arange(-30, 31, dtype=np.float64) * 0.1
    sin_ys = np.sin(xs)
    with np.errstate(divide="ignore"):
        reciprocal_ys = 1.0 / xs
    # NaN breaks the line at the pole and outside [-3, 3].
    reciprocal_ys[~np.isfinite(reciprocal_ys) | (np.abs(reciprocal_ys) > 3.0)] = np.nan

    plt.add_series(xs, sin_ys, PointPen(SystemPointBrushes.BRAILLE, Color.BLUE), label="sin(x)")
    plt.add_series(xs, reciprocal_ys, PointPen(SystemPointBrushes.BRAILLE, Color.RED), label="1/x")
    plt.draw()
    plt.render(use_color=use_color)
    for series in plt.series:
        print(f"{series.pen.color.name.title()}: {series.label}")


def all_settings_demo(width: int, height: int, use_color: bool) -> None:
    plt = plot(width, height)
    settings = plt.settings
    plt.settings = replace(
        settings,
        axis=replace(settings.axis, visible=True, pen=LinePen(SystemLineBrushes.DOUBLE, Color.YELLOW)),
        grid=replace(settings.grid, visible=True, pen=LinePen(SystemLineBrushes.DOTTED, Color.DARK_GRAY)),
        ticks=replace(
            settings.ticks,
            visible=True,
            pen=LinePen(SystemLineBrushes.THIN, Color.CYAN),
            desired_x_step=10,
            desired_y_step=5,
            labels=replace(settings.ticks.labels, color=Color.GREEN, attach_to_axis=False, format=".2f"),
        ),
    )

    xs = np.arange(100, dtype=np.float64) * 0.1
    ys = np.sin(xs) * np.exp(-xs * 0.1)
    plt.add_series(xs, ys, PointPen(SystemPointBrushes.STAR, Color.MAGENTA))
    plt.draw()
    plt.render(use_color=use_color)


def ascii_demo(width: int, height: int, use_color: bool) -> None:
    plt = plot(width, height)
    brush = SystemLineBrushes.ASCII
    settings = plt.settings
    plt.settings = replace(
        settings,
        axis=replace(settings.axis, pen=LinePen(brush, Color.WHITE)),
        grid=replace(settings.grid, pen=LinePen(brush, Color.DARK_GRAY)),
        ticks=replace(settings.ticks, pen=LinePen(brush, Color.WHITE)),
    )

    xs = np.arange(50, dtype=np.float64) * 0.2
    plt.add_series(xs, np.sin(xs), PointPen(SystemPointBrushes.STAR, Color.YELLOW))
    plt.draw()
    plt.render(use_color=use_color)


DEMOS = {
    "basic": basic_demo,
    "multiple": multiple_series_demo,
    "settings": all_settings_demo,
    "ascii": ascii_demo,
}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print charplot demo frames to the terminal.")
    parser.add_argument("demo", nargs="?", choices=sorted(DEMOS), default="basic")
    parser.add_argument("--all", action="store_true", help="Run every demo in turn.")
    parser.add_argument("--width", type=int, default=80)
    parser.add_argument("--height", type=int, default=22)
    parser.add_argument("--no-color", action="store_true", help="Print glyphs without ANSI color codes.")
    parser.add_argument("--verbose", action="store_true", help="Log layout decisions to stderr.")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, stream=sys.stderr)
    names = sorted(DEMOS) if args.all else [args.demo]
    for name in names:
        print(f"== {name} ==")
        DEMOS[name](args.width, args.height, not args.no_color)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
