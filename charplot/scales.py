from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import math

import numpy as np


DEFAULT_LABEL_FORMAT = ".4g"


@dataclass(frozen=True)
class Tick:
    value: float
    label: str


@dataclass(frozen=True)
class CoordinateConverter:
    """Per-axis affine map from a data interval onto a cell interval.

    Results are real-valued; callers round at the point of use so sub-cell
    drawing can rescale the target first.
    """

    source_x: tuple[float, float]
    source_y: tuple[float, float]
    target_x: tuple[int, int]
    target_y: tuple[int, int]

    def convert_x(self, value: float) -> float:
        return _convert(value, self.source_x, self.target_x)

    def convert_y(self, value: float) -> float:
        return _convert(value, self.source_y, self.target_y)

    def convert(self, x: float, y: float) -> tuple[float, float]:
        return (self.convert_x(x), self.convert_y(y))

    def invert_x(self, value: float) -> float:
        return _convert(value, self.target_x, self.source_x)

    def invert_y(self, value: float) -> float:
        return _convert(value, self.target_y, self.source_y)

    def scaled(self, horizontal: int, vertical: int) -> CoordinateConverter:
        return CoordinateConverter(
            source_x=self.source_x,
            source_y=self.source_y,
            target_x=(self.target_x[0] * horizontal, self.target_x[1] * horizontal),
            target_y=(self.target_y[0] * vertical, self.target_y[1] * vertical),
        )


def _convert(value: float, source: tuple[float, float], target: tuple[float, float]) -> float:
    lo, hi = source
    if math.isinf(hi - lo) and math.isfinite(lo) and math.isfinite(hi):
        # Halving keeps the span of two finite bounds representable.
        value, lo, hi = value / 2.0, lo / 2.0, hi / 2.0
    return (value - lo) / (hi - lo) * (target[1] - target[0]) + target[0]


def nice_number(value: float, *, round_result: bool) -> float:
    if not np.isfinite(value) or value <= 0:
        raise ValueError(f"nice_number requires a finite positive value, got {value!r}")
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)

    if round_result:
        if frac < 1.5:
            nice_frac = 1.0
        elif frac < 3.0:
            nice_frac = 2.0
        elif frac < 7.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0
    else:
        if frac <= 1.0:
            nice_frac = 1.0
        elif frac <= 2.0:
            nice_frac = 2.0
        elif frac <= 5.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0

    return float(nice_frac * (10**exp))


def tick_step(vmin: float, vmax: float, desired_cells_per_tick: int, size: int) -> float:
    tick_count = max(1, size // desired_cells_per_tick)
    return nice_number((vmax - vmin) / tick_count, round_result=True)


def generate_ticks(
    vmin: float,
    vmax: float,
    step: float,
    *,
    fmt: str | None = DEFAULT_LABEL_FORMAT,
    fit_within_bounds: bool,
) -> list[Tick]:
    """Multiples of ``step`` covering [vmin, vmax].

    Without ``fit_within_bounds`` the end multiples are rounded, so ticks may
    fall slightly outside the interval; with it they are strictly inside.
    """
    if fit_within_bounds:
        first = math.ceil(vmin / step)
        last = math.floor(vmax / step)
    else:
        first = round(vmin / step)
        last = round(vmax / step)
    values = [k * step for k in range(first, last + 1)]
    return [Tick(value=v, label=label) for v, label in zip(values, format_tick_labels(values, fmt), strict=True)]


def format_tick_labels(values: list[float], fmt: str | None) -> list[str]:
    if fmt is None:
        return format_ticks_for_axis(np.asarray(values, dtype=np.float64))
    return [format_tick_label(v, fmt) for v in values]


def format_tick_label(value: float, fmt: str = DEFAULT_LABEL_FORMAT) -> str:
    if value == 0.0:
        value = 0.0
    out = format(value, fmt)
    # Values that round to zero must not print as "-0".
    if out.startswith("-") and not out[1:].strip("0.,"):
        out = out[1:]
    return out


def format_tick(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    decimals = _decimals_from_step(step) if step is not None else 6
    if abs_v != 0 and (abs_v >= 1e6 or (step is not None and abs(step) < 1e-4) or abs_v < 1e-6):
        return f"{value:.4e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    # Only trim trailing zeros for fractional values (preserve integer zeros like 30, 40).
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def format_ticks_for_axis(ticks: np.ndarray) -> list[str]:
    if ticks.size == 0:
        return []
    if ticks.size == 1:
        return [format_tick(float(ticks[0]))]
    step = float(abs(ticks[1] - ticks[0]))
    return [format_tick(float(v), step=step) for v in ticks]


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    d = Decimal(str(step)).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(12, decimals)
