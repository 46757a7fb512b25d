from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Sequence

import numpy as np

from charplot.raster.canvas import Rectangle
from charplot.scales import Tick, format_tick_labels, generate_ticks, tick_step
from charplot.series import Series
from charplot.settings import LabelSettings, PlotSettings


LOGGER = logging.getLogger(__name__)

# Height in cells of an X tick label row.
X_TICK_LABEL_SIZE = 1


@dataclass(frozen=True)
class DataBounds:
    xmin: float
    xmax: float
    ymin: float
    ymax: float


@dataclass(frozen=True)
class AxisPlan:
    vmin: float
    vmax: float
    step: float
    ticks: tuple[Tick, ...]


@dataclass(frozen=True)
class PlotLayout:
    bounds: DataBounds
    drawing_area: Rectangle
    x_ticks: tuple[Tick, ...]
    y_ticks: tuple[Tick, ...]
    axis_cross: tuple[float, float]


def compute_data_bounds(series: Sequence[Series]) -> DataBounds:
    """Extrema over the finite values of every series; X and Y are filtered independently."""
    xmin, xmax = _finite_extent([s.xs for s in series], axis="x")
    ymin, ymax = _finite_extent([s.ys for s in series], axis="y")
    return DataBounds(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax)


def plan_layout(series: Sequence[Series], settings: PlotSettings, width: int, height: int) -> PlotLayout:
    raw = compute_data_bounds(series)

    if not settings.decorations_visible:
        xmin, xmax = _widen_degenerate(raw.xmin, raw.xmax)
        ymin, ymax = _widen_degenerate(raw.ymin, raw.ymax)
        return PlotLayout(
            bounds=DataBounds(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax),
            drawing_area=Rectangle(0, 0, width, height),
            x_ticks=(),
            y_ticks=(),
            axis_cross=(0.0, 0.0),
        )

    labels = settings.ticks.labels
    y_plan = plan_axis(
        raw.ymin,
        raw.ymax,
        desired_step=settings.ticks.desired_y_step,
        size=height,
        label_size=X_TICK_LABEL_SIZE,
        labels=labels,
    )
    y_label_size = y_tick_label_size(y_plan.ticks)
    x_plan = plan_axis(
        raw.xmin,
        raw.xmax,
        desired_step=settings.ticks.desired_x_step,
        size=width,
        label_size=y_label_size,
        labels=labels,
    )

    range_x = drawing_range(labels, y_label_size, width)
    range_y = drawing_range(labels, X_TICK_LABEL_SIZE, height)
    layout = PlotLayout(
        bounds=DataBounds(xmin=x_plan.vmin, xmax=x_plan.vmax, ymin=y_plan.vmin, ymax=y_plan.vmax),
        drawing_area=Rectangle(width - range_x, height - range_y, range_x, range_y),
        x_ticks=x_plan.ticks,
        y_ticks=y_plan.ticks,
        axis_cross=(axis_cross(x_plan.ticks), axis_cross(y_plan.ticks)),
    )
    LOGGER.debug(
        "layout: bounds=%s area=%s x_ticks=%d y_ticks=%d cross=%s",
        layout.bounds,
        layout.drawing_area,
        len(layout.x_ticks),
        len(layout.y_ticks),
        layout.axis_cross,
    )
    return layout


def plan_axis(
    vmin: float,
    vmax: float,
    *,
    desired_step: int,
    size: int,
    label_size: int,
    labels: LabelSettings,
) -> AxisPlan:
    """Choose a tick step and widen [vmin, vmax] so every tick lands on a whole cell."""
    total = drawing_range(labels, label_size, size)
    if vmin == vmax:
        return _plan_degenerate_axis(vmin, desired_step=desired_step, total=total, labels=labels)

    span = vmax - vmin
    if not (math.isfinite(span) and span / max(1, size) > 0.0):
        return _plan_unaligned_axis(vmin, vmax, labels)
    step = tick_step(vmin, vmax, desired_step, size)
    if not (math.isfinite(step) and step > 0.0):
        return _plan_unaligned_axis(vmin, vmax, labels)
    ticks = generate_ticks(vmin, vmax, step, fmt=labels.format, fit_within_bounds=False)
    lo, hi = align_bounds_to_ticks(vmin, vmax, ticks, step, total=total, label_size=label_size, labels=labels)
    if not _usable_bounds(lo, hi):
        return _plan_unaligned_axis(vmin, vmax, labels)

    # The widened bounds admit more ticks; this time keep them strictly inside.
    final = generate_ticks(lo, hi, step, fmt=labels.format, fit_within_bounds=True)
    if not final:
        final = [_fallback_tick(lo, hi, step, labels)]
    return AxisPlan(vmin=lo, vmax=hi, step=step, ticks=tuple(final))


def align_bounds_to_ticks(
    vmin: float,
    vmax: float,
    ticks: Sequence[Tick],
    step: float,
    *,
    total: int,
    label_size: int,
    labels: LabelSettings,
) -> tuple[float, float]:
    min_tick = ticks[0].value
    max_tick = ticks[-1].value
    lo = min(vmin, min_tick)
    hi = max(vmax, max_tick)
    cells = max(1, total - 1)

    # Data width of one cell if the whole range must fit.
    cell_size = (hi - lo) / cells
    label_at_start = False
    if labels.visible and labels.attach_to_axis and cells - label_size > 0:
        # Data width of one cell if the axis labels sit before the crossing tick.
        cell_size_with_label = (hi - axis_cross(ticks)) / (cells - label_size)
        if cell_size_with_label > cell_size:
            label_at_start = True
            cell_size = cell_size_with_label

    tick_interval = (max_tick - min_tick) / (len(ticks) - 1) if len(ticks) > 1 else step
    cells_per_tick = max(1, math.floor(tick_interval / cell_size))
    cell_size = tick_interval / cells_per_tick

    if label_at_start:
        first = min_tick - label_size * cell_size
    else:
        first = min_tick - math.ceil((min_tick - vmin) / cell_size) * cell_size

    # Centre the data when cells are left over; truncate toward zero like the cell count.
    used = math.ceil((vmax - first) / cell_size)
    unused = int((total - used) / 2)
    first -= unused * cell_size
    last = first + cells * cell_size
    return first, last


def axis_cross(ticks: Sequence[Tick]) -> float:
    """Value of the tick nearest zero; the orthogonal axis line is drawn there."""
    return min(ticks, key=lambda t: abs(t.value)).value


def drawing_range(labels: LabelSettings, label_size: int, size: int) -> int:
    if labels.visible and not labels.attach_to_axis:
        return max(1, size - label_size)
    return size


def y_tick_label_size(ticks: Sequence[Tick]) -> int:
    return max((len(t.label) for t in ticks), default=0)


def _plan_degenerate_axis(value: float, *, desired_step: int, total: int, labels: LabelSettings) -> AxisPlan:
    # Zero-width data: one tick at the value, centred in the drawing range.
    step = abs(value) if value != 0.0 else 1.0
    cells = max(1, total - 1)
    cell_size = step / min(desired_step, cells)
    first = value - ((total - 1) // 2) * cell_size
    last = first + cells * cell_size
    if not _usable_bounds(first, last):
        first, last = _widen_degenerate(value, value)
    tick = Tick(value=value, label=format_tick_labels([value], labels.format)[0])
    return AxisPlan(vmin=first, vmax=last, step=step, ticks=(tick,))


def _plan_unaligned_axis(vmin: float, vmax: float, labels: LabelSettings) -> AxisPlan:
    # The span overflows or is too small to divide into cells; keep the raw bounds.
    LOGGER.warning("range [%g, %g] cannot be divided into tick steps; using a single tick", vmin, vmax)
    value = min(max(vmin / 2.0 + vmax / 2.0, vmin), vmax)
    tick = Tick(value=value, label=format_tick_labels([value], labels.format)[0])
    return AxisPlan(vmin=vmin, vmax=vmax, step=math.nan, ticks=(tick,))


def _fallback_tick(lo: float, hi: float, step: float, labels: LabelSettings) -> Tick:
    mid = (lo + hi) / 2.0
    value = round(mid / step) * step
    if not lo <= value <= hi:
        value = mid
    return Tick(value=value, label=format_tick_labels([value], labels.format)[0])


def _finite_extent(arrays: Sequence[np.ndarray], *, axis: str) -> tuple[float, float]:
    finite = [a[np.isfinite(a)] for a in arrays]
    finite = [a for a in finite if a.size]
    if not finite:
        LOGGER.warning("no finite %s values in any series; using a zero-width range at 0", axis)
        return (0.0, 0.0)
    values = np.concatenate(finite)
    return (float(np.min(values)), float(np.max(values)))


def _widen_degenerate(vmin: float, vmax: float) -> tuple[float, float]:
    if vmin != vmax:
        return (vmin, vmax)
    if _usable_bounds(vmin - 1.0, vmax + 1.0):
        return (vmin - 1.0, vmax + 1.0)
    # Too large for a unit margin: span from zero to the value instead.
    return (min(0.0, vmin), max(0.0, vmax))


def _usable_bounds(lo: float, hi: float) -> bool:
    return math.isfinite(lo) and math.isfinite(hi) and lo < hi
