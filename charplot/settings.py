from __future__ import annotations

from dataclasses import dataclass, field, replace

from charplot.errors import InvalidConfigurationError
from charplot.raster.brushes import LinePen, PointBrush, SystemLineBrushes, SystemPointBrushes
from charplot.raster.canvas import Color
from charplot.scales import DEFAULT_LABEL_FORMAT


@dataclass(frozen=True)
class AxisSettings:
    visible: bool = True
    pen: LinePen | None = LinePen(SystemLineBrushes.THIN, Color.WHITE)

    def validate(self) -> None:
        if self.pen is None:
            raise InvalidConfigurationError("axis pen cannot be None")


@dataclass(frozen=True)
class GridSettings:
    visible: bool = True
    pen: LinePen | None = LinePen(SystemLineBrushes.DASHED, Color.DARK_GRAY)

    def validate(self) -> None:
        if self.pen is None:
            raise InvalidConfigurationError("grid pen cannot be None")


@dataclass(frozen=True)
class LabelSettings:
    """Tick label options.

    ``format`` is a Python format spec applied to each tick value; ``None``
    derives the number of decimals from the tick step. With ``strict`` a label
    that cannot fit aborts the draw instead of being skipped.
    """

    visible: bool = True
    color: Color = Color.WHITE
    attach_to_axis: bool = True
    format: str | None = DEFAULT_LABEL_FORMAT
    strict: bool = False

    def validate(self) -> None:
        if self.format is None:
            return
        try:
            format(1.5, self.format)
        except (ValueError, TypeError) as exc:
            raise InvalidConfigurationError(f"invalid label format {self.format!r}: {exc}") from exc


@dataclass(frozen=True)
class TickSettings:
    visible: bool = True
    pen: LinePen | None = LinePen(SystemLineBrushes.THIN, Color.WHITE)
    # Desired number of cells between neighbouring ticks.
    desired_x_step: int = 11
    desired_y_step: int = 3
    labels: LabelSettings = field(default_factory=LabelSettings)

    def validate(self) -> None:
        if self.pen is None:
            raise InvalidConfigurationError("tick pen cannot be None")
        for name in ("desired_x_step", "desired_y_step"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InvalidConfigurationError(f"{name} must be a positive integer, got {value!r}")
        self.labels.validate()


@dataclass(frozen=True)
class PlotSettings:
    axis: AxisSettings = field(default_factory=AxisSettings)
    grid: GridSettings = field(default_factory=GridSettings)
    ticks: TickSettings = field(default_factory=TickSettings)
    default_brush: PointBrush | None = SystemPointBrushes.BRAILLE

    def validate(self) -> None:
        self.axis.validate()
        self.grid.validate()
        self.ticks.validate()
        if self.default_brush is None:
            raise InvalidConfigurationError("default series brush cannot be None")

    @property
    def decorations_visible(self) -> bool:
        return self.axis.visible or self.grid.visible or self.ticks.visible or self.ticks.labels.visible

    def with_all_hidden(self) -> PlotSettings:
        return replace(
            self,
            axis=replace(self.axis, visible=False),
            grid=replace(self.grid, visible=False),
            ticks=replace(self.ticks, visible=False, labels=replace(self.ticks.labels, visible=False)),
        )
