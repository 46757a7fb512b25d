from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from charplot.errors import ArgumentMismatchError, InvalidConfigurationError
from charplot.raster.brushes import PointPen


@dataclass(frozen=True, eq=False)
class Series:
    """One X/Y data series. NaN breaks the drawn line, +/-inf clamps to the edge."""

    xs: np.ndarray
    ys: np.ndarray
    pen: PointPen
    label: str | None = None

    def __post_init__(self) -> None:
        xs = np.array(self.xs, dtype=np.float64)
        ys = np.array(self.ys, dtype=np.float64)
        if xs.ndim != 1 or ys.ndim != 1:
            raise ArgumentMismatchError("xs and ys must be 1-D")
        if xs.shape != ys.shape:
            raise ArgumentMismatchError(f"xs and ys length mismatch: {xs.size} != {ys.size}")
        if self.pen is None:
            raise InvalidConfigurationError("series pen cannot be None")
        xs.setflags(write=False)
        ys.setflags(write=False)
        object.__setattr__(self, "xs", xs)
        object.__setattr__(self, "ys", ys)

    def __len__(self) -> int:
        return int(self.xs.size)

    @property
    def finite_mask(self) -> np.ndarray:
        return np.isfinite(self.xs) & np.isfinite(self.ys)
