from __future__ import annotations

from charplot.plot import Plot
from charplot.settings import PlotSettings


DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 22


def plot(
    width: int | None = None,
    height: int | None = None,
    *,
    settings: PlotSettings | None = None,
) -> Plot:
    """Create a plot, sized to a classic 80x22 terminal when no size is given."""
    if width is None:
        width = DEFAULT_WIDTH
    if height is None:
        height = DEFAULT_HEIGHT
    return Plot(width, height, settings=settings)
