from __future__ import annotations


class PlotError(Exception):
    """Base class for errors raised by charplot."""


class ArgumentMismatchError(PlotError, ValueError):
    pass


class InvalidConfigurationError(PlotError, ValueError):
    pass


class OutOfRangeError(PlotError, IndexError):
    pass


class OversizeContentError(PlotError, RuntimeError):
    pass
