from .normalize import coerce_1d_numeric, normalize_xy

__all__ = ["coerce_1d_numeric", "normalize_xy"]
