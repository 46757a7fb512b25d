from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from charplot.errors import ArgumentMismatchError


try:
    import pandas as pd
except ImportError:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except ImportError:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_xy(xs: Any, ys: Any) -> tuple[np.ndarray, np.ndarray]:
    x_arr = coerce_1d_numeric(xs, label="xs")
    y_arr = coerce_1d_numeric(ys, label="ys")
    if x_arr.shape != y_arr.shape:
        raise ArgumentMismatchError(f"xs and ys length mismatch: {x_arr.size} != {y_arr.size}")
    return x_arr, y_arr


def coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise ArgumentMismatchError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy().copy()

    if pd is not None and isinstance(value, pd.DataFrame):
        numeric_cols = [c for c in value.columns if pd.api.types.is_numeric_dtype(value[c])]
        if len(numeric_cols) != 1:
            raise ArgumentMismatchError(f"{label} DataFrame must contain exactly one numeric column")
        value = value[numeric_cols[0]]

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise ArgumentMismatchError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        arr = np.asarray(list(value), dtype=object)
        if arr.ndim != 1:
            raise ArgumentMismatchError(f"{label} must be 1-D")
        return _coerce_ndarray(arr, label=label)

    raise ArgumentMismatchError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=True)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise ArgumentMismatchError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
