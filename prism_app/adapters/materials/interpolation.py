from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def _window_start(x_arr: NDArray[np.floating], x_val: float) -> int:
    """Index i of the 4-point window {i-1, i, i+1, i+2}.

    i is the largest node with x[i] <= x_val, clamped to [1, n-3] so the window
    never leaves the table. Near the edges the nearest interior window is reused.
    """
    n = x_arr.size
    i = int(np.searchsorted(x_arr, x_val, side="right")) - 1
    return min(max(i, 1), n - 3)


def interpolate(x_arr: NDArray[np.floating], y_arr: NDArray[np.floating], x_val: float) -> float:
    r"""
    Local cubic (4-point Lagrange) interpolation of a tabulated function.

        y(x) = Σ_j y_j Π_{m≠j} (x - x_m) / (x_j - x_m),   j, m ∈ {i-1, i, i+1, i+2}

    `x_arr` must be strictly increasing with at least 4 nodes. No range check is
    done here; callers reject arguments outside [x_arr[0], x_arr[-1]].
    """
    x_arr = np.asarray(x_arr, dtype=float)
    y_arr = np.asarray(y_arr, dtype=float)
    if x_arr.ndim != 1 or x_arr.shape != y_arr.shape:
        raise ValueError("x_arr and y_arr must be 1D arrays of the same length")
    if x_arr.size < 4:
        raise ValueError("cubic interpolation needs at least 4 tabulated points")

    i = _window_start(x_arr, x_val)
    x0, x1, x2, x3 = (float(v) for v in x_arr[i - 1 : i + 3])
    y0, y1, y2, y3 = (float(v) for v in y_arr[i - 1 : i + 3])
    x = float(x_val)

    return (
        (x - x1) * (x - x2) * (x - x3) * y0 / ((x0 - x1) * (x0 - x2) * (x0 - x3))
        + (x - x0) * (x - x2) * (x - x3) * y1 / ((x1 - x0) * (x1 - x2) * (x1 - x3))
        + (x - x0) * (x - x1) * (x - x3) * y2 / ((x2 - x0) * (x2 - x1) * (x2 - x3))
        + (x - x0) * (x - x1) * (x - x2) * y3 / ((x3 - x0) * (x3 - x1) * (x3 - x2))
    )
