from __future__ import annotations

from math import sqrt
from typing import Tuple

import numpy as np
import pandas as pd
import xarray as xr


def local_maxima(y: np.ndarray, min_rel_height: float = 0.0) -> np.ndarray:
    """Indices of strict interior local maxima; NaN samples never qualify.

    With `min_rel_height` > 0 only maxima reaching that fraction of the global
    maximum are kept (drops interband shoulders next to the plasmon peak).
    """
    v = np.asarray(y, dtype=float)
    if v.size < 3:
        return np.array([], dtype=int)
    mid = v[1:-1]
    with np.errstate(invalid="ignore"):
        mask = (mid > v[:-2]) & (mid > v[2:])
        if min_rel_height > 0.0:
            mask &= mid >= min_rel_height * np.nanmax(v)
    return np.flatnonzero(mask) + 1


def resonance_peak(ds: xr.Dataset, var: str = "C_ext") -> Tuple[float, float]:
    """(λ, value) at the maximum of `var`; NaN samples are ignored."""
    y = ds[var].values
    if np.all(np.isnan(y)):
        raise ValueError(f"{var} has no finite samples")
    j = int(np.nanargmax(y))
    return float(ds["lambda_nm"].values[j]), float(y[j])


def _overlap_on_model_grid(
    lam_model: np.ndarray, lam_ref: np.ndarray, y_ref: np.ndarray
) -> Tuple[np.ndarray, np.ndarray]:
    """Interpolate reference onto model λ grid over the overlapping range.

    Returns (mask_on_model_grid, y_ref_interp). Requires ≥ 3 overlapping points.
    """
    lo = max(float(lam_model.min()), float(lam_ref.min()))
    hi = min(float(lam_model.max()), float(lam_ref.max()))
    mask = (lam_model >= lo) & (lam_model <= hi)
    if int(mask.sum()) < 3:
        raise ValueError("Insufficient spectral overlap between model and reference")
    return mask, np.interp(lam_model[mask], lam_ref, y_ref)


def rmse_on_common_lambda(
    ds: xr.Dataset, ref: pd.DataFrame, var: str = "C_ext", *, normalize: bool = True
) -> float:
    """RMSE between a model spectrum and a reference (`lambda_nm`, `value`) on the model grid.

    With `normalize`, both curves are scaled to unit maximum over the overlap so
    measured spectra in arbitrary units compare by shape.
    """
    finite = ~np.isnan(ds[var].values)
    lam_model = ds["lambda_nm"].values[finite]
    y_model = ds[var].values[finite]

    lam_ref = ref["lambda_nm"].to_numpy(dtype=float)
    y_ref = ref["value"].to_numpy(dtype=float)

    mask, y_ref_interp = _overlap_on_model_grid(lam_model, lam_ref, y_ref)
    y_model_common = y_model[mask]
    if normalize:
        y_model_common = y_model_common / float(np.max(np.abs(y_model_common)))
        y_ref_interp = y_ref_interp / float(np.max(np.abs(y_ref_interp)))

    diff = y_model_common - y_ref_interp
    return sqrt(float(np.mean(diff * diff)))


def badge_for_rmse(rmse: float, *, pass_th: float = 0.05, warn_th: float = 0.15) -> str:
    if rmse <= pass_th:
        return "PASS"
    if rmse <= warn_th:
        return "WARN"
    return "FAIL"
