from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from prism_app.domain.models import SolverResult
from prism_app.validation.loader import map_columns, read_csv_text
from prism_app.validation.metrics import (
    badge_for_rmse,
    local_maxima,
    resonance_peak,
    rmse_on_common_lambda,
)


def test_local_maxima_ignores_edges_and_nan() -> None:
    y = np.array([5.0, 1.0, 3.0, 2.0, np.nan, 4.0, 0.0, 1.0])
    assert local_maxima(y).tolist() == [2]
    assert local_maxima(np.array([1.0, 2.0])).size == 0


def test_local_maxima_relative_height_filter() -> None:
    y = np.array([0.0, 0.3, 0.1, 0.2, 10.0, 1.0, 0.0])
    assert local_maxima(y).tolist() == [1, 4]
    assert local_maxima(y, min_rel_height=0.05).tolist() == [4]


def test_resonance_peak_matches_scalars(default_result: SolverResult) -> None:
    wl, val = resonance_peak(default_result.data)
    assert wl == default_result.scalars.peak_wavelength_nm
    assert val == default_result.scalars.peak_C_ext


def test_rmse_zero_for_scaled_copy(default_result: SolverResult) -> None:
    ds = default_result.data
    ref = pd.DataFrame({"lambda_nm": ds["lambda_nm"].values, "value": 3.7 * ds["C_ext"].values})
    assert rmse_on_common_lambda(ds, ref) == pytest.approx(0.0, abs=1e-12)


def test_rmse_matches_injected_noise(default_result: SolverResult) -> None:
    ds = default_result.data
    c = ds["C_ext"].values
    noise = np.where(np.arange(c.size) % 2 == 0, 0.01, -0.01) * c.max()
    ref = pd.DataFrame({"lambda_nm": ds["lambda_nm"].values, "value": c + noise})
    rmse = rmse_on_common_lambda(ds, ref, normalize=False)
    assert rmse == pytest.approx(float(np.sqrt(np.mean(noise**2))), rel=1e-6)


def test_rmse_requires_overlap(default_result: SolverResult) -> None:
    ref = pd.DataFrame({"lambda_nm": [900.0, 950.0, 1000.0], "value": [1.0, 2.0, 1.0]})
    with pytest.raises(ValueError):
        rmse_on_common_lambda(default_result.data, ref)


def test_badges() -> None:
    assert badge_for_rmse(0.01) == "PASS"
    assert badge_for_rmse(0.1) == "WARN"
    assert badge_for_rmse(0.5) == "FAIL"


def test_loader_maps_and_converts_units() -> None:
    df = read_csv_text("wl_um,ext\n0.6,2.0\n0.4,1.0\n,3.0\n")
    out = map_columns(df, lam_col="wl_um", value_col="ext", lam_unit="um")
    assert out["lambda_nm"].tolist() == [400.0, 600.0]
    assert out["value"].tolist() == [1.0, 2.0]
    with pytest.raises(KeyError):
        map_columns(df, lam_col="nope", value_col="ext")
