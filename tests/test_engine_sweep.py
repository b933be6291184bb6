from __future__ import annotations

import logging
from math import pi, sqrt

import numpy as np
import pytest

from prism_app.adapters.solver_analytic.engine import AnalyticPrismEngine
from prism_app.domain.errors import OutOfRangeError
from prism_app.domain.models import ModelConfig, SolverResult, SweepRequest
from prism_app.validation.metrics import local_maxima


def test_default_sweep_contract(default_result: SolverResult) -> None:
    ds = default_result.data
    lam = ds["lambda_nm"].values
    assert lam.size == 251
    assert lam[0] == 300.0 and lam[-1] == 800.0
    for var in ("alpha_re", "alpha_im", "C_sca", "C_ext", "C_abs", "eps_re", "eps_im"):
        assert ds[var].dims == ("lambda_nm",)
        assert np.all(np.isfinite(ds[var].values))
    assert ds.attrs["material"] == "silver"
    assert ds["C_ext"].attrs["units"] == "cm^2"


def test_effective_diameter_reported(default_result: SolverResult) -> None:
    expected = 2.0 * (3.0 * sqrt(3.0) * 50.0**2 * 20.0 / (16.0 * pi)) ** (1.0 / 3.0)
    assert default_result.scalars.D_eff_nm == pytest.approx(expected)
    assert default_result.data.attrs["D_eff_nm"] == pytest.approx(expected)


def test_single_resonance_in_reference_sweep(default_result: SolverResult) -> None:
    c_ext = default_result.data["C_ext"].values
    lam = default_result.data["lambda_nm"].values
    peaks = local_maxima(c_ext, min_rel_height=0.05)
    assert len(peaks) == 1
    peak_wl = float(lam[peaks[0]])
    assert peak_wl == default_result.scalars.peak_wavelength_nm
    assert peak_wl == pytest.approx(458.0, abs=4.0)


def test_interband_shoulder_is_weak(default_result: SolverResult) -> None:
    # Silver interband edge leaves a small maximum near 324 nm below the plasmon peak
    c_ext = default_result.data["C_ext"].values
    lam = default_result.data["lambda_nm"].values
    raw = local_maxima(c_ext)
    assert lam[raw].tolist() == pytest.approx([324.0, 458.0], abs=4.0)
    assert c_ext[raw[0]] < 0.05 * c_ext[raw[1]]


def test_single_resonance_without_size_correction(cfg: ModelConfig, engine: AnalyticPrismEngine) -> None:
    bulk = engine.run(SweepRequest(config=cfg.model_copy(update={"size_correction": False})))
    c_ext = bulk.data["C_ext"].values
    peaks = local_maxima(c_ext, min_rel_height=0.05)
    assert len(peaks) == 1
    assert float(bulk.data["lambda_nm"].values[peaks[0]]) == bulk.scalars.peak_wavelength_nm
    assert 430.0 < bulk.scalars.peak_wavelength_nm < 490.0


def test_cross_sections_non_negative_and_absorption_consistent(default_result: SolverResult) -> None:
    ds = default_result.data
    assert np.all(ds["C_ext"].values >= 0.0)
    assert np.all(ds["C_sca"].values >= 0.0)
    np.testing.assert_allclose(ds["C_abs"].values, ds["C_ext"].values - ds["C_sca"].values)


def test_sweep_is_deterministic(cfg: ModelConfig, default_result: SolverResult) -> None:
    again = AnalyticPrismEngine().run(SweepRequest(config=cfg))
    np.testing.assert_array_equal(again.data["C_ext"].values, default_result.data["C_ext"].values)
    assert again.scalars.peak_wavelength_nm == default_result.scalars.peak_wavelength_nm


def test_size_correction_broadens_and_lowers_peak(cfg: ModelConfig, engine: AnalyticPrismEngine) -> None:
    bulk = engine.run(SweepRequest(config=cfg.model_copy(update={"size_correction": False})))
    corrected = engine.run(SweepRequest(config=cfg))
    assert corrected.scalars.peak_C_ext < bulk.scalars.peak_C_ext


def test_higher_host_index_redshifts(cfg: ModelConfig, engine: AnalyticPrismEngine) -> None:
    water = cfg.model_copy(update={"medium": cfg.medium.model_copy(update={"eps_h": 1.77})})
    r_vac = engine.run(SweepRequest(config=cfg))
    r_wat = engine.run(SweepRequest(config=water))
    assert r_wat.scalars.peak_wavelength_nm > r_vac.scalars.peak_wavelength_nm


def test_explicit_grid_and_mapping_request(cfg: ModelConfig, engine: AnalyticPrismEngine) -> None:
    res = engine.run({"config": cfg, "lambda_grid_nm": [400.0, 500.0, 600.0]})
    assert res.data["lambda_nm"].values.tolist() == [400.0, 500.0, 600.0]


def test_out_of_range_raises_by_default(cfg: ModelConfig, engine: AnalyticPrismEngine) -> None:
    gold = cfg.model_copy(update={"material": "gold"})
    with pytest.raises(OutOfRangeError):
        engine.run(SweepRequest(config=gold, lambda_grid_nm=[280.0, 500.0]))


def test_out_of_range_skip_policy(
    cfg: ModelConfig, engine: AnalyticPrismEngine, caplog: pytest.LogCaptureFixture
) -> None:
    gold = cfg.model_copy(update={"material": "gold", "on_out_of_range": "skip"})
    with caplog.at_level(logging.WARNING, logger="prism_app"):
        res = engine.run(SweepRequest(config=gold, lambda_grid_nm=[280.0, 290.0, 500.0, 600.0]))
    assert res.scalars.skipped == 2
    c_ext = res.data["C_ext"].values
    assert np.isnan(c_ext[:2]).all()
    assert np.isfinite(c_ext[2:]).all()
    assert "Skipping" in caplog.text


def test_all_skipped_gives_nan_peak(cfg: ModelConfig, engine: AnalyticPrismEngine) -> None:
    gold = cfg.model_copy(update={"material": "gold", "on_out_of_range": "skip"})
    res = engine.run(SweepRequest(config=gold, lambda_grid_nm=[250.0, 260.0]))
    assert res.scalars.skipped == 2
    assert np.isnan(res.scalars.peak_wavelength_nm)


def test_warns_outside_fitted_domain(
    cfg: ModelConfig, engine: AnalyticPrismEngine, caplog: pytest.LogCaptureFixture
) -> None:
    bad = cfg.model_copy(update={"geometry": cfg.geometry.model_copy(update={"R_nm": 30.0})})
    with caplog.at_level(logging.WARNING, logger="prism_app"):
        engine.run(SweepRequest(config=bad, lambda_grid_nm=[500.0]))
    assert "fitted domain" in caplog.text
