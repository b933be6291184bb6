from __future__ import annotations

import pytest
from pydantic import ValidationError

from prism_app.orchestration.session import (
    build_sweep_request,
    init_session,
    update_geometry,
    update_material,
    update_medium,
    update_range,
)


def test_update_geometry_ignores_unknown_keys() -> None:
    s = init_session()
    update_geometry(s, L_nm=70, R_nm=3.5, bogus=1.0)
    assert s.config.geometry.L_nm == 70.0
    assert s.config.geometry.R_nm == 3.5
    assert s.config.geometry.H_nm == 20.0


def test_update_geometry_validates() -> None:
    s = init_session()
    with pytest.raises(ValidationError):
        update_geometry(s, H_nm=-5.0)


def test_update_material_medium_and_range() -> None:
    s = init_session()
    update_material(s, "gold", size_correction=False)
    update_medium(s, eps_h=1.77)
    update_range(s, wl_min_nm=400.0, wl_max_nm=900.0, wl_step_nm=5.0)
    cfg = s.config
    assert cfg.material == "gold"
    assert cfg.size_correction is False
    assert cfg.medium.eps_h == 1.77
    assert cfg.spectral.wl_max_nm == 900.0


def test_build_sweep_request_materializes_grid() -> None:
    s = init_session()
    update_range(s, wl_min_nm=400.0, wl_max_nm=410.0, wl_step_nm=2.5)
    req = build_sweep_request(s)
    assert req.lambda_grid_nm == [400.0, 402.5, 405.0, 407.5, 410.0]
    assert req.config is s.config
    assert s.last_request is req


def test_update_range_rejects_inverted_span_and_keeps_config() -> None:
    s = init_session()
    before = s.config
    with pytest.raises(ValidationError):
        update_range(s, wl_min_nm=800.0, wl_max_nm=300.0, wl_step_nm=2.0)
    with pytest.raises(ValidationError):
        update_range(s, wl_min_nm=0.0, wl_max_nm=300.0, wl_step_nm=2.0)
    assert s.config is before
