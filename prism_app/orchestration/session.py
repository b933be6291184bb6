from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Domain (Pydantic v2) models used by tests and the app
from prism_app.domain.models import (
    HostMedium,
    Material,
    ModelConfig,
    PrismGeometry,
    SolverResult,
    SpectralRange,
    SweepRequest,
)

__all__ = [
    "AppSession",
    "default_config",
    "init_session",
    "update_geometry",
    "update_medium",
    "update_range",
    "update_material",
    "build_sweep_request",
]


@dataclass
class AppSession:
    """
    Thin runtime container passed between UI, orchestration, and engine.

    `config` is the domain Pydantic model (ModelConfig), so consumers that validate
    against ModelConfig (e.g., SweepRequest(config=...)) accept it.
    """

    config: ModelConfig
    last_request: SweepRequest | None = None
    last_result: SolverResult | None = None


# -------------------------
# Session lifecycle helpers
# -------------------------


def default_config() -> ModelConfig:
    """
    Return the reference calculation: a silver prism in vacuum.

    L = 50 nm, H = 20 nm, R = 2 nm; λ = 300..800 nm in 2 nm steps.
    """
    return ModelConfig(
        material="silver",
        geometry=PrismGeometry(L_nm=50.0, H_nm=20.0, R_nm=2.0),
        medium=HostMedium(eps_h=1.0),
        spectral=SpectralRange(wl_min_nm=300.0, wl_max_nm=800.0, wl_step_nm=2.0),
        size_correction=True,
    )


def init_session() -> AppSession:
    """Create a fresh session with sensible defaults."""
    return AppSession(config=default_config(), last_request=None, last_result=None)


def update_geometry(session: AppSession, **kwargs: Any) -> AppSession:
    """
    Update geometry fields from keyword arguments.

    Allowed keys: {"L_nm", "H_nm", "R_nm"}.
    Unknown keys are ignored to keep UI interactions robust.
    """
    allowed = {"L_nm", "H_nm", "R_nm"}
    updates: dict[str, float] = {k: float(v) for k, v in kwargs.items() if k in allowed}
    if updates:
        data = session.config.geometry.model_dump() | updates
        new_geom = PrismGeometry.model_validate(data)
        session.config = session.config.model_copy(update={"geometry": new_geom})
    return session


def update_medium(session: AppSession, *, eps_h: float) -> AppSession:
    session.config = session.config.model_copy(update={"medium": HostMedium(eps_h=float(eps_h))})
    return session


def update_material(
    session: AppSession, material: Material, *, size_correction: bool | None = None
) -> AppSession:
    updates: dict[str, Any] = {"material": material}
    if size_correction is not None:
        updates["size_correction"] = bool(size_correction)
    session.config = ModelConfig.model_validate(session.config.model_dump() | updates)
    return session


def update_range(session: AppSession, *, wl_min_nm: float, wl_max_nm: float, wl_step_nm: float) -> AppSession:
    """Update the wavelength sweep span (nm)."""
    new_range = SpectralRange(
        wl_min_nm=float(wl_min_nm), wl_max_nm=float(wl_max_nm), wl_step_nm=float(wl_step_nm)
    )
    session.config = session.config.model_copy(update={"spectral": new_range})
    return session


def build_sweep_request(session: AppSession) -> SweepRequest:
    """Materialize the wavelength grid and pack an engine request."""
    grid = session.config.spectral.grid()
    req = SweepRequest(config=session.config, lambda_grid_nm=[float(x) for x in grid])
    session.last_request = req
    return req
