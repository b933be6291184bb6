from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, cast

import numpy as np
import xarray as xr

from prism_app.adapters.registry import get_material
from prism_app.adapters.solver_analytic.prism import cross_sections, effective_diameter
from prism_app.domain.errors import OutOfRangeError
from prism_app.domain.models import ModelConfig, SolverResult, SolverScalars, SweepRequest
from prism_app.domain.ports import SolverEngine

logger = logging.getLogger(__name__)

_VARS = ("alpha_re", "alpha_im", "C_sca", "C_ext", "C_abs", "eps_re", "eps_im")


@dataclass
class _Point:
    eps: complex
    alpha: complex
    c_sca: float
    c_ext: float


class AnalyticPrismEngine(SolverEngine):
    """Wavelength sweep of the analytical nanoprism model.

    Each wavelength is independent; the only failure is an OutOfRangeError from
    the material table, handled per `config.on_out_of_range`.
    """

    def _point(self, cfg: ModelConfig, wl: float, d_eff: float) -> _Point:
        metal = get_material(cfg.material)
        eps_m = metal.eps_size_corrected(wl, d_eff) if cfg.size_correction else metal.eps(wl)
        g = cfg.geometry
        alpha, c_sca, c_ext = cross_sections(wl, eps_m, cfg.medium.eps_h, g.L_nm, g.H_nm, g.R_nm)
        return _Point(eps=eps_m, alpha=alpha, c_sca=c_sca, c_ext=c_ext)

    # --- API -----------------------------------------------------------------
    def run(self, request: Mapping[str, Any] | SweepRequest) -> SolverResult:
        # Accept either a Pydantic request or a dict-like; prefer typed
        if not isinstance(request, SweepRequest):
            request = SweepRequest.model_validate(dict(cast(Mapping[str, Any], request)))
        cfg = request.config
        if request.lambda_grid_nm is not None:
            lam = np.asarray(request.lambda_grid_nm, dtype=float)
        else:
            lam = cfg.spectral.grid()

        g = cfg.geometry
        if not g.ordered():
            logger.warning(
                "Geometry L=%g, H=%g, R=%g nm is outside the fitted domain L > H > R",
                g.L_nm,
                g.H_nm,
                g.R_nm,
            )
        d_eff = effective_diameter(g.L_nm, g.H_nm)
        logger.info("Effective size to calculate size-dependent dielectric function = %.6g nm", d_eff)

        out = {name: np.full(lam.size, np.nan, dtype=float) for name in _VARS}
        skipped = 0
        for i, wl in enumerate(lam):
            try:
                p = self._point(cfg, float(wl), d_eff)
            except OutOfRangeError as e:
                if cfg.on_out_of_range == "raise":
                    raise
                skipped += 1
                logger.warning("Skipping λ=%g nm: %s", float(wl), e)
                continue
            out["alpha_re"][i] = p.alpha.real
            out["alpha_im"][i] = p.alpha.imag
            out["C_sca"][i] = p.c_sca
            out["C_ext"][i] = p.c_ext
            out["C_abs"][i] = p.c_ext - p.c_sca
            out["eps_re"][i] = p.eps.real
            out["eps_im"][i] = p.eps.imag

        ds = xr.Dataset(
            data_vars={name: (("lambda_nm",), arr) for name, arr in out.items()},
            coords=dict(lambda_nm=lam),
            attrs=dict(
                material=cfg.material,
                L_nm=g.L_nm,
                H_nm=g.H_nm,
                R_nm=g.R_nm,
                eps_h=cfg.medium.eps_h,
                D_eff_nm=d_eff,
                size_correction=int(cfg.size_correction),
                note="Analytical dipole model (rounded-corner triangular prism)",
            ),
        )
        ds["alpha_re"].attrs["units"] = "nm^3"
        ds["alpha_im"].attrs["units"] = "nm^3"
        for name in ("C_sca", "C_ext", "C_abs"):
            ds[name].attrs["units"] = "cm^2"

        c_ext = out["C_ext"]
        if np.all(np.isnan(c_ext)):
            peak_wl, peak_val = float("nan"), float("nan")
        else:
            j = int(np.nanargmax(c_ext))
            peak_wl, peak_val = float(lam[j]), float(c_ext[j])
            logger.info("Extinction peak at λ=%g nm (C_ext=%.4e cm²)", peak_wl, peak_val)

        scalars = SolverScalars(
            D_eff_nm=d_eff,
            peak_wavelength_nm=peak_wl,
            peak_C_ext=peak_val,
            skipped=skipped,
            notes=f"{cfg.material}, size_correction={cfg.size_correction}",
        )
        return SolverResult(data=ds, scalars=scalars)
