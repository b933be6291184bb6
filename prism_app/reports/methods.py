from __future__ import annotations

from datetime import datetime, timezone
from textwrap import dedent

from prism_app.adapters.solver_analytic.prism import effective_diameter
from prism_app.domain.models import ModelConfig

_MATERIAL_REFS = {
    "silver": "P. B. Johnson, R. W. Christy, Phys. Rev. B 6, 4370 (1972)",
    "gold": "R. L. Olmon et al., Phys. Rev. B 86, 235147 (2012)",
}


def methods_markdown(cfg: ModelConfig, *, peak_wavelength_nm: float | None = None) -> str:
    g = cfg.geometry
    sr = cfg.spectral
    d_eff = effective_diameter(g.L_nm, g.H_nm)
    corr = (
        f"size-dependent (Drude surface damping, D_eff={d_eff:.4g} nm)"
        if cfg.size_correction
        else "bulk (no size correction)"
    )
    md = f"""
    # Methods (Auto‑generated)

    **Model:** analytical dipole polarizability of a triangular nanoprism with rounded corners
    (A. D. Kondorskiy, A. V. Mekshun, J. Russ. Laser Res. 44, 627 (2023)).  
    **Config version:** {cfg.version}  
    **Generated:** {datetime.now(timezone.utc).isoformat()}

    ## Geometry
    Edge length L={g.L_nm:.4g} nm, thickness H={g.H_nm:.4g} nm, corner radius R={g.R_nm:.4g} nm.

    ## Material
    {cfg.material.capitalize()}, optical constants from {_MATERIAL_REFS[cfg.material]}; {corr}.

    ## Host medium
    ε_h={cfg.medium.eps_h:.4g} (n_h={cfg.medium.n_h:.4g}).

    ## Spectral range
    λ∈[{sr.wl_min_nm:.4g},{sr.wl_max_nm:.4g}] nm, step {sr.wl_step_nm:.4g} nm.
    """
    md = dedent(md)
    if peak_wavelength_nm is not None:
        md += f"\n**Extinction peak:** {peak_wavelength_nm:.4g} nm.\n"
    return md.strip() + "\n"
