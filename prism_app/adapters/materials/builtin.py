from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from prism_app.adapters.materials.interpolation import interpolate
from prism_app.adapters.materials.tables import GOLD, SILVER, SpectralTable
from prism_app.domain.errors import OutOfRangeError
from prism_app.domain.models import Material
from prism_app.domain.ports import DielectricModel

# Photon energy E(eV) = HC_EV_NM / λ(nm)
HC_EV_NM = 1239.8
# Reduced Planck constant (eV·s)
H_BAR_EV_S = 6.582e-16
NM_PER_CM = 1.0e7
# Relative slack on the table edges so λ = hc/E_edge is accepted despite round-off
_EDGE_RTOL = 1.0e-12


def photon_energy_ev(lambda_nm: float) -> float:
    return HC_EV_NM / float(lambda_nm)


@dataclass(frozen=True)
class SizeCorrection:
    """Drude parameters for the finite-size damping correction."""

    v_F_cm_s: float  # Fermi velocity
    mfp_cm: float  # bulk electron mean free path
    omega_p_ev: float  # plasma energy
    A: float  # empirical surface-scattering constant

    @property
    def gamma_inf_ev(self) -> float:
        return H_BAR_EV_S * self.v_F_cm_s / self.mfp_cm

    def gamma_r_ev(self, diameter_nm: float) -> float:
        """Bulk rate plus surface scattering A·ħ·v_F·(2/D), D converted nm → cm."""
        return self.gamma_inf_ev + self.A * H_BAR_EV_S * self.v_F_cm_s * NM_PER_CM * (2.0 / diameter_nm)

    def delta_eps(self, omega_ev: float, diameter_nm: float) -> complex:
        r"""
        Swap the bulk Drude damping for the size-limited one:

            Δε = ω_p² [ 1/(ω² + iωγ_∞) − 1/(ω² + iωγ_r) ]
        """
        w = float(omega_ev)
        g_inf = self.gamma_inf_ev
        g_r = self.gamma_r_ev(diameter_nm)
        wp2 = self.omega_p_ev * self.omega_p_ev
        return wp2 * (1.0 / complex(w * w, w * g_inf) - 1.0 / complex(w * w, w * g_r))


SILVER_DRUDE = SizeCorrection(v_F_cm_s=1.39e8, mfp_cm=5.2e-6, omega_p_ev=9.1, A=2.5)
GOLD_DRUDE = SizeCorrection(v_F_cm_s=1.38e8, mfp_cm=1.28e-6, omega_p_ev=9.0, A=2.0)


class TabulatedMetal(DielectricModel):
    """Metal permittivity from tabulated (n, k) with optional size correction."""

    def __init__(self, table: SpectralTable, drude: SizeCorrection) -> None:
        self.table = table
        self.drude = drude

    @property
    def name(self) -> str:
        return self.table.name

    def lambda_bounds_nm(self) -> tuple[float, float]:
        """Wavelength interval covered by the table (nm)."""
        e_min, e_max = self.table.bounds_ev
        return HC_EV_NM / e_max, HC_EV_NM / e_min

    def nk(self, lambda_nm: float) -> tuple[float, float]:
        omega = photon_energy_ev(lambda_nm)
        e_min, e_max = self.table.bounds_ev
        if omega < e_min * (1.0 - _EDGE_RTOL) or omega > e_max * (1.0 + _EDGE_RTOL):
            raise OutOfRangeError(self.name, omega, (e_min, e_max), wavelength_nm=lambda_nm)
        n_val = interpolate(self.table.energy_ev, self.table.n, omega)
        k_val = interpolate(self.table.energy_ev, self.table.k, omega)
        return n_val, k_val

    def eps(self, lambda_nm: float) -> complex:
        """ε = (n² − k²) + i·2nk."""
        n_val, k_val = self.nk(lambda_nm)
        return complex(n_val * n_val - k_val * k_val, 2.0 * n_val * k_val)

    def eps_size_corrected(self, lambda_nm: float, diameter_nm: float) -> complex:
        # OutOfRangeError from eps() propagates unchanged
        bulk = self.eps(lambda_nm)
        return bulk + self.drude.delta_eps(photon_energy_ev(lambda_nm), diameter_nm)


BUILTIN_METALS: Dict[str, TabulatedMetal] = {
    "silver": TabulatedMetal(SILVER, SILVER_DRUDE),
    "gold": TabulatedMetal(GOLD, GOLD_DRUDE),
}


def get_metal(material: Material | str) -> TabulatedMetal:
    metal = BUILTIN_METALS.get(str(material).lower())
    if metal is None:
        raise KeyError(f"Unknown material '{material}'. Available: {', '.join(BUILTIN_METALS)}")
    return metal


def dielectric(material: Material | str, lambda_nm: float) -> complex:
    """Bulk permittivity of silver or gold at λ (nm). Raises OutOfRangeError."""
    return get_metal(material).eps(lambda_nm)


def dielectric_size_corrected(material: Material | str, lambda_nm: float, diameter_nm: float) -> complex:
    """Size-dependent permittivity for an effective particle diameter D (nm)."""
    return get_metal(material).eps_size_corrected(lambda_nm, diameter_nm)
