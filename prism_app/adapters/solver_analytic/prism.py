r"""
Closed-form dipole model of the primary longitudinal plasmon resonance of a
triangular nanoprism with rounded corners.

Ref.: A. D. Kondorskiy, A. V. Mekshun, "Effect of Geometric Parameters of Metallic
Nanoprisms on the Plasmonic Resonance Wavelength", J. Russ. Laser Res. 44(6),
627–637 (2023).

Lengths are in nm, polarizability in nm³, cross sections in cm².
"""
from __future__ import annotations

from dataclasses import dataclass
from math import pi, sqrt

NM2_TO_CM2 = 1.0e-14

# Power-law regressions over the ratios (L/H, L/R, H/R):
#   q = c1·(L/H)^p1 + c2·(L/R)^p2 + c3·(H/R)^p3 + c0
# Each entry: ((c1, p1), (c2, p2), (c3, p3), c0)
_BETA = ((-0.649487, -1.27802), (1.87718, -0.928178), (0.0784606, -0.619604), 0.617065)
_EPS_C = ((-1.73983, 0.904851), (23.7005, -9.71985), (3.73666, -0.416187), -4.23387)
_A2 = ((1.35181, -0.556507), (1.13818, -0.483608), (-0.287856, -0.468685), -0.0564038)
_A4 = ((-2.58813, -0.447242), (-2.62882, -2.97322), (-0.254773, -0.125501), 0.702526)


@dataclass(frozen=True)
class ShapeCoefficients:
    beta: float  # volume factor, V1 = β·V0
    eps_c: float  # permittivity offset of the "dark" depolarization term
    a2: float  # s² retardation coefficient
    a4: float  # s⁴ retardation coefficient


def _power_fit(coefs: tuple, lh: float, lr: float, hr: float) -> float:
    (c1, p1), (c2, p2), (c3, p3), c0 = coefs
    return c1 * lh**p1 + c2 * lr**p2 + c3 * hr**p3 + c0


def shape_coefficients(L: float, H: float, R: float) -> ShapeCoefficients:
    lh, lr, hr = L / H, L / R, H / R
    return ShapeCoefficients(
        beta=_power_fit(_BETA, lh, lr, hr),
        eps_c=_power_fit(_EPS_C, lh, lr, hr),
        a2=_power_fit(_A2, lh, lr, hr),
        a4=_power_fit(_A4, lh, lr, hr),
    )


def prism_volume(L: float, H: float) -> float:
    """V0 = (√3/4)·L²·H."""
    return 0.25 * sqrt(3.0) * L * L * H


def effective_diameter(L: float, H: float) -> float:
    """Diameter of the sphere with the prism's volume: 2·(3√3·L²H/(16π))^(1/3)."""
    return 2.0 * (3.0 * sqrt(3.0) * L * L * H / (16.0 * pi)) ** (1.0 / 3.0)


def dipole_polarizability(
    lambda_nm: float,
    eps_m: complex,
    eps_h: float,
    L: float,
    H: float,
    R: float,
) -> complex:
    r"""
    Dipole polarizability α (nm³):

        α = (1/4π)·V1 / [ 1/(ε_m/ε_h − 1) − 1/(ε_c − 1) − A_rc ]
        A_rc = a2·s² + i·(4π²/3)·(V1/L³)·s³ + a4·s⁴,   s = √ε_h·L/λ

    The imaginary s³ term is the radiation damping.
    """
    c = shape_coefficients(L, H, R)
    s = sqrt(eps_h) * L / lambda_nm
    v1 = prism_volume(L, H) * c.beta

    a_rc = complex(c.a2 * s**2 + c.a4 * s**4, 4.0 * pi * pi * v1 * s**3 / (3.0 * L**3))
    denom = 1.0 / (complex(eps_m) / eps_h - 1.0) - 1.0 / (c.eps_c - 1.0) - a_rc
    return (1.0 / (4.0 * pi)) * v1 / denom


def host_wavenumber(lambda_nm: float, eps_h: float) -> float:
    """k = 2π·√ε_h/λ (1/nm)."""
    return 2.0 * pi * sqrt(eps_h) / lambda_nm


def scattering_from_alpha(alpha: complex, k: float) -> float:
    return 8.0 * pi * k**4 * abs(alpha) ** 2 * NM2_TO_CM2 / 3.0


def extinction_from_alpha(alpha: complex, k: float) -> float:
    return 4.0 * pi * k * alpha.imag * NM2_TO_CM2


def scattering_cross_section(
    lambda_nm: float, eps_m: complex, eps_h: float, L: float, H: float, R: float
) -> float:
    """Scattering cross section (cm²)."""
    alpha = dipole_polarizability(lambda_nm, eps_m, eps_h, L, H, R)
    return scattering_from_alpha(alpha, host_wavenumber(lambda_nm, eps_h))


def extinction_cross_section(
    lambda_nm: float, eps_m: complex, eps_h: float, L: float, H: float, R: float
) -> float:
    """Extinction cross section (cm²)."""
    alpha = dipole_polarizability(lambda_nm, eps_m, eps_h, L, H, R)
    return extinction_from_alpha(alpha, host_wavenumber(lambda_nm, eps_h))


def cross_sections(
    lambda_nm: float, eps_m: complex, eps_h: float, L: float, H: float, R: float
) -> tuple[complex, float, float]:
    """(α, C_sca, C_ext) from a single polarizability evaluation."""
    alpha = dipole_polarizability(lambda_nm, eps_m, eps_h, L, H, R)
    k = host_wavenumber(lambda_nm, eps_h)
    return alpha, scattering_from_alpha(alpha, k), extinction_from_alpha(alpha, k)
