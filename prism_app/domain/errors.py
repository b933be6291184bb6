from __future__ import annotations


class OutOfRangeError(ValueError):
    """Photon energy lies outside the tabulated optical constants of a material."""

    def __init__(
        self,
        material: str,
        energy_ev: float,
        bounds_ev: tuple[float, float],
        wavelength_nm: float | None = None,
    ) -> None:
        self.material = material
        self.energy_ev = float(energy_ev)
        self.bounds_ev = (float(bounds_ev[0]), float(bounds_ev[1]))
        self.wavelength_nm = None if wavelength_nm is None else float(wavelength_nm)
        where = f" (λ={self.wavelength_nm:g} nm)" if self.wavelength_nm is not None else ""
        super().__init__(
            f"Argument of dielectric function of {material} is out of range: "
            f"E={self.energy_ev:g} eV{where} not in "
            f"[{self.bounds_ev[0]:g}, {self.bounds_ev[1]:g}] eV"
        )
