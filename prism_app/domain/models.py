#"""
#Domain models (v1.0.0)
#
#Pydantic v2 models define validated configuration and result containers.
#Sweep results are carried as xarray Datasets with a `lambda_nm` coordinate.
#"""
from __future__ import annotations

from math import sqrt
from typing import Literal

import numpy as np
from pydantic import BaseModel, Field, PositiveFloat, model_validator

# --- Basic enums/types ---
Material = Literal["silver", "gold"]
OutOfRangePolicy = Literal["raise", "skip"]


class PrismGeometry(BaseModel):
    """Equilateral-triangle prism with rounded corners (all lengths in nm)."""

    L_nm: float = Field(..., gt=0.0, description="Edge length (nm)")
    H_nm: float = Field(..., gt=0.0, description="Thickness (nm)")
    R_nm: float = Field(..., gt=0.0, description="Corner radius of the triangle base (nm)")

    def ordered(self) -> bool:
        """True inside the fitted validity domain L > H > R."""
        return self.L_nm > self.H_nm > self.R_nm


class HostMedium(BaseModel):
    eps_h: float = Field(1.0, gt=0.0, description="Host permittivity")

    @property
    def n_h(self) -> float:
        return sqrt(self.eps_h)


class SpectralRange(BaseModel):
    wl_min_nm: float = Field(300.0, gt=0.0)
    wl_max_nm: float = Field(800.0, gt=0.0)
    wl_step_nm: float = Field(2.0, gt=0.0)

    @model_validator(mode="after")
    def _check_order(self) -> "SpectralRange":
        if self.wl_max_nm < self.wl_min_nm:
            raise ValueError(
                f"wl_max_nm ({self.wl_max_nm:g}) must not be below wl_min_nm ({self.wl_min_nm:g})"
            )
        return self

    def grid(self) -> np.ndarray:
        """wl_min + i*step for i = 0 .. int((max - min)/step)."""
        n = int((self.wl_max_nm - self.wl_min_nm) / self.wl_step_nm) + 1
        return self.wl_min_nm + self.wl_step_nm * np.arange(n, dtype=float)


class ModelConfig(BaseModel):
    material: Material = "silver"
    geometry: PrismGeometry
    medium: HostMedium = HostMedium()
    spectral: SpectralRange = SpectralRange()
    size_correction: bool = True
    on_out_of_range: OutOfRangePolicy = "raise"
    version: str = "1.0.0"


# --- Sweep and results ---
class SweepRequest(BaseModel):
    config: ModelConfig
    lambda_grid_nm: list[PositiveFloat] | None = None  # None → config.spectral.grid()


class SolverScalars(BaseModel):
    D_eff_nm: float
    peak_wavelength_nm: float
    peak_C_ext: float
    skipped: int = 0
    notes: str = ""


# SolverResult carries an xarray.Dataset in runtime, not validated here to avoid heavy import.
class SolverResult(BaseModel):
    data: object  # xarray.Dataset expected at runtime
    scalars: SolverScalars
    schema_version: str = "1.0.0"
