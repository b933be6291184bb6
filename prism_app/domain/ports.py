# """
# Ports (interfaces) for adapters. The UI and orchestration depend ONLY on these.
# """
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .models import SolverResult, SweepRequest


class DielectricModel(ABC):
    @abstractmethod
    def eps(self, lambda_nm: float) -> complex:
        """Bulk complex permittivity at a vacuum wavelength (nm)."""

    @abstractmethod
    def eps_size_corrected(self, lambda_nm: float, diameter_nm: float) -> complex:
        """Permittivity with finite-size electron damping for a particle of diameter D (nm)."""


class SolverEngine(ABC):
    @abstractmethod
    def run(self, req: SweepRequest) -> SolverResult:
        """Execute a wavelength sweep and return a dataset on `lambda_nm`."""


class PlotPresenter(ABC):
    @abstractmethod
    def cross_sections_plot(self, result: SolverResult) -> Any:
        """Figure: C_ext(λ), C_sca(λ) and C_abs(λ) in cm²."""

    @abstractmethod
    def polarizability_plot(self, result: SolverResult) -> Any:
        """Figure: Re α(λ) and Im α(λ) in nm³."""
