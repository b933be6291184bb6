from __future__ import annotations

from typing import Any

import pytest

from prism_app.adapters.solver_analytic.engine import AnalyticPrismEngine
from prism_app.domain.models import ModelConfig, SolverResult, SweepRequest
from prism_app.orchestration.session import default_config
from prism_app.plotting_plotly.presenter import PlotPresenterPlotly


@pytest.fixture(scope="session")
def cfg() -> ModelConfig:
    """Reference configuration: silver, L=50, H=20, R=2 nm, vacuum, 300..800 nm."""
    return default_config()


@pytest.fixture(scope="session")
def engine() -> AnalyticPrismEngine:
    return AnalyticPrismEngine()


@pytest.fixture(scope="session")
def default_result(cfg: ModelConfig, engine: AnalyticPrismEngine) -> SolverResult:
    """Full default sweep (251 wavelengths)."""
    return engine.run(SweepRequest(config=cfg))


@pytest.fixture(scope="session")
def presenter() -> PlotPresenterPlotly:
    """Plotly presenter under test."""
    return PlotPresenterPlotly()


@pytest.fixture(scope="session")
def xs_fig(default_result: SolverResult, presenter: PlotPresenterPlotly) -> Any:
    return presenter.cross_sections_plot(default_result)
