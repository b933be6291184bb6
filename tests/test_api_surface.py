import importlib

import pytest


def test_domain_public_classes_exist() -> None:
    m = importlib.import_module("prism_app.domain.models")
    for name in (
        "ModelConfig",
        "PrismGeometry",
        "HostMedium",
        "SpectralRange",
        "SweepRequest",
        "SolverResult",
    ):
        assert hasattr(m, name), f"Missing domain symbol: {name}"


def test_core_functions_exist() -> None:
    builtin = importlib.import_module("prism_app.adapters.materials.builtin")
    prism = importlib.import_module("prism_app.adapters.solver_analytic.prism")
    interp = importlib.import_module("prism_app.adapters.materials.interpolation")
    assert callable(interp.interpolate)
    for name in ("dielectric", "dielectric_size_corrected"):
        assert callable(getattr(builtin, name))
    for name in (
        "effective_diameter",
        "dipole_polarizability",
        "scattering_cross_section",
        "extinction_cross_section",
    ):
        assert callable(getattr(prism, name))


def test_engine_implements_port() -> None:
    ports = importlib.import_module("prism_app.domain.ports")
    eng_mod = importlib.import_module("prism_app.adapters.solver_analytic.engine")
    assert issubclass(eng_mod.AnalyticPrismEngine, ports.SolverEngine)
    builtin = importlib.import_module("prism_app.adapters.materials.builtin")
    assert issubclass(builtin.TabulatedMetal, ports.DielectricModel)


def test_presenter_module_is_importable() -> None:
    pytest.importorskip("prism_app.plotting_plotly.presenter")
