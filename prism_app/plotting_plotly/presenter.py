#"""
#Plotly-based presenter implementing PlotPresenter.
#"""
from __future__ import annotations
import pandas as pd
import plotly.graph_objects as go
import xarray as xr
from prism_app.domain.ports import PlotPresenter
from prism_app.domain.models import SolverResult


class PlotPresenterPlotly(PlotPresenter):
    def _title(self, ds: xr.Dataset) -> str:
        a = ds.attrs
        return (
            f"{str(a.get('material', '')).capitalize()} prism "
            f"L={a.get('L_nm', 0):g}, H={a.get('H_nm', 0):g}, R={a.get('R_nm', 0):g} nm"
        )

    def cross_sections_plot(self, result: SolverResult) -> go.Figure:
        ds: xr.Dataset = result.data  # type: ignore
        lam = ds.coords["lambda_nm"].values
        fig = go.Figure()
        for var, label in (("C_ext", "Extinction"), ("C_sca", "Scattering"), ("C_abs", "Absorption")):
            fig.add_trace(go.Scatter(x=lam, y=ds[var].values, mode="lines", name=label))
        fig.update_layout(
            xaxis_title="Wavelength λ (nm)",
            yaxis_title="Cross section (cm²)",
            template="plotly_white",
            title=f"Cross sections — {self._title(ds)}",
        )
        return fig

    def polarizability_plot(self, result: SolverResult) -> go.Figure:
        ds: xr.Dataset = result.data  # type: ignore
        lam = ds.coords["lambda_nm"].values
        fig = go.Figure()
        fig.add_trace(go.Scatter(x=lam, y=ds["alpha_re"].values, mode="lines", name="Re α"))
        fig.add_trace(go.Scatter(x=lam, y=ds["alpha_im"].values, mode="lines", name="Im α"))
        fig.update_layout(
            xaxis_title="Wavelength λ (nm)",
            yaxis_title="Polarizability α (nm³)",
            template="plotly_white",
            title=f"Dipole polarizability — {self._title(ds)}",
        )
        return fig

    def spectral_overlay(
        self, result: SolverResult, ref: pd.DataFrame, ref_name: str = "reference", var: str = "C_ext"
    ) -> go.Figure:
        """Model curve and a reference spectrum, both scaled to unit peak."""
        ds: xr.Dataset = result.data  # type: ignore
        model = ds[var]
        fig = go.Figure()
        fig.add_trace(
            go.Scatter(
                x=model.coords["lambda_nm"].values,
                y=(model / model.max(skipna=True)).values,
                mode="lines",
                name=f"{var} (model)",
            )
        )
        y_ref = ref["value"].to_numpy(dtype=float)
        fig.add_trace(
            go.Scatter(
                x=ref["lambda_nm"].to_numpy(dtype=float),
                y=y_ref / y_ref.max(),
                mode="markers",
                name=ref_name,
            )
        )
        fig.update_layout(
            xaxis_title="Wavelength λ (nm)",
            yaxis_title="Normalized spectrum",
            template="plotly_white",
            title="Model vs. reference",
        )
        return fig
