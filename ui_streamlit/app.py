# --- standard library / typing ----------------------------------------------------------
from __future__ import annotations

from pathlib import Path
from typing import Optional, cast

# --- third-party -----------------------------------------------------------------------
import pandas as pd
import streamlit as st
import xarray as xr
from pydantic import ValidationError

# --- first-party: presets & registry ---------------------------------------------------
from prism_app.adapters.presets_local.store import LocalPresetStore
from prism_app.adapters.registry import lambda_bounds_nm, list_materials
from prism_app.adapters.solver_analytic.engine import AnalyticPrismEngine
from prism_app.domain.errors import OutOfRangeError
from prism_app.domain.models import Material, SolverResult

# --- first-party: exporting and plotting -----------------------------------------------
from prism_app.exporting.io import dataset_table, figure_to_png_bytes, to_csv_bytes
from prism_app.logging_setup import setup_console_logging

# --- first-party: orchestration & configuration ----------------------------------------
from prism_app.orchestration.session import (
    build_sweep_request,
    init_session,
    update_geometry,
    update_material,
    update_medium,
    update_range,
)
from prism_app.plotting_plotly.presenter import PlotPresenterPlotly
from prism_app.reports.methods import methods_markdown
from prism_app.reports.validation import make_record, to_json_bytes
from prism_app.validation.loader import map_columns, read_csv_text
from prism_app.validation.metrics import badge_for_rmse, rmse_on_common_lambda

# --------------------------------------------------------------------------------------
# App bootstrap
# --------------------------------------------------------------------------------------
setup_console_logging()
st.set_page_config(page_title="Nanoprism Plasmonics", layout="wide")
st.title("Triangular nanoprism — analytical plasmon model")

if "session" not in st.session_state:
    st.session_state.session = init_session()

session = st.session_state.session
presenter = PlotPresenterPlotly()
presets = LocalPresetStore(Path("docs/presets"))
engine = AnalyticPrismEngine()

# --------------------------------------------------------------------------------------
# Sidebar — material, geometry, medium, range
# --------------------------------------------------------------------------------------
st.sidebar.header("Model controls")

cfg = session.config
materials = list_materials()
with st.sidebar.expander("Material", expanded=True):
    mat_sel = st.selectbox("Metal", materials, index=materials.index(cfg.material))
    size_corr = st.checkbox("Size-dependent dielectric function", value=cfg.size_correction)
    lo, hi = lambda_bounds_nm(mat_sel)
    st.caption(f"Tabulated range: {lo:.0f}–{hi:.0f} nm")
    if st.button("Apply material", use_container_width=True):
        st.session_state.session = update_material(
            session, cast(Material, mat_sel), size_correction=size_corr
        )
        session = st.session_state.session
        st.success("Material updated.", icon="✅")

with st.sidebar.expander("Geometry", expanded=True):
    g = session.config.geometry
    L = st.number_input("Edge length L (nm)", min_value=1.0, value=float(g.L_nm), step=1.0)
    H = st.number_input("Thickness H (nm)", min_value=0.5, value=float(g.H_nm), step=1.0)
    R = st.number_input("Corner radius R (nm)", min_value=0.1, value=float(g.R_nm), step=0.5)
    if not (L > H > R):
        st.warning("Outside the fitted domain L > H > R; results are extrapolated.")
    if st.button("Apply geometry", use_container_width=True):
        st.session_state.session = update_geometry(session, L_nm=L, H_nm=H, R_nm=R)
        session = st.session_state.session
        st.success("Geometry updated.", icon="✅")

with st.sidebar.expander("Host medium / spectral range", expanded=False):
    eps_h = st.number_input("Host permittivity ε_h", min_value=1.0, value=float(session.config.medium.eps_h), step=0.05)
    sr = session.config.spectral
    wl_lo = st.number_input("λ min (nm)", min_value=1.0, value=float(sr.wl_min_nm), step=10.0)
    wl_hi = st.number_input("λ max (nm)", min_value=1.0, value=float(sr.wl_max_nm), step=10.0)
    wl_step = st.number_input("λ step (nm)", min_value=0.1, value=float(sr.wl_step_nm), step=0.5)
    if st.button("Apply medium & range", use_container_width=True):
        try:
            update_range(session, wl_min_nm=wl_lo, wl_max_nm=wl_hi, wl_step_nm=wl_step)
            st.session_state.session = update_medium(session, eps_h=eps_h)
            session = st.session_state.session
            st.success("Medium and range updated.", icon="✅")
        except ValidationError as e:
            st.error(str(e))

with st.sidebar.expander("Presets", expanded=False):
    name = st.text_input("Preset name", value="my_preset")
    c1, c2, c3 = st.columns(3)
    with c1:
        if st.button("Save", use_container_width=True):
            presets.save(name, session.config)
            st.success(f"Preset '{name}' saved.", icon="💾")
    with c2:
        if st.button("Load", use_container_width=True):
            try:
                st.session_state.session.config = presets.load(name)
                session = st.session_state.session
                st.success(f"Preset '{name}' loaded.", icon="📥")
            except FileNotFoundError as e:
                st.error(str(e))
    with c3:
        if st.button("Delete", use_container_width=True):
            presets.remove(name)
            st.warning(f"Preset '{name}' deleted.", icon="🗑️")
    st.caption(f"Available: {', '.join(presets.list()) or '(none)'}")

# --------------------------------------------------------------------------------------
# Run (out-of-range wavelengths are skipped in the UI rather than aborting)
# --------------------------------------------------------------------------------------
req = build_sweep_request(session)
req = req.model_copy(update={"config": req.config.model_copy(update={"on_out_of_range": "skip"})})
try:
    res: SolverResult = engine.run(req)
except OutOfRangeError as e:  # only reachable if the policy above is changed
    st.error(str(e))
    st.stop()
session.last_result = res
ds: xr.Dataset = cast(xr.Dataset, res.data)

m1, m2, m3 = st.columns(3)
m1.metric("Effective diameter", f"{res.scalars.D_eff_nm:.2f} nm")
m2.metric("Extinction peak", f"{res.scalars.peak_wavelength_nm:.0f} nm")
m3.metric("Skipped λ points", f"{res.scalars.skipped}")
if res.scalars.skipped:
    st.info("Some wavelengths lie outside the tabulated optical constants and were skipped.")

tab1, tab2, tab3 = st.tabs(["Cross sections", "Polarizability", "Validation"])

# ---- Tab 1: Cross sections -----------------------------------------------------------
with tab1:
    fig = presenter.cross_sections_plot(res)
    st.plotly_chart(fig, use_container_width=True)
    c1, c2 = st.columns(2)
    with c1:
        st.download_button(
            "Download CSV",
            data=to_csv_bytes(dataset_table(ds)),
            file_name="prism_spectra.csv",
            mime="text/csv",
        )
    with c2:
        try:
            st.download_button(
                "Download PNG",
                data=figure_to_png_bytes(fig),
                file_name="prism_cross_sections.png",
                mime="image/png",
            )
        except RuntimeError as e:
            st.info(str(e))

# ---- Tab 2: Polarizability -----------------------------------------------------------
with tab2:
    st.plotly_chart(presenter.polarizability_plot(res), use_container_width=True)

# ---- Tab 3: Validation ---------------------------------------------------------------
with tab3:
    st.subheader("Compare with a measured spectrum")
    up = st.file_uploader("Upload CSV (reference)", type=["csv"])
    if up is not None:
        df_raw = read_csv_text(up.getvalue().decode("utf-8", errors="ignore"))
        c1, c2, c3 = st.columns(3)
        with c1:
            lam_col = st.selectbox("Wavelength column", list(df_raw.columns))
        with c2:
            val_col = st.selectbox("Value column", list(df_raw.columns))
        with c3:
            unit = st.selectbox("Wavelength unit", ["nm", "um"])

        df_ref: Optional[pd.DataFrame] = None
        try:
            df_ref = map_columns(df_raw, lam_col=lam_col, value_col=val_col, lam_unit=unit)
        except KeyError as e:
            st.error(str(e))

        if df_ref is not None:
            quantity = st.selectbox("Model quantity", ["C_ext", "C_sca", "C_abs"])
            c6, c7 = st.columns(2)
            with c6:
                pass_th = float(st.number_input("PASS ≤", value=0.05, step=0.01, format="%.3f"))
            with c7:
                warn_th = float(st.number_input("WARN ≤", value=0.15, step=0.01, format="%.3f"))

            st.plotly_chart(
                presenter.spectral_overlay(res, df_ref, ref_name=up.name, var=quantity),
                use_container_width=True,
            )
            try:
                rmse = rmse_on_common_lambda(ds, df_ref, var=quantity)
            except ValueError as e:
                st.error(str(e))
            else:
                badge = badge_for_rmse(rmse, pass_th=pass_th, warn_th=warn_th)
                st.metric("RMSE (peak-normalized)", f"{rmse:.4f}")
                if badge == "PASS":
                    st.success("PASS: within threshold")
                elif badge == "WARN":
                    st.warning("WARN: borderline")
                else:
                    st.error("FAIL: exceeds threshold")

                rec = make_record(
                    up.name,
                    quantity,
                    session.config.material,
                    res.scalars.peak_wavelength_nm,
                    rmse,
                    pass_th=pass_th,
                    warn_th=warn_th,
                )
                st.download_button(
                    "Download validation.json", data=to_json_bytes(rec), file_name="validation.json"
                )
    else:
        st.info("Upload a CSV to run validation.")

    st.download_button(
        "Download methods.md",
        data=methods_markdown(
            session.config, peak_wavelength_nm=res.scalars.peak_wavelength_nm
        ).encode("utf-8"),
        file_name="methods.md",
        mime="text/markdown",
    )
