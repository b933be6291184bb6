from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Any, Dict, Iterable

import numpy as np
import pandas as pd
import xarray as xr

logger = logging.getLogger(__name__)

# Output file suffix → dataset variable
DAT_FILES: Dict[str, str] = {
    "polarizability_re": "alpha_re",
    "polarizability_im": "alpha_im",
    "scattering_cs": "C_sca",
    "extinction_cs": "C_ext",
}


def dataset_table(
    ds: xr.Dataset,
    vars: Iterable[str] = ("alpha_re", "alpha_im", "C_sca", "C_ext", "C_abs"),
) -> pd.DataFrame:
    """Return a wide table with one row per wavelength (`lambda_nm` + selected vars)."""
    df = ds[list(vars)].to_dataframe().reset_index()
    return df


def write_dat_files(ds: xr.Dataset, out_dir: Path | str, prefix: str = "analytic_model") -> list[Path]:
    """Write one `<prefix>-<quantity>.dat` file per quantity.

    Each line is "<wavelength> <value>"; skipped (NaN) wavelengths are omitted.
    """
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    lam = ds["lambda_nm"].values
    written: list[Path] = []
    for suffix, var in DAT_FILES.items():
        path = out / f"{prefix}-{suffix}.dat"
        values = ds[var].values
        with path.open("w", encoding="utf-8") as f:
            for wl, v in zip(lam, values):
                if np.isnan(v):
                    continue
                f.write(f"{wl:g} {v:.6g}\n")
        written.append(path)
        logger.debug("Wrote %s", path)
    return written


def read_dat_file(path: Path | str, value_name: str = "value") -> pd.DataFrame:
    """Read a two-column "<wavelength> <value>" file."""
    return pd.read_csv(
        Path(path), sep=r"\s+", header=None, names=["lambda_nm", value_name], dtype=float
    )


def figure_to_png_bytes(fig: Any) -> bytes:
    """Export a Plotly figure to PNG bytes via Kaleido.
    Raises RuntimeError with a helpful message when Kaleido is not available.
    """
    try:
        return fig.to_image(format="png", engine="kaleido")
    except Exception as e:  # noqa: BLE001
        raise RuntimeError(
            "Static image export requires the optional 'export' extra: pip install -e '.[export]'"
        ) from e


def to_csv_bytes(df: pd.DataFrame) -> bytes:
    buf = io.StringIO()
    df.to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")
