from __future__ import annotations

from io import StringIO

import pandas as pd


def read_csv_text(text: str) -> pd.DataFrame:
    """Read CSV text into a pandas DataFrame with minimal assumptions.

    The caller provides column name mapping with `map_columns`.
    """
    return pd.read_csv(StringIO(text))


def map_columns(df: pd.DataFrame, *, lam_col: str, value_col: str, lam_unit: str = "nm") -> pd.DataFrame:
    """Return a normalized DataFrame with columns: `lambda_nm`, `value`.

    Drops NA rows, converts μm to nm when `lam_unit="um"`, sorts by `lambda_nm`.
    """
    if lam_col not in df.columns or value_col not in df.columns:
        raise KeyError("Provided column names not present in CSV")
    if lam_unit not in ("nm", "um"):
        raise ValueError("lam_unit must be 'nm' or 'um'")
    out = df[[lam_col, value_col]].rename(columns={lam_col: "lambda_nm", value_col: "value"}).copy()
    out = out.dropna(subset=["lambda_nm", "value"]).reset_index(drop=True)
    out["lambda_nm"] = out["lambda_nm"].astype(float)
    if lam_unit == "um":
        out["lambda_nm"] = out["lambda_nm"] * 1.0e3
    out["value"] = out["value"].astype(float)
    out = out.sort_values("lambda_nm").reset_index(drop=True)
    return out
