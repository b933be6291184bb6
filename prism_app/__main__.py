"""
CLI driver: sweep the analytical prism model over wavelength and write one
"<wavelength> <value>" file per quantity.

Usage:
    python -m prism_app --material silver --edge 50 --thickness 20 --radius 2
    python -m prism_app --material gold --eps-host 1.77 --wl-min 400 --wl-max 1200 -o out/

The interactive UI runs with:  streamlit run ui_streamlit/app.py
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from prism_app.adapters.presets_local.store import LocalPresetStore
from prism_app.adapters.registry import list_materials
from prism_app.adapters.solver_analytic.engine import AnalyticPrismEngine
from prism_app.domain.errors import OutOfRangeError
from prism_app.domain.models import ModelConfig
from prism_app.exporting.io import write_dat_files
from prism_app.logging_setup import setup_console_logging
from prism_app.orchestration.session import default_config

logger = logging.getLogger("prism_app.cli")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="prism_app",
        description="Plasmonic response of a rounded-corner triangular nanoprism (analytical model).",
    )
    p.add_argument("--preset", help="Load the configuration from a saved preset")
    p.add_argument("--presets-dir", type=Path, default=None, help="Preset directory (default ./presets)")
    p.add_argument("--material", choices=list_materials())
    p.add_argument("--edge", type=float, help="Edge length L (nm)")
    p.add_argument("--thickness", type=float, help="Thickness H (nm)")
    p.add_argument("--radius", type=float, help="Corner radius R (nm)")
    p.add_argument("--eps-host", type=float, help="Host permittivity")
    p.add_argument("--wl-min", type=float, help="Minimal wavelength (nm)")
    p.add_argument("--wl-max", type=float, help="Maximal wavelength (nm)")
    p.add_argument("--wl-step", type=float, help="Wavelength step (nm)")
    p.add_argument("--no-size-correction", action="store_true", help="Use the bulk dielectric function")
    p.add_argument("--on-out-of-range", choices=["raise", "skip"], help="Policy for λ outside the table")
    p.add_argument("-o", "--output-dir", type=Path, default=Path("."), help="Directory for .dat files")
    p.add_argument("--prefix", default="analytic_model", help="Output file name prefix")
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def config_from_args(args: argparse.Namespace) -> ModelConfig:
    """Start from a preset (or the default config) and apply command-line overrides."""
    if args.preset:
        cfg = LocalPresetStore(args.presets_dir).load(args.preset)
    else:
        cfg = default_config()
    data = cfg.model_dump()

    geometry = {"L_nm": args.edge, "H_nm": args.thickness, "R_nm": args.radius}
    data["geometry"].update({k: v for k, v in geometry.items() if v is not None})
    spectral = {"wl_min_nm": args.wl_min, "wl_max_nm": args.wl_max, "wl_step_nm": args.wl_step}
    data["spectral"].update({k: v for k, v in spectral.items() if v is not None})
    if args.eps_host is not None:
        data["medium"]["eps_h"] = args.eps_host
    if args.material is not None:
        data["material"] = args.material
    if args.no_size_correction:
        data["size_correction"] = False
    if args.on_out_of_range is not None:
        data["on_out_of_range"] = args.on_out_of_range
    return ModelConfig.model_validate(data)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_console_logging(args.log_level)

    try:
        cfg = config_from_args(args)
    except (ValidationError, FileNotFoundError) as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    try:
        result = AnalyticPrismEngine().run({"config": cfg})
    except OutOfRangeError as e:
        logger.error("%s", e)
        return 1

    sys.stdout.write(
        f"Effective size to calculate size-dependent dielectric function = {result.scalars.D_eff_nm:g} nm.\n"
    )
    for path in write_dat_files(result.data, args.output_dir, prefix=args.prefix):  # type: ignore[arg-type]
        logger.info("Wrote %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
