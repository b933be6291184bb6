from __future__ import annotations

from pathlib import Path

import pytest

from prism_app.__main__ import build_parser, config_from_args, main
from prism_app.adapters.presets_local.store import LocalPresetStore
from prism_app.orchestration.session import default_config


def test_reference_run_writes_files(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-o", str(tmp_path), "--wl-step", "10"]) == 0
    out = capsys.readouterr().out
    assert "Effective size to calculate size-dependent dielectric function = 34.5" in out
    assert len(list(tmp_path.glob("analytic_model-*.dat"))) == 4
    lines = (tmp_path / "analytic_model-extinction_cs.dat").read_text().splitlines()
    assert len(lines) == 51


def test_overrides_apply() -> None:
    args = build_parser().parse_args(
        ["--material", "gold", "--edge", "80", "--eps-host", "1.77", "--no-size-correction"]
    )
    cfg = config_from_args(args)
    assert cfg.material == "gold"
    assert cfg.geometry.L_nm == 80.0
    assert cfg.geometry.H_nm == 20.0
    assert cfg.medium.eps_h == 1.77
    assert cfg.size_correction is False


def test_preset_is_loaded(tmp_path: Path) -> None:
    LocalPresetStore(tmp_path).save("thin", default_config().model_copy(update={"material": "gold"}))
    args = build_parser().parse_args(["--preset", "thin", "--presets-dir", str(tmp_path)])
    assert config_from_args(args).material == "gold"


def test_out_of_range_exit_code(tmp_path: Path) -> None:
    argv = ["--material", "gold", "--wl-min", "250", "--wl-max", "400", "-o", str(tmp_path)]
    assert main(argv) == 1
    assert main(argv + ["--on-out-of-range", "skip"]) == 0


def test_invalid_geometry_exit_code(tmp_path: Path) -> None:
    assert main(["--thickness", "-1", "-o", str(tmp_path)]) == 2


def test_inverted_range_exit_code(tmp_path: Path) -> None:
    assert main(["--wl-min", "800", "--wl-max", "300", "-o", str(tmp_path)]) == 2
