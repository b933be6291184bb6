from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List

from pydantic import BaseModel

from prism_app.domain.models import ModelConfig

logger = logging.getLogger(__name__)

_NON_SLUG = re.compile(r"[^a-z0-9_]+")


class PresetFile(BaseModel):
    """On-disk envelope: the display name and config, tagged with the config schema version."""

    schema_version: str
    name: str
    config: ModelConfig


def preset_slug(name: str) -> str:
    """'Gold prism #1' -> 'gold-prism-1'."""
    return _NON_SLUG.sub("-", name.strip().lower()).strip("-") or "preset"


class LocalPresetStore:
    """Named `ModelConfig` presets kept as ``<base_dir>/<slug>.json``."""

    def __init__(self, base_dir: Path | None = None) -> None:
        self.base_dir = Path(base_dir or Path.cwd() / "presets").resolve()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def list(self) -> List[str]:
        return sorted(p.stem for p in self.base_dir.glob("*.json"))

    def path_for(self, name: str) -> Path:
        return self.base_dir / f"{preset_slug(name)}.json"

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def save(self, name: str, cfg: ModelConfig) -> Path:
        record = PresetFile(schema_version=cfg.version, name=name, config=cfg)
        path = self.path_for(name)
        path.write_text(record.model_dump_json(indent=2), encoding="utf-8")
        logger.info("Saved preset '%s' to %s", name, path)
        return path

    def load(self, name: str) -> ModelConfig:
        if not self.exists(name):
            raise FileNotFoundError(f"No preset '{name}' in {self.base_dir}")
        record = PresetFile.model_validate_json(self.path_for(name).read_text(encoding="utf-8"))
        if record.schema_version != record.config.version:
            logger.warning(
                "Preset '%s' was written with schema %s, config reports %s",
                name,
                record.schema_version,
                record.config.version,
            )
        return record.config

    def remove(self, name: str) -> None:
        self.path_for(name).unlink(missing_ok=True)
