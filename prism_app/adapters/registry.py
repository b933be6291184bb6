# prism_app/adapters/registry.py
from __future__ import annotations

from typing import List

from prism_app.adapters.materials.builtin import BUILTIN_METALS, TabulatedMetal, get_metal

__all__ = ["list_materials", "get_material", "lambda_bounds_nm"]


def list_materials() -> List[str]:
    return list(BUILTIN_METALS.keys())


def get_material(name: str) -> TabulatedMetal:
    """Return the dielectric model registered under `name` (case-insensitive)."""
    return get_metal(name.strip())


def lambda_bounds_nm(name: str) -> tuple[float, float]:
    """Wavelength interval (nm) where the material's table is defined."""
    return get_material(name).lambda_bounds_nm()
