from __future__ import annotations

import numpy as np
import pytest

from prism_app.adapters.materials.interpolation import interpolate
from prism_app.adapters.materials.tables import GOLD, SILVER


@pytest.mark.parametrize("table", [SILVER, GOLD], ids=["silver", "gold"])
def test_reproduces_table_nodes(table) -> None:
    for x, yn, yk in zip(table.energy_ev, table.n, table.k):
        assert interpolate(table.energy_ev, table.n, x) == pytest.approx(yn, rel=1e-10, abs=1e-12)
        assert interpolate(table.energy_ev, table.k, x) == pytest.approx(yk, rel=1e-10, abs=1e-12)


def test_cubic_is_exact_for_cubic_polynomial() -> None:
    x = np.linspace(0.0, 3.0, 9)
    y = 2.0 * x**3 - x**2 + 0.5 * x - 4.0
    for xv in (0.1, 1.37, 2.2, 2.99, 3.0):
        expected = 2.0 * xv**3 - xv**2 + 0.5 * xv - 4.0
        assert interpolate(x, y, xv) == pytest.approx(expected, rel=1e-12, abs=1e-12)


def test_continuous_across_window_boundaries() -> None:
    # Window changes exactly at every interior node
    e = SILVER.energy_ev
    h = 1e-9
    for node in e[2:-2]:
        lo = interpolate(e, SILVER.k, node - h)
        hi = interpolate(e, SILVER.k, node + h)
        assert abs(hi - lo) < 1e-5


def test_edges_reuse_interior_window() -> None:
    # A quadratic is reproduced exactly, so clamped windows at both ends stay exact
    x = np.arange(6, dtype=float)
    y = x**2
    assert interpolate(x, y, 0.25) == pytest.approx(0.0625)
    assert interpolate(x, y, 4.75) == pytest.approx(4.75**2)
    assert interpolate(x, y, 5.0) == pytest.approx(25.0)


def test_requires_four_points() -> None:
    with pytest.raises(ValueError):
        interpolate(np.array([0.0, 1.0, 2.0]), np.array([0.0, 1.0, 4.0]), 1.5)
