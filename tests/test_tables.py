from __future__ import annotations

import numpy as np
import pytest

from prism_app.adapters.materials.tables import GOLD, SILVER, SpectralTable


def test_table_sizes_and_bounds() -> None:
    assert len(SILVER) == 49
    assert len(GOLD) == 448
    assert SILVER.bounds_ev == (0.64, 6.60)
    assert GOLD.bounds_ev == pytest.approx((0.0497329, 4.13281))


@pytest.mark.parametrize("table", [SILVER, GOLD], ids=["silver", "gold"])
def test_tables_sorted_and_read_only(table: SpectralTable) -> None:
    assert np.all(np.diff(table.energy_ev) > 0.0)
    with pytest.raises(ValueError):
        table.n[0] = 99.0


def test_rejects_unsorted_or_short_tables() -> None:
    with pytest.raises(ValueError):
        SpectralTable.from_columns("x", (1.0, 3.0, 2.0, 4.0), (1, 1, 1, 1), (0, 0, 0, 0))
    with pytest.raises(ValueError):
        SpectralTable.from_columns("x", (1.0, 2.0, 3.0), (1, 1, 1), (0, 0, 0))
