"""Shared test fixtures for engine and API tests."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.typing import NDArray

HOURS_PER_YEAR = 8760


# ======================================================================
# Wind speed fixtures
# ======================================================================

@pytest.fixture
def weibull_wind() -> NDArray[np.float64]:
    """One year of hourly wind speeds drawn from Weibull(k=2, c=8)."""
    rng = np.random.default_rng(42)
    return (rng.weibull(2.0, size=HOURS_PER_YEAR) * 8.0).astype(np.float64)


@pytest.fixture
def gusty_wind() -> NDArray[np.float64]:
    """Lower-shape (more skewed) site: Weibull(k=1.5, c=6), 2000 samples."""
    rng = np.random.default_rng(7)
    return (rng.weibull(1.5, size=2000) * 6.0).astype(np.float64)


@pytest.fixture
def wind_csv_text(weibull_wind) -> str:
    """Single-column CSV with a header row, rounded to 0.1 m/s like mast data."""
    lines = ["wind_speeds"] + [f"{v:.1f}" for v in weibull_wind]
    return "\n".join(lines) + "\n"
