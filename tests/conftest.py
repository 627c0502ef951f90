"""
Shared fixtures for the coldchain_growth test suite.

Provides small hand-computable readings, parameter factories and a
simulated multi-organism catalog.

Example usage:
    def test_growth(constant_readings, make_param):
        ...
"""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from coldchain_growth.data.models import (
    LogBasis,
    NormalizedModelParameter,
    RawModelParameter,
    ScaleForm,
    TimeBasis,
)


@pytest.fixture
def make_param():
    """Factory for normalized parameters with sensible defaults."""

    def _make(
        source_label="Model A",
        coefficient_b1=0.1,
        threshold_t0=5.0,
        organism="Listeria",
    ):
        return NormalizedModelParameter(
            organism=organism,
            source_label=source_label,
            coefficient_b1=coefficient_b1,
            threshold_t0=threshold_t0,
        )

    return _make


@pytest.fixture
def constant_readings():
    """Two probes on one unit, three readings each at a constant 10 C."""
    return pd.DataFrame(
        {
            "unit_id": [1] * 6,
            "probe_id": [1, 1, 1, 2, 2, 2],
            "elapsed_minutes": [0, 5, 10, 0, 5, 10],
            "temperature_c": [10.0] * 6,
        }
    )


@pytest.fixture
def raw_catalog():
    """Three organisms, three published models each, mixed unit encodings."""
    records = []
    specs = {
        "Salmonella": [(0.023, 5.2), (0.026, 6.1), (0.019, 4.5)],
        "E. coli": [(0.021, 6.0), (0.030, 7.2), (0.024, 5.5)],
        "Listeria": [(0.018, -1.2), (0.022, 0.5), (0.016, -2.0)],
    }
    for organism, models in specs.items():
        for i, (b, t0) in enumerate(models):
            records.append(
                RawModelParameter(
                    organism=organism,
                    source_label=f"Study {i + 1}",
                    coefficient_b=b,
                    threshold_t0=t0,
                    time_basis=TimeBasis.HOURLY,
                    scale_form=ScaleForm.SQUARE_ROOTED,
                    log_basis=LogBasis.COMMON,
                )
            )
    return records


@pytest.fixture
def ordered_growth():
    """
    Growth table where every probe ranks the models A < B < C.

    Six blocks; all pairwise differences are distinct and positive.
    """
    a = np.arange(1.0, 7.0)
    b = a + np.arange(1, 7) * 0.1
    c = b + np.arange(1, 7) * 0.01
    rows = []
    for label, values in (("A", a), ("B", b), ("C", c)):
        for probe, v in enumerate(values, start=1):
            rows.append(
                {
                    "organism": "Listeria",
                    "source_label": label,
                    "unit_id": 1,
                    "probe_id": probe,
                    "cumulative_growth": float(v),
                }
            )
    return pd.DataFrame(rows)
