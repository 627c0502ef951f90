"""
Tests for per-sample growth increments and cumulative growth.

Example usage:
    pytest tests/test_growth.py -v
"""

import warnings

import numpy as np
import pandas as pd
import pytest

from coldchain_growth.errors import MissingReadingWarning
from coldchain_growth.processing.growth import (
    compute_cumulative_growth,
    compute_growth_increments,
    count_skipped_readings,
    growth_increments,
)


class TestGrowthIncrements:
    """Ratkowsky increments per reading."""

    def test_reference_increment(self):
        """(10 - 5)^2 * 0.1^2 * 5/60 = 0.0208333..."""
        inc = growth_increments([10.0], 0.1, 5.0, sampling_interval_minutes=5)
        assert inc[0] == pytest.approx(25 * 0.01 * 5 / 60)
        assert inc[0] == pytest.approx(0.0208333, abs=1e-7)

    def test_below_threshold_is_exactly_zero(self):
        """Any temperature at or below T0 contributes exactly 0."""
        inc = growth_increments([5.0, 4.9, -40.0, -1e6], 0.3, 5.0)
        assert np.all(inc == 0.0)

    def test_missing_temperature_is_nan(self):
        inc = growth_increments([np.nan, 6.0], 0.1, 5.0)
        assert np.isnan(inc[0])
        assert inc[1] > 0

    def test_interval_scales_linearly(self):
        a = growth_increments([12.0], 0.05, 2.0, sampling_interval_minutes=5)
        b = growth_increments([12.0], 0.05, 2.0, sampling_interval_minutes=10)
        assert b[0] == pytest.approx(2 * a[0])

    @pytest.mark.parametrize("interval", [0, -5, float("nan")])
    def test_invalid_interval(self, interval):
        with pytest.raises(ValueError):
            growth_increments([10.0], 0.1, 5.0, sampling_interval_minutes=interval)


class TestCumulativeGrowth:
    """Integration over one probe series."""

    def test_constant_temperature_scenario(self, make_param):
        """Three readings at 10 C, T0=5, b1=0.1 -> 0.0625 log CFU."""
        g = compute_cumulative_growth([10.0, 10.0, 10.0], make_param())
        assert g == pytest.approx(0.0625)

    def test_all_below_threshold(self, make_param):
        g = compute_cumulative_growth([1.0, 2.0, 5.0, -3.0], make_param())
        assert g == 0.0

    def test_non_negative_and_monotone(self, make_param):
        """Partial sums never decrease as readings are added."""
        rng = np.random.default_rng(0)
        temps = rng.normal(6.0, 4.0, size=200)
        param = make_param(coefficient_b1=0.04, threshold_t0=3.0)
        partial = [compute_cumulative_growth(temps[:i], param) for i in range(len(temps) + 1)]
        assert partial[0] == 0.0
        assert all(g >= 0 for g in partial)
        assert all(b >= a for a, b in zip(partial, partial[1:]))

    def test_additivity_over_split(self, make_param):
        """Growth over a series equals the sum over two contiguous halves."""
        rng = np.random.default_rng(3)
        temps = rng.uniform(-2.0, 15.0, size=97)
        param = make_param(coefficient_b1=0.027, threshold_t0=4.1)
        whole = compute_cumulative_growth(temps, param)
        for cut in (0, 1, 40, 96, 97):
            parts = compute_cumulative_growth(temps[:cut], param) + compute_cumulative_growth(
                temps[cut:], param
            )
            assert parts == pytest.approx(whole, rel=1e-12, abs=1e-15)

    def test_missing_readings_excluded(self, make_param):
        """NaN readings are skipped and reported with a warning."""
        with pytest.warns(MissingReadingWarning, match="Excluded 1"):
            g = compute_cumulative_growth([10.0, np.nan, 10.0], make_param())
        assert g == pytest.approx(2 * 0.0625 / 3)


class TestGrowthIncrementTable:
    """Vectorised (reading x model) evaluation."""

    def test_cross_product(self, constant_readings, make_param):
        params = [make_param("A"), make_param("B", coefficient_b1=0.2)]
        inc = compute_growth_increments(constant_readings, params)
        assert len(inc) == len(constant_readings) * 2
        assert set(inc["model_index"]) == {0, 1}
        by_model = inc.groupby("source_label")["growth_increment"].sum()
        assert by_model["B"] == pytest.approx(4 * by_model["A"])

    def test_missing_reading_kept_as_nan(self, constant_readings, make_param):
        readings = constant_readings.copy()
        readings.loc[0, "temperature_c"] = np.nan
        with pytest.warns(MissingReadingWarning):
            inc = compute_growth_increments(readings, [make_param()])
        assert inc["growth_increment"].isna().sum() == 1

    def test_no_models(self, constant_readings):
        inc = compute_growth_increments(constant_readings, [])
        assert inc.empty
        assert "growth_increment" in inc.columns

    def test_readings_sorted_before_evaluation(self, make_param):
        readings = pd.DataFrame(
            {
                "unit_id": [2, 1],
                "probe_id": [1, 1],
                "elapsed_minutes": [0, 0],
                "temperature_c": [7.0, 9.0],
            }
        )
        inc = compute_growth_increments(readings, [make_param()])
        assert inc["unit_id"].tolist() == [1, 2]

    def test_skipped_timestamps_warned(self, make_param):
        """A gap in elapsed time is reported, not credited as growth."""
        readings = pd.DataFrame(
            {
                "unit_id": [1, 1, 1],
                "probe_id": [1, 1, 1],
                "elapsed_minutes": [0, 5, 20],
                "temperature_c": [10.0, 10.0, 10.0],
            }
        )
        with pytest.warns(MissingReadingWarning, match="2 expected readings absent"):
            inc = compute_growth_increments(readings, [make_param()])
        assert inc["growth_increment"].sum() == pytest.approx(0.0625)

    def test_regular_grid_not_warned(self, constant_readings, make_param):
        with warnings.catch_warnings():
            warnings.simplefilter("error", MissingReadingWarning)
            compute_growth_increments(constant_readings, [make_param()])


class TestSkippedReadings:
    """Per-probe count of grid slots without a reading."""

    def test_counts_per_probe(self):
        readings = pd.DataFrame(
            {
                "unit_id": [1, 1, 1, 1, 1],
                "probe_id": [1, 1, 1, 2, 2],
                "elapsed_minutes": [0, 15, 20, 0, 5],
                "temperature_c": [4.0] * 5,
            }
        )
        skipped = count_skipped_readings(readings)
        assert skipped.to_dict() == {(1, 1): 2}

    def test_coarser_interval(self):
        readings = pd.DataFrame(
            {
                "unit_id": [1, 1, 1],
                "probe_id": [1, 1, 1],
                "elapsed_minutes": [0, 10, 30],
                "temperature_c": [4.0] * 3,
            }
        )
        skipped = count_skipped_readings(readings, sampling_interval_minutes=10)
        assert skipped.sum() == 1

    def test_empty_readings(self):
        readings = pd.DataFrame(
            columns=["unit_id", "probe_id", "elapsed_minutes", "temperature_c"]
        )
        assert count_skipped_readings(readings).empty
