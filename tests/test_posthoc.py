"""
Tests for pairwise signed-rank tests, Bonferroni correction and star labels.

Example usage:
    pytest tests/test_posthoc.py -v
"""

import numpy as np
import pandas as pd
import pytest

from coldchain_growth.assessment.posthoc import (
    PAIRWISE_COLS,
    bonferroni,
    pairwise_results_to_frame,
    pairwise_signed_rank_tests,
    signed_rank_test,
    significance_symbol,
)


class TestSignificanceSymbol:
    """Adjusted p-value -> star label."""

    @pytest.mark.parametrize(
        "p,symbol",
        [
            (1.0, "ns"),
            (0.05, "ns"),
            (0.0499, "*"),
            (0.01, "*"),
            (0.0099, "**"),
            (0.001, "**"),
            (0.00099, "***"),
            (0.0001, "***"),
            (0.00009, "****"),
            (0.0, "****"),
            (float("nan"), "ns"),
        ],
    )
    def test_thresholds(self, p, symbol):
        assert significance_symbol(p) == symbol


class TestBonferroni:
    """min(1, p * m) adjustment."""

    def test_adjustment(self):
        adj = bonferroni([0.01, 0.2, 0.5])
        np.testing.assert_allclose(adj, [0.03, 0.6, 1.0])

    def test_never_below_raw(self):
        rng = np.random.default_rng(8)
        raw = rng.uniform(size=50)
        adj = bonferroni(raw, n_comparisons=6)
        assert np.all(adj >= raw)
        np.testing.assert_allclose(adj, np.minimum(1.0, raw * 6))


class TestSignedRank:
    """Paired Wilcoxon signed-rank test."""

    def test_all_equal_pairs(self):
        """No non-zero differences -> statistic 0, p = 1."""
        assert signed_rank_test(np.ones(5), np.ones(5)) == (0.0, 1.0)

    def test_exact_small_sample(self):
        """Six positive, distinct differences -> exact two-sided p = 2 / 2^6."""
        x = np.arange(1.0, 7.0)
        y = x + np.array([0.1, 0.25, 0.3, 0.45, 0.5, 0.65])
        stat, p = signed_rank_test(x, y)
        assert stat == 0.0
        assert p == pytest.approx(2 / 2**6)

    def test_symmetric_in_order(self):
        rng = np.random.default_rng(1)
        x = rng.normal(size=20)
        y = x + rng.normal(0.5, 1.0, size=20)
        assert signed_rank_test(x, y)[1] == pytest.approx(signed_rank_test(y, x)[1])


class TestPairwiseTests:
    """All C(k, 2) model pairs with Bonferroni correction."""

    def test_three_models_six_blocks(self, ordered_growth):
        """Raw p = 1/32 per pair, adjusted x3 -> 0.09375, not significant."""
        results = pairwise_signed_rank_tests(ordered_growth)
        assert [(r.group1, r.group2) for r in results] == [("A", "B"), ("A", "C"), ("B", "C")]
        for r in results:
            assert r.raw_p == pytest.approx(1 / 32)
            assert r.adjusted_p == pytest.approx(3 / 32)
            assert r.significance == "ns"

    def test_large_consistent_difference(self):
        """Thirty probes where one model always predicts more growth."""
        rng = np.random.default_rng(5)
        base = rng.uniform(0.5, 2.0, size=30)
        rows = []
        for label, values in (("low", base), ("high", base + rng.uniform(0.1, 1.0, size=30))):
            for probe, v in enumerate(values, start=1):
                rows.append({"unit_id": 1, "probe_id": probe, "source_label": label,
                             "cumulative_growth": v})
        results = pairwise_signed_rank_tests(pd.DataFrame(rows))
        assert len(results) == 1
        assert results[0].adjusted_p == pytest.approx(results[0].raw_p)
        assert results[0].significance == "****"

    def test_adjusted_bounds(self, ordered_growth):
        for r in pairwise_signed_rank_tests(ordered_growth):
            assert r.raw_p <= r.adjusted_p <= 1.0

    def test_results_frame(self, ordered_growth):
        df = pairwise_results_to_frame(pairwise_signed_rank_tests(ordered_growth))
        assert list(df.columns) == PAIRWISE_COLS
        assert len(df) == 3

    def test_empty_results_frame(self):
        df = pairwise_results_to_frame([])
        assert df.empty
        assert list(df.columns) == PAIRWISE_COLS
