"""
Post-hoc pairwise comparison of growth models.

Every unordered pair of models gets a paired Wilcoxon signed-rank test on
the per-probe growth values, followed by Bonferroni correction over the
C(k, 2) pairs.
"""

from itertools import combinations
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd
from scipy import stats

from coldchain_growth.assessment.friedman import block_design
from coldchain_growth.constants import (
    GROWTH_COL,
    NOT_SIGNIFICANT,
    SIGNIFICANCE_THRESHOLDS,
    SOURCE_COL,
)
from coldchain_growth.data.models import PairwiseTestResult

PAIRWISE_COLS = ["group1", "group2", "statistic", "raw_p", "adjusted_p", "significance"]


def significance_symbol(p: float) -> str:
    """
    Map an adjusted p-value to its star label.

    ns (p >= 0.05), * (< 0.05), ** (< 0.01), *** (< 0.001), **** (< 0.0001).
    NaN maps to ns.
    """
    if p is None or not np.isfinite(p):
        return NOT_SIGNIFICANT
    for cutoff, symbol in SIGNIFICANCE_THRESHOLDS:
        if p < cutoff:
            return symbol
    return NOT_SIGNIFICANT


def bonferroni(p_values: Sequence[float], n_comparisons: Optional[int] = None) -> np.ndarray:
    """
    Bonferroni-adjust p-values: min(1, p * m).

    Args:
        p_values: Raw p-values.
        n_comparisons: m; defaults to len(p_values).

    Returns:
        Adjusted p-values, never below the raw ones.
    """
    p = np.asarray(p_values, dtype=float)
    m = len(p) if n_comparisons is None else n_comparisons
    return np.minimum(1.0, p * m)


def signed_rank_test(x: np.ndarray, y: np.ndarray) -> tuple[float, float]:
    """
    Two-sided paired Wilcoxon signed-rank test.

    Zero differences are dropped. scipy picks the exact null distribution
    for small samples without ties and the continuity-corrected normal
    approximation otherwise. When every pair is equal there is nothing to
    rank and the result is (0.0, 1.0).
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if not np.any(x - y != 0):
        return 0.0, 1.0
    res = stats.wilcoxon(
        x, y, zero_method="wilcox", correction=True, alternative="two-sided"
    )
    p = float(res.pvalue)
    return float(res.statistic), (p if np.isfinite(p) else 1.0)


def pairwise_signed_rank_tests(
    df: pd.DataFrame,
    *,
    value_col: str = GROWTH_COL,
    treatment_col: str = SOURCE_COL,
    block_cols: Optional[Sequence[str]] = None,
) -> List[PairwiseTestResult]:
    """
    Bonferroni-corrected signed-rank tests for every pair of models.

    Values are matched by block (probe) before differencing, so rows may
    arrive in any order.

    Args:
        df: Long DataFrame for one organism (complete design).
        value_col: Response column.
        treatment_col: Treatment column.
        block_cols: Block identifier columns.

    Returns:
        One PairwiseTestResult per pair, in sorted treatment order.
    """
    matrix = block_design(
        df, value_col=value_col, treatment_col=treatment_col, block_cols=block_cols
    )
    pairs = list(combinations(matrix.columns, 2))

    raw = [signed_rank_test(matrix[a].to_numpy(), matrix[b].to_numpy()) for a, b in pairs]
    adjusted = bonferroni([p for _, p in raw])

    return [
        PairwiseTestResult(
            group1=str(a),
            group2=str(b),
            statistic=stat,
            raw_p=p,
            adjusted_p=float(p_adj),
            significance=significance_symbol(p_adj),
        )
        for (a, b), (stat, p), p_adj in zip(pairs, raw, adjusted)
    ]


def pairwise_results_to_frame(results: Sequence[PairwiseTestResult]) -> pd.DataFrame:
    """Tabulate pairwise results for reporting."""
    return pd.DataFrame(
        [
            {
                "group1": r.group1,
                "group2": r.group2,
                "statistic": r.statistic,
                "raw_p": r.raw_p,
                "adjusted_p": r.adjusted_p,
                "significance": r.significance,
            }
            for r in results
        ],
        columns=PAIRWISE_COLS,
    )
