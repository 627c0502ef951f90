"""
Friedman test and Kendall's W for repeated-measures model comparison.

Blocks are probes (unit_id, probe_id); treatments are growth models
(source_label); the response is cumulative growth. Every probe sees every
model, so models are compared within probes rather than across them.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np
import pandas as pd
from scipy import stats

from coldchain_growth.constants import BLOCK_COLS, GROWTH_COL, SOURCE_COL
from coldchain_growth.errors import IncompleteDesignError, InsufficientDataError


@dataclass
class FriedmanResult:
    """Friedman rank-sum test over n blocks and k treatments."""

    statistic: float
    df: int
    p_value: float
    n_blocks: int
    n_treatments: int
    rank_sums: dict[str, float] = field(default_factory=dict)
    tie_corrected: bool = False


def block_design(
    df: pd.DataFrame,
    *,
    value_col: str = GROWTH_COL,
    treatment_col: str = SOURCE_COL,
    block_cols: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """
    Pivot long data into a complete blocks x treatments matrix.

    Args:
        df: Long DataFrame, one row per (block, treatment).
        value_col: Response column.
        treatment_col: Treatment (model) column.
        block_cols: Columns identifying a block. Default: unit_id, probe_id.

    Returns:
        DataFrame indexed by block, one column per treatment (sorted).

    Raises:
        InsufficientDataError: Fewer than 2 blocks or 2 treatments.
        IncompleteDesignError: Any block lacks a treatment, holds it twice,
            or has a missing response.
    """
    block_cols = list(block_cols) if block_cols is not None else list(BLOCK_COLS)
    required = block_cols + [treatment_col, value_col]
    missing_cols = [c for c in required if c not in df.columns]
    if missing_cols:
        raise ValueError(
            f"Columns {missing_cols} not in DataFrame. Available: {list(df.columns)}"
        )

    n_blocks = len(df[block_cols].drop_duplicates())
    n_treatments = df[treatment_col].nunique()
    if n_blocks < 2 or n_treatments < 2:
        raise InsufficientDataError(n_blocks, n_treatments)

    counts = (
        df.dropna(subset=[value_col])
        .groupby(block_cols + [treatment_col], dropna=False)
        .size()
    )
    duplicated = int((counts > 1).sum())
    missing = n_blocks * n_treatments - len(counts)
    if missing or duplicated:
        raise IncompleteDesignError(missing, duplicated, n_blocks, n_treatments)

    return df.pivot_table(
        index=block_cols, columns=treatment_col, values=value_col, aggfunc="first"
    ).sort_index(axis=1)


def _tie_correction(ranks: pd.DataFrame) -> float:
    """1 - sum(t^3 - t) / (n k (k^2 - 1)) over tie groups within each block."""
    n, k = ranks.shape
    ties = 0.0
    for _, row in ranks.iterrows():
        _, t = np.unique(row.to_numpy(), return_counts=True)
        ties += float(np.sum(t**3 - t))
    return 1.0 - ties / (n * k * (k**2 - 1))


def friedman_test(
    df: pd.DataFrame,
    *,
    value_col: str = GROWTH_COL,
    treatment_col: str = SOURCE_COL,
    block_cols: Optional[Sequence[str]] = None,
    tie_correction: bool = False,
) -> FriedmanResult:
    """
    Friedman rank-sum test across treatments within blocks.

    Within each block the k values are ranked (ties share the average
    rank), ranks are summed per treatment over the n blocks (R_j) and

        Q = 12 / (n k (k + 1)) * sum(R_j^2) - 3 n (k + 1)

    is referred to a chi-square distribution with k - 1 degrees of freedom.

    Args:
        df: Long DataFrame for one organism.
        value_col: Response column.
        treatment_col: Treatment column.
        block_cols: Block identifier columns.
        tie_correction: Divide Q by the usual tie correction factor. Off by
            default so Q matches the plain formula above.

    Returns:
        FriedmanResult. Identical values in every block give Q = 0, p = 1.
    """
    matrix = block_design(
        df, value_col=value_col, treatment_col=treatment_col, block_cols=block_cols
    )
    n, k = matrix.shape

    # Ranks are computed row by row, so global row order does not matter
    ranks = matrix.rank(axis=1, method="average")
    rank_sums = ranks.sum(axis=0)

    q = 12.0 / (n * k * (k + 1)) * float(np.sum(rank_sums.to_numpy() ** 2)) - 3.0 * n * (
        k + 1
    )
    q = max(q, 0.0)
    if tie_correction:
        c = _tie_correction(ranks)
        q = q / c if c > 0 else 0.0

    dof = k - 1
    return FriedmanResult(
        statistic=q,
        df=dof,
        p_value=float(stats.chi2.sf(q, dof)),
        n_blocks=n,
        n_treatments=k,
        rank_sums={str(t): float(r) for t, r in rank_sums.items()},
        tie_corrected=tie_correction,
    )


def kendalls_w(result: FriedmanResult) -> float:
    """
    Kendall's coefficient of concordance from a Friedman result.

    W = Q / (n (k - 1)), in [0, 1]: 0 means blocks disagree on the model
    ordering, 1 means every probe ranks the models identically.
    """
    w = result.statistic / (result.n_blocks * (result.n_treatments - 1))
    return float(min(max(w, 0.0), 1.0))


def effect_size_magnitude(w: float) -> str:
    """Conventional label for Kendall's W: small (< 0.3), moderate (< 0.5), large."""
    if w < 0.3:
        return "small"
    if w < 0.5:
        return "moderate"
    return "large"
