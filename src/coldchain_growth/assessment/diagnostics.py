"""
Residual normality check for the growth table.

Fits the additive block + model decomposition and runs Shapiro-Wilk on the
residuals. Informs whether a parametric repeated-measures ANOVA would have
been defensible; the comparison itself does not depend on it.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
import pandas as pd
from scipy import stats

from coldchain_growth.assessment.friedman import block_design
from coldchain_growth.constants import GROWTH_COL, SOURCE_COL


@dataclass
class NormalityResult:
    """Shapiro-Wilk result on two-way residuals."""

    statistic: float
    p_value: float
    n_residuals: int
    residuals: np.ndarray

    def is_normal(self, alpha: float = 0.05) -> bool:
        return bool(self.p_value >= alpha)


def two_way_residuals(matrix: pd.DataFrame) -> pd.DataFrame:
    """Residuals y - block_mean - model_mean + grand_mean of a complete matrix."""
    grand = matrix.to_numpy().mean()
    return (
        matrix.sub(matrix.mean(axis=1), axis=0).sub(matrix.mean(axis=0), axis=1) + grand
    )


def residual_normality(
    df: pd.DataFrame,
    *,
    value_col: str = GROWTH_COL,
    treatment_col: str = SOURCE_COL,
    block_cols: Optional[Sequence[str]] = None,
) -> NormalityResult:
    """
    Shapiro-Wilk test on the residuals of the block + model additive fit.

    Args:
        df: Growth table for one organism.

    Returns:
        NormalityResult. Raises ValueError when fewer than 3 residuals exist.
    """
    matrix = block_design(
        df, value_col=value_col, treatment_col=treatment_col, block_cols=block_cols
    )
    resid = two_way_residuals(matrix).to_numpy().ravel()
    if len(resid) < 3:
        raise ValueError(f"Shapiro-Wilk needs at least 3 residuals, got {len(resid)}")
    res = stats.shapiro(resid)
    return NormalityResult(
        statistic=float(res.statistic),
        p_value=float(res.pvalue),
        n_residuals=len(resid),
        residuals=resid,
    )
