"""
Per-organism comparison of growth models.

Runs the Friedman test, Kendall's W and the Bonferroni-corrected pairwise
signed-rank tests on the growth table of one organism at a time. A failure
for one organism is logged and reported without stopping the others.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import pandas as pd

from coldchain_growth.assessment.friedman import (
    FriedmanResult,
    effect_size_magnitude,
    friedman_test,
    kendalls_w,
)
from coldchain_growth.assessment.posthoc import (
    pairwise_results_to_frame,
    pairwise_signed_rank_tests,
)
from coldchain_growth.constants import (
    GROWTH_COL,
    NOT_SIGNIFICANT,
    ORGANISM_COL,
    SOURCE_COL,
)
from coldchain_growth.data.models import PairwiseTestResult
from coldchain_growth.errors import GrowthAnalysisError

logger = logging.getLogger(__name__)


@dataclass
class ModelComparisonResult:
    """Friedman test, effect size and post-hoc tests for one organism."""

    organism: str
    friedman: FriedmanResult
    kendalls_w: float
    effect_magnitude: str
    pairwise: List[PairwiseTestResult] = field(default_factory=list)
    ranking: pd.DataFrame = field(default_factory=pd.DataFrame)

    @property
    def significant_pairs(self) -> List[PairwiseTestResult]:
        return [p for p in self.pairwise if p.significance != NOT_SIGNIFICANT]

    def pairwise_frame(self) -> pd.DataFrame:
        return pairwise_results_to_frame(self.pairwise)


@dataclass
class ComparisonRun:
    """Comparison results for every organism, plus the ones that failed."""

    results: dict[str, ModelComparisonResult] = field(default_factory=dict)
    errors: dict[str, GrowthAnalysisError] = field(default_factory=dict)

    def summary_table(self) -> pd.DataFrame:
        """One row per organism: n, k, statistic, df, p, W, magnitude, or error."""
        rows = []
        for organism, r in self.results.items():
            rows.append(
                {
                    ORGANISM_COL: organism,
                    "n_blocks": r.friedman.n_blocks,
                    "n_models": r.friedman.n_treatments,
                    "statistic": r.friedman.statistic,
                    "df": r.friedman.df,
                    "p_value": r.friedman.p_value,
                    "kendalls_w": r.kendalls_w,
                    "effect_magnitude": r.effect_magnitude,
                    "error": None,
                }
            )
        for organism, e in self.errors.items():
            rows.append({ORGANISM_COL: organism, "error": str(e)})
        return pd.DataFrame(rows)


def rank_models(
    growth: pd.DataFrame,
    *,
    value_col: str = GROWTH_COL,
    treatment_col: str = SOURCE_COL,
) -> pd.DataFrame:
    """
    Summarize cumulative growth per model, most growth first.

    Returns:
        DataFrame with treatment_col, n, mean, median, std, min, max.
    """
    if growth.empty:
        return pd.DataFrame(
            columns=[treatment_col, "n", "mean", "median", "std", "min", "max"]
        )
    return (
        growth.groupby(treatment_col)[value_col]
        .agg(n="count", mean="mean", median="median", std="std", min="min", max="max")
        .reset_index()
        .sort_values(["mean", treatment_col], ascending=[False, True])
        .reset_index(drop=True)
    )


def compare_models(
    growth: pd.DataFrame,
    *,
    organism: Optional[str] = None,
    value_col: str = GROWTH_COL,
    treatment_col: str = SOURCE_COL,
    block_cols: Optional[Sequence[str]] = None,
    tie_correction: bool = False,
) -> ModelComparisonResult:
    """
    Compare growth models for a single organism.

    Args:
        growth: Growth table (see aggregate_growth).
        organism: Organism to filter to. Required when growth holds more
            than one organism.
        value_col: Response column.
        treatment_col: Model label column.
        block_cols: Block identifier columns (default unit_id, probe_id).
        tie_correction: Forwarded to friedman_test.

    Returns:
        ModelComparisonResult.

    Raises:
        InsufficientDataError, IncompleteDesignError: From the design check.
    """
    df = growth
    if organism is not None:
        df = growth.loc[growth[ORGANISM_COL] == organism]
    elif ORGANISM_COL in growth.columns:
        organisms = growth[ORGANISM_COL].dropna().unique()
        if len(organisms) > 1:
            raise ValueError(
                f"growth holds {len(organisms)} organisms; pass organism= to pick one"
            )
        organism = str(organisms[0]) if len(organisms) else ""

    fr = friedman_test(
        df,
        value_col=value_col,
        treatment_col=treatment_col,
        block_cols=block_cols,
        tie_correction=tie_correction,
    )
    w = kendalls_w(fr)
    pairwise = pairwise_signed_rank_tests(
        df, value_col=value_col, treatment_col=treatment_col, block_cols=block_cols
    )
    logger.info(
        "%s: Friedman Q=%.3f (df=%d, p=%.3g), W=%.3f, %d/%d pairs significant",
        organism,
        fr.statistic,
        fr.df,
        fr.p_value,
        w,
        sum(p.significance != NOT_SIGNIFICANT for p in pairwise),
        len(pairwise),
    )
    return ModelComparisonResult(
        organism="" if organism is None else str(organism),
        friedman=fr,
        kendalls_w=w,
        effect_magnitude=effect_size_magnitude(w),
        pairwise=pairwise,
        ranking=rank_models(df, value_col=value_col, treatment_col=treatment_col),
    )


def compare_all_organisms(
    growth: pd.DataFrame,
    *,
    organisms: Optional[Sequence[str]] = None,
    tie_correction: bool = False,
) -> ComparisonRun:
    """
    Run compare_models for each organism in the growth table.

    Statistical errors abort only the affected organism; they are logged and
    collected in ComparisonRun.errors.

    Args:
        growth: Growth table for any number of organisms.
        organisms: Subset and order of organisms. Default: order of appearance.
        tie_correction: Forwarded to friedman_test.
    """
    if ORGANISM_COL not in growth.columns:
        raise ValueError(
            f"'{ORGANISM_COL}' not in DataFrame. Available: {list(growth.columns)}"
        )
    if organisms is None:
        organisms = [str(o) for o in growth[ORGANISM_COL].dropna().unique()]

    run = ComparisonRun()
    for organism in organisms:
        try:
            run.results[organism] = compare_models(
                growth, organism=organism, tie_correction=tie_correction
            )
        except GrowthAnalysisError as e:
            logger.warning("Skipping model comparison for %s: %s", organism, e)
            run.errors[organism] = e
    return run
