"""
Model comparison: Friedman test, Kendall's W and Bonferroni-corrected
pairwise signed-rank tests, run per organism.
"""

from .comparison import (
    ComparisonRun,
    ModelComparisonResult,
    compare_all_organisms,
    compare_models,
    rank_models,
)
from .diagnostics import (
    NormalityResult,
    residual_normality,
    two_way_residuals,
)
from .friedman import (
    FriedmanResult,
    block_design,
    effect_size_magnitude,
    friedman_test,
    kendalls_w,
)
from .posthoc import (
    bonferroni,
    pairwise_results_to_frame,
    pairwise_signed_rank_tests,
    signed_rank_test,
    significance_symbol,
)

__all__ = [
    "ComparisonRun",
    "FriedmanResult",
    "ModelComparisonResult",
    "NormalityResult",
    "block_design",
    "bonferroni",
    "compare_all_organisms",
    "compare_models",
    "effect_size_magnitude",
    "friedman_test",
    "kendalls_w",
    "pairwise_results_to_frame",
    "pairwise_signed_rank_tests",
    "rank_models",
    "residual_normality",
    "signed_rank_test",
    "significance_symbol",
    "two_way_residuals",
]
