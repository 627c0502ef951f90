"""
coldchain_growth - Microbial growth on fresh-cut produce in refrigerated transport

Normalizes published secondary growth models (Salmonella, E. coli,
Listeria), integrates them over probe temperature series, and compares the
models with a Friedman test, Kendall's W and Bonferroni-corrected pairwise
signed-rank tests.
"""

from .assessment import (
    ComparisonRun,
    FriedmanResult,
    ModelComparisonResult,
    compare_all_organisms,
    compare_models,
    friedman_test,
    kendalls_w,
    pairwise_signed_rank_tests,
    residual_normality,
    significance_symbol,
)
from .data import (
    GrowthRecord,
    LogBasis,
    NormalizedModelParameter,
    PairwiseTestResult,
    RawModelParameter,
    ScaleForm,
    TemperatureReading,
    TimeBasis,
    catalog_from_frame,
    load_model_catalog,
    simulate_temperature_series,
    validate_readings,
)
from .errors import (
    GrowthAnalysisError,
    IncompleteDesignError,
    InsufficientDataError,
    MissingReadingWarning,
    ParameterFormatError,
)
from .pipeline import GrowthAnalysisResult, run_growth_analysis
from .processing import (
    aggregate_growth,
    compute_cumulative_growth,
    compute_growth_increments,
    compute_growth_table,
    normalize_catalog,
    normalize_parameter,
)
from .visualization import plot_growth_distribution, plot_temperature_series

__version__ = "0.1.0"

__all__ = [
    "ComparisonRun",
    "FriedmanResult",
    "GrowthAnalysisError",
    "GrowthAnalysisResult",
    "GrowthRecord",
    "IncompleteDesignError",
    "InsufficientDataError",
    "LogBasis",
    "MissingReadingWarning",
    "ModelComparisonResult",
    "NormalizedModelParameter",
    "PairwiseTestResult",
    "ParameterFormatError",
    "RawModelParameter",
    "ScaleForm",
    "TemperatureReading",
    "TimeBasis",
    "aggregate_growth",
    "catalog_from_frame",
    "compare_all_organisms",
    "compare_models",
    "compute_cumulative_growth",
    "compute_growth_increments",
    "compute_growth_table",
    "friedman_test",
    "kendalls_w",
    "load_model_catalog",
    "normalize_catalog",
    "normalize_parameter",
    "pairwise_signed_rank_tests",
    "plot_growth_distribution",
    "plot_temperature_series",
    "residual_normality",
    "run_growth_analysis",
    "significance_symbol",
    "simulate_temperature_series",
    "validate_readings",
    "__version__",
]
