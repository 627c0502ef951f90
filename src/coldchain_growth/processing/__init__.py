"""
Growth-model evaluation: parameter normalization, per-sample growth and
reduction to one cumulative value per model and probe.
"""

from .aggregation import (
    GROWTH_TABLE_COLS,
    aggregate_growth,
    check_duplicate_models,
    compute_growth_table,
    growth_records_from_frame,
)
from .growth import (
    compute_cumulative_growth,
    compute_growth_increments,
    count_skipped_readings,
    growth_increments,
)
from .normalization import (
    normalize_catalog,
    normalize_parameter,
    parameters_to_frame,
)

__all__ = [
    "GROWTH_TABLE_COLS",
    "aggregate_growth",
    "check_duplicate_models",
    "compute_cumulative_growth",
    "compute_growth_increments",
    "compute_growth_table",
    "count_skipped_readings",
    "growth_increments",
    "growth_records_from_frame",
    "normalize_catalog",
    "normalize_parameter",
    "parameters_to_frame",
]
