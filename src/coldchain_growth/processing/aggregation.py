"""
Reduction of per-sample growth increments into one record per model and probe.

The growth table has exactly one row per (organism, source_label, unit_id,
probe_id). When the catalog holds several rows for the same
(organism, source_label), their increments are all summed into that key and
the reported b1 / T0 follow the chosen duplicate policy.
"""

import logging
from collections import Counter
from typing import Iterable, List, Literal

import pandas as pd

from coldchain_growth.constants import (
    B1_COL,
    DUPLICATE_POLICIES,
    GROWTH_COL,
    GROWTH_KEY_COLS,
    INCREMENT_COL,
    ORGANISM_COL,
    PROBE_COL,
    SAMPLING_INTERVAL_MINUTES,
    SOURCE_COL,
    T0_COL,
    UNIT_COL,
)
from coldchain_growth.data.models import GrowthRecord, NormalizedModelParameter
from coldchain_growth.errors import ParameterFormatError
from coldchain_growth.processing.growth import MODEL_INDEX_COL, compute_growth_increments

logger = logging.getLogger(__name__)

GROWTH_TABLE_COLS = GROWTH_KEY_COLS + [GROWTH_COL, B1_COL, T0_COL]

DuplicatePolicy = Literal["max", "first", "error"]


def _check_policy(duplicate_policy: str) -> None:
    if duplicate_policy not in DUPLICATE_POLICIES:
        raise ValueError(
            f"duplicate_policy must be one of {DUPLICATE_POLICIES}, got {duplicate_policy!r}"
        )


def _duplicate_error(labels: List[str]) -> ParameterFormatError:
    return ParameterFormatError(
        f"Duplicate model parameter rows: {', '.join(labels)}", labels
    )


def check_duplicate_models(
    params: Iterable[NormalizedModelParameter],
    duplicate_policy: DuplicatePolicy = "max",
) -> None:
    """
    Reject duplicated (organism, source_label) models up front.

    Only the "error" policy raises; the other policies resolve duplicates
    during aggregation. Call this before compute_growth_increments so a
    malformed catalog fails before any growth is computed.

    Raises:
        ParameterFormatError: Duplicates found under duplicate_policy="error".
    """
    _check_policy(duplicate_policy)
    if duplicate_policy != "error":
        return
    counts = Counter(p.key for p in params)
    labels = [f"{o} / {s} (x{n})" for (o, s), n in counts.items() if n > 1]
    if labels:
        raise _duplicate_error(labels)


def _model_parameters(
    increments: pd.DataFrame, duplicate_policy: DuplicatePolicy
) -> pd.DataFrame:
    """One (b1, T0) per (organism, source_label) under the duplicate policy."""
    model_cols = [ORGANISM_COL, SOURCE_COL]
    models = (
        increments[model_cols + [MODEL_INDEX_COL, B1_COL, T0_COL]]
        .drop_duplicates(subset=[MODEL_INDEX_COL])
        .sort_values(MODEL_INDEX_COL)
    )

    counts = models.groupby(model_cols).size()
    dupes = counts[counts > 1]
    if not dupes.empty:
        labels = [f"{o} / {s} (x{n})" for (o, s), n in dupes.items()]
        if duplicate_policy == "error":
            raise _duplicate_error(labels)
        logger.warning(
            "Duplicate model parameter rows, reporting %s b1/T0: %s",
            duplicate_policy,
            ", ".join(labels),
        )

    grouped = models.groupby(model_cols, sort=False)
    if duplicate_policy == "first":
        return grouped[[B1_COL, T0_COL]].first().reset_index()
    return grouped[[B1_COL, T0_COL]].max().reset_index()


def aggregate_growth(
    increments: pd.DataFrame,
    *,
    duplicate_policy: DuplicatePolicy = "max",
) -> pd.DataFrame:
    """
    Sum per-sample increments into cumulative growth per model and probe.

    Args:
        increments: Output of compute_growth_increments.
        duplicate_policy: How to report b1 / T0 for duplicated
            (organism, source_label) rows: "max" (column-wise maximum),
            "first" (first catalog row) or "error" (raise
            ParameterFormatError). Never changes the growth sum.

    Returns:
        DataFrame with columns organism, source_label, unit_id, probe_id,
        cumulative_growth, coefficient_b1, threshold_t0; one row per key.
    """
    _check_policy(duplicate_policy)
    required = GROWTH_KEY_COLS + [MODEL_INDEX_COL, B1_COL, T0_COL, INCREMENT_COL]
    missing = [c for c in required if c not in increments.columns]
    if missing:
        raise ValueError(
            f"increments is missing columns {missing}. Available: {list(increments.columns)}"
        )
    if increments.empty:
        return pd.DataFrame(columns=GROWTH_TABLE_COLS)

    growth = (
        increments.groupby(GROWTH_KEY_COLS, sort=True)[INCREMENT_COL]
        .sum(min_count=0)
        .rename(GROWTH_COL)
        .reset_index()
    )
    params = _model_parameters(increments, duplicate_policy)
    out = growth.merge(params, on=[ORGANISM_COL, SOURCE_COL], how="left")
    return out[GROWTH_TABLE_COLS]


def compute_growth_table(
    readings: pd.DataFrame,
    params: Iterable[NormalizedModelParameter],
    *,
    sampling_interval_minutes: float = SAMPLING_INTERVAL_MINUTES,
    duplicate_policy: DuplicatePolicy = "max",
) -> pd.DataFrame:
    """
    Evaluate every model on every probe and reduce to the growth table.

    Convenience wrapper around compute_growth_increments + aggregate_growth.
    """
    params = list(params)
    check_duplicate_models(params, duplicate_policy)
    increments = compute_growth_increments(
        readings, params, sampling_interval_minutes=sampling_interval_minutes
    )
    return aggregate_growth(increments, duplicate_policy=duplicate_policy)


def growth_records_from_frame(growth: pd.DataFrame) -> List[GrowthRecord]:
    """Convert a growth table into immutable GrowthRecord objects."""
    missing = [c for c in GROWTH_TABLE_COLS if c not in growth.columns]
    if missing:
        raise ValueError(
            f"growth table is missing columns {missing}. Available: {list(growth.columns)}"
        )
    return [
        GrowthRecord(
            organism=row[ORGANISM_COL],
            source_label=row[SOURCE_COL],
            unit_id=int(row[UNIT_COL]),
            probe_id=int(row[PROBE_COL]),
            cumulative_growth=float(row[GROWTH_COL]),
            coefficient_b1=float(row[B1_COL]),
            threshold_t0=float(row[T0_COL]),
        )
        for row in growth[GROWTH_TABLE_COLS].to_dict("records")
    ]
