"""
Cumulative growth from a temperature series under a secondary growth model.

Uses the Ratkowsky square-root model sqrt(mu) = b1 * (T - T0), so the growth
rate is mu = b1^2 * (T - T0)^2 in log10 CFU per hour. Each reading is taken
to hold for one sampling interval and contributes mu * interval_hours.
Temperatures at or below T0 contribute nothing. Missing temperatures and
skipped grid slots are excluded from the sum and reported with a
MissingReadingWarning; they are never imputed.
"""

import logging
import warnings
from typing import Iterable, Sequence

import numpy as np
import pandas as pd

from coldchain_growth.constants import (
    B1_COL,
    INCREMENT_COL,
    MINUTES_PER_HOUR,
    ORGANISM_COL,
    PROBE_COL,
    SAMPLING_INTERVAL_MINUTES,
    SOURCE_COL,
    T0_COL,
    TEMPERATURE_COL,
    TIME_COL,
    UNIT_COL,
)
from coldchain_growth.data.io import validate_readings
from coldchain_growth.data.models import NormalizedModelParameter
from coldchain_growth.errors import MissingReadingWarning

logger = logging.getLogger(__name__)

MODEL_INDEX_COL = "model_index"


def _check_interval(sampling_interval_minutes: float) -> None:
    if not np.isfinite(sampling_interval_minutes) or sampling_interval_minutes <= 0:
        raise ValueError(
            f"sampling_interval_minutes must be positive, got {sampling_interval_minutes}"
        )


def _warn_missing(msg: str) -> None:
    logger.warning(msg)
    warnings.warn(msg, MissingReadingWarning, stacklevel=3)


def count_skipped_readings(
    readings: pd.DataFrame,
    *,
    sampling_interval_minutes: float = SAMPLING_INTERVAL_MINUTES,
) -> pd.Series:
    """
    Count expected readings absent from each probe's sampling grid.

    A step of d minutes between consecutive readings of one probe leaves
    round(d / interval) - 1 grid slots without a reading.

    Args:
        readings: Validated readings, sorted per probe.
        sampling_interval_minutes: Logger interval.

    Returns:
        Series indexed by (unit_id, probe_id) with the number of skipped
        slots; probes without gaps are omitted.
    """
    _check_interval(sampling_interval_minutes)
    if readings.empty:
        return pd.Series(dtype=int)
    steps = readings.groupby([UNIT_COL, PROBE_COL], sort=False)[TIME_COL].diff()
    slots = (np.rint(steps / sampling_interval_minutes) - 1).clip(lower=0).fillna(0)
    per_probe = slots.groupby([readings[UNIT_COL], readings[PROBE_COL]]).sum()
    return per_probe[per_probe > 0].astype(int)


def growth_increments(
    temperatures: np.ndarray | pd.Series | Sequence[float],
    coefficient_b1: float,
    threshold_t0: float,
    *,
    sampling_interval_minutes: float = SAMPLING_INTERVAL_MINUTES,
) -> np.ndarray:
    """
    Per-sample log10 growth for an array of temperatures.

    increment = max(0, T - T0)^2 * b1^2 * interval_minutes / 60

    Args:
        temperatures: 1D temperatures in deg C; NaN marks a missing reading.
        coefficient_b1: Normalized square-root coefficient.
        threshold_t0: Minimum growth temperature (deg C).
        sampling_interval_minutes: Time each reading represents.

    Returns:
        Float array of the same length; NaN where the temperature is missing.
    """
    _check_interval(sampling_interval_minutes)
    temps = np.asarray(temperatures, dtype=float)
    diff = np.clip(temps - threshold_t0, 0.0, None)
    rate = diff**2 * coefficient_b1**2
    return rate * (sampling_interval_minutes / MINUTES_PER_HOUR)


def compute_cumulative_growth(
    temperatures: np.ndarray | pd.Series | Sequence[float],
    param: NormalizedModelParameter,
    *,
    sampling_interval_minutes: float = SAMPLING_INTERVAL_MINUTES,
) -> float:
    """
    Integrate growth for one probe's time-ordered series under one model.

    Missing temperatures are excluded from the sum and reported with a
    MissingReadingWarning.

    Args:
        temperatures: Time-ordered temperatures for one (unit, probe).
        param: Normalized model.
        sampling_interval_minutes: Logger interval.

    Returns:
        Cumulative log10 growth, always >= 0. Exactly 0.0 when no reading
        exceeds T0.
    """
    inc = growth_increments(
        temperatures,
        param.coefficient_b1,
        param.threshold_t0,
        sampling_interval_minutes=sampling_interval_minutes,
    )
    missing = np.isnan(inc)
    if missing.any():
        _warn_missing(
            f"Excluded {int(missing.sum())} readings without a temperature "
            f"({param.organism} / {param.source_label})"
        )
    return float(np.sum(inc[~missing]))


def compute_growth_increments(
    readings: pd.DataFrame,
    params: Iterable[NormalizedModelParameter],
    *,
    sampling_interval_minutes: float = SAMPLING_INTERVAL_MINUTES,
) -> pd.DataFrame:
    """
    Evaluate every (reading x model) pair.

    Each parameter record is evaluated independently, so duplicate
    (organism, source_label) rows each produce their own increments;
    model_index identifies the originating record.

    Args:
        readings: Readings DataFrame (unit_id, probe_id, elapsed_minutes,
            temperature_c).
        params: Normalized models.
        sampling_interval_minutes: Logger interval.

    Returns:
        Long DataFrame: reading columns + model_index, organism, source_label,
        coefficient_b1, threshold_t0, growth_increment. growth_increment is NaN
        for readings with a missing temperature; downstream sums skip them.
    """
    _check_interval(sampling_interval_minutes)
    readings = validate_readings(readings)
    params = list(params)

    missing = readings[TEMPERATURE_COL].isna()
    if missing.any():
        bad = readings.loc[missing, [UNIT_COL, PROBE_COL]].drop_duplicates()
        _warn_missing(
            f"Excluded {int(missing.sum())} readings without a temperature "
            f"(across {len(bad)} probes)"
        )

    skipped = count_skipped_readings(
        readings, sampling_interval_minutes=sampling_interval_minutes
    )
    if not skipped.empty:
        _warn_missing(
            f"{int(skipped.sum())} expected readings absent from the "
            f"{sampling_interval_minutes:g}-minute grid (across {len(skipped)} probes)"
        )

    temps = readings[TEMPERATURE_COL].to_numpy(dtype=float)
    parts = []
    for idx, p in enumerate(params):
        part = readings.copy()
        part[MODEL_INDEX_COL] = idx
        part[ORGANISM_COL] = p.organism
        part[SOURCE_COL] = p.source_label
        part[B1_COL] = p.coefficient_b1
        part[T0_COL] = p.threshold_t0
        part[INCREMENT_COL] = growth_increments(
            temps,
            p.coefficient_b1,
            p.threshold_t0,
            sampling_interval_minutes=sampling_interval_minutes,
        )
        parts.append(part)

    if not parts:
        return pd.DataFrame(
            columns=list(readings.columns)
            + [MODEL_INDEX_COL, ORGANISM_COL, SOURCE_COL, B1_COL, T0_COL, INCREMENT_COL]
        )
    return pd.concat(parts, ignore_index=True)
