"""
Synthetic refrigerated-transport temperature series.

Each transport unit draws its probe temperatures from a Weibull
distribution on a fixed sampling grid. Useful for exercising the growth
pipeline when logger exports are unavailable.
"""

import logging
from typing import Optional

import numpy as np
import pandas as pd

from coldchain_growth.constants import (
    PROBE_COL,
    SAMPLING_INTERVAL_MINUTES,
    TEMPERATURE_COL,
    TIME_COL,
    TRANSPORT_DURATION_MINUTES,
    UNIT_COL,
    WEIBULL_SCALE,
    WEIBULL_SHAPE,
)

logger = logging.getLogger(__name__)


def simulate_temperature_series(
    n_units: int = 3,
    n_probes: int = 4,
    *,
    duration_minutes: float = TRANSPORT_DURATION_MINUTES,
    sampling_interval_minutes: float = SAMPLING_INTERVAL_MINUTES,
    shape: float = WEIBULL_SHAPE,
    scale: float = WEIBULL_SCALE,
    offset: float = 0.0,
    seed: Optional[int] = None,
) -> pd.DataFrame:
    """
    Generate Weibull-distributed probe temperatures for several transport units.

    Temperature = offset + scale * Weibull(shape). Units get independent
    draws; every probe shares the same elapsed-time grid
    0, interval, 2*interval, ... < duration_minutes, as integers when the
    interval is a whole number of minutes.

    Args:
        n_units: Number of transport units (trucks, containers).
        n_probes: Probes per unit.
        duration_minutes: Length of the trip.
        sampling_interval_minutes: Logger interval.
        shape: Weibull shape parameter (k).
        scale: Weibull scale parameter (deg C).
        offset: Location shift added to every temperature (deg C).
        seed: Seed for numpy's default Generator.

    Returns:
        Readings DataFrame with unit_id, probe_id, elapsed_minutes, temperature_c,
        sorted by unit, probe and time.
    """
    if n_units < 1 or n_probes < 1:
        raise ValueError(f"Need at least one unit and probe, got {n_units}x{n_probes}")
    if sampling_interval_minutes <= 0:
        raise ValueError(
            f"sampling_interval_minutes must be positive, got {sampling_interval_minutes}"
        )
    if shape <= 0 or scale <= 0:
        raise ValueError(f"Weibull shape and scale must be positive, got {shape}, {scale}")

    rng = np.random.default_rng(seed)
    times = np.arange(0, duration_minutes, sampling_interval_minutes)
    if float(sampling_interval_minutes).is_integer():
        times = times.astype(int)
    n_samples = len(times)

    temps = offset + scale * rng.weibull(shape, size=(n_units, n_probes, n_samples))

    units, probes, steps = np.meshgrid(
        np.arange(1, n_units + 1),
        np.arange(1, n_probes + 1),
        np.arange(n_samples),
        indexing="ij",
    )
    df = pd.DataFrame(
        {
            UNIT_COL: units.ravel(),
            PROBE_COL: probes.ravel(),
            TIME_COL: times[steps.ravel()],
            TEMPERATURE_COL: temps.ravel(),
        }
    )
    logger.debug(
        "Simulated %d readings for %d units x %d probes", len(df), n_units, n_probes
    )
    return df
