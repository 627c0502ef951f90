"""
Model-parameter catalog and temperature-reading I/O.

The catalog is a table of published secondary growth models with columns
Organism, b, Units, T0 and Source. The free-text Units column is decoded
once here into the TimeBasis / ScaleForm / LogBasis tags so downstream code
never inspects strings. Readings are tidy DataFrames with one row per probe
sample: unit_id, probe_id, elapsed_minutes, temperature_c.
"""

import logging
import re
from pathlib import Path
from typing import List, Union

import numpy as np
import pandas as pd

from coldchain_growth.constants import (
    PROBE_COL,
    READING_COLS,
    TEMPERATURE_COL,
    TIME_COL,
    UNIT_COL,
)
from coldchain_growth.data.models import (
    LogBasis,
    RawModelParameter,
    ScaleForm,
    TemperatureReading,
    TimeBasis,
)
from coldchain_growth.errors import ParameterFormatError

logger = logging.getLogger(__name__)

CATALOG_COLUMNS = {
    "organism": "Organism",
    "b": "b",
    "units": "Units",
    "t0": "T0",
    "source": "Source",
}
SQRT_MARKERS = ("√", "sqrt")
NATURAL_LOG_MARKER = "ln"
HOURLY_MARKER = "h"
EXCEL_SUFFIXES = (".xlsx", ".xls")


def decode_units(units: str) -> tuple[TimeBasis, ScaleForm, LogBasis]:
    """
    Decode a catalog Units string into explicit basis tags.

    Rules: a lowercase "h" means an hourly coefficient (otherwise daily);
    a square-root marker ("√" or "sqrt") means the coefficient is already
    square-rooted (otherwise linear); "ln" in any case means natural log
    (otherwise common log).

    Args:
        units: Units text, e.g. "√(log CFU/h)" or "Ln CFU/day".

    Returns:
        Tuple of (time_basis, scale_form, log_basis).

    Raises:
        ParameterFormatError: If units is empty or not a string.
    """
    if not isinstance(units, str) or not units.strip():
        raise ParameterFormatError(f"Unrecognized units encoding: {units!r}", units)

    lowered = units.lower()
    time_basis = TimeBasis.HOURLY if HOURLY_MARKER in units else TimeBasis.DAILY
    scale_form = (
        ScaleForm.SQUARE_ROOTED
        if any(m in lowered for m in SQRT_MARKERS)
        else ScaleForm.LINEAR
    )
    log_basis = LogBasis.NATURAL if NATURAL_LOG_MARKER in lowered else LogBasis.COMMON
    return time_basis, scale_form, log_basis


def clean_source(source: str) -> str:
    """Strip parenthesis characters from a citation to use it as a display key."""
    return re.sub(r"\s+", " ", re.sub(r"[()]", "", str(source))).strip()


def catalog_from_frame(df: pd.DataFrame) -> List[RawModelParameter]:
    """
    Build raw parameter records from a catalog DataFrame.

    Args:
        df: Catalog with columns Organism, b, Units, T0, Source.

    Returns:
        One RawModelParameter per row, in row order.

    Raises:
        ValueError: If a required column is missing.
        ParameterFormatError: If b or T0 is not numeric, or Units is empty.
    """
    missing = [c for c in CATALOG_COLUMNS.values() if c not in df.columns]
    if missing:
        raise ValueError(
            f"Catalog columns {missing} not in DataFrame. Available: {list(df.columns)}"
        )

    records: List[RawModelParameter] = []
    for values in df[list(CATALOG_COLUMNS.values())].to_dict("records"):
        organism = str(values["Organism"]).strip()
        source = clean_source(values["Source"])
        b = pd.to_numeric(values["b"], errors="coerce")
        t0 = pd.to_numeric(values["T0"], errors="coerce")
        if pd.isna(b) or pd.isna(t0):
            raise ParameterFormatError(
                f"Non-numeric b or T0 for {organism} / {source}: "
                f"b={values['b']!r}, T0={values['T0']!r}",
                values,
            )
        time_basis, scale_form, log_basis = decode_units(values["Units"])
        records.append(
            RawModelParameter(
                organism=organism,
                source_label=source,
                coefficient_b=float(b),
                threshold_t0=float(t0),
                time_basis=time_basis,
                scale_form=scale_form,
                log_basis=log_basis,
            )
        )
    return records


def load_model_catalog(path: Union[str, Path]) -> List[RawModelParameter]:
    """
    Load a model-parameter catalog from CSV or Excel.

    Args:
        path: .csv, .xlsx or .xls file.

    Returns:
        List of RawModelParameter records.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    if path.suffix.lower() in EXCEL_SUFFIXES:
        df = pd.read_excel(path)
    else:
        df = pd.read_csv(path)
    df.columns = [str(c).strip() for c in df.columns]
    records = catalog_from_frame(df)
    logger.info("Loaded %d growth models from %s", len(records), path.name)
    return records


def catalog_to_frame(records: List[RawModelParameter]) -> pd.DataFrame:
    """Tabulate raw parameter records with their basis tags as strings."""
    return pd.DataFrame(
        [
            {
                "organism": r.organism,
                "source_label": r.source_label,
                "coefficient_b": r.coefficient_b,
                "threshold_t0": r.threshold_t0,
                "time_basis": r.time_basis.value,
                "scale_form": r.scale_form.value,
                "log_basis": r.log_basis.value,
            }
            for r in records
        ]
    )


def validate_readings(df: pd.DataFrame) -> pd.DataFrame:
    """
    Check a readings DataFrame and return it sorted per probe.

    Temperatures may be missing (NaN); they are excluded later during growth
    computation. The probe key and elapsed time may not: a reading that
    cannot be placed on a probe's time axis is a structural error. Elapsed
    time must be strictly increasing within each (unit_id, probe_id) group.

    Args:
        df: Readings with unit_id, probe_id, elapsed_minutes, temperature_c.

    Returns:
        Copy of df sorted by unit_id, probe_id, elapsed_minutes with a fresh index.

    Raises:
        ValueError: On missing columns, missing unit_id / probe_id /
            elapsed_minutes values, or duplicated timestamps within a probe.
    """
    missing = [c for c in READING_COLS if c not in df.columns]
    if missing:
        raise ValueError(
            f"Reading columns {missing} not in DataFrame. Available: {list(df.columns)}"
        )

    out = df.copy()
    out[TIME_COL] = pd.to_numeric(out[TIME_COL], errors="coerce")
    out[TEMPERATURE_COL] = pd.to_numeric(out[TEMPERATURE_COL], errors="coerce")

    key_cols = [UNIT_COL, PROBE_COL, TIME_COL]
    nulls = out[key_cols].isna()
    if nulls.any().any():
        counts = {c: int(n) for c, n in nulls.sum().items() if n}
        raise ValueError(
            f"Readings without a probe or timestamp: {counts} "
            f"(rows {out.index[nulls.any(axis=1)].tolist()[:5]})"
        )

    out = out.sort_values(key_cols, kind="mergesort")

    dupes = out.duplicated(subset=key_cols)
    if dupes.any():
        first = out.loc[dupes].iloc[0]
        raise ValueError(
            f"Duplicate reading at {TIME_COL}={first[TIME_COL]} for "
            f"unit {first[UNIT_COL]}, probe {first[PROBE_COL]}"
        )
    return out.reset_index(drop=True)


def readings_from_records(readings: List[TemperatureReading]) -> pd.DataFrame:
    """Tabulate TemperatureReading records into a readings DataFrame."""
    if not readings:
        return pd.DataFrame(columns=READING_COLS)
    return pd.DataFrame(
        {
            UNIT_COL: [r.unit_id for r in readings],
            PROBE_COL: [r.probe_id for r in readings],
            TIME_COL: [r.elapsed_minutes for r in readings],
            TEMPERATURE_COL: np.array(
                [np.nan if r.temperature_celsius is None else r.temperature_celsius for r in readings],
                dtype=float,
            ),
        }
    )
