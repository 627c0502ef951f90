"""
Parameter normalization onto a common growth-model basis.

Published secondary models report the Ratkowsky coefficient b per day or
per hour, on the square-root or linear scale, and in natural or common log
units. Every model is rewritten here to b1 on the square-root, per-hour,
common-log basis so one growth formula serves all of them.
"""

import logging
import math
from typing import Iterable, List, Literal

import pandas as pd

from coldchain_growth.constants import (
    B1_COL,
    ORGANISM_COL,
    SOURCE_COL,
    SQRT_HOURS_PER_DAY,
    SQRT_LN10,
    T0_COL,
)
from coldchain_growth.data.models import (
    LogBasis,
    NormalizedModelParameter,
    RawModelParameter,
    ScaleForm,
    TimeBasis,
)
from coldchain_growth.errors import ParameterFormatError

logger = logging.getLogger(__name__)


def _check_raw(raw: RawModelParameter) -> None:
    for value, enum_type in (
        (raw.time_basis, TimeBasis),
        (raw.scale_form, ScaleForm),
        (raw.log_basis, LogBasis),
    ):
        if not isinstance(value, enum_type):
            raise ParameterFormatError(
                f"{enum_type.__name__} must be one of "
                f"{[m.value for m in enum_type]}, got {value!r}",
                raw,
            )
    try:
        b = float(raw.coefficient_b)
        t0 = float(raw.threshold_t0)
    except (TypeError, ValueError) as e:
        raise ParameterFormatError(f"Non-numeric coefficient: {e}", raw) from e
    if not math.isfinite(b) or not math.isfinite(t0):
        raise ParameterFormatError(
            f"Coefficient b and T0 must be finite, got b={b}, T0={t0}", raw
        )
    if b < 0:
        raise ParameterFormatError(f"Coefficient b must be >= 0, got {b}", raw)


def normalize_parameter(raw: RawModelParameter) -> NormalizedModelParameter:
    """
    Convert one published model to the canonical b1 basis.

    Adjustments, each applied at most once:

    - linear scale: b -> sqrt(b)
    - daily rate: b -> b / sqrt(24)
    - natural log: b -> b / sqrt(ln 10)

    T0 passes through unchanged.

    Args:
        raw: Published parameter record.

    Returns:
        NormalizedModelParameter with coefficient_b1 >= 0.

    Raises:
        ParameterFormatError: If b is negative or non-finite, or a basis tag
            is not a recognized enumeration member.

    Example:
        >>> raw = RawModelParameter("Listeria", "Doe 2001", 2.0, 1.0,
        ...     TimeBasis.DAILY, ScaleForm.LINEAR, LogBasis.NATURAL)
        >>> normalize_parameter(raw).coefficient_b1  # sqrt(2)/sqrt(24)/sqrt(ln 10)
    """
    _check_raw(raw)
    b = float(raw.coefficient_b)

    if raw.scale_form is ScaleForm.LINEAR:
        b = math.sqrt(b)
    if raw.time_basis is TimeBasis.DAILY:
        b = b / SQRT_HOURS_PER_DAY
    if raw.log_basis is LogBasis.NATURAL:
        b = b / SQRT_LN10

    return NormalizedModelParameter(
        organism=raw.organism,
        source_label=raw.source_label,
        coefficient_b1=b,
        threshold_t0=float(raw.threshold_t0),
    )


def normalize_catalog(
    records: Iterable[RawModelParameter],
    *,
    errors: Literal["raise", "skip"] = "raise",
) -> List[NormalizedModelParameter]:
    """
    Normalize every record of a parameter catalog.

    Args:
        records: Raw parameter records.
        errors: "raise" propagates the first ParameterFormatError; "skip" logs
            it and drops only the offending model.

    Returns:
        Normalized parameters in input order (minus skipped records).
    """
    if errors not in ("raise", "skip"):
        raise ValueError(f"errors must be 'raise' or 'skip', got {errors!r}")

    out: List[NormalizedModelParameter] = []
    for raw in records:
        try:
            out.append(normalize_parameter(raw))
        except ParameterFormatError as e:
            if errors == "raise":
                raise
            logger.warning(
                "Skipping model %s / %s: %s",
                getattr(raw, "organism", "?"),
                getattr(raw, "source_label", "?"),
                e,
            )
    return out


def parameters_to_frame(params: Iterable[NormalizedModelParameter]) -> pd.DataFrame:
    """Tabulate normalized parameters (organism, source_label, b1, T0)."""
    return pd.DataFrame(
        [
            {
                ORGANISM_COL: p.organism,
                SOURCE_COL: p.source_label,
                B1_COL: p.coefficient_b1,
                T0_COL: p.threshold_t0,
            }
            for p in params
        ],
        columns=[ORGANISM_COL, SOURCE_COL, B1_COL, T0_COL],
    )
