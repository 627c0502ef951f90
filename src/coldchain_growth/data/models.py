"""
Value types for temperature readings, growth-model parameters and results.

Readings and growth tables travel through the pipeline as tidy DataFrames;
these dataclasses are the record-level view of the same data.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TimeBasis(Enum):
    """Time unit of a published growth-rate coefficient."""

    HOURLY = "hourly"
    DAILY = "daily"


class ScaleForm(Enum):
    """Whether the published coefficient is already on the square-root scale."""

    SQUARE_ROOTED = "square-rooted"
    LINEAR = "linear"


class LogBasis(Enum):
    """Logarithm base the growth is expressed in."""

    COMMON = "common"
    NATURAL = "natural"


@dataclass(frozen=True)
class TemperatureReading:
    """One probe reading during transport."""

    unit_id: int
    probe_id: int
    elapsed_minutes: int
    temperature_celsius: Optional[float]


@dataclass(frozen=True)
class RawModelParameter:
    """A published secondary growth model as reported in its source."""

    organism: str
    source_label: str
    coefficient_b: float
    threshold_t0: float
    time_basis: TimeBasis = TimeBasis.HOURLY
    scale_form: ScaleForm = ScaleForm.SQUARE_ROOTED
    log_basis: LogBasis = LogBasis.COMMON

    @property
    def key(self) -> tuple[str, str]:
        return (self.organism, self.source_label)


@dataclass(frozen=True)
class NormalizedModelParameter:
    """Growth model on the common-log, per-hour, square-root basis."""

    organism: str
    source_label: str
    coefficient_b1: float
    threshold_t0: float

    @property
    def key(self) -> tuple[str, str]:
        return (self.organism, self.source_label)

    def to_raw(self) -> RawModelParameter:
        """Express this parameter back as an already-canonical raw record."""
        return RawModelParameter(
            organism=self.organism,
            source_label=self.source_label,
            coefficient_b=self.coefficient_b1,
            threshold_t0=self.threshold_t0,
        )


@dataclass(frozen=True)
class GrowthRecord:
    """Cumulative log growth for one model on one probe of one transport unit."""

    organism: str
    source_label: str
    unit_id: int
    probe_id: int
    cumulative_growth: float
    coefficient_b1: float
    threshold_t0: float


@dataclass(frozen=True)
class PairwiseTestResult:
    """Bonferroni-adjusted signed-rank comparison between two models."""

    group1: str
    group2: str
    statistic: float
    raw_p: float
    adjusted_p: float
    significance: str
