"""
Growth-model catalog loading, readings I/O and value types.
"""

from .io import (
    catalog_from_frame,
    catalog_to_frame,
    clean_source,
    decode_units,
    load_model_catalog,
    readings_from_records,
    validate_readings,
)
from .models import (
    GrowthRecord,
    LogBasis,
    NormalizedModelParameter,
    PairwiseTestResult,
    RawModelParameter,
    ScaleForm,
    TemperatureReading,
    TimeBasis,
)
from .simulation import simulate_temperature_series

__all__ = [
    "GrowthRecord",
    "LogBasis",
    "NormalizedModelParameter",
    "PairwiseTestResult",
    "RawModelParameter",
    "ScaleForm",
    "TemperatureReading",
    "TimeBasis",
    "catalog_from_frame",
    "catalog_to_frame",
    "clean_source",
    "decode_units",
    "load_model_catalog",
    "readings_from_records",
    "simulate_temperature_series",
    "validate_readings",
]
