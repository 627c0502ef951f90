"""
Shared constants for produce cold-chain growth analysis.
"""

import math

# Temperature probes log every 5 minutes during transport.
SAMPLING_INTERVAL_MINUTES = 5.0
MINUTES_PER_HOUR = 60.0
HOURS_PER_DAY = 24.0

SQRT_HOURS_PER_DAY = math.sqrt(HOURS_PER_DAY)
SQRT_LN10 = math.sqrt(math.log(10))

# Tidy column names shared by readings and growth tables
UNIT_COL = "unit_id"
PROBE_COL = "probe_id"
TIME_COL = "elapsed_minutes"
TEMPERATURE_COL = "temperature_c"
ORGANISM_COL = "organism"
SOURCE_COL = "source_label"
GROWTH_COL = "cumulative_growth"
INCREMENT_COL = "growth_increment"
B1_COL = "coefficient_b1"
T0_COL = "threshold_t0"

READING_COLS = [UNIT_COL, PROBE_COL, TIME_COL, TEMPERATURE_COL]
BLOCK_COLS = [UNIT_COL, PROBE_COL]
GROWTH_KEY_COLS = [ORGANISM_COL, SOURCE_COL, UNIT_COL, PROBE_COL]

# Adjusted p-value cutoffs, strictest first
SIGNIFICANCE_THRESHOLDS = [
    (0.0001, "****"),
    (0.001, "***"),
    (0.01, "**"),
    (0.05, "*"),
]
NOT_SIGNIFICANT = "ns"

DUPLICATE_POLICIES = ("max", "first", "error")

# Weibull defaults for simulated refrigerated-transport temperatures (deg C)
WEIBULL_SHAPE = 2.0
WEIBULL_SCALE = 6.0
TRANSPORT_DURATION_MINUTES = 24 * 60
