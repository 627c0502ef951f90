"""
Growth and temperature plotting.
"""

from .growth_plots import plot_growth_distribution
from .temperature_plots import plot_temperature_series

__all__ = [
    "plot_growth_distribution",
    "plot_temperature_series",
]
