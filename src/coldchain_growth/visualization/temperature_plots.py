"""
Temperature traces of transport-unit probes.
"""

from typing import Optional

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from coldchain_growth.constants import (
    MINUTES_PER_HOUR,
    PROBE_COL,
    TEMPERATURE_COL,
    TIME_COL,
    UNIT_COL,
)


def plot_temperature_series(
    readings: pd.DataFrame,
    *,
    threshold_t0: Optional[float] = None,
    show_variance: bool = False,
    title: Optional[str] = None,
    figsize: Optional[tuple[float, float]] = None,
    ax: Optional[plt.Axes] = None,
) -> plt.Figure:
    """
    Plot probe temperature against elapsed hours, coloured by transport unit.

    Args:
        readings: Readings DataFrame.
        threshold_t0: Draw a horizontal line at this minimum growth temperature.
        show_variance: Mean +/- sd per unit instead of one line per probe.
        title: Optional plot title.
        figsize: Optional (width, height) in inches.
        ax: Optional axes to draw on.

    Returns:
        matplotlib.figure.Figure.
    """
    required = (UNIT_COL, PROBE_COL, TIME_COL, TEMPERATURE_COL)
    missing = [c for c in required if c not in readings.columns]
    if missing:
        raise ValueError(
            f"Columns {missing} not in DataFrame. Available: {list(readings.columns)}"
        )

    df = readings.copy()
    df["elapsed_hours"] = df[TIME_COL] / MINUTES_PER_HOUR
    df[UNIT_COL] = df[UNIT_COL].astype(str)

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.get_figure()

    plot_kwargs: dict = {
        "data": df,
        "x": "elapsed_hours",
        "y": TEMPERATURE_COL,
        "hue": UNIT_COL,
        "ax": ax,
    }
    if show_variance:
        plot_kwargs["errorbar"] = "sd"
    else:
        plot_kwargs["units"] = df[UNIT_COL] + "_" + df[PROBE_COL].astype(str)
        plot_kwargs["estimator"] = None
        plot_kwargs["linewidth"] = 0.8
    sns.lineplot(**plot_kwargs)

    if threshold_t0 is not None:
        ax.axhline(threshold_t0, color="firebrick", linestyle="--", linewidth=1)

    ax.set_title(title or "Probe temperatures", pad=20, fontsize=12, fontweight="bold")
    ax.set_xlabel("Elapsed time (h)")
    ax.set_ylabel("Temperature (°C)")
    leg = ax.get_legend()
    if leg is not None:
        leg.set_title("Unit")

    sns.despine(ax=ax)
    fig.tight_layout()
    return fig
