"""
Distribution plots of cumulative growth per model.

One box per growth model, probes overlaid as points, optionally annotated
with the Friedman result for the organism.
"""

from typing import Optional

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from coldchain_growth.assessment.comparison import ModelComparisonResult
from coldchain_growth.constants import GROWTH_COL, ORGANISM_COL, SOURCE_COL
from coldchain_growth.utils.labels import format_column_label, model_display_label


def plot_growth_distribution(
    growth: pd.DataFrame,
    *,
    organism: Optional[str] = None,
    comparison: Optional[ModelComparisonResult] = None,
    show_points: bool = True,
    max_points_for_strip: int = 500,
    title: Optional[str] = None,
    figsize: Optional[tuple[float, float]] = None,
    ax: Optional[plt.Axes] = None,
) -> plt.Figure:
    """
    Boxplot of cumulative log growth by model.

    Models are ordered by mean growth (highest first) so the most and least
    conservative models sit at the ends.

    Args:
        growth: Growth table (organism, source_label, cumulative_growth, ...).
        organism: Restrict to one organism.
        comparison: If given, the Friedman statistic, p-value and Kendall's W
            are shown as a subtitle.
        show_points: Overlay per-probe points when n <= max_points_for_strip.
        max_points_for_strip: Maximum rows for the strip overlay.
        title: Plot title. Defaults to the organism name.
        figsize: Optional (width, height) in inches.
        ax: Optional axes to draw on.

    Returns:
        matplotlib.figure.Figure.
    """
    for col in (SOURCE_COL, GROWTH_COL):
        if col not in growth.columns:
            raise ValueError(
                f"column '{col}' not in DataFrame. Available: {list(growth.columns)}"
            )

    df = growth
    if organism is not None:
        df = growth.loc[growth[ORGANISM_COL] == organism]
    df = df.dropna(subset=[GROWTH_COL]).reset_index(drop=True)
    if df.empty:
        raise ValueError("No growth values to plot")

    x_col = SOURCE_COL
    if ORGANISM_COL in df.columns and df[ORGANISM_COL].nunique() > 1:
        df = df.copy()
        df["_model"] = [
            model_display_label(o, s) for o, s in zip(df[ORGANISM_COL], df[SOURCE_COL])
        ]
        x_col = "_model"

    order = (
        df.groupby(x_col)[GROWTH_COL].mean().sort_values(ascending=False).index.tolist()
    )

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.get_figure()

    sns.boxplot(data=df, x=x_col, y=GROWTH_COL, order=order, ax=ax, color="#9ecae1")
    if show_points and len(df) <= max_points_for_strip:
        sns.stripplot(
            data=df,
            x=x_col,
            y=GROWTH_COL,
            order=order,
            ax=ax,
            color="black",
            alpha=0.35,
            size=3,
            jitter=0.15,
        )

    resolved_title = title if title is not None else (organism or "Cumulative growth")
    ax.set_title(resolved_title, pad=20, fontsize=12, fontweight="bold")
    if comparison is not None:
        fr = comparison.friedman
        ax.text(
            0.5,
            1.01,
            f"Friedman Q = {fr.statistic:.2f}, df = {fr.df}, p = {fr.p_value:.3g}, "
            f"W = {comparison.kendalls_w:.2f}",
            transform=ax.transAxes,
            ha="center",
            va="bottom",
            fontsize=9,
        )
    ax.set_xlabel("Growth model")
    ax.set_ylabel(f"{format_column_label(GROWTH_COL)} (log CFU)")
    ax.tick_params(axis="x", labelrotation=45)

    sns.despine(ax=ax)
    fig.tight_layout()
    return fig
