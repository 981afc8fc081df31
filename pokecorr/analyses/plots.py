"""
Figures for the report.

1. Usage rank vs base stat total, with polynomial fit
2. Six-panel grid: rank vs each raw stat
3. Six-panel grid: rank vs each standardized stat
4. Boxplots of rank by primary type
5. Boxplots of rank by secondary-type presence

Every function saves a PNG and returns its path.
"""

from pathlib import Path
from typing import List, Optional

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from pokecorr.config import FIGURES_DIR, REPORT_CONFIG, STANDARDIZED_COLUMNS, STAT_COLUMNS
from pokecorr.analyses.regression import PolynomialFit, fit_polynomial


def _save(fig, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(path, dpi=REPORT_CONFIG.figure_dpi, bbox_inches="tight")
    plt.close(fig)
    return path


def plot_rank_vs_total(
    df: pd.DataFrame,
    output_dir: Optional[Path] = None,
    fit: Optional[PolynomialFit] = None,
) -> Path:
    """Scatter of usage rank against base stat total with the polynomial fit overlaid."""
    output_dir = output_dir or FIGURES_DIR
    fit = fit or fit_polynomial(df, x="total", y="rank")

    fig, ax = plt.subplots(figsize=REPORT_CONFIG.single_figsize)
    ax.scatter(df["total"], df["rank"], s=18, alpha=0.6, color="steelblue", edgecolor="none")

    if fit.estimated:
        grid = np.linspace(df["total"].min(), df["total"].max(), 200)
        ax.plot(grid, fit.predict(grid), color="coral", linewidth=2,
                label=f"degree {fit.degree} fit (R² = {fit.rsquared:.2f})")
        ax.legend()

    # rank 1 is the most used, so draw it at the top
    ax.invert_yaxis()
    ax.set_xlabel("Base Stat Total", fontsize=12)
    ax.set_ylabel("Usage Rank", fontsize=12)
    ax.set_title("Usage Rank vs Base Stat Total", fontsize=14)
    ax.grid(alpha=0.3)

    return _save(fig, output_dir / "rank_vs_total.png")


def _stat_grid(df: pd.DataFrame, columns: List[str], title: str, xlabel_fmt: str, path: Path) -> Path:
    fig, axes = plt.subplots(2, 3, figsize=REPORT_CONFIG.grid_figsize, sharey=True)

    for ax, col, stat in zip(axes.flat, columns, STAT_COLUMNS):
        ax.scatter(df[col], df["rank"], s=12, alpha=0.6, color="steelblue", edgecolor="none")
        sub = df[[col, "rank"]].dropna()
        if len(sub) > 2 and sub[col].nunique() > 1:
            slope, intercept = np.polyfit(sub[col].astype(float), sub["rank"].astype(float), 1)
            grid = np.linspace(sub[col].min(), sub[col].max(), 50)
            ax.plot(grid, intercept + slope * grid, color="coral", linewidth=1.5)
        ax.set_xlabel(xlabel_fmt.format(REPORT_CONFIG.stat_labels[stat]), fontsize=11)
        ax.grid(alpha=0.3)

    for ax in axes[:, 0]:
        ax.set_ylabel("Usage Rank", fontsize=11)
    axes[0, 0].invert_yaxis()

    fig.suptitle(title, fontsize=14)
    return _save(fig, path)


def plot_stat_grid(df: pd.DataFrame, output_dir: Optional[Path] = None) -> Path:
    """Six-panel grid of usage rank against each raw stat."""
    output_dir = output_dir or FIGURES_DIR
    return _stat_grid(
        df, STAT_COLUMNS,
        "Usage Rank vs Base Stats",
        "{}",
        output_dir / "rank_vs_stats.png",
    )


def plot_standardized_stat_grid(df: pd.DataFrame, output_dir: Optional[Path] = None) -> Path:
    """Six-panel grid of usage rank against each stat as a share of the total."""
    output_dir = output_dir or FIGURES_DIR
    return _stat_grid(
        df, STANDARDIZED_COLUMNS,
        "Usage Rank vs Standardized Stats (stat / total)",
        "{} share of total",
        output_dir / "rank_vs_standardized_stats.png",
    )


def plot_rank_by_type(df: pd.DataFrame, output_dir: Optional[Path] = None) -> Path:
    """Boxplots of usage rank by primary type, ordered by median rank."""
    output_dir = output_dir or FIGURES_DIR

    counts = df["type1"].value_counts()
    kept = counts[counts >= REPORT_CONFIG.min_group_size].index
    if len(kept) == 0:
        kept = counts.index
    sub = df[df["type1"].isin(kept)]
    order = sub.groupby("type1")["rank"].median().sort_values().index.tolist()

    fig, ax = plt.subplots(figsize=REPORT_CONFIG.single_figsize)
    ax.boxplot([sub.loc[sub["type1"] == t, "rank"].values for t in order])
    ax.set_xticks(range(1, len(order) + 1))
    ax.set_xticklabels([f"{t}\n(n={counts[t]})" for t in order], rotation=45, fontsize=9)
    ax.invert_yaxis()
    ax.set_xlabel("Primary Type", fontsize=12)
    ax.set_ylabel("Usage Rank", fontsize=12)
    ax.set_title("Usage Rank by Primary Type", fontsize=14)
    ax.grid(axis="y", alpha=0.3)

    return _save(fig, output_dir / "rank_by_type1.png")


def plot_rank_by_has_type2(df: pd.DataFrame, output_dir: Optional[Path] = None) -> Path:
    """Boxplots of usage rank for single- vs dual-typed Pokemon."""
    output_dir = output_dir or FIGURES_DIR

    groups = [df.loc[~df["has_type2"], "rank"].values, df.loc[df["has_type2"], "rank"].values]
    labels = [f"Single type\n(n={len(groups[0])})", f"Dual type\n(n={len(groups[1])})"]

    fig, ax = plt.subplots(figsize=REPORT_CONFIG.single_figsize)
    ax.boxplot(groups)
    ax.set_xticks([1, 2])
    ax.set_xticklabels(labels, fontsize=11)
    ax.invert_yaxis()
    ax.set_ylabel("Usage Rank", fontsize=12)
    ax.set_title("Usage Rank by Secondary Type Presence", fontsize=14)
    ax.grid(axis="y", alpha=0.3)

    return _save(fig, output_dir / "rank_by_has_type2.png")


def generate_all_figures(
    df: pd.DataFrame,
    output_dir: Optional[Path] = None,
    fit: Optional[PolynomialFit] = None,
) -> List[Path]:
    """Render the five report figures."""
    return [
        plot_rank_vs_total(df, output_dir, fit=fit),
        plot_stat_grid(df, output_dir),
        plot_standardized_stat_grid(df, output_dir),
        plot_rank_by_type(df, output_dir),
        plot_rank_by_has_type2(df, output_dir),
    ]
