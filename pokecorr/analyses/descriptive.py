"""
Descriptive statistics for the merged dataset.

Summary tables, stat/rank correlations and type composition.
"""

from typing import List, Optional

import numpy as np
import pandas as pd
from scipy import stats

from pokecorr.config import REPORT_CONFIG, STANDARDIZED_COLUMNS, STAT_COLUMNS

SUMMARY_COLUMNS: List[str] = STAT_COLUMNS + ["total", "average", "rank", "usage_pct", "real_pct"]


def summarize_dataset(df: pd.DataFrame, columns: Optional[List[str]] = None) -> pd.DataFrame:
    """Count, mean, std and quantiles for the numeric report columns."""
    columns = columns or SUMMARY_COLUMNS
    summary = df[columns].describe().T
    summary.index.name = "variable"
    return summary.reset_index()


def stat_rank_correlations(
    df: pd.DataFrame,
    method: Optional[str] = None,
    target: str = "rank",
) -> pd.DataFrame:
    """
    Correlate each stat (raw and standardized) and the total with usage rank.

    Parameters
    ----------
    df : pd.DataFrame
        Merged dataset.
    method : str, optional
        "spearman" or "pearson" (defaults to REPORT_CONFIG).
    target : str
        Column to correlate against.

    Returns
    -------
    pd.DataFrame
        One row per variable with coefficient, p-value and n.
    """
    method = method or REPORT_CONFIG.correlation_method
    corr_fn = stats.spearmanr if method == "spearman" else stats.pearsonr

    rows = []
    for col in STAT_COLUMNS + ["total"] + STANDARDIZED_COLUMNS:
        sub = df[[col, target]].dropna()
        if len(sub) < 3 or sub[col].nunique() < 2:
            coef, p = np.nan, np.nan
        else:
            coef, p = corr_fn(sub[col], sub[target])
        rows.append({
            "variable": col,
            "coefficient": float(coef),
            "p_value": float(p),
            "n": len(sub),
        })

    return pd.DataFrame(rows)


def correlation_matrix(df: pd.DataFrame, method: Optional[str] = None) -> pd.DataFrame:
    """Pairwise correlation of the stats, total and rank."""
    method = method or REPORT_CONFIG.correlation_method
    corr = df[STAT_COLUMNS + ["total", "rank"]].corr(method=method)
    corr.index.name = "variable"
    return corr


def type_counts(df: pd.DataFrame) -> pd.DataFrame:
    """Per-type counts as primary and secondary type, with mean usage rank."""
    primary = df.groupby("type1").agg(n_primary=("name", "size"), mean_rank_primary=("rank", "mean"))
    secondary = df.dropna(subset=["type2"]).groupby("type2").agg(n_secondary=("name", "size"))

    table = primary.join(secondary, how="outer")
    table["n_primary"] = table["n_primary"].fillna(0).astype(int)
    table["n_secondary"] = table["n_secondary"].fillna(0).astype(int)
    table.index.name = "type"
    return table.sort_values("n_primary", ascending=False, kind="mergesort").reset_index()


def top_used(df: pd.DataFrame, n: Optional[int] = None) -> pd.DataFrame:
    """The n most used Pokemon with their totals and types."""
    n = n or REPORT_CONFIG.top_n
    cols = ["rank", "name", "usage_pct", "total", "type1", "type2"]
    return df.sort_values("rank", kind="mergesort")[cols].head(n).reset_index(drop=True)
