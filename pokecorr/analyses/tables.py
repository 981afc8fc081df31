"""
Markdown rendering of report tables.
"""

from typing import Optional

import pandas as pd


def get_significance_stars(pvalue: float) -> str:
    """Get significance stars based on p-value."""
    if pd.isna(pvalue):
        return ""
    if pvalue < 0.01:
        return "***"
    elif pvalue < 0.05:
        return "**"
    elif pvalue < 0.10:
        return "*"
    return ""


def bools_to_yes_no(df: pd.DataFrame) -> pd.DataFrame:
    """Render boolean columns as yes/no."""
    df = df.copy()
    for col in df.columns:
        if pd.api.types.is_bool_dtype(df[col]):
            df[col] = df[col].map({True: "yes", False: "no"})
    return df


def dataframe_to_markdown(df: pd.DataFrame, digits: int = 4, index: bool = False) -> str:
    """Render a DataFrame as a GitHub-flavoured markdown table."""
    if index:
        df = df.reset_index()
    return bools_to_yes_no(df).to_markdown(index=False, floatfmt=f".{digits}f", missingval="")


def add_significance(df: pd.DataFrame, p_col: str = "p_value", target: Optional[str] = None) -> pd.DataFrame:
    """Append a stars column derived from a p-value column."""
    df = df.copy()
    df[target or "sig"] = df[p_col].map(get_significance_stars)
    return df


def render_section(title: str, df: pd.DataFrame, note: str = "", digits: int = 4, index: bool = False) -> str:
    """A markdown section: heading, optional note, table."""
    parts = [f"## {title}", ""]
    if note:
        parts += [note, ""]
    parts.append(dataframe_to_markdown(df, digits=digits, index=index))
    return "\n".join(parts) + "\n"
