"""
File I/O utilities.

Helper functions for writing report artifacts with consistent
logging.
"""

from pathlib import Path
import logging
import pandas as pd

logger = logging.getLogger(__name__)


def ensure_dir(path: Path) -> Path:
    """
    Ensure directory exists, creating if necessary.

    Parameters
    ----------
    path : Path
        Directory path to ensure exists.

    Returns
    -------
    Path
        The input path (for chaining).
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_csv(df: pd.DataFrame, path: Path) -> Path:
    """
    Save DataFrame to CSV with logging.

    Parameters
    ----------
    df : pd.DataFrame
        DataFrame to save.
    path : Path
        Output path.

    Returns
    -------
    Path
        The output path.
    """
    ensure_dir(path.parent)
    df.to_csv(path, index=False, encoding="utf-8")
    logger.info(f"Saved {len(df):,} rows to {path.name}")
    return path


def write_text(content: str, path: Path) -> Path:
    """Write a text artifact (markdown table, report) and log its size."""
    ensure_dir(path.parent)
    path.write_text(content, encoding="utf-8")
    logger.info(f"  → {path.name} ({len(content):,} bytes)")
    return path
