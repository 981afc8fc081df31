"""
Assemble the merged stats/usage/type dataset.

Operations:
    - Inner join of the three source tables on exact name match
    - Standardized stats s_HP..s_Speed (stat / total)
    - has_type2 flag
    - Join coverage: which source names did not survive the join

Names are matched verbatim. Alternate spellings across sources (form
suffixes such as "Landorus-Therian", punctuation, accents) simply drop
out of the join. Duplicate names within a source are not resolved, so a
duplicated key yields one merged row per combination.
"""

from dataclasses import dataclass, field
from typing import Dict, List
import logging

import pandas as pd

from pokecorr.config import MERGED_COLUMNS, STAT_COLUMNS

logger = logging.getLogger(__name__)


@dataclass
class JoinCoverage:
    """Row counts and dropped names for each source of the join."""
    source_rows: Dict[str, int]
    merged_rows: int
    dropped_names: Dict[str, List[str]] = field(default_factory=dict)

    def retention(self, source: str) -> float:
        """Fraction of a source's distinct names that reached the merged table."""
        total = self.source_rows.get(source, 0)
        if total == 0:
            return 0.0
        return 1.0 - len(self.dropped_names.get(source, [])) / total


def add_standardized_stats(df: pd.DataFrame) -> pd.DataFrame:
    """Add s_<stat> = stat / total for each of the six stats."""
    df = df.copy()
    for col in STAT_COLUMNS:
        df[f"s_{col}"] = df[col] / df["total"]
    return df


def add_type2_flag(df: pd.DataFrame) -> pd.DataFrame:
    """Add has_type2: True when a secondary type is present."""
    df = df.copy()
    df["has_type2"] = df["type2"].notna()
    return df


def assemble_merged_dataset(
    stats: pd.DataFrame,
    usage: pd.DataFrame,
    types: pd.DataFrame,
) -> pd.DataFrame:
    """
    Join the three source tables into one row per Pokemon.

    Parameters
    ----------
    stats : pd.DataFrame
        Parsed base-stats table.
    usage : pd.DataFrame
        Parsed usage table.
    types : pd.DataFrame
        Parsed type table.

    Returns
    -------
    pd.DataFrame
        MERGED_COLUMNS, sorted by usage rank then name.
    """
    merged = (
        stats.merge(usage, on="name", how="inner")
        .merge(types, on="name", how="inner")
    )

    merged = add_standardized_stats(merged)
    merged = add_type2_flag(merged)

    merged = merged.sort_values(["rank", "name"], kind="mergesort").reset_index(drop=True)
    merged = merged[MERGED_COLUMNS]

    logger.info(
        f"Merged {len(stats):,} stats × {len(usage):,} usage × {len(types):,} type rows "
        f"→ {len(merged):,} rows"
    )
    return merged


def compute_join_coverage(
    sources: Dict[str, pd.DataFrame],
    merged: pd.DataFrame,
) -> JoinCoverage:
    """Summarise which names from each source were lost by the inner join."""
    merged_names = set(merged["name"])

    source_rows = {}
    dropped = {}
    for source, df in sources.items():
        names = set(df["name"].dropna())
        source_rows[source] = len(names)
        dropped[source] = sorted(names - merged_names)
        logger.info(f"  - {source}: {len(dropped[source]):,} of {len(names):,} names not merged")

    return JoinCoverage(
        source_rows=source_rows,
        merged_rows=len(merged),
        dropped_names=dropped,
    )
