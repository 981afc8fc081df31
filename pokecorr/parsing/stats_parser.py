"""
Parser for the base-stats list.

Turns the Bulbapedia "List of Pokémon by base stats" page into the
canonical stats table:

    name, HP, Atk, Def, SpA, SpD, Speed, total, average

The page carries a single sortable table of per-Pokemon stats. It is
found by its header cells; the column range name..average is a fixed
positional slice of that table (see SourceLayout.stats_column_range).
"""

import logging
from typing import Optional

import pandas as pd

from pokecorr.config import SOURCE_LAYOUT, STAT_COLUMNS, STATS_TABLE_COLUMNS, SourceLayout
from pokecorr.parsing.coercion import clean_names, coerce_float, coerce_int
from pokecorr.parsing.html_tables import (
    extract_column_range,
    parse_html,
    select_tables,
    table_to_frame,
)

logger = logging.getLogger(__name__)

SOURCE_NAME = "stats"


def parse_stats(html: str, layout: Optional[SourceLayout] = None) -> pd.DataFrame:
    """
    Parse the base-stats HTML page.

    Args:
        html: Fetched page body
        layout: Structural assumptions (defaults to SOURCE_LAYOUT)

    Returns:
        DataFrame with STATS_TABLE_COLUMNS, one row per table row

    Raises:
        SchemaIntegrityError: If the table or its column range is missing
        TypeCoercionError: If a stat cell is not an integer
    """
    layout = layout or SOURCE_LAYOUT

    soup = parse_html(html)
    table = select_tables(
        soup,
        layout.stats_table_headers,
        [layout.stats_table_fallback_index],
        SOURCE_NAME,
    )[0]

    raw = table_to_frame(table)
    df = extract_column_range(raw, layout.stats_column_range, STATS_TABLE_COLUMNS, SOURCE_NAME)

    df["name"] = clean_names(df["name"])
    df = df[df["name"].notna()].reset_index(drop=True)

    for col in STAT_COLUMNS + ["total"]:
        df[col] = coerce_int(df[col], col)
    df["average"] = coerce_float(df["average"], "average")

    logger.info(f"Parsed {len(df):,} base-stat rows")
    return df
