"""
Parser for the national-dex type list.

The Bulbapedia national-dex page is split into one table per generation.
Each table is sliced to (name, type1, type2) and the sections are
concatenated in page order. A monotype species has a single type cell
spanning both type columns, which parses as type2 == type1; those rows are
normalised so type2 is missing.
"""

import logging
from typing import Optional

import pandas as pd

from pokecorr.config import SOURCE_LAYOUT, TYPES_TABLE_COLUMNS, SourceLayout
from pokecorr.parsing.coercion import clean_names, strip_cells
from pokecorr.parsing.html_tables import (
    extract_column_range,
    parse_html,
    select_tables,
    table_to_frame,
)

logger = logging.getLogger(__name__)

SOURCE_NAME = "types"


def normalize_secondary_type(df: pd.DataFrame) -> pd.DataFrame:
    """Drop a secondary type that merely repeats the primary type."""
    df = df.copy()
    df["type2"] = df["type2"].mask(df["type2"] == df["type1"])
    return df


def parse_types(html: str, layout: Optional[SourceLayout] = None) -> pd.DataFrame:
    """
    Parse every generation table on the page into one type table.

    Args:
        html: Fetched page body
        layout: Structural assumptions (defaults to SOURCE_LAYOUT)

    Returns:
        DataFrame with TYPES_TABLE_COLUMNS in page order
    """
    layout = layout or SOURCE_LAYOUT

    soup = parse_html(html)
    tables = select_tables(
        soup,
        layout.types_table_headers,
        layout.types_table_fallback_indices,
        SOURCE_NAME,
    )

    sections = []
    for i, table in enumerate(tables, start=1):
        raw = table_to_frame(table)
        section = extract_column_range(raw, layout.types_column_range, TYPES_TABLE_COLUMNS, SOURCE_NAME)
        logger.debug(f"  Section {i}: {len(section):,} rows")
        sections.append(section)

    df = pd.concat(sections, ignore_index=True)
    df = strip_cells(df)
    df["name"] = clean_names(df["name"])
    df["type1"] = clean_names(df["type1"])
    df["type2"] = clean_names(df["type2"])
    df = df[df["name"].notna()].reset_index(drop=True)

    df = normalize_secondary_type(df)

    n_mono = df["type2"].isna().sum()
    logger.info(f"Parsed {len(df):,} type rows from {len(tables)} sections ({n_mono:,} monotype)")
    return df
