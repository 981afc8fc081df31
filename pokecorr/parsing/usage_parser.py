"""
Parser for the Smogon monthly usage report.

The report is a plain-text table framed by rule lines::

     Total battles: 123456
     Avg. weight/team: 0.65
     + ---- + ------------------ + --------- + ------ + ------- + ------ + ------- +
     | Rank | Pokemon            | Usage %   | Raw    | %       | Real   | %       |
     + ---- + ------------------ + --------- + ------ + ------- + ------ + ------- +
     | 1    | Landorus-Therian   | 34.12345% | 512345 | 31.234% | 401234 | 30.123% |
     ...
     + ---- + ------------------ + --------- + ------ + ------- + ------ + ------- +

The data rows are a fixed window of lines (banner and header skipped,
closing rule dropped) and a fixed range of "|"-separated fields.
"""

from io import StringIO
import logging
from typing import Optional

import pandas as pd

from pokecorr.config import (
    SOURCE_LAYOUT,
    USAGE_COUNT_COLUMNS,
    USAGE_PERCENT_COLUMNS,
    USAGE_TABLE_COLUMNS,
    SourceLayout,
)
from pokecorr.exceptions import SchemaIntegrityError
from pokecorr.parsing.coercion import clean_names, coerce_int, coerce_percent, strip_cells

logger = logging.getLogger(__name__)

SOURCE_NAME = "usage"


def select_row_window(text: str, layout: Optional[SourceLayout] = None) -> list:
    """Return the data lines of the report, without banner, header and closing rule."""
    layout = layout or SOURCE_LAYOUT

    lines = [line for line in text.splitlines() if line.strip()]
    stop = len(lines) - layout.usage_footer_rows
    rows = lines[layout.usage_header_rows:stop]

    if not rows:
        raise SchemaIntegrityError(
            SOURCE_NAME,
            message=f"no data rows after skipping {layout.usage_header_rows} header lines",
        )
    return rows


def parse_usage(text: str, layout: Optional[SourceLayout] = None) -> pd.DataFrame:
    """
    Parse the usage report into the canonical usage table.

    Args:
        text: Fetched report body
        layout: Structural assumptions (defaults to SOURCE_LAYOUT)

    Returns:
        DataFrame with USAGE_TABLE_COLUMNS; percents as fractions in [0, 1]

    Raises:
        SchemaIntegrityError: If the row window or column range is missing
        TypeCoercionError: If a count or percent cell does not parse
    """
    layout = layout or SOURCE_LAYOUT

    rows = select_row_window(text, layout)
    try:
        raw = pd.read_csv(
            StringIO("\n".join(rows)),
            sep=layout.usage_delimiter,
            header=None,
            dtype=str,
            keep_default_na=False,
        )
    except pd.errors.ParserError as e:
        # Ragged rows: the window no longer lines up with the table
        raise SchemaIntegrityError(SOURCE_NAME, message=f"row window is not a table: {e}") from e

    start, stop = layout.usage_column_range
    if raw.shape[1] < stop:
        raise SchemaIntegrityError(
            SOURCE_NAME,
            message=f"expected at least {stop} fields per row, found {raw.shape[1]}",
        )

    df = strip_cells(raw.iloc[:, start:stop])
    df.columns = USAGE_TABLE_COLUMNS

    df["name"] = clean_names(df["name"])
    df = df[df["name"].notna()].reset_index(drop=True)
    for col in USAGE_COUNT_COLUMNS:
        df[col] = coerce_int(df[col], col)
    for col in USAGE_PERCENT_COLUMNS:
        df[col] = coerce_percent(df[col], col)

    logger.info(f"Parsed {len(df):,} usage rows")
    return df
