"""
HTML table location and conversion.

Tables are found structurally (by the text of their own header cells)
with BeautifulSoup, then converted to DataFrames with pandas.read_html so
that colspan/rowspan cells are expanded the same way for every source.
"""

from io import StringIO
from typing import Iterable, List, Sequence, Set
import logging

import pandas as pd
from bs4 import BeautifulSoup, Tag

from pokecorr.exceptions import SchemaIntegrityError

logger = logging.getLogger(__name__)


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML document with the lxml parser."""
    return BeautifulSoup(html, "lxml")


def table_headers(table: Tag) -> Set[str]:
    """Return the text of header cells that belong to this table (not nested ones)."""
    return {
        th.get_text(" ", strip=True)
        for th in table.find_all("th")
        if th.find_parent("table") is table
    }


def find_tables_with_headers(soup: BeautifulSoup, required: Iterable[str]) -> List[Tag]:
    """Return every table whose own header cells include all `required` labels."""
    required = set(required)
    return [t for t in soup.find_all("table") if required.issubset(table_headers(t))]


def select_tables(
    soup: BeautifulSoup,
    required_headers: Iterable[str],
    fallback_indices: Sequence[int],
    source_name: str,
) -> List[Tag]:
    """
    Locate source tables by header, falling back to fixed positions.

    Raises SchemaIntegrityError when neither lookup yields a table.
    """
    matches = find_tables_with_headers(soup, required_headers)
    if matches:
        logger.debug(f"{source_name}: {len(matches)} table(s) matched by header")
        return matches

    all_tables = soup.find_all("table")
    logger.warning(
        f"{source_name}: no table carries headers {sorted(required_headers)}; "
        f"falling back to fixed indices {list(fallback_indices)} of {len(all_tables)} tables"
    )
    picked = [all_tables[i] for i in fallback_indices if i < len(all_tables)]
    if not picked:
        raise SchemaIntegrityError(
            source_name,
            message=f"no table found by header or at indices {list(fallback_indices)}",
        )
    return picked


def table_to_frame(table: Tag) -> pd.DataFrame:
    """Convert a single <table> node into a DataFrame with flat column labels."""
    df = pd.read_html(StringIO(str(table)))[0]

    if isinstance(df.columns, pd.MultiIndex):
        df.columns = [" ".join(str(c) for c in col).strip() for col in df.columns]

    return df


def extract_column_range(
    df: pd.DataFrame,
    column_range: Sequence[int],
    names: List[str],
    source_name: str,
) -> pd.DataFrame:
    """Slice a fixed positional column range and rename it to `names`."""
    start, stop = column_range
    if df.shape[1] < stop:
        raise SchemaIntegrityError(
            source_name,
            message=f"expected at least {stop} columns, found {df.shape[1]}: {list(df.columns)}",
        )

    out = df.iloc[:, start:stop].copy()
    out.columns = names
    return out
