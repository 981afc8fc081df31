"""
Cell cleaning and numeric coercion shared by the parsers.

Every coercion is strict: a cell that does not parse raises
TypeCoercionError naming the column and the offending value.
"""

import pandas as pd

from pokecorr.exceptions import TypeCoercionError


def _strip(value):
    return value.strip() if isinstance(value, str) else value


def strip_cells(df: pd.DataFrame) -> pd.DataFrame:
    """Strip surrounding whitespace from every string cell."""
    return df.apply(lambda col: col.map(_strip))


def clean_names(series: pd.Series) -> pd.Series:
    """Strip a name column; blank names become missing."""
    names = series.map(_strip)
    return names.mask(names == "")


def _raise_first_bad(raw: pd.Series, parsed: pd.Series, column: str) -> None:
    bad = raw[parsed.isna()]
    if len(bad) > 0:
        raise TypeCoercionError(column, bad.iloc[0], row=bad.index[0])


def coerce_float(series: pd.Series, column: str) -> pd.Series:
    """Parse a column to float; any non-numeric or empty cell is an error."""
    parsed = pd.to_numeric(series, errors="coerce")
    _raise_first_bad(series, parsed, column)
    return parsed.astype(float)


def coerce_int(series: pd.Series, column: str) -> pd.Series:
    """Parse a column to int; fractional values are an error."""
    parsed = coerce_float(series, column)
    fractional = parsed[parsed % 1 != 0]
    if len(fractional) > 0:
        raise TypeCoercionError(column, series.loc[fractional.index[0]], row=fractional.index[0])
    return parsed.astype(int)


def coerce_percent(series: pd.Series, column: str) -> pd.Series:
    """
    Parse "12.34%" strings to fractions in [0, 1].

    The percent sign is stripped and the value divided by 100.
    """
    text = series.astype(str).str.strip()
    if not text.str.endswith("%").all():
        bad = series[~text.str.endswith("%")]
        raise TypeCoercionError(column, bad.iloc[0], row=bad.index[0])

    parsed = pd.to_numeric(text.str.rstrip("%"), errors="coerce")
    _raise_first_bad(series, parsed, column)
    return parsed / 100.0
