"""Source parsers: HTML tables and the delimited usage report."""

from .stats_parser import parse_stats
from .usage_parser import parse_usage, select_row_window
from .types_parser import parse_types, normalize_secondary_type
from .coercion import coerce_int, coerce_float, coerce_percent

__all__ = [
    "parse_stats",
    "parse_usage",
    "select_row_window",
    "parse_types",
    "normalize_secondary_type",
    "coerce_int",
    "coerce_float",
    "coerce_percent",
]
