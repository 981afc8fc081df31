"""Descriptive statistics, regressions and figures for the merged dataset."""

from .descriptive import (
    summarize_dataset,
    stat_rank_correlations,
    correlation_matrix,
    type_counts,
    top_used,
)
from .regression import (
    PolynomialFit,
    fit_polynomial,
    regress_on_each,
    type_group_tests,
)
from .tables import dataframe_to_markdown, get_significance_stars

__all__ = [
    "summarize_dataset",
    "stat_rank_correlations",
    "correlation_matrix",
    "type_counts",
    "top_used",
    "PolynomialFit",
    "fit_polynomial",
    "regress_on_each",
    "type_group_tests",
    "dataframe_to_markdown",
    "get_significance_stars",
]
