"""
Stage 4: Analyses

Runs the exploratory analysis suite on the merged dataset:
    - Summary statistics and most-used table
    - Stat / rank correlations and correlation matrix
    - Polynomial fit of rank on base stat total
    - Per-stat regressions of rank, raw and standardized
    - Type composition and type group tests
"""

import logging
from typing import Any, Dict

import pandas as pd

from pokecorr.analyses.descriptive import (
    correlation_matrix,
    stat_rank_correlations,
    summarize_dataset,
    top_used,
    type_counts,
)
from pokecorr.analyses.regression import fit_polynomial, regress_on_each, type_group_tests
from pokecorr.config import REPORT_CONFIG, STANDARDIZED_COLUMNS, STAT_COLUMNS

logger = logging.getLogger(__name__)


def run_analyze(merged: pd.DataFrame) -> Dict[str, Any]:
    """
    Run the analysis stage.

    Args:
        merged: Merged dataset from run_merge

    Returns:
        dict: Analysis name → result table (or PolynomialFit for "poly_fit")
    """
    logger.info("=" * 60)
    logger.info("STAGE 4: ANALYSES")
    logger.info("=" * 60)

    results = {}

    logger.info("Computing descriptive statistics...")
    results["summary"] = summarize_dataset(merged)
    results["top_used"] = top_used(merged)
    results["type_counts"] = type_counts(merged)

    logger.info(f"Computing {REPORT_CONFIG.correlation_method} correlations with rank...")
    results["correlations"] = stat_rank_correlations(merged)
    results["correlation_matrix"] = correlation_matrix(merged)

    logger.info("Fitting regressions...")
    results["poly_fit"] = fit_polynomial(merged, x="total", y="rank")
    results["regressions_raw"] = regress_on_each(merged, STAT_COLUMNS + ["total"])
    results["regressions_standardized"] = regress_on_each(merged, STANDARDIZED_COLUMNS)

    logger.info("Running type group tests...")
    results["group_tests"] = type_group_tests(merged)

    logger.info(f"Stage 4 complete: {len(results)} analyses")
    return results
