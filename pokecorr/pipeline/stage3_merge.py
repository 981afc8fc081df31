"""
Stage 3: Data Merging

Joins the cleaned stats, usage and type tables into the merged dataset.

Operations:
    - Inner join on exact name
    - Standardized stats (stat / total) and has_type2
    - Join coverage per source
    - Validation of the merged table against its sources
"""

from dataclasses import dataclass
import logging
from typing import List

import pandas as pd

from pokecorr.assembly.merged_assembly import (
    JoinCoverage,
    assemble_merged_dataset,
    compute_join_coverage,
)
from pokecorr.pipeline.stage2_clean import CleanedSources
from pokecorr.qa.validators import ValidationResult, raise_for_failures, validate_merged_table

logger = logging.getLogger(__name__)


@dataclass
class MergeResult:
    """Merged dataset with its coverage and checks."""
    merged: pd.DataFrame
    coverage: JoinCoverage
    validations: List[ValidationResult]


def run_merge(cleaned: CleanedSources) -> MergeResult:
    """
    Run the data merging stage.

    Args:
        cleaned: Output of run_clean

    Returns:
        MergeResult
    """
    logger.info("=" * 60)
    logger.info("STAGE 3: DATA MERGING")
    logger.info("=" * 60)

    merged = assemble_merged_dataset(cleaned.stats, cleaned.usage, cleaned.types)

    logger.info("Computing join coverage...")
    coverage = compute_join_coverage(cleaned.tables(), merged)

    logger.info("Validating merged dataset...")
    checks = validate_merged_table(merged, cleaned.tables())
    raise_for_failures("merged", checks)

    logger.info(f"Stage 3 complete: {len(merged):,} merged rows")
    return MergeResult(merged=merged, coverage=coverage, validations=checks)
