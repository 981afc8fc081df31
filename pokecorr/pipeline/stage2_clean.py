"""
Stage 2: Data Cleaning

Parses each fetched document into its canonical table and validates it
immediately. A failed check stops the pipeline before the next source is
parsed.

Operations:
    - Stats: locate the stats table, slice name..average, coerce integers
    - Usage: fixed row window, strip cells, percents → [0, 1]
    - Types: concatenate generation tables, drop repeated secondary type
"""

from dataclasses import dataclass, field
import logging
from typing import Callable, Dict, List

import pandas as pd

from pokecorr.download.fetcher import FetchedDocument
from pokecorr.parsing import parse_stats, parse_types, parse_usage
from pokecorr.qa.validators import (
    ValidationResult,
    raise_for_failures,
    validate_stats_table,
    validate_types_table,
    validate_usage_table,
)

logger = logging.getLogger(__name__)


@dataclass
class CleanedSources:
    """Parsed, validated source tables."""
    stats: pd.DataFrame
    usage: pd.DataFrame
    types: pd.DataFrame
    validations: Dict[str, List[ValidationResult]] = field(default_factory=dict)

    def tables(self) -> Dict[str, pd.DataFrame]:
        return {"stats": self.stats, "usage": self.usage, "types": self.types}


def clean_source(
    document: FetchedDocument,
    parser: Callable[[str], pd.DataFrame],
    validator: Callable[[pd.DataFrame], List[ValidationResult]],
):
    """Parse one document and validate it; raise on the first failed source."""
    logger.info(f"Cleaning {document.source_name}...")
    df = parser(document.text)
    results = validator(df)
    raise_for_failures(document.source_name, results)
    return df, results


def run_clean(documents: Dict[str, FetchedDocument]) -> CleanedSources:
    """
    Run the data cleaning stage.

    Args:
        documents: Output of run_pull

    Returns:
        CleanedSources with the three tables and their validation results

    Raises:
        SchemaIntegrityError: A source failed its post-parse checks
        TypeCoercionError: A numeric or percent cell did not parse
    """
    logger.info("=" * 60)
    logger.info("STAGE 2: DATA CLEANING")
    logger.info("=" * 60)

    stats, stats_checks = clean_source(documents["stats"], parse_stats, validate_stats_table)
    usage, usage_checks = clean_source(documents["usage"], parse_usage, validate_usage_table)
    types, types_checks = clean_source(documents["types"], parse_types, validate_types_table)

    logger.info(
        f"Stage 2 complete: {len(stats):,} stats, {len(usage):,} usage, {len(types):,} type rows"
    )

    return CleanedSources(
        stats=stats,
        usage=usage,
        types=types,
        validations={"stats": stats_checks, "usage": usage_checks, "types": types_checks},
    )
