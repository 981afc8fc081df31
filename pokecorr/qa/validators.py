"""
Post-parse validation for each source table and the merged dataset.

Each validator returns a list of ValidationResult. raise_for_failures()
turns any failed check into a SchemaIntegrityError so the pipeline stops
at the stage whose source can no longer be trusted.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging

import numpy as np
import pandas as pd

from pokecorr.config import (
    POKEMON_TYPES,
    STANDARDIZED_COLUMNS,
    STAT_COLUMNS,
    USAGE_PERCENT_COLUMNS,
    VALIDATION_CONFIG,
    ValidationConfig,
)
from pokecorr.exceptions import SchemaIntegrityError

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of a validation check."""
    check_name: str
    passed: bool
    message: str
    affected_count: int = 0
    affected_fraction: float = 0.0
    details: Dict[str, Any] = None


def _fraction(count: int, df: pd.DataFrame) -> float:
    return count / len(df) if len(df) > 0 else 0.0


def _reference_row(df: pd.DataFrame, name: str) -> Optional[pd.Series]:
    rows = df[df["name"] == name]
    return rows.iloc[0] if len(rows) > 0 else None


def validate_stats_table(
    df: pd.DataFrame,
    config: Optional[ValidationConfig] = None,
) -> List[ValidationResult]:
    """
    Validate the parsed base-stats table.

    Checks:
    - total equals the sum of the six stats on every row
    - stats are non-negative
    - reference Pokemon has the known total
    """
    config = config or VALIDATION_CONFIG
    results = []

    mismatched = int((df[STAT_COLUMNS].sum(axis=1) != df["total"]).sum())
    results.append(ValidationResult(
        check_name="total_equals_stat_sum",
        passed=(mismatched == 0),
        message=f"{mismatched} rows where total != sum of stats",
        affected_count=mismatched,
        affected_fraction=_fraction(mismatched, df),
    ))

    negative = int((df[STAT_COLUMNS] < 0).any(axis=1).sum())
    results.append(ValidationResult(
        check_name="stats_non_negative",
        passed=(negative == 0),
        message=f"{negative} rows with a negative stat",
        affected_count=negative,
        affected_fraction=_fraction(negative, df),
    ))

    ref = _reference_row(df, config.stats_reference_name)
    if ref is None:
        passed, message = False, f"{config.stats_reference_name} not found"
    else:
        passed = int(ref["total"]) == config.stats_reference_total
        message = f"{config.stats_reference_name} total = {ref['total']} (expected {config.stats_reference_total})"
    results.append(ValidationResult(
        check_name="reference_total",
        passed=passed,
        message=message,
        affected_count=0 if passed else 1,
    ))

    return results


def validate_usage_table(
    df: pd.DataFrame,
    config: Optional[ValidationConfig] = None,
) -> List[ValidationResult]:
    """
    Validate the parsed usage table.

    Checks:
    - ranks unique and contiguous from 1
    - usage percent non-increasing in rank order
    - percents within [0, 1], counts non-negative
    - reference rank maps to the known count
    """
    config = config or VALIDATION_CONFIG
    results = []

    ranks = df["rank"]
    duplicates = int(ranks.duplicated().sum())
    expected = set(range(1, len(df) + 1))
    missing = sorted(expected - set(ranks))
    results.append(ValidationResult(
        check_name="rank_contiguous",
        passed=(duplicates == 0 and not missing),
        message=f"{duplicates} duplicate ranks, {len(missing)} gaps in 1..{len(df)}",
        affected_count=duplicates + len(missing),
        affected_fraction=_fraction(duplicates + len(missing), df),
        details={"missing_ranks": missing[:20]},
    ))

    by_rank = df.sort_values("rank", kind="mergesort")["usage_pct"].reset_index(drop=True)
    inversions = int((by_rank.diff() > 0).sum())
    results.append(ValidationResult(
        check_name="rank_follows_usage",
        passed=(inversions == 0),
        message=f"{inversions} rows with higher usage than the rank above",
        affected_count=inversions,
        affected_fraction=_fraction(inversions, df),
    ))

    out_of_bounds = int(
        ((df[USAGE_PERCENT_COLUMNS] < config.min_rate) | (df[USAGE_PERCENT_COLUMNS] > config.max_rate))
        .any(axis=1).sum()
    )
    results.append(ValidationResult(
        check_name="percent_bounds",
        passed=(out_of_bounds == 0),
        message=f"{out_of_bounds} rows with a percent outside [{config.min_rate}, {config.max_rate}]",
        affected_count=out_of_bounds,
        affected_fraction=_fraction(out_of_bounds, df),
    ))

    negative = int((df[["raw", "real"]] < 0).any(axis=1).sum())
    results.append(ValidationResult(
        check_name="counts_non_negative",
        passed=(negative == 0),
        message=f"{negative} rows with a negative count",
        affected_count=negative,
        affected_fraction=_fraction(negative, df),
    ))

    ref = df[df["rank"] == config.usage_reference_rank]
    col = config.usage_reference_column
    if len(ref) == 0:
        passed, message = False, f"rank {config.usage_reference_rank} not found"
    else:
        value = ref.iloc[0][col]
        passed = int(value) == config.usage_reference_value
        message = f"rank {config.usage_reference_rank} {col} = {value} (expected {config.usage_reference_value})"
    results.append(ValidationResult(
        check_name="reference_count",
        passed=passed,
        message=message,
        affected_count=0 if passed else 1,
    ))

    return results


def validate_types_table(
    df: pd.DataFrame,
    config: Optional[ValidationConfig] = None,
) -> List[ValidationResult]:
    """
    Validate the parsed type table.

    Checks:
    - type1 present and a known elemental type
    - type2, when present, is known and differs from type1
    - reference rows (a Water primary, a monotype)
    """
    config = config or VALIDATION_CONFIG
    results = []

    unknown = ~df["type1"].isin(POKEMON_TYPES)
    results.append(ValidationResult(
        check_name="type1_known",
        passed=bool(unknown.sum() == 0),
        message=f"{int(unknown.sum())} rows with missing or unknown type1",
        affected_count=int(unknown.sum()),
        affected_fraction=_fraction(int(unknown.sum()), df),
        details={"values": sorted(df.loc[unknown, "type1"].dropna().unique().tolist())[:20]},
    ))

    type2 = df["type2"].dropna()
    unknown2 = int((~type2.isin(POKEMON_TYPES)).sum())
    results.append(ValidationResult(
        check_name="type2_known",
        passed=(unknown2 == 0),
        message=f"{unknown2} rows with unknown type2",
        affected_count=unknown2,
        affected_fraction=_fraction(unknown2, df),
    ))

    repeated = int((df["type2"] == df["type1"]).sum())
    results.append(ValidationResult(
        check_name="type2_differs_from_type1",
        passed=(repeated == 0),
        message=f"{repeated} rows where type2 repeats type1",
        affected_count=repeated,
        affected_fraction=_fraction(repeated, df),
    ))

    ref = _reference_row(df, config.types_reference_name)
    if ref is None:
        passed, message = False, f"{config.types_reference_name} not found"
    else:
        passed = ref["type1"] == config.types_reference_type1
        message = f"{config.types_reference_name} type1 = {ref['type1']} (expected {config.types_reference_type1})"
    results.append(ValidationResult(
        check_name="reference_type1",
        passed=passed,
        message=message,
        affected_count=0 if passed else 1,
    ))

    mono = _reference_row(df, config.types_monotype_name)
    if mono is None:
        passed, message = False, f"{config.types_monotype_name} not found"
    else:
        passed = pd.isna(mono["type2"])
        message = f"{config.types_monotype_name} type2 = {mono['type2']} (expected absent)"
    results.append(ValidationResult(
        check_name="reference_monotype",
        passed=passed,
        message=message,
        affected_count=0 if passed else 1,
    ))

    return results


def validate_merged_table(
    merged: pd.DataFrame,
    sources: Dict[str, pd.DataFrame],
    config: Optional[ValidationConfig] = None,
) -> List[ValidationResult]:
    """
    Validate the joined dataset against its sources.

    Checks:
    - standardized stats sum to 1 on every row
    - every merged name exists in all sources
    - distinct merged names do not exceed the smallest source
    - has_type2 agrees with type2
    """
    config = config or VALIDATION_CONFIG
    results = []

    sums = merged[STANDARDIZED_COLUMNS].sum(axis=1)
    off = int((~np.isclose(sums, 1.0, atol=config.ratio_tolerance)).sum())
    results.append(ValidationResult(
        check_name="standardized_sum_to_one",
        passed=(off == 0),
        message=f"{off} rows where standardized stats do not sum to 1",
        affected_count=off,
        affected_fraction=_fraction(off, merged),
    ))

    names = set(merged["name"])
    orphans = {
        source: sorted(names - set(df["name"].dropna()))
        for source, df in sources.items()
    }
    n_orphans = sum(len(v) for v in orphans.values())
    results.append(ValidationResult(
        check_name="names_in_all_sources",
        passed=(n_orphans == 0),
        message=f"{n_orphans} merged names missing from a source",
        affected_count=n_orphans,
        details=orphans,
    ))

    smallest = min(df["name"].nunique() for df in sources.values())
    results.append(ValidationResult(
        check_name="inner_join_size",
        passed=(len(names) <= smallest),
        message=f"{len(names):,} distinct merged names vs smallest source {smallest:,}",
    ))

    disagree = int((merged["has_type2"] != merged["type2"].notna()).sum())
    results.append(ValidationResult(
        check_name="has_type2_consistent",
        passed=(disagree == 0),
        message=f"{disagree} rows where has_type2 disagrees with type2",
        affected_count=disagree,
        affected_fraction=_fraction(disagree, merged),
    ))

    return results


def raise_for_failures(source_name: str, results: List[ValidationResult]) -> None:
    """Log every check and raise SchemaIntegrityError if any failed."""
    for r in results:
        if r.passed:
            logger.info(f"  ✓ {r.check_name}: {r.message}")
        else:
            logger.error(f"  ✗ {r.check_name}: {r.message}")

    failures = [r for r in results if not r.passed]
    if failures:
        raise SchemaIntegrityError(source_name, failures)
