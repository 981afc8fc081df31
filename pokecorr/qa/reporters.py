"""
QA report generation for the merged dataset.

Produces qa_report.md with per-source validation results, join coverage
and missingness of the merged table.
"""

from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional
import logging

import pandas as pd

from pokecorr.assembly.merged_assembly import JoinCoverage
from pokecorr.config import OUTPUT_DIR
from pokecorr.qa.validators import ValidationResult

logger = logging.getLogger(__name__)

# Dropped names listed per source before truncation
MAX_DROPPED_LISTED = 50


def compute_missingness(df: pd.DataFrame) -> Dict[str, float]:
    """Compute missingness rate for each column."""
    return {
        col: df[col].isna().mean()
        for col in df.columns
    }


def _validation_section(title: str, results: List[ValidationResult]) -> List[str]:
    lines = [f"""
### {title}

| Check | Status | Details |
|-------|--------|---------|"""]
    for v in results:
        status = "✅ Pass" if v.passed else "❌ Fail"
        lines.append(f"| {v.check_name} | {status} | {v.message} |")
    return lines


def generate_qa_report(
    validations: Dict[str, List[ValidationResult]],
    coverage: Optional[JoinCoverage] = None,
    merged: Optional[pd.DataFrame] = None,
    output_path: Optional[Path] = None,
) -> str:
    """
    Generate the QA report.

    Args:
        validations: Validation results keyed by table name
        coverage: Join coverage from the merge stage
        merged: Merged dataset, for the missingness table
        output_path: Where to write the report (defaults to output/qa_report.md)

    Returns:
        Markdown report string
    """
    if output_path is None:
        output_path = OUTPUT_DIR / "qa_report.md"

    sections = [f"""# Data Quality Assurance Report

Generated: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}

This report summarizes validation checks and join coverage for the merged
stats / usage / type dataset.
"""]

    if coverage is not None:
        sections.append("""
## Join Coverage

| Source | Distinct names | Not merged | Retention |
|--------|----------------|------------|-----------|""")
        for source, n in coverage.source_rows.items():
            dropped = len(coverage.dropped_names.get(source, []))
            sections.append(f"| {source} | {n:,} | {dropped:,} | {coverage.retention(source):.1%} |")
        sections.append(f"\n**Merged rows**: {coverage.merged_rows:,}")

        for source, names in coverage.dropped_names.items():
            if not names:
                continue
            listed = ", ".join(names[:MAX_DROPPED_LISTED])
            more = f" … (+{len(names) - MAX_DROPPED_LISTED:,} more)" if len(names) > MAX_DROPPED_LISTED else ""
            sections.append(f"\n**{source} names not merged**: {listed}{more}")

    sections.append("""
## Validation Checks
""")
    for table_name, results in validations.items():
        sections.extend(_validation_section(table_name, results))

    if merged is not None:
        sections.append("""
## Merged Dataset Missingness

| Column | Missing |
|--------|---------|""")
        for col, rate in compute_missingness(merged).items():
            if rate > 0:
                sections.append(f"| {col} | {rate:.1%} |")

    report = "\n".join(sections) + "\n"

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(report, encoding="utf-8")
    logger.info(f"QA report written to {output_path}")

    return report
