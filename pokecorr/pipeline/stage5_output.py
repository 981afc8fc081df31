"""
Stage 5: Write Output

Renders the report artifacts.

Outputs:
    - Markdown tables (tables/*.md) and a combined report.md
    - merged_dataset.csv
    - Figures (PNG format)
    - qa_report.md
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from pokecorr.analyses.tables import add_significance, render_section
from pokecorr.config import OUTPUT_DIR, STAT_COLUMNS
from pokecorr.pipeline.stage3_merge import MergeResult
from pokecorr.qa.reporters import generate_qa_report
from pokecorr.qa.validators import ValidationResult
from pokecorr.utils.io import ensure_dir, save_csv, write_text

logger = logging.getLogger(__name__)


def poly_fit_table(fit) -> pd.DataFrame:
    """Coefficient table for the polynomial fit."""
    terms = ["const"] + [f"total^{k}" if k > 1 else "total" for k in range(1, fit.degree + 1)]
    return pd.DataFrame({
        "term": terms,
        "coef": fit.params,
        "p_value": fit.pvalues,
    })


def build_table_sections(analysis: Dict[str, Any]) -> List[tuple]:
    """(filename, title, note, table, index) for every markdown table."""
    fit = analysis["poly_fit"]
    if fit.estimated:
        fit_note = f"R² = {fit.rsquared:.4f}, n = {fit.nobs:,}"
    else:
        fit_note = f"Not estimated: n = {fit.nobs:,} is too few observations for degree {fit.degree}."
    return [
        ("summary.md", "Summary Statistics", "", analysis["summary"], False),
        ("top_used.md", "Most Used Pokemon", "Usage percent as a fraction.", analysis["top_used"], False),
        ("correlations.md", "Correlation with Usage Rank",
         "Rank 1 is the most used: negative coefficients mean higher values go with more use.",
         add_significance(analysis["correlations"]), False),
        ("correlation_matrix.md", "Correlation Matrix", "", analysis["correlation_matrix"], True),
        ("poly_fit.md", f"Rank on Base Stat Total (degree {fit.degree})",
         fit_note, add_significance(poly_fit_table(fit)), False),
        ("regressions_raw.md", "Rank on Each Stat", "",
         add_significance(analysis["regressions_raw"]), False),
        ("regressions_standardized.md", "Rank on Each Standardized Stat", "",
         add_significance(analysis["regressions_standardized"]), False),
        ("type_counts.md", "Type Composition", "", analysis["type_counts"], False),
        ("group_tests.md", "Rank by Type", "", add_significance(analysis["group_tests"]), False),
    ]


def generate_tables_md(analysis: Dict[str, Any], tables_dir: Path) -> List[str]:
    """Write each analysis table as markdown; return the combined report body."""
    logger.info("Generating markdown tables...")

    sections = []
    for filename, title, note, table, index in build_table_sections(analysis):
        content = render_section(title, table, note=note, index=index)
        write_text(content, tables_dir / filename)
        sections.append(content)

    return sections


def run_output(
    merge_result: MergeResult,
    analysis: Dict[str, Any],
    validations: Dict[str, List[ValidationResult]],
    output_dir: Optional[Path] = None,
    include_figures: bool = True,
) -> dict:
    """
    Run the output generation stage.

    Args:
        merge_result: Output of run_merge
        analysis: Output of run_analyze
        validations: Source validation results from run_clean
        output_dir: Root output directory (defaults to OUTPUT_DIR)
        include_figures: Also render the PNG figures

    Returns:
        dict: Paths of everything written
    """
    logger.info("=" * 60)
    logger.info("STAGE 5: WRITE OUTPUT")
    logger.info("=" * 60)

    output_dir = ensure_dir(Path(output_dir or OUTPUT_DIR))
    tables_dir = ensure_dir(output_dir / "tables")
    figures_dir = output_dir / "figures"
    merged = merge_result.merged

    results = {
        "tables": [],
        "report": None,
        "dataset": None,
        "figures": [],
        "qa_report": None,
    }

    sections = generate_tables_md(analysis, tables_dir)
    results["tables"] = sorted(str(p) for p in tables_dir.glob("*.md"))

    header = (
        "# Pokemon Stats, Usage and Type Report\n\n"
        f"{len(merged):,} Pokemon present in all three sources. "
        f"Stats: {', '.join(STAT_COLUMNS)}.\n"
    )
    results["report"] = str(write_text(header + "\n" + "\n".join(sections), output_dir / "report.md"))

    results["dataset"] = str(save_csv(merged, output_dir / "merged_dataset.csv"))

    if include_figures:
        from pokecorr.analyses.plots import generate_all_figures

        logger.info("Rendering figures...")
        paths = generate_all_figures(merged, figures_dir, fit=analysis.get("poly_fit"))
        results["figures"] = [str(p) for p in paths]
        for p in paths:
            logger.info(f"  - {p.name}")

    all_validations = {**validations, "merged": merge_result.validations}
    generate_qa_report(
        all_validations,
        coverage=merge_result.coverage,
        merged=merged,
        output_path=output_dir / "qa_report.md",
    )
    results["qa_report"] = str(output_dir / "qa_report.md")

    logger.info(f"Stage 5 complete: {len(results['tables'])} tables, {len(results['figures'])} figures")
    logger.info(f"  Output directory: {output_dir}")

    return results
