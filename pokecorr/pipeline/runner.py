"""
Pipeline Runner

Orchestrates the 5-stage report pipeline. Each stage returns its result
and the runner hands it to the next stage; nothing is shared between
stages except these return values.

Stages:
    1. PULL    - Fetch the three source documents
    2. CLEAN   - Parse and validate each source
    3. MERGE   - Join into the merged dataset
    4. ANALYZE - Descriptive statistics, correlations, regressions
    5. OUTPUT  - Markdown tables, CSV, figures, QA report
"""

import logging
import time
from pathlib import Path
from typing import Dict, Optional

import requests

from pokecorr.download.fetcher import FetchedDocument

logger = logging.getLogger(__name__)


def run_full_pipeline(
    documents: Optional[Dict[str, FetchedDocument]] = None,
    output_dir: Optional[Path] = None,
    include_figures: bool = True,
    skip_output: bool = False,
    session: Optional[requests.Session] = None,
) -> dict:
    """
    Run the complete pipeline.

    Args:
        documents: Already-fetched source documents; Stage 1 is skipped when given
        output_dir: Root directory for Stage 5 artifacts
        include_figures: Render figures in Stage 5
        skip_output: Stop after Stage 4 (nothing written to disk)
        session: Optional requests session for Stage 1

    Returns:
        dict: Results from all stages

    Raises:
        PipelineError: Any fetch, integrity or coercion failure stops the run
    """
    from .stage1_pull import run_pull
    from .stage2_clean import run_clean
    from .stage3_merge import run_merge
    from .stage4_analyze import run_analyze
    from .stage5_output import run_output

    start_time = time.time()

    logger.info("=" * 70)
    logger.info("POKEMON STATS / USAGE / TYPE REPORT")
    logger.info("=" * 70)

    results = {
        "stage1_pull": None,
        "stage2_clean": None,
        "stage3_merge": None,
        "stage4_analyze": None,
        "stage5_output": None,
    }

    if documents is None:
        documents = run_pull(session=session)
    else:
        logger.info("Skipping Stage 1: using provided documents")
    results["stage1_pull"] = documents

    cleaned = run_clean(documents)
    results["stage2_clean"] = cleaned

    merge_result = run_merge(cleaned)
    results["stage3_merge"] = merge_result

    analysis = run_analyze(merge_result.merged)
    results["stage4_analyze"] = analysis

    if not skip_output:
        results["stage5_output"] = run_output(
            merge_result,
            analysis,
            cleaned.validations,
            output_dir=output_dir,
            include_figures=include_figures,
        )
    else:
        logger.info("Skipping Stage 5: Write Output")

    elapsed = time.time() - start_time

    logger.info("=" * 70)
    logger.info("PIPELINE COMPLETE")
    logger.info("=" * 70)
    logger.info(f"Total time: {elapsed:.1f} seconds")

    stages_run = sum(1 for v in results.values() if v is not None)
    logger.info(f"Stages completed: {stages_run}/5")

    return results
