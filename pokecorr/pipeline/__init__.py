"""
Pokemon Report Pipeline - 5-Stage Architecture

The pipeline is organized into 5 sequential stages:
    1. PULL    - Fetch the stats, usage and type sources
    2. CLEAN   - Parse and validate each source
    3. MERGE   - Join into one row per Pokemon
    4. ANALYZE - Descriptive statistics and regressions
    5. OUTPUT  - Generate MD tables, CSV, figures and QA report

Usage:
    from pokecorr.pipeline import run_full_pipeline
    run_full_pipeline()

Or chain individual stages:
    from pokecorr.pipeline import run_pull, run_clean, run_merge, run_analyze, run_output
    documents = run_pull()
    cleaned = run_clean(documents)
    merge_result = run_merge(cleaned)
    analysis = run_analyze(merge_result.merged)
    run_output(merge_result, analysis, cleaned.validations)
"""

from .stage1_pull import run_pull
from .stage2_clean import CleanedSources, run_clean
from .stage3_merge import MergeResult, run_merge
from .stage4_analyze import run_analyze
from .stage5_output import run_output
from .runner import run_full_pipeline

__all__ = [
    "run_pull",
    "run_clean",
    "run_merge",
    "run_analyze",
    "run_output",
    "run_full_pipeline",
    "CleanedSources",
    "MergeResult",
]
