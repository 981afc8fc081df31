"""
Pokecorr - Pokemon stats, usage and type correlation report.

Scrapes base stats, competitive usage rankings and type assignments,
joins them into one dataset keyed by name, and renders descriptive
statistics, regressions and figures.

Public API
----------
Core configuration:
    PROJECT_ROOT, OUTPUT_DIR, SOURCE_URLS
    SOURCE_LAYOUT, VALIDATION_CONFIG, REPORT_CONFIG

Fetching:
    fetch_document, FetchedDocument

Parsing:
    parse_stats, parse_usage, parse_types

Assembly:
    assemble_merged_dataset

Pipeline:
    run_full_pipeline
"""

__version__ = "0.1"


# Re-export core configuration
from .config import (
    PROJECT_ROOT,
    OUTPUT_DIR,
    SOURCE_URLS,
    SOURCE_LAYOUT,
    VALIDATION_CONFIG,
    REPORT_CONFIG,
)

from .exceptions import PipelineError, FetchError, SchemaIntegrityError, TypeCoercionError

from .download import fetch_document, FetchedDocument

from .parsing import parse_stats, parse_usage, parse_types

from .assembly import assemble_merged_dataset


# Pipeline imported lazily (pulls in statsmodels and matplotlib)
def run_full_pipeline(*args, **kwargs):
    """Run all five stages. See pokecorr.pipeline.runner for details."""
    from .pipeline.runner import run_full_pipeline as _run
    return _run(*args, **kwargs)


__all__ = [
    # Version
    "__version__",
    # Configuration
    "PROJECT_ROOT",
    "OUTPUT_DIR",
    "SOURCE_URLS",
    "SOURCE_LAYOUT",
    "VALIDATION_CONFIG",
    "REPORT_CONFIG",
    # Errors
    "PipelineError",
    "FetchError",
    "SchemaIntegrityError",
    "TypeCoercionError",
    # Fetching
    "fetch_document",
    "FetchedDocument",
    # Parsing
    "parse_stats",
    "parse_usage",
    "parse_types",
    # Assembly
    "assemble_merged_dataset",
    # Pipeline
    "run_full_pipeline",
]
