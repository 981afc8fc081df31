#!/usr/bin/env python3
"""
Pokemon Stats / Usage / Type Report - Main Runner

Usage:
    python run_pipeline.py                       # Fetch, merge, analyse, render
    python run_pipeline.py --output-dir out/     # Render somewhere else
    python run_pipeline.py --no-figures          # Tables, CSV and QA report only
"""

import argparse
import logging
import sys
from pathlib import Path

# Allow running from a checkout without installing
sys.path.insert(0, str(Path(__file__).parent))

from pokecorr.config import OUTPUT_DIR
from pokecorr.exceptions import PipelineError


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Scrape Pokemon stats, usage and types; render the correlation report"
    )
    parser.add_argument(
        "--output-dir", type=Path, default=OUTPUT_DIR,
        help=f"Directory for tables, figures and the QA report (default: {OUTPUT_DIR})"
    )
    parser.add_argument(
        "--no-figures", action="store_true",
        help="Skip rendering figures"
    )
    parser.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger = logging.getLogger(__name__)

    from pokecorr.pipeline import run_full_pipeline

    try:
        run_full_pipeline(output_dir=args.output_dir, include_figures=not args.no_figures)
    except PipelineError as e:
        logger.error(f"Pipeline aborted: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
