"""
Stage 1: Data Pull

Fetches the three source documents, one after another.

Data Sources:
    - Base stats list (Bulbapedia, HTML)
    - Monthly usage report (Smogon, delimited text)
    - National dex type list (Bulbapedia, HTML, one table per generation)
"""

import logging
from typing import Dict, Optional

import requests

from pokecorr.download.fetcher import FetchedDocument, fetch_all_documents

logger = logging.getLogger(__name__)


def run_pull(
    session: Optional[requests.Session] = None,
    urls: Optional[Dict[str, str]] = None,
) -> Dict[str, FetchedDocument]:
    """
    Run the data pull stage.

    Args:
        session: Optional requests session for the three fetches
        urls: Optional per-source URL overrides

    Returns:
        dict: Source name → FetchedDocument

    Raises:
        FetchError: The first source that could not be retrieved
    """
    logger.info("=" * 60)
    logger.info("STAGE 1: DATA PULL")
    logger.info("=" * 60)

    documents = fetch_all_documents(session=session, urls=urls)

    logger.info(f"Stage 1 complete: {len(documents)}/3 sources fetched")
    return documents
