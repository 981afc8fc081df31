"""
Fetcher for the three report sources.

Each source is retrieved once with a single blocking GET. There is no
retry and no on-disk copy: a network or HTTP failure aborts the run.
The returned FetchedDocument records provenance (URL, UTC retrieval time,
SHA256 of the body) so the run log identifies exactly what was parsed.
"""

import hashlib
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional

import requests

from pokecorr.config import FETCH_ENCODING, FETCH_TIMEOUT, SOURCE_URLS, USER_AGENT
from pokecorr.exceptions import FetchError

logger = logging.getLogger(__name__)


@dataclass
class FetchedDocument:
    """A fetched source body with its provenance."""
    source_name: str
    url: str
    text: str
    retrieval_date_utc: str
    sha256: str

    @classmethod
    def from_text(cls, source_name: str, url: str, text: str) -> "FetchedDocument":
        """Wrap text that was obtained without a network call (e.g. a saved snapshot)."""
        return cls(
            source_name=source_name,
            url=url,
            text=text,
            retrieval_date_utc=datetime.now(timezone.utc).isoformat(),
            sha256=compute_text_hash(text),
        )


def compute_text_hash(text: str) -> str:
    """Compute SHA256 hash of a document body."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def fetch_document(
    source_name: str,
    url: Optional[str] = None,
    session: Optional[requests.Session] = None,
    timeout: int = FETCH_TIMEOUT,
) -> FetchedDocument:
    """
    Download a single source document.

    Args:
        source_name: Key into SOURCE_URLS ("stats", "usage" or "types")
        url: Override for the configured URL
        session: Optional requests session to reuse
        timeout: Request timeout in seconds

    Returns:
        FetchedDocument with the decoded body

    Raises:
        FetchError: On any connection, timeout or HTTP status error
    """
    if url is None:
        url = SOURCE_URLS[source_name]

    logger.info(f"Fetching {source_name} from {url}")

    getter = session.get if session is not None else requests.get
    try:
        response = getter(url, timeout=timeout, headers={"User-Agent": USER_AGENT})
        response.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(source_name, url, str(e)) from e

    # Bulbapedia pages are served as UTF-8; names carry accents (Pokémon, Flabébé)
    response.encoding = FETCH_ENCODING
    text = response.text

    document = FetchedDocument(
        source_name=source_name,
        url=url,
        text=text,
        retrieval_date_utc=datetime.now(timezone.utc).isoformat(),
        sha256=compute_text_hash(text),
    )
    logger.info(f"  Retrieved {len(text):,} chars (sha256 {document.sha256[:12]})")
    return document


def fetch_all_documents(
    session: Optional[requests.Session] = None,
    urls: Optional[Dict[str, str]] = None,
) -> Dict[str, FetchedDocument]:
    """
    Fetch the stats, usage and types documents strictly in sequence.

    Args:
        session: Optional requests session shared by the three fetches
        urls: Optional per-source URL overrides

    Returns:
        Dict mapping source name to FetchedDocument
    """
    urls = {**SOURCE_URLS, **(urls or {})}

    documents = {}
    for i, source_name in enumerate(["stats", "usage", "types"], start=1):
        logger.info(f"[{i}/3] Fetching {source_name} source...")
        documents[source_name] = fetch_document(source_name, urls[source_name], session=session)

    return documents
