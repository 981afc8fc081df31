"""Source document retrieval."""

from .fetcher import (
    FetchedDocument,
    compute_text_hash,
    fetch_document,
    fetch_all_documents,
)

__all__ = [
    "FetchedDocument",
    "compute_text_hash",
    "fetch_document",
    "fetch_all_documents",
]
