"""Shared utilities for the report pipeline."""

from .io import ensure_dir, save_csv, write_text

__all__ = [
    "ensure_dir",
    "save_csv",
    "write_text",
]
