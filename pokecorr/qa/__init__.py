"""Quality assurance utilities."""

from .validators import (
    ValidationResult,
    validate_stats_table,
    validate_usage_table,
    validate_types_table,
    validate_merged_table,
    raise_for_failures,
)
from .reporters import generate_qa_report

__all__ = [
    "ValidationResult",
    "validate_stats_table",
    "validate_usage_table",
    "validate_types_table",
    "validate_merged_table",
    "raise_for_failures",
    "generate_qa_report",
]
