"""Dataset assembly: joining the parsed sources."""

from .merged_assembly import (
    JoinCoverage,
    add_standardized_stats,
    add_type2_flag,
    assemble_merged_dataset,
    compute_join_coverage,
)

__all__ = [
    "JoinCoverage",
    "add_standardized_stats",
    "add_type2_flag",
    "assemble_merged_dataset",
    "compute_join_coverage",
]
