"""
Global configuration for the Pokemon stats/usage/type report.

Implements project conventions for:
- File paths and output locations
- Source URLs and the page layouts the parsers assume
- Canonical column schemas for every table
- Reference values used by the post-parse integrity checks
"""

from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, List, Set, Tuple

# =============================================================================
# PATH CONFIGURATION
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent
OUTPUT_DIR = PROJECT_ROOT / "output"
TABLES_DIR = OUTPUT_DIR / "tables"
FIGURES_DIR = OUTPUT_DIR / "figures"

# =============================================================================
# DATA SOURCE URLS
# =============================================================================

SOURCE_URLS = {
    "stats": "https://bulbapedia.bulbagarden.net/wiki/List_of_Pok%C3%A9mon_by_base_stats_(Generation_VIII-present)",
    "usage": "https://www.smogon.com/stats/2019-06/gen7ou-0.txt",
    "types": "https://bulbapedia.bulbagarden.net/wiki/List_of_Pok%C3%A9mon_by_National_Pok%C3%A9dex_number",
}

FETCH_TIMEOUT = 60
FETCH_ENCODING = "utf-8"
USER_AGENT = "pokecorr/0.1 (exploratory report)"

# =============================================================================
# CANONICAL SCHEMAS
# =============================================================================

STAT_COLUMNS: List[str] = ["HP", "Atk", "Def", "SpA", "SpD", "Speed"]
STANDARDIZED_COLUMNS: List[str] = [f"s_{c}" for c in STAT_COLUMNS]

STATS_TABLE_COLUMNS: List[str] = ["name"] + STAT_COLUMNS + ["total", "average"]
USAGE_TABLE_COLUMNS: List[str] = [
    "rank", "name", "usage_pct", "raw", "raw_pct", "real", "real_pct",
]
TYPES_TABLE_COLUMNS: List[str] = ["name", "type1", "type2"]

USAGE_PERCENT_COLUMNS: List[str] = ["usage_pct", "raw_pct", "real_pct"]
USAGE_COUNT_COLUMNS: List[str] = ["rank", "raw", "real"]

MERGED_COLUMNS: List[str] = (
    STATS_TABLE_COLUMNS
    + [c for c in USAGE_TABLE_COLUMNS if c != "name"]
    + ["type1", "type2"]
    + STANDARDIZED_COLUMNS
    + ["has_type2"]
)

POKEMON_TYPES: Set[str] = {
    "Normal", "Fire", "Water", "Grass", "Electric", "Ice",
    "Fighting", "Poison", "Ground", "Flying", "Psychic", "Bug",
    "Rock", "Ghost", "Dragon", "Dark", "Steel", "Fairy",
}

# =============================================================================
# SOURCE LAYOUT ASSUMPTIONS
# =============================================================================

@dataclass
class SourceLayout:
    """
    Structural assumptions about the three fetched documents.

    Tables are located by their header cells first; the fixed indices are
    only used when no table carries the expected headers.
    """

    # Bulbapedia base stats list (Generation VIII-present revision):
    # columns are #, sprite, Pokémon, HP, Attack, Defense, Sp. Atk,
    # Sp. Def, Speed, Total, Average.
    stats_table_headers: Set[str] = field(default_factory=lambda: {
        "Pokémon", "HP", "Attack", "Defense", "Sp. Atk", "Sp. Def",
        "Speed", "Total", "Average",
    })
    stats_table_fallback_index: int = 1
    stats_column_range: Tuple[int, int] = (2, 11)

    # Smogon monthly usage report: two banner lines, a rule, the header
    # row and a second rule precede the data; a closing rule follows it.
    # Each row is framed by "|" so the first and last fields are empty.
    usage_delimiter: str = "|"
    usage_header_rows: int = 5
    usage_footer_rows: int = 1
    usage_column_range: Tuple[int, int] = (1, 8)

    # Bulbapedia national dex list: one table per generation with columns
    # Ndex, MS, Pokémon, Type (colspan 2). A monotype row spans both type
    # cells, so it parses as a duplicated primary type.
    types_table_headers: Set[str] = field(default_factory=lambda: {
        "Pokémon", "Type",
    })
    types_table_fallback_indices: Tuple[int, ...] = (1, 2, 3, 4, 5, 6, 7, 8, 9)
    types_column_range: Tuple[int, int] = (2, 5)


SOURCE_LAYOUT = SourceLayout()

# =============================================================================
# VALIDATION CONFIGURATION
# =============================================================================

@dataclass
class ValidationConfig:
    """Reference values that must hold after each source is parsed."""

    stats_reference_name: str = "Arceus"
    stats_reference_total: int = 720

    usage_reference_rank: int = 30
    usage_reference_column: str = "real"
    usage_reference_value: int = 162853

    types_reference_name: str = "Poliwrath"
    types_reference_type1: str = "Water"
    types_monotype_name: str = "Ditto"

    # Tolerance for standardized stats summing to 1
    ratio_tolerance: float = 1e-9

    # Percent bounds
    min_rate: float = 0.0
    max_rate: float = 1.0


VALIDATION_CONFIG = ValidationConfig()

# =============================================================================
# REPORT CONFIGURATION
# =============================================================================

@dataclass
class ReportConfig:
    """Configuration for the analysis and rendering stages."""

    # Degree of the rank ~ total polynomial fit
    poly_degree: int = 2

    # Correlation method for the stat/rank correlation table
    correlation_method: str = "spearman"

    # Minimum observations for a type to enter group tests and boxplots
    min_group_size: int = 3

    # Rows shown in the most-used table
    top_n: int = 20

    figure_dpi: int = 150
    grid_figsize: Tuple[int, int] = (14, 9)
    single_figsize: Tuple[int, int] = (10, 6)

    stat_labels: Dict[str, str] = field(default_factory=lambda: {
        "HP": "HP",
        "Atk": "Attack",
        "Def": "Defense",
        "SpA": "Sp. Attack",
        "SpD": "Sp. Defense",
        "Speed": "Speed",
    })


REPORT_CONFIG = ReportConfig()
