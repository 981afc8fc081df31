"""
Merge Tests.

Covers:
1. Inner join keeps only names present in all three sources.
2. Derived fields: standardized stats, has_type2.
3. Deterministic ordering (rank, then name) independent of input order.
4. Duplicate keys are not resolved: one row per combination.
5. Join coverage reports the dropped names per source.
"""

import numpy as np
import pandas as pd
import pytest

from pokecorr.assembly import (
    add_standardized_stats,
    add_type2_flag,
    assemble_merged_dataset,
    compute_join_coverage,
)
from pokecorr.config import MERGED_COLUMNS, STANDARDIZED_COLUMNS, STAT_COLUMNS
from pokecorr.parsing import parse_stats, parse_types, parse_usage

from conftest import MERGED_NAMES


@pytest.fixture
def sources(stats_html, usage_text, types_html):
    return {
        "stats": parse_stats(stats_html),
        "usage": parse_usage(usage_text),
        "types": parse_types(types_html),
    }


@pytest.fixture
def merged(sources):
    return assemble_merged_dataset(sources["stats"], sources["usage"], sources["types"])


def _tiny_sources():
    stats = pd.DataFrame({
        "name": ["Rotom", "Ditto"],
        "HP": [50, 48], "Atk": [50, 48], "Def": [77, 48],
        "SpA": [95, 48], "SpD": [77, 48], "Speed": [91, 48],
        "total": [440, 288], "average": [73.33, 48.0],
    })
    usage = pd.DataFrame({
        "rank": [1, 2], "name": ["Ditto", "Rotom"],
        "usage_pct": [0.2, 0.1], "raw": [200, 100], "raw_pct": [0.2, 0.1],
        "real": [150, 90], "real_pct": [0.15, 0.09],
    })
    types = pd.DataFrame({
        "name": ["Rotom", "Rotom", "Ditto"],
        "type1": ["Electric", "Electric", "Normal"],
        "type2": ["Ghost", "Fire", None],
    })
    return stats, usage, types


class TestAssembly:

    def test_only_common_names(self, merged):
        assert set(merged["name"]) == MERGED_NAMES
        assert len(merged) == len(MERGED_NAMES)

    def test_alternate_spelling_dropped(self, merged):
        assert "Landorus-Therian" not in set(merged["name"])
        assert "Landorus" not in set(merged["name"])

    def test_schema(self, merged):
        assert list(merged.columns) == MERGED_COLUMNS

    def test_sorted_by_rank(self, merged):
        assert merged["rank"].is_monotonic_increasing
        assert merged.loc[0, "name"] == "Toxapex"

    def test_standardized_stats(self, merged):
        sums = merged[STANDARDIZED_COLUMNS].sum(axis=1)
        assert np.allclose(sums, 1.0)
        row = merged.set_index("name").loc["Arceus"]
        for col in STAT_COLUMNS:
            assert row[f"s_{col}"] == pytest.approx(1 / 6)

    def test_has_type2(self, merged):
        by_name = merged.set_index("name")
        assert not by_name.loc["Arceus", "has_type2"]
        assert not by_name.loc["Clefable", "has_type2"]
        assert by_name.loc["Poliwrath", "has_type2"]
        assert (merged["has_type2"] == merged["type2"].notna()).all()

    def test_usage_values_carried(self, merged):
        row = merged.set_index("name").loc["Arceus"]
        assert row["rank"] == 15
        assert row["type1"] == "Normal"
        assert row["total"] == 720

    def test_idempotent(self, sources):
        a = assemble_merged_dataset(sources["stats"], sources["usage"], sources["types"])
        b = assemble_merged_dataset(sources["stats"], sources["usage"], sources["types"])
        pd.testing.assert_frame_equal(a, b)

    def test_input_order_irrelevant(self, sources, merged):
        shuffled = {k: df.sample(frac=1.0, random_state=7) for k, df in sources.items()}
        out = assemble_merged_dataset(shuffled["stats"], shuffled["usage"], shuffled["types"])
        pd.testing.assert_frame_equal(out, merged)

    def test_duplicate_key_cartesian(self):
        stats, usage, types = _tiny_sources()
        out = assemble_merged_dataset(stats, usage, types)
        assert len(out) == 3
        assert (out["name"] == "Rotom").sum() == 2
        assert set(out.loc[out["name"] == "Rotom", "type2"]) == {"Ghost", "Fire"}

    def test_empty_intersection(self):
        stats, usage, types = _tiny_sources()
        usage = usage.assign(name=["A", "B"])
        out = assemble_merged_dataset(stats, usage, types)
        assert len(out) == 0
        assert list(out.columns) == MERGED_COLUMNS

    def test_inputs_not_mutated(self):
        stats, usage, types = _tiny_sources()
        before = stats.copy()
        add_standardized_stats(stats)
        add_type2_flag(types)
        pd.testing.assert_frame_equal(stats, before)
        assert "has_type2" not in types.columns


class TestJoinCoverage:

    def test_dropped_names(self, sources, merged):
        coverage = compute_join_coverage(sources, merged)
        assert coverage.merged_rows == len(merged)
        assert coverage.dropped_names["stats"] == ["Bulbasaur", "Ditto", "Landorus"]
        assert coverage.dropped_names["types"] == ["Bulbasaur", "Charmander", "Ditto", "Landorus"]
        assert "Landorus-Therian" in coverage.dropped_names["usage"]
        assert len(coverage.dropped_names["usage"]) == 35 - len(MERGED_NAMES)

    def test_retention(self, sources, merged):
        coverage = compute_join_coverage(sources, merged)
        assert coverage.source_rows["stats"] == 18
        assert coverage.retention("stats") == pytest.approx(15 / 18)
        assert coverage.retention("missing") == 0.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
