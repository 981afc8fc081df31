"""
Validation Tests.

Each source validator passes on a well-formed parse and flags the
specific check that a corrupted table breaks. raise_for_failures turns
failures into SchemaIntegrityError.
"""

import pytest

from pokecorr.assembly import assemble_merged_dataset
from pokecorr.config import ValidationConfig
from pokecorr.exceptions import SchemaIntegrityError
from pokecorr.parsing import parse_stats, parse_types, parse_usage
from pokecorr.qa import (
    ValidationResult,
    raise_for_failures,
    validate_merged_table,
    validate_stats_table,
    validate_types_table,
    validate_usage_table,
)


def _by_name(results):
    return {r.check_name: r for r in results}


@pytest.fixture
def stats_df(stats_html):
    return parse_stats(stats_html)


@pytest.fixture
def usage_df(usage_text):
    return parse_usage(usage_text)


@pytest.fixture
def types_df(types_html):
    return parse_types(types_html)


class TestStatsValidation:

    def test_clean_table_passes(self, stats_df):
        results = validate_stats_table(stats_df)
        assert all(r.passed for r in results), [r.message for r in results if not r.passed]

    def test_total_mismatch(self, stats_df):
        stats_df.loc[0, "total"] += 1
        results = _by_name(validate_stats_table(stats_df))
        assert not results["total_equals_stat_sum"].passed
        assert results["total_equals_stat_sum"].affected_count == 1

    def test_negative_stat(self, stats_df):
        stats_df.loc[0, "HP"] = -5
        results = _by_name(validate_stats_table(stats_df))
        assert not results["stats_non_negative"].passed

    def test_reference_missing(self, stats_df):
        df = stats_df[stats_df["name"] != "Arceus"]
        results = _by_name(validate_stats_table(df))
        assert not results["reference_total"].passed
        assert "not found" in results["reference_total"].message

    def test_reference_total_configurable(self, stats_df):
        config = ValidationConfig(stats_reference_name="Ditto", stats_reference_total=288)
        results = _by_name(validate_stats_table(stats_df, config))
        assert results["reference_total"].passed


class TestUsageValidation:

    def test_clean_table_passes(self, usage_df):
        results = validate_usage_table(usage_df)
        assert all(r.passed for r in results), [r.message for r in results if not r.passed]

    def test_rank_gap(self, usage_df):
        df = usage_df[usage_df["rank"] != 4].reset_index(drop=True)
        results = _by_name(validate_usage_table(df))
        assert not results["rank_contiguous"].passed

    def test_duplicate_rank(self, usage_df):
        usage_df.loc[5, "rank"] = 5
        results = _by_name(validate_usage_table(usage_df))
        assert not results["rank_contiguous"].passed

    def test_usage_out_of_rank_order(self, usage_df):
        usage_df.loc[10, "usage_pct"] = 0.99
        results = _by_name(validate_usage_table(usage_df))
        assert not results["rank_follows_usage"].passed
        assert results["rank_follows_usage"].affected_count == 1
        assert results["percent_bounds"].passed

    def test_percent_out_of_bounds(self, usage_df):
        usage_df.loc[0, "usage_pct"] = 34.1
        results = _by_name(validate_usage_table(usage_df))
        assert not results["percent_bounds"].passed
        assert results["percent_bounds"].affected_count == 1

    def test_reference_count_mismatch(self, usage_df):
        config = ValidationConfig(usage_reference_value=1)
        results = _by_name(validate_usage_table(usage_df, config))
        assert not results["reference_count"].passed

    def test_reference_count_on_raw(self, usage_df):
        config = ValidationConfig(usage_reference_column="raw", usage_reference_value=182853)
        results = _by_name(validate_usage_table(usage_df, config))
        assert results["reference_count"].passed


class TestTypesValidation:

    def test_clean_table_passes(self, types_df):
        results = validate_types_table(types_df)
        assert all(r.passed for r in results), [r.message for r in results if not r.passed]

    def test_unknown_type1(self, types_df):
        types_df.loc[0, "type1"] = "Sound"
        results = _by_name(validate_types_table(types_df))
        assert not results["type1_known"].passed
        assert results["type1_known"].details["values"] == ["Sound"]

    def test_missing_type1(self, types_df):
        types_df.loc[0, "type1"] = None
        results = _by_name(validate_types_table(types_df))
        assert not results["type1_known"].passed

    def test_repeated_type2(self, types_df):
        types_df.loc[types_df["name"] == "Ditto", "type2"] = "Normal"
        results = _by_name(validate_types_table(types_df))
        assert not results["type2_differs_from_type1"].passed
        assert not results["reference_monotype"].passed

    def test_wrong_reference_type(self, types_df):
        types_df.loc[types_df["name"] == "Poliwrath", "type1"] = "Fighting"
        results = _by_name(validate_types_table(types_df))
        assert not results["reference_type1"].passed


class TestMergedValidation:

    @pytest.fixture
    def sources(self, stats_df, usage_df, types_df):
        return {"stats": stats_df, "usage": usage_df, "types": types_df}

    @pytest.fixture
    def merged(self, sources):
        return assemble_merged_dataset(sources["stats"], sources["usage"], sources["types"])

    def test_clean_merge_passes(self, merged, sources):
        results = validate_merged_table(merged, sources)
        assert all(r.passed for r in results), [r.message for r in results if not r.passed]

    def test_standardized_off(self, merged, sources):
        merged.loc[0, "s_HP"] += 0.1
        results = _by_name(validate_merged_table(merged, sources))
        assert not results["standardized_sum_to_one"].passed

    def test_orphan_name(self, merged, sources):
        merged.loc[0, "name"] = "Unknown"
        results = _by_name(validate_merged_table(merged, sources))
        assert not results["names_in_all_sources"].passed
        assert results["names_in_all_sources"].details["stats"] == ["Unknown"]

    def test_has_type2_disagrees(self, merged, sources):
        merged.loc[0, "has_type2"] = not merged.loc[0, "has_type2"]
        results = _by_name(validate_merged_table(merged, sources))
        assert not results["has_type2_consistent"].passed


class TestRaiseForFailures:

    def test_all_passed_is_silent(self):
        raise_for_failures("stats", [ValidationResult("a", True, "ok")])

    def test_failure_raises_with_checks(self):
        results = [
            ValidationResult("a", True, "ok"),
            ValidationResult("b", False, "broken"),
        ]
        with pytest.raises(SchemaIntegrityError) as exc:
            raise_for_failures("usage", results)
        assert exc.value.source_name == "usage"
        assert [f.check_name for f in exc.value.failures] == ["b"]
        assert "b: broken" in str(exc.value)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
