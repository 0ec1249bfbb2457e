"""
Unit Tests for diversity_networks.core.filters

Tests for:
    - FilterConfig validation and key aliases
    - ExplorerParameters (citation window, tau clamping, YAML)
    - Per-category record selection
"""

import pytest

from diversity_networks.core.filters import (
    DEFAULT_TOP_N,
    DEFAULT_YEAR_RANGE,
    ExplorerParameters,
    FilterConfig,
    select_category,
    select_records,
)
from diversity_networks.core.models import Category, Record


# =============================================================================
# FilterConfig
# =============================================================================

class TestFilterConfig:

    def test_defaults(self):
        config = FilterConfig()
        assert config.year_range == DEFAULT_YEAR_RANGE
        assert config.top_n == DEFAULT_TOP_N
        assert config.component_types == tuple(Category)
        assert all(config.threshold(c) == 0.0 for c in Category)
        assert config.warnings == []

    def test_reversed_year_range_is_swapped(self):
        config = FilterConfig(year_range=(2019, 2010))
        assert config.year_range == (2010, 2019)
        assert len(config.warnings) == 1

    def test_year_range_needs_two_bounds(self):
        config = FilterConfig(year_range=(2015,))
        assert config.year_range == DEFAULT_YEAR_RANGE
        assert config.warnings

    @pytest.mark.parametrize("year_range", [2010, "2010-2019", 2010.5])
    def test_scalar_year_range_falls_back_to_default(self, year_range):
        config = FilterConfig.from_dict({"yearRange": year_range})
        assert config.year_range == DEFAULT_YEAR_RANGE
        assert any("needs two bounds" in w for w in config.warnings)

    def test_scalar_component_type_accepted(self):
        config = FilterConfig.from_dict({"componentTypes": 7})
        assert config.component_types == ()
        assert any("7" in w for w in config.warnings)

    def test_negative_values_clamped(self):
        config = FilterConfig(min_rs={"cross": -0.2}, top_n=-5)
        assert config.threshold(Category.CROSS) == 0.0
        assert config.top_n == 0
        assert len(config.warnings) == 2

    def test_unknown_and_duplicate_components_dropped(self):
        config = FilterConfig(component_types=("cross", "bogus", "Thematic", "cross"))
        assert config.component_types == (Category.CROSS, Category.THEORETICAL)
        assert any("bogus" in w for w in config.warnings)

    def test_from_dict_camel_case(self):
        config = FilterConfig.from_dict({
            "yearRange": [2012, 2014],
            "minRS_theoretical": 0.3,
            "minRS_cross": 0.5,
            "topN": 7,
            "componentTypes": ["methodological"],
        })
        assert config.year_range == (2012, 2014)
        assert config.threshold(Category.THEORETICAL) == 0.3
        assert config.threshold(Category.CROSS) == 0.5
        assert config.threshold(Category.METHODOLOGICAL) == 0.0
        assert config.top_n == 7
        assert config.component_types == (Category.METHODOLOGICAL,)

    def test_from_dict_snake_case(self):
        config = FilterConfig.from_dict({
            "year_range": [2011, 2013],
            "min_rs": {"methodological": 0.2},
            "top_n": 3,
            "component_types": "cross",
        })
        assert config.year_range == (2011, 2013)
        assert config.threshold(Category.METHODOLOGICAL) == 0.2
        assert config.top_n == 3
        assert config.component_types == (Category.CROSS,)

    def test_to_dict_round_trip(self):
        config = FilterConfig(year_range=(2011, 2012), min_rs={Category.CROSS: 0.4}, top_n=9,
                              component_types=(Category.CROSS, Category.THEORETICAL))
        assert FilterConfig.from_dict(config.to_dict()) == config


# =============================================================================
# ExplorerParameters
# =============================================================================

class TestExplorerParameters:

    def test_defaults(self):
        params = ExplorerParameters()
        assert params.citation_window == "5years"
        assert params.quantile_tau == 0.5
        assert params.all_warnings == []

    @pytest.mark.parametrize("tau, expected", [(0.05, 0.10), (0.95, 0.90), (0.25, 0.25)])
    def test_tau_clamped_to_allowed_range(self, tau, expected):
        params = ExplorerParameters(quantile_tau=tau)
        assert params.quantile_tau == pytest.approx(expected)
        assert bool(params.warnings) == (tau != expected)

    def test_unknown_window_warns(self):
        params = ExplorerParameters(citation_window="10years")
        assert params.citation_window == "10years"
        assert any("10years" in w for w in params.warnings)

    def test_all_warnings_includes_filter_warnings(self):
        params = ExplorerParameters.from_dict({"topN": -1, "quantileTau": 2})
        assert len(params.all_warnings) == 2

    def test_from_dict_nested_filters(self):
        params = ExplorerParameters.from_dict({
            "filters": {"topN": 4},
            "citation_window": "1years",
            "quantile_tau": 0.3,
        })
        assert params.filters.top_n == 4
        assert params.citation_window == "1years"
        assert params.quantile_tau == pytest.approx(0.3)

    def test_to_dict_keys(self):
        data = ExplorerParameters().to_dict()
        assert set(data) == {
            "yearRange", "minRS_theoretical", "minRS_methodological", "minRS_cross",
            "topN", "componentTypes", "citationWindow", "quantileTau",
        }

    def test_from_yaml(self, params_yaml):
        params = ExplorerParameters.from_yaml(params_yaml)
        assert params.filters.year_range == (2012, 2016)
        assert params.filters.top_n == 10
        assert params.filters.component_types == (Category.THEORETICAL, Category.CROSS)
        assert params.citation_window == "3years"
        assert params.quantile_tau == pytest.approx(0.75)

    def test_from_yaml_scalar_year_range_warns(self, tmp_path):
        path = tmp_path / "scalar.yaml"
        path.write_text("yearRange: 2010\ntopN: 5\n", encoding="utf-8")
        params = ExplorerParameters.from_yaml(path)
        assert params.filters.year_range == DEFAULT_YEAR_RANGE
        assert params.filters.top_n == 5
        assert any("needs two bounds" in w for w in params.all_warnings)

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ExplorerParameters.from_yaml(tmp_path / "missing.yaml")

    def test_from_yaml_rejects_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ValueError):
            ExplorerParameters.from_yaml(path)


# =============================================================================
# Selection
# =============================================================================

class TestSelection:

    def test_magnitude_ranking_keeps_strong_penalty(self):
        records = [
            Record(id=1, cross=(("C21", "G12"),), rs_cross=0.3, year=2015),
            Record(id=2, cross=(("C23", "E44"),), rs_cross=-0.8, year=2015),
        ]
        config = FilterConfig(min_rs={Category.CROSS: 0.5}, top_n=1)
        selected = select_category(records, Category.CROSS, config)
        assert [r.id for r in selected] == [2]
        assert selected[0].rs_cross == -0.8

    def test_threshold_and_top_n_hold(self, mixed_records):
        config = FilterConfig(year_range=(2000, 2030), min_rs={Category.THEORETICAL: 0.1}, top_n=2)
        selected = select_category(mixed_records, Category.THEORETICAL, config)
        assert len(selected) <= 2
        assert all(abs(r.rs_theoretical) >= 0.1 for r in selected)
        assert [r.id for r in selected] == [3, 0]

    def test_year_range_inclusive(self, mixed_records):
        config = FilterConfig(year_range=(2012, 2015))
        selected = select_category(mixed_records, Category.THEORETICAL, config)
        assert sorted(r.id for r in selected) == [0, 1]

    def test_records_without_codes_skipped(self, mixed_records):
        config = FilterConfig(year_range=(2010, 2030))
        selected = select_category(mixed_records, Category.METHODOLOGICAL, config)
        assert 3 not in {r.id for r in selected}

    def test_selection_is_independent_per_category(self, mixed_records):
        config = FilterConfig(min_rs={Category.THEORETICAL: 0.3, Category.METHODOLOGICAL: 0.3})
        selected = select_records(mixed_records, config)
        assert [r.id for r in selected[Category.THEORETICAL]] == [0]
        assert [r.id for r in selected[Category.METHODOLOGICAL]] == [1, 2]

    def test_inactive_categories_skipped_in_order(self, mixed_records):
        config = FilterConfig(component_types=(Category.CROSS, Category.THEORETICAL))
        selected = select_records(mixed_records, config)
        assert list(selected) == [Category.CROSS, Category.THEORETICAL]

    def test_top_n_zero_selects_nothing(self, mixed_records):
        selected = select_records(mixed_records, FilterConfig(top_n=0))
        assert all(records == [] for records in selected.values())
