"""
CLI Tests for diversity_networks.cli
"""

import json

import pytest

from diversity_networks.cli import build_parser, main, resolve_parameters
from diversity_networks.config import Settings
from diversity_networks.core import Category


@pytest.fixture
def settings():
    return Settings(data_path="records.csv", catalog_path="catalog.xml")


class TestParameterResolution:

    def test_defaults(self, settings):
        args = build_parser(settings).parse_args([])
        params = resolve_parameters(args)
        assert params.filters.year_range == (2010, 2019)
        assert params.quantile_tau == 0.5
        assert args.input == "records.csv"

    def test_flags_override(self, settings):
        args = build_parser(settings).parse_args([
            "--years", "2012", "2014", "--min-rs-cross", "0.4", "--top-n", "5",
            "--components", "cross", "theoretical", "--window", "1years", "--tau", "0.25",
        ])
        params = resolve_parameters(args)
        assert params.filters.year_range == (2012, 2014)
        assert params.filters.threshold(Category.CROSS) == 0.4
        assert params.filters.top_n == 5
        assert params.filters.component_types == (Category.CROSS, Category.THEORETICAL)
        assert params.citation_window == "1years"
        assert params.quantile_tau == 0.25

    def test_tau_help_states_allowed_range(self, settings):
        help_text = " ".join(build_parser(settings).format_help().split())
        assert "[0.10, 0.90]" in help_text

    def test_tau_outside_range_clamped(self, settings):
        args = build_parser(settings).parse_args(["--tau", "0.95"])
        params = resolve_parameters(args)
        assert params.quantile_tau == pytest.approx(0.90)
        assert params.all_warnings

    def test_flags_override_config_file(self, settings, params_yaml):
        args = build_parser(settings).parse_args(["--config", str(params_yaml), "--top-n", "3"])
        params = resolve_parameters(args)
        assert params.filters.year_range == (2012, 2016)
        assert params.filters.top_n == 3
        assert params.citation_window == "3years"


class TestMain:

    def test_report(self, records_csv, catalog_xml, capsys):
        code = main(["--input", str(records_csv), "--catalog", str(catalog_xml)])
        assert code == 0
        out = capsys.readouterr().out
        assert "Co-occurrence Network" in out
        assert "Network effect" in out
        assert "clusters by mean citation" in out

    def test_json_output(self, records_csv, catalog_xml, capsys):
        code = main(["--input", str(records_csv), "--catalog", str(catalog_xml),
                     "--components", "theoretical", "--json", "--clusters", "1"])
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert {n["id"] for n in data["nodes"]} == {"G13", "G12", "E44"}
        assert len(data["clusters"]) == 1
        g12 = next(n for n in data["nodes"] if n["id"] == "G12")
        assert g12["description"] == "Asset Pricing & Trading Volume"

    @pytest.mark.slow
    @pytest.mark.parametrize("fmt, name", [("json", "network.json"), ("graphml", "network.graphml")])
    def test_file_export(self, records_csv, tmp_path, fmt, name):
        output = tmp_path / name
        code = main(["--input", str(records_csv), "--catalog", "", "--output", str(output),
                     "--format", fmt, "--quiet"])
        assert code == 0
        assert output.exists()

    @pytest.mark.slow
    def test_csv_export(self, records_csv, tmp_path):
        code = main(["--input", str(records_csv), "--catalog", "", "-o", str(tmp_path / "tables"),
                     "-f", "csv", "--quiet"])
        assert code == 0
        assert (tmp_path / "tables" / "edges.csv").exists()

    def test_parallel_flag(self, records_csv, capsys):
        assert main(["--input", str(records_csv), "--catalog", "", "--parallel", "--quiet"]) == 0

    def test_missing_input_fails(self, tmp_path, capsys):
        code = main(["--input", str(tmp_path / "missing.csv")])
        assert code == 1
        assert "Error" in capsys.readouterr().err

    def test_scalar_year_range_in_config_warns(self, records_csv, tmp_path, capsys):
        config = tmp_path / "scalar.yaml"
        config.write_text("yearRange: 2010\n", encoding="utf-8")
        code = main(["--input", str(records_csv), "--catalog", "", "--config", str(config), "--quiet"])
        assert code == 0
        assert "needs two bounds" in capsys.readouterr().err

    def test_bad_config_fails(self, records_csv, tmp_path, capsys):
        code = main(["--input", str(records_csv), "--config", str(tmp_path / "missing.yaml")])
        assert code == 1
