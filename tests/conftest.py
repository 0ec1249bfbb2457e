"""
Test Configuration and Fixtures
================================

Shared pytest fixtures for the diversity citation networks project.

Usage:
    pytest tests/                    # Run all tests
    pytest tests/ -v                 # Verbose output
    pytest tests/ -k "aggregator"    # Run only aggregator tests
    pytest tests/ --quick            # Skip slow tests
"""

import sys
from pathlib import Path
from typing import List

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from diversity_networks.core import ExplorerParameters, FilterConfig, Record


# =============================================================================
# Custom Markers
# =============================================================================

def pytest_addoption(parser):
    """Add custom command line options"""
    parser.addoption(
        "--quick",
        action="store_true",
        default=False,
        help="Skip slow tests",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests if --quick is specified"""
    if config.getoption("--quick"):
        skip_slow = pytest.mark.skip(reason="Skipped with --quick")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


# =============================================================================
# Record Fixtures
# =============================================================================

@pytest.fixture
def worked_example_records() -> List[Record]:
    """Two theoretical records sharing G12."""
    return [
        Record(id=0, theoretical=("G13", "G12"), rs_theoretical=0.5, year=2009,
               citations={"5years": 40}),
        Record(id=1, theoretical=("E44", "G12"), rs_theoretical=0.36, year=2010,
               citations={"5years": 25}),
    ]


@pytest.fixture
def worked_example_params() -> ExplorerParameters:
    return ExplorerParameters.from_dict({
        "yearRange": [2009, 2019],
        "minRS_theoretical": 0,
        "topN": 50,
        "componentTypes": ["theoretical"],
        "citationWindow": "5years",
        "quantileTau": 0.5,
    })


@pytest.fixture
def mixed_records() -> List[Record]:
    """Records touching all three categories, with a negative cross RS."""
    return [
        Record(
            id=0,
            theoretical=("G1", "G21", "E44"),
            methodological=("C21", "C5"),
            cross=(("C21", "G12"), ("C5", "E44")),
            rs_theoretical=0.42, rs_methodological=0.2, rs_cross=-0.3,
            year=2012,
            citations={"1years": 2, "3years": 10, "5years": 30},
        ),
        Record(
            id=1,
            theoretical=("G21", "E44"),
            methodological=("C50", "C23"),
            cross=(("C23", "G21"),),
            rs_theoretical=0.1, rs_methodological=0.6, rs_cross=0.25,
            year=2015,
            citations={"1years": 0, "3years": 4, "5years": 12},
        ),
        Record(
            id=2,
            theoretical=("D83",),
            methodological=("C21", "C23"),
            cross=(("C21", "G21"),),
            rs_theoretical=0.05, rs_methodological=0.33, rs_cross=0.7,
            year=2018,
            citations={"1years": 1, "3years": 0, "5years": 0},
        ),
        Record(
            id=3,
            theoretical=("G21", "E44"),
            rs_theoretical=0.9,
            year=2021,
            citations={"5years": 100},
        ),
    ]


@pytest.fixture
def all_categories_params() -> ExplorerParameters:
    return ExplorerParameters(filters=FilterConfig(year_range=(2010, 2019)))


# =============================================================================
# File Fixtures
# =============================================================================

RECORDS_CSV = '''theoretical,methodological,cross,rao_stirling_theoretical,rao_stirling_methodological,rao_stirling_cross,publication_year,citation_1years,citation_3years,citation_5years
"['G13', 'G12']","['C21']","[('C21', 'G13')]",0.5,0.1,0.2,2012,1,5,40
"['E44', 'G12']","['C5', 'C21']","[('C5', 'E44'), ('C21', 'G12')]",0.36,0.4,-0.6,2014,0,3,25
"not a list","['C23', 'C21']",[],abc,0.3,0.0,2016,2,2,
"[]","[]","[]",0,0,0,2011,0,0,0
'''

CATALOG_XML = '''<?xml version="1.0" encoding="UTF-8"?>
<data>
  <classification>
    <code>G</code>
    <description>Financial Economics</description>
    <classification>
      <code>G12</code>
      <description>Asset Pricing &amp;amp; Trading Volume</description>
    </classification>
    <classification>
      <code>G13</code>
      <description>Contingent Pricing &amp;ndash; Futures</description>
    </classification>
  </classification>
  <classification>
    <code>C21</code>
    <description>Cross-Sectional Models</description>
  </classification>
</data>
'''


@pytest.fixture
def records_csv(tmp_path) -> Path:
    path = tmp_path / "records.csv"
    path.write_text(RECORDS_CSV, encoding="utf-8")
    return path


@pytest.fixture
def catalog_xml(tmp_path) -> Path:
    path = tmp_path / "catalog.xml"
    path.write_text(CATALOG_XML, encoding="utf-8")
    return path


@pytest.fixture
def params_yaml(tmp_path) -> Path:
    path = tmp_path / "params.yaml"
    path.write_text(
        "yearRange: [2012, 2016]\n"
        "topN: 10\n"
        "componentTypes: [theoretical, cross]\n"
        "citationWindow: 3years\n"
        "quantileTau: 0.75\n",
        encoding="utf-8",
    )
    return path
