"""
Record Loader

Reads the per-publication table and the classification-code catalog.

Table columns:
    theoretical, methodological      bracketed code lists, e.g. "['C21', 'G1']"
    cross                            bracketed pairs, e.g. "[('C21', 'G12')]"
    rao_stirling_<category>          floats (rao_stirling_cross may be negative)
    publication_year                 integer
    citation_<window>                integers, e.g. citation_5years

A malformed cell never drops its row: lists fall back to [] and numbers to
0, and the cell is counted in the LoadReport.
"""
import ast
import html
import logging
import xml.etree.ElementTree as ET
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import pandas as pd

from .models import Category, Record, as_float

logger = logging.getLogger(__name__)

YEAR_COLUMN = "publication_year"
CITATION_PREFIX = "citation_"


# =============================================================================
# Load Report
# =============================================================================

@dataclass
class LoadReport:
    """What the loader recovered from while reading a table."""
    rows: int = 0
    malformed: Counter = field(default_factory=Counter)
    citation_windows: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def malformed_cells(self) -> int:
        return sum(self.malformed.values())

    @property
    def is_clean(self) -> bool:
        return self.malformed_cells == 0 and not self.warnings

    def add_malformed(self, column: str) -> None:
        self.malformed[column] += 1

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)

    def summary(self) -> str:
        lines = [f"Rows: {self.rows}",
                 f"Citation windows: {', '.join(self.citation_windows) or 'none'}"]
        if self.malformed:
            lines.append(f"Malformed cells ({self.malformed_cells}):")
            for column, count in self.malformed.most_common():
                lines.append(f"  - {column}: {count}")
        for w in self.warnings[:5]:
            lines.append(f"Warning: {w}")
        if len(self.warnings) > 5:
            lines.append(f"  ... and {len(self.warnings) - 5} more")
        return '\n'.join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rows': self.rows,
            'malformed_cells': self.malformed_cells,
            'malformed_by_column': dict(self.malformed),
            'citation_windows': list(self.citation_windows),
            'warnings': list(self.warnings),
        }


# =============================================================================
# Cell Parsing
# =============================================================================

def _is_blank(cell: Any) -> bool:
    if cell is None:
        return True
    if isinstance(cell, float) and pd.isna(cell):
        return True
    return isinstance(cell, str) and cell.strip() in ("", "[]")


def parse_code_list(cell: Any) -> Tuple[List[str], bool]:
    """
    Parse a bracketed list of codes.

    Returns:
        (codes, ok); a malformed cell yields ([], False) as a whole,
        even when some of its entries are valid codes.
    """
    if _is_blank(cell):
        return [], True
    if isinstance(cell, (list, tuple)):
        value = cell
    else:
        try:
            value = ast.literal_eval(str(cell).strip())
        except (ValueError, SyntaxError, MemoryError, RecursionError):
            return [], False
    if isinstance(value, str):
        return [value], True
    if not isinstance(value, (list, tuple)):
        return [], False
    if not all(isinstance(code, (str, int)) for code in value):
        return [], False
    return [str(code) for code in value], True


def parse_pair_list(cell: Any) -> Tuple[List[Tuple[str, str]], bool]:
    """Parse a bracketed list of (methodological, theoretical) pairs."""
    if _is_blank(cell):
        return [], True
    if isinstance(cell, (list, tuple)):
        value = cell
    else:
        try:
            value = ast.literal_eval(str(cell).strip())
        except (ValueError, SyntaxError, MemoryError, RecursionError):
            return [], False
    if not isinstance(value, (list, tuple)):
        return [], False
    if len(value) == 2 and all(isinstance(v, str) for v in value):
        # A single bare pair, e.g. "('C21', 'G12')"
        return [(value[0], value[1])], True

    pairs: List[Tuple[str, str]] = []
    for item in value:
        if not (isinstance(item, (list, tuple)) and len(item) == 2):
            return [], False
        pairs.append((str(item[0]), str(item[1])))
    return pairs, True


def parse_number(cell: Any, default: float = 0.0) -> Tuple[float, bool]:
    """Parse a numeric cell; a blank cell is the default without being malformed."""
    if _is_blank(cell):
        return default, True
    if isinstance(cell, bool):
        return default, False
    value = as_float(cell, float("nan"))
    if pd.isna(value) or value in (float("inf"), float("-inf")):
        return default, False
    return value, True


# =============================================================================
# Record Loader
# =============================================================================

class RecordLoader:
    """
    Builds Records from CSV files, DataFrames or row dictionaries.

    Usage:
        loader = RecordLoader()
        records = loader.load_csv("data/data_perNetwork.csv")
        print(loader.report.summary())
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.report: LoadReport = LoadReport()

    def load_csv(self, filepath: Union[str, Path]) -> List[Record]:
        self.logger.info(f"Loading records from CSV: {filepath}")
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {filepath}")
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
        return self.load_dataframe(df)

    def load_dataframe(self, df: pd.DataFrame) -> List[Record]:
        return self.load_rows(df.to_dict(orient="records"), columns=list(df.columns))

    def load_rows(self, rows: Iterable[Dict[str, Any]], columns: Optional[List[str]] = None) -> List[Record]:
        rows = list(rows)
        self.report = LoadReport(rows=len(rows))
        if columns is None:
            columns = list(dict.fromkeys(key for row in rows for key in row))
        windows = [c[len(CITATION_PREFIX):] for c in columns if c.startswith(CITATION_PREFIX)]
        self.report.citation_windows = windows
        if not windows:
            self.report.add_warning("No citation_<window> columns; all citation counts are 0")

        records = [self._build_record(i, row, windows) for i, row in enumerate(rows)]

        if self.report.malformed_cells:
            self.logger.warning(
                f"Recovered {self.report.malformed_cells} malformed cells in {self.report.rows} rows: "
                f"{dict(self.report.malformed)}"
            )
        self.logger.info(f"Loaded {len(records)} records, citation windows: {windows}")
        return records

    def _build_record(self, index: int, row: Dict[str, Any], windows: List[str]) -> Record:
        lists: Dict[Category, list] = {}
        for category in Category:
            parser = parse_pair_list if category is Category.CROSS else parse_code_list
            values, ok = parser(row.get(category.value))
            if not ok:
                self.report.add_malformed(category.value)
                self.logger.debug(f"Row {index}: malformed {category.value} cell {row.get(category.value)!r}")
            lists[category] = values

        rs: Dict[Category, float] = {}
        for category in Category:
            rs[category] = self._number(row, category.rs_column, index)

        citations = {
            window: int(self._number(row, CITATION_PREFIX + window, index))
            for window in windows
        }

        return Record(
            id=index,
            theoretical=tuple(lists[Category.THEORETICAL]),
            methodological=tuple(lists[Category.METHODOLOGICAL]),
            cross=tuple(lists[Category.CROSS]),
            rs_theoretical=rs[Category.THEORETICAL],
            rs_methodological=rs[Category.METHODOLOGICAL],
            rs_cross=rs[Category.CROSS],
            year=int(self._number(row, YEAR_COLUMN, index)),
            citations=citations,
        )

    def _number(self, row: Dict[str, Any], column: str, index: int) -> float:
        value, ok = parse_number(row.get(column))
        if not ok:
            self.report.add_malformed(column)
            self.logger.debug(f"Row {index}: malformed {column} cell {row.get(column)!r}")
        return value


def load_records(filepath: Union[str, Path]) -> List[Record]:
    """Convenience wrapper around RecordLoader.load_csv."""
    return RecordLoader().load_csv(filepath)


# =============================================================================
# Code Catalog
# =============================================================================

def load_code_descriptions(filepath: Union[str, Path]) -> Dict[str, str]:
    """
    Read code descriptions from the classification-tree XML.

    Every ``<classification>`` element with direct ``<code>`` and
    ``<description>`` children contributes one entry. A missing or
    unparseable catalog yields an empty mapping.
    """
    path = Path(filepath)
    if not path.exists():
        logger.warning(f"Code catalog not found: {filepath}")
        return {}
    try:
        tree = ET.parse(path)
    except ET.ParseError as e:
        logger.warning(f"Could not parse code catalog {filepath}: {e}")
        return {}

    descriptions: Dict[str, str] = {}
    for element in tree.getroot().iter("classification"):
        code = element.findtext("code")
        description = element.findtext("description")
        if code and description:
            descriptions[code.strip()] = html.unescape(description.strip())
    logger.info(f"Loaded {len(descriptions)} code descriptions")
    return descriptions
