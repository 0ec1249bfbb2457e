"""
Core Value Objects and Entities

Input:
- Record: one publication with three category code lists
  (theoretical, methodological, cross pairs), the signed Rao-Stirling
  index of each category, the publication year and citation counts per
  citation window.

Derived (rebuilt on every pipeline run, never persisted):
- NodeData: one per normalized classification code
- EdgeData: one per unordered pair of codes
- Combination: the code set a record contributes to one category
- Cluster: all combinations sharing the same code set
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

#: A bare top-level code (letter + one digit) maps to its "general" sub-code.
SHORT_CODE_PATTERN = re.compile(r"^[A-Z]\d$")

EDGE_KEY_SEPARATOR = "--"
COMBINATION_SEPARATOR = "+"

CITATION_WINDOWS: Tuple[str, ...] = ("1years", "3years", "5years")
DEFAULT_CITATION_WINDOW = "5years"

NO_DESCRIPTION = "No description available"


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Category(str, Enum):
    """Code category a record contributes to."""
    THEORETICAL = "theoretical"
    METHODOLOGICAL = "methodological"
    CROSS = "cross"

    @property
    def display_name(self) -> str:
        return CATEGORY_DISPLAY_NAMES[self]

    @property
    def rs_column(self) -> str:
        """Name of the Rao-Stirling column in the tabular input."""
        return f"rao_stirling_{self.value}"

    @classmethod
    def parse(cls, value: Any) -> Optional["Category"]:
        """Resolve an enum member, a value or a display name; None if unknown."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if text in (member.value, member.display_name.lower()):
                return member
        return None


CATEGORY_DISPLAY_NAMES: Dict[Category, str] = {
    Category.THEORETICAL: "Thematic",
    Category.METHODOLOGICAL: "Methodological",
    Category.CROSS: "Cross-domain",
}


class EffectClass(str, Enum):
    """Band of a signed effect value."""
    PREMIUM = "PREMIUM"
    NEUTRAL = "NEUTRAL"
    PENALTY = "PENALTY"

    @property
    def color(self) -> str:
        return EFFECT_COLORS[self]


EFFECT_COLORS: Dict[EffectClass, str] = {
    EffectClass.PREMIUM: "#4caf50",
    EffectClass.NEUTRAL: "#9e9e9e",
    EffectClass.PENALTY: "#ef5350",
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def normalize_code(code: Any) -> str:
    """Expand a bare top-level code (``C5`` -> ``C50``); other codes are only stripped."""
    text = str(code).strip()
    if SHORT_CODE_PATTERN.match(text):
        return text + "0"
    return text


def edge_key(a: str, b: str) -> str:
    """Canonical key of the unordered pair ``{a, b}``."""
    return EDGE_KEY_SEPARATOR.join(sorted((a, b)))


def as_float(value: Any, default: float = 0.0) -> float:
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return default if math.isnan(result) else result


def as_int(value: Any, default: int = 0) -> int:
    result = as_float(value, float("nan"))
    if math.isnan(result) or math.isinf(result):
        return default
    return int(result)


def _unique_codes(codes: Iterable[Any]) -> Tuple[str, ...]:
    seen: Dict[str, None] = {}
    for code in codes or ():
        normalized = normalize_code(code)
        if normalized:
            seen.setdefault(normalized, None)
    return tuple(seen)


def _unique_pairs(pairs: Iterable[Any]) -> Tuple[Tuple[str, str], ...]:
    seen: Dict[Tuple[str, str], None] = {}
    for pair in pairs or ():
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            continue
        meth, theo = normalize_code(pair[0]), normalize_code(pair[1])
        if meth and theo:
            seen.setdefault((meth, theo), None)
    return tuple(seen)


# ---------------------------------------------------------------------------
# Input record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Record:
    """
    A publication observation.

    Codes are normalized on construction and each list is deduplicated in
    order, so ``C5`` and ``C50`` within one record count as a single code.
    ``cross`` holds (methodological, theoretical) pairs.
    """
    id: int
    theoretical: Tuple[str, ...] = ()
    methodological: Tuple[str, ...] = ()
    cross: Tuple[Tuple[str, str], ...] = ()
    rs_theoretical: float = 0.0
    rs_methodological: float = 0.0
    rs_cross: float = 0.0
    year: int = 0
    citations: Dict[str, int] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "theoretical", _unique_codes(self.theoretical))
        object.__setattr__(self, "methodological", _unique_codes(self.methodological))
        object.__setattr__(self, "cross", _unique_pairs(self.cross))
        object.__setattr__(self, "citations", dict(self.citations or {}))

    def codes(self, category: Category) -> Tuple[Any, ...]:
        """Code list of a category; pairs for ``cross``."""
        if category is Category.THEORETICAL:
            return self.theoretical
        if category is Category.METHODOLOGICAL:
            return self.methodological
        return self.cross

    def rs(self, category: Category) -> float:
        if category is Category.THEORETICAL:
            return self.rs_theoretical
        if category is Category.METHODOLOGICAL:
            return self.rs_methodological
        return self.rs_cross

    def has_codes(self, category: Category) -> bool:
        return len(self.codes(category)) > 0

    def citation(self, window: str) -> int:
        return self.citations.get(window, 0)

    def flat_codes(self, category: Category) -> Tuple[str, ...]:
        """Sorted distinct codes of a category, with cross pairs flattened."""
        if category is Category.CROSS:
            return tuple(sorted({code for pair in self.cross for code in pair}))
        return tuple(sorted(set(self.codes(category))))

    @classmethod
    def from_dict(cls, data: Dict[str, Any], record_id: int = 0) -> "Record":
        """
        Build a record from already-parsed values.

        Accepts either the short keys (``rs_theoretical``, ``year``,
        ``citations``) or the tabular column names
        (``rao_stirling_theoretical``, ``publication_year``,
        ``citation_<window>``).
        """
        citations: Dict[str, int] = {
            str(window): as_int(value) for window, value in (data.get("citations") or {}).items()
        }
        for key, value in data.items():
            if key.startswith("citation_"):
                citations[key[len("citation_"):]] = as_int(value)

        def rs_value(category: Category) -> float:
            return as_float(data.get(f"rs_{category.value}", data.get(category.rs_column, 0.0)))

        return cls(
            id=as_int(data.get("id", record_id), record_id),
            theoretical=tuple(data.get("theoretical") or ()),
            methodological=tuple(data.get("methodological") or ()),
            cross=tuple(data.get("cross") or ()),
            rs_theoretical=rs_value(Category.THEORETICAL),
            rs_methodological=rs_value(Category.METHODOLOGICAL),
            rs_cross=rs_value(Category.CROSS),
            year=as_int(data.get("year", data.get("publication_year", 0))),
            citations=citations,
        )


# ---------------------------------------------------------------------------
# Derived entities
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NodeData:
    """Snapshot of one code in the co-occurrence network."""
    id: str
    category: Category
    count: int
    avg_rs: float
    avg_rs_by_category: Dict[Category, float]
    citation_at_quantile: float
    years: Tuple[int, ...] = ()
    citations: Tuple[int, ...] = ()

    def avg_rs_for(self, category: Category) -> float:
        return self.avg_rs_by_category.get(category, 0.0)

    def to_dict(self, description: Optional[str] = None) -> Dict[str, Any]:
        result = {
            "id": self.id,
            "category": self.category.value,
            "count": self.count,
            "avgRS": self.avg_rs,
            "avgRS_theoretical": self.avg_rs_for(Category.THEORETICAL),
            "avgRS_methodological": self.avg_rs_for(Category.METHODOLOGICAL),
            "avgRS_cross": self.avg_rs_for(Category.CROSS),
            "citationAtQuantile": self.citation_at_quantile,
            "years": list(self.years),
        }
        if description is not None:
            result["description"] = description
        return result


@dataclass(frozen=True)
class EdgeData:
    """Snapshot of one co-occurrence edge; endpoints keep their first-insertion orientation."""
    source: str
    target: str
    type: Category
    weight: float
    count: int
    avg_beta: float
    avg_citations: float
    citation_at_quantile: float
    betas: Tuple[float, ...] = ()
    citations: Tuple[int, ...] = ()

    @property
    def key(self) -> str:
        return edge_key(self.source, self.target)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "type": self.type.value,
            "weight": self.weight,
            "count": self.count,
            "avgBeta": self.avg_beta,
            "avgCitations": self.avg_citations,
            "citationAtQuantile": self.citation_at_quantile,
        }


@dataclass(frozen=True)
class Combination:
    """Code set one selected record contributes to one category."""
    codes: Tuple[str, ...]
    category: Category
    citation: int
    year: int

    @property
    def id(self) -> str:
        return COMBINATION_SEPARATOR.join(self.codes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "codes": list(self.codes),
            "type": self.category.value,
            "citation": self.citation,
            "year": self.year,
        }


@dataclass(frozen=True)
class Cluster:
    """All combinations sharing one code set."""
    codes: Tuple[str, ...]
    category: Category
    count: int
    total_citations: float
    citations: Tuple[int, ...] = ()

    @property
    def id(self) -> str:
        return COMBINATION_SEPARATOR.join(self.codes)

    @property
    def avg_citations(self) -> float:
        return self.total_citations / self.count if self.count > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "codes": list(self.codes),
            "type": self.category.value,
            "count": self.count,
            "avgCitations": self.avg_citations,
        }

