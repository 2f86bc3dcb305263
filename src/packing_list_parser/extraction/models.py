"""Data models for format matching and extraction."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Pattern, Tuple

from packing_list_parser.constants import REMOS_PATTERN


class MatchResult(Enum):
    """Outcome of testing one format against one document.

    Values are stable identifiers, not a priority ordering.
    """

    WRONG_EXTENSION = 0
    WRONG_ESTABLISHMENT_NUMBER = 1
    WRONG_HEADER = 2
    GENERIC_ERROR = 3
    CORRECT = 4
    EMPTY_FILE = 5


class DocumentKind(str, Enum):
    """Shape of a decoded packing list."""

    EXCEL = "excel"
    CSV = "csv"
    PDF = "pdf"


class EstablishmentPolicy(str, Enum):
    """How a sheet without any establishment number is treated."""

    STRICT = "strict"
    SKIP_ABSENT = "skip_absent"


@dataclass(frozen=True)
class BlanketValue:
    """Document-wide value applied when ``pattern`` is found anywhere."""

    pattern: Pattern[str]
    value: str


@dataclass(frozen=True)
class FieldBand:
    """Horizontal band of a PDF column and the header text expected in it."""

    x1: float
    x2: float
    pattern: Pattern[str]

    def contains(self, x: float) -> bool:
        return self.x1 <= x <= self.x2


@dataclass(frozen=True)
class FormatDefinition:
    """Declarative rules for recognising and extracting one retailer model."""

    format_id: str
    kind: DocumentKind
    establishment_number: Pattern[str]
    fields: Dict[str, Pattern[str]] = field(default_factory=dict)
    optional_fields: Dict[str, Pattern[str]] = field(default_factory=dict)
    find_unit_in_header: bool = False
    validate_country_of_origin: bool = False
    deprecated: bool = False
    invalid_sheets: FrozenSet[str] = frozenset()
    blanket_nirms: Optional[BlanketValue] = None
    blanket_treatment_type: Optional[BlanketValue] = None
    establishment_policy: EstablishmentPolicy = EstablishmentPolicy.STRICT
    establishment_search_pattern: Pattern[str] = REMOS_PATTERN
    data_row_offset: int = 1
    footer_pattern: Optional[Pattern[str]] = None
    skip_repeated_headers: bool = False
    totals_row_keywords: Tuple[str, ...] = ()
    remove_trailing_total_row: bool = False
    # PDF only
    bands: Dict[str, FieldBand] = field(default_factory=dict)
    optional_bands: Dict[str, FieldBand] = field(default_factory=dict)
    min_headers_y: float = 0.0
    max_headers_y: float = 0.0
    min_row_fragments: int = 5
    row_stop_value: str = "0"

    @property
    def header_patterns(self) -> List[Pattern[str]]:
        """Patterns that must all be found for a header to be recognised."""
        if self.kind is DocumentKind.PDF:
            return [band.pattern for band in self.bands.values()]
        return list(self.fields.values())

    @property
    def column_patterns(self) -> Dict[str, Pattern[str]]:
        """Required and optional column patterns, required first."""
        return {**self.fields, **self.optional_fields}


@dataclass(frozen=True)
class PdfFragment:
    """Positioned text fragment of a PDF page."""

    x: float
    y: float
    text: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PdfFragment":
        text = data.get("str")
        return cls(x=float(data["x"]), y=float(data["y"]), text="" if text is None else str(text))


@dataclass(frozen=True)
class PdfPage:
    """One PDF page as an ordered sequence of positioned fragments."""

    number: int
    fragments: Tuple[PdfFragment, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], default_number: int = 1) -> "PdfPage":
        """Build a page from ``{"content": [{x, y, str}], "pageInfo": {"num"}}``."""
        page_info = data.get("pageInfo") or {}
        content = data.get("content") or []
        return cls(
            number=int(page_info.get("num", default_number)),
            fragments=tuple(
                PdfFragment.from_dict(item) for item in content if isinstance(item, Mapping)
            ),
        )
