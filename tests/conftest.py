import logging

import pytest

from packing_list_parser.extraction.detector import build_format, load_formats
from packing_list_parser.extraction.models import DocumentKind
from packing_list_parser.extraction.registry import FormatRegistry


@pytest.fixture(scope="session")
def registry():
    return FormatRegistry(load_formats())


@pytest.fixture
def definition(registry):
    """Look up a packaged format definition by kind and id."""

    def _lookup(format_id, kind=DocumentKind.EXCEL):
        return registry.get(kind, format_id).definition

    return _lookup


@pytest.fixture
def make_definition():
    """Build an ad-hoc definition from raw YAML-like data."""

    def _build(**data):
        data.setdefault("format_id", "TEST1")
        data.setdefault("kind", "excel")
        data.setdefault("establishment_number", r"^RMS-GB-000999-\d{3}$")
        data.setdefault(
            "fields",
            {
                "description": "Description",
                "commodity_code": "Commodity Code",
                "number_of_packages": "Packages",
                "total_net_weight_kg": "Net Weight",
            },
        )
        return build_format(data)

    return _build


@pytest.fixture
def capture_logger():
    return logging.getLogger("tests.packing_list_parser")


TJMORRIS_HEADER = {
    "A": "RMS-GB-000010-001",
    "B": "Nature of Products",
    "J": "Treatment Type",
    "L": "Description",
    "O": "Tariff/Commodity",
    "P": "Number of packages",
    "R": "Net Weight Kg",
    "T": "Country of Origin",
}

TJMORRIS_ROW = {
    "B": "Chilled Meat",
    "J": "Chilled",
    "L": "Chicken breast",
    "O": "0207141010",
    "P": 10,
    "R": 25.5,
    "T": "GB",
}


@pytest.fixture
def tjmorris_workbook():
    """TJMORRIS2 workbook that passes every business check."""
    header = dict(TJMORRIS_HEADER, U="NIRMS Eligible")
    row = dict(TJMORRIS_ROW, U="Yes")
    return {"Sheet1": [header, row]}


@pytest.fixture
def tjmorris_minimal():
    return {"Sheet1": [dict(TJMORRIS_HEADER), dict(TJMORRIS_ROW)]}


@pytest.fixture
def giovanni_page():
    """Single GIOVANNI3 PDF page with two item rows and a totals line."""
    return {
        "pageInfo": {"num": 1},
        "content": [
            {"x": 50, "y": 100, "str": "RMS-GB-000149-001"},
            {"x": 130, "y": 290, "str": "DESCRIPTION"},
            {"x": 260, "y": 290, "str": "Commodity Code"},
            {"x": 360, "y": 290, "str": "Quantity"},
            {"x": 395, "y": 290, "str": "Net Weight"},
            {"x": 395, "y": 295, "str": "(KG)"},
            {"x": 50, "y": 320, "str": "1"},
            {"x": 130, "y": 320, "str": "Cheddar"},
            {"x": 260, "y": 320, "str": "123456 assorted goods"},
            {"x": 360, "y": 320, "str": "10"},
            {"x": 400, "y": 320, "str": "25.5"},
            {"x": 50, "y": 340, "str": "2"},
            {"x": 130, "y": 340, "str": "Brie"},
            {"x": 260, "y": 340, "str": "no digits here"},
            {"x": 360, "y": 340, "str": "4"},
            {"x": 400, "y": 340, "str": "8.0"},
            {"x": 130, "y": 360, "str": "Total"},
        ],
    }


@pytest.fixture
def iceland_rows():
    return [
        ["Dispatch RMS", "RMS-GB-000040-001"],
        [
            "Tariff Code EU",
            "Product/Part Number description",
            "Treatment Type",
            "Packages",
            "Net Weight/Package KG",
            "Nature",
            "NIRMS",
            "Country of Origin Code",
        ],
        ["0408192000", "Egg yolk", "Chilled", "2", "5", "Dairy", "NIRMS", "GB"],
    ]
