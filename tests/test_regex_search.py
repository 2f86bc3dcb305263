import re

from packing_list_parser.extraction.models import PdfFragment, PdfPage
from packing_list_parser.extraction import regex_search
from packing_list_parser.extraction.regex_search import (
    cell,
    find_all_matches,
    find_match,
    find_unit,
    iter_strings,
    position_finder,
)

REMOS = re.compile(r"RMS-GB-\d{6}-\d{3}", re.IGNORECASE)


def test_find_match_returns_matched_text_not_capture_group():
    pattern = re.compile(r"RMS-GB-(\d{6})-\d{3}")
    data = {"Sheet1": [{"A": "Despatch"}, {"B": "Est: RMS-GB-000010-001"}]}

    assert find_match(pattern, data) == "RMS-GB-000010-001"


def test_find_match_is_total_over_empty_input():
    assert find_match(REMOS, None) is None
    assert find_match(REMOS, {}) is None
    assert find_match(REMOS, []) is None
    assert find_match(REMOS, 42) is None


def test_find_match_ignores_non_string_values():
    assert find_match(re.compile("1"), {"A": 1, "B": 1.0, "C": True}) is None


def test_find_match_returns_first_hit_in_document_order():
    data = [{"A": "rms-gb-000001-001"}, {"A": "RMS-GB-000002-001"}]

    assert find_match(REMOS, data) == "rms-gb-000001-001"


def test_find_all_matches_collects_distinct_values_in_first_seen_order():
    data = {
        "Sheet1": [{"A": "RMS-GB-000002-001"}, {"A": "RMS-GB-000001-001"}],
        "Sheet2": [{"A": "RMS-GB-000002-001"}],
    }

    assert find_all_matches(REMOS, data) == ["RMS-GB-000002-001", "RMS-GB-000001-001"]


def test_find_all_matches_leaves_accumulator_untouched():
    accumulator = ["RMS-GB-000001-001"]

    result = find_all_matches(REMOS, [{"A": "RMS-GB-000002-001"}], accumulator)

    assert result == ["RMS-GB-000001-001", "RMS-GB-000002-001"]
    assert accumulator == ["RMS-GB-000001-001"]


def test_find_all_matches_prefers_first_capture_group():
    pattern = re.compile(r"RMS-GB-(\d{6})")

    assert find_all_matches(pattern, ["RMS-GB-000010-001"]) == ["000010"]


def test_test_all_patterns_is_a_conjunction_of_independent_searches():
    row = {"A": "Description", "B": "Net Weight"}

    assert regex_search.test_all_patterns([re.compile("Description"), re.compile("Net Weight")], row)
    assert not regex_search.test_all_patterns([re.compile("Description"), re.compile("Packages")], row)
    assert not regex_search.test(re.compile("Description.*Net Weight"), row)


def test_search_terminates_on_cyclic_structures():
    data = {"A": "needle"}
    data["self"] = data
    rows = [data, data]

    assert find_match(re.compile("needle"), rows) == "needle"
    assert not regex_search.test(re.compile("missing"), rows)


def test_iter_strings_walks_pdf_pages():
    page = PdfPage(number=1, fragments=(PdfFragment(1, 2, "a"), PdfFragment(3, 4, "b")))

    assert list(iter_strings([page])) == ["a", "b"]


def test_find_unit():
    assert find_unit("Net Weight (KG)") == "KG"
    assert find_unit("NET WEIGHT kilograms") == "kilograms"
    assert find_unit("Net Weight") is None
    assert find_unit(None) is None


def test_position_finder_returns_row_index_and_column_key():
    rows = [{"A": "x"}, {"A": "y", "C": "RMS-GB-000010-001"}]

    assert position_finder(rows, REMOS) == (1, "C")
    assert position_finder(rows, re.compile("absent")) == (-1, None)
    assert position_finder(None, REMOS) == (-1, None)


def test_cell_reads_mapping_and_list_rows():
    assert cell({"A": 1}, "A") == 1
    assert cell({"A": 1}, "B") is None
    assert cell(["x", "y"], 1) == "y"
    assert cell(["x"], 5) is None
    assert cell(["x"], None) is None
