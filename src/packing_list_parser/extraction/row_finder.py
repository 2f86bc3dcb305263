"""Row location helpers."""

from typing import Any, Callable, Iterable, Pattern, Sequence

from packing_list_parser.extraction.regex_search import row_cells, test_all_patterns


def row_finder(rows: Any, predicate: Callable[[Any], bool]) -> int:
    """Return the index of the first row satisfying ``predicate``, else -1."""
    if not isinstance(rows, (list, tuple)):
        return -1
    for index, row in enumerate(rows):
        if predicate(row):
            return index
    return -1


def find_header_row(rows: Any, patterns: Iterable[Pattern[str]]) -> int:
    """Index of the first row in which every header pattern is found, else -1."""
    patterns = list(patterns)
    return row_finder(rows, lambda row: test_all_patterns(patterns, row))


def is_blank(value: Any) -> bool:
    """True for None and whitespace-only strings."""
    return value is None or (isinstance(value, str) and not value.strip())


def is_empty_row(row: Any) -> bool:
    """True when a row holds no non-blank cell."""
    return all(is_blank(value) for _, value in row_cells(row))


def all_rows_empty(rows: Sequence[Any]) -> bool:
    return all(is_empty_row(row) for row in rows)
