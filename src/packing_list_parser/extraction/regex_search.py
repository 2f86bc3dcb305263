"""Pattern search primitives over nested packing list structures.

Documents are walked as a small closed set of shapes: mappings (sheets and
rows), sequences (row lists and CSV rows), PDF pages and their fragments.
Only string values are tested; numbers and other scalars are ignored.
"""

from typing import Any, Iterable, Iterator, List, Mapping, Optional, Pattern, Tuple

from packing_list_parser.constants import UNIT_PATTERN
from packing_list_parser.extraction.models import PdfFragment, PdfPage


def iter_strings(data: Any) -> Iterator[str]:
    """Yield every string value of ``data`` in depth-first order.

    Args:
        data: Arbitrarily nested mapping/sequence/page structure

    Yields:
        String values in document order
    """
    stack: List[Any] = [data]
    visited = set()

    while stack:
        node = stack.pop()
        if node is None:
            continue
        if isinstance(node, str):
            yield node
            continue
        if isinstance(node, PdfFragment):
            yield node.text
            continue
        if isinstance(node, PdfPage):
            children: Iterable[Any] = node.fragments
        elif isinstance(node, Mapping):
            children = node.values()
        elif isinstance(node, (list, tuple)):
            children = node
        else:
            continue

        # Shared or cyclic containers are walked once
        if id(node) in visited:
            continue
        visited.add(id(node))
        stack.extend(reversed(list(children)))


def find_match(pattern: Pattern[str], data: Any) -> Optional[str]:
    """Return the matched text of the first string value matching ``pattern``.

    Args:
        pattern: Compiled regular expression
        data: Document, sheet, row or page to search

    Returns:
        Matched text, or None when nothing matches
    """
    for value in iter_strings(data):
        match = pattern.search(value)
        if match:
            return match.group(0)
    return None


def find_all_matches(
    pattern: Pattern[str], data: Any, accumulator: Optional[List[str]] = None
) -> List[str]:
    """Collect every distinct match of ``pattern`` in first-seen order.

    The first capture group is collected when the pattern defines one and it
    participated in the match, otherwise the whole match.

    Args:
        pattern: Compiled regular expression
        data: Structure to search
        accumulator: Matches already collected; it is not modified

    Returns:
        New list holding the accumulated and newly found matches
    """
    matches = list(accumulator or [])
    for value in iter_strings(data):
        match = pattern.search(value)
        if not match:
            continue
        found = match.group(1) if pattern.groups and match.group(1) is not None else match.group(0)
        if found not in matches:
            matches.append(found)
    return matches


def test(pattern: Pattern[str], data: Any) -> bool:
    """True when any string value of ``data`` matches ``pattern``."""
    return find_match(pattern, data) is not None


def test_all_patterns(patterns: Iterable[Pattern[str]], data: Any) -> bool:
    """True when every pattern independently matches some value of ``data``."""
    return all(test(pattern, data) for pattern in patterns)


def find_unit(text: Any) -> Optional[str]:
    """Extract a kilogram unit from header text such as ``"Net Weight (KG)"``."""
    if not isinstance(text, str):
        return None
    match = UNIT_PATTERN.search(text)
    return match.group(0) if match else None


def position_finder(rows: Any, pattern: Pattern[str]) -> Tuple[int, Optional[Any]]:
    """Locate the first cell matching ``pattern``.

    Args:
        rows: Sequence of rows (mappings or lists)
        pattern: Compiled regular expression

    Returns:
        ``(row_index, column_key)``, or ``(-1, None)`` when not found
    """
    if not isinstance(rows, (list, tuple)):
        return -1, None
    for index, row in enumerate(rows):
        for key, value in row_cells(row):
            if isinstance(value, str) and pattern.search(value):
                return index, key
    return -1, None


def row_cells(row: Any) -> Iterable[Tuple[Any, Any]]:
    """Iterate ``(column_key, value)`` pairs of a mapping row or a list row."""
    if isinstance(row, Mapping):
        return row.items()
    if isinstance(row, (list, tuple)):
        return enumerate(row)
    return ()


def cell(row: Any, key: Any) -> Any:
    """Value of ``row`` at ``key``, or None when absent."""
    if key is None:
        return None
    if isinstance(row, Mapping):
        return row.get(key)
    if isinstance(row, (list, tuple)) and isinstance(key, int) and 0 <= key < len(row):
        return row[key]
    return None
