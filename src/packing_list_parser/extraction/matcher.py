"""Format matching: decides whether a document belongs to a format."""

import logging
from typing import Any, Iterable, Mapping, Optional, Pattern

from packing_list_parser.constants import REMOS_FAMILY_PATTERN
from packing_list_parser.extraction.models import (
    DocumentKind,
    EstablishmentPolicy,
    FormatDefinition,
    MatchResult,
)
from packing_list_parser.extraction.pdf_layout import matches_header_bands, to_pdf_pages
from packing_list_parser.extraction.regex_search import test
from packing_list_parser.extraction.row_finder import all_rows_empty, find_header_row
from packing_list_parser.logging_config import resolve_logger
from packing_list_parser.utils import matches_kind


def matches_header(patterns: Iterable[Pattern[str]], rows: Any) -> MatchResult:
    """Search ``rows`` for a row in which every header pattern is found.

    Args:
        patterns: Required header patterns
        rows: Rows of one sheet or CSV file

    Returns:
        CORRECT, WRONG_HEADER, or GENERIC_ERROR if the search raised
    """
    try:
        if find_header_row(rows, patterns) == -1:
            return MatchResult.WRONG_HEADER
        return MatchResult.CORRECT
    except Exception:
        return MatchResult.GENERIC_ERROR


def _establishment_absent(rows: Any) -> bool:
    return not test(REMOS_FAMILY_PATTERN, rows)


def match_sheets(
    sheets: Any,
    establishment_number: Pattern[str],
    header_patterns: Iterable[Pattern[str]],
    invalid_sheets: Iterable[str] = (),
    policy: EstablishmentPolicy = EstablishmentPolicy.STRICT,
) -> MatchResult:
    """Match a multi-sheet workbook against one establishment pattern and header.

    A sheet whose establishment number is wrong fails the whole workbook,
    whatever the headers of the other sheets. Otherwise every remaining sheet
    must contain a recognisable header.
    Under the ``skip_absent`` policy a sheet holding no establishment-shaped
    value at all is skipped instead of failing.

    Args:
        sheets: Mapping of sheet name to rows
        establishment_number: Pattern the establishment number must match
        header_patterns: Patterns that identify the header row
        invalid_sheets: Sheet names ignored entirely
        policy: Treatment of sheets without any establishment number

    Returns:
        MatchResult for the workbook
    """
    if not isinstance(sheets, Mapping) or not sheets:
        return MatchResult.EMPTY_FILE

    skipped = set(invalid_sheets)
    sheet_rows = [rows for name, rows in sheets.items() if name not in skipped]
    if all(not rows or all_rows_empty(rows) for rows in sheet_rows):
        return MatchResult.EMPTY_FILE

    # A blank sheet fails the establishment test unless the policy is skip_absent
    candidates = []
    for rows in sheet_rows:
        if not test(establishment_number, rows):
            if policy is EstablishmentPolicy.SKIP_ABSENT and _establishment_absent(rows):
                continue
            return MatchResult.WRONG_ESTABLISHMENT_NUMBER
        candidates.append(rows)

    if not candidates:
        return MatchResult.EMPTY_FILE

    header_patterns = list(header_patterns)
    for rows in candidates:
        result = matches_header(header_patterns, rows)
        if result is not MatchResult.CORRECT:
            return result
    return MatchResult.CORRECT


def match_grid(definition: FormatDefinition, sheets: Any) -> MatchResult:
    return match_sheets(
        sheets,
        definition.establishment_number,
        definition.header_patterns,
        invalid_sheets=definition.invalid_sheets,
        policy=definition.establishment_policy,
    )


def match_csv(definition: FormatDefinition, rows: Any) -> MatchResult:
    """Match a CSV file, a single block of rows."""
    if not rows or all_rows_empty(rows):
        return MatchResult.EMPTY_FILE
    if not test(definition.establishment_number, rows):
        return MatchResult.WRONG_ESTABLISHMENT_NUMBER
    return matches_header(definition.header_patterns, rows)


def match_pdf(definition: FormatDefinition, document: Any) -> MatchResult:
    """Match every page of a PDF against the format's header bands."""
    pages = to_pdf_pages(document)
    if not any(page.fragments for page in pages):
        return MatchResult.EMPTY_FILE

    candidates = []
    for page in pages:
        if not test(definition.establishment_number, page):
            if (
                definition.establishment_policy is EstablishmentPolicy.SKIP_ABSENT
                and _establishment_absent(page)
            ):
                continue
            return MatchResult.WRONG_ESTABLISHMENT_NUMBER
        candidates.append(page)

    if not candidates:
        return MatchResult.EMPTY_FILE

    for page in candidates:
        if not matches_header_bands(
            definition.bands, page, definition.min_headers_y, definition.max_headers_y
        ):
            return MatchResult.WRONG_HEADER
    return MatchResult.CORRECT


_MATCHERS = {
    DocumentKind.EXCEL: match_grid,
    DocumentKind.CSV: match_csv,
    DocumentKind.PDF: match_pdf,
}


def match_format(
    definition: FormatDefinition,
    document: Any,
    filename: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
) -> MatchResult:
    """Decide whether ``document`` belongs to the format ``definition``.

    Never raises: unexpected failures are logged and reported as
    GENERIC_ERROR.

    Args:
        definition: Format to test
        document: Decoded packing list
        filename: Original filename, used for the extension check
        logger: Logger to report to; built on demand when omitted

    Returns:
        MatchResult for this format
    """
    log = resolve_logger(logger, __name__)
    try:
        if filename and not matches_kind(filename, definition.kind):
            return MatchResult.WRONG_EXTENSION

        result = _MATCHERS[definition.kind](definition, document)
        if result is MatchResult.CORRECT:
            log.info("Packing list matches %s with filename: %s", definition.format_id, filename)
        return result
    except Exception as e:
        log.error(
            "Failed to match %s with filename %s: %s",
            definition.format_id,
            filename,
            e,
            exc_info=True,
        )
        return MatchResult.GENERIC_ERROR
