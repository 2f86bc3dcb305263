"""Extraction flows for workbook, CSV and PDF packing lists."""

import logging
from typing import Any, List, Mapping, Optional, Sequence

from packing_list_parser.domain.models import CanonicalItem, ParseResult
from packing_list_parser.extraction.combiner import combine_parser, no_match_result
from packing_list_parser.extraction.field_resolver import map_pdf_rows, map_rows
from packing_list_parser.extraction.models import DocumentKind, FormatDefinition
from packing_list_parser.extraction.pdf_layout import matches_header_bands, to_pdf_pages
from packing_list_parser.extraction.regex_search import (
    find_all_matches,
    find_match,
    row_cells,
    test,
    test_all_patterns,
)
from packing_list_parser.extraction.row_finder import find_header_row, is_blank, row_finder
from packing_list_parser.logging_config import resolve_logger


def truncate_footer(
    definition: FormatDefinition, rows: Sequence[Any], header_index: int
) -> List[Any]:
    """Rows up to (excluding) the first footer row after the header."""
    rows = list(rows)
    if definition.footer_pattern is None:
        return rows
    footer_index = row_finder(
        rows[header_index + 1 :], lambda row: test(definition.footer_pattern, row)
    )
    if footer_index == -1:
        return rows
    return rows[: header_index + 1 + footer_index]


def _source_row(rows: Sequence[Any], item: CanonicalItem) -> Any:
    return rows[item.row_location.row_number - 1]


def _is_totals_row(row: Any, keywords: Sequence[str]) -> bool:
    for _, value in row_cells(row):
        if isinstance(value, str) and any(keyword.lower() in value.lower() for keyword in keywords):
            return True
    return False


def _is_trailing_total(item: CanonicalItem) -> bool:
    return (
        is_blank(item.description)
        and is_blank(item.commodity_code)
        and not (is_blank(item.number_of_packages) and is_blank(item.total_net_weight_kg))
    )


def apply_row_filters(
    definition: FormatDefinition, rows: Sequence[Any], items: List[CanonicalItem]
) -> List[CanonicalItem]:
    """Drop repeated headers and totals rows as the format requires.

    Args:
        definition: Format being extracted
        rows: Rows the items were mapped from
        items: Items mapped from ``rows``

    Returns:
        Filtered items
    """
    if definition.skip_repeated_headers:
        items = [
            item
            for item in items
            if not test_all_patterns(definition.header_patterns, _source_row(rows, item))
        ]
    if definition.totals_row_keywords:
        items = [
            item
            for item in items
            if not (
                is_blank(item.description)
                and is_blank(item.commodity_code)
                and _is_totals_row(_source_row(rows, item), definition.totals_row_keywords)
            )
        ]
    if definition.remove_trailing_total_row:
        # Blank rows may sit between the data and the totals line
        populated = [item for item in items if not item.is_empty()]
        if populated and _is_trailing_total(populated[-1]):
            items = [item for item in items if item is not populated[-1]]
    return items


def parse_grid(
    definition: FormatDefinition, sheets: Any, logger: Optional[logging.Logger] = None
) -> ParseResult:
    """Extract a multi-sheet workbook.

    Args:
        definition: Matched format
        sheets: Mapping of sheet name to rows
        logger: Logger to report to; built on demand when omitted

    Returns:
        Validated ParseResult, NOMATCH when no sheet has a header
    """
    log = resolve_logger(logger, __name__)
    if not isinstance(sheets, Mapping):
        sheets = {}
    try:
        sheet_names = [name for name in sheets if name not in definition.invalid_sheets]

        establishment_number = None
        establishment_numbers: List[str] = []
        items: List[CanonicalItem] = []
        found_header = False

        for sheet_name in sheet_names:
            rows = sheets[sheet_name]
            if not isinstance(rows, (list, tuple)):
                continue
            if establishment_number is None:
                establishment_number = find_match(definition.establishment_number, rows)

            establishment_numbers = find_all_matches(
                definition.establishment_search_pattern, rows, establishment_numbers
            )

            header_index = find_header_row(rows, definition.header_patterns)
            if header_index == -1:
                continue
            found_header = True

            rows = truncate_footer(definition, rows, header_index)
            sheet_items = map_rows(rows, header_index, definition, sheets, sheet_name=sheet_name)
            items.extend(apply_row_filters(definition, rows, sheet_items))

        return combine_parser(
            establishment_number,
            items,
            found_header,
            definition.format_id,
            establishment_numbers,
            definition,
            logger=log,
        )
    except Exception as e:
        log.error("Failed to parse %s workbook: %s", definition.format_id, e, exc_info=True)
        return no_match_result()


def parse_csv(
    definition: FormatDefinition, rows: Any, logger: Optional[logging.Logger] = None
) -> ParseResult:
    """Extract a CSV packing list, a single block of list rows."""
    log = resolve_logger(logger, __name__)
    try:
        if not rows:
            return no_match_result()

        header_index = find_header_row(rows, definition.header_patterns)
        if header_index == -1:
            return no_match_result()

        rows = truncate_footer(definition, rows, header_index)
        items = apply_row_filters(definition, rows, map_rows(rows, header_index, definition, rows))
        return combine_parser(
            find_match(definition.establishment_number, rows),
            items,
            True,
            definition.format_id,
            find_all_matches(definition.establishment_search_pattern, rows),
            definition,
            logger=log,
        )
    except Exception as e:
        log.error("Failed to parse %s CSV: %s", definition.format_id, e, exc_info=True)
        return no_match_result()


def parse_pdf(
    definition: FormatDefinition, document: Any, logger: Optional[logging.Logger] = None
) -> ParseResult:
    """Extract a coordinate-positioned PDF packing list page by page."""
    log = resolve_logger(logger, __name__)
    try:
        pages = to_pdf_pages(document)

        items: List[CanonicalItem] = []
        found_header = False
        for page in pages:
            if not matches_header_bands(
                definition.bands, page, definition.min_headers_y, definition.max_headers_y
            ):
                continue
            found_header = True
            items.extend(map_pdf_rows(page, definition))

        return combine_parser(
            find_match(definition.establishment_number, pages),
            items,
            found_header,
            definition.format_id,
            find_all_matches(definition.establishment_search_pattern, pages),
            definition,
            logger=log,
        )
    except Exception as e:
        log.error("Failed to parse %s PDF: %s", definition.format_id, e, exc_info=True)
        return no_match_result()


_PARSERS = {
    DocumentKind.EXCEL: parse_grid,
    DocumentKind.CSV: parse_csv,
    DocumentKind.PDF: parse_pdf,
}


def parse_format(
    definition: FormatDefinition, document: Any, logger: Optional[logging.Logger] = None
) -> ParseResult:
    """Extract ``document`` with the parser for the format's kind."""
    return _PARSERS[definition.kind](definition, document, logger=logger)
