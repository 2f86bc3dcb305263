"""Packing list processing pipeline."""

from __future__ import annotations

import logging
from typing import Any, Optional

from packing_list_parser.domain.constants import ParserModel
from packing_list_parser.domain.models import ParseResult
from packing_list_parser.extraction.combiner import no_match_result
from packing_list_parser.extraction.models import DocumentKind
from packing_list_parser.extraction.pdf_layout import to_pdf_pages
from packing_list_parser.extraction.registry import FormatRegistry, get_default_registry
from packing_list_parser.logging_config import resolve_logger
from packing_list_parser.utils import detect_document_kind, sanitise_grid, sanitise_rows


def prepare_document(document: Any, kind: DocumentKind) -> Any:
    """Sanitised copy of a workbook or CSV file, or the pages of a PDF."""
    if kind is DocumentKind.EXCEL:
        return sanitise_grid(document)
    if kind is DocumentKind.CSV:
        return sanitise_rows(document)
    return to_pdf_pages(document)


def parse_packing_list(
    document: Any,
    filename: Optional[str] = None,
    dispatch_location: Optional[str] = None,
    registry: Optional[FormatRegistry] = None,
    logger: Optional[logging.Logger] = None,
) -> ParseResult:
    """Classify a decoded packing list and extract its canonical items.

    Args:
        document: Workbook mapping, CSV rows or PDF page(s)
        filename: Original filename; its extension selects the document kind
        dispatch_location: Dispatch location copied onto the result
        registry: Registry to dispatch with (default: packaged formats)
        logger: Logger to report to; built on demand when omitted

    Returns:
        ParseResult. Never raises:
        - Unknown kind: parserModel UNRECOGNISED
        - No establishment number: parserModel NOREMOS / NOREMOSCSV / NOREMOSPDF
        - No matching format or extraction failure: parserModel NOMATCH
    """
    log = resolve_logger(logger, __name__)
    try:
        kind = detect_document_kind(document, filename)
        if kind is None:
            log.info("Unrecognised packing list %s", filename)
            result = no_match_result(ParserModel.UNRECOGNISED)
        else:
            registry = registry or get_default_registry()
            result = registry.dispatch(prepare_document(document, kind), kind, filename, logger=log)
    except Exception as e:
        log.error("Failed to parse packing list %s: %s", filename, e, exc_info=True)
        result = no_match_result()

    if dispatch_location is not None:
        result = result.model_copy(update={"dispatch_location_number": dispatch_location})
    return result
