"""Combine per-row extraction into a validated document-level result."""

import logging
from typing import Iterable, List, Optional

from packing_list_parser.domain.constants import FailureReason, ParserModel
from packing_list_parser.domain.models import BusinessChecks, CanonicalItem, ParseResult
from packing_list_parser.extraction.models import FormatDefinition
from packing_list_parser.extraction.validators import generate_parsed_packing_list
from packing_list_parser.logging_config import resolve_logger


def no_match_result(
    parser_model: str = ParserModel.NOMATCH, failure_reasons: Optional[List[str]] = None
) -> ParseResult:
    """Result for a document no format could extract."""
    return ParseResult(
        registration_approval_number=None,
        establishment_numbers=[],
        items=[],
        business_checks=BusinessChecks(
            all_required_fields_present=False, failure_reasons=failure_reasons
        ),
        parser_model=parser_model,
    )


def no_remos_result(parser_model: str = ParserModel.NOREMOS) -> ParseResult:
    return no_match_result(parser_model, [FailureReason.NO_REMOS])


def combine_parser(
    establishment_number: Optional[str],
    items: Iterable[CanonicalItem],
    success: bool,
    parser_model: str,
    establishment_numbers: Optional[Iterable[str]] = None,
    definition: Optional[FormatDefinition] = None,
    logger: Optional[logging.Logger] = None,
) -> ParseResult:
    """Build the validated ParseResult for one extraction.

    Args:
        establishment_number: Primary establishment number
        items: Canonical items in document order
        success: Whether extraction completed
        parser_model: Format identifier of the extracting parser
        establishment_numbers: Every distinct establishment number seen
        definition: Format definition, for country of origin validation
        logger: Logger to report to; built on demand when omitted

    Returns:
        Validated result, or a NOMATCH result when extraction failed
    """
    if not success:
        return no_match_result()

    log = resolve_logger(logger, __name__)
    try:
        result = ParseResult(
            registration_approval_number=establishment_number,
            establishment_numbers=list(dict.fromkeys(establishment_numbers or [])),
            items=list(items),
            parser_model=parser_model,
        )
        return generate_parsed_packing_list(
            result, definition.validate_country_of_origin if definition else False
        )
    except Exception as e:
        log.error("Failed to combine %s results: %s", parser_model, e, exc_info=True)
        return no_match_result()
