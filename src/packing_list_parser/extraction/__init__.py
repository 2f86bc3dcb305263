"""Packing list classification and canonicalisation engine."""

from packing_list_parser.extraction.matcher import match_format, matches_header
from packing_list_parser.extraction.models import DocumentKind, FormatDefinition, MatchResult
from packing_list_parser.extraction.parsers import parse_format
from packing_list_parser.extraction.pipeline import parse_packing_list
from packing_list_parser.extraction.registry import FormatRegistry, get_default_registry

__all__ = [
    "DocumentKind",
    "FormatDefinition",
    "FormatRegistry",
    "MatchResult",
    "get_default_registry",
    "match_format",
    "matches_header",
    "parse_format",
    "parse_packing_list",
]
