"""Domain exports."""

from .constants import CANONICAL_FIELDS, FailureReason, ParserModel
from .models import BusinessChecks, CanonicalItem, ParseResult, RowLocation

__all__ = [
    "CANONICAL_FIELDS",
    "FailureReason",
    "ParserModel",
    "BusinessChecks",
    "CanonicalItem",
    "ParseResult",
    "RowLocation",
]
