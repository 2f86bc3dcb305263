"""API schema exports."""

from .parse import FormatSummary, ParseRequest

__all__ = [
    "FormatSummary",
    "ParseRequest",
]
