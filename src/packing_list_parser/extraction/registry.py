"""Format dispatch registry."""

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from packing_list_parser.constants import REMOS_SEARCH_PATTERN
from packing_list_parser.domain.constants import NO_REMOS_MODELS
from packing_list_parser.domain.models import ParseResult
from packing_list_parser.extraction.combiner import no_match_result, no_remos_result
from packing_list_parser.extraction.detector import DEFAULT_FORMATS_DIR, load_formats
from packing_list_parser.extraction.matcher import match_format
from packing_list_parser.extraction.models import DocumentKind, FormatDefinition, MatchResult
from packing_list_parser.extraction.parsers import parse_format
from packing_list_parser.extraction.regex_search import test
from packing_list_parser.logging_config import resolve_logger


@dataclass(frozen=True)
class RegisteredFormat:
    """A format definition paired with its matcher and parser."""

    definition: FormatDefinition

    @property
    def format_id(self) -> str:
        return self.definition.format_id

    def matches(
        self, document: Any, filename: Optional[str] = None, logger: Optional[logging.Logger] = None
    ) -> MatchResult:
        return match_format(self.definition, document, filename, logger=logger)

    def parse(self, document: Any, logger: Optional[logging.Logger] = None) -> ParseResult:
        return parse_format(self.definition, document, logger=logger)


class FormatRegistry:
    """Registered formats in three independent namespaces: excel, csv and pdf.

    Within a namespace formats are tried in registration order.
    """

    def __init__(self, definitions: Iterable[FormatDefinition] = ()):
        self._formats: Dict[DocumentKind, Dict[str, RegisteredFormat]] = {
            kind: {} for kind in DocumentKind
        }
        for definition in definitions:
            self.register(definition)

    def register(self, definition: FormatDefinition) -> RegisteredFormat:
        """Add a format to the namespace of its kind.

        Raises:
            ValueError: If the format id is already registered for that kind
        """
        namespace = self._formats[definition.kind]
        if definition.format_id in namespace:
            raise ValueError(
                f"Format {definition.format_id} already registered for {definition.kind.value}"
            )
        registered = RegisteredFormat(definition)
        namespace[definition.format_id] = registered
        return registered

    def formats(self, kind: DocumentKind) -> List[RegisteredFormat]:
        return list(self._formats[kind].values())

    def all_formats(self) -> List[RegisteredFormat]:
        return [registered for kind in DocumentKind for registered in self.formats(kind)]

    def get(self, kind: DocumentKind, format_id: str) -> Optional[RegisteredFormat]:
        return self._formats[kind].get(format_id)

    def find_parser(
        self,
        document: Any,
        kind: DocumentKind,
        filename: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ) -> Optional[RegisteredFormat]:
        """First non-deprecated format of ``kind`` whose matcher returns CORRECT."""
        for registered in self.formats(kind):
            if registered.definition.deprecated:
                continue
            if registered.matches(document, filename, logger=logger) is MatchResult.CORRECT:
                return registered
        return None

    def dispatch(
        self,
        document: Any,
        kind: DocumentKind,
        filename: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ) -> ParseResult:
        """Classify ``document`` and extract it with the matching format.

        When nothing matches, documents holding no establishment number at all
        are reported as NOREMOS, anything else as NOMATCH.

        Args:
            document: Decoded packing list of the given kind
            kind: Namespace to dispatch within
            filename: Original filename, passed to the matchers
            logger: Logger to report to; built on demand when omitted

        Returns:
            ParseResult from the matching parser or the no-match handler
        """
        log = resolve_logger(logger, __name__)

        registered = self.find_parser(document, kind, filename, logger=log)
        if registered is not None:
            log.info("Parsing %s with parser model %s", filename, registered.format_id)
            return registered.parse(document, logger=log)

        if not test(REMOS_SEARCH_PATTERN, document):
            log.info("No establishment number found in %s", filename)
            return no_remos_result(NO_REMOS_MODELS[kind.value])

        log.info("No parser matched %s", filename)
        return no_match_result()


@lru_cache(maxsize=None)
def get_default_registry(formats_dir: Union[str, Path, None] = None) -> FormatRegistry:
    """Registry of the definitions in ``formats_dir``, loaded once per directory."""
    return FormatRegistry(load_formats(formats_dir or DEFAULT_FORMATS_DIR))
