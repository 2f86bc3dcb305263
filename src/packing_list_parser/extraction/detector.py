"""Format definition loading and discovery."""

import re
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, Pattern, Union

from packing_list_parser.constants import REMOS_PATTERN
from packing_list_parser.domain.constants import CORE_FIELDS, OPTIONAL_FIELDS
from packing_list_parser.extraction.models import (
    BlanketValue,
    DocumentKind,
    EstablishmentPolicy,
    FieldBand,
    FormatDefinition,
)

DEFAULT_FORMATS_DIR = Path(__file__).resolve().parent.parent / "formats"


class FormatDefinitionError(ValueError):
    """Raised when a format definition file is invalid."""


def _compile(pattern: Any, source: str) -> Pattern[str]:
    if not isinstance(pattern, str) or not pattern:
        raise FormatDefinitionError(f"{source}: pattern must be a non-empty string")
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise FormatDefinitionError(f"{source}: invalid pattern {pattern!r}: {e}") from e


def _compile_mapping(data: Any, source: str) -> Dict[str, Pattern[str]]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FormatDefinitionError(f"{source}: expected a mapping of field name to pattern")
    return {name: _compile(pattern, f"{source}.{name}") for name, pattern in data.items()}


def _blanket(data: Any, source: str) -> Optional[BlanketValue]:
    if data is None:
        return None
    if not isinstance(data, dict) or "pattern" not in data or "value" not in data:
        raise FormatDefinitionError(f"{source}: expected 'pattern' and 'value'")
    return BlanketValue(pattern=_compile(data["pattern"], source), value=str(data["value"]))


def _bands(data: Any, source: str) -> Dict[str, FieldBand]:
    if data is None:
        return {}
    bands = {}
    for name, band in data.items():
        missing = [key for key in ("x1", "x2", "pattern") if key not in band]
        if missing:
            raise FormatDefinitionError(f"{source}.{name}: missing {', '.join(missing)}")
        bands[name] = FieldBand(
            x1=float(band["x1"]),
            x2=float(band["x2"]),
            pattern=_compile(band["pattern"], f"{source}.{name}"),
        )
    return bands


def build_format(
    data: Dict[str, Any], kind: Optional[DocumentKind] = None, source: str = "format"
) -> FormatDefinition:
    """Validate raw definition data and build a FormatDefinition.

    Args:
        data: Parsed YAML mapping
        kind: Document kind implied by the file location, if any
        source: Name used in error messages

    Returns:
        Validated FormatDefinition

    Raises:
        FormatDefinitionError: If required fields are missing or invalid
    """
    if not isinstance(data, dict):
        raise FormatDefinitionError(f"{source}: definition must be a mapping")

    for field in ["format_id", "establishment_number"]:
        if field not in data:
            raise FormatDefinitionError(f"{source}: missing required field: {field}")

    try:
        declared_kind = DocumentKind(data["kind"]) if "kind" in data else kind
    except ValueError as e:
        raise FormatDefinitionError(f"{source}: unknown kind {data['kind']!r}") from e
    if declared_kind is None:
        raise FormatDefinitionError(f"{source}: missing required field: kind")
    if kind is not None and declared_kind is not kind:
        raise FormatDefinitionError(
            f"{source}: kind {declared_kind.value} does not match directory {kind.value}"
        )

    fields = _compile_mapping(data.get("fields"), f"{source}.fields")
    bands = _bands(data.get("bands"), f"{source}.bands")
    if declared_kind is DocumentKind.PDF:
        if not bands:
            raise FormatDefinitionError(f"{source}: missing required field: bands")
        for field in ["min_headers_y", "max_headers_y"]:
            if field not in data:
                raise FormatDefinitionError(f"{source}: missing required field: {field}")
    else:
        if not fields:
            raise FormatDefinitionError(f"{source}: missing required field: fields")
        declared = set(fields) | set(data.get("optional_fields") or {})
        missing_core = [name for name in CORE_FIELDS if name not in declared]
        if declared_kind is DocumentKind.EXCEL and missing_core:
            raise FormatDefinitionError(f"{source}: fields must cover {', '.join(missing_core)}")

    optional_fields = _compile_mapping(data.get("optional_fields"), f"{source}.optional_fields")
    unknown = [name for name in optional_fields if name not in OPTIONAL_FIELDS]
    if unknown:
        raise FormatDefinitionError(f"{source}: unsupported optional fields: {', '.join(unknown)}")

    try:
        policy = EstablishmentPolicy(
            data.get("establishment_policy", EstablishmentPolicy.STRICT.value)
        )
    except ValueError as e:
        raise FormatDefinitionError(f"{source}: unknown establishment_policy") from e

    search_pattern = data.get("establishment_search_pattern")
    footer_pattern = data.get("footer_pattern")

    return FormatDefinition(
        format_id=str(data["format_id"]),
        kind=declared_kind,
        establishment_number=_compile(
            data["establishment_number"], f"{source}.establishment_number"
        ),
        fields=fields,
        optional_fields=optional_fields,
        find_unit_in_header=bool(data.get("find_unit_in_header", False)),
        validate_country_of_origin=bool(data.get("validate_country_of_origin", False)),
        deprecated=bool(data.get("deprecated", False)),
        invalid_sheets=frozenset(data.get("invalid_sheets") or []),
        blanket_nirms=_blanket(data.get("blanket_nirms"), f"{source}.blanket_nirms"),
        blanket_treatment_type=_blanket(
            data.get("blanket_treatment_type"), f"{source}.blanket_treatment_type"
        ),
        establishment_policy=policy,
        establishment_search_pattern=(
            _compile(search_pattern, f"{source}.establishment_search_pattern")
            if search_pattern
            else REMOS_PATTERN
        ),
        data_row_offset=int(data.get("data_row_offset", 1)),
        footer_pattern=(
            _compile(footer_pattern, f"{source}.footer_pattern") if footer_pattern else None
        ),
        skip_repeated_headers=bool(data.get("skip_repeated_headers", False)),
        totals_row_keywords=tuple(data.get("totals_row_keywords") or ()),
        remove_trailing_total_row=bool(data.get("remove_trailing_total_row", False)),
        bands=bands,
        optional_bands=_bands(data.get("optional_bands"), f"{source}.optional_bands"),
        min_headers_y=float(data.get("min_headers_y", 0.0)),
        max_headers_y=float(data.get("max_headers_y", 0.0)),
        min_row_fragments=int(data.get("min_row_fragments", 5)),
        row_stop_value=str(data.get("row_stop_value", "0")),
    )


def load_format(
    format_path: Union[str, Path], kind: Optional[DocumentKind] = None
) -> FormatDefinition:
    """Load and validate a YAML format definition.

    Args:
        format_path: Path to YAML definition file
        kind: Document kind implied by the containing directory

    Returns:
        Validated FormatDefinition

    Raises:
        FileNotFoundError: If the definition file is not found
        FormatDefinitionError: If the definition is invalid
    """
    path = Path(format_path)
    if not path.exists():
        raise FileNotFoundError(f"Format definition not found: {format_path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise FormatDefinitionError(
            f"Failed to parse YAML format definition {path.name}: {e}"
        ) from e

    return build_format(data, kind=kind, source=path.name)


def discover_formats(
    formats_dir: Union[str, Path] = DEFAULT_FORMATS_DIR,
) -> Dict[DocumentKind, List[Path]]:
    """Discover YAML definitions in the ``<kind>/`` subdirectories.

    Args:
        formats_dir: Directory holding ``excel/``, ``csv/`` and ``pdf/``

    Returns:
        Definition paths per kind, in sorted filename order

    Raises:
        FileNotFoundError: If the formats directory does not exist
    """
    formats_path = Path(formats_dir)
    if not formats_path.exists():
        raise FileNotFoundError(f"Formats directory not found: {formats_dir}")

    return {kind: sorted((formats_path / kind.value).glob("*.yaml")) for kind in DocumentKind}


def load_formats(formats_dir: Union[str, Path] = DEFAULT_FORMATS_DIR) -> List[FormatDefinition]:
    """Load every definition under ``formats_dir`` in registration order."""
    definitions = []
    for kind, paths in discover_formats(formats_dir).items():
        definitions.extend(load_format(path, kind=kind) for path in paths)
    return definitions
