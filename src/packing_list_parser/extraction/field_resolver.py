"""Map header and data rows onto canonical packing list items."""

from typing import Any, Dict, List, Optional, Sequence

from packing_list_parser.constants import COMMODITY_CODE_DIGITS_PATTERN
from packing_list_parser.domain.constants import (
    CANONICAL_FIELDS,
    COMMODITY_CODE,
    HEADER_NET_WEIGHT_UNIT,
    NIRMS,
    TOTAL_NET_WEIGHT_KG,
    TOTAL_NET_WEIGHT_UNIT,
    TYPE_OF_TREATMENT,
)
from packing_list_parser.domain.models import CanonicalItem, RowLocation
from packing_list_parser.extraction.models import FieldBand, FormatDefinition, PdfPage
from packing_list_parser.extraction.pdf_layout import (
    find_band_header,
    find_item_content,
    get_headers,
    get_row_anchors,
)
from packing_list_parser.extraction.regex_search import cell, find_unit, row_cells, test
from packing_list_parser.extraction.row_finder import is_blank


def column_value(value: Any) -> Any:
    """Cell value, or None when the cell is blank."""
    return None if is_blank(value) else value


def find_header_columns(header_row: Any, definition: FormatDefinition) -> Dict[str, Any]:
    """Resolve the column key of each canonical field.

    Each field maps to the first header cell its pattern matches. Fields the
    header does not contain are left out.

    Args:
        header_row: The recognised header row
        definition: Format whose column patterns are used

    Returns:
        Mapping of canonical field name to column key
    """
    columns = {}
    for name, pattern in definition.column_patterns.items():
        for key, value in row_cells(header_row):
            if isinstance(value, str) and pattern.search(value):
                columns[name] = key
                break
    return columns


def extract_blanket_values(
    definition: FormatDefinition,
    document: Any,
    header_unit_texts: Sequence[Any] = (),
) -> Dict[str, Optional[str]]:
    """Values stated once for the whole document.

    Args:
        definition: Format holding the blanket rules
        document: Whole document, searched for the blanket patterns
        header_unit_texts: Header texts searched in order for a weight unit

    Returns:
        Mapping of canonical field name to blanket value (None when absent)
    """
    unit = None
    if definition.find_unit_in_header:
        for text in header_unit_texts:
            unit = find_unit(text)
            if unit:
                break

    blankets: Dict[str, Optional[str]] = {
        TOTAL_NET_WEIGHT_UNIT: unit,
        NIRMS: None,
        TYPE_OF_TREATMENT: None,
    }
    if definition.blanket_nirms and test(definition.blanket_nirms.pattern, document):
        blankets[NIRMS] = definition.blanket_nirms.value
    treatment = definition.blanket_treatment_type
    if treatment and test(treatment.pattern, document):
        blankets[TYPE_OF_TREATMENT] = treatment.value
    return blankets


def build_item(
    values: Dict[str, Any], blankets: Dict[str, Optional[str]], location: RowLocation
) -> CanonicalItem:
    """Combine explicit values with blanket values.

    An explicit non-blank value wins over a blanket value. Rows without any
    explicit value stay fully null so they can be recognised as empty.
    """
    item = {name: values.get(name) for name in CANONICAL_FIELDS}
    if any(value is not None for value in item.values()):
        for name, blanket in blankets.items():
            if item.get(name) is None and blanket is not None:
                item[name] = blanket
    return CanonicalItem(**item, row_location=location)


def map_rows(
    rows: Sequence[Any],
    header_index: int,
    definition: FormatDefinition,
    document: Any,
    sheet_name: Optional[str] = None,
) -> List[CanonicalItem]:
    """Map the data rows under a header row to canonical items.

    Args:
        rows: All rows of the sheet (or CSV file)
        header_index: Index of the header row
        definition: Format being extracted
        document: Whole document, for blanket values
        sheet_name: Sheet the rows belong to, None for CSV

    Returns:
        One item per data row, empty rows included
    """
    header_row = rows[header_index]
    columns = find_header_columns(header_row, definition)
    blankets = extract_blanket_values(
        definition,
        document,
        [
            cell(header_row, columns.get(TOTAL_NET_WEIGHT_KG)),
            cell(header_row, columns.get(HEADER_NET_WEIGHT_UNIT)),
        ],
    )

    items = []
    for index in range(header_index + definition.data_row_offset, len(rows)):
        row = rows[index]
        values = {
            name: column_value(cell(row, key))
            for name, key in columns.items()
            if name != HEADER_NET_WEIGHT_UNIT
        }
        location = RowLocation(row_number=index + 1, sheet_name=sheet_name)
        items.append(build_item(values, blankets, location))
    return items


def extract_commodity_code_digits(value: Any) -> Any:
    """Leading 4 to 14 digit run of a commodity code cell, or the value unchanged."""
    if not isinstance(value, str):
        return value
    match = COMMODITY_CODE_DIGITS_PATTERN.match(value.strip())
    return match.group(1) if match else value


def map_pdf_rows(page: PdfPage, definition: FormatDefinition) -> List[CanonicalItem]:
    """Map the table rows of one PDF page to canonical items.

    Optional bands are read only when their header is present on the page.

    Args:
        page: PDF page whose header has been recognised
        definition: PDF format being extracted

    Returns:
        One item per table row
    """
    headers = get_headers(page, definition.min_headers_y, definition.max_headers_y)
    bands: Dict[str, FieldBand] = dict(definition.bands)
    for name, band in definition.optional_bands.items():
        if find_band_header(band, headers) is not None:
            bands[name] = band

    weight_band = bands.get(TOTAL_NET_WEIGHT_KG)
    blankets = extract_blanket_values(
        definition, page, [find_band_header(weight_band, headers)] if weight_band else []
    )

    items = []
    anchors = get_row_anchors(
        page, definition.max_headers_y, definition.min_row_fragments, definition.row_stop_value
    )
    for row_index, y in enumerate(anchors):
        values = {name: find_item_content(page, y, band) for name, band in bands.items()}
        if values.get(COMMODITY_CODE) is not None:
            values[COMMODITY_CODE] = extract_commodity_code_digits(values[COMMODITY_CODE])
        location = RowLocation(row_number=row_index + 1, page_number=page.number)
        items.append(build_item(values, blankets, location))
    return items
