"""Coordinate-based layout helpers for positioned PDF text."""

import math
from typing import Any, Dict, List, Mapping, Optional

from packing_list_parser.extraction.models import FieldBand, PdfFragment, PdfPage

# Vertical tolerance when collecting the fragments of one row
ROW_Y_TOLERANCE = 1.0


def to_pdf_pages(document: Any) -> List[PdfPage]:
    """Normalise a decoded PDF document into pages.

    Accepts a single page mapping, ``{"pages": [...]}``, a list of page
    mappings, or already built ``PdfPage`` objects.

    Args:
        document: Decoded PDF representation

    Returns:
        List of pages in document order

    Raises:
        TypeError: If the document has no recognisable PDF shape
    """
    if document is None:
        return []
    if isinstance(document, PdfPage):
        return [document]
    if isinstance(document, Mapping):
        raw_pages = document["pages"] if "pages" in document else [document]
    elif isinstance(document, (list, tuple)):
        raw_pages = document
    else:
        raise TypeError(f"Unsupported PDF document type: {type(document).__name__}")

    pages = []
    for index, raw_page in enumerate(raw_pages or []):
        if isinstance(raw_page, PdfPage):
            pages.append(raw_page)
        elif isinstance(raw_page, Mapping):
            pages.append(PdfPage.from_dict(raw_page, default_number=index + 1))
        else:
            raise TypeError(f"Unsupported PDF page type: {type(raw_page).__name__}")
    return pages


def get_headers(page: PdfPage, min_y: float, max_y: float) -> Dict[float, str]:
    """Group header fragments by x-position.

    Args:
        page: PDF page
        min_y: Top of the header area
        max_y: Bottom of the header area

    Returns:
        Mapping of x-position to the space-joined header text found there
    """
    headers: Dict[float, List[str]] = {}
    for fragment in page.fragments:
        if min_y <= fragment.y <= max_y:
            headers.setdefault(fragment.x, []).append(fragment.text)
    return {x: " ".join(texts) for x, texts in headers.items()}


def find_band_header(band: FieldBand, headers: Dict[float, str]) -> Optional[str]:
    """Header text inside ``band`` that matches its pattern, if any."""
    for x, text in headers.items():
        if band.contains(x) and band.pattern.search(text):
            return text
    return None


def matches_header_bands(
    bands: Mapping[str, FieldBand], page: PdfPage, min_y: float, max_y: float
) -> bool:
    """True when every band finds its header text within its x-range."""
    headers = get_headers(page, min_y, max_y)
    return all(find_band_header(band, headers) is not None for band in bands.values())


def get_row_anchors(
    page: PdfPage, max_headers_y: float, min_row_fragments: int = 5, row_stop_value: str = "0"
) -> List[float]:
    """Vertical positions of the data rows below the header.

    Fragments are grouped by y rounded to two decimals. Rows are read top to
    bottom until a row has fewer than ``min_row_fragments`` fragments or its
    left-most text equals ``row_stop_value``.

    Args:
        page: PDF page
        max_headers_y: Bottom of the header area
        min_row_fragments: Minimum fragments for a line to count as a row
        row_stop_value: Left-most text marking the end of the table

    Returns:
        Row anchor y-positions in reading order
    """
    rows: Dict[float, List[PdfFragment]] = {}
    for fragment in page.fragments:
        if fragment.y > max_headers_y:
            rows.setdefault(round(fragment.y, 2), []).append(fragment)

    anchors = []
    for y in sorted(rows):
        fragments = sorted(rows[y], key=lambda f: f.x)
        if len(fragments) < min_row_fragments or fragments[0].text.strip() == row_stop_value:
            break
        anchors.append(y)
    return anchors


def find_item_content(page: PdfPage, y: float, band: FieldBand) -> Optional[str]:
    """Concatenate the non-blank fragments of one row inside ``band``.

    Args:
        page: PDF page
        y: Row anchor
        band: Column band

    Returns:
        Joined fragment text, or None when the cell is empty
    """
    parts = [
        fragment.text
        for fragment in page.fragments
        if abs(fragment.y - y) <= ROW_Y_TOLERANCE
        and band.contains(math.floor(fragment.x + 0.5))
        and fragment.text.strip()
    ]
    return "".join(parts) if parts else None
