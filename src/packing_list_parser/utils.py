"""
Utility Functions Module

File-kind detection and input sanitisation applied before a decoded packing
list reaches the matchers.
"""

from pathlib import PurePath
from typing import Any, Dict, List, Mapping, Optional

from packing_list_parser.constants import CSV_EXTENSIONS, EXCEL_EXTENSIONS, PDF_EXTENSIONS
from packing_list_parser.extraction.models import DocumentKind, MatchResult

KIND_EXTENSIONS: Dict[DocumentKind, List[str]] = {
    DocumentKind.EXCEL: EXCEL_EXTENSIONS,
    DocumentKind.CSV: CSV_EXTENSIONS,
    DocumentKind.PDF: PDF_EXTENSIONS,
}


def get_extension(filename: Optional[str]) -> str:
    """Lower-case extension of ``filename`` without the dot."""
    if not filename:
        return ""
    return PurePath(filename).suffix.lstrip(".").lower()


def matches_extension(filename: Optional[str], extension: str) -> MatchResult:
    """
    Check a filename against an expected extension.

    Args:
        filename (str): Name of the uploaded file
        extension (str): Expected extension, with or without the dot

    Returns:
        MatchResult: CORRECT when the extensions agree (case-insensitive),
        otherwise WRONG_EXTENSION
    """
    if get_extension(filename) == extension.lstrip(".").lower():
        return MatchResult.CORRECT
    return MatchResult.WRONG_EXTENSION


def is_excel(filename: Optional[str]) -> bool:
    return get_extension(filename) in EXCEL_EXTENSIONS


def is_csv(filename: Optional[str]) -> bool:
    return get_extension(filename) in CSV_EXTENSIONS


def is_pdf(filename: Optional[str]) -> bool:
    return get_extension(filename) in PDF_EXTENSIONS


def matches_kind(filename: Optional[str], kind: DocumentKind) -> bool:
    return get_extension(filename) in KIND_EXTENSIONS[kind]


def kind_from_filename(filename: Optional[str]) -> Optional[DocumentKind]:
    extension = get_extension(filename)
    for kind, extensions in KIND_EXTENSIONS.items():
        if extension in extensions:
            return kind
    return None


def kind_from_shape(document: Any) -> Optional[DocumentKind]:
    """
    Infer the document kind from the decoded structure.

    Args:
        document: Decoded packing list

    Returns:
        DocumentKind, or None when the shape is not recognised
    """
    if isinstance(document, Mapping):
        if "content" in document or "pages" in document:
            return DocumentKind.PDF
        return DocumentKind.EXCEL
    if isinstance(document, (list, tuple)):
        if document and all(isinstance(page, Mapping) for page in document):
            return DocumentKind.PDF
        if all(isinstance(row, (list, tuple)) for row in document):
            return DocumentKind.CSV
    return None


def detect_document_kind(document: Any, filename: Optional[str] = None) -> Optional[DocumentKind]:
    """Kind from the filename extension, or from the shape when there is no filename."""
    if filename:
        return kind_from_filename(filename)
    return kind_from_shape(document)


def sanitise_value(value: Any) -> Any:
    """Trim strings and turn blank strings into None."""
    if isinstance(value, str):
        return value.strip() or None
    return value


def sanitise_row(row: Any) -> Any:
    if isinstance(row, Mapping):
        return {key: sanitise_value(value) for key, value in row.items()}
    if isinstance(row, (list, tuple)):
        return [sanitise_value(value) for value in row]
    return row


def sanitise_grid(sheets: Any) -> Dict[str, Any]:
    """
    Sanitised copy of a workbook. The input is left untouched.

    Args:
        sheets (dict): Mapping of sheet name to rows

    Returns:
        dict: New mapping with trimmed string cells and blank cells as None,
        empty when ``sheets`` is not a mapping
    """
    if not isinstance(sheets, Mapping):
        return {}
    return {
        name: [sanitise_row(row) for row in rows] if isinstance(rows, (list, tuple)) else rows
        for name, rows in sheets.items()
    }


def sanitise_rows(rows: Any) -> Any:
    """Sanitised copy of CSV rows."""
    if not isinstance(rows, (list, tuple)):
        return rows
    return [sanitise_row(row) for row in rows]
