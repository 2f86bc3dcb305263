"""
Packing List Parser Package

Classifies decoded retailer packing lists against declarative format
definitions and canonicalises their line items:
- extraction/: pattern search, matchers, field resolution, result combining
- domain/: wire models and canonical field names
- formats/: YAML format definitions, one file per retailer model

Usage:
    from packing_list_parser import parse_packing_list
    result = parse_packing_list(document, "packing-list.xlsx")
"""

__version__ = "0.1.0"
__author__ = "Packing List Parser Team"

from packing_list_parser.extraction.pipeline import parse_packing_list

__all__ = ["parse_packing_list"]
