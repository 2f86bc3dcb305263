"""
Package Constants

Shared regular expressions and names used by the matchers, resolvers and
validators.
"""

import re
from typing import List, Pattern

# Exact establishment number, as it appears in a single cell
REMOS_PATTERN: Pattern[str] = re.compile(r"^RMS-GB-\d{6}-\d{3}$", re.IGNORECASE)

# Establishment number embedded anywhere in a cell
REMOS_SEARCH_PATTERN: Pattern[str] = re.compile(r"RMS-GB-\d{6}-\d{3}", re.IGNORECASE)

# Anything shaped like an establishment number, used to tell an absent
# number apart from a wrong one
REMOS_FAMILY_PATTERN: Pattern[str] = re.compile(r"RMS-GB-\d+", re.IGNORECASE)

UNIT_PATTERN: Pattern[str] = re.compile(r"(KGS?|KILOGRAMS?|KILOS?)", re.IGNORECASE)

COMMODITY_CODE_DIGITS_PATTERN: Pattern[str] = re.compile(r"^(\d{4,14})")

NUMERIC_CODE_PATTERN: Pattern[str] = re.compile(r"^\d+$")

# Plain decimal or exponent notation, no digit separators
NUMBER_PATTERN: Pattern[str] = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")

COUNTRY_OF_ORIGIN_PATTERN: Pattern[str] = re.compile(r"^([A-Z]{2}|X)$", re.IGNORECASE)

VALID_NIRMS_VALUES: List[str] = [
    "yes",
    "no",
    "nirms",
    "non-nirms",
    "non nirms",
    "y",
    "n",
    "true",
    "false",
]

EXCEL_EXTENSIONS: List[str] = ["xlsx", "xls"]
CSV_EXTENSIONS: List[str] = ["csv"]
PDF_EXTENSIONS: List[str] = ["pdf"]

# Number of failing locations spelled out before summarising the rest
MAX_REPORTED_LOCATIONS = 3
