"""Domain constants shared across the parser."""

from typing import Dict, List

DESCRIPTION = "description"
NATURE_OF_PRODUCTS = "nature_of_products"
TYPE_OF_TREATMENT = "type_of_treatment"
COMMODITY_CODE = "commodity_code"
NUMBER_OF_PACKAGES = "number_of_packages"
TOTAL_NET_WEIGHT_KG = "total_net_weight_kg"
TOTAL_NET_WEIGHT_UNIT = "total_net_weight_unit"
COUNTRY_OF_ORIGIN = "country_of_origin"
NIRMS = "nirms"
HEADER_NET_WEIGHT_UNIT = "header_net_weight_unit"

# Order of the fields on a canonical item
CANONICAL_FIELDS: List[str] = [
    DESCRIPTION,
    NATURE_OF_PRODUCTS,
    TYPE_OF_TREATMENT,
    COMMODITY_CODE,
    NUMBER_OF_PACKAGES,
    TOTAL_NET_WEIGHT_KG,
    TOTAL_NET_WEIGHT_UNIT,
    COUNTRY_OF_ORIGIN,
    NIRMS,
]

OPTIONAL_FIELDS: List[str] = [
    COUNTRY_OF_ORIGIN,
    TYPE_OF_TREATMENT,
    NIRMS,
    NATURE_OF_PRODUCTS,
    COMMODITY_CODE,
    TOTAL_NET_WEIGHT_UNIT,
    HEADER_NET_WEIGHT_UNIT,
]

# Semantic roles every grid format declares
CORE_FIELDS: List[str] = [
    DESCRIPTION,
    COMMODITY_CODE,
    NUMBER_OF_PACKAGES,
    TOTAL_NET_WEIGHT_KG,
]


class ParserModel:
    """Reserved parser model identifiers for non-matching documents."""

    NOMATCH = "NOMATCH"
    NOREMOS = "NOREMOS"
    NOREMOSCSV = "NOREMOSCSV"
    NOREMOSPDF = "NOREMOSPDF"
    UNRECOGNISED = "UNRECOGNISED"


NO_REMOS_MODELS: Dict[str, str] = {
    "excel": ParserModel.NOREMOS,
    "csv": ParserModel.NOREMOSCSV,
    "pdf": ParserModel.NOREMOSPDF,
}


class FailureReason:
    """User-facing failure reason texts."""

    NO_REMOS = "Check GB Establishment RMS Number."
    MISSING_IDENTIFIER = "Identifier is missing"
    INVALID_PRODUCT_CODE = "Product code is invalid"
    MISSING_DESCRIPTION = "Product description is missing"
    MISSING_PACKAGES = "No of packages is missing"
    INVALID_PACKAGES = "No of packages is invalid"
    MISSING_NET_WEIGHT = "Total net weight is missing"
    INVALID_NET_WEIGHT = "Total net weight is invalid"
    MISSING_NET_WEIGHT_UNIT = "Net Weight Unit of Measure (kg) not found"
    MISSING_NIRMS = "NIRMS/Non-NIRMS goods not specified"
    INVALID_NIRMS = "Invalid entry for NIRMS/Non-NIRMS goods"
    MISSING_COUNTRY_OF_ORIGIN = "Missing Country of Origin"
    INVALID_COUNTRY_OF_ORIGIN = "Invalid Country of Origin ISO Code"
    MISSING_REMOS = "Missing GB Establishment RMS Number"
    MULTIPLE_REMOS = "Multiple GB Place of Dispatch (Establishment) Numbers"
    EMPTY_PACKING_LIST = "Packing list contains no data"
