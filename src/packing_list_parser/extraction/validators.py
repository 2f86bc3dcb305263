"""Business checks over canonical packing list items."""

import math
from typing import Any, Callable, List, Optional, Sequence, Tuple

from packing_list_parser.constants import (
    COUNTRY_OF_ORIGIN_PATTERN,
    MAX_REPORTED_LOCATIONS,
    NUMBER_PATTERN,
    NUMERIC_CODE_PATTERN,
    VALID_NIRMS_VALUES,
)
from packing_list_parser.domain.constants import FailureReason
from packing_list_parser.domain.models import (
    BusinessChecks,
    CanonicalItem,
    ParseResult,
    RowLocation,
)
from packing_list_parser.extraction.row_finder import is_blank

ItemCheck = Tuple[str, Callable[[CanonicalItem], bool]]


def is_number(value: Any) -> bool:
    """True for finite numbers and plain numeric strings ("nan", "inf" and "1_000" are not)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, str):
        text = value.strip()
        return bool(NUMBER_PATTERN.match(text)) and math.isfinite(float(text))
    return False


def has_missing_identifier(item: CanonicalItem) -> bool:
    """Neither a commodity code nor both nature of products and treatment."""
    return is_blank(item.commodity_code) and (
        is_blank(item.nature_of_products) or is_blank(item.type_of_treatment)
    )


def has_invalid_product_code(item: CanonicalItem) -> bool:
    if is_blank(item.commodity_code):
        return False
    return not NUMERIC_CODE_PATTERN.match(str(item.commodity_code).strip())


def has_missing_description(item: CanonicalItem) -> bool:
    return is_blank(item.description)


def has_missing_packages(item: CanonicalItem) -> bool:
    return is_blank(item.number_of_packages)


def has_invalid_packages(item: CanonicalItem) -> bool:
    return not is_blank(item.number_of_packages) and not is_number(item.number_of_packages)


def has_missing_net_weight(item: CanonicalItem) -> bool:
    return is_blank(item.total_net_weight_kg)


def has_invalid_net_weight(item: CanonicalItem) -> bool:
    return not is_blank(item.total_net_weight_kg) and not is_number(item.total_net_weight_kg)


def has_missing_net_weight_unit(item: CanonicalItem) -> bool:
    return is_blank(item.total_net_weight_unit)


def has_missing_nirms(item: CanonicalItem) -> bool:
    return is_blank(item.nirms)


def has_invalid_nirms(item: CanonicalItem) -> bool:
    if is_blank(item.nirms):
        return False
    return str(item.nirms).strip().lower() not in VALID_NIRMS_VALUES


def has_missing_country_of_origin(item: CanonicalItem) -> bool:
    return is_blank(item.country_of_origin)


def has_invalid_country_of_origin(item: CanonicalItem) -> bool:
    if is_blank(item.country_of_origin):
        return False
    return not COUNTRY_OF_ORIGIN_PATTERN.match(str(item.country_of_origin).strip())


FIELD_CHECKS: List[ItemCheck] = [
    (FailureReason.MISSING_IDENTIFIER, has_missing_identifier),
    (FailureReason.INVALID_PRODUCT_CODE, has_invalid_product_code),
    (FailureReason.MISSING_DESCRIPTION, has_missing_description),
    (FailureReason.MISSING_PACKAGES, has_missing_packages),
    (FailureReason.INVALID_PACKAGES, has_invalid_packages),
    (FailureReason.MISSING_NET_WEIGHT, has_missing_net_weight),
    (FailureReason.INVALID_NET_WEIGHT, has_invalid_net_weight),
    (FailureReason.MISSING_NET_WEIGHT_UNIT, has_missing_net_weight_unit),
]

COUNTRY_OF_ORIGIN_CHECKS: List[ItemCheck] = [
    (FailureReason.MISSING_NIRMS, has_missing_nirms),
    (FailureReason.INVALID_NIRMS, has_invalid_nirms),
    (FailureReason.MISSING_COUNTRY_OF_ORIGIN, has_missing_country_of_origin),
    (FailureReason.INVALID_COUNTRY_OF_ORIGIN, has_invalid_country_of_origin),
]


def format_locations(reason: str, locations: Sequence[RowLocation]) -> str:
    """Render a failure reason with up to three locations.

    Example:
        ``Product description is missing in sheet "A" row 2, sheet "A" row 3.``
    """
    listed = ", ".join(location.describe() for location in locations[:MAX_REPORTED_LOCATIONS])
    remaining = len(locations) - MAX_REPORTED_LOCATIONS
    suffix = f" in addition to {remaining} other locations" if remaining > 0 else ""
    return f"{reason} in {listed}{suffix}."


def run_checks(items: Sequence[CanonicalItem], checks: Sequence[ItemCheck]) -> List[str]:
    reasons = []
    for reason, check in checks:
        locations = [item.row_location for item in items if check(item)]
        if locations:
            reasons.append(format_locations(reason, locations))
    return reasons


def establishment_failures(result: ParseResult) -> List[str]:
    reasons = []
    if result.registration_approval_number is None:
        reasons.append(f"{FailureReason.MISSING_REMOS}.")
    if len(result.establishment_numbers) > 1:
        reasons.append(f"{FailureReason.MULTIPLE_REMOS}.")
    if not result.items:
        reasons.append(f"{FailureReason.EMPTY_PACKING_LIST}.")
    return reasons


def validate_packing_list(
    result: ParseResult, validate_country_of_origin: bool = False
) -> BusinessChecks:
    """Run the business checks and report the first failing class.

    Classes are checked in order: item fields, establishment numbers, then
    country of origin and NIRMS (only when ``validate_country_of_origin``).

    Args:
        result: Parse result whose items have had empty rows removed
        validate_country_of_origin: Whether the format requires CoO and NIRMS

    Returns:
        BusinessChecks with reasons of the first failing class, or a passing check
    """
    failure_classes = [
        lambda: run_checks(result.items, FIELD_CHECKS),
        lambda: establishment_failures(result),
    ]
    if validate_country_of_origin:
        failure_classes.append(lambda: run_checks(result.items, COUNTRY_OF_ORIGIN_CHECKS))

    for find_failures in failure_classes:
        reasons = find_failures()
        if reasons:
            return BusinessChecks(all_required_fields_present=False, failure_reasons=reasons)
    return BusinessChecks(all_required_fields_present=True, failure_reasons=None)


def remove_empty_items(items: Sequence[CanonicalItem]) -> List[CanonicalItem]:
    """Drop items whose every field except ``row_location`` is null."""
    return [item for item in items if not item.is_empty()]


def remove_bad_data(items: Sequence[CanonicalItem]) -> List[CanonicalItem]:
    """Keep items that have at least a description or a commodity code."""
    return [
        item
        for item in items
        if not is_blank(item.description) or not is_blank(item.commodity_code)
    ]


def generate_parsed_packing_list(
    result: ParseResult, validate_country_of_origin: Optional[bool] = False
) -> ParseResult:
    """Clean and validate a freshly combined parse result.

    Args:
        result: Combined result straight from a parser
        validate_country_of_origin: Whether CoO and NIRMS checks apply

    Returns:
        New ParseResult with business checks set and drag-down rows removed
    """
    items = remove_empty_items(result.items)
    checked = result.model_copy(update={"items": items})
    business_checks = validate_packing_list(checked, bool(validate_country_of_origin))
    return checked.model_copy(
        update={"items": remove_bad_data(items), "business_checks": business_checks}
    )
