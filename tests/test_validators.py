import pytest

from packing_list_parser.domain.models import CanonicalItem, ParseResult, RowLocation
from packing_list_parser.extraction.validators import (
    format_locations,
    generate_parsed_packing_list,
    has_invalid_country_of_origin,
    has_invalid_nirms,
    has_invalid_packages,
    has_invalid_product_code,
    has_missing_identifier,
    is_number,
    remove_bad_data,
    remove_empty_items,
    validate_packing_list,
)


def _item(row=2, sheet="Sheet1", **values):
    defaults = {
        "description": "Cheese",
        "commodity_code": "0406103000",
        "number_of_packages": 2,
        "total_net_weight_kg": 4.5,
        "total_net_weight_unit": "kg",
        "country_of_origin": "GB",
        "nirms": "NIRMS",
    }
    defaults.update(values)
    return CanonicalItem(**defaults, row_location=RowLocation(row_number=row, sheet_name=sheet))


def _result(items, numbers=("RMS-GB-000010-001",)):
    return ParseResult(
        registration_approval_number=numbers[0] if numbers else None,
        establishment_numbers=list(numbers),
        items=items,
        parser_model="TEST1",
    )


@pytest.mark.parametrize(
    "value, expected",
    [
        (1, True),
        (2.5, True),
        ("3", True),
        (" 4.5 ", True),
        ("-1e3", True),
        (".5", True),
        ("four", False),
        (True, False),
        (None, False),
        ("nan", False),
        ("NaN", False),
        ("inf", False),
        ("-Infinity", False),
        ("1_000", False),
        (float("nan"), False),
        (float("inf"), False),
    ],
)
def test_is_number(value, expected):
    assert is_number(value) is expected


def test_non_finite_values_are_invalid_quantities():
    checks = validate_packing_list(
        _result([_item(number_of_packages="NaN"), _item(row=3, total_net_weight_kg="1_000")])
    )

    assert checks.failure_reasons == [
        'No of packages is invalid in sheet "Sheet1" row 2.',
        'Total net weight is invalid in sheet "Sheet1" row 3.',
    ]


def test_identifier_needs_commodity_code_or_nature_and_treatment():
    assert not has_missing_identifier(_item())
    assert not has_missing_identifier(
        _item(commodity_code=None, nature_of_products="Dairy", type_of_treatment="Chilled")
    )
    assert has_missing_identifier(_item(commodity_code=None, nature_of_products="Dairy"))


def test_field_validity_predicates():
    assert has_invalid_product_code(_item(commodity_code="0406-10"))
    assert not has_invalid_product_code(_item(commodity_code=406103000))
    assert has_invalid_packages(_item(number_of_packages="two"))
    assert not has_invalid_packages(_item(number_of_packages=None))
    assert has_invalid_nirms(_item(nirms="maybe"))
    assert not has_invalid_nirms(_item(nirms=" Non-NIRMS "))
    assert has_invalid_country_of_origin(_item(country_of_origin="Great Britain"))
    assert not has_invalid_country_of_origin(_item(country_of_origin="x"))


def test_format_locations_lists_three_then_summarises():
    locations = [RowLocation(row_number=row, sheet_name="KEPAK") for row in (22, 23, 24, 25)]

    assert format_locations("No of packages is missing", locations) == (
        'No of packages is missing in sheet "KEPAK" row 22, sheet "KEPAK" row 23, '
        'sheet "KEPAK" row 24 in addition to 1 other locations.'
    )
    assert format_locations("Product code is invalid", [RowLocation(row_number=2, page_number=1)]) == (
        "Product code is invalid in page 1 row 2."
    )


def test_valid_packing_list():
    checks = validate_packing_list(_result([_item()]), validate_country_of_origin=True)

    assert checks.all_required_fields_present is True
    assert checks.failure_reasons is None


def test_field_failures_take_precedence_over_establishment_failures():
    result = _result(
        [_item(description=None), _item(row=3, total_net_weight_kg="heavy")],
        numbers=("RMS-GB-000010-001", "RMS-GB-000010-002"),
    )

    checks = validate_packing_list(result)

    assert checks.all_required_fields_present is False
    assert checks.failure_reasons == [
        'Product description is missing in sheet "Sheet1" row 2.',
        'Total net weight is invalid in sheet "Sheet1" row 3.',
    ]


def test_establishment_failures():
    multiple = validate_packing_list(_result([_item()], numbers=("RMS-GB-000010-001", "RMS-GB-000011-001")))
    missing = validate_packing_list(_result([_item()], numbers=()))

    assert multiple.failure_reasons == ["Multiple GB Place of Dispatch (Establishment) Numbers."]
    assert missing.failure_reasons == ["Missing GB Establishment RMS Number."]


def test_empty_packing_list_is_never_valid():
    checks = validate_packing_list(_result([]))

    assert checks.all_required_fields_present is False
    assert checks.failure_reasons == ["Packing list contains no data."]


def test_country_of_origin_checks_only_when_enabled():
    result = _result([_item(country_of_origin=None, nirms=None)])

    assert validate_packing_list(result).all_required_fields_present is True
    assert validate_packing_list(result, validate_country_of_origin=True).failure_reasons == [
        'NIRMS/Non-NIRMS goods not specified in sheet "Sheet1" row 2.',
        'Missing Country of Origin in sheet "Sheet1" row 2.',
    ]


def test_remove_empty_items_and_bad_data():
    empty = CanonicalItem(row_location=RowLocation(row_number=9, sheet_name="Sheet1"))
    drag_down = _item(row=4, description=None, commodity_code=None)

    assert remove_empty_items([_item(), empty]) == [_item()]
    assert remove_bad_data([_item(), drag_down]) == [_item()]


def test_generate_parsed_packing_list_validates_before_removing_bad_data():
    empty = CanonicalItem(row_location=RowLocation(row_number=3, sheet_name="Sheet1"))
    drag_down = _item(row=4, description=None, commodity_code=None, nature_of_products=None)
    original = _result([_item(), empty, drag_down])

    result = generate_parsed_packing_list(original)

    assert [item.row_location.row_number for item in result.items] == [2]
    assert result.business_checks.failure_reasons == [
        'Identifier is missing in sheet "Sheet1" row 4.',
        'Product description is missing in sheet "Sheet1" row 4.',
    ]
    assert len(original.items) == 3
