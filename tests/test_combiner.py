import logging

from packing_list_parser.domain.models import CanonicalItem, RowLocation
from packing_list_parser.extraction import combiner
from packing_list_parser.extraction.combiner import combine_parser, no_match_result, no_remos_result


def _item(**values):
    defaults = {
        "description": "Cheese",
        "commodity_code": "0406103000",
        "number_of_packages": 2,
        "total_net_weight_kg": 4.5,
        "total_net_weight_unit": "kg",
    }
    defaults.update(values)
    return CanonicalItem(**defaults, row_location=RowLocation(row_number=2, sheet_name="Sheet1"))


def test_failed_extraction_is_nomatch():
    result = combine_parser("RMS-GB-000010-001", [_item()], False, "TJMORRIS2")

    assert result.parser_model == "NOMATCH"
    assert result.items == []
    assert result.registration_approval_number is None
    assert result.business_checks.all_required_fields_present is False
    assert result.business_checks.failure_reasons is None


def test_successful_extraction_is_validated():
    result = combine_parser(
        "RMS-GB-000010-001",
        [_item()],
        True,
        "TJMORRIS2",
        ["RMS-GB-000010-001", "RMS-GB-000010-001"],
    )

    assert result.parser_model == "TJMORRIS2"
    assert result.establishment_numbers == ["RMS-GB-000010-001"]
    assert result.business_checks.all_required_fields_present is True
    assert result.business_checks.failure_reasons is None


def test_country_of_origin_follows_the_definition(definition):
    result = combine_parser(
        "RMS-GB-000010-001",
        [_item()],
        True,
        "TJMORRIS2",
        ["RMS-GB-000010-001"],
        definition("TJMORRIS2"),
    )

    assert result.business_checks.all_required_fields_present is False
    assert result.business_checks.failure_reasons[0].startswith("NIRMS/Non-NIRMS goods not specified")


def test_internal_errors_become_nomatch(monkeypatch, capture_logger, caplog):
    def explode(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(combiner, "generate_parsed_packing_list", explode)

    with caplog.at_level(logging.ERROR, logger=capture_logger.name):
        result = combine_parser("RMS-GB-000010-001", [_item()], True, "TJMORRIS2", logger=capture_logger)

    assert result.parser_model == "NOMATCH"
    assert result.items == []
    assert caplog.records[0].levelno == logging.ERROR


def test_wire_format():
    wire = combine_parser("RMS-GB-000010-001", [_item()], True, "TJMORRIS2", ["RMS-GB-000010-001"]).to_wire()

    assert set(wire) == {
        "registration_approval_number",
        "establishment_numbers",
        "items",
        "business_checks",
        "parserModel",
        "dispatchLocationNumber",
    }
    assert wire["items"][0]["row_location"] == {"rowNumber": 2, "sheetName": "Sheet1"}
    assert wire["items"][0]["nirms"] is None
    assert wire["business_checks"] == {"all_required_fields_present": True, "failure_reasons": None}


def test_reserved_results():
    assert no_match_result().to_wire()["parserModel"] == "NOMATCH"
    assert no_remos_result("NOREMOSCSV").business_checks.failure_reasons == [
        "Check GB Establishment RMS Number."
    ]
