"""Unit tests for domain exceptions."""

from shipbridge.errors import (
    BuildError,
    CannotDetermineRate,
    CarrierBusinessError,
    ParseError,
    ShipBridgeError,
    UnknownCodeError,
)


def test_build_error_names_package_and_item():
    error = BuildError("Bad weight", field="weight", package_id="p1", item_id="i1")

    assert str(error) == "Bad weight (package 'p1', item 'i1')"
    assert error.field == "weight"
    assert error.error_code == "E-1001"


def test_unknown_code_is_a_build_error():
    error = UnknownCodeError("packaging", "gift_wrap", package_id="p1")

    assert isinstance(error, BuildError)
    assert str(error) == "Unknown packaging 'gift_wrap' (package 'p1')"
    assert error.value == "gift_wrap"
    assert error.error_code == "E-1002"


def test_cannot_determine_rate_message():
    error = CannotDetermineRate("PRIORITY", package_id="0")

    assert str(error) == "Cannot determine rate for shipping method 'PRIORITY' and package '0'"
    assert error.error_code == "E-4001"


def test_every_error_shares_the_base():
    for error in (ParseError("x"), CarrierBusinessError("x", code="1"), CannotDetermineRate("X")):
        assert isinstance(error, ShipBridgeError)
        assert error.message


def test_carrier_business_error_takes_translated_code():
    error = CarrierBusinessError("401 Unauthorized", status=401, error_code="E-5001")

    assert error.error_code == "E-5001"
    assert CarrierBusinessError("No rates").error_code == "E-3001"
