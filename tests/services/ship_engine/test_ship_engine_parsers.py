"""Tests for ShipEngine response parsers."""

import json
from decimal import Decimal

import pytest

from shipbridge.errors import CarrierBusinessError, ParseError
from shipbridge.models import Money, Response
from shipbridge.services.ship_engine import (
    LabelOptions,
    parse_carrier_response,
    parse_label_response,
    parse_rate_estimates_response,
    parse_void_response,
)
from shipbridge.services.ship_engine.parsers import decode_label_download


class TestParseCarrierResponse:
    def test_carriers_and_services(self, request_stub, fixture_response):
        result = parse_carrier_response(request_stub, fixture_response("ship_engine/carriers.json"))

        assert result.is_success()
        stamps, ups = result.value.data
        assert stamps.id == "se-123890"
        assert stamps.name == "Stamps.com"
        assert stamps.code == "stamps_com"
        assert stamps.balance == Money(amount=Decimal("3799.52"))
        assert [m.service_code for m in stamps.shipping_methods] == [
            "usps_first_class_mail",
            "usps_priority_mail",
        ]
        assert stamps.shipping_methods[0].carrier == "se-123890"
        assert ups.shipping_methods[0].multi_package is True

    def test_carrier_extras(self, request_stub, fixture_response):
        result = parse_carrier_response(request_stub, fixture_response("ship_engine/carriers.json"))

        stamps = result.value.data[0]
        assert stamps.data["nickname"] == "ShipEngine Test Account - Stamps.com"
        assert stamps.data["requires_funded_amount"] is True
        assert stamps.data["packages"][1]["package_code"] == "large_flat_rate_box"

    def test_missing_carriers_key(self, request_stub):
        result = parse_carrier_response(request_stub, Response(status=200, body="{}"))

        assert result.is_failure()
        assert isinstance(result.failure.failure, ParseError)


class TestParseRateEstimatesResponse:
    """Rate estimates for a known carrier."""

    def test_unknown_methods_are_dropped(self, request_stub, fixture_response, rate_options):
        result = parse_rate_estimates_response(
            request_stub, fixture_response("ship_engine/rate_estimates.json"), rate_options
        )

        assert result.is_success()
        assert [rate.shipping_method.service_code for rate in result.value.data] == [
            "usps_first_class_mail",
            "usps_priority_mail",
        ]

    def test_amount_breakdown(self, request_stub, fixture_response, rate_options):
        result = parse_rate_estimates_response(
            request_stub, fixture_response("ship_engine/rate_estimates.json"), rate_options
        )

        first_class, priority = result.value.data
        assert first_class.total_amount == Money(amount=Decimal("3.53"))
        assert priority.amounts["shipping"] == Money(amount=Decimal("7.75"))
        assert priority.amounts["confirmation"] == Money(amount=Decimal("1.25"))
        assert priority.total_amount == Money(amount=Decimal("9.00"))
        assert priority.warnings == ("Rate may vary by zone",)
        assert first_class.data["days_to_delivery"] == 3

    def test_all_estimates_errored(self, request_stub, fixture_response, rate_options):
        result = parse_rate_estimates_response(
            request_stub, fixture_response("ship_engine/rate_estimates_errors.json"), rate_options
        )

        assert result.is_failure()
        assert str(result.failure) == "Weight exceeds the service maximum"

    def test_unauthorized_uses_status_text(self, request_stub, fixture_response, rate_options):
        result = parse_rate_estimates_response(
            request_stub, fixture_response("ship_engine/unauthorized.json", status=401), rate_options
        )

        assert result.is_failure()
        assert str(result.failure) == "401 Unauthorized"
        assert result.failure.failure.error_code == "E-5001"

    def test_not_a_list(self, request_stub, rate_options):
        result = parse_rate_estimates_response(request_stub, Response(status=200, body="{}"), rate_options)

        assert result.is_failure()
        assert isinstance(result.failure.failure, ParseError)


def _estimate(**fields):
    estimate = {
        "carrier_id": "se-123890",
        "service_code": "usps_priority_mail",
        "shipping_amount": {"currency": "usd", "amount": 7.75},
        "error_messages": [],
    }
    estimate.update(fields)
    return Response(status=200, body=json.dumps([estimate]))


class TestMalformedEstimates:
    """Estimate bodies that do not have the documented shape."""

    def test_null_estimate(self, request_stub, rate_options):
        result = parse_rate_estimates_response(request_stub, Response(status=200, body="[null]"), rate_options)

        assert result.is_failure()
        assert isinstance(result.failure.failure, ParseError)

    @pytest.mark.parametrize("amount", ["NaN", "Infinity"])
    def test_non_finite_amount(self, request_stub, rate_options, amount):
        response = _estimate(shipping_amount={"currency": "usd", "amount": amount})

        result = parse_rate_estimates_response(request_stub, response, rate_options)

        assert result.is_failure()
        assert isinstance(result.failure.failure, ParseError)
        assert "shipping_amount" in str(result.failure)

    def test_invalid_currency(self, request_stub, rate_options):
        response = _estimate(shipping_amount={"currency": "usdollars", "amount": 1})

        result = parse_rate_estimates_response(request_stub, response, rate_options)

        assert result.is_failure()
        assert "Invalid currency 'usdollars'" in str(result.failure)

    def test_non_text_messages_are_ignored(self, request_stub, rate_options):
        response = _estimate(warning_messages="check address", error_messages=[None, 5])

        result = parse_rate_estimates_response(request_stub, response, rate_options)

        assert result.is_success()
        (rate,) = result.value.data
        assert rate.warnings == ()
        assert rate.errors == ()

    def test_carriers_not_a_list(self, request_stub):
        result = parse_carrier_response(request_stub, Response(status=200, body='{"carriers": 5}'))

        assert result.is_failure()
        assert isinstance(result.failure.failure, ParseError)


class TestParseLabelResponse:
    """Purchased labels."""

    def test_linked_label(self, request_stub, fixture_response, label_options):
        result = parse_label_response(request_stub, fixture_response("ship_engine/label_url.json"), label_options)

        assert result.is_success()
        (label,) = result.value.data
        assert label.id == "se-123456"
        assert label.tracking_number == "9405511899223197428490"
        assert label.label_href.endswith("label-123456.pdf")
        assert label.label_data is None
        assert label.shipment_cost == Money(amount=Decimal("7.75"))
        assert label.cost == Money(amount=Decimal("9.25"))
        assert label.data["status"] == "completed"

    def test_inline_zpl_label(self, request_stub, fixture_response, priority_mail):
        options = LabelOptions(shipping_method=priority_mail, label_format="zpl", label_download_type="inline")

        result = parse_label_response(
            request_stub, fixture_response("ship_engine/label_inline_zpl.json"), options
        )

        label = result.value.data[0]
        assert label.label_href is None
        assert label.label_data == "^XA^FO50,50^FDHello^FS^XZ"
        assert label.label_format == "zpl"

    def test_invalid_package_code_message_is_kept(self, request_stub, fixture_response, label_options):
        result = parse_label_response(
            request_stub, fixture_response("ship_engine/invalid_package_code.json", status=400), label_options
        )

        assert result.is_failure()
        assert str(result.failure) == "Invalid package_code 'shoe_box' for carrier se-123890."
        error = result.failure.failure
        assert isinstance(error, CarrierBusinessError)
        assert error.error_code == "E-3003"

    def test_non_text_href(self, request_stub, label_options):
        body = json.dumps({"label_id": "se-1", "label_download": {"href": 5}})

        result = parse_label_response(request_stub, Response(status=200, body=body), label_options)

        assert result.is_failure()
        assert isinstance(result.failure.failure, ParseError)
        assert "href" in str(result.failure)

    def test_link_when_inline_was_requested(self, request_stub, fixture_response, priority_mail):
        options = LabelOptions(shipping_method=priority_mail, label_download_type="inline")

        result = parse_label_response(request_stub, fixture_response("ship_engine/label_url.json"), options)

        assert result.is_failure()
        assert "inline" in str(result.failure)

    def test_inline_content_when_link_was_requested(self, request_stub, fixture_response, label_options):
        result = parse_label_response(
            request_stub, fixture_response("ship_engine/label_inline_zpl.json"), label_options
        )

        assert result.is_failure()
        assert isinstance(result.failure.failure, ParseError)

    def test_null_body(self, request_stub, label_options):
        result = parse_label_response(request_stub, Response(status=200, body="null"), label_options)

        assert result.is_failure()
        assert isinstance(result.failure.failure, ParseError)


class TestDecodeLabelDownload:
    def test_bare_base64_binary(self):
        assert decode_label_download("JVBERi0xLjQ=", "pdf") == b"%PDF-1.4"

    def test_invalid_payload(self):
        with pytest.raises(ParseError, match="base64"):
            decode_label_download("data:application/pdf;base64,***", "pdf")


class TestParseVoidResponse:
    def test_approved(self, request_stub, fixture_response):
        result = parse_void_response(request_stub, fixture_response("ship_engine/void_approved.json"))

        assert result.is_success()
        assert result.value.data.approved is True
        assert result.value.data.message.startswith("Request for refund submitted.")

    def test_refused(self, request_stub, fixture_response):
        result = parse_void_response(request_stub, fixture_response("ship_engine/void_refused.json"))

        assert result.is_failure()
        assert str(result.failure) == "This label is already voided."
