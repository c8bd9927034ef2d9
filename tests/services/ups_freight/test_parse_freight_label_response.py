"""Tests for the UPS Freight ship response parser."""

import json
from decimal import Decimal

import pytest

from shipbridge.errors import CarrierBusinessError, ParseError
from shipbridge.models import Money, Request, Response
from shipbridge.services.ups_freight import parse_freight_label_response


class TestParseFreightLabelResponse:
    """Successful bookings."""

    def test_shipment_information(self, request_stub, fixture_response):
        result = parse_freight_label_response(
            request_stub, fixture_response("ups_freight/freight_ship_response.json")
        )

        assert result.is_success()
        information = result.value.data
        assert information.number == "572504876"
        assert information.bol_id == "46864373"
        assert information.pickup_request_number == "WBU4016334"
        assert information.total == Money(amount=Decimal("1160.71"))
        assert information.shipping_method.name == "UPS Freight LTL"

    def test_documents_are_decoded(self, request_stub, fixture_response):
        result = parse_freight_label_response(
            request_stub, fixture_response("ups_freight/freight_ship_response.json")
        )

        label, bill_of_lading = result.value.data.documents
        assert label.document_type == "label"
        assert label.format == "pdf"
        assert label.binary == b"%PDF-1.4\nlabel"
        assert bill_of_lading.document_type == "bill_of_lading"
        assert bill_of_lading.binary == b"%PDF-1.4\nbol"

    def test_alerts_become_warnings(self, request_stub, fixture_response):
        result = parse_freight_label_response(
            request_stub, fixture_response("ups_freight/freight_ship_response.json")
        )

        assert result.value.data.warnings == ("User is not eligible for contract rates.",)

    def test_debug_keeps_originals(self, fixture_response):
        request = Request(url="http://www.example.com", debug=True)
        response = fixture_response("ups_freight/freight_ship_response.json")

        result = parse_freight_label_response(request, response)

        assert result.value.original_request is request
        assert result.value.original_response is response


class TestFreightFailures:
    """Faults and malformed bodies."""

    def test_fault_message_is_kept(self, request_stub, fixture_response):
        result = parse_freight_label_response(
            request_stub, fixture_response("ups_freight/freight_ship_fault.json", status=400)
        )

        assert result.is_failure()
        assert str(result.failure) == "Missing or invalid shipper number"
        assert isinstance(result.failure.failure, CarrierBusinessError)
        assert result.failure.failure.code == "9360703"

    def test_fault_with_ok_status(self, request_stub, fixture_response):
        result = parse_freight_label_response(
            request_stub, fixture_response("ups_freight/freight_ship_fault.json")
        )

        assert result.is_failure()
        assert str(result.failure) == "Missing or invalid shipper number"

    def test_non_success_status_code(self, request_stub):
        body = (
            '{"FreightShipResponse": {"Response": {"ResponseStatus": '
            '{"Code": "0", "Description": "Shipment rejected"}}}}'
        )

        result = parse_freight_label_response(request_stub, Response(status=200, body=body))

        assert result.is_failure()
        assert str(result.failure) == "Shipment rejected"

    def test_invalid_json(self, request_stub):
        result = parse_freight_label_response(request_stub, Response(status=200, body="<html>"))

        assert result.is_failure()
        assert isinstance(result.failure.failure, ParseError)

    def test_missing_results(self, request_stub):
        body = '{"FreightShipResponse": {"Response": {"ResponseStatus": {"Code": "1"}}}}'

        result = parse_freight_label_response(request_stub, Response(status=200, body=body))

        assert result.is_failure()
        assert "ShipmentResults" in str(result.failure)

    def test_bad_document_image(self, request_stub):
        body = (
            '{"FreightShipResponse": {"ShipmentResults": {"Documents": '
            '{"Image": {"Type": {"Code": "30"}, "GraphicImage": "***"}}}}}'
        )

        result = parse_freight_label_response(request_stub, Response(status=200, body=body))

        assert result.is_failure()
        assert isinstance(result.failure.failure, ParseError)

    @pytest.mark.parametrize(
        ("charge", "expected"),
        [
            ({"CurrencyCode": "USD", "MonetaryValue": "NaN"}, "Invalid decimal value 'NaN'"),
            ({"CurrencyCode": "US DOLLARS", "MonetaryValue": "10.00"}, "Invalid currency 'US DOLLARS'"),
        ],
        ids=["nan-amount", "bad-currency"],
    )
    def test_invalid_total_charge(self, request_stub, charge, expected):
        body = json.dumps({"FreightShipResponse": {"ShipmentResults": {"TotalShipmentCharge": charge}}})

        result = parse_freight_label_response(request_stub, Response(status=200, body=body))

        assert result.is_failure()
        assert isinstance(result.failure.failure, ParseError)
        assert expected in str(result.failure)

    @pytest.mark.parametrize(
        "body",
        [
            {"FreightShipResponse": {"Response": {"ResponseStatus": "1"}, "ShipmentResults": {}}},
            {"FreightShipResponse": {"ShipmentResults": "572504876"}},
            {"FreightShipResponse": {"ShipmentResults": {"Documents": {"Image": [None]}}}},
        ],
        ids=["text-status", "text-results", "null-image"],
    )
    def test_elements_of_the_wrong_type(self, request_stub, body):
        result = parse_freight_label_response(request_stub, Response(status=200, body=json.dumps(body)))

        assert result.is_failure()
        assert isinstance(result.failure.failure, ParseError)

    def test_fault_with_unexpected_detail(self, request_stub):
        body = json.dumps({"Fault": {"detail": "Internal error", "faultstring": "ShipFault"}})

        result = parse_freight_label_response(request_stub, Response(status=500, body=body))

        assert result.is_failure()
        assert str(result.failure) == "500 Internal Server Error"
