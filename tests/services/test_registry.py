"""Tests for the carrier operation registry."""

import pytest

from shipbridge.models import Carrier, Label, ShippingMethod
from shipbridge.services.registry import CARRIER_REGISTRY, get_operation, list_operations, translate
from shipbridge.services.ship_engine import RateEstimatesOptions
from shipbridge.services.ups import RateOptions
from shipbridge.services.usps import RateEstimatesOptions as UspsRateOptions


class TestRegistry:
    def test_registered_operations(self):
        assert list_operations() == {
            "ups": ["rates"],
            "usps": ["rates"],
            "ups_freight": ["labels"],
            "ship_engine": ["labels", "rate_estimates", "void"],
        }

    def test_unknown_carrier(self):
        with pytest.raises(KeyError, match="fedex"):
            get_operation("fedex", "rates")

    def test_unknown_operation(self):
        with pytest.raises(KeyError, match="void"):
            get_operation("usps", "void")

    def test_every_operation_has_both_halves(self):
        for operations in CARRIER_REGISTRY.values():
            for operation in operations.values():
                assert callable(operation.build)
                assert callable(operation.parse)


class TestTranslate:
    """Build and parse through the registry."""

    def test_usps_rates(self, fixture_response, shipment):
        result = translate(
            "usps", "rates", shipment, UspsRateOptions(user_id="TEST"),
            fixture_response("usps/rates_api_response.xml"),
        )

        assert result.is_success()
        assert len(result.value.data) == 4

    def test_ups_rates_with_debug(self, fixture_response, shipment):
        response = fixture_response("ups/rate_response.xml")

        result = translate("ups", "rates", shipment, RateOptions(), response, debug=True)

        assert result.value.original_response is response
        assert result.value.original_request.body.startswith("<?xml")

    def test_ship_engine_rate_estimates(self, fixture_response, shipment):
        carrier = Carrier(
            id="se-123890",
            shipping_methods=(
                ShippingMethod(carrier="se-123890", service_code="usps_first_class_mail"),
                ShippingMethod(carrier="se-123890", service_code="usps_priority_mail"),
            ),
        )

        result = translate(
            "ship_engine", "rate_estimates", shipment,
            RateEstimatesOptions(carriers=(carrier,)),
            fixture_response("ship_engine/rate_estimates.json"),
        )

        assert len(result.value.data) == 2

    def test_ship_engine_void(self, fixture_response):
        result = translate(
            "ship_engine", "void", Label(id="se-123456"), None,
            fixture_response("ship_engine/void_approved.json"),
        )

        assert result.value.data.approved is True
