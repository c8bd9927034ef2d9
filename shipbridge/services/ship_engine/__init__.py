"""ShipEngine integration: carriers, rate estimates, labels and voids."""

from shipbridge.services.ship_engine.options import (
    LabelOptions,
    LabelPackageOptions,
    RateEstimatesOptions,
)
from shipbridge.services.ship_engine.parsers import (
    parse_carrier_response,
    parse_label_response,
    parse_rate_estimates_response,
    parse_void_response,
)
from shipbridge.services.ship_engine.serializers import (
    serialize_label_shipment,
    serialize_rate_estimate_request,
)
from shipbridge.services.ship_engine.service import ShipEngineService

__all__ = [
    "LabelOptions",
    "LabelPackageOptions",
    "RateEstimatesOptions",
    "ShipEngineService",
    "parse_carrier_response",
    "parse_label_response",
    "parse_rate_estimates_response",
    "parse_void_response",
    "serialize_label_shipment",
    "serialize_rate_estimate_request",
]
