"""Carrier operation registry.

Maps a carrier identifier and operation name to the builder and parser
that implement it, so callers can drive any carrier through one seam:

    operation = get_operation("usps", "rates")
    request = operation.build(shipment, options, debug=False)
    response = transport.send(request)
    result = operation.parse(request, response, shipment, options)

Every builder takes ``(subject, options, debug)`` and every parser
``(request, response, subject, options)``. The subject is the Shipment,
except for voids where it is the Label being voided.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from shipbridge.models.api import ApiFailure, Request, Response
from shipbridge.result import Result
from shipbridge.services import ship_engine, ups, ups_freight, usps
from shipbridge.services.ship_engine.serializers import (
    build_label_request,
    build_rate_estimates_request,
    build_void_request,
)
from shipbridge.services.ups_freight.generate_freight_ship_request import build_freight_ship_request

Builder = Callable[[Any, Any, bool], Request]
Parser = Callable[[Request, Response, Any, Any], Result[Any, ApiFailure]]


@dataclass(frozen=True)
class CarrierOperation:
    """A builder/parser pair for one carrier operation."""

    build: Builder
    parse: Parser


CARRIER_REGISTRY: dict[str, dict[str, CarrierOperation]] = {
    "ups": {
        "rates": CarrierOperation(
            build=lambda shipment, options, debug: ups.build_rate_request(shipment, options, debug=debug),
            parse=lambda request, response, shipment, options: ups.parse_rate_response(
                request, response, shipment
            ),
        ),
    },
    "usps": {
        "rates": CarrierOperation(
            build=lambda shipment, options, debug: usps.build_rate_request(shipment, options, debug=debug),
            parse=usps.parse_rate_response,
        ),
    },
    "ups_freight": {
        "labels": CarrierOperation(
            build=lambda shipment, options, debug: build_freight_ship_request(shipment, options, debug=debug),
            parse=lambda request, response, shipment, options: ups_freight.parse_freight_label_response(
                request, response, shipment
            ),
        ),
    },
    "ship_engine": {
        "rate_estimates": CarrierOperation(
            build=lambda shipment, options, debug: build_rate_estimates_request(
                shipment, options, debug=debug
            ),
            parse=lambda request, response, shipment, options: ship_engine.parse_rate_estimates_response(
                request, response, options
            ),
        ),
        "labels": CarrierOperation(
            build=lambda shipment, options, debug: build_label_request(shipment, options, debug=debug),
            parse=lambda request, response, shipment, options: ship_engine.parse_label_response(
                request, response, options
            ),
        ),
        "void": CarrierOperation(
            build=lambda label, options, debug: build_void_request(label, debug=debug),
            parse=lambda request, response, label, options: ship_engine.parse_void_response(
                request, response
            ),
        ),
    },
}


def get_operation(carrier: str, operation: str) -> CarrierOperation:
    """Look up a carrier operation.

    Raises:
        KeyError: If the carrier or operation is not registered.
    """
    operations = CARRIER_REGISTRY.get(carrier)
    if operations is None:
        raise KeyError(f"Unknown carrier '{carrier}'. Registered: {', '.join(sorted(CARRIER_REGISTRY))}")
    if operation not in operations:
        raise KeyError(
            f"Carrier '{carrier}' has no operation '{operation}'. "
            f"Registered: {', '.join(sorted(operations))}"
        )
    return operations[operation]


def list_operations() -> dict[str, list[str]]:
    """Registered operation names per carrier."""
    return {carrier: sorted(ops) for carrier, ops in CARRIER_REGISTRY.items()}


def translate(
    carrier: str,
    operation: str,
    subject: Any,
    options: Any,
    response: Response,
    debug: bool = False,
) -> Result[Any, ApiFailure]:
    """Build the request for ``subject`` and parse ``response`` against it.

    Useful when the transport already holds the carrier's answer, for
    example when replaying a recorded exchange.

    Raises:
        KeyError: If the operation is not registered.
        BuildError: If the subject cannot be expressed for the carrier.
    """
    carrier_operation = get_operation(carrier, operation)
    request = carrier_operation.build(subject, options, debug)
    return carrier_operation.parse(request, response, subject, options)
