"""UPS rate (shop) response parser."""

import logging
from typing import Any

from shipbridge.errors.domain import CarrierBusinessError, ParseError
from shipbridge.models.api import ApiFailure, ApiResult, Request, Response
from shipbridge.models.physical import Shipment
from shipbridge.models.shipping import Rate
from shipbridge.result import Failure, Result, Success
from shipbridge.services.documents import as_list, dig, node_text, require, response_models
from shipbridge.services.ups.codes import find_shipping_method
from shipbridge.services.ups.parse_xml_response import parse_money_element, parse_xml_response

logger = logging.getLogger(__name__)

ROOT_ELEMENT = "RatingServiceSelectionResponse"
FORCE_LIST = ("RatedShipment", "RatedShipmentWarning", "Error", "RatedPackage")


def _days_to_delivery(rated_shipment: dict[str, Any]) -> int | None:
    text = node_text(rated_shipment.get("GuaranteedDaysToDelivery"))
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        raise ParseError(f"Invalid GuaranteedDaysToDelivery '{text}'") from None


def build_rate(rated_shipment: dict[str, Any], shipment: Shipment) -> Rate | None:
    """Build a Rate from one RatedShipment element.

    Returns:
        The Rate, or None when the service code is not offered from the
        shipment's origin country.
    """
    service_code = node_text(require(rated_shipment, "Service", "Code"))
    shipping_method = find_shipping_method(service_code, shipment.origin.country)
    if shipping_method is None:
        logger.debug(
            "Dropping UPS rate for service %s: not offered from %s",
            service_code, shipment.origin.country,
        )
        return None

    total = parse_money_element(rated_shipment.get("TotalCharges"), "TotalCharges")
    if total is None:
        raise ParseError(f"Missing TotalCharges for UPS service {service_code}")

    warnings = tuple(
        text for text in (node_text(w) for w in as_list(rated_shipment.get("RatedShipmentWarning"))) if text
    )
    return Rate(
        shipping_method=shipping_method,
        amounts={"total": total},
        warnings=warnings,
        errors=(),
        data={
            "insurance_price": parse_money_element(
                rated_shipment.get("ServiceOptionsCharges"), "ServiceOptionsCharges"
            ),
            "negotiated_rate": parse_money_element(
                dig(rated_shipment, "NegotiatedRates", "NetSummaryCharges", "GrandTotal"),
                "NegotiatedRates",
            ),
            "days_to_delivery": _days_to_delivery(rated_shipment),
        },
    )


def build_rates(root: dict[str, Any], shipment: Shipment) -> list[Rate]:
    rates = []
    for rated_shipment in as_list(root.get("RatedShipment")):
        rate = build_rate(rated_shipment, shipment)
        if rate is not None:
            rates.append(rate)
    return rates


def parse_rate_response(
    request: Request,
    response: Response,
    shipment: Shipment,
) -> Result[ApiResult[list[Rate]], ApiFailure]:
    """Parse a RatingServiceSelectionResponse into rates.

    Args:
        request: The request that produced the response.
        response: Transport response holding the XML body.
        shipment: The rated shipment; its origin country disambiguates
            service codes.

    Returns:
        Success(ApiResult[list[Rate]]) or Failure(ApiFailure).
    """
    try:
        root = parse_xml_response(response, ROOT_ELEMENT, force_list=FORCE_LIST)
        with response_models():
            rates = build_rates(root, shipment)
    except (ParseError, CarrierBusinessError) as e:
        logger.warning("UPS rate response failed: %s", e)
        return Failure(ApiFailure.build(e, request, response))
    logger.info("Parsed %d UPS rate(s)", len(rates))
    return Success(ApiResult.build(rates, request, response))
