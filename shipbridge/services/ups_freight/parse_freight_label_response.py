"""UPS Freight ship response parser."""

import base64
import binascii
import logging
from typing import Any

from shipbridge.errors.carrier_translation import carrier_error_from_response
from shipbridge.errors.domain import CarrierBusinessError, ParseError
from shipbridge.models.api import ApiFailure, ApiResult, Request, Response
from shipbridge.models.money import Money
from shipbridge.models.physical import Shipment
from shipbridge.result import Failure, Result, Success
from shipbridge.services.documents import (
    as_list,
    dig,
    expect_mapping,
    parse_json_document,
    parse_money,
    require,
    response_models,
)
from shipbridge.services.ups_freight.codes import shipping_method_for_code
from shipbridge.services.ups_freight.shipment_information import (
    ShipmentDocument,
    ShipmentInformation,
)

logger = logging.getLogger(__name__)

SUCCESS_STATUS_CODE = "1"

DOCUMENT_TYPES: dict[str, str] = {
    "20": "bill_of_lading",
    "30": "label",
}

DOCUMENT_FORMATS: dict[str, str] = {
    "01": "pdf",
}


def parse_charge(node: Any, field: str) -> Money | None:
    """Parse a ``{"CurrencyCode", "MonetaryValue"}`` block; None if absent."""
    if not isinstance(node, dict) or node.get("MonetaryValue") in (None, ""):
        return None
    return parse_money(node["MonetaryValue"], node.get("CurrencyCode"), field)


def parse_document(image: dict[str, Any]) -> ShipmentDocument:
    """Decode one Documents/Image entry."""
    image = expect_mapping(image, "Documents/Image")
    type_code = dig(image, "Type", "Code")
    format_code = dig(image, "Format", "Code")
    try:
        binary = base64.b64decode(image.get("GraphicImage") or "", validate=True)
    except (binascii.Error, ValueError) as e:
        raise ParseError(f"Document image is not valid base64: {e}") from e
    return ShipmentDocument(
        document_type=DOCUMENT_TYPES.get(type_code, type_code or "unknown"),
        format=DOCUMENT_FORMATS.get(format_code, format_code or "unknown"),
        binary=binary,
    )


def build_shipment_information(body: Any) -> ShipmentInformation:
    """Read ShipmentInformation out of a decoded FreightShipResponse.

    Raises:
        CarrierBusinessError: If UPS reported a non-success status.
        ParseError: If the expected nodes are missing.
    """
    freight_response = require(body, "FreightShipResponse")
    status = dig(freight_response, "Response", "ResponseStatus")
    status = expect_mapping(status, "ResponseStatus") if status is not None else {}
    if status.get("Code") not in (None, SUCCESS_STATUS_CODE):
        raise CarrierBusinessError(
            status.get("Description") or "UPS Freight rejected the shipment",
            code=status.get("Code"),
        )

    results = expect_mapping(require(freight_response, "ShipmentResults"), "ShipmentResults")
    alerts = as_list(dig(freight_response, "Response", "Alert"))
    warnings = tuple(a["Description"] for a in alerts if isinstance(a, dict) and a.get("Description"))
    images = as_list(dig(results, "Documents", "Image"))

    return ShipmentInformation(
        total=parse_charge(results.get("TotalShipmentCharge"), "TotalShipmentCharge"),
        bol_id=results.get("BOLID"),
        number=results.get("ShipmentNumber"),
        pickup_request_number=results.get("PickupRequestConfirmationNumber"),
        documents=tuple(parse_document(image) for image in images),
        shipping_method=shipping_method_for_code(dig(results, "Service", "Code")),
        warnings=warnings,
    )


def parse_freight_label_response(
    request: Request,
    response: Response,
    shipment: Shipment | None = None,
) -> Result[ApiResult[ShipmentInformation], ApiFailure]:
    """Parse a FreightShipResponse into ShipmentInformation.

    Args:
        request: The request that produced the response.
        response: Transport response.
        shipment: The originating shipment (unused by UPS Freight, accepted
            for a uniform parser signature).

    Returns:
        Success(ApiResult[ShipmentInformation]) or Failure(ApiFailure).
    """
    if response.is_error:
        return Failure(ApiFailure.build(carrier_error_from_response(response), request, response))
    try:
        body = parse_json_document(response)
        if isinstance(body, dict) and "Fault" in body:
            raise carrier_error_from_response(response)
        with response_models():
            information = build_shipment_information(body)
    except (ParseError, CarrierBusinessError) as e:
        logger.warning("UPS Freight label response failed: %s", e)
        return Failure(ApiFailure.build(e, request, response))
    return Success(ApiResult.build(information, request, response))
