"""UPS rate request builder.

Transforms a Shipment into the UPS XML ``RatingServiceSelectionRequest``
(shop mode, all services), optionally preceded by an ``AccessRequest``.

Example:
    from shipbridge.services.ups.rate_request import build_rate_request

    request = build_rate_request(shipment, RateOptions(shipper_number="X1"))
    response = transport.send(request)
    result = parse_rate_response(request, response, shipment)
"""

from typing import Any

from shipbridge.errors.domain import BuildError
from shipbridge.models.api import Request
from shipbridge.models.physical import Location, Package, Shipment
from shipbridge.services.documents import build_xml_document, format_decimal
from shipbridge.services.ups.codes import (
    UPS_ADDRESS_MAX_LEN,
    UPS_DIMENSION_UNIT,
    UPS_WEIGHT_UNIT,
    resolve_packaging_code,
)
from shipbridge.services.ups.options import RateOptions

RATE_URL = "https://onlinetools.ups.com/ups.app/xml/Rate"


def truncate_address(address: str | None, max_length: int = UPS_ADDRESS_MAX_LEN) -> str:
    """Truncate address without cutting words.

    UPS limits address lines to 35 characters.

    Args:
        address: Raw address string
        max_length: Maximum length (default UPS_ADDRESS_MAX_LEN)

    Returns:
        Truncated address string
    """
    if not address:
        return ""

    address = address.strip()

    if len(address) <= max_length:
        return address

    truncated = address[:max_length].rsplit(" ", 1)[0]

    # Fallback to hard truncate if no word boundary
    if not truncated:
        truncated = address[:max_length]

    return truncated


def build_address(location: Location) -> dict[str, Any]:
    """Build a UPS Address element from a Location."""
    address: dict[str, Any] = {}
    for index, line in enumerate(location.address_lines[:3], start=1):
        address[f"AddressLine{index}"] = truncate_address(line)
    address["City"] = location.city or ""
    address["StateProvinceCode"] = location.region or ""
    address["PostalCode"] = location.zip or ""
    address["CountryCode"] = location.country
    if location.residential:
        address["ResidentialAddressIndicator"] = ""
    return address


def build_party(location: Location, shipper_number: str | None = None) -> dict[str, Any]:
    """Build a Shipper/ShipTo/ShipFrom element."""
    party: dict[str, Any] = {"Name": truncate_address(location.display_name)}
    if location.company_name and location.name:
        party["AttentionName"] = truncate_address(location.name)
    if shipper_number:
        party["ShipperNumber"] = shipper_number
    if location.phone:
        party["PhoneNumber"] = location.phone
    party["Address"] = build_address(location)
    return party


def build_package(package: Package) -> dict[str, Any]:
    """Build a Package element with packaging code, weight and dimensions."""
    element: dict[str, Any] = {
        "PackagingType": {"Code": resolve_packaging_code(package.container.box_name)},
    }
    if package.dimensions is not None:
        length, width, height = package.dimensions.to_inches()
        element["Dimensions"] = {
            "UnitOfMeasurement": {"Code": UPS_DIMENSION_UNIT},
            "Length": format_decimal(length, 2),
            "Width": format_decimal(width, 2),
            "Height": format_decimal(height, 2),
        }
    element["PackageWeight"] = {
        "UnitOfMeasurement": {"Code": UPS_WEIGHT_UNIT},
        "Weight": format_decimal(package.weight.to_pounds(), 1),
    }
    return element


def generate_rate_request_hash(shipment: Shipment, options: RateOptions) -> dict[str, Any]:
    """Build the RatingServiceSelectionRequest content.

    Raises:
        BuildError: If the shipment has no packages or negotiated rates are
            requested without a shipper number.
    """
    if not shipment.packages:
        raise BuildError("Rate request needs at least one package", field="packages")
    if options.negotiated_rates and not options.shipper_number:
        raise BuildError("Negotiated rates require a shipper number", field="shipper_number")

    request: dict[str, Any] = {"RequestAction": "Rate", "RequestOption": "Shop"}
    if options.customer_context:
        request["TransactionReference"] = {"CustomerContext": options.customer_context}

    shipment_element: dict[str, Any] = {
        "Shipper": build_party(options.shipper or shipment.origin, options.shipper_number),
        "ShipTo": build_party(shipment.destination),
        "ShipFrom": build_party(shipment.origin),
        "Package": [build_package(package) for package in shipment.packages],
    }
    if options.negotiated_rates:
        shipment_element["RateInformation"] = {"NegotiatedRatesIndicator": ""}

    return {"Request": request, "Shipment": shipment_element}


def build_access_request(options: RateOptions) -> str:
    """Serialize the AccessRequest document carrying UPS credentials."""
    return build_xml_document("AccessRequest", {
        "AccessLicenseNumber": options.access_license_number,
        "UserId": options.user_id or "",
        "Password": options.password or "",
    })


def build_rate_request(shipment: Shipment, options: RateOptions, debug: bool = False) -> Request:
    """Build the transport Request for a UPS rate shop call."""
    body = build_xml_document(
        "RatingServiceSelectionRequest", generate_rate_request_hash(shipment, options)
    )
    if options.access_license_number:
        body = build_access_request(options) + body
    return Request(
        url=RATE_URL,
        http_method="POST",
        body=body,
        headers={"Content-Type": "application/xml"},
        debug=debug,
    )
