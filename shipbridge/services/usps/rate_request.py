"""USPS RateV4 request builder."""

from decimal import Decimal
from typing import Any
from urllib.parse import urlencode

from shipbridge.errors.domain import BuildError, UnknownCodeError
from shipbridge.models.api import Request
from shipbridge.models.physical import Package, Shipment
from shipbridge.services.documents import build_xml_document, format_decimal
from shipbridge.services.usps.codes import (
    CONTAINERS,
    FIRST_CLASS_MAIL_TYPES,
    REQUEST_SERVICES,
)
from shipbridge.services.usps.options import RateEstimatesOptions, RatePackageOptions

RATE_URL = "https://secure.shippingapis.com/ShippingAPI.dll"
API_NAME = "RateV4"
REVISION = "2"
OUNCES_PER_POUND = Decimal("16")


def _zip5(postal_code: str | None) -> str:
    return (postal_code or "").strip()[:5]


def split_weight(package: Package) -> tuple[str, str]:
    """Split a package weight into whole pounds and remaining ounces."""
    ounces = package.weight.to_ounces()
    pounds = int(ounces // OUNCES_PER_POUND)
    remainder = ounces - pounds * OUNCES_PER_POUND
    return str(pounds), format_decimal(remainder, 1)


def build_package(
    index: int,
    package: Package,
    package_options: RatePackageOptions,
    shipment: Shipment,
) -> dict[str, Any]:
    """Build one RateV4 Package element.

    Raises:
        UnknownCodeError: For unknown service, box name or mail type.
    """
    service = package_options.service.upper()
    if service not in REQUEST_SERVICES:
        raise UnknownCodeError("service", package_options.service, package_id=package.id)
    container = CONTAINERS.get(package_options.box_name or "")
    if container is None:
        raise UnknownCodeError("box_name", package_options.box_name, package_id=package.id)

    pounds, ounces = split_weight(package)
    element: dict[str, Any] = {"@ID": str(index), "Service": service}
    if service.startswith("FIRST CLASS"):
        mail_type = FIRST_CLASS_MAIL_TYPES.get(package_options.first_class_mail_type or "")
        if mail_type is None:
            raise UnknownCodeError(
                "first_class_mail_type", package_options.first_class_mail_type,
                package_id=package.id,
            )
        element["FirstClassMailType"] = mail_type
    element["ZipOrigination"] = _zip5(shipment.origin.zip)
    element["ZipDestination"] = _zip5(shipment.destination.zip)
    element["Pounds"] = pounds
    element["Ounces"] = ounces
    element["Container"] = container
    if package.dimensions is not None:
        length, width, height = package.dimensions.to_inches()
        element["Width"] = format_decimal(width, 2)
        element["Length"] = format_decimal(length, 2)
        element["Height"] = format_decimal(height, 2)
    element["Machinable"] = "TRUE" if package_options.machinable else "FALSE"
    return element


def generate_rate_request_hash(shipment: Shipment, options: RateEstimatesOptions) -> dict[str, Any]:
    """Build the RateV4Request content; packages are numbered by position.

    Raises:
        BuildError: If the shipment has no packages or an option is unknown.
    """
    if not shipment.packages:
        raise BuildError("Rate request needs at least one package", field="packages")
    known = {package.id for package in shipment.packages}
    for package_options in options.package_options:
        if package_options.package_id not in known:
            raise BuildError(
                "Package options reference a package not in the shipment",
                field="package_options",
                package_id=package_options.package_id,
            )
    return {
        "@USERID": options.user_id,
        "Revision": REVISION,
        "Package": [
            build_package(index, package, options.options_for_package(package), shipment)
            for index, package in enumerate(shipment.packages)
        ],
    }


def build_rate_request(
    shipment: Shipment,
    options: RateEstimatesOptions,
    debug: bool = False,
) -> Request:
    """Build the transport Request; the XML travels as a form field."""
    xml = build_xml_document("RateV4Request", generate_rate_request_hash(shipment, options))
    return Request(
        url=RATE_URL,
        http_method="POST",
        body=urlencode({"API": API_NAME, "XML": xml}),
        headers={"Content-Type": "application/x-www-form-urlencoded"},
        debug=debug,
    )
