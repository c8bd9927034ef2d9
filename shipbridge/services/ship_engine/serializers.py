"""Serialize shipments into ShipEngine JSON payloads.

ShipEngine takes weights in ounces and dimensions in inches regardless of
the units the shipment was described in.
"""

from decimal import Decimal
from typing import Any
from urllib.parse import quote

from shipbridge.errors.domain import BuildError
from shipbridge.models.api import Request
from shipbridge.models.physical import Dimensions, Location, Package, Shipment, Weight
from shipbridge.models.shipping import Label
from shipbridge.services.documents import build_json_document
from shipbridge.services.ship_engine.codes import (
    BASE_URL,
    CARRIERS_PATH,
    CONTENT_TYPE,
    DIMENSION_UNIT,
    LABELS_PATH,
    RATE_ESTIMATES_PATH,
    VOID_PATH,
    WEIGHT_UNIT,
)
from shipbridge.services.ship_engine.options import (
    LabelOptions,
    LabelPackageOptions,
    RateEstimatesOptions,
)


def _number(value: Decimal) -> float:
    return float(value.quantize(Decimal("0.01")))


def serialize_weight(weight: Weight) -> dict[str, Any]:
    return {"value": _number(weight.to_ounces()), "unit": WEIGHT_UNIT}


def serialize_dimensions(dimensions: Dimensions) -> dict[str, Any]:
    length, width, height = dimensions.to_inches()
    return {
        "unit": DIMENSION_UNIT,
        "length": _number(length),
        "width": _number(width),
        "height": _number(height),
    }


def serialize_address(location: Location) -> dict[str, Any]:
    lines = location.address_lines
    return {
        "name": location.name or location.company_name,
        "phone": location.phone,
        "company_name": location.company_name,
        "address_line1": lines[0] if lines else None,
        "address_line2": lines[1] if len(lines) > 1 else None,
        "address_line3": lines[2] if len(lines) > 2 else None,
        "city_locality": location.city,
        "state_province": location.region,
        "postal_code": location.zip,
        "country_code": location.country,
        "address_residential_indicator": "yes" if location.residential else "no",
    }


def serialize_label_messages(messages: tuple[str, ...]) -> dict[str, str]:
    """Map reference messages to ``reference1``..``reference3``."""
    return {f"reference{index}": message for index, message in enumerate(messages, start=1)}


def serialize_package(package: Package, package_options: LabelPackageOptions) -> dict[str, Any]:
    serialized: dict[str, Any] = {"weight": serialize_weight(package.weight)}
    if package.dimensions is not None:
        serialized["dimensions"] = serialize_dimensions(package.dimensions)
    if package_options.package_code:
        serialized["package_code"] = package_options.package_code
    if package_options.messages:
        serialized["label_messages"] = serialize_label_messages(package_options.messages)
    return serialized


def serialize_label_shipment(shipment: Shipment, options: LabelOptions) -> dict[str, Any]:
    """Build the ``POST /v1/labels`` payload.

    Raises:
        BuildError: If the shipment has no packages or an option names an
            unknown package.
    """
    if not shipment.packages:
        raise BuildError("Label request needs at least one package", field="packages")
    known = {package.id for package in shipment.packages}
    for package_options in options.package_options:
        if package_options.package_id not in known:
            raise BuildError(
                "Package options reference a package not in the shipment",
                field="package_options",
                package_id=package_options.package_id,
            )

    shipment_hash: dict[str, Any] = {
        "service_code": options.shipping_method.service_code,
        "ship_to": serialize_address(shipment.destination),
        "ship_from": serialize_address(shipment.origin),
        "packages": [
            serialize_package(package, options.options_for_package(package))
            for package in shipment.packages
        ],
    }
    if options.shipping_method.carrier:
        shipment_hash["carrier_id"] = options.shipping_method.carrier
    return {
        "label_format": options.label_format,
        "label_download_type": options.label_download_type,
        "shipment": shipment_hash,
    }


def serialize_rate_estimate_request(shipment: Shipment, options: RateEstimatesOptions) -> dict[str, Any]:
    """Build the ``POST /v1/rates/estimate`` payload.

    Estimates are quoted for a single parcel: package weights are summed
    and the first package's dimensions are used.

    Raises:
        BuildError: If the shipment has no packages.
    """
    if not shipment.packages:
        raise BuildError("Rate estimate needs at least one package", field="packages")
    total_weight = Weight(
        value=sum((package.weight.to_pounds() for package in shipment.packages), Decimal("0")),
        unit="lbs",
    )
    payload: dict[str, Any] = {
        "carrier_ids": [carrier.id for carrier in options.carriers],
        "from_country_code": shipment.origin.country,
        "from_postal_code": shipment.origin.zip,
        "to_country_code": shipment.destination.country,
        "to_postal_code": shipment.destination.zip,
        "to_city_locality": shipment.destination.city,
        "to_state_province": shipment.destination.region,
        "weight": serialize_weight(total_weight),
        "confirmation": options.confirmation,
        "address_residential_indicator": "yes" if shipment.destination.residential else "no",
    }
    first_dimensions = shipment.packages[0].dimensions
    if first_dimensions is not None:
        payload["dimensions"] = serialize_dimensions(first_dimensions)
    return payload


def _json_request(url: str, payload: dict[str, Any] | None, http_method: str, debug: bool) -> Request:
    return Request(
        url=url,
        http_method=http_method,
        body=build_json_document(payload) if payload is not None else None,
        headers={"Content-Type": CONTENT_TYPE},
        debug=debug,
    )


def build_carriers_request(debug: bool = False, base_url: str = BASE_URL) -> Request:
    return _json_request(f"{base_url}{CARRIERS_PATH}", None, "GET", debug)


def build_rate_estimates_request(
    shipment: Shipment,
    options: RateEstimatesOptions,
    debug: bool = False,
    base_url: str = BASE_URL,
) -> Request:
    payload = serialize_rate_estimate_request(shipment, options)
    return _json_request(f"{base_url}{RATE_ESTIMATES_PATH}", payload, "POST", debug)


def build_label_request(
    shipment: Shipment,
    options: LabelOptions,
    debug: bool = False,
    base_url: str = BASE_URL,
) -> Request:
    payload = serialize_label_shipment(shipment, options)
    return _json_request(f"{base_url}{LABELS_PATH}", payload, "POST", debug)


def build_void_request(label: Label, debug: bool = False, base_url: str = BASE_URL) -> Request:
    path = VOID_PATH.format(label_id=quote(label.id, safe=""))
    return Request(url=f"{base_url}{path}", http_method="PUT", body="", debug=debug)
