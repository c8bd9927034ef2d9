"""UPS Freight ship request builder.

Transforms a Shipment plus LabelOptions into the UPS Freight Shipping
API ``FreightShipRequest`` JSON payload.

Example:
    from shipbridge.services.ups_freight.generate_freight_ship_request import (
        build_freight_ship_request,
    )

    request = build_freight_ship_request(shipment, options)
    response = transport.send(request)
    result = parse_freight_label_response(request, response, shipment)
"""

import logging
from typing import Any

from shipbridge.errors.domain import BuildError, UnknownCodeError
from shipbridge.models.api import Request
from shipbridge.models.physical import Location, Package, Shipment
from shipbridge.services.documents import build_json_document, format_decimal
from shipbridge.services.ups_freight.codes import (
    BILLING_ALIASES,
    DEFAULT_HANDLING_UNIT,
    HANDLING_UNIT_CODES,
    PACKAGING_TYPES,
    REQUEST_OPTION_SHIP,
    WEIGHT_UNIT,
    BillingOption,
    HandlingUnit,
    HandlingUnitCode,
)
from shipbridge.services.ups_freight.options import (
    LabelItemOptions,
    LabelOptions,
    LabelPackageOptions,
)

logger = logging.getLogger(__name__)

FREIGHT_SHIP_URL = "https://onlinetools.ups.com/ship/v1607/freight/shipments/Ground"


def build_address(location: Location) -> dict[str, str]:
    """Build a UPS Freight Address block from a Location."""
    return {
        "AddressLine": ", ".join(location.address_lines),
        "City": location.city or "",
        "StateProvinceCode": location.region or "",
        "PostalCode": location.zip or "",
        "CountryCode": location.country,
    }


def build_location(location: Location) -> dict[str, Any]:
    """Build a ShipFrom/ShipTo block.

    The company name, when present, is used as Name in place of the
    personal name.
    """
    result: dict[str, Any] = {
        "Name": location.display_name or "",
        "Address": build_address(location),
    }
    if location.phone:
        result["Phone"] = {"Number": location.phone}
    if location.email:
        result["EMailAddress"] = location.email
    return result


def build_payer(location: Location, shipper_number: str) -> dict[str, Any]:
    """Build the Payer block, which carries both company and contact name."""
    payer: dict[str, Any] = {
        "Name": location.display_name or "",
        "Address": build_address(location),
        "ShipperNumber": shipper_number,
    }
    if location.name:
        payer["AttentionName"] = location.name
    if location.phone:
        payer["Phone"] = {"Number": location.phone}
    return payer


def resolve_billing_option(billing: str) -> BillingOption:
    """Map a billing symbol to its UPS billing code.

    Raises:
        UnknownCodeError: If the symbol is not in BILLING_ALIASES.
    """
    option = BILLING_ALIASES.get(str(billing).strip().lower())
    if option is None:
        raise UnknownCodeError("billing", billing)
    return option


def build_payment_information(shipment: Shipment, options: LabelOptions) -> dict[str, Any]:
    """Build PaymentInformation; prepaid by the shipper unless told otherwise."""
    billing_location = options.billing_address or shipment.origin
    return {
        "Payer": build_payer(billing_location, options.shipper_number),
        "ShipmentBillingOption": {"Code": resolve_billing_option(options.billing).value},
    }


def resolve_handling_unit(package_options: LabelPackageOptions) -> HandlingUnitCode:
    """Resolve a package's handling unit tag, defaulting to pallet.

    Raises:
        UnknownCodeError: If the tag is not a HandlingUnit.
    """
    tag = package_options.handling_unit
    if tag is None:
        return HANDLING_UNIT_CODES[DEFAULT_HANDLING_UNIT]
    try:
        unit = HandlingUnit(tag)
    except ValueError:
        raise UnknownCodeError(
            "handling_unit", tag, package_id=package_options.package_id
        ) from None
    return HANDLING_UNIT_CODES[unit]


def build_handling_units(shipment: Shipment, options: LabelOptions) -> dict[str, dict[str, Any]]:
    """Count packages per handling unit code and place them in their slot.

    Packages are grouped by resolved code, so two pallets give one entry
    with quantity 2. Each slot holds a single code: when several codes
    compete for a slot, the largest group wins and ties go to the code
    encountered first. The losing groups are logged and left out.

    Returns:
        Mapping of slot key ("HandlingUnitOne"/"HandlingUnitTwo") to block.
    """
    counts: dict[HandlingUnitCode, int] = {}
    for package in shipment.packages:
        code = resolve_handling_unit(options.options_for_package(package))
        counts[code] = counts.get(code, 0) + 1

    # sorted() is stable, so equal counts keep first-encountered order
    ranked = sorted(counts.items(), key=lambda entry: entry[1], reverse=True)
    slots: dict[str, dict[str, Any]] = {}
    for code, quantity in ranked:
        if code.slot in slots:
            logger.warning(
                "Dropping %d %s handling unit(s): %s already holds %s",
                quantity, code.code, code.slot, slots[code.slot]["Type"]["Code"],
            )
            continue
        slots[code.slot] = {
            "Quantity": str(quantity),
            "Type": {"Code": code.code, "Description": code.description},
        }
    return dict(sorted(slots.items()))


def resolve_packaging_code(item_options: LabelItemOptions, package_id: str) -> str:
    """Map a commodity packaging symbol to its UPS code.

    Raises:
        UnknownCodeError: If the symbol is not in PACKAGING_TYPES.
    """
    code = PACKAGING_TYPES.get(str(item_options.packaging).strip().lower())
    if code is None:
        raise UnknownCodeError(
            "packaging", item_options.packaging,
            package_id=package_id, item_id=item_options.item_id,
        )
    return code


def build_commodity(package: Package, package_options: LabelPackageOptions) -> dict[str, Any]:
    """Build one Commodity line item for a package.

    Description and packaging come from the first item; the weight is the
    whole package in pounds. Freight class and NMFC code pass through as
    given.
    """
    item_options = [package_options.options_for_item(item) for item in package.items]
    # Every item's packaging must be known, even though only the first is sent
    codes = [resolve_packaging_code(opts, package.id) for opts in item_options]

    first_options = item_options[0] if item_options else LabelItemOptions()
    packaging_code = codes[0] if codes else resolve_packaging_code(first_options, package.id)

    description = package.items[0].description if package.items else None
    description = description or package.description

    commodity: dict[str, Any] = {
        "NumberOfPieces": str(len(package.items) or 1),
        "PackagingType": {"Code": packaging_code},
        "Weight": {
            "UnitOfMeasurement": {"Code": WEIGHT_UNIT},
            "Value": format_decimal(package.weight.to_pounds(), 1),
        },
    }
    if description:
        commodity["Description"] = description
    if first_options.freight_class is not None:
        commodity["FreightClass"] = first_options.freight_class
    if first_options.nmfc_code is not None:
        commodity["NMFCCommodityCode"] = first_options.nmfc_code
    return commodity


def check_option_references(shipment: Shipment, options: LabelOptions) -> None:
    """Ensure package and item options only reference known ids.

    Raises:
        BuildError: If an option names a package or item not in the shipment.
    """
    packages = {package.id: package for package in shipment.packages}
    for package_options in options.package_options:
        package = packages.get(package_options.package_id)
        if package is None:
            raise BuildError(
                "Package options reference a package not in the shipment",
                field="package_options",
                package_id=package_options.package_id,
            )
        item_ids = {item.id for item in package.items}
        for item_options in package_options.item_options:
            if item_options.item_id not in item_ids:
                raise BuildError(
                    "Item options reference an item not in the package",
                    field="item_options",
                    package_id=package.id,
                    item_id=item_options.item_id,
                )


def generate_freight_ship_request_hash(shipment: Shipment, options: LabelOptions) -> dict[str, Any]:
    """Build the FreightShipRequest payload.

    Args:
        shipment: Shipment to book.
        options: Freight label options.

    Returns:
        Dict ready to serialize as the request body.

    Raises:
        BuildError: If an option cannot be mapped to a UPS field.
    """
    if not shipment.packages:
        raise BuildError("Freight shipment has no packages", field="packages")
    check_option_references(shipment, options)

    commodities = [
        build_commodity(package, options.options_for_package(package))
        for package in shipment.packages
    ]

    shipment_block: dict[str, Any] = {
        "ShipperNumber": options.shipper_number,
        "ShipFrom": build_location(shipment.origin),
        "ShipTo": build_location(shipment.destination),
        "PaymentInformation": build_payment_information(shipment, options),
        "Service": {"Code": options.shipping_method.service_code},
        **build_handling_units(shipment, options),
        "Commodity": commodities,
    }

    request_block: dict[str, Any] = {"RequestOption": REQUEST_OPTION_SHIP}
    if options.customer_context:
        request_block["TransactionReference"] = {"CustomerContext": options.customer_context}

    return {
        "FreightShipRequest": {
            "Request": request_block,
            "Shipment": shipment_block,
        }
    }


def build_freight_ship_request(
    shipment: Shipment,
    options: LabelOptions,
    debug: bool = False,
    url: str = FREIGHT_SHIP_URL,
) -> Request:
    """Build the transport Request for a freight label."""
    payload = generate_freight_ship_request_hash(shipment, options)
    return Request(
        url=url,
        http_method="POST",
        body=build_json_document(payload),
        headers={"Content-Type": "application/json", "Accept": "application/json"},
        debug=debug,
    )
