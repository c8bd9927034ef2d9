"""USPS RateV4 response parser.

A RateV4Response holds one ``Package`` element per requested package,
each listing every ``Postage`` variant USPS could price for it. Each
package's candidates are narrowed with :func:`choose_package_rate` and a
shipping method is returned only when every package has a rate for it;
its amounts are keyed by package id, so the total is the combined
charge.
"""

import html
import logging
import re
from typing import Any

from shipbridge.errors.carrier_translation import translate_carrier_error
from shipbridge.errors.domain import CarrierBusinessError, ParseError
from shipbridge.models.api import ApiFailure, ApiResult, Request, Response
from shipbridge.models.money import Money
from shipbridge.models.physical import Package, Shipment
from shipbridge.models.shipping import Rate, ShippingMethod
from shipbridge.result import Failure, Result, Success
from shipbridge.services.documents import (
    as_list,
    dig,
    expect_mapping,
    node_text,
    parse_money,
    parse_xml_document,
    require,
    response_models,
)
from shipbridge.services.usps.choose_package_rate import choose_package_rate
from shipbridge.services.usps.codes import (
    DAYS_TO_DELIVERY_PATTERN,
    FIRST_CLASS_SERVICE_CODE,
    HOLD_FOR_PICKUP_PATTERN,
    MILITARY_PATTERN,
    box_name_for_service,
    first_class_mail_type_for_service,
    shipping_method_for_class_id,
)
from shipbridge.services.usps.options import RateEstimatesOptions, RatePackageOptions

logger = logging.getLogger(__name__)

ROOT_ELEMENTS = ("RateV4Response", "Error")
FORCE_LIST = ("Package", "Postage")

SUPERSCRIPT_PATTERN = re.compile(r"<sup>.*?</sup>", re.I | re.S)
WHITESPACE_PATTERN = re.compile(r"\s+")


def clean_mail_service(text: str) -> str:
    """Strip the HTML markup USPS embeds in MailService names.

    >>> clean_mail_service("Priority Mail 2-Day&lt;sup&gt;&#8482;&lt;/sup&gt;")
    'Priority Mail 2-Day'
    """
    text = html.unescape(text)
    text = SUPERSCRIPT_PATTERN.sub("", text)
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def _service_name(mail_service: str) -> str:
    return WHITESPACE_PATTERN.sub(" ", DAYS_TO_DELIVERY_PATTERN.sub("", mail_service)).strip()


def _days_to_delivery(mail_service: str) -> int | None:
    match = DAYS_TO_DELIVERY_PATTERN.search(mail_service)
    return int(match.group(1)) if match else None


def parse_package_rate(
    postage: dict[str, Any],
    package: Package,
    package_options: RatePackageOptions,
    shipment: Shipment,
) -> Rate | None:
    """Build a single-package Rate from one Postage element.

    Returns:
        The Rate, or None when the CLASSID belongs to no known method.

    Raises:
        ParseError: If the element is empty or the price is missing or
            not a finite number.
    """
    postage = expect_mapping(postage, "Postage")
    class_id = postage.get("@CLASSID")
    shipping_method = shipping_method_for_class_id(class_id, shipment.origin.country)
    if shipping_method is None:
        logger.debug("Dropping USPS postage with unknown CLASSID %s", class_id)
        return None

    full_mail_service = clean_mail_service(node_text(require(postage, "MailService")) or "")
    price = node_text(postage.get("Rate"))
    commercial_price = node_text(postage.get("CommercialRate"))
    commercial = bool(package_options.commercial_pricing and commercial_price)
    if commercial:
        price = commercial_price
    if not price:
        raise ParseError(f"Missing Rate for USPS service '{full_mail_service}'")

    if shipping_method.service_code == FIRST_CLASS_SERVICE_CODE:
        first_class_mail_type = first_class_mail_type_for_service(full_mail_service)
    else:
        first_class_mail_type = None

    return Rate(
        shipping_method=shipping_method,
        amounts={package.id: parse_money(price, None, "Rate")},
        data={
            "package_id": package.id,
            "full_mail_service": full_mail_service,
            "service_name": _service_name(full_mail_service),
            "days_to_delivery": _days_to_delivery(full_mail_service),
            "box_name": box_name_for_service(full_mail_service),
            "first_class_mail_type": first_class_mail_type,
            "hold_for_pickup": bool(HOLD_FOR_PICKUP_PATTERN.search(full_mail_service)),
            "commercial": commercial,
            "military": bool(MILITARY_PATTERN.search(full_mail_service)),
        },
    )


def _package_for_node(node: dict[str, Any], shipment: Shipment) -> Package:
    package_index = expect_mapping(node, "Package").get("@ID")
    try:
        index = int(package_index)
    except (TypeError, ValueError):
        index = -1
    if not 0 <= index < len(shipment.packages):
        raise ParseError(f"USPS response references unknown package '{package_index}'")
    return shipment.packages[index]


def _error_from_node(error: Any, status: int) -> CarrierBusinessError:
    code = node_text(dig(error, "Number"))
    message = node_text(dig(error, "Description")) or "USPS reported an error"
    sb_code, message, _ = translate_carrier_error(code, message, status)
    return CarrierBusinessError(message, code=code, status=status, error_code=sb_code)


def combine_package_rates(shipping_method: ShippingMethod, package_rates: list[Rate]) -> Rate:
    """Merge one rate per package into a single rate for the method."""
    amounts: dict[str, Money] = {}
    warnings: list[str] = []
    for rate in package_rates:
        amounts.update(rate.amounts)
        warnings.extend(rate.warnings)
    return Rate(
        shipping_method=shipping_method,
        amounts=amounts,
        warnings=tuple(warnings),
        data=dict(package_rates[0].data),
    )


def build_rates(
    root: dict[str, Any],
    shipment: Shipment,
    options: RateEstimatesOptions,
    status: int,
) -> list[Rate]:
    """Parse every package's postage and aggregate one Rate per method.

    Raises:
        CarrierBusinessError: If any package came back with an error. A
            method needs a rate for every package, so one failed package
            leaves nothing to offer; the first USPS message is reported.
        ParseError: If a package node cannot be read.
    """
    rates_by_package: dict[str, list[Rate]] = {package.id: [] for package in shipment.packages}
    package_errors: list[CarrierBusinessError] = []
    methods: list[ShippingMethod] = []

    for node in as_list(root.get("Package")):
        package = _package_for_node(node, shipment)
        if node.get("Error") is not None:
            error = _error_from_node(node["Error"], status)
            logger.warning("USPS could not rate package %s: %s", package.id, error)
            package_errors.append(error)
            continue
        package_options = options.options_for_package(package)
        for postage in as_list(node.get("Postage")):
            rate = parse_package_rate(postage, package, package_options, shipment)
            if rate is None:
                continue
            rates_by_package[package.id].append(rate)
            if rate.shipping_method not in methods:
                methods.append(rate.shipping_method)

    if package_errors:
        raise package_errors[0]

    rates = []
    for shipping_method in methods:
        chosen = [
            choose_package_rate(
                shipping_method,
                rates_by_package[package.id],
                options.options_for_package(package),
            )
            for package in shipment.packages
        ]
        failures = [result.failure for result in chosen if result.is_failure()]
        if failures:
            logger.debug("Skipping USPS %s: %s", shipping_method.service_code, failures[0])
            continue
        rates.append(combine_package_rates(shipping_method, [result.value for result in chosen]))
    return rates


def parse_rate_response(
    request: Request,
    response: Response,
    shipment: Shipment,
    options: RateEstimatesOptions,
) -> Result[ApiResult[list[Rate]], ApiFailure]:
    """Parse a RateV4Response into one rate per shipping method.

    Args:
        request: The request that produced the response.
        response: Transport response holding the XML body.
        shipment: The rated shipment, packages in request order.
        options: The options the request was built with.

    Returns:
        Success(ApiResult[list[Rate]]) or Failure(ApiFailure).
    """
    try:
        root_name, root = parse_xml_document(response, ROOT_ELEMENTS, force_list=FORCE_LIST)
        if root_name == "Error":
            raise _error_from_node(root, response.status)
        with response_models():
            rates = build_rates(root, shipment, options, response.status)
    except (ParseError, CarrierBusinessError) as e:
        logger.warning("USPS rate response failed: %s", e)
        return Failure(ApiFailure.build(e, request, response))
    logger.info("Parsed %d USPS rate(s)", len(rates))
    return Success(ApiResult.build(rates, request, response))
