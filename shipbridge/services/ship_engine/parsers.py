"""Parse ShipEngine JSON responses into carriers, rates, labels and voids."""

import base64
import binascii
import logging
from typing import Any

from shipbridge.errors.carrier_translation import carrier_error_from_response, status_message
from shipbridge.errors.domain import CarrierBusinessError, ParseError
from shipbridge.models.api import ApiFailure, ApiResult, Request, Response
from shipbridge.models.money import Money, sum_money
from shipbridge.models.shipping import Carrier, Label, Rate, ShippingMethod, VoidResult
from shipbridge.result import Failure, Result, Success
from shipbridge.services.documents import (
    expect_mapping,
    parse_json_document,
    parse_money,
    require,
    response_models,
)
from shipbridge.services.ship_engine.codes import (
    INLINE_DOWNLOAD_TYPE,
    RATE_AMOUNT_FIELDS,
    TEXT_LABEL_FORMATS,
)
from shipbridge.services.ship_engine.options import LabelOptions, RateEstimatesOptions

logger = logging.getLogger(__name__)

UNAUTHORIZED = 401
LINK_PREFIXES = ("http://", "https://")


def error_from_response(response: Response) -> CarrierBusinessError:
    """Business error for a failed ShipEngine call.

    Authentication failures always report the HTTP status text, whatever
    the body says.
    """
    if response.status == UNAUTHORIZED:
        error = CarrierBusinessError(
            status_message(response.status), status=response.status, error_code="E-5001"
        )
        logger.warning("ShipEngine rejected the API key: %s", error)
        return error
    return carrier_error_from_response(response)


def parse_amount(node: Any, field: str) -> Money | None:
    """Parse a ``{"currency", "amount"}`` block; None when absent."""
    if not isinstance(node, dict) or node.get("amount") is None:
        return None
    return parse_money(node["amount"], node.get("currency"), field)


def parse_messages(value: Any) -> tuple[str, ...]:
    """Keep the text entries of a ShipEngine message list."""
    if not isinstance(value, list):
        return ()
    return tuple(message for message in value if isinstance(message, str) and message)


def expect_list(value: Any, description: str) -> list[Any]:
    if not isinstance(value, list):
        raise ParseError(f"Expected a list of {description}")
    return value


def parse_shipping_method(service: dict[str, Any], carrier_id: str) -> ShippingMethod:
    service = expect_mapping(service, "carrier service")
    return ShippingMethod(
        carrier=carrier_id,
        service_code=require(service, "service_code"),
        name=service.get("name"),
        domestic=bool(service.get("domestic", True)),
        international=bool(service.get("international", False)),
        multi_package=bool(service.get("is_multi_package_supported", False)),
    )


def parse_carrier(node: dict[str, Any]) -> Carrier:
    node = expect_mapping(node, "carrier")
    carrier_id = require(node, "carrier_id")
    balance = node.get("balance")
    return Carrier(
        id=carrier_id,
        name=node.get("friendly_name"),
        code=node.get("carrier_code"),
        shipping_methods=tuple(
            parse_shipping_method(service, carrier_id)
            for service in expect_list(node.get("services") or [], "carrier services")
        ),
        balance=parse_money(balance, None, "balance") if balance is not None else None,
        data={
            "nickname": node.get("nickname"),
            "account_number": node.get("account_number"),
            "requires_funded_amount": node.get("requires_funded_amount"),
            "packages": node.get("packages") or [],
            "options": node.get("options") or [],
        },
    )


def parse_carrier_response(
    request: Request,
    response: Response,
) -> Result[ApiResult[list[Carrier]], ApiFailure]:
    """Parse ``GET /v1/carriers`` into Carrier accounts."""
    if response.is_error:
        return Failure(ApiFailure.build(error_from_response(response), request, response))
    try:
        body = parse_json_document(response)
        with response_models():
            carriers = [parse_carrier(node) for node in expect_list(require(body, "carriers"), "carriers")]
    except ParseError as e:
        logger.warning("ShipEngine carriers response failed: %s", e)
        return Failure(ApiFailure.build(e, request, response))
    logger.info("Parsed %d ShipEngine carrier(s)", len(carriers))
    return Success(ApiResult.build(carriers, request, response))


def parse_rate(node: dict[str, Any], options: RateEstimatesOptions) -> Rate | None:
    """Build a Rate from one estimate; None when its method is unknown."""
    node = expect_mapping(node, "rate estimate")
    carrier = options.carrier_for_id(node.get("carrier_id"))
    service_code = node.get("service_code")
    shipping_method = None
    if carrier is not None:
        shipping_method = next(
            (m for m in carrier.shipping_methods if m.service_code == service_code), None
        )
    if shipping_method is None:
        logger.debug(
            "Dropping ShipEngine estimate for %s/%s: not a known shipping method",
            node.get("carrier_id"), service_code,
        )
        return None

    amounts = {}
    for wire_field, amount_key in RATE_AMOUNT_FIELDS.items():
        money = parse_amount(node.get(wire_field), wire_field)
        if money is not None:
            amounts[amount_key] = money
    return Rate(
        shipping_method=shipping_method,
        amounts=amounts,
        warnings=parse_messages(node.get("warning_messages")),
        errors=parse_messages(node.get("error_messages")),
        data={
            "days_to_delivery": node.get("delivery_days"),
            "guaranteed_service": node.get("guaranteed_service"),
            "estimated_delivery_date": node.get("estimated_delivery_date"),
            "carrier_delivery_days": node.get("carrier_delivery_days"),
            "package_type": node.get("package_type"),
            "rate_type": node.get("rate_type"),
            "validation_status": node.get("validation_status"),
        },
    )


def parse_rate_estimates_response(
    request: Request,
    response: Response,
    options: RateEstimatesOptions,
) -> Result[ApiResult[list[Rate]], ApiFailure]:
    """Parse ``POST /v1/rates/estimate`` into rates.

    Estimates for methods the given carriers do not list are dropped.
    Estimates ShipEngine could not price keep their messages in
    ``Rate.errors``; when no estimate was priced at all, the call is a
    failure carrying those messages.
    """
    if response.is_error:
        return Failure(ApiFailure.build(error_from_response(response), request, response))
    try:
        body = expect_list(parse_json_document(response), "rate estimates")
        with response_models():
            rates = [rate for rate in (parse_rate(node, options) for node in body) if rate is not None]
        if not any(not rate.errors for rate in rates):
            messages = [m for node in body for m in parse_messages(node.get("error_messages"))]
            if messages:
                raise CarrierBusinessError("; ".join(dict.fromkeys(messages)), status=response.status)
    except (ParseError, CarrierBusinessError) as e:
        logger.warning("ShipEngine rate estimates failed: %s", e)
        return Failure(ApiFailure.build(e, request, response))
    logger.info("Parsed %d ShipEngine rate estimate(s)", len(rates))
    return Success(ApiResult.build(rates, request, response))


def decode_label_download(href: str, label_format: str) -> str | bytes:
    """Decode an inline label from a ``data:`` URI or bare base64 text.

    Text formats (ZPL) come back as str, binary formats as bytes.

    Raises:
        ParseError: If the payload is not base64.
    """
    payload = href.split(",", 1)[1] if href.startswith("data:") else href
    try:
        decoded = base64.b64decode(payload, validate=True)
        if label_format in TEXT_LABEL_FORMATS:
            return decoded.decode("utf-8")
    except (binascii.Error, ValueError) as e:
        raise ParseError(f"Inline label is not valid base64 {label_format}: {e}") from e
    return decoded


def parse_label(node: dict[str, Any], options: LabelOptions) -> Label:
    """Build a Label; the requested download type decides how href is read.

    Raises:
        ParseError: If href is not text or does not fit the download type.
    """
    node = expect_mapping(node, "label")
    href = require(node, "label_download", "href")
    if not isinstance(href, str):
        raise ParseError(f"Expected label_download.href to be text, got {type(href).__name__}")
    is_link = href.startswith(LINK_PREFIXES)
    if options.label_download_type == INLINE_DOWNLOAD_TYPE:
        if is_link:
            raise ParseError("Requested an inline label but ShipEngine returned a link")
        label_href, label_data = None, decode_label_download(href, options.label_format)
    else:
        if not is_link:
            raise ParseError("Requested a label link but ShipEngine returned inline content")
        label_href, label_data = href, None

    shipment_cost = parse_amount(node.get("shipment_cost"), "shipment_cost")
    insurance_cost = parse_amount(node.get("insurance_cost"), "insurance_cost")
    costs = [money for money in (shipment_cost, insurance_cost) if money is not None]
    try:
        cost = sum_money(costs, costs[0].currency) if costs else None
    except ValueError as e:
        raise ParseError(f"Label costs use different currencies: {e}") from e

    return Label(
        id=require(node, "label_id"),
        shipment_id=node.get("shipment_id"),
        tracking_number=node.get("tracking_number"),
        service_code=node.get("service_code"),
        label_href=label_href,
        label_data=label_data,
        label_format=options.label_format,
        cost=cost,
        shipment_cost=shipment_cost,
        data={
            "status": node.get("status"),
            "carrier_id": node.get("carrier_id"),
            "is_return_label": node.get("is_return_label"),
            "packages": node.get("packages") or [],
        },
    )


def parse_label_response(
    request: Request,
    response: Response,
    options: LabelOptions,
) -> Result[ApiResult[list[Label]], ApiFailure]:
    """Parse ``POST /v1/labels``; one label per purchased shipment."""
    if response.is_error:
        return Failure(ApiFailure.build(error_from_response(response), request, response))
    try:
        body = parse_json_document(response)
        with response_models():
            labels = [parse_label(body, options)]
    except ParseError as e:
        logger.warning("ShipEngine label response failed: %s", e)
        return Failure(ApiFailure.build(e, request, response))
    return Success(ApiResult.build(labels, request, response))


def parse_void_response(
    request: Request,
    response: Response,
) -> Result[ApiResult[VoidResult], ApiFailure]:
    """Parse ``PUT /v1/labels/{id}/void``; a refused void is a failure."""
    if response.is_error:
        return Failure(ApiFailure.build(error_from_response(response), request, response))
    try:
        body = parse_json_document(response)
        approved = require(body, "approved")
    except ParseError as e:
        logger.warning("ShipEngine void response failed: %s", e)
        return Failure(ApiFailure.build(e, request, response))
    message = body.get("message")
    if not isinstance(message, str):
        message = ""
    if not approved:
        return Failure(ApiFailure.build(message, request, response))
    return Success(ApiResult.build(VoidResult(approved=True, message=message), request, response))
