"""Shared helpers for UPS XML responses: status checks and money elements."""

from typing import Any

from shipbridge.errors.carrier_translation import translate_carrier_error
from shipbridge.errors.domain import CarrierBusinessError
from shipbridge.models.api import Response
from shipbridge.models.money import Money
from shipbridge.services.documents import as_list, dig, node_text, parse_money, parse_xml_document
from shipbridge.services.ups.codes import SUCCESS_STATUS_CODE

# UPS reports some currencies with non-ISO symbols
CURRENCY_ALIASES: dict[str, str] = {
    "US$": "USD",
}


def parse_xml_response(
    response: Response,
    expected_root: str,
    force_list: tuple[str, ...] = (),
) -> dict[str, Any]:
    """Parse a UPS XML response and check its status.

    Args:
        response: Transport response.
        expected_root: Root element the operation returns.
        force_list: Repeating element names.

    Returns:
        The root element content.

    Raises:
        ParseError: If the document is malformed or unexpected.
        CarrierBusinessError: If UPS reports a non-success status.
    """
    _, root = parse_xml_document(response, expected_root, force_list=force_list)
    status = node_text(dig(root, "Response", "ResponseStatusCode"))
    if status != SUCCESS_STATUS_CODE:
        errors = as_list(dig(root, "Response", "Error"))
        first = errors[0] if errors else {}
        code = node_text(dig(first, "ErrorCode"))
        message = node_text(dig(first, "ErrorDescription"))
        if message is None:
            message = node_text(dig(root, "Response", "ResponseStatusDescription"))
        sb_code, message, _ = translate_carrier_error(code, message, response.status)
        raise CarrierBusinessError(message, code=code, status=response.status, error_code=sb_code)
    return root


def parse_money_element(element: Any, field: str = "money") -> Money | None:
    """Parse a ``<CurrencyCode>``/``<MonetaryValue>`` element.

    Returns:
        Money, or None when the element is absent or carries no value.

    Raises:
        ParseError: If the value is not a finite number or the currency is invalid.
    """
    if not isinstance(element, dict):
        return None
    value = node_text(element.get("MonetaryValue"))
    if not value:
        return None
    currency = node_text(element.get("CurrencyCode")) or "USD"
    return parse_money(value, CURRENCY_ALIASES.get(currency, currency), field)
