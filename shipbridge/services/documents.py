"""XML and JSON document helpers shared by carrier builders and parsers.

XML goes through xmltodict: documents become nested dicts where
attributes are ``@name`` keys and mixed text is ``#text``. Repeating
elements must be named in ``force_list`` so a single occurrence still
comes back as a list.
"""

import json
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal, InvalidOperation
from typing import Any
from xml.parsers.expat import ExpatError

import xmltodict
from pydantic import ValidationError

from shipbridge.errors.domain import ParseError
from shipbridge.models.api import Response
from shipbridge.models.money import DEFAULT_CURRENCY, Money


def parse_xml_document(
    response: Response,
    expected_root: str | tuple[str, ...],
    force_list: tuple[str, ...] = (),
) -> tuple[str, dict[str, Any]]:
    """Parse an XML response body and check its root element.

    Args:
        response: Transport response holding the XML text.
        expected_root: Root element name(s) that are acceptable.
        force_list: Element names that always parse to lists.

    Returns:
        Tuple of (root element name, root element content).

    Raises:
        ParseError: If the body is not XML or the root is unexpected.
    """
    try:
        document = xmltodict.parse(response.text, force_list=force_list)
    except (ExpatError, UnicodeDecodeError) as e:
        raise ParseError(f"Malformed XML response: {e}") from e

    if not document:
        raise ParseError("Empty XML response")
    root_name, root = next(iter(document.items()))
    accepted = (expected_root,) if isinstance(expected_root, str) else expected_root
    if root_name not in accepted:
        raise ParseError(
            f"Expected {' or '.join(accepted)} document, got {root_name}"
        )
    return root_name, expect_mapping(root or {}, root_name)


def build_xml_document(root_name: str, content: dict[str, Any]) -> str:
    """Serialize a dict as an XML document with a single root."""
    return xmltodict.unparse({root_name: content}, pretty=False)


def parse_json_document(response: Response) -> Any:
    """Decode a JSON response body.

    Raises:
        ParseError: If the body is not valid JSON.
    """
    try:
        return json.loads(response.text)
    except (ValueError, UnicodeDecodeError) as e:
        raise ParseError(f"Malformed JSON response: {e}") from e


def build_json_document(payload: dict[str, Any]) -> str:
    """Serialize a payload as JSON; equal inputs give byte-identical output."""
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def as_list(value: Any) -> list[Any]:
    """Wrap a single node in a list; None becomes an empty list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def node_text(node: Any) -> str | None:
    """Return the text of an xmltodict node, ignoring attributes."""
    if node is None:
        return None
    if isinstance(node, dict):
        text = node.get("#text")
        return text.strip() if isinstance(text, str) else None
    return str(node).strip()


def dig(node: Any, *path: str) -> Any:
    """Walk nested dict keys, returning None at the first missing step."""
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def require(node: Any, *path: str) -> Any:
    """Like :func:`dig` but raises ParseError when the path is absent."""
    value = dig(node, *path)
    if value is None:
        raise ParseError(f"Missing expected node {'/'.join(path)}")
    return value


def parse_decimal(value: Any, field: str) -> Decimal:
    """Parse an exact, finite decimal from text.

    Raises:
        ParseError: If the value is not numeric, or is NaN or infinite.
    """
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise ParseError(f"Invalid decimal value '{value}' for {field}") from e
    if not number.is_finite():
        raise ParseError(f"Invalid decimal value '{value}' for {field}")
    return number


def parse_money(amount: Any, currency: str | None, field: str) -> Money:
    """Build Money from a carrier amount and currency code.

    A missing currency defaults to USD.

    Raises:
        ParseError: If the amount is not a finite number or the currency
            is not a three-letter code.
    """
    value = parse_decimal(amount, field)
    try:
        return Money(amount=value, currency=currency or DEFAULT_CURRENCY)
    except ValueError as e:
        raise ParseError(f"Invalid currency '{currency}' for {field}") from e


def expect_mapping(node: Any, description: str) -> dict[str, Any]:
    """Return ``node`` if it is a dict.

    Raises:
        ParseError: If the node is empty, text or a list.
    """
    if not isinstance(node, dict):
        raise ParseError(f"Expected {description} to be an element, got {type(node).__name__}")
    return node


def format_decimal(value: Decimal, places: int = 1) -> str:
    """Format a decimal with a fixed number of places ("500.0")."""
    quantum = Decimal(1).scaleb(-places)
    return str(value.quantize(quantum))


@contextmanager
def response_models() -> Iterator[None]:
    """Report carrier values a model rejects as a ParseError.

    Usage:
        with response_models():
            return Label(id=node["label_id"], ...)
    """
    try:
        yield
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "value"
        raise ParseError(f"Invalid {location} in carrier response: {first['msg']}") from e
