"""Carrier error extraction and translation to ShipBridge error codes.

Carriers report failures in different envelopes. This module pulls the
carrier's own code and message out of them, preserving the message
verbatim, and maps it onto the E-XXXX registry. When a carrier gives no
message, one is synthesized from the HTTP status ("401 Unauthorized").
"""

import json
import logging
from typing import Any

import httpx

from shipbridge.errors.domain import CarrierBusinessError
from shipbridge.errors.registry import get_error
from shipbridge.models.api import Response

logger = logging.getLogger(__name__)

# Carrier error codes with a known ShipBridge counterpart
CARRIER_ERROR_MAP: dict[str, str] = {
    # UPS authentication
    "250001": "E-5001",  # Invalid access license
    "250002": "E-5001",  # Invalid authentication information
    "250003": "E-5001",  # Invalid access license for the tool
    # UPS rating
    "111210": "E-3002",  # Service unavailable between locations
    "111285": "E-3002",  # Postal code not valid for the country
    # UPS system
    "190001": "E-3004",  # System unavailable
    "190002": "E-3004",  # Temporarily unavailable
    # USPS
    "-2147219401": "E-3002",  # No rates for the package
    "80040B1A": "E-5001",  # Authorization failure
}

CARRIER_MESSAGE_PATTERNS: dict[str, str] = {
    "no rates available": "E-3002",
    "invalid package_code": "E-3003",
    "invalid package code": "E-3003",
    "unauthorized": "E-5001",
    "authorization failure": "E-5001",
    "service unavailable": "E-3004",
}

STATUS_ERROR_MAP: dict[int, str] = {
    401: "E-5001",
    403: "E-5001",
    502: "E-3004",
    503: "E-3004",
}


def status_message(status: int) -> str:
    """Synthesize a message from an HTTP status code.

    Returns:
        "401 Unauthorized" style text.
    """
    reason = httpx.codes.get_reason_phrase(status)
    return f"{status} {reason}".strip()


def extract_carrier_errors(body: Any) -> list[tuple[str | None, str]]:
    """Extract every (code, message) pair from a carrier JSON body.

    Handles:
        - ShipEngine / generic: ``{"errors": [{"error_code"|"code", "message"}]}``
        - Nested: ``{"response": {"errors": [...]}}``
        - UPS fault: ``{"Fault": {"detail": {"Errors": {"ErrorDetail": ...}}}}``
        - Bare: ``{"message": "..."}``

    Args:
        body: Decoded JSON body.

    Returns:
        List of (code, message) tuples; empty when nothing was found.
    """
    if not isinstance(body, dict):
        return []

    errors = body.get("errors")
    if not errors and isinstance(body.get("response"), dict):
        errors = body["response"].get("errors")
    if errors:
        found = []
        for err in errors if isinstance(errors, list) else []:
            if isinstance(err, dict) and err.get("message"):
                code = err.get("error_code") or err.get("code")
                found.append((str(code) if code is not None else None, str(err["message"])))
            elif isinstance(err, str):
                found.append((None, err))
        if found:
            return found

    fault = body.get("Fault")
    if isinstance(fault, dict):
        detail = fault.get("detail")
        errors_node = detail.get("Errors") if isinstance(detail, dict) else None
        error_detail = errors_node.get("ErrorDetail") if isinstance(errors_node, dict) else None
        if isinstance(error_detail, dict):
            error_detail = [error_detail]
        found = []
        for ed in error_detail if isinstance(error_detail, list) else []:
            primary = ed.get("PrimaryErrorCode") if isinstance(ed, dict) else None
            if isinstance(primary, dict) and primary.get("Description"):
                code = primary.get("Code")
                found.append((str(code) if code is not None else None, str(primary["Description"])))
        if found:
            return found

    if body.get("message"):
        return [(None, str(body["message"]))]
    return []


def extract_carrier_error(body: Any) -> tuple[str | None, str | None]:
    """Extract the first carrier (code, message) pair, either may be None."""
    errors = extract_carrier_errors(body)
    if not errors:
        return (None, None)
    return errors[0]


def translate_carrier_error(
    carrier_code: str | None,
    carrier_message: str | None,
    status: int | None = None,
) -> tuple[str, str, str]:
    """Translate a carrier error to a ShipBridge error.

    Lookup order: carrier code, message pattern, HTTP status, then the
    generic carrier error.

    Args:
        carrier_code: Carrier error code (e.g. "250002").
        carrier_message: Carrier error message text.
        status: HTTP status of the response, if known.

    Returns:
        Tuple of (error_code, message, remediation). The message is the
        carrier's own text when it gave one.
    """
    message = carrier_message or (status_message(status) if status else None)
    message = message or f"Carrier error code {carrier_code}"

    sb_code = None
    if carrier_code and carrier_code in CARRIER_ERROR_MAP:
        sb_code = CARRIER_ERROR_MAP[carrier_code]
    elif carrier_message:
        lowered = carrier_message.lower()
        for pattern, code in CARRIER_MESSAGE_PATTERNS.items():
            if pattern in lowered:
                sb_code = code
                break
    if sb_code is None and status in STATUS_ERROR_MAP:
        sb_code = STATUS_ERROR_MAP[status]

    error = get_error(sb_code or "E-3005")
    if error is None:
        return ("E-3005", message, "Enable debug mode and inspect the carrier response.")
    return (error.code, message, error.remediation)


def decode_json_body(response: Response) -> Any:
    """Decode a JSON response body, returning None when it is not JSON."""
    try:
        return json.loads(response.text)
    except (ValueError, UnicodeDecodeError):
        return None


def carrier_error_from_response(response: Response) -> CarrierBusinessError:
    """Build the business error for a failed carrier JSON response.

    A single carrier message is kept verbatim. Several messages are
    joined with "; ". Without any message the HTTP status is used.
    """
    errors = extract_carrier_errors(decode_json_body(response))
    if errors:
        message = "; ".join(msg for _, msg in errors)
        code = errors[0][0]
    else:
        message = status_message(response.status)
        code = None
    sb_code, _, _ = translate_carrier_error(code, message, response.status)
    logger.warning(
        "Carrier request failed with status %s (%s): %s",
        response.status, sb_code, message,
    )
    return CarrierBusinessError(message, code=code, status=response.status, error_code=sb_code)
