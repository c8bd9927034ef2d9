"""Error code registry with E-XXXX format codes.

Categories:
- E-1xxx: Request build errors (domain input cannot be mapped)
- E-2xxx: Response parse errors
- E-3xxx: Carrier business errors
- E-4xxx: Rate matching and internal errors
- E-5xxx: Authentication errors

Each error includes a code, title, message template, and remediation steps.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Categories for error codes."""

    BUILD = "build"  # E-1xxx
    PARSE = "parse"  # E-2xxx
    CARRIER = "carrier"  # E-3xxx
    MATCH = "match"  # E-4xxx
    AUTH = "auth"  # E-5xxx


@dataclass
class ErrorCode:
    """Definition of an error code with metadata.

    Attributes:
        code: Error code in E-XXXX format.
        category: Error category for grouping.
        title: Short title for display.
        message_template: Message with {placeholders} for context.
        remediation: Action the caller should take to resolve.
        is_retryable: Whether the operation can be retried unchanged.
    """

    code: str
    category: ErrorCategory
    title: str
    message_template: str
    remediation: str
    is_retryable: bool = False


ERROR_REGISTRY: dict[str, ErrorCode] = {
    # Build errors (E-1xxx)
    "E-1001": ErrorCode(
        code="E-1001",
        category=ErrorCategory.BUILD,
        title="Invalid Shipment Input",
        message_template="Shipment input cannot be mapped to a carrier request: {details}",
        remediation="Correct the shipment or options and rebuild the request.",
    ),
    "E-1002": ErrorCode(
        code="E-1002",
        category=ErrorCategory.BUILD,
        title="Unknown Code",
        message_template="'{value}' is not a known {field}.",
        remediation="Use one of the values in the carrier's code table.",
    ),
    # Parse errors (E-2xxx)
    "E-2001": ErrorCode(
        code="E-2001",
        category=ErrorCategory.PARSE,
        title="Malformed Carrier Response",
        message_template="Could not parse {carrier} response: {details}",
        remediation="Enable debug mode and inspect the original response.",
    ),
    "E-2002": ErrorCode(
        code="E-2002",
        category=ErrorCategory.PARSE,
        title="Unexpected Response Document",
        message_template="Expected {expected} document, got {actual}.",
        remediation="Check that the response belongs to the request that was sent.",
    ),
    # Carrier errors (E-3xxx)
    "E-3001": ErrorCode(
        code="E-3001",
        category=ErrorCategory.CARRIER,
        title="Carrier Rejected Request",
        message_template="{carrier_message}",
        remediation="Review the carrier message and correct the request.",
    ),
    "E-3002": ErrorCode(
        code="E-3002",
        category=ErrorCategory.CARRIER,
        title="No Rates Available",
        message_template="{carrier_message}",
        remediation="Check package weight, dimensions and packaging against carrier limits.",
    ),
    "E-3003": ErrorCode(
        code="E-3003",
        category=ErrorCategory.CARRIER,
        title="Invalid Package Code",
        message_template="{carrier_message}",
        remediation="Use a package code the selected carrier supports.",
    ),
    "E-3004": ErrorCode(
        code="E-3004",
        category=ErrorCategory.CARRIER,
        title="Carrier Service Unavailable",
        message_template="{carrier_message}",
        remediation="Wait a few minutes and retry.",
        is_retryable=True,
    ),
    "E-3005": ErrorCode(
        code="E-3005",
        category=ErrorCategory.CARRIER,
        title="Carrier Unknown Error",
        message_template="{carrier_message}",
        remediation="Enable debug mode and inspect the carrier response.",
    ),
    # Match errors (E-4xxx)
    "E-4001": ErrorCode(
        code="E-4001",
        category=ErrorCategory.MATCH,
        title="Cannot Determine Rate",
        message_template="No rate matched shipping method '{shipping_method}' for package '{package_id}'.",
        remediation="Check the package options (box name, mail type, hold for pickup).",
    ),
    "E-4002": ErrorCode(
        code="E-4002",
        category=ErrorCategory.MATCH,
        title="Internal Error",
        message_template="Internal error: {details}",
        remediation="Report the error with the debug request and response attached.",
    ),
    # Auth errors (E-5xxx)
    "E-5001": ErrorCode(
        code="E-5001",
        category=ErrorCategory.AUTH,
        title="Carrier Authentication Failed",
        message_template="{carrier_message}",
        remediation="Check the carrier credentials in configuration.",
    ),
}


def get_error(code: str) -> ErrorCode | None:
    """Look up error code definition.

    Args:
        code: Error code in E-XXXX format.

    Returns:
        ErrorCode if found, None otherwise.
    """
    return ERROR_REGISTRY.get(code)


def get_errors_by_category(category: ErrorCategory) -> list[ErrorCode]:
    """Get all error codes in a category.

    Args:
        category: The error category to filter by.

    Returns:
        List of ErrorCode objects in the specified category.
    """
    return [e for e in ERROR_REGISTRY.values() if e.category == category]
