"""Error handling framework for ShipBridge.

This package provides:
- Typed domain exceptions (build, parse, carrier, match)
- Error code registry with E-XXXX format codes
- Carrier error extraction and translation

Error categories:
- E-1xxx: Request build errors
- E-2xxx: Response parse errors
- E-3xxx: Carrier business errors
- E-4xxx: Rate matching and internal errors
- E-5xxx: Authentication errors
"""

from shipbridge.errors.carrier_translation import (
    CARRIER_ERROR_MAP,
    carrier_error_from_response,
    extract_carrier_error,
    extract_carrier_errors,
    status_message,
    translate_carrier_error,
)
from shipbridge.errors.domain import (
    BuildError,
    CannotDetermineRate,
    CarrierBusinessError,
    ParseError,
    ShipBridgeError,
    UnknownCodeError,
)
from shipbridge.errors.registry import (
    ERROR_REGISTRY,
    ErrorCategory,
    ErrorCode,
    get_error,
    get_errors_by_category,
)

__all__ = [
    # Domain exceptions
    "ShipBridgeError",
    "BuildError",
    "UnknownCodeError",
    "ParseError",
    "CarrierBusinessError",
    "CannotDetermineRate",
    # Registry
    "ErrorCode",
    "ErrorCategory",
    "ERROR_REGISTRY",
    "get_error",
    "get_errors_by_category",
    # Carrier translation
    "CARRIER_ERROR_MAP",
    "carrier_error_from_response",
    "extract_carrier_error",
    "extract_carrier_errors",
    "status_message",
    "translate_carrier_error",
]
