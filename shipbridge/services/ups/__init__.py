"""UPS parcel integration: rate requests and responses."""

from shipbridge.services.ups.options import RateOptions
from shipbridge.services.ups.parse_rate_response import parse_rate_response
from shipbridge.services.ups.rate_request import build_rate_request

__all__ = [
    "RateOptions",
    "build_rate_request",
    "parse_rate_response",
]
