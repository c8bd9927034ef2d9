"""USPS Web Tools integration: RateV4 requests, responses and rate matching."""

from shipbridge.services.usps.choose_package_rate import choose_package_rate
from shipbridge.services.usps.options import RateEstimatesOptions, RatePackageOptions
from shipbridge.services.usps.parse_rate_response import parse_package_rate, parse_rate_response
from shipbridge.services.usps.rate_request import build_rate_request

__all__ = [
    "RateEstimatesOptions",
    "RatePackageOptions",
    "build_rate_request",
    "choose_package_rate",
    "parse_package_rate",
    "parse_rate_response",
]
