"""Select the USPS rate that belongs to a package.

USPS returns every price variant for every package (each flat-rate box,
each hold-for-pickup option) without saying which one the package needs.
The matcher narrows the candidates with the package's own options.
"""

import logging
from collections.abc import Iterable

from shipbridge.errors.domain import CannotDetermineRate
from shipbridge.models.shipping import Rate, ShippingMethod
from shipbridge.result import Failure, Result, Success
from shipbridge.services.usps.codes import FIRST_CLASS_SERVICE_CODE
from shipbridge.services.usps.options import RatePackageOptions

logger = logging.getLogger(__name__)


def _matches_package_type(rate: Rate, package_options: RatePackageOptions) -> bool:
    if rate.shipping_method.service_code == FIRST_CLASS_SERVICE_CODE:
        return rate.data.get("first_class_mail_type") == package_options.first_class_mail_type
    return rate.data.get("box_name") == package_options.box_name


def choose_package_rate(
    shipping_method: ShippingMethod,
    rates: Iterable[Rate],
    package_options: RatePackageOptions,
) -> Result[Rate, CannotDetermineRate]:
    """Choose the rate for one package and shipping method.

    Filters, in order: same shipping method; same package type (mail type
    for First-Class, box name otherwise); same hold-for-pickup flag.

    When more than one candidate survives, the first one in response order
    is returned. The survivors differ only in details the package options
    do not express, so no further tie-break is attempted.

    Args:
        shipping_method: The method to find a rate for.
        rates: All rates parsed for the package.
        package_options: The package's resolved options.

    Returns:
        Success(rate), or Failure(CannotDetermineRate) if nothing matched.
    """
    candidates = [r for r in rates if r.shipping_method == shipping_method]
    candidates = [r for r in candidates if _matches_package_type(r, package_options)]
    candidates = [
        r for r in candidates
        if bool(r.data.get("hold_for_pickup")) == package_options.hold_for_pickup
    ]

    if not candidates:
        return Failure(CannotDetermineRate(shipping_method.service_code, package_options.package_id))
    if len(candidates) > 1:
        logger.debug(
            "%d rates left for %s and package %s; using the first",
            len(candidates), shipping_method.service_code, package_options.package_id,
        )
    return Success(candidates[0])
