"""Canonical UPS parcel code tables.

Single source of truth for UPS service codes, the shipping methods each
origin region offers, packaging codes and payload limits. A service code
alone is ambiguous ("07" is Worldwide Express from the US but Express
from the EU), so shipping methods are resolved by code and origin
country together.
"""

from enum import Enum

from shipbridge.models.shipping import ShippingMethod

# ---------------------------------------------------------------------------
# Carrier identity
# ---------------------------------------------------------------------------

UPS_CARRIER_ID = "ups"

# ---------------------------------------------------------------------------
# UPS field limits and units
# ---------------------------------------------------------------------------

UPS_ADDRESS_MAX_LEN = 35
UPS_WEIGHT_UNIT = "LBS"
UPS_DIMENSION_UNIT = "IN"
SUCCESS_STATUS_CODE = "1"


class ServiceCode(str, Enum):
    """UPS service codes for parcel services."""

    NEXT_DAY_AIR = "01"
    SECOND_DAY_AIR = "02"
    GROUND = "03"
    WORLDWIDE_EXPRESS = "07"
    WORLDWIDE_EXPEDITED = "08"
    UPS_STANDARD = "11"
    THREE_DAY_SELECT = "12"
    NEXT_DAY_AIR_SAVER = "13"
    NEXT_DAY_AIR_EARLY = "14"
    WORLDWIDE_EXPRESS_PLUS = "54"
    SECOND_DAY_AIR_AM = "59"
    WORLDWIDE_SAVER = "65"
    TODAY_STANDARD = "82"


class PackagingCode(str, Enum):
    """UPS packaging type codes used in rate requests."""

    LETTER = "01"
    CUSTOMER_SUPPLIED = "02"
    TUBE = "03"
    PAK = "04"
    EXPRESS_BOX = "21"
    PALLET = "30"


DEFAULT_PACKAGING_CODE = PackagingCode.CUSTOMER_SUPPLIED

# Box names that map onto UPS-branded packaging; anything else ships in
# customer supplied packaging.
PACKAGING_ALIASES: dict[str, PackagingCode] = {
    "variable": PackagingCode.CUSTOMER_SUPPLIED,
    "ups_letter": PackagingCode.LETTER,
    "ups_tube": PackagingCode.TUBE,
    "ups_pak": PackagingCode.PAK,
    "ups_express_box": PackagingCode.EXPRESS_BOX,
    "pallet": PackagingCode.PALLET,
}

# ---------------------------------------------------------------------------
# Origin regions
# ---------------------------------------------------------------------------

US_ORIGINS: frozenset[str] = frozenset({"US", "PR"})
CA_ORIGINS: frozenset[str] = frozenset({"CA"})
EU_ORIGINS: frozenset[str] = frozenset({
    "AT", "BE", "BG", "HR", "CY", "CZ", "DK", "EE", "FI", "FR",
    "DE", "GR", "HU", "IE", "IT", "LV", "LT", "LU", "MT", "NL",
    "PL", "PT", "RO", "SK", "SI", "ES", "SE",
})
MX_ORIGINS: frozenset[str] = frozenset({"MX"})
OTHER_ORIGINS: frozenset[str] = frozenset({"GB", "NO", "CH"})


def _methods(
    origins: frozenset[str],
    services: tuple[tuple[ServiceCode, str, bool], ...],
) -> tuple[ShippingMethod, ...]:
    return tuple(
        ShippingMethod(
            carrier=UPS_CARRIER_ID,
            service_code=code.value,
            name=name,
            origin_countries=origins,
            domestic=not international,
            international=international,
            multi_package=True,
        )
        for code, name, international in services
    )


SHIPPING_METHODS: tuple[ShippingMethod, ...] = (
    *_methods(US_ORIGINS, (
        (ServiceCode.NEXT_DAY_AIR, "UPS Next Day Air", False),
        (ServiceCode.SECOND_DAY_AIR, "UPS 2nd Day Air", False),
        (ServiceCode.GROUND, "UPS Ground", False),
        (ServiceCode.WORLDWIDE_EXPRESS, "UPS Worldwide Express", True),
        (ServiceCode.WORLDWIDE_EXPEDITED, "UPS Worldwide Expedited", True),
        (ServiceCode.UPS_STANDARD, "UPS Standard", True),
        (ServiceCode.THREE_DAY_SELECT, "UPS 3 Day Select", False),
        (ServiceCode.NEXT_DAY_AIR_SAVER, "UPS Next Day Air Saver", False),
        (ServiceCode.NEXT_DAY_AIR_EARLY, "UPS Next Day Air Early", False),
        (ServiceCode.WORLDWIDE_EXPRESS_PLUS, "UPS Worldwide Express Plus", True),
        (ServiceCode.SECOND_DAY_AIR_AM, "UPS 2nd Day Air A.M.", False),
        (ServiceCode.WORLDWIDE_SAVER, "UPS Worldwide Saver", True),
    )),
    *_methods(CA_ORIGINS, (
        (ServiceCode.NEXT_DAY_AIR, "UPS Express", False),
        (ServiceCode.SECOND_DAY_AIR, "UPS Expedited", False),
        (ServiceCode.WORLDWIDE_EXPRESS, "UPS Worldwide Express", True),
        (ServiceCode.WORLDWIDE_EXPEDITED, "UPS Worldwide Expedited", True),
        (ServiceCode.UPS_STANDARD, "UPS Standard", False),
        (ServiceCode.THREE_DAY_SELECT, "UPS 3 Day Select", True),
        (ServiceCode.NEXT_DAY_AIR_SAVER, "UPS Express Saver", False),
        (ServiceCode.NEXT_DAY_AIR_EARLY, "UPS Express Early", False),
        (ServiceCode.WORLDWIDE_EXPRESS_PLUS, "UPS Worldwide Express Plus", True),
        (ServiceCode.WORLDWIDE_SAVER, "UPS Express Saver", True),
    )),
    *_methods(EU_ORIGINS | OTHER_ORIGINS, (
        (ServiceCode.WORLDWIDE_EXPRESS, "UPS Express", True),
        (ServiceCode.WORLDWIDE_EXPEDITED, "UPS Expedited", True),
        (ServiceCode.UPS_STANDARD, "UPS Standard", False),
        (ServiceCode.WORLDWIDE_EXPRESS_PLUS, "UPS Express Plus", True),
        (ServiceCode.WORLDWIDE_SAVER, "UPS Express Saver", True),
        (ServiceCode.TODAY_STANDARD, "UPS Today Standard", False),
    )),
    *_methods(MX_ORIGINS, (
        (ServiceCode.WORLDWIDE_EXPRESS, "UPS Express", True),
        (ServiceCode.WORLDWIDE_EXPEDITED, "UPS Expedited", True),
        (ServiceCode.UPS_STANDARD, "UPS Standard", False),
        (ServiceCode.WORLDWIDE_EXPRESS_PLUS, "UPS Express Plus", True),
        (ServiceCode.WORLDWIDE_SAVER, "UPS Saver", True),
    )),
)


def find_shipping_method(service_code: str, origin_country: str) -> ShippingMethod | None:
    """Resolve a service code returned by UPS for a given origin country.

    Returns:
        The matching ShippingMethod, or None when UPS returned a code that
        is not offered from that origin.
    """
    for method in SHIPPING_METHODS:
        if method.service_code == service_code and origin_country in method.origin_countries:
            return method
    return None


def resolve_packaging_code(box_name: str | None) -> str:
    """Resolve a container box name to a UPS packaging code.

    Unlisted box names are customer-supplied packages.
    """
    if not box_name:
        return DEFAULT_PACKAGING_CODE.value
    matched = PACKAGING_ALIASES.get(box_name.strip().lower())
    if matched is not None:
        return matched.value
    return DEFAULT_PACKAGING_CODE.value
