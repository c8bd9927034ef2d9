"""Canonical UPS Freight code tables.

Single source of truth for handling units, commodity packaging types,
billing options and LTL service codes. Builders look codes up here and
never carry inline wire codes. Adding a packaging or handling type means
extending a table, not changing builder logic.
"""

from dataclasses import dataclass
from enum import Enum

from shipbridge.models.shipping import ShippingMethod

# ---------------------------------------------------------------------------
# Carrier identity
# ---------------------------------------------------------------------------

UPS_FREIGHT_CARRIER_ID = "ups_freight"

# ---------------------------------------------------------------------------
# Handling units
# ---------------------------------------------------------------------------

HANDLING_UNIT_ONE = "HandlingUnitOne"
HANDLING_UNIT_TWO = "HandlingUnitTwo"


class HandlingUnit(str, Enum):
    """Freight handling unit tags."""

    PALLET = "pallet"
    SKID = "skid"
    CARBOY = "carboy"
    TOTES = "totes"
    LOOSE = "loose"
    OTHER = "other"


@dataclass(frozen=True)
class HandlingUnitCode:
    """Wire representation of a handling unit.

    Attributes:
        code: UPS handling unit type code.
        description: Description sent alongside the code.
        slot: Request key the unit is reported under.
    """

    code: str
    description: str
    slot: str


HANDLING_UNIT_CODES: dict[HandlingUnit, HandlingUnitCode] = {
    HandlingUnit.PALLET: HandlingUnitCode("PLT", "Pallet", HANDLING_UNIT_ONE),
    HandlingUnit.SKID: HandlingUnitCode("SKD", "Skid", HANDLING_UNIT_ONE),
    HandlingUnit.CARBOY: HandlingUnitCode("CBY", "Carboy", HANDLING_UNIT_ONE),
    HandlingUnit.TOTES: HandlingUnitCode("TOT", "Totes", HANDLING_UNIT_ONE),
    HandlingUnit.LOOSE: HandlingUnitCode("LOO", "Loose", HANDLING_UNIT_TWO),
    HandlingUnit.OTHER: HandlingUnitCode("OTH", "Other", HANDLING_UNIT_TWO),
}

DEFAULT_HANDLING_UNIT = HandlingUnit.PALLET

# ---------------------------------------------------------------------------
# Commodity packaging types
# ---------------------------------------------------------------------------

PACKAGING_TYPES: dict[str, str] = {
    "bag": "BAG",
    "bale": "BAL",
    "barrel": "BAR",
    "bundle": "BDL",
    "bin": "BIN",
    "box": "BOX",
    "basket": "BSK",
    "bunch": "BUN",
    "cabinet": "CAB",
    "can": "CAN",
    "carrier": "CAR",
    "case": "CAS",
    "carboy": "CBY",
    "container": "CON",
    "crate": "CRT",
    "cask": "CSK",
    "carton": "CTN",
    "cylinder": "CYL",
    "drum": "DRM",
    "loose": "LOO",
    "other": "OTH",
    "pail": "PAL",
    "pieces": "PCS",
    "package": "PKG",
    "pipe_line": "PLN",
    "pallet": "PLT",
    "rack": "RCK",
    "reel": "REL",
    "roll": "ROL",
    "skid": "SKD",
    "spool": "SPL",
    "tube": "TBE",
    "tank": "TNK",
    "unit": "UNT",
    "van_pack": "VPK",
    "wrapped": "WRP",
}

DEFAULT_PACKAGING = "carton"

# ---------------------------------------------------------------------------
# Billing
# ---------------------------------------------------------------------------


class BillingOption(str, Enum):
    """Who pays for the freight shipment, with its UPS billing code."""

    PREPAID = "10"
    THIRD_PARTY = "30"
    FREIGHT_COLLECT = "40"


BILLING_ALIASES: dict[str, BillingOption] = {
    "prepaid": BillingOption.PREPAID,
    "third_party": BillingOption.THIRD_PARTY,
    "freight_collect": BillingOption.FREIGHT_COLLECT,
}

# ---------------------------------------------------------------------------
# Units and services
# ---------------------------------------------------------------------------

WEIGHT_UNIT = "LBS"
REQUEST_OPTION_SHIP = "1"

SHIPPING_METHODS: tuple[ShippingMethod, ...] = tuple(
    ShippingMethod(
        carrier=UPS_FREIGHT_CARRIER_ID,
        service_code=code,
        name=name,
        origin_countries=frozenset({"US", "CA"}),
        domestic=True,
        international=True,
        multi_package=True,
    )
    for code, name in (
        ("308", "UPS Freight LTL"),
        ("309", "UPS Freight LTL - Guaranteed"),
        ("334", "UPS Freight LTL - Guaranteed A.M."),
        ("349", "UPS Standard LTL"),
    )
)


def shipping_method_for_code(service_code: str | None) -> ShippingMethod | None:
    """Return the freight service for a wire code, or None."""
    for method in SHIPPING_METHODS:
        if method.service_code == service_code:
            return method
    return None
