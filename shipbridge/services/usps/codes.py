"""Canonical USPS Web Tools code tables.

USPS RateV4 responses identify each price by a numeric ``CLASSID`` and a
free-text ``MailService`` name. The class id picks the shipping method;
the service name carries the box, first-class mail type and hold-for-
pickup variant the price applies to. All of those lookups live here.
"""

import re

from shipbridge.models.shipping import ShippingMethod

# ---------------------------------------------------------------------------
# Carrier identity
# ---------------------------------------------------------------------------

USPS_CARRIER_ID = "usps"
USPS_ORIGINS: frozenset[str] = frozenset({"US", "PR", "VI", "GU", "AS", "MP"})

FIRST_CLASS_SERVICE_CODE = "FIRST CLASS"

# ---------------------------------------------------------------------------
# Shipping methods and the RateV4 class ids that belong to them
# ---------------------------------------------------------------------------


def _method(service_code: str, name: str) -> ShippingMethod:
    return ShippingMethod(
        carrier=USPS_CARRIER_ID,
        service_code=service_code,
        name=name,
        origin_countries=USPS_ORIGINS,
        domestic=True,
        international=False,
        multi_package=True,
    )


FIRST_CLASS = _method(FIRST_CLASS_SERVICE_CODE, "First-Class Package Service")
PRIORITY = _method("PRIORITY", "Priority")
PRIORITY_MAIL_EXPRESS = _method("PRIORITY MAIL EXPRESS", "Priority Mail Express")
STANDARD_POST = _method("STANDARD POST", "Standard Post")
MEDIA_MAIL = _method("MEDIA", "Media Mail")
LIBRARY_MAIL = _method("LIBRARY", "Library Mail")

SHIPPING_METHODS: tuple[ShippingMethod, ...] = (
    FIRST_CLASS,
    PRIORITY,
    PRIORITY_MAIL_EXPRESS,
    STANDARD_POST,
    MEDIA_MAIL,
    LIBRARY_MAIL,
)

CLASS_IDS: dict[str, frozenset[str]] = {
    FIRST_CLASS.service_code: frozenset({"0", "12", "15", "19", "53", "61", "78"}),
    PRIORITY.service_code: frozenset({
        "1", "16", "17", "18", "22", "28", "29", "33", "34", "35", "36", "37",
        "38", "39", "40", "41", "42", "43", "44", "45", "46", "47", "48", "49",
        "50", "58", "59",
    }),
    PRIORITY_MAIL_EXPRESS.service_code: frozenset({
        "2", "3", "13", "23", "25", "27", "30", "31", "32", "55", "56", "57",
        "62", "63", "64",
    }),
    STANDARD_POST.service_code: frozenset({"4"}),
    MEDIA_MAIL.service_code: frozenset({"6"}),
    LIBRARY_MAIL.service_code: frozenset({"7"}),
}

CLASS_ID_TO_SERVICE_CODE: dict[str, str] = {
    class_id: service_code
    for service_code, class_ids in CLASS_IDS.items()
    for class_id in class_ids
}


def shipping_method_for_class_id(class_id: str | None, origin_country: str) -> ShippingMethod | None:
    """Resolve a RateV4 CLASSID for an origin country; None if unknown."""
    service_code = CLASS_ID_TO_SERVICE_CODE.get(class_id or "")
    for method in SHIPPING_METHODS:
        if method.service_code == service_code and method.ships_from(origin_country):
            return method
    return None


# ---------------------------------------------------------------------------
# Request codes
# ---------------------------------------------------------------------------

REQUEST_SERVICES: frozenset[str] = frozenset({
    "ALL", "ONLINE", "FIRST CLASS", "FIRST CLASS COMMERCIAL", "PRIORITY",
    "PRIORITY COMMERCIAL", "PRIORITY MAIL EXPRESS", "PRIORITY MAIL EXPRESS COMMERCIAL",
    "RETAIL GROUND", "MEDIA", "LIBRARY",
})

CONTAINERS: dict[str, str] = {
    "variable": "VARIABLE",
    "rectangular": "RECTANGULAR",
    "nonrectangular": "NONRECTANGULAR",
    "flat_rate_envelope": "FLAT RATE ENVELOPE",
    "legal_flat_rate_envelope": "LEGAL FLAT RATE ENVELOPE",
    "padded_flat_rate_envelope": "PADDED FLAT RATE ENVELOPE",
    "gift_card_flat_rate_envelope": "GIFT CARD FLAT RATE ENVELOPE",
    "window_flat_rate_envelope": "WINDOW FLAT RATE ENVELOPE",
    "small_flat_rate_envelope": "SM FLAT RATE ENVELOPE",
    "small_flat_rate_box": "SM FLAT RATE BOX",
    "medium_flat_rate_box": "MD FLAT RATE BOX",
    "large_flat_rate_box": "LG FLAT RATE BOX",
    "regional_rate_box_a": "REGIONALRATEBOXA",
    "regional_rate_box_b": "REGIONALRATEBOXB",
    "regional_rate_box_c": "REGIONALRATEBOXC",
}

DEFAULT_BOX_NAME = "variable"

FIRST_CLASS_MAIL_TYPES: dict[str, str] = {
    "letter": "LETTER",
    "flat": "FLAT",
    "parcel": "PARCEL",
    "post_card": "POSTCARD",
}

DEFAULT_FIRST_CLASS_MAIL_TYPE = "parcel"

# ---------------------------------------------------------------------------
# MailService text patterns
# ---------------------------------------------------------------------------

# Checked in order: more specific names before the plain envelope
BOX_NAME_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("legal_flat_rate_envelope", re.compile(r"Legal Flat Rate Envelope", re.I)),
    ("padded_flat_rate_envelope", re.compile(r"Padded Flat Rate Envelope", re.I)),
    ("gift_card_flat_rate_envelope", re.compile(r"Gift Card Flat Rate Envelope", re.I)),
    ("window_flat_rate_envelope", re.compile(r"Window Flat Rate Envelope", re.I)),
    ("small_flat_rate_envelope", re.compile(r"Small Flat Rate Envelope", re.I)),
    ("flat_rate_envelope", re.compile(r"Flat Rate Envelope", re.I)),
    ("small_flat_rate_box", re.compile(r"Small Flat Rate Box", re.I)),
    ("medium_flat_rate_box", re.compile(r"Medium Flat Rate Box", re.I)),
    ("large_flat_rate_box", re.compile(r"Large Flat Rate Box", re.I)),
    ("regional_rate_box_a", re.compile(r"Regional Rate Box A", re.I)),
    ("regional_rate_box_b", re.compile(r"Regional Rate Box B", re.I)),
    ("regional_rate_box_c", re.compile(r"Regional Rate Box C", re.I)),
)

FIRST_CLASS_MAIL_TYPE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("letter", re.compile(r"\bLetter\b", re.I)),
    ("flat", re.compile(r"Large Envelope|\bFlat\b", re.I)),
    ("post_card", re.compile(r"Postcards?", re.I)),
    ("parcel", re.compile(r"Package Service|Parcel", re.I)),
)

HOLD_FOR_PICKUP_PATTERN = re.compile(r"Hold For Pickup", re.I)
DAYS_TO_DELIVERY_PATTERN = re.compile(r"(\d+)-Day", re.I)
MILITARY_PATTERN = re.compile(r"Military", re.I)


def box_name_for_service(service_name: str) -> str:
    """Box name a MailService price applies to; "variable" if unbranded."""
    for box_name, pattern in BOX_NAME_PATTERNS:
        if pattern.search(service_name):
            return box_name
    return DEFAULT_BOX_NAME


def first_class_mail_type_for_service(service_name: str) -> str | None:
    for mail_type, pattern in FIRST_CLASS_MAIL_TYPE_PATTERNS:
        if pattern.search(service_name):
            return mail_type
    return None
