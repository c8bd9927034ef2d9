"""ShipEngine endpoints and wire constants."""

SHIP_ENGINE_CARRIER_ID = "ship_engine"

BASE_URL = "https://api.shipengine.com"
CARRIERS_PATH = "/v1/carriers"
RATE_ESTIMATES_PATH = "/v1/rates/estimate"
LABELS_PATH = "/v1/labels"
VOID_PATH = "/v1/labels/{label_id}/void"

API_KEY_HEADER = "API-Key"
CONTENT_TYPE = "application/json"

WEIGHT_UNIT = "ounce"
DIMENSION_UNIT = "inch"

LABEL_FORMATS: frozenset[str] = frozenset({"pdf", "png", "zpl"})
INLINE_DOWNLOAD_TYPE = "inline"
LABEL_DOWNLOAD_TYPES: frozenset[str] = frozenset({"url", INLINE_DOWNLOAD_TYPE})
DEFAULT_LABEL_FORMAT = "pdf"
DEFAULT_LABEL_DOWNLOAD_TYPE = "url"

# Label formats whose inline payload is text rather than binary
TEXT_LABEL_FORMATS: frozenset[str] = frozenset({"zpl"})

CONFIRMATIONS: frozenset[str] = frozenset({
    "none", "delivery", "signature", "adult_signature", "direct_signature",
})

# ShipEngine amount keys mapped to Rate.amounts keys
RATE_AMOUNT_FIELDS: dict[str, str] = {
    "shipping_amount": "shipping",
    "insurance_amount": "insurance",
    "confirmation_amount": "confirmation",
    "other_amount": "other",
}

MAX_LABEL_MESSAGES = 3
