"""Carrier-neutral domain model."""

from shipbridge.models.api import ApiFailure, ApiResult, Request, Response
from shipbridge.models.money import Money, sum_money
from shipbridge.models.physical import (
    Container,
    Dimensions,
    Item,
    Location,
    Package,
    Shipment,
    Weight,
)
from shipbridge.models.shipping import Carrier, Label, Rate, ShippingMethod, VoidResult

__all__ = [
    # Physical
    "Container",
    "Dimensions",
    "Item",
    "Location",
    "Package",
    "Shipment",
    "Weight",
    # Money
    "Money",
    "sum_money",
    # Shipping
    "Carrier",
    "Label",
    "Rate",
    "ShippingMethod",
    "VoidResult",
    # API envelopes
    "ApiFailure",
    "ApiResult",
    "Request",
    "Response",
]
