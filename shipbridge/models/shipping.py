"""Carrier-neutral shipping results: methods, rates, labels, voids."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from shipbridge.models.money import Money, sum_money


class ShippingMethod(BaseModel):
    """A carrier service level.

    Two methods are equal when they share carrier and service code; the
    display name and country lists do not take part in equality.

    Attributes:
        carrier: Carrier identifier ("ups", "usps", or a ShipEngine carrier id).
        service_code: Carrier wire code for the service ("03", "PRIORITY").
        name: Human-readable service name.
        origin_countries: Countries this service can ship from. Empty means
            the carrier did not restrict it.
    """

    model_config = ConfigDict(frozen=True)

    carrier: str | None = None
    service_code: str
    name: str | None = None
    origin_countries: frozenset[str] = frozenset()
    domestic: bool = True
    international: bool = False
    multi_package: bool = False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ShippingMethod):
            return NotImplemented
        return (self.carrier, self.service_code) == (other.carrier, other.service_code)

    def __hash__(self) -> int:
        return hash((self.carrier, self.service_code))

    def ships_from(self, country: str) -> bool:
        return not self.origin_countries or country in self.origin_countries


class Carrier(BaseModel):
    """A carrier account as reported by an aggregator."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str | None = None
    code: str | None = None
    shipping_methods: tuple[ShippingMethod, ...] = ()
    balance: Money | None = None
    data: dict[str, Any] = Field(default_factory=dict)


class Rate(BaseModel):
    """A priced quote for one shipping method.

    Attributes:
        amounts: Amount kind ("total", "shipping", "insurance") to money.
        data: Carrier-specific extras used by rate matching
            (``box_name``, ``hold_for_pickup``, ``days_to_delivery``...).
    """

    model_config = ConfigDict(frozen=True)

    shipping_method: ShippingMethod
    amounts: dict[str, Money]
    warnings: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()
    data: dict[str, Any] = Field(default_factory=dict)

    @property
    def total_amount(self) -> Money:
        amounts = list(self.amounts.values())
        currency = amounts[0].currency if amounts else "USD"
        return sum_money(amounts, currency)


class Label(BaseModel):
    """A purchased shipping label.

    Exactly one of ``label_href`` (linked download) or ``label_data``
    (inline payload) is populated for a downloaded label; a label built
    only to be voided carries neither.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    shipment_id: str | None = None
    tracking_number: str | None = None
    service_code: str | None = None
    label_href: str | None = None
    label_data: str | bytes | None = None
    label_format: str | None = None
    cost: Money | None = None
    shipment_cost: Money | None = None
    data: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _single_payload(self) -> "Label":
        if self.label_href is not None and self.label_data is not None:
            raise ValueError("A label carries either label_href or label_data, not both")
        return self


class VoidResult(BaseModel):
    """Outcome of a label void request."""

    model_config = ConfigDict(frozen=True)

    approved: bool
    message: str = ""
