"""Physical shipment model: locations, items, packages, shipments.

All models are frozen pydantic models. They are built fresh per call and
never mutated afterwards.
"""

import uuid
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from shipbridge.models.money import Money

WeightUnit = Literal["lbs", "oz", "kg", "g"]
LengthUnit = Literal["in", "cm"]

# Pounds per one unit of each weight unit
_POUNDS_PER_UNIT: dict[str, Decimal] = {
    "lbs": Decimal("1"),
    "oz": Decimal("0.0625"),
    "kg": Decimal("2.20462262185"),
    "g": Decimal("0.00220462262185"),
}
OUNCES_PER_POUND = Decimal("16")
_INCHES_PER_UNIT: dict[str, Decimal] = {
    "in": Decimal("1"),
    "cm": Decimal("0.3937007874"),
}


def _new_id() -> str:
    return uuid.uuid4().hex


class Weight(BaseModel):
    """A weight value with its unit."""

    model_config = ConfigDict(frozen=True)

    value: Decimal = Decimal("0")
    unit: WeightUnit = "lbs"

    def to_pounds(self) -> Decimal:
        return self.value * _POUNDS_PER_UNIT[self.unit]

    def to_ounces(self) -> Decimal:
        return self.to_pounds() * OUNCES_PER_POUND

    def __add__(self, other: "Weight") -> "Weight":
        if not isinstance(other, Weight):
            return NotImplemented
        if other.unit == self.unit:
            return Weight(value=self.value + other.value, unit=self.unit)
        return Weight(value=self.to_pounds() + other.to_pounds(), unit="lbs")


class Dimensions(BaseModel):
    """Box or pallet dimensions."""

    model_config = ConfigDict(frozen=True)

    length: Decimal
    width: Decimal
    height: Decimal
    unit: LengthUnit = "in"

    def to_inches(self) -> tuple[Decimal, Decimal, Decimal]:
        factor = _INCHES_PER_UNIT[self.unit]
        return (self.length * factor, self.width * factor, self.height * factor)


class Location(BaseModel):
    """A postal address with the contact attached to it.

    Attributes:
        name: Personal (contact) name.
        company_name: Company name. Carriers that accept a single name
            field prefer this over ``name``.
        region: State or province code.
        zip: Postal code.
        country: ISO 3166 alpha-2 country code.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    company_name: str | None = None
    address1: str | None = None
    address2: str | None = None
    address3: str | None = None
    city: str | None = None
    region: str | None = None
    zip: str | None = None
    country: str = "US"
    phone: str | None = None
    email: str | None = None
    residential: bool = False

    @property
    def address_lines(self) -> list[str]:
        return [line for line in (self.address1, self.address2, self.address3) if line]

    @property
    def display_name(self) -> str | None:
        """Company name when present, personal name otherwise."""
        return self.company_name or self.name


class Container(BaseModel):
    """The box or pallet a package travels in.

    Attributes:
        box_name: Carrier-neutral box identifier (e.g. "regional_rate_box_a").
        weight: Tare weight added to the package weight.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    box_name: str = "variable"
    dimensions: Dimensions | None = None
    weight: Weight = Weight()


class Item(BaseModel):
    """A single item inside a package."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    weight: Weight = Weight()
    description: str | None = None
    value: Money | None = None


class Package(BaseModel):
    """A package within a shipment.

    Weight derives from the items and container unless ``weight`` is
    given explicitly.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=_new_id)
    items: tuple[Item, ...] = ()
    container: Container = Container()
    weight_override: Weight | None = Field(default=None, alias="weight")
    description: str | None = None

    @property
    def weight(self) -> Weight:
        if self.weight_override is not None:
            return self.weight_override
        pounds = sum((item.weight.to_pounds() for item in self.items), Decimal("0"))
        return Weight(value=pounds + self.container.weight.to_pounds(), unit="lbs")

    @property
    def dimensions(self) -> Dimensions | None:
        return self.container.dimensions


class Shipment(BaseModel):
    """Origin, destination and an ordered sequence of packages."""

    model_config = ConfigDict(frozen=True)

    origin: Location
    destination: Location
    packages: tuple[Package, ...] = ()

    @model_validator(mode="after")
    def _unique_package_ids(self) -> "Shipment":
        seen: set[str] = set()
        for package in self.packages:
            if package.id in seen:
                raise ValueError(f"Duplicate package id '{package.id}' in shipment")
            seen.add(package.id)
        return self

    def package_index(self, package_id: str) -> int:
        for index, package in enumerate(self.packages):
            if package.id == package_id:
                return index
        raise KeyError(package_id)
