"""Exact monetary amounts.

Carrier responses report charges as decimal strings ("2.76") or integer
cents; both are held as Decimal so values round-trip without float drift.
"""

from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_CURRENCY = "USD"
CENTS = Decimal("0.01")


class Money(BaseModel):
    """A decimal amount paired with an ISO 4217 currency code.

    Attributes:
        amount: Exact decimal amount in major units (dollars, euros).
        currency: Three-letter currency code.
    """

    model_config = ConfigDict(frozen=True)

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    @field_validator("currency")
    @classmethod
    def _upper_currency(cls, value: str) -> str:
        value = value.strip().upper()
        if len(value) != 3:
            raise ValueError(f"currency must be a 3-letter code, got '{value}'")
        return value

    @classmethod
    def from_cents(cls, cents: int, currency: str = DEFAULT_CURRENCY) -> "Money":
        """Build an amount from integer minor units."""
        return cls(amount=Decimal(cents) * CENTS, currency=currency)

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> "Money":
        return cls(amount=Decimal("0"), currency=currency)

    @property
    def cents(self) -> int:
        """Amount in minor units, rounded half-up to the cent."""
        return int((self.amount / CENTS).to_integral_value(rounding=ROUND_HALF_UP))

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        if other.currency != self.currency:
            raise ValueError(
                f"Cannot add {other.currency} to {self.currency}"
            )
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def __radd__(self, other: object) -> "Money":
        # sum() starts from int 0
        if other == 0:
            return self
        return NotImplemented

    def __str__(self) -> str:
        return f"{self.amount.quantize(CENTS)} {self.currency}"


def sum_money(amounts: list[Money], currency: str = DEFAULT_CURRENCY) -> Money:
    """Sum amounts of one currency; an empty list sums to zero."""
    if not amounts:
        return Money.zero(currency)
    return sum(amounts[1:], amounts[0])
