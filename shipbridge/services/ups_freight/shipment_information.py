"""Results of a booked UPS Freight shipment."""

from pydantic import BaseModel, ConfigDict

from shipbridge.models.money import Money
from shipbridge.models.shipping import ShippingMethod


class ShipmentDocument(BaseModel):
    """A document (label, bill of lading) returned for a freight shipment."""

    model_config = ConfigDict(frozen=True)

    document_type: str
    format: str
    binary: bytes


class ShipmentInformation(BaseModel):
    """Booking confirmation for a freight shipment.

    Attributes:
        number: UPS shipment number.
        bol_id: Bill of lading identifier.
        pickup_request_number: Confirmation number when a pickup was booked.
        warnings: Alert descriptions UPS attached to the booking.
    """

    model_config = ConfigDict(frozen=True)

    total: Money | None
    bol_id: str | None
    number: str | None
    pickup_request_number: str | None = None
    documents: tuple[ShipmentDocument, ...] = ()
    shipping_method: ShippingMethod | None = None
    warnings: tuple[str, ...] = ()
