"""Option models for UPS parcel rate requests."""

from pydantic import BaseModel, ConfigDict

from shipbridge.models.physical import Location


class RateOptions(BaseModel):
    """Options for a UPS rate (shop) request.

    Attributes:
        shipper_number: UPS account number, required for negotiated rates.
        shipper: Account holder address; defaults to the shipment origin.
        negotiated_rates: Ask UPS for account-specific negotiated rates.
        access_license_number: UPS XML access key. When set, an
            AccessRequest document is prepended to the request body.
    """

    model_config = ConfigDict(frozen=True)

    shipper_number: str | None = None
    shipper: Location | None = None
    negotiated_rates: bool = False
    customer_context: str | None = None
    access_license_number: str | None = None
    user_id: str | None = None
    password: str | None = None
