"""Option models for ShipEngine rate estimates and labels."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shipbridge.models.physical import Package
from shipbridge.models.shipping import Carrier, ShippingMethod
from shipbridge.services.ship_engine.codes import (
    CONFIRMATIONS,
    DEFAULT_LABEL_DOWNLOAD_TYPE,
    DEFAULT_LABEL_FORMAT,
    LABEL_DOWNLOAD_TYPES,
    LABEL_FORMATS,
    MAX_LABEL_MESSAGES,
)


class RateEstimatesOptions(BaseModel):
    """Options for a rate estimate request.

    Attributes:
        carriers: Carrier accounts to quote, usually taken from
            ``ShipEngineService.carriers()``. Must not be empty.
        confirmation: Delivery confirmation level to price.
    """

    model_config = ConfigDict(frozen=True)

    carriers: tuple[Carrier, ...] = Field(default=(), validate_default=True)
    confirmation: str = "none"

    @field_validator("carriers")
    @classmethod
    def _require_carriers(cls, value: tuple[Carrier, ...]) -> tuple[Carrier, ...]:
        if not value:
            raise ValueError("Rate estimates need at least one carrier")
        return value

    @field_validator("confirmation")
    @classmethod
    def _known_confirmation(cls, value: str) -> str:
        if value not in CONFIRMATIONS:
            raise ValueError(f"Unknown confirmation '{value}'")
        return value

    def carrier_for_id(self, carrier_id: str | None) -> Carrier | None:
        return next((c for c in self.carriers if c.id == carrier_id), None)


class LabelPackageOptions(BaseModel):
    """Per-package label options.

    Attributes:
        package_code: Carrier package code, sent verbatim
            ("large_flat_rate_box"). The carrier validates it.
        messages: Up to three reference lines printed on the label.
    """

    model_config = ConfigDict(frozen=True)

    package_id: str | None = None
    package_code: str | None = None
    messages: tuple[str, ...] = ()

    @field_validator("messages")
    @classmethod
    def _limit_messages(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if len(value) > MAX_LABEL_MESSAGES:
            raise ValueError(f"At most {MAX_LABEL_MESSAGES} label messages are supported")
        return value


class LabelOptions(BaseModel):
    """Options for purchasing labels."""

    model_config = ConfigDict(frozen=True)

    shipping_method: ShippingMethod
    label_format: str = DEFAULT_LABEL_FORMAT
    label_download_type: str = DEFAULT_LABEL_DOWNLOAD_TYPE
    package_options: tuple[LabelPackageOptions, ...] = ()

    @field_validator("label_format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        value = value.lower()
        if value not in LABEL_FORMATS:
            raise ValueError(f"Unknown label format '{value}'")
        return value

    @field_validator("label_download_type")
    @classmethod
    def _known_download_type(cls, value: str) -> str:
        value = value.lower()
        if value not in LABEL_DOWNLOAD_TYPES:
            raise ValueError(f"Unknown label download type '{value}'")
        return value

    def options_for_package(self, package: Package) -> LabelPackageOptions:
        return next(
            (o for o in self.package_options if o.package_id == package.id),
            LabelPackageOptions(package_id=package.id),
        )
