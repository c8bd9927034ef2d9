"""Option models for UPS Freight label (freight ship) requests."""

from pydantic import BaseModel, ConfigDict

from shipbridge.models.physical import Item, Location, Package
from shipbridge.models.shipping import ShippingMethod
from shipbridge.services.ups_freight.codes import DEFAULT_PACKAGING


class LabelItemOptions(BaseModel):
    """Per-item freight options.

    Attributes:
        packaging: Commodity packaging symbol, looked up in PACKAGING_TYPES.
        freight_class: NMFC freight class, sent as given ("92.5").
        nmfc_code: NMFC commodity code, sent as given ("16030 sub 1").
    """

    model_config = ConfigDict(frozen=True)

    item_id: str | None = None
    packaging: str = DEFAULT_PACKAGING
    freight_class: str | None = None
    nmfc_code: str | None = None


class LabelPackageOptions(BaseModel):
    """Per-package freight options.

    ``handling_unit`` left unset means pallet.
    """

    model_config = ConfigDict(frozen=True)

    package_id: str | None = None
    handling_unit: str | None = None
    item_options: tuple[LabelItemOptions, ...] = ()

    def options_for_item(self, item: Item) -> LabelItemOptions:
        for options in self.item_options:
            if options.item_id == item.id:
                return options
        return LabelItemOptions(item_id=item.id)


class LabelOptions(BaseModel):
    """Options for a UPS Freight ship request.

    Attributes:
        shipper_number: UPS account number of the shipper.
        billing_address: Payer address; defaults to the shipment origin.
        billing: "prepaid" (default), "third_party" or "freight_collect".
        customer_context: Free text echoed back by UPS in the response.
    """

    model_config = ConfigDict(frozen=True)

    shipping_method: ShippingMethod
    shipper_number: str
    billing_address: Location | None = None
    billing: str = "prepaid"
    customer_context: str | None = None
    package_options: tuple[LabelPackageOptions, ...] = ()

    def options_for_package(self, package: Package) -> LabelPackageOptions:
        for options in self.package_options:
            if options.package_id == package.id:
                return options
        return LabelPackageOptions(package_id=package.id)
