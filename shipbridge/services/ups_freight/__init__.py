"""UPS Freight (LTL) integration: freight ship requests and labels."""

from shipbridge.services.ups_freight.generate_freight_ship_request import (
    build_freight_ship_request,
    generate_freight_ship_request_hash,
)
from shipbridge.services.ups_freight.options import (
    LabelItemOptions,
    LabelOptions,
    LabelPackageOptions,
)
from shipbridge.services.ups_freight.parse_freight_label_response import (
    parse_freight_label_response,
)
from shipbridge.services.ups_freight.shipment_information import (
    ShipmentDocument,
    ShipmentInformation,
)

__all__ = [
    "LabelItemOptions",
    "LabelOptions",
    "LabelPackageOptions",
    "ShipmentDocument",
    "ShipmentInformation",
    "build_freight_ship_request",
    "generate_freight_ship_request_hash",
    "parse_freight_label_response",
]
