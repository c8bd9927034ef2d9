"""ShipEngine test fixtures: carrier accounts and label options."""

import pytest

from shipbridge.models import Carrier, ShippingMethod
from shipbridge.services.ship_engine import LabelOptions, RateEstimatesOptions


@pytest.fixture
def stamps_carrier() -> Carrier:
    """The Stamps.com account listed in carriers.json."""
    return Carrier(
        id="se-123890",
        name="Stamps.com",
        code="stamps_com",
        shipping_methods=(
            ShippingMethod(carrier="se-123890", service_code="usps_first_class_mail", name="USPS First Class Mail"),
            ShippingMethod(carrier="se-123890", service_code="usps_priority_mail", name="USPS Priority Mail"),
        ),
    )


@pytest.fixture
def rate_options(stamps_carrier) -> RateEstimatesOptions:
    return RateEstimatesOptions(carriers=(stamps_carrier,))


@pytest.fixture
def priority_mail(stamps_carrier) -> ShippingMethod:
    return stamps_carrier.shipping_methods[1]


@pytest.fixture
def label_options(priority_mail) -> LabelOptions:
    return LabelOptions(shipping_method=priority_mail)
