"""Root-level pytest fixtures for all tests.

Provides shared fixtures:
- Origin/destination locations and simple shipments
- Fixture file loading (carrier XML/JSON samples under tests/fixtures)
- Transport response construction
"""

from collections.abc import Callable
from decimal import Decimal
from pathlib import Path

import pytest

from shipbridge.models import (
    Container,
    Item,
    Location,
    Package,
    Request,
    Response,
    Shipment,
    Weight,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def read_fixture(relative_path: str) -> str:
    """Read a fixture file as text."""
    return (FIXTURES_DIR / relative_path).read_text(encoding="utf-8")


# ============================================================================
# Locations and shipments
# ============================================================================


@pytest.fixture
def origin() -> Location:
    """Shipper location in Richmond, VA."""
    return Location(
        company_name="Developer Test 1",
        address1="01 Developer Way",
        city="Richmond",
        zip="23224",
        region="VA",
        country="US",
    )


@pytest.fixture
def destination() -> Location:
    """Consignee location in Allanton, MO."""
    return Location(
        company_name="Consignee Test 1",
        address1="000 Consignee Street",
        city="Allanton",
        zip="63025",
        region="MO",
        country="US",
    )


@pytest.fixture
def make_package() -> Callable[..., Package]:
    """Factory for packages holding one item of the given weight."""

    def _make(
        package_id: str = "0",
        pounds: str = "1",
        box_name: str = "variable",
        description: str | None = None,
    ) -> Package:
        return Package(
            id=package_id,
            items=(
                Item(
                    id=f"{package_id}-item",
                    weight=Weight(value=Decimal(pounds), unit="lbs"),
                    description=description,
                ),
            ),
            container=Container(box_name=box_name),
        )

    return _make


@pytest.fixture
def make_shipment(origin, destination) -> Callable[..., Shipment]:
    """Factory for shipments between the origin and destination fixtures."""

    def _make(*packages: Package) -> Shipment:
        return Shipment(origin=origin, destination=destination, packages=packages)

    return _make


@pytest.fixture
def shipment(make_shipment, make_package) -> Shipment:
    """A one-package shipment."""
    return make_shipment(make_package())


# ============================================================================
# Transport
# ============================================================================


@pytest.fixture
def request_stub() -> Request:
    """A minimal request for parser tests."""
    return Request(url="http://www.example.com")


@pytest.fixture
def fixture_response() -> Callable[..., Response]:
    """Build a transport Response from a fixture file."""

    def _make(relative_path: str, status: int = 200) -> Response:
        return Response(status=status, body=read_fixture(relative_path))

    return _make
