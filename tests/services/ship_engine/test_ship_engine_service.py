"""Tests for the ShipEngine service facade using httpx.MockTransport."""

import json

import httpx
import pytest

from shipbridge.config import ShipBridgeConfig, ShipEngineConfig
from shipbridge.models import Label
from shipbridge.services.ship_engine import LabelOptions, LabelPackageOptions, ShipEngineService


class RecordingTransport:
    """Serve canned responses and remember the requests that were sent."""

    def __init__(self, status: int = 200, body: str = "{}"):
        self.status = status
        self.body = body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status, text=self.body)


def _service(transport: RecordingTransport, api_key: str = "TEST_key") -> ShipEngineService:
    client = httpx.Client(transport=httpx.MockTransport(transport))
    return ShipEngineService(api_key=api_key, http_client=client)


@pytest.fixture
def recording(fixture_response):
    """Factory for a RecordingTransport serving a fixture file."""

    def _make(relative_path: str, status: int = 200) -> RecordingTransport:
        return RecordingTransport(status=status, body=fixture_response(relative_path).text)

    return _make


class TestApiKey:
    """The API key travels as a header and nowhere else."""

    def test_header_is_sent(self, recording):
        transport = recording("ship_engine/carriers.json")

        _service(transport).carriers()

        assert transport.requests[0].headers["API-Key"] == "TEST_key"
        assert transport.requests[0].url == "https://api.shipengine.com/v1/carriers"

    def test_key_is_not_exposed(self):
        service = _service(RecordingTransport())

        assert "TEST_key" not in repr(service)
        assert not hasattr(service, "api_key")

    def test_debug_request_does_not_hold_the_key(self, recording):
        transport = recording("ship_engine/carriers.json")

        result = _service(transport).carriers(debug=True)

        assert result.value.original_request is not None
        assert "API-Key" not in result.value.original_request.headers
        assert result.value.original_response.status == 200

    def test_unauthorized(self, recording):
        transport = recording("ship_engine/unauthorized.json", status=401)

        result = _service(transport, api_key="bad").carriers()

        assert result.is_failure()
        assert str(result.failure) == "401 Unauthorized"


class TestRateEstimates:
    def test_rate_estimates(self, recording, shipment, rate_options):
        transport = recording("ship_engine/rate_estimates.json")

        result = _service(transport).rate_estimates(shipment, rate_options)

        assert result.is_success()
        assert len(result.value.data) == 2
        sent = transport.requests[0]
        assert sent.method == "POST"
        assert sent.url == "https://api.shipengine.com/v1/rates/estimate"
        assert json.loads(sent.content)["carrier_ids"] == ["se-123890"]


class TestLabels:
    def test_linked_label(self, recording, shipment, label_options):
        transport = recording("ship_engine/label_url.json")

        result = _service(transport).labels(shipment, label_options)

        assert result.value.data[0].tracking_number == "9405511899223197428490"

    def test_inline_zpl_label(self, recording, shipment, priority_mail):
        transport = recording("ship_engine/label_inline_zpl.json")
        options = LabelOptions(shipping_method=priority_mail, label_format="zpl", label_download_type="inline")

        result = _service(transport).labels(shipment, options)

        assert result.value.data[0].label_data.startswith("^XA")
        assert json.loads(transport.requests[0].content)["label_download_type"] == "inline"

    def test_invalid_package_code(self, recording, shipment, priority_mail):
        transport = recording("ship_engine/invalid_package_code.json", status=400)
        options = LabelOptions(
            shipping_method=priority_mail,
            package_options=(LabelPackageOptions(package_id="0", package_code="shoe_box"),),
        )

        result = _service(transport).labels(shipment, options)

        assert result.is_failure()
        assert str(result.failure) == "Invalid package_code 'shoe_box' for carrier se-123890."


class TestVoid:
    def test_void_approved(self, recording):
        transport = recording("ship_engine/void_approved.json")

        result = _service(transport).void(Label(id="se-123456"))

        assert result.is_success()
        sent = transport.requests[0]
        assert sent.method == "PUT"
        assert sent.url == "https://api.shipengine.com/v1/labels/se-123456/void"

    def test_void_refused(self, recording):
        transport = recording("ship_engine/void_refused.json")

        result = _service(transport).void(Label(id="se-123456"))

        assert result.is_failure()
        assert str(result.failure) == "This label is already voided."


class TestTransportErrors:
    def test_connection_error_is_a_failure(self):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = httpx.Client(transport=httpx.MockTransport(refuse))
        service = ShipEngineService(api_key="TEST_key", http_client=client)

        result = service.carriers()

        assert result.is_failure()
        assert str(result.failure).startswith("Request failed:")


class TestFromConfig:
    def test_builds_from_config(self, recording):
        config = ShipBridgeConfig(ship_engine=ShipEngineConfig(api_key="TEST_cfg", base_url="https://sandbox.test/"))
        transport = recording("ship_engine/carriers.json")
        client = httpx.Client(transport=httpx.MockTransport(transport))

        with ShipEngineService.from_config(config, http_client=client) as service:
            service.carriers()

        assert transport.requests[0].url == "https://sandbox.test/v1/carriers"
        assert transport.requests[0].headers["API-Key"] == "TEST_cfg"

    def test_missing_api_key(self):
        with pytest.raises(ValueError):
            ShipEngineService.from_config(ShipBridgeConfig())
