"""ShipEngine service facade over httpx.

Builds requests with the serializers, sends them through an injected
``httpx.Client`` and parses the answers. Nothing here raises for
carrier or transport problems: every call returns ``Success`` or
``Failure(ApiFailure)``.
"""

import logging
from typing import TYPE_CHECKING, Any

import httpx

from shipbridge.models.api import ApiFailure, ApiResult, Request, Response
from shipbridge.models.physical import Shipment
from shipbridge.models.shipping import Carrier, Label, Rate, VoidResult
from shipbridge.result import Failure, Result, Success
from shipbridge.services.ship_engine.codes import API_KEY_HEADER, BASE_URL
from shipbridge.services.ship_engine.options import LabelOptions, RateEstimatesOptions
from shipbridge.services.ship_engine.parsers import (
    parse_carrier_response,
    parse_label_response,
    parse_rate_estimates_response,
    parse_void_response,
)
from shipbridge.services.ship_engine.serializers import (
    build_carriers_request,
    build_label_request,
    build_rate_estimates_request,
    build_void_request,
)

if TYPE_CHECKING:
    from shipbridge.config import ShipBridgeConfig

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class ShipEngineService:
    """ShipEngine API client returning normalized results.

    Example usage:
        with ShipEngineService(api_key="TEST_...") as service:
            carriers = service.carriers().unwrap().data
            options = RateEstimatesOptions(carriers=carriers[:1])
            rates = service.rate_estimates(shipment, options)
    """

    def __init__(
        self,
        api_key: str,
        http_client: httpx.Client | None = None,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the service.

        Args:
            api_key: ShipEngine API key. Sent as a header, never exposed.
            http_client: Client to send requests with. One is created (and
                closed by :meth:`close`) when omitted.
            base_url: API root, overridable for sandboxes.
            timeout: Timeout for the client created here.
        """
        self._api_key = api_key
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout)
        self._base_url = base_url.rstrip("/")

    @classmethod
    def from_config(
        cls,
        config: "ShipBridgeConfig",
        http_client: httpx.Client | None = None,
    ) -> "ShipEngineService":
        """Build a service from the ``ship_engine`` config section.

        Raises:
            ValueError: If no API key is configured.
        """
        section = config.ship_engine
        if not section.api_key:
            raise ValueError("ship_engine.api_key is not configured")
        return cls(
            api_key=section.api_key,
            http_client=http_client,
            base_url=section.base_url,
            timeout=section.timeout,
        )

    def __repr__(self) -> str:
        return f"ShipEngineService(base_url={self._base_url!r})"

    def __enter__(self) -> "ShipEngineService":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if this service created it."""
        if self._owns_client:
            self._client.close()

    def _send(self, request: Request) -> Result[Response, ApiFailure]:
        """Send a request, adding the API key header.

        Transport errors become ``Failure(ApiFailure)``.
        """
        headers = {**request.headers, API_KEY_HEADER: self._api_key}
        logger.info("ShipEngine %s %s", request.http_method, request.url)
        try:
            http_response = self._client.request(
                request.http_method,
                request.url,
                content=request.body,
                headers=headers,
            )
        except httpx.HTTPError as e:
            logger.warning("ShipEngine request to %s failed: %s", request.url, e)
            return Failure(ApiFailure.build(f"Request failed: {e}", request, None))
        return Success(
            Response(
                status=http_response.status_code,
                body=http_response.text,
                headers=dict(http_response.headers),
            )
        )

    def carriers(self, debug: bool = False) -> Result[ApiResult[list[Carrier]], ApiFailure]:
        """List the carrier accounts connected to this API key."""
        request = build_carriers_request(debug=debug, base_url=self._base_url)
        return self._send(request).bind(lambda response: parse_carrier_response(request, response))

    def rate_estimates(
        self,
        shipment: Shipment,
        options: RateEstimatesOptions,
        debug: bool = False,
    ) -> Result[ApiResult[list[Rate]], ApiFailure]:
        """Estimate rates for a shipment with the given carriers."""
        request = build_rate_estimates_request(shipment, options, debug=debug, base_url=self._base_url)
        return self._send(request).bind(
            lambda response: parse_rate_estimates_response(request, response, options)
        )

    def labels(
        self,
        shipment: Shipment,
        options: LabelOptions,
        debug: bool = False,
    ) -> Result[ApiResult[list[Label]], ApiFailure]:
        """Purchase labels for a shipment."""
        request = build_label_request(shipment, options, debug=debug, base_url=self._base_url)
        return self._send(request).bind(
            lambda response: parse_label_response(request, response, options)
        )

    def void(self, label: Label, debug: bool = False) -> Result[ApiResult[VoidResult], ApiFailure]:
        """Void a previously purchased label."""
        request = build_void_request(label, debug=debug, base_url=self._base_url)
        return self._send(request).bind(lambda response: parse_void_response(request, response))
