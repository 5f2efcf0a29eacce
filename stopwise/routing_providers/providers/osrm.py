"""Mini README: OSRM-backed routing provider.

Structure:
    * OSRM_PROFILES - travel mode to OSRM profile name.
    * OSRMProvider - resolves legs with the OSRM ``/route`` service over an
      ``httpx.AsyncClient``.

OSRM expects ``lon,lat`` pairs. ``NoRoute``/``NoSegment`` answers become
``NoRouteFound``; any other non-``Ok`` code or malformed payload becomes
``RoutingProviderError``. Timeouts, connection failures and 5xx responses are
retried with exponential backoff up to ``max_retries`` times; 4xx responses
are not retried.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

import httpx

from ...configuration import StopwiseSettings
from ...logging_utils import get_logger
from ...sequencing.errors import NoRouteFound, RoutingProviderError
from ...sequencing.models import Coordinate, LegEstimate, TravelMode
from ..base import RoutingProvider
from ..registry import REGISTRY

LOGGER = get_logger(__name__)

OSRM_PROFILES: Dict[TravelMode, str] = {
    TravelMode.DRIVING: "driving",
    TravelMode.WALKING: "foot",
}
NO_ROUTE_CODES = {"NoRoute", "NoSegment"}


@REGISTRY.register
class OSRMProvider(RoutingProvider):
    """Resolve legs against an OSRM HTTP server."""

    provider_name = "osrm"

    def __init__(
        self,
        *,
        settings: Optional[StopwiseSettings] = None,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        max_retries: Optional[int] = None,
        backoff_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(settings=settings)
        self.base_url = (base_url or self.settings.osrm_base_url).rstrip("/")
        if not self.base_url:
            raise ValueError("OSRM base URL is not configured.")
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else self.settings.osrm_timeout_seconds
        )
        self.max_retries = max_retries if max_retries is not None else self.settings.osrm_max_retries
        self.backoff_seconds = (
            backoff_seconds if backoff_seconds is not None else self.settings.osrm_backoff_seconds
        )
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout_seconds, connect=min(self.timeout_seconds, 5.0)),
                transport=self._transport,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def route_url(self, origin: Coordinate, destination: Coordinate, mode: TravelMode) -> str:
        """Build the ``/route/v1`` URL for a single leg."""

        coordinates = ";".join(
            f"{point.longitude:.6f},{point.latitude:.6f}" for point in (origin, destination)
        )
        return f"{self.base_url}/route/v1/{OSRM_PROFILES[mode]}/{coordinates}"

    async def _get(self, url: str) -> httpx.Response:
        client = self._get_client()
        attempt = 0
        while True:
            try:
                response = await client.get(
                    url, params={"overview": "false", "alternatives": "false", "steps": "false"}
                )
                if response.status_code < 500:
                    return response
                failure: Exception = RoutingProviderError(
                    f"OSRM server error {response.status_code} for {url}"
                )
            except httpx.TransportError as error:
                failure = RoutingProviderError(f"OSRM request to {self.base_url} failed: {error}")
                failure.__cause__ = error
            attempt += 1
            if attempt > self.max_retries:
                raise failure
            wait_time = self.backoff_seconds * (2 ** (attempt - 1))
            LOGGER.warning(
                "OSRM request failed (%s), retrying in %.2fs (attempt %s/%s)",
                failure,
                wait_time,
                attempt,
                self.max_retries,
            )
            await asyncio.sleep(wait_time)

    async def compute_leg(
        self, origin: Coordinate, destination: Coordinate, mode: TravelMode
    ) -> LegEstimate:
        url = self.route_url(origin, destination, mode)
        response = await self._get(url)
        try:
            payload: Dict[str, Any] = response.json()
        except ValueError as error:
            raise RoutingProviderError(
                f"OSRM returned non-JSON response ({response.status_code})"
            ) from error

        if not isinstance(payload, dict):
            raise RoutingProviderError(
                f"OSRM returned unexpected payload type {type(payload).__name__}"
            )
        code = payload.get("code")
        if code in NO_ROUTE_CODES:
            raise NoRouteFound(origin, destination, mode.value, reason=payload.get("message", code))
        if code != "Ok":
            raise RoutingProviderError(
                f"OSRM error {code or response.status_code}: {payload.get('message', 'unknown error')}"
            )
        routes = payload.get("routes") or []
        if not routes:
            raise NoRouteFound(origin, destination, mode.value, reason="empty route list")
        try:
            route = routes[0]
            estimate = LegEstimate(
                distance_meters=route["distance"], duration_seconds=route["duration"]
            )
        except (KeyError, TypeError, ValueError) as error:
            raise RoutingProviderError("OSRM route is missing distance or duration") from error
        LOGGER.debug(
            "OSRM leg %s -> %s (%s): %.0fm %.0fs",
            origin,
            destination,
            mode.value,
            estimate.distance_meters,
            estimate.duration_seconds,
        )
        return estimate

    def metadata(self) -> Dict[str, str]:
        return {"provider": self.provider_name, "base_url": self.base_url}
