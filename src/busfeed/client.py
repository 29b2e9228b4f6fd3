"""High-level async client for the NextBus vehicle-locations feed."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import aiohttp

from busfeed._api import vehicle_locations as _vehicle_api
from busfeed._transport import HttpTransport, Transport
from busfeed.config import FeedConfig
from busfeed.exceptions import BusFeedError
from busfeed.models.subscription import RouteSubscription
from busfeed.models.vehicle import VehicleRecord


class NextBusClient:
    """Async client for the NextBus vehicle-locations feed.

    Usage::

        async with NextBusClient(config) as client:
            vehicles = await client.get_vehicle_locations()

    A custom *transport* replaces HTTP entirely (used by tests and
    alternative providers); otherwise an aiohttp session is created
    on entry unless one is passed in.
    """

    def __init__(
        self,
        config: FeedConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._custom_transport = transport
        self._transport: Transport | None = transport
        self._clock = clock or _vehicle_api._now_ms

    @property
    def config(self) -> FeedConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> NextBusClient:
        if self._custom_transport is not None:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = self._custom_transport

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise BusFeedError("Client not initialized. Use 'async with NextBusClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Read endpoints
    # ------------------------------------------------------------------

    async def get_vehicle_locations(
        self,
        subscriptions: Sequence[RouteSubscription] | None = None,
    ) -> list[VehicleRecord]:
        """Fetch vehicles for *subscriptions* (default: the configured routes).

        Raises
        ------
        BusFeedTransportError
            If any route request fails; no partial results are returned.
        """
        transport = self._require_transport()
        subs = self._config.subscriptions if subscriptions is None else subscriptions
        return await _vehicle_api.fetch_vehicle_locations(self._config, transport, subs, clock=self._clock)
