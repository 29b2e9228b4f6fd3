"""Vehicle location endpoint.

Endpoint:
  - /service/publicXMLFeed?command=vehicleLocations (one request per route)
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Sequence
from urllib.parse import urlencode

from busfeed._constants import FEED_PATH
from busfeed._transport import Transport
from busfeed.config import FeedConfig
from busfeed.exceptions import BusFeedTransportError
from busfeed.ingestion.nextbus import parse_error_message, parse_vehicle_locations
from busfeed.models.subscription import RouteSubscription
from busfeed.models.vehicle import VehicleRecord

_logger = logging.getLogger(__name__)


def _now_ms() -> int:
    """Current epoch timestamp in milliseconds."""
    return int(time.time() * 1000)


def build_vehicle_locations_url(config: FeedConfig, subscription: RouteSubscription) -> str:
    """Build the ``vehicleLocations`` URL for one route.

    ``t=0`` asks for every vehicle report, not only those newer than a
    previous poll.
    """
    query = urlencode(
        {
            "command": "vehicleLocations",
            "a": subscription.agency,
            "t": "0",
            "r": subscription.route,
        }
    )
    return f"http://{config.provider_host}{FEED_PATH}?{query}"


async def fetch_route_vehicles(
    config: FeedConfig,
    transport: Transport,
    subscription: RouteSubscription,
    *,
    clock: Callable[[], int] = _now_ms,
) -> list[VehicleRecord]:
    """Fetch and parse vehicle locations for a single route."""
    url = build_vehicle_locations_url(config, subscription)
    raw = await transport.get_text(url)
    fetched_at_ms = clock()

    vehicles = parse_vehicle_locations(raw, fetched_at_ms)
    if not vehicles:
        message = parse_error_message(raw)
        if message:
            _logger.debug("No vehicles for %s: provider said %r", subscription, message)
    _logger.debug("Route %s: %d vehicles", subscription, len(vehicles))
    return vehicles


async def fetch_vehicle_locations(
    config: FeedConfig,
    transport: Transport,
    subscriptions: Sequence[RouteSubscription],
    *,
    clock: Callable[[], int] = _now_ms,
) -> list[VehicleRecord]:
    """Fetch every subscribed route concurrently and combine the results.

    All requests must succeed. The first transport failure cancels the
    remaining requests and is re-raised; a partial list is never
    returned.

    Parameters
    ----------
    config : FeedConfig
        Feed configuration (provider host).
    transport : Transport
        HTTP transport.
    subscriptions : sequence of RouteSubscription
        Routes to fetch.
    clock : callable
        Returns the current epoch milliseconds; read when each response
        arrives.

    Returns
    -------
    list of VehicleRecord
        Vehicles from all routes, grouped in subscription order.

    Raises
    ------
    BusFeedTransportError
        If any single request fails or times out.
    """
    if not subscriptions:
        return []

    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [
                tg.create_task(fetch_route_vehicles(config, transport, subscription, clock=clock))
                for subscription in subscriptions
            ]
    except ExceptionGroup as eg:
        transport_errors, other = eg.split(BusFeedTransportError)
        if other is not None or transport_errors is None:
            raise
        first = _first_leaf(transport_errors)
        _logger.debug("Vehicle fetch aborted after %d failed request(s)", len(transport_errors.exceptions))
        raise first from None

    combined: list[VehicleRecord] = []
    for task in tasks:
        combined.extend(task.result())
    return combined


def _first_leaf(group: BaseExceptionGroup) -> BaseException:
    exc: BaseException = group
    while isinstance(exc, BaseExceptionGroup):
        exc = exc.exceptions[0]
    return exc
