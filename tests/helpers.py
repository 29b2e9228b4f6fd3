from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from busfeed.exceptions import BusFeedTransportError
from busfeed.models.geo import HEADING_LABELS, GeoVector
from busfeed.models.vehicle import AnnotatedVehicle, VehicleRecord

FETCHED_AT_MS = 1_700_000_000_000


def vehicle_xml(
    vehicle_id: str = "1",
    route_tag: str = "E",
    lat: str = "37.8817",
    lon: str = "-122.2728",
    secs: str = "30",
) -> str:
    return (
        f'<vehicle id="{vehicle_id}" routeTag="{route_tag}" dirTag="E____O_F00" lat="{lat}" lon="{lon}"'
        f' secsSinceReport="{secs}" predictable="true" heading="90" speedKmHr="12"/>'
    )


def feed_xml(*vehicles: str) -> str:
    body = "\n".join(vehicles)
    return (
        '<?xml version="1.0" encoding="utf-8" ?>\n'
        '<body copyright="All data copyright AC Transit 2026.">\n'
        f"{body}\n"
        '<lastTime time="1700000000000"/>\n'
        "</body>\n"
    )


def make_annotated(
    vehicle_id: str,
    sector: int,
    distance_m: float,
    route_tag: str = "E",
    observed_at_ms: int = FETCHED_AT_MS,
) -> AnnotatedVehicle:
    vehicle = VehicleRecord(
        id=vehicle_id,
        route_tag=route_tag,
        lat=0.0,
        lon=0.0,
        secs_since_report=0,
        observed_at_epoch_ms=observed_at_ms,
    )
    geo = GeoVector(
        dx_m=0.0,
        dy_m=0.0,
        distance_m=distance_m,
        distance_miles=distance_m * 0.000621371,
        bearing_radians=0.0,
        heading_sector=sector,
        heading_label=HEADING_LABELS[sector],
    )
    return AnnotatedVehicle(vehicle=vehicle, geo=geo)


@dataclass
class FakeTransport:
    """Maps a route (``r=`` query value) to a body, an exception, or a gate to wait on."""

    bodies: dict[str, str] = field(default_factory=dict)
    errors: dict[str, Exception] = field(default_factory=dict)
    gates: dict[str, asyncio.Event] = field(default_factory=dict)
    urls: list[str] = field(default_factory=list)
    cancelled: list[str] = field(default_factory=list)

    async def get_text(self, url: str) -> str:
        self.urls.append(url)
        route = url.rsplit("r=", 1)[-1]
        gate = self.gates.get(route)
        if gate is not None:
            try:
                await gate.wait()
            except asyncio.CancelledError:
                self.cancelled.append(route)
                raise
        error = self.errors.get(route)
        if error is not None:
            raise error
        return self.bodies.get(route, feed_xml())


def transport_error(route: str) -> BusFeedTransportError:
    return BusFeedTransportError(f"HTTP 503 for route {route}", status_code=503, url=f"http://test?r={route}")
