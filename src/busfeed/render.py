"""Text rendering of the selected vehicles."""

from __future__ import annotations

from collections.abc import Sequence

from busfeed._constants import NO_VEHICLES_TEXT
from busfeed.models.vehicle import AnnotatedVehicle


def format_vehicle_line(vehicle: AnnotatedVehicle, now_ms: int) -> str:
    """Format one vehicle as ``"E: 0.69 mi N (30 sec)\\n"``."""
    return (
        f"{vehicle.route_tag}: {vehicle.distance_miles:.2f} mi {vehicle.heading_label}"
        f" ({vehicle.age_seconds(now_ms)} sec)\n"
    )


def render_vehicles(vehicles: Sequence[AnnotatedVehicle], now_ms: int) -> str:
    """Render *vehicles* one per line, ages measured at *now_ms*."""
    if not vehicles:
        return NO_VEHICLES_TEXT
    return "".join(format_vehicle_line(vehicle, now_ms) for vehicle in vehicles)
