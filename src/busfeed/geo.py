"""Flat-earth distance and heading between two nearby points.

Uses an equirectangular approximation: good to within a fraction of a
percent over a few miles, but wrong near the poles and across the
antimeridian.
"""

from __future__ import annotations

import math

from busfeed._constants import EARTH_CIRCUMFERENCE_M, MILES_PER_METER, SECTOR_COUNT
from busfeed.ingestion.normalize import round_half_up
from busfeed.models.geo import GeoVector, HeadingLabel
from busfeed.models.position import Position
from busfeed.models.vehicle import AnnotatedVehicle, VehicleRecord


def heading_sector(bearing_radians: float) -> int:
    """Map a bearing (counter-clockwise from east) to a sector in ``[0, 8)``."""
    return (round_half_up(bearing_radians * 4 / math.pi) + SECTOR_COUNT) % SECTOR_COUNT


def compute(from_lat: float, from_lon: float, to_lat: float, to_lon: float) -> GeoVector:
    """Return the offset from ``(from_lat, from_lon)`` to ``(to_lat, to_lon)``.

    Identical points give distance 0 and ``atan2(0, 0) == 0``, i.e. sector 0 (``E``).
    """
    dy_m = (to_lat - from_lat) * EARTH_CIRCUMFERENCE_M / 360
    dx_m = (to_lon - from_lon) * math.cos(math.radians(from_lat)) * EARTH_CIRCUMFERENCE_M / 360
    distance_m = math.sqrt(dx_m * dx_m + dy_m * dy_m)
    bearing = math.atan2(dy_m, dx_m)
    sector = heading_sector(bearing)
    return GeoVector(
        dx_m=dx_m,
        dy_m=dy_m,
        distance_m=distance_m,
        distance_miles=distance_m * MILES_PER_METER,
        bearing_radians=bearing,
        heading_sector=sector,
        heading_label=HeadingLabel.for_sector(sector),
    )


def annotate(position: Position, vehicle: VehicleRecord) -> AnnotatedVehicle:
    """Attach the offset from *position* to *vehicle*."""
    geo = compute(position.latitude, position.longitude, vehicle.lat, vehicle.lon)
    return AnnotatedVehicle(vehicle=vehicle, geo=geo)
