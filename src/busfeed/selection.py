"""Closest-vehicle-per-direction selection.

Vehicles are walked nearest first. Each pick claims its own heading
sector and both neighbours, so a bus looping nearby in an adjacent
direction does not crowd out a vehicle on the far side.
"""

from __future__ import annotations

from collections.abc import Sequence

from busfeed._constants import SECTOR_COUNT
from busfeed.models.vehicle import AnnotatedVehicle


def select_by_heading(
    vehicles: Sequence[AnnotatedVehicle],
    max_results: int = SECTOR_COUNT,
) -> list[AnnotatedVehicle]:
    """Return the closest vehicle in each uncovered heading band.

    Parameters
    ----------
    vehicles : sequence of AnnotatedVehicle
        Candidates in any order; ties on distance keep this order.
    max_results : int
        Upper bound on the number of vehicles returned.

    Returns
    -------
    list of AnnotatedVehicle
        Ascending by distance, no two sharing a sector.

    Raises
    ------
    ValueError
        If *max_results* is negative.
    """
    if max_results < 0:
        raise ValueError(f"max_results must be >= 0, got {max_results}")

    covered = [False] * SECTOR_COUNT
    closest: list[AnnotatedVehicle] = []
    for vehicle in sorted(vehicles, key=lambda v: v.distance_m):
        sector = vehicle.heading_sector
        if covered[sector]:
            continue
        covered[sector] = True
        covered[(sector + 1) % SECTOR_COUNT] = True
        covered[(sector + SECTOR_COUNT - 1) % SECTOR_COUNT] = True
        closest.append(vehicle)
        if all(covered):
            break
    return closest[:max_results]
