"""NextBus ``vehicleLocations`` payload parsing.

The feed is XML, but only the self-closing ``<vehicle .../>`` elements
matter, so they are pulled out with patterns instead of a full XML
parse. Malformed elements are expected occasionally and are dropped
one at a time.
"""

from __future__ import annotations

import html
import logging
import re

from pydantic import ValidationError

from busfeed.models.vehicle import VehicleRecord

_logger = logging.getLogger(__name__)

_VEHICLE_RE = re.compile(r"<vehicle\s+[^>]*/\s*>")
_ATTRIBUTE_RE = re.compile(r'(\w+)="([^"]*)"')
_ERROR_RE = re.compile(r"<Error\b[^>]*>(.*?)</Error>", re.DOTALL)


def parse_attributes(element: str) -> dict[str, str]:
    """Collect the ``key="value"`` pairs of one element, unescaping entities."""
    return {key: html.unescape(value) for key, value in _ATTRIBUTE_RE.findall(element)}


def parse_vehicle_locations(raw: str, fetched_at_ms: int) -> list[VehicleRecord]:
    """Parse every vehicle element in *raw*.

    Parameters
    ----------
    raw : str
        Response body of a ``vehicleLocations`` request.
    fetched_at_ms : int
        Wall-clock epoch milliseconds when the response arrived; each
        record's ``observed_at_epoch_ms`` is derived from it.

    Returns
    -------
    list of VehicleRecord
        Records in document order. Empty when the payload has no vehicle
        elements.
    """
    vehicles: list[VehicleRecord] = []
    for element in _VEHICLE_RE.findall(raw):
        attributes = parse_attributes(element)
        try:
            vehicle = VehicleRecord.from_wire(attributes, fetched_at_ms=fetched_at_ms)
        except ValidationError as exc:
            _logger.debug("Skipping malformed vehicle element %s: %s", element[:200], exc.errors())
            continue
        vehicles.append(vehicle)
    return vehicles


def parse_error_message(raw: str) -> str | None:
    """Return the text of a NextBus ``<Error>`` element, if the payload has one."""
    match = _ERROR_RE.search(raw)
    if match is None:
        return None
    message = html.unescape(match.group(1)).strip()
    return message or None
