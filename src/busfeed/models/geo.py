"""Planar distance/heading model."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field, model_validator

from busfeed.models._base import BusFeedBaseModel


class HeadingLabel(StrEnum):
    """Compass label for each 45 degree sector, in sector order.

    Sector 0 is east and sectors advance counter-clockwise, matching
    ``atan2(dy, dx)``.
    """

    E = "E"
    NE = "NE"
    N = "N"
    NW = "NW"
    W = "W"
    SW = "SW"
    S = "S"
    SE = "SE"

    @classmethod
    def for_sector(cls, sector: int) -> HeadingLabel:
        return HEADING_LABELS[sector]


HEADING_LABELS: tuple[HeadingLabel, ...] = tuple(HeadingLabel)


class GeoVector(BusFeedBaseModel):
    """Offset from a reference point to a vehicle.

    Parameters
    ----------
    dx_m : float
        Eastward offset in meters.
    dy_m : float
        Northward offset in meters.
    distance_m : float
        Straight-line distance in meters.
    distance_miles : float
        Straight-line distance in statute miles.
    bearing_radians : float
        ``atan2(dy_m, dx_m)``; counter-clockwise from east.
    heading_sector : int
        Index into :data:`HEADING_LABELS`.
    heading_label : HeadingLabel
        Compass label for ``heading_sector``.
    """

    dx_m: float
    dy_m: float
    distance_m: float = Field(ge=0.0)
    distance_miles: float = Field(ge=0.0)
    bearing_radians: float
    heading_sector: int = Field(ge=0, lt=len(HEADING_LABELS))
    heading_label: HeadingLabel

    @model_validator(mode="after")
    def _label_matches_sector(self) -> GeoVector:
        if HEADING_LABELS[self.heading_sector] != self.heading_label:
            raise ValueError(f"heading_label {self.heading_label} does not match sector {self.heading_sector}")
        return self
