"""Geographic position model."""

from __future__ import annotations

from pydantic import Field

from busfeed.models._base import BusFeedBaseModel


class Position(BusFeedBaseModel):
    """A latitude/longitude pair in decimal degrees.

    Parameters
    ----------
    latitude : float
        Latitude in degrees, ``-90`` to ``90``.
    longitude : float
        Longitude in degrees, ``-180`` to ``180``.
    """

    latitude: float = Field(ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float = Field(ge=-180.0, le=180.0, allow_inf_nan=False)
