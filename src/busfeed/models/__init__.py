"""Data models for busfeed."""

from busfeed.models._base import BusFeedBaseModel
from busfeed.models.geo import HEADING_LABELS, GeoVector, HeadingLabel
from busfeed.models.position import Position
from busfeed.models.subscription import RouteSubscription
from busfeed.models.vehicle import AnnotatedVehicle, VehicleRecord

__all__ = [
    "AnnotatedVehicle",
    "BusFeedBaseModel",
    "GeoVector",
    "HEADING_LABELS",
    "HeadingLabel",
    "Position",
    "RouteSubscription",
    "VehicleRecord",
]
