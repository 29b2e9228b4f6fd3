"""busfeed - Async NextBus vehicle feed: closest vehicle in each direction."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("busfeed")
except PackageNotFoundError:
    __version__ = "0+local"
from busfeed.client import NextBusClient
from busfeed.config import FeedConfig
from busfeed.display import DisplaySink, LoggingDisplay, TextDisplay
from busfeed.exceptions import BusFeedConfigError, BusFeedError, BusFeedTransportError
from busfeed.geo import annotate, compute
from busfeed.ingestion.nextbus import parse_vehicle_locations
from busfeed.models import (
    HEADING_LABELS,
    AnnotatedVehicle,
    GeoVector,
    HeadingLabel,
    Position,
    RouteSubscription,
    VehicleRecord,
)
from busfeed.position import PositionProvider, PositionTracker
from busfeed.refresh import CycleResult, LoopState, RefreshLoop
from busfeed.render import render_vehicles
from busfeed.selection import select_by_heading

__all__ = [
    "__version__",
    "AnnotatedVehicle",
    "BusFeedConfigError",
    "BusFeedError",
    "BusFeedTransportError",
    "CycleResult",
    "DisplaySink",
    "FeedConfig",
    "GeoVector",
    "HEADING_LABELS",
    "HeadingLabel",
    "LoggingDisplay",
    "LoopState",
    "NextBusClient",
    "Position",
    "PositionProvider",
    "PositionTracker",
    "RefreshLoop",
    "RouteSubscription",
    "TextDisplay",
    "VehicleRecord",
    "annotate",
    "compute",
    "parse_vehicle_locations",
    "render_vehicles",
    "select_by_heading",
]
