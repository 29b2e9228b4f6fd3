"""Vehicle location models."""

from __future__ import annotations

from typing import Any

from pydantic import Field, ValidationInfo, field_validator, model_validator

from busfeed.ingestion.normalize import round_half_up, safe_bool, safe_float, safe_int, safe_str
from busfeed.models._base import BusFeedBaseModel
from busfeed.models.geo import GeoVector, HeadingLabel

_WIRE_KEYS = ("id", "routeTag", "lat", "lon", "secsSinceReport")


class VehicleRecord(BusFeedBaseModel):
    """A single vehicle report from the vehicle-locations feed.

    Parameters
    ----------
    id : str
        Provider vehicle identifier.
    route_tag : str
        Route the vehicle is serving.
    lat : float
        Latitude in degrees.
    lon : float
        Longitude in degrees.
    secs_since_report : int
        Age of the report at fetch time, in seconds. Never negative.
    observed_at_epoch_ms : int
        Epoch milliseconds when the vehicle reported its position,
        derived as fetch time minus ``secs_since_report``.
    raw : dict
        Every attribute found on the wire element.

    When validated with ``context={"fetched_at_ms": ...}``,
    ``observed_at_epoch_ms`` is always derived from the fetch time.
    Use :meth:`from_wire` to build a record from raw feed attributes.
    """

    id: str
    route_tag: str
    lat: float
    lon: float
    secs_since_report: int = Field(ge=0)
    observed_at_epoch_ms: int
    raw: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _derive_observed_at(cls, values: Any, info: ValidationInfo) -> Any:
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        merged.setdefault("raw", dict(values))
        fetched_at_ms = (info.context or {}).get("fetched_at_ms")
        if fetched_at_ms is None:
            return merged
        # The fetch time is authoritative; any timestamp already present is discarded.
        merged.pop("observedAtEpochMs", None)
        merged.pop("observed_at_epoch_ms", None)
        secs = safe_int(merged.get("secsSinceReport", merged.get("secs_since_report")))
        if secs is not None:
            merged["observedAtEpochMs"] = int(fetched_at_ms) - secs * 1000
        return merged

    @field_validator("id", "route_tag", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str | None:
        return safe_str(value)

    @field_validator("lat", "lon", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @field_validator("secs_since_report", "observed_at_epoch_ms", mode="before")
    @classmethod
    def _coerce_ints(cls, value: Any) -> int | None:
        return safe_int(value)

    @classmethod
    def from_wire(cls, attributes: dict[str, str], *, fetched_at_ms: int) -> VehicleRecord:
        """Build a record from feed attributes.

        Only the recognised wire keys bind to fields; everything else,
        including attributes that happen to share a field name, lands in
        ``raw``.

        Raises
        ------
        pydantic.ValidationError
            If a recognised attribute is missing or malformed.
        """
        values: dict[str, Any] = {key: attributes[key] for key in _WIRE_KEYS if key in attributes}
        values["raw"] = dict(attributes)
        return cls.model_validate(values, context={"fetched_at_ms": fetched_at_ms})

    @property
    def dir_tag(self) -> str | None:
        """Direction (trip pattern) tag, when the feed supplies one."""
        return safe_str(self.raw.get("dirTag"))

    @property
    def heading(self) -> int | None:
        """Reported travel heading in degrees; ``None`` when unknown (``-1``)."""
        value = safe_int(self.raw.get("heading"))
        if value is None or value < 0:
            return None
        return value

    @property
    def speed_kmh(self) -> float | None:
        return safe_float(self.raw.get("speedKmHr"))

    @property
    def predictable(self) -> bool | None:
        return safe_bool(self.raw.get("predictable"))

    def age_seconds(self, now_ms: int) -> int:
        """Whole seconds between the report and *now_ms*."""
        return round_half_up((now_ms - self.observed_at_epoch_ms) / 1000)


class AnnotatedVehicle(BusFeedBaseModel):
    """A vehicle record with its offset from the tracked position."""

    vehicle: VehicleRecord
    geo: GeoVector

    @property
    def route_tag(self) -> str:
        return self.vehicle.route_tag

    @property
    def distance_m(self) -> float:
        return self.geo.distance_m

    @property
    def distance_miles(self) -> float:
        return self.geo.distance_miles

    @property
    def heading_sector(self) -> int:
        return self.geo.heading_sector

    @property
    def heading_label(self) -> HeadingLabel:
        return self.geo.heading_label

    def age_seconds(self, now_ms: int) -> int:
        return self.vehicle.age_seconds(now_ms)
