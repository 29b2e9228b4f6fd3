"""Feed configuration for busfeed."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pydantic import ValidationError

from busfeed._constants import DEFAULT_PROVIDER_HOST
from busfeed.exceptions import BusFeedConfigError
from busfeed.models.position import Position
from busfeed.models.subscription import RouteSubscription

DEFAULT_SUBSCRIPTIONS: tuple[RouteSubscription, ...] = (
    RouteSubscription(agency="actransit", route="E"),
    RouteSubscription(agency="actransit", route="49"),
)

DEFAULT_POSITION = Position(latitude=37.8717, longitude=-122.2728)


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise BusFeedConfigError(f"{env_key} must be a number, got {value!r}") from exc


def _env_int(env_key: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise BusFeedConfigError(f"{env_key} must be an integer, got {value!r}") from exc


def parse_subscriptions(value: str) -> tuple[RouteSubscription, ...]:
    """Parse ``"agency:route,agency:route"`` into subscriptions."""
    items = [part.strip() for part in value.split(",") if part.strip()]
    try:
        return tuple(RouteSubscription.parse(item) for item in items)
    except (ValueError, ValidationError) as exc:
        raise BusFeedConfigError(f"Invalid route list {value!r}: {exc}") from exc


@dataclasses.dataclass(frozen=True)
class FeedConfig:
    """Feed configuration.

    Parameters
    ----------
    provider_host : str
        Host serving the NextBus ``publicXMLFeed`` endpoint.
    subscriptions : tuple of RouteSubscription
        Agency/route pairs polled every cycle.
    refresh_interval : float
        Seconds to wait after a cycle finishes rendering before the
        next one starts.
    request_timeout : float
        Per-request timeout in seconds. A timed-out request fails the
        whole fetch for that cycle.
    position_max_age : float
        Oldest cached position fix, in seconds, the location sensor may
        hand back.
    position_timeout : float
        Seconds the location sensor may take to produce a fix.
    max_results : int
        Most vehicles shown at once.
    default_position : Position
        Reference position used until the first fix arrives.
    """

    provider_host: str = DEFAULT_PROVIDER_HOST
    subscriptions: tuple[RouteSubscription, ...] = DEFAULT_SUBSCRIPTIONS
    refresh_interval: float = 10.0
    request_timeout: float = 10.0
    position_max_age: float = 10.0
    position_timeout: float = 10.0
    max_results: int = 2
    default_position: Position = DEFAULT_POSITION

    def __post_init__(self) -> None:
        if not self.provider_host.strip():
            raise BusFeedConfigError("provider_host must be non-empty")
        if self.refresh_interval < 0:
            raise BusFeedConfigError(f"refresh_interval must be >= 0, got {self.refresh_interval}")
        if self.request_timeout <= 0:
            raise BusFeedConfigError(f"request_timeout must be > 0, got {self.request_timeout}")
        if self.max_results < 0:
            raise BusFeedConfigError(f"max_results must be >= 0, got {self.max_results}")
        # Accept lists from callers; keep the stored value hashable.
        object.__setattr__(self, "subscriptions", tuple(self.subscriptions))

    @classmethod
    def from_env(cls, **overrides: Any) -> FeedConfig:
        """Create configuration from ``BUSFEED_*`` environment variables.

        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        FeedConfig
            Populated configuration.

        Raises
        ------
        BusFeedConfigError
            If an environment value cannot be parsed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        host = env.get("BUSFEED_PROVIDER_HOST")
        if host is not None:
            config_kwargs["provider_host"] = host

        routes = env.get("BUSFEED_ROUTES")
        if routes is not None and "subscriptions" not in overrides:
            config_kwargs["subscriptions"] = parse_subscriptions(routes)

        _ENV_FLOAT_MAP = {
            "BUSFEED_REFRESH_INTERVAL": "refresh_interval",
            "BUSFEED_REQUEST_TIMEOUT": "request_timeout",
            "BUSFEED_POSITION_MAX_AGE": "position_max_age",
            "BUSFEED_POSITION_TIMEOUT": "position_timeout",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        max_results_env = env.get("BUSFEED_MAX_RESULTS")
        if max_results_env is not None and "max_results" not in overrides:
            config_kwargs["max_results"] = _env_int("BUSFEED_MAX_RESULTS", max_results_env)

        lat_env = env.get("BUSFEED_LATITUDE")
        lon_env = env.get("BUSFEED_LONGITUDE")
        if (lat_env is not None or lon_env is not None) and "default_position" not in overrides:
            if lat_env is None or lon_env is None:
                raise BusFeedConfigError("BUSFEED_LATITUDE and BUSFEED_LONGITUDE must be set together")
            try:
                config_kwargs["default_position"] = Position(
                    latitude=_env_float("BUSFEED_LATITUDE", lat_env),
                    longitude=_env_float("BUSFEED_LONGITUDE", lon_env),
                )
            except ValidationError as exc:
                raise BusFeedConfigError(f"Invalid default position: {exc}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
