"""Route subscription model."""

from __future__ import annotations

from pydantic import field_validator

from busfeed.models._base import BusFeedBaseModel


class RouteSubscription(BusFeedBaseModel):
    """One NextBus agency/route pair to poll for vehicle locations."""

    agency: str
    route: str

    @field_validator("agency", "route")
    @classmethod
    def _strip_non_empty(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("agency and route must be non-empty")
        return text

    @classmethod
    def parse(cls, text: str) -> RouteSubscription:
        """Build a subscription from ``"agency:route"``."""
        agency, sep, route = text.partition(":")
        if not sep:
            raise ValueError(f"expected 'agency:route', got {text!r}")
        return cls(agency=agency, route=route)

    def __str__(self) -> str:
        return f"{self.agency}:{self.route}"
