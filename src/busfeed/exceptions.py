"""Custom exception hierarchy for busfeed."""

from __future__ import annotations


class BusFeedError(Exception):
    """Base exception for all busfeed errors."""


class BusFeedConfigError(BusFeedError):
    """Invalid or missing configuration."""


class BusFeedTransportError(BusFeedError):
    """HTTP-level failure (network, timeout, non-200).

    A single transport error fails the whole vehicle fetch for a cycle.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)
