"""Tracked reference position."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Protocol

from busfeed.config import FeedConfig
from busfeed.models.position import Position

_logger = logging.getLogger(__name__)


class PositionProvider(Protocol):
    """Source of the latest known position."""

    def latest(self) -> Position:
        ...


class PositionTracker:
    """Holds the last position reported by a location sensor.

    The sensor (external) calls :meth:`update` with each fix and
    :meth:`report_error` on failures. Errors never clear the last fix;
    until the first fix arrives the configured default position is used.

    Parameters
    ----------
    config : FeedConfig
        Supplies the default position and the sensor's ``max_age`` and
        ``timeout`` options.
    clock : callable
        Monotonic clock in seconds.
    """

    def __init__(self, config: FeedConfig, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._position = config.default_position
        self._max_age = config.position_max_age
        self._timeout = config.position_timeout
        self._clock = clock
        self._updated_at: float | None = None

    @property
    def max_age(self) -> float:
        return self._max_age

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def has_fix(self) -> bool:
        return self._updated_at is not None

    @property
    def age(self) -> float | None:
        """Seconds since the last fix, or ``None`` before the first one."""
        if self._updated_at is None:
            return None
        return self._clock() - self._updated_at

    @property
    def is_stale(self) -> bool:
        """Whether the last fix is older than ``max_age`` (or missing)."""
        age = self.age
        return age is None or age > self._max_age

    def latest(self) -> Position:
        return self._position

    def update(self, position: Position) -> None:
        self._position = position
        self._updated_at = self._clock()

    def report_error(self, error: BaseException | str) -> None:
        """Log a sensor failure; the last known position stays in place."""
        _logger.warning("Position update failed: %s", error)
