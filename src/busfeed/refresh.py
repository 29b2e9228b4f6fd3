"""Periodic fetch, select and render cycle."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from busfeed._api.vehicle_locations import _now_ms
from busfeed.config import FeedConfig
from busfeed.display import DisplaySink
from busfeed.exceptions import BusFeedError
from busfeed.geo import annotate
from busfeed.models.position import Position
from busfeed.models.subscription import RouteSubscription
from busfeed.models.vehicle import AnnotatedVehicle, VehicleRecord
from busfeed.position import PositionProvider
from busfeed.render import render_vehicles
from busfeed.selection import select_by_heading

_logger = logging.getLogger(__name__)


class VehicleSource(Protocol):
    """Anything that can fetch vehicles for the configured routes."""

    async def get_vehicle_locations(
        self,
        subscriptions: Sequence[RouteSubscription] | None = None,
    ) -> list[VehicleRecord]:
        ...


class LoopState(StrEnum):
    IDLE = "idle"
    FETCHING = "fetching"


@dataclass(slots=True)
class CycleResult:
    """Outcome of one cycle.

    ``selection`` is what the next cycle falls back to: the fresh
    selection on success, the previous one on failure.
    """

    selection: list[AnnotatedVehicle]
    text: str
    succeeded: bool
    error: Exception | None = None
    vehicle_count: int = 0
    rendered_at_ms: int = 0


class RefreshLoop:
    """Poll the feed, keep the closest vehicle per direction, show it.

    Exactly one cycle runs at a time. The next cycle is scheduled
    ``config.refresh_interval`` seconds after the previous one has been
    rendered, so the cadence is interval plus cycle latency.
    """

    def __init__(
        self,
        config: FeedConfig,
        source: VehicleSource,
        position: PositionProvider,
        display: DisplaySink,
        *,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self._config = config
        self._source = source
        self._position = position
        self._display = display
        self._clock = clock
        self._state = LoopState.IDLE
        self._selection: list[AnnotatedVehicle] = []
        self._stopping = False
        self._cycles = 0

    @property
    def state(self) -> LoopState:
        return self._state

    @property
    def selection(self) -> list[AnnotatedVehicle]:
        """Vehicles currently on display."""
        return list(self._selection)

    @property
    def cycles(self) -> int:
        """Number of completed cycles."""
        return self._cycles

    async def run_cycle(
        self,
        position: Position,
        previous: Sequence[AnnotatedVehicle] = (),
    ) -> CycleResult:
        """Fetch, annotate, select and render once.

        Errors are not raised: feed errors are logged as warnings, anything
        else with a traceback, and the previous selection is re-rendered
        with ages measured now, or ``"(no vehicles)"`` if there is none.

        Raises
        ------
        BusFeedError
            If another cycle is already in flight.
        """
        if self._state is LoopState.FETCHING:
            raise BusFeedError("A refresh cycle is already in flight")
        self._state = LoopState.FETCHING
        try:
            try:
                vehicles = await self._source.get_vehicle_locations(self._config.subscriptions)
                annotated = [annotate(position, vehicle) for vehicle in vehicles]
                selection = select_by_heading(annotated, self._config.max_results)
            except BusFeedError as exc:
                _logger.warning("Vehicle refresh failed: %s", exc)
                return self._fallback(previous, exc)
            except Exception as exc:
                _logger.exception("Unexpected error during vehicle refresh")
                return self._fallback(previous, exc)

            now_ms = self._clock()
            _logger.debug("Selected %d of %d vehicles", len(selection), len(vehicles))
            return CycleResult(
                selection=selection,
                text=render_vehicles(selection, now_ms),
                succeeded=True,
                vehicle_count=len(vehicles),
                rendered_at_ms=now_ms,
            )
        finally:
            self._state = LoopState.IDLE

    def _fallback(self, previous: Sequence[AnnotatedVehicle], exc: Exception) -> CycleResult:
        now_ms = self._clock()
        kept = list(previous)
        return CycleResult(
            selection=kept,
            text=render_vehicles(kept, now_ms),
            succeeded=False,
            error=exc,
            rendered_at_ms=now_ms,
        )

    async def refresh(self) -> CycleResult:
        """Run one cycle against the latest position and show the result."""
        result = await self.run_cycle(self._position.latest(), self._selection)
        self._selection = result.selection
        self._display.show(result.text)
        self._cycles += 1
        return result

    async def run(self, *, max_cycles: int | None = None) -> None:
        """Refresh forever (or *max_cycles* times), sleeping between cycles."""
        self._stopping = False
        completed = 0
        while not self._stopping:
            await self.refresh()
            completed += 1
            if max_cycles is not None and completed >= max_cycles:
                break
            if self._stopping:
                break
            await asyncio.sleep(self._config.refresh_interval)

    def stop(self) -> None:
        """End :meth:`run` once the current cycle (or sleep) finishes."""
        self._stopping = True
