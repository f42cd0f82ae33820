"""Periodic telemetry polling."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from pysmartfarmer._api.telemetry import fetch_telemetry
from pysmartfarmer._tasks import RequestKey, RequestTracker
from pysmartfarmer._transport import Transport
from pysmartfarmer.exceptions import SmartFarmerError
from pysmartfarmer.models.telemetry import TelemetrySnapshot
from pysmartfarmer.state.events import RequestChannel
from pysmartfarmer.state.store import DashboardState

_logger = logging.getLogger(__name__)

ErrorCallback = Callable[[RequestChannel, SmartFarmerError], None]


def report_error(callback: ErrorCallback | None, channel: RequestChannel, exc: SmartFarmerError) -> None:
    """Forward a request failure to the user's error callback, if any."""
    if callback is None:
        return
    try:
        callback(channel, exc)
    except Exception:
        _logger.debug("on_error callback failed", exc_info=True)


class TelemetryPoller:
    """Fetches ``/api/data`` on a fixed interval.

    Ticks never wait for earlier polls: a slow request may still be in
    flight when the next one is issued, and whichever response arrives
    last is the one shown (unless stale discarding is enabled on the
    state).  A failed poll leaves everything on screen untouched; the
    next tick is the retry.
    """

    def __init__(
        self,
        transport: Transport,
        state: DashboardState,
        on_update: Callable[[], object],
        *,
        interval: float,
        tracker: RequestTracker | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self._transport = transport
        self._state = state
        self._on_update = on_update
        self._interval = interval
        self._tracker = tracker if tracker is not None else RequestTracker()
        self._on_error = on_error

    @property
    def interval(self) -> float:
        return self._interval

    def tick(self) -> asyncio.Task[TelemetrySnapshot | None]:
        """Issue one poll as an independent request task."""
        sequence = self._state.next_sequence(RequestChannel.TELEMETRY)
        key = RequestKey(RequestChannel.TELEMETRY, sequence)
        return self._tracker.spawn(key, self._poll(sequence))

    async def poll_once(self) -> TelemetrySnapshot | None:
        """Issue one poll and wait for it; ``None`` if it failed or was dropped."""
        return await self.tick()

    async def run(self) -> None:
        """Poll forever, starting immediately."""
        _logger.debug("Polling every %.1fs", self._interval)
        while True:
            self.tick()
            await asyncio.sleep(self._interval)

    async def _poll(self, sequence: int) -> TelemetrySnapshot | None:
        try:
            snapshot = await fetch_telemetry(self._transport)
        except SmartFarmerError as exc:
            failures = self._state.record_poll_failure()
            _logger.warning("Telemetry poll #%d failed (%d in a row): %s", sequence, failures, exc)
            report_error(self._on_error, RequestChannel.TELEMETRY, exc)
            return None

        if not self._state.apply_snapshot(snapshot, sequence):
            return None
        self._on_update()
        return snapshot
