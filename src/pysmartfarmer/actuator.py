"""Manual pump override with optimistic update and reconciliation."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from pysmartfarmer._api.pump import set_pump_state
from pysmartfarmer._tasks import RequestKey, RequestTracker
from pysmartfarmer._transport import Transport
from pysmartfarmer.exceptions import SmartFarmerError
from pysmartfarmer.poller import ErrorCallback, report_error
from pysmartfarmer.state.events import RequestChannel
from pysmartfarmer.state.store import DashboardState

_logger = logging.getLogger(__name__)


class PumpController:
    """Toggles the irrigation pump.

    The flipped intent is shown immediately, before the request leaves.
    The node's reply then overwrites it, whether or not the node honoured
    the request.  A failed request keeps the optimistic guess on screen
    until the next successful poll corrects it.  Overlapping toggles are
    neither debounced nor serialized.
    """

    def __init__(
        self,
        transport: Transport,
        state: DashboardState,
        on_update: Callable[[], object],
        *,
        tracker: RequestTracker | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self._transport = transport
        self._state = state
        self._on_update = on_update
        self._tracker = tracker if tracker is not None else RequestTracker()
        self._on_error = on_error

    def toggle(self) -> asyncio.Task[bool | None]:
        """Flip the pump intent and send it to the node.

        Must be called from within a running event loop.  Returns the
        request task, which resolves to the node's authoritative pump
        state or ``None`` if the request failed or its reply was dropped.

        Raises ``RuntimeError`` without touching the intent when no loop
        is running.
        """
        asyncio.get_running_loop()
        desired = not self._state.pump_intent
        self._state.apply_optimistic_intent(desired)
        self._on_update()

        sequence = self._state.next_sequence(RequestChannel.PUMP)
        key = RequestKey(RequestChannel.PUMP, sequence)
        _logger.debug("Pump request #%d: state=%d", sequence, int(desired))
        return self._tracker.spawn(key, self._send(desired, sequence))

    async def _send(self, desired: bool, sequence: int) -> bool | None:
        try:
            result = await set_pump_state(self._transport, desired)
        except SmartFarmerError as exc:
            _logger.warning("Pump request #%d failed, keeping optimistic state: %s", sequence, exc)
            report_error(self._on_error, RequestChannel.PUMP, exc)
            return None

        if not self._state.apply_pump_result(result.pump_active, sequence):
            return None
        self._on_update()
        return result.pump_active
