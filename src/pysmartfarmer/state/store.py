"""Owned dashboard state.

This is the only component allowed to change the snapshot, the local pump
intent or the rendered view.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from pysmartfarmer._constants import DEFAULT_STALE_AFTER_FAILURES
from pysmartfarmer.config import NodeConfig
from pysmartfarmer.models.telemetry import TelemetrySnapshot
from pysmartfarmer.models.view import DashboardView
from pysmartfarmer.state.events import IntentSource, RequestChannel
from pysmartfarmer.state.policy import should_apply_response

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class DashboardState:
    """Snapshot, local pump intent and last rendered view for one node.

    Every request is numbered per channel with :meth:`next_sequence`; the
    number is handed back when its response is applied so the ordering
    policy can drop stale responses when asked to.
    """

    def __init__(
        self,
        *,
        discard_stale_responses: bool = False,
        stale_after_failures: int = DEFAULT_STALE_AFTER_FAILURES,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._discard_stale = discard_stale_responses
        self._stale_after_failures = stale_after_failures
        self._clock = clock
        self._issued: dict[RequestChannel, int] = {}
        self._applied: dict[RequestChannel, int] = {}

        self.snapshot: TelemetrySnapshot | None = None
        self.pump_intent: bool = False
        self.intent_source: IntentSource | None = None
        self.view: DashboardView | None = None
        self.consecutive_poll_failures: int = 0
        self.last_snapshot_at: datetime | None = None

    @classmethod
    def from_config(cls, config: NodeConfig) -> DashboardState:
        return cls(
            discard_stale_responses=config.discard_stale_responses,
            stale_after_failures=config.stale_after_failures,
        )

    # ------------------------------------------------------------------
    # Request numbering
    # ------------------------------------------------------------------

    def next_sequence(self, channel: RequestChannel) -> int:
        """Allocate the next request number on *channel* (starting at 1)."""
        sequence = self._issued.get(channel, 0) + 1
        self._issued[channel] = sequence
        return sequence

    def last_applied(self, channel: RequestChannel) -> int | None:
        return self._applied.get(channel)

    def _accept(self, channel: RequestChannel, sequence: int) -> bool:
        last = self._applied.get(channel)
        if not should_apply_response(sequence=sequence, last_applied=last, discard_stale=self._discard_stale):
            _logger.debug("Dropping stale %s response #%d (last applied #%s)", channel, sequence, last)
            return False
        self._applied[channel] = sequence
        return True

    # ------------------------------------------------------------------
    # Telemetry
    # ------------------------------------------------------------------

    @property
    def link_stale(self) -> bool:
        """True once enough consecutive polls have failed."""
        return self.consecutive_poll_failures >= self._stale_after_failures

    def snapshot_age(self) -> float | None:
        """Seconds since the last applied snapshot, or ``None`` before the first."""
        if self.last_snapshot_at is None:
            return None
        return (self._clock() - self.last_snapshot_at).total_seconds()

    def apply_snapshot(self, snapshot: TelemetrySnapshot, sequence: int) -> bool:
        """Replace the snapshot and overwrite the intent with ``pump_active``.

        Returns ``False`` when the response was dropped as stale.
        """
        if self.link_stale:
            _logger.info("Node reachable again after %d failed polls", self.consecutive_poll_failures)
        self.consecutive_poll_failures = 0

        if not self._accept(RequestChannel.TELEMETRY, sequence):
            return False
        self.snapshot = snapshot
        self.last_snapshot_at = self._clock()
        self.pump_intent = snapshot.pump_active
        self.intent_source = IntentSource.POLL
        return True

    def record_poll_failure(self) -> int:
        """Count a failed poll; the snapshot, intent and view are left alone."""
        self.consecutive_poll_failures += 1
        if self.consecutive_poll_failures == self._stale_after_failures:
            _logger.warning(
                "Node unreachable for %d consecutive polls; showing last known values",
                self.consecutive_poll_failures,
            )
        return self.consecutive_poll_failures

    # ------------------------------------------------------------------
    # Pump intent
    # ------------------------------------------------------------------

    def apply_optimistic_intent(self, pump_intent: bool) -> None:
        self.pump_intent = pump_intent
        self.intent_source = IntentSource.OPTIMISTIC

    def apply_pump_result(self, pump_active: bool, sequence: int) -> bool:
        """Reconcile the intent with the node's reply to a pump request.

        Returns ``False`` when the reply was dropped as stale.
        """
        if not self._accept(RequestChannel.PUMP, sequence):
            return False
        self.pump_intent = pump_active
        self.intent_source = IntentSource.DEVICE
        return True
