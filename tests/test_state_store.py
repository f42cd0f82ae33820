from __future__ import annotations

from datetime import UTC, datetime, timedelta

from pysmartfarmer.models.telemetry import TelemetrySnapshot
from pysmartfarmer.state.events import IntentSource, RequestChannel
from pysmartfarmer.state.policy import should_apply_response
from pysmartfarmer.state.store import DashboardState

from _fakes import scenario_payload


def _dt() -> datetime:
    return datetime(2026, 1, 1, tzinfo=UTC)


def _snapshot(**overrides: object) -> TelemetrySnapshot:
    return TelemetrySnapshot.from_payload(scenario_payload(**overrides))


def test_policy_accepts_everything_when_not_discarding() -> None:
    assert should_apply_response(sequence=1, last_applied=5, discard_stale=False)
    assert should_apply_response(sequence=5, last_applied=5, discard_stale=False)


def test_policy_rejects_older_when_discarding() -> None:
    assert should_apply_response(sequence=1, last_applied=None, discard_stale=True)
    assert should_apply_response(sequence=6, last_applied=5, discard_stale=True)
    assert not should_apply_response(sequence=5, last_applied=5, discard_stale=True)
    assert not should_apply_response(sequence=4, last_applied=5, discard_stale=True)


def test_sequences_are_per_channel() -> None:
    state = DashboardState()
    assert state.next_sequence(RequestChannel.TELEMETRY) == 1
    assert state.next_sequence(RequestChannel.TELEMETRY) == 2
    assert state.next_sequence(RequestChannel.PUMP) == 1
    assert state.last_applied(RequestChannel.TELEMETRY) is None


def test_initial_intent_is_false() -> None:
    state = DashboardState()
    assert state.pump_intent is False
    assert state.intent_source is None
    assert state.snapshot is None


def test_snapshot_replaces_previous_and_overwrites_intent() -> None:
    state = DashboardState(clock=_dt)
    state.apply_optimistic_intent(False)

    first = _snapshot(pump_active=True)
    assert state.apply_snapshot(first, 1)
    assert state.snapshot is first
    assert state.pump_intent is True
    assert state.intent_source is IntentSource.POLL
    assert state.last_snapshot_at == _dt()

    second = _snapshot(moisture_pct=10.0, pump_active=False)
    assert state.apply_snapshot(second, 2)
    assert state.snapshot is second
    assert state.pump_intent is False


def test_last_arrived_wins_by_default() -> None:
    state = DashboardState()
    newer = _snapshot(moisture_pct=60.0)
    older = _snapshot(moisture_pct=20.0)

    assert state.apply_snapshot(newer, 2)
    assert state.apply_snapshot(older, 1)
    assert state.snapshot is older


def test_discard_stale_drops_older_snapshot() -> None:
    state = DashboardState(discard_stale_responses=True)
    newer = _snapshot(moisture_pct=60.0, pump_active=True)
    older = _snapshot(moisture_pct=20.0, pump_active=False)

    assert state.apply_snapshot(newer, 2)
    assert not state.apply_snapshot(older, 1)
    assert state.snapshot is newer
    assert state.pump_intent is True
    assert state.last_applied(RequestChannel.TELEMETRY) == 2


def test_discard_stale_channels_are_independent() -> None:
    state = DashboardState(discard_stale_responses=True)
    assert state.apply_snapshot(_snapshot(pump_active=False), 7)
    # Pump channel has its own numbering
    assert state.apply_pump_result(True, 1)
    assert state.pump_intent is True
    assert state.intent_source is IntentSource.DEVICE
    assert not state.apply_pump_result(False, 1)
    assert state.pump_intent is True


def test_optimistic_then_reconciled() -> None:
    state = DashboardState()
    state.apply_optimistic_intent(True)
    assert state.pump_intent is True
    assert state.intent_source is IntentSource.OPTIMISTIC

    assert state.apply_pump_result(False, 1)
    assert state.pump_intent is False
    assert state.intent_source is IntentSource.DEVICE


def test_poll_failures_mark_link_stale_and_keep_snapshot() -> None:
    state = DashboardState(stale_after_failures=3)
    snapshot = _snapshot()
    state.apply_snapshot(snapshot, 1)

    assert state.record_poll_failure() == 1
    assert state.record_poll_failure() == 2
    assert not state.link_stale
    assert state.record_poll_failure() == 3
    assert state.link_stale
    assert state.snapshot is snapshot

    state.apply_snapshot(_snapshot(), 2)
    assert state.consecutive_poll_failures == 0
    assert not state.link_stale


def test_snapshot_age_follows_clock() -> None:
    now = [datetime(2026, 1, 1, tzinfo=UTC)]
    state = DashboardState(clock=lambda: now[0])
    assert state.snapshot_age() is None

    state.apply_snapshot(_snapshot(), 1)
    assert state.snapshot_age() == 0.0

    now[0] += timedelta(seconds=7)
    state.record_poll_failure()
    assert state.snapshot_age() == 7.0

    # a dropped stale response does not refresh the timestamp
    stale = DashboardState(discard_stale_responses=True, clock=lambda: now[0])
    stale.apply_snapshot(_snapshot(), 2)
    now[0] += timedelta(seconds=3)
    assert not stale.apply_snapshot(_snapshot(), 1)
    assert stale.snapshot_age() == 3.0
