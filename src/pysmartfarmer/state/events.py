"""Request channels and intent sources."""

from __future__ import annotations

from enum import StrEnum


class RequestChannel(StrEnum):
    """Independent request streams; sequence numbers are per channel."""

    TELEMETRY = "telemetry"
    PUMP = "pump"


class IntentSource(StrEnum):
    """What last wrote the local pump intent."""

    POLL = "poll"
    OPTIMISTIC = "optimistic"
    DEVICE = "device"
