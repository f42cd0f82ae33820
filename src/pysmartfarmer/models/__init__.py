"""Data models for SmartFarmer node payloads and the rendered dashboard."""

from pysmartfarmer.models.telemetry import PumpCommandResult, TelemetrySnapshot
from pysmartfarmer.models.view import DashboardView, GaugeReadout, PumpIndicator

__all__ = [
    "DashboardView",
    "GaugeReadout",
    "PumpCommandResult",
    "PumpIndicator",
    "TelemetrySnapshot",
]
