"""Project a telemetry snapshot and the local pump intent onto widgets.

Everything here is a pure function: the same ``(snapshot, pump_intent)``
pair always yields an equal :class:`DashboardView`.
"""

from __future__ import annotations

import math

from pysmartfarmer._constants import PERCENT_MAX, PERCENT_MIN, PLACEHOLDER_COUNTDOWN, PLACEHOLDER_PERCENT
from pysmartfarmer.models.telemetry import TelemetrySnapshot
from pysmartfarmer.models.view import DashboardView, GaugeReadout, PumpIndicator


def clamp_percent(value: float) -> float:
    """Clamp *value* into ``[0, 100]``."""
    if math.isnan(value):
        raise ValueError("percentage must be a number, got NaN")
    return max(PERCENT_MIN, min(PERCENT_MAX, float(value)))


def format_percent(value: float) -> str:
    """Clamp and format with exactly one decimal digit, e.g. ``"42.4%"``."""
    return f"{clamp_percent(value):.1f}%"


def gauge_fraction(value: float) -> float:
    """Gauge fill as a fraction of full width, linear in the clamped value."""
    return clamp_percent(value) / PERCENT_MAX


def _readout(value: float) -> GaugeReadout:
    return GaugeReadout(text=format_percent(value), fill_fraction=gauge_fraction(value))


_EMPTY_READOUT = GaugeReadout(text=PLACEHOLDER_PERCENT, fill_fraction=0.0)


def render_dashboard(snapshot: TelemetrySnapshot | None, pump_intent: bool) -> DashboardView:
    """Build the full widget model.

    The pump widgets follow *pump_intent*, never ``snapshot.pump_active``,
    because the intent may be optimistically ahead of the last poll.
    Without a snapshot the readouts keep their placeholders.
    """
    if snapshot is None:
        return DashboardView(
            moisture=_EMPTY_READOUT,
            ai_forecast=_EMPTY_READOUT,
            sleep_countdown=PLACEHOLDER_COUNTDOWN,
            pump=PumpIndicator.from_intent(pump_intent),
        )
    return DashboardView(
        moisture=_readout(snapshot.moisture_pct),
        ai_forecast=_readout(snapshot.ai_wilting_prob),
        sleep_countdown=str(snapshot.seconds_to_sleep),
        pump=PumpIndicator.from_intent(pump_intent),
    )


def _bar(fraction: float, width: int = 20) -> str:
    filled = round(fraction * width)
    return "[" + "#" * filled + "." * (width - filled) + "]"


def render_text(view: DashboardView) -> str:
    """Plain-text projection of *view* for terminals and logs."""
    lines = [
        f"Soil moisture      {view.moisture.text:>7} {_bar(view.moisture.fill_fraction)}",
        f"AI wilting (24h)   {view.ai_forecast.text:>7} {_bar(view.ai_forecast.fill_fraction)}",
        f"Deep sleep in      {view.sleep_countdown}s",
        f"Pump               {view.badge_label}  ({view.button_caption})",
    ]
    return "\n".join(lines)
