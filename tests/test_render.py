"""Tests for the pure renderer."""

from __future__ import annotations

import re

import pytest

from pysmartfarmer.models.telemetry import TelemetrySnapshot
from pysmartfarmer.models.view import PumpIndicator
from pysmartfarmer.render import clamp_percent, format_percent, gauge_fraction, render_dashboard, render_text

from _fakes import scenario_payload


def _snapshot(**overrides: object) -> TelemetrySnapshot:
    return TelemetrySnapshot.from_payload(scenario_payload(**overrides))


class TestPercentHelpers:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(-12.0, 0.0), (0.0, 0.0), (42.37, 42.37), (100.0, 100.0), (250.0, 100.0)],
    )
    def test_clamp(self, raw: float, expected: float) -> None:
        assert clamp_percent(raw) == pytest.approx(expected)

    def test_clamp_rejects_nan(self) -> None:
        with pytest.raises(ValueError):
            clamp_percent(float("nan"))

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (42.37, "42.4%"),
            (81.0, "81.0%"),
            (7, "7.0%"),
            (99.94, "99.9%"),
            (-3.2, "0.0%"),
            (104.0, "100.0%"),
        ],
    )
    def test_format_one_decimal(self, raw: float, expected: str) -> None:
        assert format_percent(raw) == expected

    @pytest.mark.parametrize("raw", [-50.0, -0.01, 0.0, 0.05, 13.333, 50.0, 99.99, 100.0, 1e6])
    def test_format_always_has_exactly_one_decimal(self, raw: float) -> None:
        assert re.fullmatch(r"\d{1,3}\.\d%", format_percent(raw))

    def test_gauge_is_linear_and_bounded(self) -> None:
        assert gauge_fraction(0.0) == 0.0
        assert gauge_fraction(25.0) == pytest.approx(0.25)
        assert gauge_fraction(100.0) == 1.0
        assert gauge_fraction(-1.0) == 0.0
        assert gauge_fraction(180.0) == 1.0


class TestRenderDashboard:
    def test_scenario_readouts(self) -> None:
        view = render_dashboard(_snapshot(), pump_intent=False)
        assert view.moisture.text == "42.4%"
        assert view.moisture.fill_fraction == pytest.approx(0.4237)
        assert view.ai_forecast.text == "81.0%"
        assert view.ai_forecast.fill_fraction == pytest.approx(0.81)
        assert view.sleep_countdown == "120"
        assert view.badge_label == "Standby"

    def test_out_of_range_values_use_clamped_value(self) -> None:
        view = render_dashboard(_snapshot(moisture_pct=140.2, ai_wilting_prob=-8.5), pump_intent=False)
        assert view.moisture.text == "100.0%"
        assert view.moisture.fill_fraction == 1.0
        assert view.ai_forecast.text == "0.0%"
        assert view.ai_forecast.fill_fraction == 0.0

    def test_countdown_is_not_clamped(self) -> None:
        view = render_dashboard(_snapshot(seconds_to_sleep=-5), pump_intent=False)
        assert view.sleep_countdown == "-5"

    def test_pump_follows_intent_not_snapshot(self) -> None:
        view = render_dashboard(_snapshot(pump_active=False), pump_intent=True)
        assert view.pump is PumpIndicator.ACTIVE
        assert view.button_caption == "Stop Irrigation"
        assert view.button_active_state is True
        assert view.accent == "alert"

        view = render_dashboard(_snapshot(pump_active=True), pump_intent=False)
        assert view.pump is PumpIndicator.STANDBY
        assert view.button_caption == "Force Irrigation"
        assert view.button_active_state is False
        assert view.accent == "primary"

    def test_idempotent(self) -> None:
        snapshot = _snapshot(moisture_pct=101.0)
        first = render_dashboard(snapshot, pump_intent=True)
        second = render_dashboard(snapshot, pump_intent=True)
        assert first == second
        assert render_text(first) == render_text(second)

    def test_placeholders_before_first_snapshot(self) -> None:
        view = render_dashboard(None, pump_intent=False)
        assert view.moisture.text == "-- %"
        assert view.moisture.fill_fraction == 0.0
        assert view.ai_forecast.text == "-- %"
        assert view.sleep_countdown == "--"
        assert view.pump is PumpIndicator.STANDBY

    def test_render_text_contains_widgets(self) -> None:
        text = render_text(render_dashboard(_snapshot(), pump_intent=True))
        assert "42.4%" in text
        assert "81.0%" in text
        assert "120s" in text
        assert "Active" in text
        assert "Stop Irrigation" in text
