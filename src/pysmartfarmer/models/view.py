"""Widget model produced by the renderer."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class PumpIndicator(StrEnum):
    """The two mutually exclusive pump presentations."""

    STANDBY = "standby"
    ACTIVE = "active"

    @classmethod
    def from_intent(cls, pump_intent: bool) -> PumpIndicator:
        return cls.ACTIVE if pump_intent else cls.STANDBY

    @property
    def badge_label(self) -> str:
        return "Active" if self is PumpIndicator.ACTIVE else "Standby"

    @property
    def accent(self) -> str:
        """Colour role of the badge: ``primary`` in standby, ``alert`` while watering."""
        return "alert" if self is PumpIndicator.ACTIVE else "primary"

    @property
    def button_caption(self) -> str:
        return "Stop Irrigation" if self is PumpIndicator.ACTIVE else "Force Irrigation"


class GaugeReadout(BaseModel):
    """A numeric readout paired with a horizontal fill gauge."""

    model_config = ConfigDict(frozen=True)

    text: str
    fill_fraction: float = Field(..., ge=0.0, le=1.0)


class DashboardView(BaseModel):
    """Everything visible on the dashboard for one (snapshot, intent) pair."""

    model_config = ConfigDict(frozen=True)

    moisture: GaugeReadout
    ai_forecast: GaugeReadout
    sleep_countdown: str
    pump: PumpIndicator

    @property
    def badge_label(self) -> str:
        return self.pump.badge_label

    @property
    def accent(self) -> str:
        return self.pump.accent

    @property
    def button_caption(self) -> str:
        return self.pump.button_caption

    @property
    def button_active_state(self) -> bool:
        return self.pump is PumpIndicator.ACTIVE
