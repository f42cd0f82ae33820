"""Payload models for the edge node's two endpoints.

Both models are strict: the node is a small firmware JSON encoder, so a
string where a number belongs or ``0``/``1`` where a boolean belongs is a
malformed reply rather than something to coerce.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TelemetrySnapshot(BaseModel):
    """One complete reading of ``GET /api/data``.

    Readings are kept exactly as the node sent them; percentages may lie
    outside ``[0, 100]`` and are only clamped when rendered.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        strict=True,
        allow_inf_nan=False,
    )

    moisture_pct: float = Field(..., description="Kalman-filtered soil moisture, percent")
    ai_wilting_prob: float = Field(..., description="On-device 24h wilting forecast, percent")
    seconds_to_sleep: int = Field(..., description="Seconds until the node enters deep sleep")
    pump_active: bool = Field(..., description="Authoritative pump relay state")
    raw: dict[str, Any] = Field(default_factory=dict, exclude=True)
    """Original decoded body."""

    @classmethod
    def from_payload(cls, payload: Any) -> TelemetrySnapshot:
        data = dict(payload) if isinstance(payload, dict) else payload
        if isinstance(data, dict):
            data["raw"] = dict(payload)
        return cls.model_validate(data)


class PumpCommandResult(BaseModel):
    """Reply of ``POST /api/pump``: the pump state the node settled on."""

    model_config = ConfigDict(frozen=True, extra="ignore", strict=True)

    pump_active: bool
