"""Telemetry endpoint (``GET /api/data``)."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from pysmartfarmer._constants import DATA_ENDPOINT
from pysmartfarmer._transport import Transport
from pysmartfarmer.exceptions import SmartFarmerResponseError
from pysmartfarmer.models.telemetry import TelemetrySnapshot

_logger = logging.getLogger(__name__)


async def fetch_telemetry(transport: Transport) -> TelemetrySnapshot:
    """Fetch and decode the node's current telemetry snapshot.

    Raises
    ------
    SmartFarmerTransportError
        Network failure, non-2xx status or a body that is not JSON.
    SmartFarmerResponseError
        JSON that is missing a field or carries a malformed value.
    """
    payload = await transport.get_json(DATA_ENDPOINT)
    if not isinstance(payload, dict):
        raise SmartFarmerResponseError(
            f"{DATA_ENDPOINT} returned {type(payload).__name__}, expected an object",
            endpoint=DATA_ENDPOINT,
        )
    try:
        snapshot = TelemetrySnapshot.from_payload(payload)
    except ValidationError as exc:
        raise SmartFarmerResponseError(
            f"Malformed telemetry from {DATA_ENDPOINT}: {exc.error_count()} invalid field(s)",
            endpoint=DATA_ENDPOINT,
        ) from exc

    _logger.debug(
        "Telemetry moisture=%s ai=%s sleep_in=%s pump=%s",
        snapshot.moisture_pct,
        snapshot.ai_wilting_prob,
        snapshot.seconds_to_sleep,
        snapshot.pump_active,
    )
    return snapshot
