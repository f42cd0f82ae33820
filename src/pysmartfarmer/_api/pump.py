"""Pump override endpoint (``POST /api/pump``)."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from pysmartfarmer._constants import PUMP_ENDPOINT
from pysmartfarmer._transport import Transport
from pysmartfarmer.exceptions import SmartFarmerResponseError
from pysmartfarmer.models.telemetry import PumpCommandResult

_logger = logging.getLogger(__name__)


def build_pump_form(desired: bool) -> dict[str, str]:
    """Form body requesting the pump on (``state=1``) or off (``state=0``)."""
    return {"state": "1" if desired else "0"}


async def set_pump_state(transport: Transport, desired: bool) -> PumpCommandResult:
    """Request a pump state and return the state the node actually applied.

    The node may refuse the request (e.g. a safety interlock), in which
    case the returned ``pump_active`` differs from *desired*.
    """
    payload = await transport.post_form(PUMP_ENDPOINT, build_pump_form(desired))
    try:
        result = PumpCommandResult.model_validate(payload)
    except ValidationError as exc:
        raise SmartFarmerResponseError(
            f"Malformed pump reply from {PUMP_ENDPOINT}: {exc.error_count()} invalid field(s)",
            endpoint=PUMP_ENDPOINT,
        ) from exc

    if result.pump_active != desired:
        _logger.info("Node kept pump %s after request for %s", result.pump_active, desired)
    return result
