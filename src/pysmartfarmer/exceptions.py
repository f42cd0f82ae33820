"""Custom exception hierarchy for pysmartfarmer."""

from __future__ import annotations


class SmartFarmerError(Exception):
    """Base exception for all pysmartfarmer errors."""


class SmartFarmerConfigError(SmartFarmerError):
    """Invalid or missing configuration."""


class SmartFarmerTransportError(SmartFarmerError):
    """HTTP-level failure (network, timeout, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class SmartFarmerResponseError(SmartFarmerError):
    """Device answered with JSON that does not match the endpoint contract.

    Raised for missing fields, non-numeric readings and non-boolean
    pump states.  Callers treat it exactly like a transport failure.
    """

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)
