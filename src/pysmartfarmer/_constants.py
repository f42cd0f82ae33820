"""Internal constants shared across the library."""

BASE_URL = "http://192.168.4.1"
USER_AGENT = "pysmartfarmer"

DATA_ENDPOINT = "/api/data"
PUMP_ENDPOINT = "/api/pump"

#: Seconds between telemetry polls; matches the device page's timer.
DEFAULT_POLL_INTERVAL: float = 2.0

#: Consecutive failed polls after which the link is reported as stale.
DEFAULT_STALE_AFTER_FAILURES = 3

# ------------------------------------------------------------------
# Presentation
# ------------------------------------------------------------------

PERCENT_MIN = 0.0
PERCENT_MAX = 100.0
PLACEHOLDER_PERCENT = "-- %"
PLACEHOLDER_COUNTDOWN = "--"
