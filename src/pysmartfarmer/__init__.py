"""pysmartfarmer - Async dashboard client for SmartFarmer irrigation edge nodes."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pysmartfarmer")
except PackageNotFoundError:
    __version__ = "0+local"
from pysmartfarmer.actuator import PumpController
from pysmartfarmer.config import NodeConfig
from pysmartfarmer.exceptions import (
    SmartFarmerConfigError,
    SmartFarmerError,
    SmartFarmerResponseError,
    SmartFarmerTransportError,
)
from pysmartfarmer.models import (
    DashboardView,
    GaugeReadout,
    PumpCommandResult,
    PumpIndicator,
    TelemetrySnapshot,
)
from pysmartfarmer.panel import DashboardPanel
from pysmartfarmer.poller import TelemetryPoller
from pysmartfarmer.render import render_dashboard, render_text
from pysmartfarmer.state.store import DashboardState

__all__ = [
    "__version__",
    "DashboardPanel",
    "DashboardState",
    "DashboardView",
    "GaugeReadout",
    "NodeConfig",
    "PumpCommandResult",
    "PumpController",
    "PumpIndicator",
    "SmartFarmerConfigError",
    "SmartFarmerError",
    "SmartFarmerResponseError",
    "SmartFarmerTransportError",
    "TelemetryPoller",
    "TelemetrySnapshot",
    "render_dashboard",
    "render_text",
]
